"""Personnel de salle."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class Waiter(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    section: Optional[str] = None  # zone de salle attribuée (terrasse, bar…)
