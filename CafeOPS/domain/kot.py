# cafeops/domain/kot.py
"""Bons de cuisine (KOT, "kitchen order ticket")."""

from datetime import datetime
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from CafeOPS.domain.types import KotStatus, Station


class KotEvent(BaseModel):
    """
    Un bon par envoi en cuisine. Plusieurs bons peuvent pointer sur la même
    commande (ajouts en cours de service, postes différents).
    """

    model_config = ConfigDict(frozen=True)

    id: str
    order_id: str
    fired_at: datetime
    status: KotStatus = KotStatus.NEW
    station: Station = Station.KITCHEN
    item_ids: List[str] = Field(default_factory=list)

    @property
    def is_open(self) -> bool:
        return self.status != KotStatus.COMPLETED
