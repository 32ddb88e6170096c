# cafeops/domain/table.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from CafeOPS.domain.types import TableStatus


class Table(BaseModel):
    """
    Table de la salle.
    `active_order_id` est une simple référence (pas de propriété) vers la
    commande en cours ; renseignée ssi la table est `occupied`.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    capacity: int = Field(gt=0)
    status: TableStatus = TableStatus.AVAILABLE
    active_order_id: Optional[str] = None
