# cafeops/core/actions.py
"""
Mutations primitives appliquées par le reducer.

Purement structurelles : aucune logique métier inter-entités ici, c'est la
couche service qui décide quelles actions émettre et dans quel ordre.
"""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from CafeOPS.core.state import PosState
from CafeOPS.domain.inventory import InventoryItem
from CafeOPS.domain.kot import KotEvent
from CafeOPS.domain.menu import MenuItem
from CafeOPS.domain.order import Order
from CafeOPS.domain.recipe import Recipe
from CafeOPS.domain.staff import Waiter
from CafeOPS.domain.table import Table


class _Action(BaseModel):
    model_config = ConfigDict(frozen=True)


class SyncFromStorage(_Action):
    type: Literal["SYNC_FROM_STORAGE"] = "SYNC_FROM_STORAGE"
    state: PosState


class CreateOrder(_Action):
    type: Literal["CREATE_ORDER"] = "CREATE_ORDER"
    order: Order


class UpsertOrder(_Action):
    type: Literal["UPSERT_ORDER"] = "UPSERT_ORDER"
    order: Order


class DeleteOrder(_Action):
    type: Literal["DELETE_ORDER"] = "DELETE_ORDER"
    id: str


class UpdateTable(_Action):
    type: Literal["UPDATE_TABLE"] = "UPDATE_TABLE"
    table: Table


class UpsertKot(_Action):
    type: Literal["UPSERT_KOT"] = "UPSERT_KOT"
    ticket: KotEvent


class DeleteKot(_Action):
    type: Literal["DELETE_KOT"] = "DELETE_KOT"
    id: str


class UpdateInventory(_Action):
    """Mise à jour partielle : un champ absent garde sa valeur."""

    type: Literal["UPDATE_INVENTORY"] = "UPDATE_INVENTORY"
    id: str
    quantity: Optional[float] = Field(default=None, ge=0)
    par_level: Optional[float] = Field(default=None, ge=0)


class UpdateMenuItem(_Action):
    type: Literal["UPDATE_MENU_ITEM"] = "UPDATE_MENU_ITEM"
    id: str
    price: Optional[float] = Field(default=None, ge=0)
    is_available: Optional[bool] = None
    tags: Optional[List[str]] = None


class ToggleMenuAvailability(_Action):
    type: Literal["TOGGLE_MENU_AVAILABILITY"] = "TOGGLE_MENU_AVAILABILITY"
    id: str
    is_available: bool


class BulkUpdate(_Action):
    """Remplace en bloc les collections fournies (les autres restent)."""

    type: Literal["BULK_UPDATE"] = "BULK_UPDATE"
    orders: Optional[List[Order]] = None
    tables: Optional[List[Table]] = None
    kot_tickets: Optional[List[KotEvent]] = None
    menu: Optional[List[MenuItem]] = None
    recipes: Optional[List[Recipe]] = None
    inventory: Optional[List[InventoryItem]] = None
    waiters: Optional[List[Waiter]] = None


PosAction = Union[
    SyncFromStorage,
    CreateOrder,
    UpsertOrder,
    DeleteOrder,
    UpdateTable,
    UpsertKot,
    DeleteKot,
    UpdateInventory,
    UpdateMenuItem,
    ToggleMenuAvailability,
    BulkUpdate,
]
