# cafeops/core/state.py
"""
État complet de la salle ("entity store").

Toutes les références croisées (commande -> table, table -> commande,
bon -> commande, article -> recette, recette -> stock) sont des ids : on
les résout ici, au moment de l'usage, et un id introuvable donne `None`
plutôt qu'une exception.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from CafeOPS.domain.inventory import InventoryItem
from CafeOPS.domain.kot import KotEvent
from CafeOPS.domain.menu import MenuItem
from CafeOPS.domain.order import Order
from CafeOPS.domain.recipe import Recipe
from CafeOPS.domain.staff import Waiter
from CafeOPS.domain.table import Table

COLLECTIONS = (
    "orders",
    "tables",
    "kot_tickets",
    "menu",
    "recipes",
    "inventory",
    "waiters",
)


def _find(items, entity_id: Optional[str]):
    if not entity_id:
        return None
    return next((item for item in items if item.id == entity_id), None)


class PosState(BaseModel):
    """Instantané immuable : chaque mutation produit un nouvel état."""

    model_config = ConfigDict(frozen=True)

    orders: List[Order] = Field(default_factory=list)
    tables: List[Table] = Field(default_factory=list)
    kot_tickets: List[KotEvent] = Field(default_factory=list)
    menu: List[MenuItem] = Field(default_factory=list)
    recipes: List[Recipe] = Field(default_factory=list)
    inventory: List[InventoryItem] = Field(default_factory=list)
    waiters: List[Waiter] = Field(default_factory=list)
    last_sync: Optional[datetime] = None

    # -------- Lookups (références faibles) --------

    def find_order(self, order_id: Optional[str]) -> Optional[Order]:
        return _find(self.orders, order_id)

    def find_table(self, table_id: Optional[str]) -> Optional[Table]:
        return _find(self.tables, table_id)

    def find_ticket(self, ticket_id: Optional[str]) -> Optional[KotEvent]:
        return _find(self.kot_tickets, ticket_id)

    def find_menu_item(self, menu_item_id: Optional[str]) -> Optional[MenuItem]:
        return _find(self.menu, menu_item_id)

    def find_recipe(self, recipe_id: Optional[str]) -> Optional[Recipe]:
        return _find(self.recipes, recipe_id)

    def find_inventory_item(self, item_id: Optional[str]) -> Optional[InventoryItem]:
        return _find(self.inventory, item_id)

    def find_waiter(self, waiter_id: Optional[str]) -> Optional[Waiter]:
        return _find(self.waiters, waiter_id)

    def tickets_for_order(self, order_id: str) -> List[KotEvent]:
        return [ticket for ticket in self.kot_tickets if ticket.order_id == order_id]

    def recipe_for(self, menu_item_id: str) -> Optional[Recipe]:
        """Recette d'un article du menu, `None` si l'article ou la recette manque."""
        menu_item = self.find_menu_item(menu_item_id)
        if menu_item is None:
            return None
        return self.find_recipe(menu_item.recipe_id)

    def open_orders(self) -> List[Order]:
        return [order for order in self.orders if order.is_open]
