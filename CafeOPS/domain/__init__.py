"""
Domain objects for CafeOps.

The domain layer holds the business objects of the café floor: orders,
tables, kitchen tickets, menu items, recipes, inventory and waiters.
They are immutable pydantic models: every change goes through the store,
which replaces whole values instead of mutating them.
"""

from .inventory import InventoryItem
from .kot import KotEvent
from .menu import MenuItem
from .order import Order, OrderItem, Payment
from .recipe import Ingredient, Recipe
from .staff import Waiter
from .table import Table
from .types import (
    KotStatus,
    MenuCategory,
    OrderStatus,
    PaymentMethod,
    Station,
    TableStatus,
    can_transition,
)
