from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from CafeOPS.core.service import CafeService
from CafeOPS.core.state import PosState
from CafeOPS.core.store import Store
from CafeOPS.domain.inventory import InventoryItem
from CafeOPS.domain.menu import MenuItem
from CafeOPS.domain.recipe import Ingredient, Recipe
from CafeOPS.domain.staff import Waiter
from CafeOPS.domain.table import Table
from CafeOPS.domain.types import MenuCategory

START = datetime(2026, 10, 18, 9, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Horloge déterministe : +1 s à chaque lecture."""

    def __init__(self, start: datetime = START):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


class ActionLog:
    """Listener de store qui garde chaque lot d'actions publié."""

    def __init__(self):
        self.batches = []

    def __call__(self, state, actions):
        self.batches.append(actions)

    @property
    def actions(self):
        return [action for batch in self.batches for action in batch]

    def of_type(self, action_type):
        return [action for action in self.actions if action.type == action_type]


def make_state() -> PosState:
    """
    Petit café de test :
      - menu-a : 3.00, recette rcp-a (1 inv-x par portion), cuisine
      - menu-b : 3.00, sans recette
      - menu-c : 4.00, café au bar, recette rcp-c (2 inv-x + 1 inv-y)
    """
    return PosState(
        tables=[
            Table(id="t1", label="T1", capacity=2),
            Table(id="t2", label="T2", capacity=4),
        ],
        menu=[
            MenuItem(
                id="menu-a",
                name="Item A",
                category=MenuCategory.FOOD,
                price=3.0,
                recipe_id="rcp-a",
            ),
            MenuItem(id="menu-b", name="Item B", category=MenuCategory.PASTRY, price=3.0),
            MenuItem(
                id="menu-c",
                name="Item C",
                category=MenuCategory.COFFEE,
                price=4.0,
                recipe_id="rcp-c",
            ),
        ],
        recipes=[
            Recipe(
                id="rcp-a",
                ingredients=[Ingredient(inventory_item_id="inv-x", quantity=1, unit="pcs")],
            ),
            Recipe(
                id="rcp-c",
                ingredients=[
                    Ingredient(inventory_item_id="inv-x", quantity=2, unit="pcs"),
                    Ingredient(inventory_item_id="inv-y", quantity=1, unit="ml"),
                ],
            ),
        ],
        inventory=[
            InventoryItem(id="inv-x", name="X", unit="pcs", quantity=10, par_level=2),
            InventoryItem(id="inv-y", name="Y", unit="ml", quantity=5, par_level=1),
        ],
        waiters=[Waiter(id="w1", name="Ana")],
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return Store(make_state())


@pytest.fixture
def action_log(store):
    log = ActionLog()
    store.subscribe(log)
    return log


@pytest.fixture
def service(store, clock):
    ids = count(1)
    return CafeService(store, clock=clock, id_factory=lambda: f"id-{next(ids)}")


def inventory_qty(service, item_id):
    return service.state.find_inventory_item(item_id).quantity
