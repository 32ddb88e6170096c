"""
Jeu de données initial du café : menu, recettes, tables, équipe, stock.
Ids stables et lisibles pour pouvoir les viser depuis la console / les tests.
"""

import logging
from pathlib import Path
from typing import List

from CafeOPS import config
from CafeOPS.core.state import PosState
from CafeOPS.domain.inventory import InventoryItem
from CafeOPS.domain.menu import MenuItem
from CafeOPS.domain.recipe import Ingredient, Recipe
from CafeOPS.domain.staff import Waiter
from CafeOPS.domain.table import Table
from CafeOPS.domain.types import MenuCategory
from CafeOPS.utils import load_and_validate

logger = logging.getLogger(__name__)


# ---------- STOCK ----------
# (id, nom, unité, quantité, seuil, coût unitaire)
_INVENTORY = [
    ("inv-espresso-beans", "Espresso beans", "g", 5000.0, 1000.0, 0.03),
    ("inv-milk", "Whole milk", "ml", 12000.0, 3000.0, 0.002),
    ("inv-oat-milk", "Oat milk", "ml", 4000.0, 1000.0, 0.004),
    ("inv-chai", "Chai concentrate", "ml", 2000.0, 500.0, 0.01),
    ("inv-green-tea", "Green tea leaves", "g", 800.0, 150.0, 0.05),
    ("inv-croissant-dough", "Croissant dough", "pcs", 40.0, 12.0, 0.45),
    ("inv-butter", "Butter", "g", 3000.0, 600.0, 0.012),
    ("inv-sourdough", "Sourdough bread", "slices", 60.0, 15.0, 0.35),
    ("inv-avocado", "Avocado", "pcs", 24.0, 8.0, 0.9),
    ("inv-cheddar", "Cheddar", "g", 2500.0, 500.0, 0.015),
    ("inv-eggs", "Eggs", "pcs", 90.0, 24.0, 0.25),
]


def build_inventory() -> List[InventoryItem]:
    return [
        InventoryItem(
            id=item_id,
            name=name,
            unit=unit,
            quantity=quantity,
            par_level=par_level,
            cost_per_unit=cost,
        )
        for item_id, name, unit, quantity, par_level, cost in _INVENTORY
    ]


# ---------- RECETTES ----------
# id -> ([(article de stock, quantité par portion, unité)], étapes)
_RECIPES = {
    "rcp-espresso": (
        [("inv-espresso-beans", 18, "g")],
        ["Grind 18 g", "Pull a 30 ml double shot"],
    ),
    "rcp-latte": (
        [("inv-espresso-beans", 18, "g"), ("inv-milk", 240, "ml")],
        ["Pull a double shot", "Steam milk to 65°C", "Pour"],
    ),
    "rcp-oat-cappuccino": (
        [("inv-espresso-beans", 18, "g"), ("inv-oat-milk", 150, "ml")],
        ["Pull a double shot", "Texture oat milk", "Pour with foam"],
    ),
    "rcp-chai-latte": (
        [("inv-chai", 60, "ml"), ("inv-milk", 200, "ml")],
        ["Warm chai concentrate", "Top with steamed milk"],
    ),
    "rcp-green-tea": (
        [("inv-green-tea", 4, "g")],
        ["Steep 3 min at 80°C"],
    ),
    "rcp-croissant": (
        [("inv-croissant-dough", 1, "pcs"), ("inv-butter", 10, "g")],
        ["Bake 18 min at 190°C", "Serve warm with butter"],
    ),
    "rcp-avocado-toast": (
        [
            ("inv-sourdough", 2, "slices"),
            ("inv-avocado", 1, "pcs"),
            ("inv-eggs", 1, "pcs"),
        ],
        ["Toast sourdough", "Smash avocado", "Top with poached egg"],
    ),
    "rcp-grilled-cheese": (
        [
            ("inv-sourdough", 2, "slices"),
            ("inv-cheddar", 60, "g"),
            ("inv-butter", 15, "g"),
        ],
        ["Butter the bread", "Grill with cheddar until golden"],
    ),
}


def build_recipes() -> List[Recipe]:
    return [
        Recipe(
            id=recipe_id,
            ingredients=[
                Ingredient(inventory_item_id=item_id, quantity=quantity, unit=unit)
                for item_id, quantity, unit in ingredients
            ],
            instructions=list(steps),
        )
        for recipe_id, (ingredients, steps) in _RECIPES.items()
    ]


# ---------- MENU ----------
# (id, nom, catégorie, prix, tags, recette)
_MENU = [
    ("menu-espresso", "Espresso", MenuCategory.COFFEE, 2.8, ["hot"], "rcp-espresso"),
    ("menu-latte", "Caffè Latte", MenuCategory.COFFEE, 4.5, ["hot", "milk"], "rcp-latte"),
    (
        "menu-oat-cappuccino",
        "Oat Cappuccino",
        MenuCategory.COFFEE,
        4.9,
        ["hot", "vegan"],
        "rcp-oat-cappuccino",
    ),
    ("menu-chai-latte", "Chai Latte", MenuCategory.TEA, 4.6, ["hot"], "rcp-chai-latte"),
    ("menu-green-tea", "Sencha", MenuCategory.TEA, 3.5, ["hot", "vegan"], "rcp-green-tea"),
    ("menu-croissant", "Croissant", MenuCategory.PASTRY, 3.2, ["baked"], "rcp-croissant"),
    # biscuits achetés tout faits : pas de recette, pas de sortie de stock
    ("menu-cookie", "Chocolate Chip Cookie", MenuCategory.PASTRY, 2.5, ["baked"], None),
    (
        "menu-avocado-toast",
        "Avocado Toast",
        MenuCategory.FOOD,
        9.5,
        ["brunch"],
        "rcp-avocado-toast",
    ),
    (
        "menu-grilled-cheese",
        "Grilled Cheese",
        MenuCategory.FOOD,
        8.0,
        ["lunch"],
        "rcp-grilled-cheese",
    ),
    ("menu-sparkling-water", "Sparkling Water", MenuCategory.OTHER, 2.0, ["cold"], None),
]


def build_menu() -> List[MenuItem]:
    return [
        MenuItem(
            id=item_id,
            name=name,
            category=category,
            price=price,
            tags=list(tags),
            recipe_id=recipe_id,
        )
        for item_id, name, category, price, tags, recipe_id in _MENU
    ]


# ---------- SALLE ----------


def build_tables() -> List[Table]:
    capacities = [2, 2, 4, 4, 4, 6, 2, 8]
    return [
        Table(id=f"table-{n}", label=f"T{n}", capacity=capacity)
        for n, capacity in enumerate(capacities, start=1)
    ]


def build_waiters() -> List[Waiter]:
    return [
        Waiter(id="waiter-ana", name="Ana", section="terrace"),
        Waiter(id="waiter-leo", name="Léo", section="main room"),
        Waiter(id="waiter-sam", name="Sam", section="bar"),
    ]


def build_seed_state() -> PosState:
    return PosState(
        orders=[],
        tables=build_tables(),
        kot_tickets=[],
        menu=build_menu(),
        recipes=build_recipes(),
        inventory=build_inventory(),
        waiters=build_waiters(),
    )


def load_seed_state() -> PosState:
    """Seed depuis config.SEED_FILE si renseigné, sinon le jeu intégré."""
    if config.SEED_FILE:
        logger.info("Loading seed data from %s", config.SEED_FILE)
        try:
            return load_and_validate(Path(config.SEED_FILE), PosState)
        except (OSError, ValueError) as exc:
            # ValidationError et JSONDecodeError héritent de ValueError
            logger.warning(
                "Seed file %s unusable (%s), using built-in seed",
                config.SEED_FILE,
                exc.__class__.__name__,
            )
    return build_seed_state()
