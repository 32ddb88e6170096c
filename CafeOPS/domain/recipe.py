# cafeops/domain/recipe.py
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class Ingredient(BaseModel):
    """Quantité d'un article de stock consommée pour UNE portion."""

    model_config = ConfigDict(frozen=True)

    inventory_item_id: str
    quantity: float = Field(ge=0)
    unit: str


class Recipe(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    ingredients: List[Ingredient] = Field(default_factory=list)
    instructions: List[str] = Field(default_factory=list)

    def usage_for(self, portions: int) -> Dict[str, float]:
        """
        Besoin en stock pour `portions` portions : {inventory_item_id: quantité}.
        Un même article listé deux fois dans la recette est cumulé.
        """
        usage: Dict[str, float] = {}
        for ingredient in self.ingredients:
            usage[ingredient.inventory_item_id] = (
                usage.get(ingredient.inventory_item_id, 0.0)
                + ingredient.quantity * portions
            )
        return usage
