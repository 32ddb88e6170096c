# cafeops/domain/menu.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from CafeOPS.domain.types import MenuCategory


class MenuItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: MenuCategory = MenuCategory.OTHER
    price: float = Field(ge=0)
    tags: List[str] = Field(default_factory=list)
    is_available: bool = True
    recipe_id: Optional[str] = None  # sans recette => pas de sortie de stock
    description: Optional[str] = None
