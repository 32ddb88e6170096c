# cafeops/domain/inventory.py
from pydantic import BaseModel, ConfigDict, Field


class InventoryItem(BaseModel):
    """
    Article de stock.
    - quantity  : quantité en main (jamais négative) ;
    - par_level : seuil de réassort, en dessous (ou égal) => alerte stock bas.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    unit: str
    quantity: float = Field(ge=0)
    par_level: float = Field(default=0.0, ge=0)
    cost_per_unit: float = Field(default=0.0, ge=0)

    @property
    def is_low_stock(self) -> bool:
        return self.quantity <= self.par_level

    def stock_value(self) -> float:
        return round(self.quantity * self.cost_per_unit, 2)

    def after_consumption(self, used: float) -> float:
        """
        Quantité restante après consommation de `used`.
        Si le stock est insuffisant on consomme le maximum possible : la
        quantité est bornée à zéro, sans erreur ni reliquat.
        """
        return max(self.quantity - float(used), 0.0)
