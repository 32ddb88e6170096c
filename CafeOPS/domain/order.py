# cafeops/domain/order.py
"""Commandes, lignes de commande et paiements."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from CafeOPS.domain.types import OrderStatus, PaymentMethod


class OrderItem(BaseModel):
    """
    Ligne de commande.
    `price` est le prix unitaire figé au moment de l'ajout : un changement de
    prix au menu ne touche jamais les lignes déjà saisies.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    menu_item_id: str
    quantity: int = Field(gt=0)
    price: float = Field(ge=0)
    note: Optional[str] = None

    def line_total(self) -> float:
        return self.price * self.quantity


class Payment(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: float = Field(ge=0)
    method: PaymentMethod = PaymentMethod.CARD
    timestamp: datetime


class Order(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    table_id: Optional[str] = None
    waiter_id: str
    status: OrderStatus = OrderStatus.PENDING
    notes: Optional[str] = None
    customer_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    fired_to_kitchen_at: Optional[datetime] = None
    ready_at: Optional[datetime] = None
    served_at: Optional[datetime] = None
    items: List[OrderItem] = Field(default_factory=list)
    payments: List[Payment] = Field(default_factory=list)

    # --------- MONTANTS ---------
    # Montants arrondis au centime : 4.9 + 3.2 doit valoir 8.10, pas
    # 8.100000000000001, sinon un paiement exact ne solde pas la commande.
    def total(self) -> float:
        """Somme prix x quantité (pas de TVA ni pourboire)."""
        return round(sum(item.line_total() for item in self.items), 2)

    def amount_paid(self) -> float:
        return round(sum(payment.amount for payment in self.payments), 2)

    def balance_due(self) -> float:
        return max(0.0, round(self.total() - self.amount_paid(), 2))

    # --------- ETAT ---------
    @property
    def is_fired(self) -> bool:
        return self.fired_to_kitchen_at is not None

    @property
    def is_open(self) -> bool:
        return self.status != OrderStatus.SETTLED
