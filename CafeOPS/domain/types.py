# cafeops/domain/types.py
from enum import Enum
from typing import Dict, List


class OrderStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    READY = "ready"
    SERVED = "served"
    SETTLED = "settled"


class TableStatus(str, Enum):
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    RESERVED = "reserved"
    DIRTY = "dirty"


class KotStatus(str, Enum):
    NEW = "new"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class Station(str, Enum):
    KITCHEN = "kitchen"
    BAR = "bar"
    PASTRY = "pastry"


class MenuCategory(str, Enum):
    COFFEE = "coffee"
    TEA = "tea"
    PASTRY = "pastry"
    FOOD = "food"
    OTHER = "other"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    MOBILE = "mobile"
    OTHER = "other"


# ---------- Cycle de vie d'une commande ----------

# Ordre canonique : une commande n'avance que vers la droite.
ORDER_FLOW: List[OrderStatus] = [
    OrderStatus.PENDING,
    OrderStatus.IN_PROGRESS,
    OrderStatus.READY,
    OrderStatus.SERVED,
    OrderStatus.SETTLED,
]

_FLOW_RANK: Dict[OrderStatus, int] = {
    status: rank for rank, status in enumerate(ORDER_FLOW)
}


def can_transition(current: OrderStatus, requested: OrderStatus) -> bool:
    """
    True si une commande au statut `current` peut passer à `requested`.

    - `settled` est terminal (aucune sortie, même vers lui-même) ;
    - sinon on accepte le même statut (re-horodatage) ou n'importe quel statut
      plus loin dans ORDER_FLOW (ex. encaissement direct depuis `pending`).
    """
    current = OrderStatus(current)
    requested = OrderStatus(requested)
    if current == OrderStatus.SETTLED:
        return False
    return _FLOW_RANK[requested] >= _FLOW_RANK[current]
