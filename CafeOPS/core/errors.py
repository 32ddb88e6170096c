"""
Erreurs "dures" du moteur.

Les références inconnues vers une commande, une table, un article de stock
ou de menu ciblé par id ne sont PAS des erreurs : l'opération ne fait rien
et renvoie un résultat vide. Seuls les cas ci-dessous interrompent une
opération, avant qu'aucune mutation ne soit appliquée.
"""

from CafeOPS.domain.types import OrderStatus


class CafeOpsError(Exception):
    """Base class for every error raised by the CafeOps core."""


class UnknownMenuItem(CafeOpsError, KeyError):
    """A requested menu item id does not resolve in the menu."""

    def __init__(self, menu_item_id: str):
        self.menu_item_id = menu_item_id
        super().__init__(menu_item_id)

    def __str__(self) -> str:
        return f"Unknown menu item: {self.menu_item_id!r}"


class IllegalStatusTransition(CafeOpsError, ValueError):
    """The order state machine refuses `current -> requested`."""

    def __init__(self, order_id: str, current: OrderStatus, requested: OrderStatus):
        self.order_id = order_id
        self.current = OrderStatus(current)
        self.requested = OrderStatus(requested)
        super().__init__(
            f"Order {order_id}: illegal transition "
            f"{self.current.value} -> {self.requested.value}"
        )
