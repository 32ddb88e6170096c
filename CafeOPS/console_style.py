# cafeops/console_style.py
from CafeOPS import config
from CafeOPS.domain.types import KotStatus, OrderStatus, TableStatus


def bold(text: str) -> str:
    return f"\033[1m{text}\033[0m"


def cyan(text: str) -> str:
    return f"\033[96m{text}\033[0m"


def green(text: str) -> str:
    return f"\033[92m{text}\033[0m"


def red(text: str) -> str:
    return f"\033[91m{text}\033[0m"


def yellow(text: str) -> str:
    return f"\033[93m{text}\033[0m"


# Couleur par statut (commandes, tables, bons)
_STATUS_COLOR = {
    OrderStatus.PENDING: yellow,
    OrderStatus.IN_PROGRESS: cyan,
    OrderStatus.READY: green,
    OrderStatus.SERVED: green,
    OrderStatus.SETTLED: bold,
    TableStatus.AVAILABLE: green,
    TableStatus.OCCUPIED: cyan,
    TableStatus.RESERVED: yellow,
    TableStatus.DIRTY: red,
    KotStatus.NEW: yellow,
    KotStatus.IN_PROGRESS: cyan,
    KotStatus.COMPLETED: green,
}


def status_badge(status) -> str:
    color = _STATUS_COLOR.get(status, bold)
    return color(str(getattr(status, "value", status)))


def money(amount: float) -> str:
    return f"{config.CURRENCY_SYMBOL}{amount:,.2f}"
