"""
Indicateurs de salle en lecture seule (tableau de bord).
Projections pures de l'état : rien ici ne modifie le store.
"""

from datetime import date
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel

from CafeOPS.core.state import PosState
from CafeOPS.domain.inventory import InventoryItem
from CafeOPS.domain.kot import KotEvent
from CafeOPS.domain.order import Order
from CafeOPS.domain.types import KotStatus, Station, TableStatus
from CafeOPS.utils import utc_now


class FloorMetrics(BaseModel):
    """Snapshot des principaux KPI de la journée."""

    day: date
    revenue: float
    order_count: int
    average_ticket: float
    open_tables: int
    total_tables: int
    pending_tickets: int
    low_stock: int


def orders_for_day(state: PosState, day: date) -> List[Order]:
    return [order for order in state.orders if order.created_at.date() == day]


def low_stock_items(state: PosState) -> List[InventoryItem]:
    return [item for item in state.inventory if item.is_low_stock]


def table_counts(state: PosState) -> Dict[TableStatus, int]:
    counts = {status: 0 for status in TableStatus}
    for table in state.tables:
        counts[table.status] += 1
    return counts


def ticket_queue(
    state: PosState, station: Optional[Station] = None
) -> List[Tuple[KotEvent, Order]]:
    """
    File des bons (plus ancien d'abord) avec leur commande.
    Les bons dont la commande est introuvable sont ignorés.
    """
    queue: List[Tuple[KotEvent, Order]] = []
    for ticket in state.kot_tickets:
        if station is not None and ticket.station != Station(station):
            continue
        order = state.find_order(ticket.order_id)
        if order is None:
            continue
        queue.append((ticket, order))
    queue.sort(key=lambda pair: pair[0].fired_at)
    return queue


def compute_floor_metrics(state: PosState, day: Optional[date] = None) -> FloorMetrics:
    day = day or utc_now().date()
    todays = orders_for_day(state, day)
    revenue = round(sum(order.total() for order in todays), 2)
    return FloorMetrics(
        day=day,
        revenue=revenue,
        order_count=len(todays),
        average_ticket=round(revenue / len(todays), 2) if todays else 0.0,
        open_tables=sum(
            1 for table in state.tables if table.status == TableStatus.OCCUPIED
        ),
        total_tables=len(state.tables),
        pending_tickets=sum(
            1 for ticket in state.kot_tickets if ticket.status != KotStatus.COMPLETED
        ),
        low_stock=len(low_stock_items(state)),
    )
