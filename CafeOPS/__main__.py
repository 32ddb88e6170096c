# -*- coding: utf-8 -*-
"""
Lanceur 'python -m CafeOPS'

- demo   : joue un petit service scripté (commandes, cuisine, encaissement)
           sur l'état stocké, puis affiche les indicateurs de salle ;
- status : affiche les indicateurs de l'état stocké ;
- reset  : remplace l'état stocké par le jeu de données initial.
"""

import argparse
import logging
import sys
from typing import List, Optional

from CafeOPS import config
from CafeOPS.console_style import bold, cyan, money, status_badge, yellow
from CafeOPS.core.metrics import compute_floor_metrics, low_stock_items, ticket_queue
from CafeOPS.core.persistence import JsonFileStorage, PersistenceBridge, open_store
from CafeOPS.core.service import CafeService
from CafeOPS.core.state import PosState
from CafeOPS.data.seed import load_seed_state
from CafeOPS.domain.types import KotStatus, OrderStatus, PaymentMethod, Station
from CafeOPS.logging_setup import configure_logging
from CafeOPS.utils import utc_now

logger = logging.getLogger("CafeOPS")


def print_floor(state: PosState) -> None:
    metrics = compute_floor_metrics(state)
    print(bold(f"\n=== Salle - {metrics.day.isoformat()} ==="))
    print(f"CA du jour      : {money(metrics.revenue)}")
    print(f"Commandes       : {metrics.order_count}")
    print(f"Ticket moyen    : {money(metrics.average_ticket)}")
    print(f"Tables occupées : {metrics.open_tables}/{metrics.total_tables}")
    print(f"Bons en attente : {metrics.pending_tickets}")
    print(f"Stock bas       : {metrics.low_stock}")

    for table in state.tables:
        suffix = f" -> {table.active_order_id[:8]}" if table.active_order_id else ""
        print(f"  {table.label:<4} {status_badge(table.status)}{suffix}")

    queue = [pair for pair in ticket_queue(state) if pair[0].is_open]
    if queue:
        print(cyan("\nFile cuisine :"))
        for ticket, order in queue:
            print(
                f"  [{ticket.station.value:<7}] {ticket.id[:8]} "
                f"commande {order.id[:8]} {status_badge(ticket.status)}"
            )

    for item in low_stock_items(state):
        print(
            yellow(
                f"  ⚠ {item.name}: {item.quantity:g} {item.unit} "
                f"(seuil {item.par_level:g})"
            )
        )


def run_demo(service: CafeService) -> None:
    """Un mini service : deux tables, un ajout en cours de route, un encaissement."""
    # 1) Table 1 : deux lattes + un cookie, envoyés au bar
    order_a = service.create_order(
        "waiter-ana",
        [
            {"menu_item_id": "menu-latte", "quantity": 2},
            {"menu_item_id": "menu-cookie", "quantity": 1},
        ],
        table_id="table-1",
        customer_name="Dupont",
    )
    service.fire_order_to_kitchen(order_a, Station.BAR)

    # 2) Table 3 : brunch en cuisine, puis un croissant ajouté (poste pâtisserie)
    order_b = service.create_order(
        "waiter-leo",
        [{"menu_item_id": "menu-avocado-toast", "quantity": 2}],
        table_id="table-3",
    )
    service.fire_order_to_kitchen(order_b, Station.KITCHEN)
    order_b = service.quick_add("waiter-leo", "menu-croissant", order_id=order_b)

    # 3) Le bar termine la table 1, service puis encaissement complet
    for ticket in service.state.tickets_for_order(order_a):
        service.advance_ticket(ticket.id, KotStatus.COMPLETED)
    service.update_order_status(order_a, OrderStatus.SERVED)
    total = service.state.find_order(order_a).total()
    service.record_payment(
        order_a,
        {"amount": total, "method": PaymentMethod.CARD, "timestamp": utc_now()},
    )
    print(f"Commande {order_a[:8]} encaissée : {money(total)}")

    # 4) La cuisine attaque la table 3
    first_ticket = service.state.tickets_for_order(order_b)[-1]
    service.advance_ticket(first_ticket.id, KotStatus.IN_PROGRESS)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="CafeOPS", description="Café floor state engine"
    )
    parser.add_argument(
        "command", choices=["demo", "status", "reset"], nargs="?", default="demo"
    )
    parser.add_argument(
        "--data-dir", default=str(config.DATA_DIR), help="Répertoire de stockage JSON"
    )
    parser.add_argument("--key", default=config.STORAGE_KEY, help="Clé de stockage")
    parser.add_argument("--log-level", default=config.LOG_LEVEL)
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    storage = JsonFileStorage(args.data_dir)

    if args.command == "reset":
        PersistenceBridge(storage, args.key).save(load_seed_state())
        logger.info("Storage %s reset to seed data", args.key)
        return 0

    store, _bridge = open_store(storage, args.key)
    if args.command == "demo":
        run_demo(CafeService(store))
    print_floor(store.state)
    return 0


if __name__ == "__main__":
    sys.exit(main())
