# cafeops/core/service.py
"""
Couche d'orchestration : les intentions de la salle (prendre une commande,
l'envoyer en cuisine, encaisser…) traduites en mutations primitives.

Chaque opération :
  1) lit UN instantané de l'état ;
  2) vérifie ses préconditions (erreur "dure" => rien n'est appliqué) ;
  3) calcule toutes les actions primitives ;
  4) les applique d'un bloc via Store.dispatch.

Deux familles d'échec seulement :
  - UnknownMenuItem / IllegalStatusTransition : exception, aucune mutation ;
  - id inconnu (commande, table, stock, article ciblé) : no-op silencieux,
    résultat vide (`None` ou `[]`).
"""

import logging
from datetime import datetime
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from pydantic import BaseModel, ConfigDict, Field

from CafeOPS import config
from CafeOPS.core.actions import (
    CreateOrder,
    PosAction,
    ToggleMenuAvailability,
    UpdateInventory,
    UpdateMenuItem,
    UpdateTable,
    UpsertKot,
    UpsertOrder,
)
from CafeOPS.core.errors import IllegalStatusTransition, UnknownMenuItem
from CafeOPS.core.state import PosState
from CafeOPS.core.store import Store
from CafeOPS.domain.kot import KotEvent
from CafeOPS.domain.order import Order, OrderItem, Payment
from CafeOPS.domain.types import (
    KotStatus,
    MenuCategory,
    OrderStatus,
    Station,
    TableStatus,
    can_transition,
)
from CafeOPS.utils import new_id, utc_now

logger = logging.getLogger(__name__)

# Valeur explicite pour vider `active_order_id` dans update_table_status
CLEAR = ""


class OrderLineRequest(BaseModel):
    """Ligne demandée par la salle (le prix est résolu par le service)."""

    model_config = ConfigDict(frozen=True)

    menu_item_id: str
    quantity: int = Field(default=1, gt=0)
    note: Optional[str] = None


LineInput = Union[OrderLineRequest, Mapping[str, Any]]


def station_for_category(category: MenuCategory) -> Station:
    """Poste de préparation par défaut d'une catégorie du menu."""
    return config.STATION_BY_CATEGORY.get(MenuCategory(category), Station.KITCHEN)


def _as_lines(items: Iterable[LineInput]) -> List[OrderLineRequest]:
    return [
        item
        if isinstance(item, OrderLineRequest)
        else OrderLineRequest.model_validate(item)
        for item in items
    ]


class CafeService:
    def __init__(
        self,
        store: Store,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_id,
    ):
        self.store = store
        self._clock = clock
        self._new_id = id_factory

    @property
    def state(self) -> PosState:
        return self.store.state

    # ------------------------------------------------------------------
    # Calculs internes (purs : état + entrées -> valeurs / actions)
    # ------------------------------------------------------------------

    def _price_lines(
        self, state: PosState, lines: Sequence[OrderLineRequest]
    ) -> List[OrderItem]:
        """
        Fige le prix courant du menu dans chaque nouvelle ligne.
        Lève UnknownMenuItem au premier article introuvable.
        """
        priced: List[OrderItem] = []
        for line in lines:
            menu_item = state.find_menu_item(line.menu_item_id)
            if menu_item is None:
                raise UnknownMenuItem(line.menu_item_id)
            priced.append(
                OrderItem(
                    id=self._new_id(),
                    menu_item_id=line.menu_item_id,
                    quantity=line.quantity,
                    price=menu_item.price,
                    note=line.note,
                )
            )
        return priced

    def _inventory_debits(
        self, state: PosState, items: Sequence[OrderItem]
    ) -> List[UpdateInventory]:
        """
        Sorties de stock pour `items` :
          1) cumul ingrédient.quantity * item.quantity par article de stock,
             sur l'ensemble des lignes (une seule décrémentation par article) ;
          2) quantité résultante bornée à zéro.
        Les articles sans recette (ou dont la recette/le stock a disparu)
        ne consomment rien.
        """
        usage: Dict[str, float] = {}
        for item in items:
            recipe = state.recipe_for(item.menu_item_id)
            if recipe is None:
                continue
            for inventory_id, used in recipe.usage_for(item.quantity).items():
                usage[inventory_id] = usage.get(inventory_id, 0.0) + used

        debits: List[UpdateInventory] = []
        for inventory_id, used in usage.items():
            stock = state.find_inventory_item(inventory_id)
            if stock is None:
                logger.debug("inventory item %s missing, skipped", inventory_id)
                continue
            debits.append(
                UpdateInventory(id=inventory_id, quantity=stock.after_consumption(used))
            )
        return debits

    def _transition(
        self,
        state: PosState,
        order: Order,
        status: OrderStatus,
        now: datetime,
    ) -> Tuple[Order, List[PosAction]]:
        """
        Seule porte d'entrée des changements de statut d'une commande.

        Renvoie la commande mise à jour et les actions annexes :
          - `ready`   : tous les bons de la commande passent `completed`,
                        quel que soit le poste ;
          - `settled` : la table liée passe `dirty` et perd son
                        `active_order_id` (si elle est bien tenue par cette
                        commande, ou par aucune).
        """
        status = OrderStatus(status)
        if not can_transition(order.status, status):
            raise IllegalStatusTransition(order.id, order.status, status)

        changes: Dict[str, Any] = {"status": status, "updated_at": now}
        if status == OrderStatus.READY:
            changes["ready_at"] = now
        elif status == OrderStatus.SERVED:
            changes["served_at"] = now
        updated = order.model_copy(update=changes)

        side_actions: List[PosAction] = []
        if status == OrderStatus.READY:
            for ticket in state.tickets_for_order(order.id):
                if ticket.status != KotStatus.COMPLETED:
                    side_actions.append(
                        UpsertKot(
                            ticket=ticket.model_copy(
                                update={"status": KotStatus.COMPLETED}
                            )
                        )
                    )

        if status == OrderStatus.SETTLED and order.table_id:
            table = state.find_table(order.table_id)
            if table is not None and table.active_order_id in (order.id, None):
                side_actions.append(
                    UpdateTable(
                        table=table.model_copy(
                            update={
                                "status": TableStatus.DIRTY,
                                "active_order_id": None,
                            }
                        )
                    )
                )
            elif table is not None:
                logger.debug(
                    "table %s now held by order %s, left as is",
                    table.id,
                    table.active_order_id,
                )

        return updated, side_actions

    # ------------------------------------------------------------------
    # Commandes
    # ------------------------------------------------------------------

    def create_order(
        self,
        waiter_id: str,
        items: Iterable[LineInput],
        table_id: Optional[str] = None,
        notes: Optional[str] = None,
        customer_name: Optional[str] = None,
    ) -> str:
        """Crée une commande `pending` et occupe la table ; renvoie son id."""
        state = self.state
        now = self._clock()
        order_items = self._price_lines(state, _as_lines(items))

        order = Order(
            id=self._new_id(),
            table_id=table_id,
            waiter_id=waiter_id,
            status=OrderStatus.PENDING,
            notes=notes,
            customer_name=customer_name,
            created_at=now,
            updated_at=now,
            items=order_items,
            payments=[],
        )
        actions: List[PosAction] = [CreateOrder(order=order)]

        if table_id:
            table = state.find_table(table_id)
            if table is not None:
                actions.append(
                    UpdateTable(
                        table=table.model_copy(
                            update={
                                "status": TableStatus.OCCUPIED,
                                "active_order_id": order.id,
                            }
                        )
                    )
                )
            else:
                logger.debug("create_order: table %s not found", table_id)

        self.store.dispatch(*actions)
        logger.info(
            "order %s created (%d items, table=%s)",
            order.id,
            len(order_items),
            table_id,
        )
        return order.id

    def add_items_to_order(
        self, order_id: str, items: Iterable[LineInput]
    ) -> List[OrderItem]:
        """Ajoute des lignes (prix figé à l'ajout), renvoie les nouvelles."""
        state = self.state
        order = state.find_order(order_id)
        if order is None:
            logger.debug("add_items_to_order: order %s not found", order_id)
            return []

        new_items = self._price_lines(state, _as_lines(items))
        updated = order.model_copy(
            update={
                "items": [*order.items, *new_items],
                "updated_at": self._clock(),
            }
        )
        self.store.dispatch(UpsertOrder(order=updated))
        return new_items

    def fire_order_to_kitchen(
        self,
        order_id: str,
        station: Station,
        items: Optional[Sequence[OrderItem]] = None,
    ) -> Optional[KotEvent]:
        """
        Envoie la commande (ou les lignes `items`) au poste `station`.

        Lignes débitées du stock :
          - `items` fourni : exactement celles-là ;
          - premier envoi : toutes les lignes de la commande ;
          - renvoi sans `items` : aucune (pas de double débit).
        """
        state = self.state
        order = state.find_order(order_id)
        if order is None:
            logger.debug("fire_order_to_kitchen: order %s not found", order_id)
            return None

        now = self._clock()
        station = Station(station)
        updated = order.model_copy(
            update={
                "status": (
                    OrderStatus.IN_PROGRESS
                    if order.status == OrderStatus.PENDING
                    else order.status
                ),
                "fired_to_kitchen_at": order.fired_to_kitchen_at or now,
                "updated_at": now,
            }
        )

        if items is not None:
            to_debit = list(items)
        elif order.is_fired:
            to_debit = []
        else:
            to_debit = list(order.items)

        # le bon liste les lignes envoyées : `items` si fourni, sinon toute la commande
        listed = order.items if items is None else to_debit
        ticket = KotEvent(
            id=self._new_id(),
            order_id=order.id,
            fired_at=now,
            status=KotStatus.NEW,
            station=station,
            item_ids=[item.id for item in listed],
        )

        self.store.dispatch(
            UpsertOrder(order=updated),
            UpsertKot(ticket=ticket),
            *self._inventory_debits(state, to_debit),
        )
        logger.info(
            "order %s fired to %s (ticket %s, %d items debited)",
            order.id,
            station.value,
            ticket.id,
            len(to_debit),
        )
        return ticket

    def update_order_status(
        self, order_id: str, status: OrderStatus
    ) -> Optional[Order]:
        state = self.state
        order = state.find_order(order_id)
        if order is None:
            logger.debug("update_order_status: order %s not found", order_id)
            return None

        updated, side_actions = self._transition(state, order, status, self._clock())
        self.store.dispatch(UpsertOrder(order=updated), *side_actions)
        logger.info("order %s -> %s", order.id, updated.status.value)
        return updated

    def record_payment(
        self, order_id: str, payment: Union[Payment, Mapping[str, Any]]
    ) -> Optional[Order]:
        """
        Enregistre un paiement. Dès que le cumul payé couvre le total, la
        commande est soldée via la même transition que update_order_status
        (la table est donc libérée elle aussi).
        """
        state = self.state
        order = state.find_order(order_id)
        if order is None:
            logger.debug("record_payment: order %s not found", order_id)
            return None

        if not isinstance(payment, Payment):
            payment = Payment.model_validate(payment)

        now = self._clock()
        updated = order.model_copy(
            update={"payments": [*order.payments, payment], "updated_at": now}
        )
        side_actions: List[PosAction] = []
        if updated.amount_paid() >= updated.total() and updated.is_open:
            updated, side_actions = self._transition(
                state, updated, OrderStatus.SETTLED, now
            )
            logger.info("order %s settled (paid %.2f)", order.id, updated.amount_paid())

        self.store.dispatch(UpsertOrder(order=updated), *side_actions)
        return updated

    # ------------------------------------------------------------------
    # Stock, menu, tables
    # ------------------------------------------------------------------

    def adjust_inventory(
        self,
        id: str,
        quantity: Optional[float] = None,
        par_level: Optional[float] = None,
    ) -> None:
        if self.state.find_inventory_item(id) is None:
            logger.debug("adjust_inventory: item %s not found", id)
            return
        self.store.dispatch(
            UpdateInventory(id=id, quantity=quantity, par_level=par_level)
        )

    def update_menu_item(
        self,
        id: str,
        price: Optional[float] = None,
        is_available: Optional[bool] = None,
        tags: Optional[List[str]] = None,
    ) -> None:
        """Ne touche jamais aux lignes de commande déjà saisies (prix figés)."""
        if self.state.find_menu_item(id) is None:
            logger.debug("update_menu_item: menu item %s not found", id)
            return
        self.store.dispatch(
            UpdateMenuItem(id=id, price=price, is_available=is_available, tags=tags)
        )

    def set_menu_availability(self, id: str, is_available: bool) -> None:
        if self.state.find_menu_item(id) is None:
            logger.debug("set_menu_availability: menu item %s not found", id)
            return
        self.store.dispatch(ToggleMenuAvailability(id=id, is_available=is_available))

    def update_table_status(
        self,
        id: str,
        status: TableStatus,
        active_order_id: Optional[str] = None,
    ) -> None:
        """
        Forçage manuel du statut d'une table (hors flux commande).
        `active_order_id` omis => conservé ; CLEAR ("") => vidé.
        """
        table = self.state.find_table(id)
        if table is None:
            logger.debug("update_table_status: table %s not found", id)
            return

        if active_order_id is None:
            active = table.active_order_id
        else:
            active = active_order_id or None
        self.store.dispatch(
            UpdateTable(
                table=table.model_copy(
                    update={"status": TableStatus(status), "active_order_id": active}
                )
            )
        )

    # ------------------------------------------------------------------
    # Écrans cuisine / salle
    # ------------------------------------------------------------------

    def advance_ticket(self, ticket_id: str, status: KotStatus) -> Optional[KotEvent]:
        """
        Fait avancer un bon (écran cuisine).
          - `completed`   : la commande passe `ready` (donc tous ses bons) ;
          - `in-progress` : la commande passe `in-progress` si c'est permis.
        Une commande déjà plus avancée n'est pas rétrogradée.
        """
        state = self.state
        ticket = state.find_ticket(ticket_id)
        if ticket is None:
            logger.debug("advance_ticket: ticket %s not found", ticket_id)
            return None

        status = KotStatus(status)
        updated_ticket = ticket.model_copy(update={"status": status})
        actions: List[PosAction] = [UpsertKot(ticket=updated_ticket)]

        target = {
            KotStatus.COMPLETED: OrderStatus.READY,
            KotStatus.IN_PROGRESS: OrderStatus.IN_PROGRESS,
        }.get(status)
        order = state.find_order(ticket.order_id)
        if (
            target is not None
            and order is not None
            and can_transition(order.status, target)
        ):
            updated_order, side_actions = self._transition(
                state, order, target, self._clock()
            )
            actions.append(UpsertOrder(order=updated_order))
            actions.extend(
                action
                for action in side_actions
                if not (isinstance(action, UpsertKot) and action.ticket.id == ticket.id)
            )

        self.store.dispatch(*actions)
        return updated_ticket

    def quick_add(
        self,
        waiter_id: str,
        menu_item_id: str,
        order_id: Optional[str] = None,
        table_id: Optional[str] = None,
        quantity: int = 1,
    ) -> str:
        """
        Ajout rapide depuis la console serveur : l'article part directement
        au poste de sa catégorie.
          - commande ouverte `order_id` : ajout + envoi de cette seule ligne ;
          - sinon : nouvelle commande (sur `table_id`) puis premier envoi.
        Renvoie l'id de la commande concernée.
        """
        menu_item = self.state.find_menu_item(menu_item_id)
        if menu_item is None:
            raise UnknownMenuItem(menu_item_id)
        station = station_for_category(menu_item.category)
        line = OrderLineRequest(menu_item_id=menu_item_id, quantity=quantity)

        order = self.state.find_order(order_id)
        if order is not None and order.is_open:
            new_items = self.add_items_to_order(order.id, [line])
            self.fire_order_to_kitchen(order.id, station, new_items)
            return order.id

        new_order_id = self.create_order(waiter_id, [line], table_id=table_id)
        self.fire_order_to_kitchen(new_order_id, station)
        return new_order_id

    def checkout(
        self,
        waiter_id: str,
        items: Iterable[LineInput],
        table_id: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Optional[str]:
        """
        Encaissement du panier au terminal : crée la commande puis l'envoie
        au poste de la catégorie dominante du panier (pondérée par les
        quantités ; à égalité, la première dans l'ordre du menu).
        Panier vide => rien n'est fait, renvoie `None`.
        """
        lines = _as_lines(items)
        if not lines:
            return None

        weights: Dict[MenuCategory, int] = {category: 0 for category in MenuCategory}
        for line in lines:
            menu_item = self.state.find_menu_item(line.menu_item_id)
            if menu_item is None:
                raise UnknownMenuItem(line.menu_item_id)
            weights[MenuCategory(menu_item.category)] += line.quantity
        dominant = max(weights, key=weights.get)

        order_id = self.create_order(waiter_id, lines, table_id=table_id, notes=notes)
        self.fire_order_to_kitchen(order_id, station_for_category(dominant))
        return order_id
