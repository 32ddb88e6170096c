# cafeops/core/reducer.py
"""
Reducer : (état, action) -> nouvel état.

- seule la collection ciblée est remplacée, les autres listes sont partagées
  telles quelles avec l'état précédent ;
- `last_sync` est ré-horodaté à chaque action (sauf SYNC_FROM_STORAGE, qui
  reprend l'état stocké tel quel) ;
- aucune validation : un id inconnu laisse simplement la collection intacte.
"""

from datetime import datetime
from typing import Callable, List, Optional, TypeVar

from CafeOPS.core.actions import (
    BulkUpdate,
    CreateOrder,
    DeleteKot,
    DeleteOrder,
    PosAction,
    SyncFromStorage,
    ToggleMenuAvailability,
    UpdateInventory,
    UpdateMenuItem,
    UpdateTable,
    UpsertKot,
    UpsertOrder,
)
from CafeOPS.core.state import COLLECTIONS, PosState
from CafeOPS.utils import utc_now

T = TypeVar("T")


# -------- Aides sur les collections --------


def _upsert(items: List[T], entity: T) -> List[T]:
    """Remplace l'entité de même id, sinon l'ajoute en tête."""
    if any(item.id == entity.id for item in items):
        return [entity if item.id == entity.id else item for item in items]
    return [entity, *items]


def _remove(items: List[T], entity_id: str) -> List[T]:
    return [item for item in items if item.id != entity_id]


def _map_one(items: List[T], entity_id: str, fn: Callable[[T], T]) -> List[T]:
    return [fn(item) if item.id == entity_id else item for item in items]


def _partial(**fields) -> dict:
    """Ne garde que les champs effectivement fournis (None = inchangé)."""
    return {name: value for name, value in fields.items() if value is not None}


# -------- Reducer --------


def reduce(
    state: PosState, action: PosAction, now: Optional[datetime] = None
) -> PosState:
    if isinstance(action, SyncFromStorage):
        return action.state

    stamp = now or utc_now()

    def replace(**collections) -> PosState:
        return state.model_copy(update={**collections, "last_sync": stamp})

    if isinstance(action, CreateOrder):
        return replace(orders=[action.order, *state.orders])

    if isinstance(action, UpsertOrder):
        return replace(orders=_upsert(state.orders, action.order))

    if isinstance(action, DeleteOrder):
        return replace(orders=_remove(state.orders, action.id))

    if isinstance(action, UpdateTable):
        table = action.table
        return replace(tables=_map_one(state.tables, table.id, lambda _: table))

    if isinstance(action, UpsertKot):
        return replace(kot_tickets=_upsert(state.kot_tickets, action.ticket))

    if isinstance(action, DeleteKot):
        return replace(kot_tickets=_remove(state.kot_tickets, action.id))

    if isinstance(action, UpdateInventory):
        changes = _partial(quantity=action.quantity, par_level=action.par_level)
        return replace(
            inventory=_map_one(
                state.inventory,
                action.id,
                lambda item: item.model_copy(update=changes),
            )
        )

    if isinstance(action, UpdateMenuItem):
        changes = _partial(
            price=action.price,
            is_available=action.is_available,
            tags=list(action.tags) if action.tags is not None else None,
        )
        return replace(
            menu=_map_one(
                state.menu, action.id, lambda item: item.model_copy(update=changes)
            )
        )

    if isinstance(action, ToggleMenuAvailability):
        return replace(
            menu=_map_one(
                state.menu,
                action.id,
                lambda item: item.model_copy(
                    update={"is_available": action.is_available}
                ),
            )
        )

    if isinstance(action, BulkUpdate):
        collections = {
            name: getattr(action, name)
            for name in COLLECTIONS
            if getattr(action, name) is not None
        }
        return replace(**collections)

    # action inconnue : état inchangé
    return state
