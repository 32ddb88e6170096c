"""
Core package for CafeOps.

Exposes the store, the orchestration service and the persistence bridge.
Everything that changes state goes through CafeService, which emits
primitive actions applied by the reducer.
"""

from .errors import CafeOpsError, IllegalStatusTransition, UnknownMenuItem
from .persistence import JsonFileStorage, MemoryStorage, PersistenceBridge, open_store
from .service import CLEAR, CafeService, OrderLineRequest, station_for_category
from .state import PosState
from .store import Store

__all__ = [
    "CLEAR",
    "CafeOpsError",
    "CafeService",
    "IllegalStatusTransition",
    "JsonFileStorage",
    "MemoryStorage",
    "OrderLineRequest",
    "PersistenceBridge",
    "PosState",
    "Store",
    "UnknownMenuItem",
    "open_store",
    "station_for_category",
]
