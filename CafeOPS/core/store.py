# cafeops/core/store.py
import logging
from typing import Callable, List, Optional, Tuple

from CafeOPS.core.actions import PosAction
from CafeOPS.core.reducer import reduce
from CafeOPS.core.state import PosState

logger = logging.getLogger(__name__)

Listener = Callable[[PosState, Tuple[PosAction, ...]], None]


class Store:
    """
    Détient l'état courant.

    `dispatch` applique un lot d'actions d'un seul tenant : les actions sont
    repliées via le reducer sur une copie, puis l'état résultant est publié
    en une fois. Les listeners (persistance, journal…) sont appelés après
    chaque publication, jamais sur un état intermédiaire.
    """

    def __init__(self, state: Optional[PosState] = None):
        self._state = state if state is not None else PosState()
        self._listeners: List[Listener] = []

    @property
    def state(self) -> PosState:
        return self._state

    def dispatch(self, *actions: PosAction) -> PosState:
        if not actions:
            return self._state

        next_state = self._state
        for action in actions:
            next_state = reduce(next_state, action)
        self._state = next_state

        logger.debug(
            "dispatched %s", ", ".join(action.type for action in actions)
        )
        for listener in list(self._listeners):
            listener(next_state, actions)
        return next_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Enregistre un listener ; renvoie la fonction de désinscription."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
