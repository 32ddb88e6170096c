# cafeops/core/persistence.py
"""
Pont de persistance : instantané JSON complet de l'état, rangé sous une clé.

- au démarrage : lecture de la clé ; absente ou illisible => seed + warning,
  jamais d'échec ;
- après chaque dispatch : réécriture de l'instantané complet.
Pas de verrou ni de version : la dernière session qui écrit gagne.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Callable, Dict, Optional, Protocol, Tuple, Union

from pydantic import ValidationError

from CafeOPS import config
from CafeOPS.core.actions import PosAction
from CafeOPS.core.state import PosState
from CafeOPS.core.store import Store
from CafeOPS.utils import validate_json

logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """Stockage volatil (tests, démo sans disque)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage:
    """Un fichier `<key>.json` par clé dans `directory`."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.path_for(key)
        # écriture dans un fichier temporaire puis remplacement atomique
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


class PersistenceBridge:
    def __init__(
        self,
        storage: KeyValueStorage,
        key: str = config.STORAGE_KEY,
        seed_factory: Optional[Callable[[], PosState]] = None,
    ):
        self.storage = storage
        self.key = key
        if seed_factory is None:
            from CafeOPS.data.seed import load_seed_state

            seed_factory = load_seed_state
        self._seed_factory = seed_factory

    def load(self) -> PosState:
        """
        État stocké, ou seed si la clé est absente, illisible (OSError,
        encodage) ou le contenu invalide.
        """
        try:
            raw = self.storage.get(self.key)
            if raw is None:
                logger.warning(
                    "No stored state under %r, starting from seed data", self.key
                )
                return self._seed_factory()
            return validate_json(raw, PosState)
        except (ValidationError, ValueError, OSError) as exc:
            # UnicodeDecodeError et JSONDecodeError héritent de ValueError
            logger.warning(
                "Failed to parse stored state under %r (%s), starting from seed data",
                self.key,
                exc.__class__.__name__,
            )
            return self._seed_factory()

    def save(self, state: PosState) -> None:
        self.storage.set(self.key, state.model_dump_json())

    def attach(self, store: Store) -> Callable[[], None]:
        """Sauvegarde après chaque publication du store ; renvoie le détacheur."""

        def _on_change(state: PosState, _actions: Tuple[PosAction, ...]) -> None:
            # l'état est déjà publié : un échec d'écriture ne doit pas remonter
            # à l'opération, le prochain dispatch réécrira l'instantané complet
            try:
                self.save(state)
            except OSError:
                logger.exception("Failed to save state under %r", self.key)

        return store.subscribe(_on_change)


def open_store(
    storage: KeyValueStorage, key: str = config.STORAGE_KEY
) -> Tuple[Store, PersistenceBridge]:
    """Charge l'état, construit le store et branche la sauvegarde automatique."""
    bridge = PersistenceBridge(storage, key)
    store = Store(bridge.load())
    bridge.attach(store)
    return store, bridge
