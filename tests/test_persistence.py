import logging

import pytest

from CafeOPS import config
from CafeOPS.core.actions import UpdateInventory
from CafeOPS.core.persistence import (
    JsonFileStorage,
    MemoryStorage,
    PersistenceBridge,
    open_store,
)
from CafeOPS.core.service import CafeService
from CafeOPS.core.state import PosState
from CafeOPS.core.store import Store
from CafeOPS.data.seed import build_seed_state, load_seed_state
from CafeOPS.domain.types import Station

from conftest import START, FakeClock, make_state

KEY = "test-pos"


class BrokenStorage(MemoryStorage):
    def set(self, key, value):
        raise OSError("disk full")


@pytest.fixture(autouse=True)
def no_seed_file(monkeypatch):
    monkeypatch.setattr(config, "SEED_FILE", None)


class TestLoad:
    def test_absent_key_falls_back_to_seed(self, caplog):
        bridge = PersistenceBridge(MemoryStorage(), KEY, seed_factory=make_state)
        with caplog.at_level(logging.WARNING):
            state = bridge.load()
        assert state == make_state()
        assert "starting from seed data" in caplog.text

    def test_garbage_falls_back_to_seed(self, caplog):
        storage = MemoryStorage({KEY: "{not json"})
        bridge = PersistenceBridge(storage, KEY, seed_factory=make_state)
        with caplog.at_level(logging.WARNING):
            state = bridge.load()
        assert state == make_state()
        assert "Failed to parse stored state" in caplog.text

    def test_wrong_shape_falls_back_to_seed(self):
        storage = MemoryStorage({KEY: '{"orders": "nope"}'})
        bridge = PersistenceBridge(storage, KEY, seed_factory=make_state)
        assert bridge.load() == make_state()

    def test_default_seed_is_built_in_cafe(self):
        state = PersistenceBridge(MemoryStorage(), KEY).load()
        assert state == build_seed_state()


class TestSave:
    def test_round_trip(self):
        store = Store(make_state())
        service = CafeService(store, clock=FakeClock())
        order_id = service.create_order(
            "w1", [{"menu_item_id": "menu-c", "quantity": 2}], table_id="t1"
        )
        service.fire_order_to_kitchen(order_id, Station.BAR)
        service.record_payment(order_id, {"amount": 8.0, "timestamp": START})

        storage = MemoryStorage()
        bridge = PersistenceBridge(storage, KEY, seed_factory=PosState)
        bridge.save(store.state)

        assert bridge.load() == store.state

    def test_attach_saves_after_each_dispatch(self):
        storage = MemoryStorage()
        bridge = PersistenceBridge(storage, KEY, seed_factory=PosState)
        store = Store(make_state())
        detach = bridge.attach(store)

        assert storage.get(KEY) is None
        store.dispatch(UpdateInventory(id="inv-x", quantity=1))
        assert bridge.load().find_inventory_item("inv-x").quantity == 1

        detach()
        store.dispatch(UpdateInventory(id="inv-x", quantity=0))
        assert bridge.load().find_inventory_item("inv-x").quantity == 1

    def test_failed_write_does_not_break_the_operation(self, caplog):
        bridge = PersistenceBridge(BrokenStorage(), KEY, seed_factory=PosState)
        store = Store(make_state())
        bridge.attach(store)
        service = CafeService(store, clock=FakeClock())

        with caplog.at_level(logging.ERROR):
            order_id = service.create_order("w1", [{"menu_item_id": "menu-a"}])

        assert store.state.find_order(order_id) is not None
        assert "Failed to save state" in caplog.text

    def test_open_store(self):
        storage = MemoryStorage()
        store, bridge = open_store(storage, KEY)
        assert store.state == build_seed_state()

        CafeService(store).quick_add("waiter-ana", "menu-latte", table_id="table-1")

        reloaded = bridge.load()
        assert reloaded == store.state
        assert reloaded.find_table("table-1").active_order_id == store.state.orders[0].id


class TestJsonFileStorage:
    def test_missing_file(self, tmp_path):
        assert JsonFileStorage(tmp_path / "nowhere").get(KEY) is None

    def test_set_creates_directory_and_file(self, tmp_path):
        storage = JsonFileStorage(tmp_path / "pos")
        storage.set(KEY, '{"orders": []}')

        assert storage.path_for(KEY) == tmp_path / "pos" / f"{KEY}.json"
        assert storage.get(KEY) == '{"orders": []}'
        assert [p.name for p in (tmp_path / "pos").iterdir()] == [f"{KEY}.json"]

    def test_overwrite(self, tmp_path):
        storage = JsonFileStorage(tmp_path)
        storage.set(KEY, "first")
        storage.set(KEY, "second")
        assert storage.get(KEY) == "second"

    def test_undecodable_file_falls_back_to_seed(self, tmp_path, caplog):
        JsonFileStorage(tmp_path).path_for(KEY).write_bytes(b"\xff\xfe{garbage")
        bridge = PersistenceBridge(JsonFileStorage(tmp_path), KEY, seed_factory=make_state)
        with caplog.at_level(logging.WARNING):
            state = bridge.load()
        assert state == make_state()
        assert "Failed to parse stored state" in caplog.text

    def test_unreadable_path_falls_back_to_seed(self, tmp_path):
        # un répertoire à la place du fichier : read_text lève une OSError
        JsonFileStorage(tmp_path).path_for(KEY).mkdir()
        bridge = PersistenceBridge(JsonFileStorage(tmp_path), KEY, seed_factory=make_state)
        assert bridge.load() == make_state()

    def test_bridge_on_disk(self, tmp_path):
        bridge = PersistenceBridge(JsonFileStorage(tmp_path), KEY, seed_factory=PosState)
        bridge.save(make_state())
        again = PersistenceBridge(JsonFileStorage(tmp_path), KEY, seed_factory=PosState)
        assert again.load() == make_state()


class TestSeedFile:
    def test_seed_file_is_used(self, tmp_path, monkeypatch):
        seed_path = tmp_path / "seed.json"
        seed_path.write_text(make_state().model_dump_json(), encoding="utf-8")
        monkeypatch.setattr(config, "SEED_FILE", str(seed_path))
        assert load_seed_state() == make_state()

    def test_unusable_seed_file_falls_back(self, tmp_path, monkeypatch, caplog):
        monkeypatch.setattr(config, "SEED_FILE", str(tmp_path / "missing.json"))
        with caplog.at_level(logging.WARNING):
            state = load_seed_state()
        assert state == build_seed_state()
        assert "using built-in seed" in caplog.text
