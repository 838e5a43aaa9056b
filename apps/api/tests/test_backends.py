import json

import pytest
import redis

from orgchart.core.config import get_settings
from orgchart.domain.errors import BackendError
from orgchart.services.backends import (
    InMemoryBackend,
    JsonFileBackend,
    RedisBackend,
    build_backend,
)
from orgchart.services.state_store import OrgChartStore


class FakeRedis:
    """Just enough of the redis client for the backend."""

    def __init__(self):
        self.values = {}

    def get(self, key):
        return self.values.get(key)

    def set(self, key, value, nx=False):
        if nx and key in self.values:
            return None
        self.values[key] = value.encode("utf-8")
        return True

    def delete(self, key):
        self.values.pop(key, None)


class BrokenRedis:
    def get(self, key):
        raise redis.ConnectionError("connection refused")

    def set(self, key, value, nx=False):
        raise redis.ConnectionError("connection refused")

    def delete(self, key):
        raise redis.ConnectionError("connection refused")


def test_memory_backend_returns_copies():
    backend = InMemoryBackend()
    doc = {"employees": [{"id": 1}]}
    backend.save("k", doc)
    doc["employees"].append({"id": 2})

    loaded = backend.load("k")
    loaded["employees"][0]["id"] = 42

    assert backend.load("k") == {"employees": [{"id": 1}]}


def test_create_if_absent_keeps_existing_document():
    backend = InMemoryBackend()
    first = backend.create_if_absent("k", {"v": 1})
    second = backend.create_if_absent("k", {"v": 2})

    assert first == second == {"v": 1}


def test_json_backend_survives_new_instance(tmp_path):
    path = tmp_path / "nested" / "state.json"
    OrgChartStore(JsonFileBackend(path)).replace_state({"employees": [{"id": 7, "name": "Z"}]})

    reopened = OrgChartStore(JsonFileBackend(path))

    assert reopened.get_or_seed_state()["employees"] == [{"id": 7, "name": "Z"}]
    assert not path.with_suffix(".tmp").exists()


def test_json_backend_create_if_absent_and_clear(tmp_path):
    backend = JsonFileBackend(tmp_path / "state.json")
    assert backend.create_if_absent("k", {"v": 1}) == {"v": 1}
    assert backend.create_if_absent("k", {"v": 2}) == {"v": 1}

    backend.clear("k")

    assert backend.load("k") is None
    assert json.loads((tmp_path / "state.json").read_text()) == {}


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
def test_json_backend_corrupt_file_is_backend_error(tmp_path, content):
    path = tmp_path / "state.json"
    path.write_text(content)
    store = OrgChartStore(JsonFileBackend(path))

    with pytest.raises(BackendError):
        store.get_or_seed_state()


def test_redis_backend_round_trip_and_seed_nx():
    fake = FakeRedis()
    backend = RedisBackend(client=fake)

    assert backend.load("k") is None
    assert backend.create_if_absent("k", {"v": 1}) == {"v": 1}
    assert backend.create_if_absent("k", {"v": 2}) == {"v": 1}

    backend.save("k", {"v": 3})
    assert backend.load("k") == {"v": 3}

    backend.clear("k")
    assert backend.load("k") is None


def test_redis_backend_wraps_client_errors():
    backend = RedisBackend(client=BrokenRedis())

    with pytest.raises(BackendError):
        backend.load("k")
    with pytest.raises(BackendError):
        backend.save("k", {})
    with pytest.raises(BackendError):
        backend.create_if_absent("k", {})
    with pytest.raises(BackendError):
        backend.clear("k")


@pytest.mark.parametrize(
    "name, expected",
    [("memory", InMemoryBackend), ("json", JsonFileBackend), ("redis", RedisBackend), ("mongo", InMemoryBackend)],
)
def test_build_backend_from_settings(monkeypatch, name, expected):
    monkeypatch.setenv("STATE_BACKEND", name)
    get_settings.cache_clear()

    assert isinstance(build_backend(get_settings()), expected)
