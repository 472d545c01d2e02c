"""
tests/test_settings_store.py
Key-value stores used for session id persistence.
Run: pytest tests/ -v
"""

import json

import pytest

from apiai.core.config import settings
from apiai.services.data_service import AIDataService
from apiai.services.settings_store import (
    InMemorySettingsStore,
    JsonFileSettingsStore,
    RedisSettingsStore,
    get_settings_store,
)


class FakeRedis:
    def __init__(self):
        self.data: dict[str, bytes] = {}
        self.closed = 0

    async def get(self, key):
        return self.data.get(key)

    async def set(self, key, value):
        self.data[key] = value.encode("utf-8")

    async def aclose(self):
        self.closed += 1


@pytest.mark.asyncio
async def test_in_memory_store():
    store = InMemorySettingsStore()
    assert await store.get("missing") is None
    await store.set("k", "v")
    assert await store.get("k") == "v"


@pytest.mark.asyncio
async def test_json_file_store_round_trip(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    store = JsonFileSettingsStore(path)

    assert await store.get("api_ai_SessionId") is None

    await store.set("api_ai_SessionId", "a" * 36)
    await store.set("other", "value")

    assert json.loads(path.read_text()) == {"api_ai_SessionId": "a" * 36, "other": "value"}
    assert await JsonFileSettingsStore(path).get("api_ai_SessionId") == "a" * 36


@pytest.mark.asyncio
async def test_json_file_store_empty_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("")
    assert await JsonFileSettingsStore(path).get("anything") is None


@pytest.mark.asyncio
async def test_redis_store_prefixes_keys():
    fake = FakeRedis()
    store = RedisSettingsStore(client=fake, key_prefix="test:")

    await store.set("api_ai_SessionId", "b" * 36)

    assert fake.data == {"test:api_ai_SessionId": ("b" * 36).encode("utf-8")}
    assert await store.get("api_ai_SessionId") == "b" * 36
    assert await store.get("missing") is None


@pytest.mark.parametrize("backend,expected", [
    ("memory", InMemorySettingsStore),
    ("file", JsonFileSettingsStore),
    ("redis", RedisSettingsStore),
])
def test_get_settings_store_follows_settings(monkeypatch, backend, expected):
    monkeypatch.setattr(settings, "SETTINGS_STORE", backend)
    assert isinstance(get_settings_store(), expected)


def test_file_store_path_is_expanded(monkeypatch):
    monkeypatch.setattr(settings, "SETTINGS_STORE", "file")
    store = get_settings_store()
    assert "~" not in str(store.path)


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["{not json", "[1]", '"just a string"'])
async def test_json_file_store_unusable_file_reads_as_empty(tmp_path, content):
    path = tmp_path / "settings.json"
    path.write_text(content)
    store = JsonFileSettingsStore(path)

    assert await store.get("api_ai_SessionId") is None

    await store.set("api_ai_SessionId", "c" * 36)
    assert json.loads(path.read_text()) == {"api_ai_SessionId": "c" * 36}


@pytest.mark.asyncio
@pytest.mark.parametrize("content", ["{not json", "[1]"])
async def test_restore_from_corrupt_file_keeps_session_id(tmp_path, config, content):
    path = tmp_path / "settings.json"
    path.write_text(content)
    service = AIDataService(config, settings_store=JsonFileSettingsStore(path))
    before = service.session_id

    await service.restore_session_id()

    assert service.session_id == before
    await service.aclose()


def test_redis_key_prefix_defaults_to_current_settings(monkeypatch):
    monkeypatch.setattr(settings, "REDIS_KEY_PREFIX", "changed:")
    assert RedisSettingsStore(client=FakeRedis()).key_prefix == "changed:"
    assert RedisSettingsStore(client=FakeRedis(), key_prefix="").key_prefix == ""


@pytest.mark.asyncio
async def test_redis_store_aclose_closes_client():
    fake = FakeRedis()
    store = RedisSettingsStore(client=fake)

    await store.aclose()
    await store.aclose()

    assert fake.closed == 1


@pytest.mark.asyncio
async def test_service_closes_store_it_created(monkeypatch, config):
    fake = FakeRedis()
    monkeypatch.setattr(settings, "SETTINGS_STORE", "redis")
    service = AIDataService(config)
    service.settings_store._client = fake

    await service.aclose()

    assert fake.closed == 1


@pytest.mark.asyncio
async def test_service_leaves_caller_store_open(config):
    fake = FakeRedis()
    store = RedisSettingsStore(client=fake)

    async with AIDataService(config, settings_store=store):
        pass

    assert fake.closed == 0
    await store.aclose()
    assert fake.closed == 1
