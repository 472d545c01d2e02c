"""
services/settings_store.py

Key-value store used to persist the session id between runs.
  - Production:  Redis (APIAI_SETTINGS_STORE=redis)
  - Desktop:     JSON file on disk (APIAI_SETTINGS_STORE=file)
  - Development: in-memory dict (resets on restart)

All stores hold plain string values.
"""

import asyncio
import json
from pathlib import Path
from typing import Optional, Protocol

import redis.asyncio as aioredis

from apiai.core.config import settings
from apiai.core.logger import get_logger

logger = get_logger(__name__)


class SettingsStore(Protocol):
    async def get(self, key: str) -> Optional[str]: ...

    async def set(self, key: str, value: str) -> None: ...


class InMemorySettingsStore:
    def __init__(self):
        self._values: dict[str, str] = {}

    async def get(self, key: str) -> Optional[str]:
        return self._values.get(key)

    async def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileSettingsStore:
    """Single JSON object on disk. A missing file reads as empty."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        raw = self.path.read_text(encoding="utf-8")
        if not raw.strip():
            return {}
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Settings file {self.path} is not valid JSON, ignoring it: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Settings file {self.path} does not hold a JSON object, ignoring it")
            return {}
        return data

    def _save(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    async def get(self, key: str) -> Optional[str]:
        data = await asyncio.to_thread(self._load)
        value = data.get(key)
        return None if value is None else str(value)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._save, key, value)


class RedisSettingsStore:
    def __init__(self, client: Optional[aioredis.Redis] = None, key_prefix: Optional[str] = None):
        self._client = client
        self.key_prefix = settings.REDIS_KEY_PREFIX if key_prefix is None else key_prefix

    @property
    def client(self) -> aioredis.Redis:
        if self._client is None:
            self._client = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
        return self._client

    async def get(self, key: str) -> Optional[str]:
        value = await self.client.get(f"{self.key_prefix}{key}")
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        await self.client.set(f"{self.key_prefix}{key}", value)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def get_settings_store() -> SettingsStore:
    if settings.SETTINGS_STORE == "redis":
        logger.debug(f"Settings store: Redis at {settings.REDIS_URL}")
        return RedisSettingsStore()
    if settings.SETTINGS_STORE == "file":
        logger.debug(f"Settings store: file {settings.SETTINGS_FILE}")
        return JsonFileSettingsStore(settings.SETTINGS_FILE)
    return InMemorySettingsStore()
