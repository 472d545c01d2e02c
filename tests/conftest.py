"""
tests/conftest.py
Shared fixtures: a client wired to an httpx.MockTransport.
"""

from typing import Callable

import httpx
import pytest

from apiai.models.configuration import AIConfiguration
from apiai.services.data_service import AIDataService
from apiai.services.settings_store import InMemorySettingsStore
from tests.helpers import ACCESS_TOKEN


@pytest.fixture
def config() -> AIConfiguration:
    return AIConfiguration(client_access_token=ACCESS_TOKEN)


@pytest.fixture
def store() -> InMemorySettingsStore:
    return InMemorySettingsStore()


@pytest.fixture
def make_service(config, store) -> Callable[..., AIDataService]:
    """Build a client whose transport calls `handler(request)` and records every request."""

    def _make(handler, **config_overrides) -> AIDataService:
        cfg = config.model_copy(update=config_overrides) if config_overrides else config
        sent: list[httpx.Request] = []

        def _record(request: httpx.Request):
            sent.append(request)
            return handler(request)

        service = AIDataService(cfg, settings_store=store, transport=httpx.MockTransport(_record))
        service.sent = sent
        return service

    return _make
