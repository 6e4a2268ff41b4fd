"""
Shared fixtures: a controllable clock, in-memory storage and a test client.
"""
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from skatespot.config.settings import Settings, StorageSettings, StorageBackend, Environment
from skatespot.core.dependencies import ServiceContainer
from skatespot.core.exceptions import StorageError
from skatespot.main import create_app
from skatespot.services.state_repository import KeyValueStateRepository
from skatespot.services.spot_store import SpotStore
from skatespot.services.storage import InMemoryStorage

T0 = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class FrozenClock:
    """Clock that only moves when told to"""

    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class FlakyStorage(InMemoryStorage):
    """In-memory storage whose writes can be switched off"""

    def __init__(self):
        super().__init__()
        self.fail_writes = False
        self.writes = 0

    def set(self, name: str, blob: str) -> None:
        if self.fail_writes:
            raise StorageError(name, "Disk full")
        self.writes += 1
        super().set(name, blob)


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def storage():
    return FlakyStorage()


@pytest.fixture
def repository(storage):
    return KeyValueStateRepository(storage)


@pytest.fixture
def store(repository, clock):
    return SpotStore(repository, clock=clock)


@pytest.fixture
def test_settings():
    return Settings(
        environment=Environment.TESTING,
        log_format="text",
        storage=StorageSettings(backend=StorageBackend.MEMORY),
    )


@pytest.fixture
def container(test_settings, storage, clock):
    return ServiceContainer(test_settings, storage=storage, clock=clock)


@pytest.fixture
def client(test_settings, container):
    app = create_app(test_settings, container)
    with TestClient(app) as test_client:
        yield test_client
