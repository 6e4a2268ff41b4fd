"""
Unit tests for the durable key-value storage backends
"""
import pytest

from skatespot.config.settings import StorageSettings, StorageBackend
from skatespot.core.db import Base, create_db_engine, create_session_factory
from skatespot.core.exceptions import StorageError
from skatespot.services.storage import (
    InMemoryStorage,
    JsonFileStorage,
    SqlKeyValueStorage,
    build_storage,
)
from skatespot.services.state_repository import KeyValueStateRepository
from skatespot.services.spot_store import SpotStore


@pytest.fixture
def sql_storage():
    # In-memory SQLite for fast unit testing
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(engine)
    return SqlKeyValueStorage(create_session_factory(engine))


class TestInMemoryStorage:

    def test_get_set(self):
        storage = InMemoryStorage()
        assert storage.get("k") is None
        storage.set("k", "v1")
        storage.set("k", "v2")
        assert storage.get("k") == "v2"


class TestJsonFileStorage:

    def test_missing_file_reads_as_absent(self, tmp_path):
        assert JsonFileStorage(tmp_path).get("skatespot-storage") is None

    def test_set_creates_directory_and_file(self, tmp_path):
        directory = tmp_path / "nested" / "data"
        storage = JsonFileStorage(directory)

        storage.set("skatespot-storage", '{"spots": [], "checkIns": []}')

        assert (directory / "skatespot-storage.json").exists()
        assert storage.get("skatespot-storage") == '{"spots": [], "checkIns": []}'
        assert not (directory / "skatespot-storage.json.tmp").exists()

    def test_survives_new_instance(self, tmp_path):
        JsonFileStorage(tmp_path).set("k", "Praça")
        assert JsonFileStorage(tmp_path).get("k") == "Praça"

    def test_write_failure_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        storage = JsonFileStorage(blocker / "data")

        with pytest.raises(StorageError) as exc_info:
            storage.set("k", "v")

        assert exc_info.value.name == "k"
        assert exc_info.value.status_code == 503

    def test_non_utf8_file_raises_storage_error(self, tmp_path):
        (tmp_path / "skatespot-storage.json").write_bytes(b"\xff\xfe{bad")

        with pytest.raises(StorageError) as exc_info:
            JsonFileStorage(tmp_path).get("skatespot-storage")

        assert exc_info.value.name == "skatespot-storage"

    def test_store_over_non_utf8_file_starts_empty(self, tmp_path, clock):
        (tmp_path / "skatespot-storage.json").write_bytes(b"\xff\xfe{bad")
        repository = KeyValueStateRepository(JsonFileStorage(tmp_path))

        store = SpotStore(repository, clock=clock)

        assert store.spots == ()
        assert store.check_ins == ()
        assert repository.last_error is not None

        # The next mutation overwrites the unreadable file
        store.add_check_in("spot")
        assert JsonFileStorage(tmp_path).get("skatespot-storage").startswith("{")


class TestSqlKeyValueStorage:

    def test_get_set(self, sql_storage):
        assert sql_storage.get("skatespot-storage") is None

        sql_storage.set("skatespot-storage", "first")
        sql_storage.set("skatespot-storage", "second")

        assert sql_storage.get("skatespot-storage") == "second"

    def test_keys_are_independent(self, sql_storage):
        sql_storage.set("a", "1")
        sql_storage.set("b", "2")

        assert sql_storage.get("a") == "1"
        assert sql_storage.get("b") == "2"

    def test_missing_table_raises_storage_error(self):
        engine = create_db_engine("sqlite://")
        storage = SqlKeyValueStorage(create_session_factory(engine))

        with pytest.raises(StorageError):
            storage.get("k")
        with pytest.raises(StorageError):
            storage.set("k", "v")


class TestBuildStorage:

    def test_memory_backend(self):
        assert isinstance(build_storage(StorageSettings(backend=StorageBackend.MEMORY)), InMemoryStorage)

    def test_file_backend(self, tmp_path):
        storage = build_storage(StorageSettings(backend="file", directory=str(tmp_path)))
        assert isinstance(storage, JsonFileStorage)
        assert storage.directory == tmp_path.resolve()

    def test_sql_backend_creates_table(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'db' / 'skatespot.db'}"
        storage = build_storage(StorageSettings(backend="SQL", database_url=url))

        assert isinstance(storage, SqlKeyValueStorage)
        storage.set("k", "v")
        assert storage.get("k") == "v"
