"""
Unit tests for the key-value state repository
"""
import json

from skatespot.core.exceptions import StorageError
from skatespot.models.spot import StoreState
from skatespot.schemas.spot import SpotCreate, CheckInCreate
from skatespot.services.state_repository import KeyValueStateRepository, DEFAULT_STORAGE_NAME
from skatespot.services.spot_store import SpotStore
from skatespot.services.storage import InMemoryStorage


class UnreadableStorage(InMemoryStorage):
    def get(self, name):
        raise StorageError(name, "Permission denied")


def test_load_returns_none_when_nothing_stored():
    repo = KeyValueStateRepository(InMemoryStorage())
    assert repo.load() is None


def test_save_writes_single_blob_under_storage_name(storage, store):
    spot = store.add_spot(SpotCreate(name="Pico", lat=1.5, lng=-2.25))
    store.add_check_in(spot.id, CheckInCreate(skater_name="Ana"))

    blob = json.loads(storage.get(DEFAULT_STORAGE_NAME))

    assert list(blob) == ["spots", "checkIns"]
    assert blob["spots"][0]["id"] == spot.id
    assert blob["spots"][0]["createdAt"].startswith("2025-06-01T12:00:00")
    assert blob["checkIns"][0]["spotId"] == spot.id
    assert blob["checkIns"][0]["skaterName"] == "Ana"


def test_custom_storage_name(clock):
    storage = InMemoryStorage()
    store = SpotStore(KeyValueStateRepository(storage, "other-storage"), clock=clock)

    store.add_spot(SpotCreate(name="Pico", lat=0, lng=0))

    assert storage.get("other-storage") is not None
    assert storage.get(DEFAULT_STORAGE_NAME) is None


def test_loads_blob_written_by_web_client():
    """Blobs with millisecond timestamps and missing optional fields load"""
    blob = json.dumps({
        "spots": [{
            "id": "3f1c", "name": "Ladeira", "description": "", "lat": -27.66, "lng": -48.47,
            "type": "Downhill", "createdAt": "2025-01-10T18:30:00.000Z",
        }],
        "checkIns": [{
            "id": "9a2b", "spotId": "3f1c", "skaterName": "Anônimo",
            "timestamp": "2025-01-10T19:00:00.000Z",
        }],
    })
    repo = KeyValueStateRepository(InMemoryStorage({DEFAULT_STORAGE_NAME: blob}))

    state = repo.load()

    assert state.spots[0].type.value == "Downhill"
    assert state.spots[0].photo_url is None
    assert state.spots[0].created_at.tzinfo is not None
    assert state.check_ins[0].spot_id == "3f1c"


def test_naive_timestamps_read_as_utc():
    blob = json.dumps({
        "spots": [],
        "checkIns": [{"id": "1", "spotId": "s", "skaterName": "A", "timestamp": "2025-01-10T19:00:00"}],
    })
    state = KeyValueStateRepository(InMemoryStorage({DEFAULT_STORAGE_NAME: blob})).load()

    assert state.check_ins[0].timestamp.utcoffset().total_seconds() == 0


def test_corrupt_blob_starts_empty(clock):
    storage = InMemoryStorage({DEFAULT_STORAGE_NAME: "{not json"})
    repo = KeyValueStateRepository(storage)

    assert repo.load() is None
    store = SpotStore(repo, clock=clock)
    assert store.spots == ()
    assert store.check_ins == ()


def test_unreadable_storage_starts_empty():
    repo = KeyValueStateRepository(UnreadableStorage())

    assert repo.load() is None
    assert repo.last_error is not None


def test_save_failure_returns_false_and_records_error(storage):
    repo = KeyValueStateRepository(storage)
    storage.fail_writes = True

    assert repo.save(StoreState()) is False
    assert repo.last_error.name == DEFAULT_STORAGE_NAME

    storage.fail_writes = False
    assert repo.save(StoreState()) is True
    assert repo.last_error is None


def test_round_trip_preserves_state(store, storage):
    spot = store.add_spot(SpotCreate(name="Pista", type="Park", lat=10.0, lng=20.0, photoUrl="data:x"))
    store.add_check_in(spot.id, CheckInCreate(skaterName="Ana", photoUrl="data:y"))

    restored = KeyValueStateRepository(storage).load()

    assert restored == store.snapshot()


def test_unserializable_state_returns_false(storage):
    repo = KeyValueStateRepository(storage)
    broken = StoreState.model_construct(spots=[object()], check_ins=[])

    assert repo.save(broken) is False
    assert storage.get(DEFAULT_STORAGE_NAME) is None
