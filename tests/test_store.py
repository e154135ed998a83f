import pytest

from common.errors import BusinessValidationError, ConflictError, NotFoundError
from common.store import InMemoryRepository, ResourceStore
from core.store import build_memory_store
from customs.entities import DMTI
from drivers.entities import Driver
from trips.choices import EventType

from tests.factories import assignment, at, ev, trip


def test_create_assigns_identity():
    repository = InMemoryRepository(Driver)
    created = repository.create(Driver(name="Pedro"))
    assert created.id
    assert repository.get(created.id).name == "Pedro"


def test_create_rejects_duplicate_ids():
    repository = InMemoryRepository(Driver, [Driver(id="d1")])
    with pytest.raises(ConflictError):
        repository.create(Driver(id="d1"))


def test_reads_return_copies():
    repository = InMemoryRepository(Driver, [Driver(id="d1", name="Juan")])
    fetched = repository.get("d1")
    fetched.name = "Otro"
    repository.list()[0].name = "Otro"
    assert repository.get("d1").name == "Juan"


def test_get_and_update_unknown_id():
    repository = InMemoryRepository(Driver)
    with pytest.raises(NotFoundError):
        repository.get("nope")
    with pytest.raises(NotFoundError):
        repository.update("nope", {"name": "x"})


def test_update_rejects_identity_change_and_unknown_fields():
    repository = InMemoryRepository(Driver, [Driver(id="d1")])
    with pytest.raises(BusinessValidationError):
        repository.update("d1", {"id": "d2"})
    with pytest.raises(BusinessValidationError):
        repository.update("d1", {"color": "rojo"})


def test_versioned_entities_bump_and_detect_conflicts():
    store = build_memory_store(trips=[trip(id="t1")])
    updated = store.trips.update("t1", {"client_name": "Alfa"}, expected_version=1)
    assert updated.version == 2

    with pytest.raises(ConflictError):
        store.trips.update("t1", {"client_name": "Beta"}, expected_version=1)
    assert store.trips.get("t1").client_name == "Alfa"

    # Sin versión esperada se acepta y también incrementa
    assert store.trips.update("t1", {"client_name": "Gamma"}).version == 3


def test_trip_repository_sorts_events():
    a = assignment(events=[ev(EventType.STAY_END, at(hours=4)), ev(EventType.STAY_START, at(hours=1))])
    store = build_memory_store(trips=[trip(id="t1", assignments=[a])])
    events = store.trips.get("t1").assignments[0].events
    assert [e.event_type for e in events] == [EventType.STAY_START, EventType.STAY_END]


def test_soft_delete_and_recover():
    repository = InMemoryRepository(Driver, [Driver(id="d1")])
    repository.soft_delete("d1")
    assert repository.get("d1").is_deleted
    repository.recover("d1")
    assert not repository.get("d1").is_deleted


def test_dmti_delete_is_physical():
    repository = InMemoryRepository(DMTI, [DMTI(id="2025X00428")])
    repository.soft_delete("2025X00428")
    with pytest.raises(NotFoundError):
        repository.get("2025X00428")


def test_soft_delete_of_missing_id_is_ignored():
    repository = InMemoryRepository(Driver)
    repository.soft_delete("nope")
    repository.recover("nope")
    assert repository.list() == []


def test_store_requires_every_collection():
    with pytest.raises(ValueError):
        ResourceStore(drivers=InMemoryRepository(Driver))


def test_store_collection_by_name():
    store = build_memory_store()
    assert store.collection("drivers") is store.drivers
    with pytest.raises(NotFoundError):
        store.collection("warehouses")
