from decimal import Decimal

import pytest

from core.store import build_memory_store
from customers.entities import Client
from drivers.entities import Driver
from trips.sequences import InMemoryServiceOrderSequence
from trips.services import TripService
from trucks.entities import Trailer, Truck

from tests.factories import T0


@pytest.fixture
def drivers():
    return [
        Driver(id="d1", name="Juan Pérez"),
        Driver(id="d2", name="Carlos Gomez"),
        Driver(id="d3", name="Luis Martinez", is_deleted=True),
    ]


@pytest.fixture
def trailers():
    return [
        Trailer(id="r1", plate="RA 1111", trailer_type="Contenedor", trailer_size="40ft"),
        Trailer(id="r2", plate="RB 2222", trailer_type="Contenedor", trailer_size="20ft"),
        Trailer(id="r3", plate="RC 3333", trailer_type="Plataforma", is_deleted=True),
    ]


@pytest.fixture
def trucks():
    return [Truck(id="k1", plate="AAB 1234"), Truck(id="k2", plate="BBC 5678")]


@pytest.fixture
def clients():
    return [
        Client(id="c1", razon_social="Importadora del Atlántico S.A.", flete=Decimal("600"), dmti=Decimal("75")),
        Client(id="c2", razon_social="Textiles de Centroamérica"),
    ]


@pytest.fixture
def store(drivers, trucks, trailers, clients):
    return build_memory_store(drivers=drivers, trucks=trucks, trailers=trailers, clients=clients)


@pytest.fixture
def clock():
    return lambda: T0


@pytest.fixture
def service(store, clock):
    return TripService(store, InMemoryServiceOrderSequence(clock=clock), clock=clock)
