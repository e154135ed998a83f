# core/store.py
"""Armado del almacén de recursos y de los servicios que lo usan."""
from django.db import transaction

from common.store import DjangoRepository, InMemoryRepository, ResourceStore
from customers.entities import Client as ClientEntity
from customers.models import Client
from customs.entities import DMTI as DMTIEntity
from customs.models import DMTI
from drivers.entities import Driver as DriverEntity
from drivers.models import Driver
from trips.repositories import TripRepository, in_memory_trip_repository
from trips.sequences import DatabaseServiceOrderSequence
from trips.services import TripService
from trucks.entities import Trailer as TrailerEntity
from trucks.entities import Truck as TruckEntity
from trucks.models import Trailer, Truck


def build_django_store() -> ResourceStore:
    return ResourceStore(
        atomic=transaction.atomic,
        trips=TripRepository(),
        drivers=DjangoRepository(Driver, DriverEntity),
        trucks=DjangoRepository(Truck, TruckEntity),
        trailers=DjangoRepository(Trailer, TrailerEntity),
        clients=DjangoRepository(Client, ClientEntity),
        dmtis=DjangoRepository(DMTI, DMTIEntity),
    )


def build_memory_store(trips=(), drivers=(), trucks=(), trailers=(), clients=(), dmtis=()) -> ResourceStore:
    return ResourceStore(
        trips=in_memory_trip_repository(trips),
        drivers=InMemoryRepository(DriverEntity, drivers),
        trucks=InMemoryRepository(TruckEntity, trucks),
        trailers=InMemoryRepository(TrailerEntity, trailers),
        clients=InMemoryRepository(ClientEntity, clients),
        dmtis=InMemoryRepository(DMTIEntity, dmtis),
    )


class StoreMixin:
    """Da a las vistas un almacén y un servicio de viajes por petición."""

    def get_store(self) -> ResourceStore:
        if not hasattr(self, "_store"):
            self._store = build_django_store()
        return self._store

    def get_trip_service(self) -> TripService:
        return TripService(self.get_store(), DatabaseServiceOrderSequence())
