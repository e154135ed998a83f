# trips/repositories.py
from typing import Any, Mapping, Optional

from django.db import transaction

from common.errors import ConflictError
from common.store import DjangoRepository, InMemoryRepository, apply_changes

from .entities import Trip as TripEntity
from .entities import normalize_trip
from .models import Trip


class TripRepository(DjangoRepository):
    """
    Viajes con sus asignaciones y eventos. Las asignaciones se guardan
    siempre como bloque; los eventos quedan ordenados por fecha.
    """

    def __init__(self):
        super().__init__(Trip, TripEntity)

    def _queryset(self):
        return Trip.objects.prefetch_related("assignments__events")

    def create(self, entity: TripEntity) -> TripEntity:
        entity = normalize_trip(entity)
        with transaction.atomic():
            if entity.id and Trip.objects.filter(pk=entity.id).exists():
                raise ConflictError(f"El viaje {entity.id} ya existe.")
            obj = Trip(**self._fields(entity))
            obj.save(force_insert=True)
            obj.replace_assignments(entity.assignments)
        return self.get(obj.pk)

    def update(self, entity_id: str, changes: Mapping[str, Any], expected_version: Optional[int] = None) -> TripEntity:
        with transaction.atomic():
            obj = self._get_object(entity_id, for_update=True)
            updated = normalize_trip(apply_changes(obj.to_entity(), changes, expected_version))
            for name, value in self._fields(updated).items():
                setattr(obj, name, value)
            obj.save()
            if "assignments" in changes:
                obj.replace_assignments(updated.assignments)
        return self.get(entity_id)


def in_memory_trip_repository(trips=()) -> InMemoryRepository:
    return InMemoryRepository(TripEntity, trips, normalize=normalize_trip)
