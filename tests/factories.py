"""Constructores de entidades para las pruebas."""
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from trips.choices import CargoType, EventType, TripStatus
from trips.entities import Assignment, Trip, make_event

T0 = datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc)


def at(days=0, hours=0, minutes=0, ms=0) -> datetime:
    return T0 + timedelta(days=days, hours=hours, minutes=minutes, milliseconds=ms)


def ev(event_type, when, notes="", **payload):
    return make_event(event_type, when, notes, **payload)


def assignment(id="", driver_id="d1", trailer_id="", cost="100", events=(), **kwargs):
    return Assignment(
        id=id,
        driver_id=driver_id,
        trailer_id=trailer_id,
        cost=Decimal(cost),
        events=list(events),
        **kwargs,
    )


def trip(id="", status=TripStatus.CONFIRMED, assignments=None, **kwargs):
    kwargs.setdefault("cargo_type", CargoType.CONTAINER)
    kwargs.setdefault("created_at", T0)
    kwargs.setdefault("updated_at", T0)
    return Trip(
        id=id,
        status=status,
        assignments=list(assignments if assignments is not None else [assignment()]),
        **kwargs,
    )


def closed_assignment(**kwargs):
    """Asignación con Fin de Retorno Vacío (permite completar el viaje)."""
    return assignment(events=[ev(EventType.ASSIGNED, at()), ev(EventType.EMPTY_RETURN_END, at(days=1))], **kwargs)
