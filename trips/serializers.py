# trips/serializers.py
"""Conversión entre entidades de viaje y los diccionarios JSON de las vistas."""
import dataclasses
from datetime import datetime

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from common.entities import to_decimal
from common.errors import BusinessValidationError

from customs.choices import DMTIUser
from customs.services import DMTIRequest

from .choices import CargoType, EventType, TripStatus
from .entities import Assignment, Trip, make_event

TRIP_TEXT_FIELDS = ("client_name", "bill_of_lading", "shipping_line", "origin", "destination")


def parse_dt(value):
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        try:
            dt = parse_datetime(str(value))
        except ValueError:
            dt = None
        if dt is None:
            raise BusinessValidationError(f"Fecha/hora inválida: {value}")
    if timezone.is_naive(dt):
        dt = timezone.make_aware(dt, timezone.get_current_timezone())
    return dt


def _choice(value, choices, default, label):
    if value in (None, ""):
        return default
    if value not in choices.values:
        raise BusinessValidationError(f"{label} inválido: {value}")
    return choices(value)


def event_to_dict(event) -> dict:
    data = {
        "event_type": event.event_type,
        "label": EventType(event.event_type).label,
        "timestamp": event.timestamp,
        "notes": event.notes,
        **event.payload(),
    }
    if event.event_type == EventType.REFUEL:
        data["fuel_cost"] = event.fuel_cost
    return data


def assignment_to_dict(assignment: Assignment) -> dict:
    data = dataclasses.asdict(assignment)
    data["events"] = [event_to_dict(e) for e in assignment.events]
    return data


def trip_to_dict(trip: Trip) -> dict:
    data = {f.name: getattr(trip, f.name) for f in dataclasses.fields(Trip) if f.name != "assignments"}
    data["status_display"] = TripStatus(trip.status).label
    data["assignments"] = [assignment_to_dict(a) for a in trip.assignments]
    return data


def event_from_dict(data: dict):
    data = dict(data)
    data.pop("label", None)
    data.pop("fuel_cost", None)
    event_type = data.pop("event_type", None) or data.pop("type", None)
    timestamp = parse_dt(data.pop("timestamp", None))
    notes = data.pop("notes", "") or ""
    return make_event(event_type, timestamp, notes, **data)


def assignment_from_dict(data: dict) -> Assignment:
    dmti_cost = data.get("dmti_cost")
    return Assignment(
        id=data.get("id") or "",
        container_number=(data.get("container_number") or "").strip(),
        merchandise_type=(data.get("merchandise_type") or "").strip(),
        driver_id=data.get("driver_id") or "",
        truck_id=data.get("truck_id") or "",
        trailer_id=data.get("trailer_id") or "",
        cost=to_decimal(data.get("cost"), "cost"),
        dmti_cost=None if dmti_cost in (None, "") else to_decimal(dmti_cost, "dmti_cost"),
        events=[event_from_dict(e) for e in data.get("events") or []],
    )


def trip_from_dict(data: dict) -> Trip:
    """Arma un viaje desde el JSON capturado. Ignora campos que calcula el sistema."""
    fields = {name: (data.get(name) or "").strip() for name in TRIP_TEXT_FIELDS}
    return Trip(
        status=_choice(data.get("status"), TripStatus, TripStatus.CONFIRMED, "Estatus"),
        cargo_type=_choice(data.get("cargo_type"), CargoType, CargoType.CONTAINER, "Tipo de carga"),
        weight_kg=to_decimal(data.get("weight_kg"), "weight_kg"),
        assignments=[assignment_from_dict(a) for a in data.get("assignments") or []],
        **fields,
    )


def dmti_requests_from_dict(data: dict) -> list:
    requests = []
    for assignment in data.get("assignments") or []:
        dmti = assignment.get("dmti") or {}
        registration_date = dmti.get("registration_date")
        if registration_date and not hasattr(registration_date, "year"):
            try:
                registration_date = parse_date(str(registration_date))
            except ValueError:
                registration_date = None
            if registration_date is None:
                raise BusinessValidationError(f"Fecha de registro DMTI inválida: {dmti.get('registration_date')}")
        requests.append(
            DMTIRequest(
                starting_customs=(dmti.get("starting_customs") or "").strip(),
                registration_date=registration_date or None,
                user=_choice(dmti.get("user"), DMTIUser, DMTIUser.TRANSPORTE, "Usuario DMTI"),
            )
        )
    return requests
