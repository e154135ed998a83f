# trips/entities.py
"""
Entidades de viaje: Trip -> Assignment -> eventos.

Los eventos son inmutables y forman una unión etiquetada por `event_type`:
cada variante lleva solo sus propios datos. Los tipos sin datos propios usan
`TripEvent` directamente.
"""
import dataclasses
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from common.entities import ZERO, Recoverable, Versioned, to_decimal
from common.errors import BusinessValidationError

from .choices import CargoType, EventType, TripStatus

BASE_EVENT_FIELDS = ("event_type", "timestamp", "notes")


@dataclass(frozen=True, kw_only=True)
class TripEvent:
    event_type: str
    timestamp: datetime
    notes: str = ""

    def payload(self) -> dict:
        """Datos propios de la variante (sin tipo, fecha ni notas)."""
        return {
            f.name: getattr(self, f.name)
            for f in dataclasses.fields(self)
            if f.name not in BASE_EVENT_FIELDS
        }


@dataclass(frozen=True, kw_only=True)
class MovementEvent(TripEvent):
    """Viático o movimiento pagado a un motorista."""
    event_type: str = field(default=EventType.MOVEMENT, init=False)
    amount: Decimal = ZERO
    assigned_driver_id: Optional[str] = None


@dataclass(frozen=True, kw_only=True)
class RefuelEvent(TripEvent):
    event_type: str = field(default=EventType.REFUEL, init=False)
    gallons: Decimal = ZERO
    price_per_gallon: Decimal = ZERO
    document_number: str = ""

    @property
    def fuel_cost(self) -> Decimal:
        return self.gallons * self.price_per_gallon


@dataclass(frozen=True, kw_only=True)
class UnhookEvent(TripEvent):
    event_type: str = field(default=EventType.UNHOOK, init=False)
    unhook_cost: Decimal = ZERO


@dataclass(frozen=True, kw_only=True)
class StayStartEvent(TripEvent):
    # Tarifa de estadía por día
    event_type: str = field(default=EventType.STAY_START, init=False)
    demurrage_rate: Decimal = ZERO


EVENT_CLASSES = {
    EventType.MOVEMENT: MovementEvent,
    EventType.REFUEL: RefuelEvent,
    EventType.UNHOOK: UnhookEvent,
    EventType.STAY_START: StayStartEvent,
}

DECIMAL_PAYLOAD_FIELDS = {"amount", "gallons", "price_per_gallon", "unhook_cost", "demurrage_rate"}


def make_event(event_type, timestamp: datetime, notes: str = "", **payload) -> TripEvent:
    """
    Construye la variante que corresponde a `event_type`.
    Los valores None se ignoran; un dato que no pertenece a la variante es un error.
    """
    try:
        event_type = EventType(event_type)
    except ValueError:
        raise BusinessValidationError(f"Tipo de evento desconocido: {event_type}") from None

    if timestamp is None:
        raise BusinessValidationError(f"El evento {event_type.label} requiere fecha y hora.")

    cls = EVENT_CLASSES.get(event_type, TripEvent)
    payload = {k: v for k, v in payload.items() if v is not None}
    allowed = {f.name for f in dataclasses.fields(cls) if f.init} - set(BASE_EVENT_FIELDS)
    unknown = set(payload) - allowed
    if unknown:
        raise BusinessValidationError(
            f"Datos no válidos para el evento {event_type.label}: {', '.join(sorted(unknown))}"
        )

    for name in DECIMAL_PAYLOAD_FIELDS & set(payload):
        payload[name] = to_decimal(payload[name], name)

    kwargs = {"timestamp": timestamp, "notes": notes or "", **payload}
    if cls is TripEvent:
        kwargs["event_type"] = event_type
    return cls(**kwargs)


@dataclass
class Assignment:
    """Un contenedor (o lote de carga suelta) con su motorista, cabezal y remolque."""
    id: str = ""
    container_number: str = ""
    merchandise_type: str = ""
    driver_id: str = ""
    truck_id: str = ""
    trailer_id: str = ""
    cost: Decimal = ZERO
    dmti_cost: Optional[Decimal] = None
    events: list = field(default_factory=list)

    def cargo_identifier(self, cargo_type: str) -> str:
        if cargo_type == CargoType.CONTAINER:
            return self.container_number
        return self.merchandise_type

    def events_of(self, event_type: str) -> list:
        return [e for e in self.events if e.event_type == event_type]

    def first_event(self, event_type: str) -> Optional[TripEvent]:
        return next((e for e in self.events if e.event_type == event_type), None)

    def last_event(self) -> Optional[TripEvent]:
        # max() se queda con el primero en caso de empate
        if not self.events:
            return None
        return max(self.events, key=lambda e: e.timestamp)


@dataclass
class Trip(Recoverable, Versioned):
    id: str = ""
    service_order: str = ""
    client_name: str = ""
    status: str = TripStatus.CONFIRMED
    cargo_type: str = CargoType.CONTAINER
    bill_of_lading: str = ""
    shipping_line: str = ""
    origin: str = ""
    destination: str = ""
    weight_kg: Decimal = ZERO

    # Cachés recalculadas en cada guardado
    demurrage: Decimal = ZERO
    unhook_cost: Decimal = ZERO

    invoice_status: Optional[str] = None
    is_deleted: bool = False
    version: int = 1
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    assignments: list = field(default_factory=list)


def sort_events(events) -> list:
    # sorted() es estable: los empates conservan el orden de captura
    return sorted(events, key=lambda e: e.timestamp)


def normalize_assignment(assignment: Assignment, cargo_type: str) -> Assignment:
    """Ordena eventos y limpia el identificador de carga que no aplica."""
    if cargo_type == CargoType.CONTAINER:
        identifiers = {"container_number": assignment.container_number or "", "merchandise_type": ""}
    else:
        identifiers = {"container_number": "", "merchandise_type": assignment.merchandise_type or ""}
    return dataclasses.replace(assignment, events=sort_events(assignment.events), **identifiers)


def normalize_trip(trip: Trip) -> Trip:
    return dataclasses.replace(
        trip,
        assignments=[normalize_assignment(a, trip.cargo_type) for a in trip.assignments],
    )
