# reports/services/payments.py
"""
Pago a motoristas.

- Fletes: asignaciones de viajes completados cuya última actualización cae en
  el periodo. Cuenta viajes distintos.
- Movimientos / viáticos: de cualquier viaje no borrado, sin filtro de fecha
  ni de estatus. Se atribuyen con `MovementAttribution`.
"""
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone as dt_timezone
from decimal import Decimal
from typing import Optional

from common.entities import ZERO
from common.errors import NotFoundError
from trips.choices import EventType, TripStatus


@dataclass(frozen=True)
class DateRange:
    """Periodo inclusivo por días completos en UTC. Cualquiera de los extremos puede faltar."""
    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def start_at(self) -> Optional[datetime]:
        if self.start is None:
            return None
        return datetime.combine(self.start, time.min, tzinfo=dt_timezone.utc)

    @property
    def end_at(self) -> Optional[datetime]:
        if self.end is None:
            return None
        return datetime.combine(self.end, time.max, tzinfo=dt_timezone.utc)

    def contains(self, instant: Optional[datetime]) -> bool:
        if instant is None:
            return self.start is None and self.end is None
        if self.start_at is not None and instant < self.start_at:
            return False
        if self.end_at is not None and instant > self.end_at:
            return False
        return True


ANY_TIME = DateRange()


class MovementAttribution:
    """
    Decide a qué motorista se le paga un movimiento:

    1. `assigned_driver_id`, si es un motorista vigente;
    2. si no, las notas leídas como nombre de motorista (sin mayúsculas ni espacios extremos);
    3. si no, el motorista de la asignación.

    Devuelve None cuando el resultado no es un motorista vigente.
    """

    def __init__(self, drivers):
        drivers = list(drivers)
        self.known_ids = {d.id for d in drivers if not d.is_deleted}
        # El índice de nombres incluye borrados; el resultado igual debe ser vigente
        self.ids_by_name = {(d.name or "").strip().lower(): d.id for d in drivers}

    def resolve(self, event, assignment) -> Optional[str]:
        if event.assigned_driver_id and event.assigned_driver_id in self.known_ids:
            return event.assigned_driver_id
        if event.notes:
            by_name = self.ids_by_name.get(event.notes.strip().lower())
            if by_name in self.known_ids:
                return by_name
        if assignment.driver_id in self.known_ids:
            return assignment.driver_id
        return None


def paid_movements(trip):
    """(asignación, evento) de cada movimiento con monto distinto de cero."""
    for assignment in trip.assignments:
        for event in assignment.events_of(EventType.MOVEMENT):
            if event.amount:
                yield assignment, event


def completed_in_range(trip, date_range: DateRange) -> bool:
    return trip.status == TripStatus.COMPLETED and not trip.is_deleted and date_range.contains(trip.updated_at)


@dataclass
class DriverPaymentRow:
    driver_id: str
    name: str
    trip_count: int = 0
    total_payment: Decimal = ZERO
    trip_ids: set = field(default_factory=set, repr=False)


def driver_payment_summary(trips, drivers, date_range: Optional[DateRange] = None, driver_id: Optional[str] = None) -> list:
    date_range = date_range or ANY_TIME
    drivers = list(drivers)
    resolver = MovementAttribution(drivers)
    rows = {d.id: DriverPaymentRow(driver_id=d.id, name=d.name) for d in drivers if not d.is_deleted}

    for trip in trips:
        if trip.is_deleted:
            continue

        if completed_in_range(trip, date_range):
            for assignment in trip.assignments:
                row = rows.get(assignment.driver_id)
                if row is not None:
                    row.total_payment += assignment.cost or ZERO
                    row.trip_ids.add(trip.id)

        for assignment, event in paid_movements(trip):
            target = resolver.resolve(event, assignment)
            if target is not None:
                rows[target].total_payment += event.amount

    result = []
    for row in rows.values():
        row.trip_count = len(row.trip_ids)
        if driver_id and row.driver_id != driver_id:
            continue
        if row.trip_count == 0 and row.total_payment == 0:
            continue
        result.append(row)
    result.sort(key=lambda r: r.total_payment, reverse=True)
    return result


@dataclass
class CompletedAssignment:
    trip: object
    assignment: object


@dataclass
class DriverMovement:
    event: object
    trip_id: str
    trip_service_order: str


@dataclass
class DriverPaymentDetail:
    driver: object
    completed_assignments: list
    movements: list

    @property
    def assignments_total(self) -> Decimal:
        return sum((c.assignment.cost or ZERO for c in self.completed_assignments), ZERO)

    @property
    def movements_total(self) -> Decimal:
        return sum((m.event.amount for m in self.movements), ZERO)

    @property
    def total(self) -> Decimal:
        return self.assignments_total + self.movements_total


def driver_payment_detail(trips, drivers, driver_id: str, date_range: Optional[DateRange] = None) -> DriverPaymentDetail:
    date_range = date_range or ANY_TIME
    drivers = list(drivers)
    driver = next((d for d in drivers if d.id == driver_id), None)
    if driver is None:
        raise NotFoundError(f"Motorista {driver_id} no existe.")

    trips = [t for t in trips if not t.is_deleted]
    resolver = MovementAttribution(drivers)

    completed = [
        CompletedAssignment(trip=trip, assignment=assignment)
        for trip in trips
        if completed_in_range(trip, date_range)
        for assignment in trip.assignments
        if assignment.driver_id == driver_id
    ]
    movements = [
        DriverMovement(event=event, trip_id=trip.id, trip_service_order=trip.service_order)
        for trip in trips
        for assignment, event in paid_movements(trip)
        if resolver.resolve(event, assignment) == driver_id
    ]
    movements.sort(key=lambda m: m.event.timestamp, reverse=True)
    return DriverPaymentDetail(driver=driver, completed_assignments=completed, movements=movements)
