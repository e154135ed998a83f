# reports/services/dashboard.py
"""Indicadores del tablero y alertas de estadías."""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from django.conf import settings
from django.utils import timezone

from trips.choices import EventType, TripStatus

NO_DATA = "N/A"


@dataclass
class ActiveTrip:
    trip: object
    driver_name: str = NO_DATA
    truck_plate: str = NO_DATA


@dataclass
class DashboardSummary:
    weekly_trips: int = 0
    monthly_trips: int = 0
    yearly_trips: int = 0
    active_trips: list = field(default_factory=list)
    # [(fecha local, viajes creados ese día)] de los últimos 7 días, del más antiguo al más reciente
    last_7_days: list = field(default_factory=list)


def _local(dt: datetime) -> datetime:
    return timezone.localtime(dt) if timezone.is_aware(dt) else dt


def dashboard_summary(trips, now: Optional[datetime] = None, drivers=(), trucks=()) -> DashboardSummary:
    now = _local(now or timezone.now())
    one_week_ago = now - timedelta(days=7)
    start_of_month = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    start_of_year = start_of_month.replace(month=1)

    trips = [t for t in trips if not t.is_deleted]
    created = [_local(t.created_at) for t in trips if t.created_at is not None]

    days = [(now - timedelta(days=i)).date() for i in range(6, -1, -1)]
    per_day = {day: 0 for day in days}
    for dt in created:
        if dt.date() in per_day:
            per_day[dt.date()] += 1

    driver_names = {d.id: d.name for d in drivers}
    truck_plates = {t.id: t.plate for t in trucks}
    active = []
    for trip in trips:
        if trip.status != TripStatus.IN_PROGRESS:
            continue
        first = trip.assignments[0] if trip.assignments else None
        active.append(
            ActiveTrip(
                trip=trip,
                driver_name=(driver_names.get(first.driver_id) if first else None) or NO_DATA,
                truck_plate=(truck_plates.get(first.truck_id) if first else None) or NO_DATA,
            )
        )

    return DashboardSummary(
        weekly_trips=sum(1 for dt in created if dt >= one_week_ago),
        monthly_trips=sum(1 for dt in created if dt >= start_of_month),
        yearly_trips=sum(1 for dt in created if dt >= start_of_year),
        active_trips=active,
        last_7_days=[(day, per_day[day]) for day in days],
    )


def demurrage_alerts(trips, now: Optional[datetime] = None, threshold: Optional[timedelta] = None) -> set:
    """
    Viajes en progreso con un contenedor que llegó a destino hace más del
    umbral y todavía no tiene Inicio de Estadías.
    """
    now = now or timezone.now()
    if threshold is None:
        threshold = timedelta(hours=getattr(settings, "DEMURRAGE_ALERT_HOURS", 24))

    alerts = set()
    for trip in trips:
        if trip.status != TripStatus.IN_PROGRESS or trip.is_deleted:
            continue
        for assignment in trip.assignments:
            arrival = assignment.first_event(EventType.ARRIVAL_DESTINATION)
            if arrival is None or assignment.first_event(EventType.STAY_START) is not None:
                continue
            if now > arrival.timestamp + threshold:
                alerts.add(trip.id)
    return alerts
