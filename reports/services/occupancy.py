# reports/services/occupancy.py
"""
Ocupación de remolques derivada de los viajes abiertos.

Un remolque está "En uso" si aparece en una asignación de un viaje no
cerrado cuyo último evento no es el Fin de Retorno Vacío. Se recalcula
completo en cada llamada.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from trips.choices import CLOSED_STATUSES, EventType, event_label

logger = logging.getLogger(__name__)

AVAILABLE = "Disponible"
IN_USE = "En uso"
NO_DRIVER = "N/A"
UNSPECIFIED_CARGO = "Carga no especificada"
NO_EVENTS = "Sin eventos"


@dataclass
class TrailerOccupancy:
    status: str = AVAILABLE
    driver_name: Optional[str] = None
    trip_service_order: Optional[str] = None
    display_label: str = AVAILABLE

    @property
    def is_available(self) -> bool:
        return self.status == AVAILABLE


def is_active_trip(trip) -> bool:
    return trip.status not in CLOSED_STATUSES and not trip.is_deleted


def derive_trailer_occupancy(trips, trailers, drivers) -> dict:
    occupancy = {t.id: TrailerOccupancy() for t in trailers if not t.is_deleted}
    driver_names = {d.id: d.name for d in drivers}

    for trip in trips:
        if not is_active_trip(trip):
            continue
        for assignment in trip.assignments:
            if not assignment.trailer_id:
                continue
            last_event = assignment.last_event()
            if last_event is not None and last_event.event_type == EventType.EMPTY_RETURN_END:
                continue

            previous = occupancy.get(assignment.trailer_id)
            if previous is not None and not previous.is_available:
                logger.warning(
                    "Remolque %s ocupado por %s y %s; se toma el último",
                    assignment.trailer_id, previous.trip_service_order, trip.service_order,
                )

            cargo = assignment.cargo_identifier(trip.cargo_type) or UNSPECIFIED_CARGO
            last_label = event_label(last_event.event_type) if last_event is not None else NO_EVENTS
            # Un remolque borrado o desconocido también se registra
            occupancy[assignment.trailer_id] = TrailerOccupancy(
                status=IN_USE,
                driver_name=driver_names.get(assignment.driver_id) or NO_DRIVER,
                trip_service_order=trip.service_order,
                display_label=f"{cargo} / {last_label}",
            )
    return occupancy


def available_trailer_ids(occupancy: dict, service_order: Optional[str] = None) -> list:
    """Remolques que se pueden asignar: libres o ya ocupados por el mismo viaje."""
    return [
        trailer_id
        for trailer_id, info in occupancy.items()
        if info.is_available or (service_order and info.trip_service_order == service_order)
    ]
