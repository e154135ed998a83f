# trips/services.py
"""
Flujo de captura de viajes: alta (simple o con DMTI), edición, facturación,
borrado lógico y recuperación. Todas las validaciones ocurren antes de
escribir; si algo falla no queda nada a medias.
"""
import dataclasses
import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from django.utils import timezone

from common.entities import EARLIEST, ZERO, new_id
from common.errors import BusinessValidationError

from customs.services import DMTIRequest, register_dmti

from .charges import compute_demurrage, compute_unhook_cost, has_empty_return_end
from .choices import CargoType, InvoiceStatus, ProcessType, TripStatus
from .entities import Trip, normalize_trip

logger = logging.getLogger(__name__)

COMPLETION_GATE_MESSAGE = "Confirme el Fin de Retorno Vacío para poder completar el viaje."


class TripService:
    def __init__(self, store, sequence, clock: Callable[[], datetime] = timezone.now):
        self.store = store
        self.sequence = sequence
        self.clock = clock

    # ------------------------------------------------------------------
    # Validación y normalización
    # ------------------------------------------------------------------
    def validate(self, trip: Trip):
        if not trip.assignments:
            raise BusinessValidationError("El viaje debe tener al menos una asignación.")
        for assignment in trip.assignments:
            if assignment.cost is not None and assignment.cost < 0:
                raise BusinessValidationError("El costo de una asignación no puede ser negativo.")
        if trip.status == TripStatus.COMPLETED and not has_empty_return_end(trip.assignments):
            raise BusinessValidationError(COMPLETION_GATE_MESSAGE)

    def validate_dmti(self, trip: Trip, dmti_requests: Optional[Sequence[DMTIRequest]]):
        if not (trip.client_name or "").strip() or not trip.assignments:
            raise BusinessValidationError(
                "Para un proceso DMTI, el Cliente es obligatorio y debe haber al menos un contenedor."
            )
        requests = list(dmti_requests or [])
        if len(requests) != len(trip.assignments):
            raise BusinessValidationError("Cada contenedor de un proceso DMTI necesita sus datos de DMTI.")
        for assignment, request in zip(trip.assignments, requests):
            if not (assignment.container_number or "").strip() or not (request.starting_customs or "").strip():
                raise BusinessValidationError(
                    "Para cada contenedor en un proceso DMTI, el número de contenedor "
                    "y la Aduana de Inicio son obligatorios."
                )

    def client_by_name(self, client_name: str):
        return next(
            (c for c in self.store.clients.list() if c.razon_social == client_name and not c.is_deleted),
            None,
        )

    def prepare(self, trip: Trip, current: Optional[Trip] = None) -> Trip:
        """
        Limpia identificadores, ordena eventos y recalcula recargos.
        El estado de facturación nunca viene del cliente: sale del viaje guardado.
        """
        trip = normalize_trip(trip)
        assignments = [
            a if a.id else dataclasses.replace(a, id=new_id())
            for a in trip.assignments
        ]
        invoice_status = None
        if trip.status == TripStatus.COMPLETED:
            invoice_status = (current.invoice_status if current else None) or InvoiceStatus.ACTIVE
        return dataclasses.replace(
            trip,
            assignments=assignments,
            demurrage=compute_demurrage(assignments),
            unhook_cost=compute_unhook_cost(assignments),
            invoice_status=invoice_status,
        )

    # ------------------------------------------------------------------
    # Operaciones
    # ------------------------------------------------------------------
    def create_trip(
        self,
        trip: Trip,
        process_type: str = ProcessType.TRIP,
        dmti_requests: Optional[Sequence[DMTIRequest]] = None,
    ) -> Trip:
        is_dmti = process_type == ProcessType.DMTI
        if is_dmti:
            trip = dataclasses.replace(trip, cargo_type=CargoType.CONTAINER)
            self.validate_dmti(trip, dmti_requests)
        self.validate(trip)

        if is_dmti:
            client = self.client_by_name(trip.client_name)
            default_dmti = (client.dmti if client else None) or ZERO
            trip = dataclasses.replace(
                trip,
                assignments=[
                    a if a.dmti_cost is not None else dataclasses.replace(a, dmti_cost=default_dmti)
                    for a in trip.assignments
                ],
            )

        prepared = self.prepare(trip)
        now = self.clock()
        with self.store.atomic():
            if is_dmti:
                for assignment, request in zip(prepared.assignments, dmti_requests):
                    register_dmti(
                        self.store.dmtis,
                        prepared.client_name,
                        assignment.container_number,
                        request,
                        clock=self.clock,
                    )
            created = self.store.trips.create(
                dataclasses.replace(
                    prepared,
                    id="",
                    service_order=self.sequence.next(),
                    is_deleted=False,
                    version=1,
                    created_at=now,
                    updated_at=now,
                )
            )
        logger.info("Viaje %s creado (%s)", created.service_order, process_type)
        return created

    def update_trip(self, trip_id: str, trip: Trip, expected_version: Optional[int] = None) -> Trip:
        current = self.store.trips.get(trip_id)
        if current.status == TripStatus.COMPLETED:
            raise BusinessValidationError("El viaje está completado y ya no se puede editar.")
        self.validate(trip)

        prepared = self.prepare(trip, current)
        changes = {
            f.name: getattr(prepared, f.name)
            for f in dataclasses.fields(Trip)
            if f.name not in ("id", "service_order", "is_deleted", "version", "created_at")
        }
        changes["updated_at"] = self.clock()
        with self.store.atomic():
            updated = self.store.trips.update(trip_id, changes, expected_version=expected_version)
        logger.info("Viaje %s actualizado (v%s)", updated.service_order, updated.version)
        return updated

    def mark_invoiced(self, trip_id: str) -> Trip:
        current = self.store.trips.get(trip_id)
        if current.status != TripStatus.COMPLETED:
            raise BusinessValidationError("Solo se pueden facturar viajes completados.")
        if current.invoice_status == InvoiceStatus.INVOICED:
            return current
        # No toca updated_at: los reportes por periodo usan esa fecha
        updated = self.store.trips.update(trip_id, {"invoice_status": InvoiceStatus.INVOICED})
        logger.info("Viaje %s marcado como facturado", updated.service_order)
        return updated

    def delete_trip(self, trip_id: str) -> None:
        current = self.store.trips.get(trip_id)
        if current.status == TripStatus.COMPLETED:
            raise BusinessValidationError("No se puede borrar un viaje completado.")
        self.store.trips.soft_delete(trip_id)
        logger.info("Viaje %s borrado", current.service_order)

    def recover_trip(self, trip_id: str) -> None:
        current = self.store.trips.get(trip_id)
        self.store.trips.recover(trip_id)
        logger.info("Viaje %s recuperado", current.service_order)


def filter_trips(trips, term: str = "", show_deleted: bool = False) -> list:
    """
    Búsqueda de la bandeja de viajes. `show_deleted` muestra solo los
    borrados; si no, solo los vigentes. Más recientes primero.
    """
    base = [t for t in trips if t.is_deleted == show_deleted]
    base.sort(key=lambda t: t.created_at or EARLIEST, reverse=True)

    term = (term or "").strip().lower()
    if not term:
        return base

    def matches(trip) -> bool:
        if any(
            term in (value or "").lower()
            for value in (trip.service_order, trip.client_name, trip.bill_of_lading)
        ):
            return True
        return any(
            term in (a.container_number or "").lower() or term in (a.merchandise_type or "").lower()
            for a in trip.assignments
        )

    return [t for t in base if matches(t)]
