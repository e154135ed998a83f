# trips/models.py
from django.core.validators import MinValueValidator
from django.db import models

from common.entities import ZERO, new_id
from common.models import SoftDeleteModel

from .choices import CargoType, EventType, InvoiceStatus, TripStatus
from .entities import Assignment as AssignmentEntity
from .entities import Trip as TripEntity
from .entities import make_event

MONEY = {"max_digits": 14, "decimal_places": 2}


class Trip(SoftDeleteModel):
    """
    Un servicio de transporte para un cliente. Agrupa uno o más contenedores
    (asignaciones) y guarda en caché los recargos calculados de sus eventos.
    """

    service_order = models.CharField("Orden de servicio", max_length=30, unique=True)
    client_name = models.CharField("Cliente", max_length=200, blank=True, default="")
    status = models.CharField(
        "Estatus", max_length=20, choices=TripStatus.choices, default=TripStatus.CONFIRMED
    )
    cargo_type = models.CharField(
        "Tipo de carga", max_length=20, choices=CargoType.choices, default=CargoType.CONTAINER
    )

    # Datos del embarque
    bill_of_lading = models.CharField("BL", max_length=60, blank=True, default="")
    shipping_line = models.CharField("Naviera", max_length=120, blank=True, default="")
    origin = models.CharField("Origen", max_length=200, blank=True, default="")
    destination = models.CharField("Destino", max_length=200, blank=True, default="")
    weight_kg = models.DecimalField("Peso (kg)", max_digits=12, decimal_places=2, default=ZERO)

    # Cachés de recargos
    demurrage = models.DecimalField("Estadías", default=ZERO, **MONEY)
    unhook_cost = models.DecimalField("Desenganche", default=ZERO, **MONEY)

    invoice_status = models.CharField(
        "Facturación", max_length=10, choices=InvoiceStatus.choices, blank=True, null=True
    )

    # Concurrencia optimista
    version = models.PositiveIntegerField(default=1)

    created_at = models.DateTimeField("Creado", blank=True, null=True, db_index=True)
    updated_at = models.DateTimeField("Actualizado", blank=True, null=True, db_index=True)

    class Meta:
        verbose_name = "Viaje"
        verbose_name_plural = "Viajes"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.service_order} | {self.client_name}"

    def to_entity(self) -> TripEntity:
        return TripEntity(
            id=self.pk,
            service_order=self.service_order,
            client_name=self.client_name,
            status=self.status,
            cargo_type=self.cargo_type,
            bill_of_lading=self.bill_of_lading,
            shipping_line=self.shipping_line,
            origin=self.origin,
            destination=self.destination,
            weight_kg=self.weight_kg,
            demurrage=self.demurrage,
            unhook_cost=self.unhook_cost,
            invoice_status=self.invoice_status or None,
            is_deleted=self.deleted,
            version=self.version,
            created_at=self.created_at,
            updated_at=self.updated_at,
            assignments=[a.to_entity() for a in self.assignments.all()],
        )

    @classmethod
    def fields_from_entity(cls, entity: TripEntity) -> dict:
        """Solo los campos propios del viaje; las asignaciones van por `replace_assignments`."""
        return {
            "id": entity.id,
            "service_order": entity.service_order,
            "client_name": entity.client_name or "",
            "status": entity.status,
            "cargo_type": entity.cargo_type,
            "bill_of_lading": entity.bill_of_lading or "",
            "shipping_line": entity.shipping_line or "",
            "origin": entity.origin or "",
            "destination": entity.destination or "",
            "weight_kg": entity.weight_kg or ZERO,
            "demurrage": entity.demurrage or ZERO,
            "unhook_cost": entity.unhook_cost or ZERO,
            "invoice_status": entity.invoice_status or None,
            "version": entity.version,
            "deleted": entity.is_deleted,
            "created_at": entity.created_at,
            "updated_at": entity.updated_at,
        }

    def replace_assignments(self, assignments):
        """Sustituye todas las asignaciones (y sus eventos) del viaje."""
        self.assignments.all().delete()
        for position, entity in enumerate(assignments):
            assignment = Assignment.objects.create(
                trip=self, position=position, **Assignment.fields_from_entity(entity)
            )
            TripEvent.objects.bulk_create(
                [
                    TripEvent(assignment=assignment, position=i, **TripEvent.fields_from_event(event))
                    for i, event in enumerate(entity.events)
                ]
            )


class Assignment(models.Model):
    id = models.CharField(primary_key=True, max_length=36, default=new_id, editable=False)
    trip = models.ForeignKey(Trip, on_delete=models.CASCADE, related_name="assignments")
    position = models.PositiveIntegerField(default=0)

    container_number = models.CharField("Contenedor", max_length=30, blank=True, default="")
    merchandise_type = models.CharField("Mercancía", max_length=200, blank=True, default="")

    # Referencias sin llave foránea: un id huérfano se muestra como "N/A"
    driver_id = models.CharField("Motorista", max_length=36, blank=True, default="")
    truck_id = models.CharField("Cabezal", max_length=36, blank=True, default="")
    trailer_id = models.CharField("Remolque", max_length=36, blank=True, default="")

    cost = models.DecimalField("Flete", default=ZERO, validators=[MinValueValidator(0)], **MONEY)
    dmti_cost = models.DecimalField("Servicio DMTI", blank=True, null=True, **MONEY)

    class Meta:
        verbose_name = "Asignación"
        verbose_name_plural = "Asignaciones"
        ordering = ["position"]

    def __str__(self):
        return self.container_number or self.merchandise_type or self.pk

    def to_entity(self) -> AssignmentEntity:
        return AssignmentEntity(
            id=self.pk,
            container_number=self.container_number,
            merchandise_type=self.merchandise_type,
            driver_id=self.driver_id,
            truck_id=self.truck_id,
            trailer_id=self.trailer_id,
            cost=self.cost,
            dmti_cost=self.dmti_cost,
            events=[e.to_entity() for e in self.events.all()],
        )

    @classmethod
    def fields_from_entity(cls, entity: AssignmentEntity) -> dict:
        fields = {
            "container_number": entity.container_number or "",
            "merchandise_type": entity.merchandise_type or "",
            "driver_id": entity.driver_id or "",
            "truck_id": entity.truck_id or "",
            "trailer_id": entity.trailer_id or "",
            "cost": entity.cost or ZERO,
            "dmti_cost": entity.dmti_cost,
        }
        if entity.id:
            fields["id"] = entity.id
        return fields


class TripEvent(models.Model):
    PAYLOAD_FIELDS = (
        "amount",
        "assigned_driver_id",
        "gallons",
        "price_per_gallon",
        "document_number",
        "unhook_cost",
        "demurrage_rate",
    )

    assignment = models.ForeignKey(Assignment, on_delete=models.CASCADE, related_name="events")
    position = models.PositiveIntegerField(default=0)
    event_type = models.CharField("Evento", max_length=30, choices=EventType.choices)
    timestamp = models.DateTimeField("Fecha y hora")
    notes = models.TextField("Notas", blank=True, default="")

    # Movimiento
    amount = models.DecimalField(blank=True, null=True, **MONEY)
    assigned_driver_id = models.CharField(max_length=36, blank=True, null=True)
    # Repostaje
    gallons = models.DecimalField(max_digits=10, decimal_places=3, blank=True, null=True)
    price_per_gallon = models.DecimalField(max_digits=10, decimal_places=4, blank=True, null=True)
    document_number = models.CharField(max_length=60, blank=True, null=True)
    # Desenganche
    unhook_cost = models.DecimalField(blank=True, null=True, **MONEY)
    # Inicio de estadías
    demurrage_rate = models.DecimalField(blank=True, null=True, **MONEY)

    class Meta:
        verbose_name = "Evento"
        verbose_name_plural = "Eventos"
        ordering = ["timestamp", "position"]

    def __str__(self):
        return f"{self.get_event_type_display()} {self.timestamp:%d/%m/%Y %H:%M}"

    def to_entity(self):
        payload = {name: getattr(self, name) for name in self.PAYLOAD_FIELDS}
        return make_event(self.event_type, self.timestamp, self.notes, **payload)

    @classmethod
    def fields_from_event(cls, event) -> dict:
        return {
            "event_type": event.event_type,
            "timestamp": event.timestamp,
            "notes": event.notes or "",
            **event.payload(),
        }


class SequenceCounter(models.Model):
    """Contador persistente para folios (orden de servicio)."""
    name = models.CharField(primary_key=True, max_length=40)
    value = models.PositiveBigIntegerField(default=0)

    class Meta:
        verbose_name = "Contador"
        verbose_name_plural = "Contadores"

    def __str__(self):
        return f"{self.name}={self.value}"
