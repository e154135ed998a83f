# trucks/models.py
from django.db import models

from common.models import SoftDeleteModel

from .choices import VehicleStatus
from .entities import Trailer as TrailerEntity
from .entities import Truck as TruckEntity


class Truck(SoftDeleteModel):
    # ===== Datos generales =====
    plate = models.CharField("Placas", max_length=15)
    status = models.CharField("Estado", max_length=20, choices=VehicleStatus.choices, default=VehicleStatus.ACTIVE)

    # ===== Mantenimiento =====
    last_maintenance_date = models.DateField("Último mantenimiento", blank=True, null=True)

    class Meta:
        verbose_name = "Cabezal"
        verbose_name_plural = "Cabezales"
        ordering = ["plate"]

    def __str__(self):
        return self.plate

    def to_entity(self) -> TruckEntity:
        return TruckEntity(
            id=self.pk,
            plate=self.plate,
            status=self.status,
            last_maintenance_date=self.last_maintenance_date,
            is_deleted=self.deleted,
        )

    @classmethod
    def fields_from_entity(cls, entity: TruckEntity) -> dict:
        return {
            "id": entity.id,
            "plate": entity.plate,
            "status": entity.status or VehicleStatus.ACTIVE,
            "last_maintenance_date": entity.last_maintenance_date,
            "deleted": entity.is_deleted,
        }


class Trailer(SoftDeleteModel):
    # ===== Datos generales =====
    plate = models.CharField("Placas", max_length=15)
    trailer_type = models.CharField("Tipo de remolque", max_length=50, blank=True, default="")
    trailer_size = models.CharField("Tamaño", max_length=20, blank=True, default="")

    class Meta:
        verbose_name = "Remolque"
        verbose_name_plural = "Remolques"
        ordering = ["plate"]

    def __str__(self):
        return self.plate

    def to_entity(self) -> TrailerEntity:
        return TrailerEntity(
            id=self.pk,
            plate=self.plate,
            trailer_type=self.trailer_type,
            trailer_size=self.trailer_size,
            is_deleted=self.deleted,
        )

    @classmethod
    def fields_from_entity(cls, entity: TrailerEntity) -> dict:
        return {
            "id": entity.id,
            "plate": entity.plate,
            "trailer_type": entity.trailer_type or "",
            "trailer_size": entity.trailer_size or "",
            "deleted": entity.is_deleted,
        }
