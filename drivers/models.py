# drivers/models.py
from django.db import models

from common.models import SoftDeleteModel

from .entities import Driver as DriverEntity


class Driver(SoftDeleteModel):
    # --- Datos Generales ---
    name = models.CharField("Nombre", max_length=120)
    contact = models.CharField("Contacto", max_length=50, blank=True, default="")
    license_number = models.CharField("Licencia", max_length=30, blank=True, default="")
    dui_number = models.CharField("DUI", max_length=20, blank=True, default="")
    truck_plate = models.CharField("Placa de cabezal", max_length=15, blank=True, default="")
    observations = models.TextField("Observaciones", blank=True, default="")

    class Meta:
        verbose_name = "Motorista"
        verbose_name_plural = "Motoristas"
        ordering = ["name"]

    def __str__(self):
        return self.name

    def to_entity(self) -> DriverEntity:
        return DriverEntity(
            id=self.pk,
            name=self.name,
            contact=self.contact,
            license_number=self.license_number,
            dui_number=self.dui_number,
            truck_plate=self.truck_plate,
            observations=self.observations,
            is_deleted=self.deleted,
        )

    @classmethod
    def fields_from_entity(cls, entity: DriverEntity) -> dict:
        return {
            "id": entity.id,
            "name": entity.name,
            "contact": entity.contact or "",
            "license_number": entity.license_number or "",
            "dui_number": entity.dui_number or "",
            "truck_plate": entity.truck_plate or "",
            "observations": entity.observations or "",
            "deleted": entity.is_deleted,
        }
