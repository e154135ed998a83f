# customers/models.py
from django.core.validators import MinValueValidator
from django.db import models

from common.models import SoftDeleteModel

from .choices import CompanySize
from .entities import Client as ClientEntity


class Client(SoftDeleteModel):
    # --- Datos Generales ---
    razon_social = models.CharField("Razón social", max_length=200)
    nit = models.CharField("NIT", max_length=20, blank=True, default="")
    giro_comercial = models.CharField("Giro comercial", max_length=150, blank=True, default="")
    company_size = models.CharField(
        "Tamaño de empresa", max_length=10, choices=CompanySize.choices, default=CompanySize.SMALL
    )

    # --- Contacto ---
    phone = models.CharField("Teléfono", max_length=30, blank=True, default="")
    email = models.EmailField("Correo", blank=True, default="")
    reference_person = models.CharField("Persona de referencia", max_length=120, blank=True, default="")

    # --- Tarifas ---
    flete = models.DecimalField(
        "Flete", max_digits=12, decimal_places=2, blank=True, null=True, validators=[MinValueValidator(0)]
    )
    dmti = models.DecimalField(
        "Servicio DMTI", max_digits=12, decimal_places=2, blank=True, null=True, validators=[MinValueValidator(0)]
    )

    class Meta:
        verbose_name = "Cliente"
        verbose_name_plural = "Clientes"
        ordering = ["razon_social"]

    def __str__(self):
        return self.razon_social

    def to_entity(self) -> ClientEntity:
        return ClientEntity(
            id=self.pk,
            razon_social=self.razon_social,
            nit=self.nit,
            giro_comercial=self.giro_comercial,
            company_size=self.company_size,
            phone=self.phone,
            email=self.email,
            reference_person=self.reference_person,
            flete=self.flete,
            dmti=self.dmti,
            is_deleted=self.deleted,
        )

    @classmethod
    def fields_from_entity(cls, entity: ClientEntity) -> dict:
        return {
            "id": entity.id,
            "razon_social": entity.razon_social,
            "nit": entity.nit or "",
            "giro_comercial": entity.giro_comercial or "",
            "company_size": entity.company_size or CompanySize.SMALL,
            "phone": entity.phone or "",
            "email": entity.email or "",
            "reference_person": entity.reference_person or "",
            "flete": entity.flete,
            "dmti": entity.dmti,
            "deleted": entity.is_deleted,
        }
