# customs/models.py
from django.db import models

from .choices import DMTIUser
from .entities import DMTI as DMTIEntity


class DMTI(models.Model):
    # El correlativo es la llave
    id = models.CharField("Correlativo", primary_key=True, max_length=60)
    client_name = models.CharField("Cliente", max_length=200)
    container_number = models.CharField("Contenedor", max_length=30)
    registration_date = models.DateField("Fecha de registro")
    user = models.CharField("Usuario", max_length=20, choices=DMTIUser.choices, default=DMTIUser.TRANSPORTE)
    starting_customs = models.CharField("Aduana de inicio", max_length=120)
    created_at = models.DateTimeField("Creado", blank=True, null=True)

    class Meta:
        verbose_name = "DMTI"
        verbose_name_plural = "DMTIs"
        ordering = ["-registration_date", "-id"]

    def __str__(self):
        return self.id

    def to_entity(self) -> DMTIEntity:
        return DMTIEntity(
            id=self.pk,
            client_name=self.client_name,
            container_number=self.container_number,
            registration_date=self.registration_date,
            user=self.user,
            starting_customs=self.starting_customs,
            created_at=self.created_at,
        )

    @classmethod
    def fields_from_entity(cls, entity: DMTIEntity) -> dict:
        return {
            "id": entity.id,
            "client_name": entity.client_name,
            "container_number": entity.container_number,
            "registration_date": entity.registration_date,
            "user": entity.user or DMTIUser.TRANSPORTE,
            "starting_customs": entity.starting_customs,
            "created_at": entity.created_at,
        }
