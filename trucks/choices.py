# trucks/choices.py
from django.db import models


class VehicleStatus(models.TextChoices):
    ACTIVE = "ACTIVE", "Activo"
    MAINTENANCE = "MAINTENANCE", "Mantenimiento"
    OUT_OF_SERVICE = "OUT_OF_SERVICE", "Fuera de servicio"
