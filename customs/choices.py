# customs/choices.py
from django.db import models


class DMTIUser(models.TextChoices):
    TRANSPORTE = "TRANSPORTE", "Transporte"
    US_NAVIERA = "US_NAVIERA", "US Naviera"
