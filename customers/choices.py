# customers/choices.py
from django.db import models


class CompanySize(models.TextChoices):
    SMALL = "SMALL", "Pequeña"
    MEDIUM = "MEDIUM", "Mediana"
    LARGE = "LARGE", "Grande"
