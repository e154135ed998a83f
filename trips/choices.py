# trips/choices.py
from django.db import models


class TripStatus(models.TextChoices):
    QUOTED = "QUOTED", "Cotizado"
    CONFIRMED = "CONFIRMED", "Confirmado"
    IN_PROGRESS = "IN_PROGRESS", "En Progreso"
    COMPLETED = "COMPLETED", "Completado"
    CANCELED = "CANCELED", "Cancelado"


# Un viaje en estos estatus ya no ocupa remolques
CLOSED_STATUSES = (TripStatus.COMPLETED, TripStatus.CANCELED)


class CargoType(models.TextChoices):
    CONTAINER = "CONTAINER", "Contenedores"
    LOOSE_CARGO = "LOOSE_CARGO", "Carga suelta"


class InvoiceStatus(models.TextChoices):
    ACTIVE = "ACTIVE", "Activa"
    INVOICED = "INVOICED", "Facturada"


class ProcessType(models.TextChoices):
    TRIP = "TRIP", "Viaje"
    DMTI = "DMTI", "DMTI (Viaje con DMTI)"


class EventType(models.TextChoices):
    ASSIGNED = "ASSIGNED", "Asignado"
    PORT_DEPARTURE = "PORT_DEPARTURE", "Salida de puerto"
    REFUEL = "REFUEL", "Repostaje"
    ARRIVAL_DESTINATION = "ARRIVAL_DESTINATION", "Llegada a Destino"
    UNLOADING_START = "UNLOADING_START", "Inicio de descarga"
    STAY_START = "STAY_START", "Inicio de Estadías"
    UNHOOK = "UNHOOK", "Desenganche"
    STAY_END = "STAY_END", "Fin de Estadías"
    UNLOADING_END = "UNLOADING_END", "Fin de descarga"
    EMPTY_RETURN_START = "EMPTY_RETURN_START", "Inicio de Retorno Vacío"
    EMPTY_RETURN_END = "EMPTY_RETURN_END", "Fin de Retorno Vacío"
    MOVEMENT = "MOVEMENT", "Movimiento"


def event_label(event_type: str) -> str:
    try:
        return EventType(event_type).label
    except ValueError:
        return str(event_type)
