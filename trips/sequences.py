# trips/sequences.py
"""
Folio de orden de servicio: ``IPS{secuencia:04d}TT{año}``.

La secuencia sube de uno en uno y nunca se reinicia; el año es el del
momento en que se genera el folio.
"""
import logging
import threading
from datetime import datetime
from typing import Callable

from django.db import transaction
from django.utils import timezone

from .models import SequenceCounter

logger = logging.getLogger(__name__)

SERVICE_ORDER_COUNTER = "service_order"


def format_service_order(sequence: int, year: int) -> str:
    return f"IPS{sequence:04d}TT{year}"


def _local_year(clock: Callable[[], datetime]) -> int:
    now = clock()
    if timezone.is_aware(now):
        now = timezone.localtime(now)
    return now.year


class InMemoryServiceOrderSequence:
    def __init__(self, start: int = 0, clock: Callable[[], datetime] = timezone.now):
        self._value = start
        self._clock = clock
        self._lock = threading.Lock()

    def next(self) -> str:
        with self._lock:
            self._value += 1
            value = self._value
        return format_service_order(value, _local_year(self._clock))


class DatabaseServiceOrderSequence:
    """Contador en base de datos; la fila se bloquea mientras se incrementa."""

    def __init__(self, name: str = SERVICE_ORDER_COUNTER, clock: Callable[[], datetime] = timezone.now):
        self.name = name
        self._clock = clock

    def next(self) -> str:
        with transaction.atomic():
            SequenceCounter.objects.get_or_create(name=self.name)
            counter = SequenceCounter.objects.select_for_update().get(name=self.name)
            counter.value += 1
            counter.save(update_fields=["value"])
            value = counter.value
        folio = format_service_order(value, _local_year(self._clock))
        logger.debug("Folio generado %s", folio)
        return folio
