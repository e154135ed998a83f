# trips/charges.py
"""
Recargos de un viaje: estadías (demurrage) y desenganches.

Los totales se recalculan desde los eventos en cada guardado; lo que queda
en el viaje es solo una caché.
"""
from datetime import timedelta
from decimal import Decimal
from typing import Iterable

from common.entities import ZERO

from .choices import EventType

MS_PER_DAY = 86_400_000
ONE_MS = timedelta(milliseconds=1)


def elapsed_ms(start, end) -> int:
    """Milisegundos entre dos instantes; nunca negativo."""
    return max(0, (end - start) // ONE_MS)


def billable_days(ms: int) -> int:
    # Cualquier fracción de día se cobra como día completo
    return (ms + MS_PER_DAY - 1) // MS_PER_DAY


def assignment_demurrage(assignment) -> Decimal:
    stay_start = assignment.first_event(EventType.STAY_START)
    stay_end = assignment.first_event(EventType.STAY_END)
    if stay_start is None or stay_end is None:
        return ZERO

    rate = stay_start.demurrage_rate or ZERO
    if rate <= 0:
        return ZERO

    ms = elapsed_ms(stay_start.timestamp, stay_end.timestamp)
    if ms <= 0:
        return ZERO
    return rate * billable_days(ms)


def compute_demurrage(assignments: Iterable) -> Decimal:
    return sum((assignment_demurrage(a) for a in assignments), ZERO)


def compute_unhook_cost(assignments: Iterable) -> Decimal:
    return sum(
        (e.unhook_cost or ZERO for a in assignments for e in a.events_of(EventType.UNHOOK)),
        ZERO,
    )


def has_empty_return_end(assignments: Iterable) -> bool:
    return any(a.first_event(EventType.EMPTY_RETURN_END) is not None for a in assignments)
