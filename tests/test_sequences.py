from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

import pytest

from trips.models import SequenceCounter
from trips.sequences import (
    DatabaseServiceOrderSequence,
    InMemoryServiceOrderSequence,
    format_service_order,
)

from tests.factories import T0


def test_format_service_order():
    assert format_service_order(7, 2025) == "IPS0007TT2025"
    assert format_service_order(12345, 2026) == "IPS12345TT2026"


def test_in_memory_sequence_is_strictly_increasing():
    sequence = InMemoryServiceOrderSequence(clock=lambda: T0)
    assert [sequence.next() for _ in range(3)] == ["IPS0001TT2025", "IPS0002TT2025", "IPS0003TT2025"]


def test_in_memory_sequence_has_no_duplicates_under_threads():
    sequence = InMemoryServiceOrderSequence(clock=lambda: T0)
    with ThreadPoolExecutor(max_workers=8) as pool:
        folios = list(pool.map(lambda _: sequence.next(), range(200)))
    assert len(set(folios)) == 200


def test_year_comes_from_local_time_and_sequence_never_resets():
    # 2026-01-01 03:00 UTC sigue siendo 2025 en El Salvador
    clock_times = iter([
        datetime(2026, 1, 1, 3, 0, tzinfo=timezone.utc),
        datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc),
    ])
    sequence = InMemoryServiceOrderSequence(start=41, clock=lambda: next(clock_times))
    assert sequence.next() == "IPS0042TT2025"
    assert sequence.next() == "IPS0043TT2026"


@pytest.mark.django_db
def test_database_sequence_persists_counter():
    first = DatabaseServiceOrderSequence(clock=lambda: T0)
    assert first.next() == "IPS0001TT2025"
    assert first.next() == "IPS0002TT2025"

    # Otra instancia continúa desde la base de datos
    assert DatabaseServiceOrderSequence(clock=lambda: T0).next() == "IPS0003TT2025"
    assert SequenceCounter.objects.get(name="service_order").value == 3


@pytest.mark.django_db
def test_database_sequences_are_independent_by_name():
    DatabaseServiceOrderSequence(clock=lambda: T0).next()
    assert DatabaseServiceOrderSequence(name="pruebas", clock=lambda: T0).next() == "IPS0001TT2025"
