from datetime import date
from decimal import Decimal

import pytest

from common.errors import NotFoundError
from reports.services.payments import (
    DateRange,
    MovementAttribution,
    driver_payment_detail,
    driver_payment_summary,
)
from trips.choices import EventType, TripStatus

from tests.factories import assignment, at, ev, trip


def by_driver(rows):
    return {r.driver_id: r for r in rows}


def test_trip_count_counts_distinct_trips(drivers):
    t = trip(
        id="t1",
        status=TripStatus.COMPLETED,
        assignments=[assignment(driver_id="d1", cost="100"), assignment(driver_id="d1", cost="50")],
    )
    row = by_driver(driver_payment_summary([t], drivers))["d1"]
    assert row.trip_count == 1
    assert row.total_payment == Decimal("150")


def test_only_completed_trips_pay_freight(drivers):
    t = trip(id="t1", status=TripStatus.IN_PROGRESS, assignments=[assignment(driver_id="d1")])
    assert driver_payment_summary([t], drivers) == []


def test_movements_are_paid_regardless_of_status_and_date(drivers):
    a = assignment(driver_id="d2", events=[ev(EventType.MOVEMENT, at(days=-300), amount="20")])
    t = trip(id="t1", status=TripStatus.CONFIRMED, assignments=[a])
    rows = driver_payment_summary([t], drivers, date_range=DateRange(date(2025, 3, 1), date(2025, 3, 31)))
    assert by_driver(rows)["d2"].total_payment == Decimal("20")
    assert by_driver(rows)["d2"].trip_count == 0


def test_zero_amount_movements_are_ignored(drivers):
    a = assignment(driver_id="d2", events=[ev(EventType.MOVEMENT, at(), amount="0")])
    assert driver_payment_summary([trip(assignments=[a])], drivers) == []


def test_negative_movement_is_a_discount(drivers):
    a = assignment(
        driver_id="d1",
        cost="100",
        events=[ev(EventType.MOVEMENT, at(), "Anticipo", amount="-30", assigned_driver_id="d1")],
    )
    t = trip(id="t1", status=TripStatus.COMPLETED, assignments=[a])
    assert by_driver(driver_payment_summary([t], drivers))["d1"].total_payment == Decimal("70")
    assert driver_payment_detail([t], drivers, "d1").total == Decimal("70")


def test_assigned_driver_beats_notes(drivers):
    a = assignment(
        driver_id="d1",
        events=[ev(EventType.MOVEMENT, at(), "Juan Pérez", amount="30", assigned_driver_id="d2")],
    )
    rows = by_driver(driver_payment_summary([trip(assignments=[a])], drivers))
    assert rows["d2"].total_payment == Decimal("30")
    assert "d1" not in rows


def test_notes_are_matched_as_driver_name(drivers):
    a = assignment(driver_id="d1", events=[ev(EventType.MOVEMENT, at(), "  carlos GOMEZ ", amount="15")])
    rows = by_driver(driver_payment_summary([trip(assignments=[a])], drivers))
    assert rows["d2"].total_payment == Decimal("15")


def test_unknown_assigned_driver_falls_back(drivers):
    a = assignment(driver_id="d1", events=[ev(EventType.MOVEMENT, at(), "peaje", amount="5", assigned_driver_id="zz")])
    rows = by_driver(driver_payment_summary([trip(assignments=[a])], drivers))
    assert rows["d1"].total_payment == Decimal("5")


def test_deleted_driver_is_never_credited(drivers):
    a = assignment(driver_id="d3", events=[ev(EventType.MOVEMENT, at(), amount="5")])
    done = trip(status=TripStatus.COMPLETED, assignments=[a])
    assert driver_payment_summary([done], drivers) == []


def test_resolver_returns_none_for_unknown_drivers(drivers):
    resolver = MovementAttribution(drivers)
    movement = ev(EventType.MOVEMENT, at(), "Luis Martinez", amount="5")
    assert resolver.resolve(movement, assignment(driver_id="nobody")) is None


def test_date_range_is_inclusive_by_utc_day(drivers):
    inside = trip(id="in", status=TripStatus.COMPLETED, updated_at=at(days=0, hours=11, minutes=59),
                  assignments=[assignment(driver_id="d1", cost="10")])
    outside = trip(id="out", status=TripStatus.COMPLETED, updated_at=at(days=1, hours=12),
                   assignments=[assignment(driver_id="d1", cost="99")])
    # T0 es 2025-03-10 12:00 UTC; el rango cubre solo el día 10 completo
    period = DateRange(date(2025, 3, 10), date(2025, 3, 10))
    row = by_driver(driver_payment_summary([inside, outside], drivers, date_range=period))["d1"]
    assert row.total_payment == Decimal("10")
    assert row.trip_count == 1


def test_driver_filter_and_sorting(drivers):
    t1 = trip(id="t1", status=TripStatus.COMPLETED, assignments=[assignment(driver_id="d1", cost="10")])
    t2 = trip(id="t2", status=TripStatus.COMPLETED, assignments=[assignment(driver_id="d2", cost="80")])
    rows = driver_payment_summary([t1, t2], drivers)
    assert [r.driver_id for r in rows] == ["d2", "d1"]
    assert [r.driver_id for r in driver_payment_summary([t1, t2], drivers, driver_id="d1")] == ["d1"]


def test_deleted_trips_are_ignored(drivers):
    a = assignment(driver_id="d1", events=[ev(EventType.MOVEMENT, at(), amount="5")])
    t = trip(status=TripStatus.COMPLETED, is_deleted=True, assignments=[a])
    assert driver_payment_summary([t], drivers) == []


def test_detail_lists_assignments_and_movements(drivers):
    a1 = assignment(driver_id="d1", cost="100", events=[
        ev(EventType.MOVEMENT, at(hours=1), amount="10"),
        ev(EventType.MOVEMENT, at(hours=3), "Carlos Gomez", amount="7"),
    ])
    t1 = trip(id="t1", service_order="IPS0001TT2025", status=TripStatus.COMPLETED, assignments=[a1])
    a2 = assignment(driver_id="d2", events=[ev(EventType.MOVEMENT, at(hours=5), amount="3", assigned_driver_id="d1")])
    t2 = trip(id="t2", service_order="IPS0002TT2025", status=TripStatus.IN_PROGRESS, assignments=[a2])

    detail = driver_payment_detail([t1, t2], drivers, "d1")
    assert [c.trip.id for c in detail.completed_assignments] == ["t1"]
    assert [m.event.amount for m in detail.movements] == [Decimal("3"), Decimal("10")]
    assert detail.movements[0].trip_service_order == "IPS0002TT2025"
    assert detail.assignments_total == Decimal("100")
    assert detail.movements_total == Decimal("13")
    assert detail.total == Decimal("113")


def test_detail_matches_summary_total(drivers):
    a = assignment(driver_id="d1", cost="40", events=[ev(EventType.MOVEMENT, at(), "juan pérez", amount="6")])
    t = trip(id="t1", status=TripStatus.COMPLETED, assignments=[a])
    summary = by_driver(driver_payment_summary([t], drivers))["d1"]
    assert driver_payment_detail([t], drivers, "d1").total == summary.total_payment


def test_detail_unknown_driver(drivers):
    with pytest.raises(NotFoundError):
        driver_payment_detail([], drivers, "nope")
