from datetime import date
from decimal import Decimal

from reports.services.payments import DateRange
from reports.services.profitability import profitability_report, trip_profitability
from trips.choices import CargoType, EventType, TripStatus

from tests.factories import assignment, at, ev, trip


def labels(lines):
    return [(line.label, line.amount) for line in lines]


def test_freight_without_extras_leaves_zero_profit():
    t = trip(status=TripStatus.COMPLETED, assignments=[assignment(cost="500", container_number="MSKU1")])
    report = trip_profitability(t)
    assert report.total_revenue == Decimal("500")
    assert report.total_cost == Decimal("500")
    assert report.profit == 0
    assert report.margin == 0


def test_revenue_and_cost_lines():
    a = assignment(
        cost="500",
        container_number="MSKU1",
        dmti_cost=Decimal("75"),
        events=[
            ev(EventType.MOVEMENT, at(), "Peaje", amount="20"),
            ev(EventType.MOVEMENT, at(hours=1), amount="0"),
            ev(EventType.REFUEL, at(hours=2), gallons="10", price_per_gallon="4", document_number="CCF-9"),
            ev(EventType.REFUEL, at(hours=3), gallons="10", document_number="CCF-10"),
        ],
    )
    t = trip(
        status=TripStatus.COMPLETED,
        demurrage=Decimal("100"),
        unhook_cost=Decimal("25"),
        assignments=[a],
    )
    report = trip_profitability(t)

    assert labels(report.revenue_details) == [
        ("Flete (MSKU1)", Decimal("500")),
        ("Servicio DMTI (MSKU1)", Decimal("75")),
        ("Cargos por Desenganche", Decimal("25")),
        ("Cargos por Estadía", Decimal("100")),
    ]
    assert labels(report.cost_details) == [
        ("Pago Motorista Flete (MSKU1)", Decimal("500")),
        ("Movimiento/Viático (Peaje)", Decimal("20")),
        ("Repostaje (CCF-9)", Decimal("40")),
    ]
    assert report.profit == Decimal("140")
    assert report.margin == Decimal("140") / Decimal("700") * 100


def test_loose_cargo_and_unnamed_assignments():
    t = trip(
        status=TripStatus.COMPLETED,
        cargo_type=CargoType.LOOSE_CARGO,
        assignments=[assignment(cost="80", merchandise_type="Harina"), assignment(cost="20")],
    )
    report = trip_profitability(t)
    assert [line.label for line in report.revenue_details] == ["Flete (Harina)", "Flete (Asig. 2)"]
    assert [line.label for line in report.cost_details] == [
        "Pago Motorista Flete (Harina)",
        "Pago Motorista Flete (Asig. 2)",
    ]


def test_zero_revenue_gives_zero_margin():
    a = assignment(cost="0", events=[ev(EventType.MOVEMENT, at(), amount="15")])
    report = trip_profitability(trip(status=TripStatus.COMPLETED, assignments=[a]))
    assert report.profit == Decimal("-15")
    assert report.margin == 0


def test_report_includes_only_completed_trips_in_range():
    newest = trip(id="new", status=TripStatus.COMPLETED, updated_at=at(days=2))
    oldest = trip(id="old", status=TripStatus.COMPLETED, updated_at=at(days=-1))
    pending = trip(id="pending", status=TripStatus.IN_PROGRESS)
    deleted = trip(id="gone", status=TripStatus.COMPLETED, is_deleted=True)

    report = profitability_report([oldest, pending, newest, deleted])
    assert [r.trip.id for r in report] == ["new", "old"]

    march_12 = DateRange(date(2025, 3, 12), date(2025, 3, 12))
    assert [r.trip.id for r in profitability_report([oldest, newest], march_12)] == ["new"]


def test_report_puts_trips_without_update_date_last():
    dated = trip(id="dated", status=TripStatus.COMPLETED, updated_at=at(days=1))
    undated = trip(id="undated", status=TripStatus.COMPLETED, updated_at=None)

    report = profitability_report([undated, dated])
    assert [r.trip.id for r in report] == ["dated", "undated"]
