# reports/services/profitability.py
"""
Rentabilidad por orden de trabajo completada.

Ingresos: flete de cada asignación, servicio DMTI, desenganche y estadías
(tomados de las cachés del viaje). Costos: pago al motorista por el flete,
movimientos / viáticos y repostajes. El flete aparece en ambos lados, así que
una asignación sin recargos ni gastos deja utilidad cero.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from common.entities import EARLIEST, ZERO
from trips.choices import EventType

from .payments import ANY_TIME, DateRange, completed_in_range

HUNDRED = Decimal("100")


@dataclass
class LineItem:
    label: str
    amount: Decimal


@dataclass
class TripProfitability:
    trip: object
    revenue_details: list = field(default_factory=list)
    cost_details: list = field(default_factory=list)

    @property
    def total_revenue(self) -> Decimal:
        return sum((line.amount for line in self.revenue_details), ZERO)

    @property
    def total_cost(self) -> Decimal:
        return sum((line.amount for line in self.cost_details), ZERO)

    @property
    def profit(self) -> Decimal:
        return self.total_revenue - self.total_cost

    @property
    def margin(self) -> Decimal:
        revenue = self.total_revenue
        if revenue > 0:
            return self.profit / revenue * HUNDRED
        return ZERO


def _revenue_lines(trip) -> list:
    lines = []
    for n, assignment in enumerate(trip.assignments, start=1):
        detail = assignment.cargo_identifier(trip.cargo_type) or f"Asig. {n}"
        lines.append(LineItem(f"Flete ({detail})", assignment.cost or ZERO))
        if assignment.dmti_cost:
            lines.append(LineItem(f"Servicio DMTI ({assignment.container_number})", assignment.dmti_cost))
    if trip.unhook_cost:
        lines.append(LineItem("Cargos por Desenganche", trip.unhook_cost))
    if trip.demurrage:
        lines.append(LineItem("Cargos por Estadía", trip.demurrage))
    return lines


def _cost_lines(trip) -> list:
    lines = []
    for n, assignment in enumerate(trip.assignments, start=1):
        detail = assignment.container_number or assignment.merchandise_type or f"Asig. {n}"
        lines.append(LineItem(f"Pago Motorista Flete ({detail})", assignment.cost or ZERO))
        for event in assignment.events:
            if event.event_type == EventType.MOVEMENT and event.amount:
                lines.append(LineItem(f"Movimiento/Viático ({event.notes or 'N/A'})", event.amount))
            elif event.event_type == EventType.REFUEL and event.gallons and event.price_per_gallon:
                lines.append(LineItem(f"Repostaje ({event.document_number})", event.fuel_cost))
    return lines


def trip_profitability(trip) -> TripProfitability:
    return TripProfitability(trip=trip, revenue_details=_revenue_lines(trip), cost_details=_cost_lines(trip))


def profitability_report(trips, date_range: Optional[DateRange] = None) -> list:
    date_range = date_range or ANY_TIME
    report = [trip_profitability(t) for t in trips if completed_in_range(t, date_range)]
    report.sort(key=lambda item: item.trip.updated_at or EARLIEST, reverse=True)
    return report
