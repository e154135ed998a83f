# reports/services/work_orders.py
from dataclasses import dataclass, field

from common.entities import EARLIEST
from trips.choices import InvoiceStatus, TripStatus

UNSPECIFIED_CLIENT = "Cliente no especificado"


@dataclass
class ClientWorkOrders:
    client_name: str
    orders: list = field(default_factory=list)

    @property
    def active_count(self) -> int:
        # Sin estado de facturación cuenta como activa
        return sum(1 for t in self.orders if (t.invoice_status or InvoiceStatus.ACTIVE) == InvoiceStatus.ACTIVE)


def work_orders_by_client(trips) -> list:
    """Órdenes de trabajo (viajes completados) por cliente, clientes en orden alfabético."""
    groups = {}
    for trip in trips:
        if trip.status != TripStatus.COMPLETED or trip.is_deleted:
            continue
        name = trip.client_name or UNSPECIFIED_CLIENT
        groups.setdefault(name, ClientWorkOrders(client_name=name)).orders.append(trip)

    for group in groups.values():
        group.orders.sort(key=lambda t: t.created_at or EARLIEST, reverse=True)
    return [groups[name] for name in sorted(groups)]
