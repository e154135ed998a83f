# reports/views.py
from django.utils.dateparse import parse_date
from django.views import View

from common.errors import BusinessValidationError
from common.mixins import OperationErrorMixin, ResourcePermissionMixin
from common.responses import json_response
from core.store import StoreMixin
from trips.serializers import event_to_dict

from .services.occupancy import derive_trailer_occupancy
from .services.payments import DateRange, driver_payment_detail, driver_payment_summary
from .services.profitability import profitability_report
from .services.work_orders import work_orders_by_client


def date_range_from(request) -> DateRange:
    """Lee ?start=AAAA-MM-DD&end=AAAA-MM-DD (ambos opcionales)."""
    values = {}
    for key in ("start", "end"):
        raw = (request.GET.get(key) or "").strip()
        if not raw:
            values[key] = None
            continue
        try:
            values[key] = parse_date(raw)
        except ValueError:
            values[key] = None
        if values[key] is None:
            raise BusinessValidationError(f"Fecha inválida: {raw}")
    return DateRange(**values)


def line_items(lines) -> list:
    return [{"label": line.label, "amount": line.amount} for line in lines]


class TrailerOccupancyView(OperationErrorMixin, ResourcePermissionMixin, StoreMixin, View):
    resource_path = "/trailers"

    def get(self, request):
        store = self.get_store()
        occupancy = derive_trailer_occupancy(store.trips.list(), store.trailers.list(), store.drivers.list())
        return json_response({
            "ok": True,
            "trailers": {
                trailer_id: {
                    "status": info.status,
                    "driver_name": info.driver_name,
                    "trip_service_order": info.trip_service_order,
                    "display_label": info.display_label,
                }
                for trailer_id, info in occupancy.items()
            },
        })


class DriverPaymentSummaryView(OperationErrorMixin, ResourcePermissionMixin, StoreMixin, View):
    resource_path = "/driver-payments"

    def get(self, request):
        store = self.get_store()
        rows = driver_payment_summary(
            store.trips.list(),
            store.drivers.list(),
            date_range=date_range_from(request),
            driver_id=request.GET.get("driver") or None,
        )
        return json_response({
            "ok": True,
            "rows": [
                {
                    "driver_id": r.driver_id,
                    "name": r.name,
                    "trip_count": r.trip_count,
                    "total_payment": r.total_payment,
                }
                for r in rows
            ],
        })


class DriverPaymentDetailView(OperationErrorMixin, ResourcePermissionMixin, StoreMixin, View):
    resource_path = "/driver-payments"

    def get(self, request, driver_id):
        store = self.get_store()
        detail = driver_payment_detail(
            store.trips.list(), store.drivers.list(), driver_id, date_range=date_range_from(request)
        )
        return json_response({
            "ok": True,
            "driver": {"id": detail.driver.id, "name": detail.driver.name},
            "completed_assignments": [
                {
                    "trip_id": c.trip.id,
                    "service_order": c.trip.service_order,
                    "client_name": c.trip.client_name,
                    "completed_at": c.trip.updated_at,
                    "container_number": c.assignment.container_number,
                    "merchandise_type": c.assignment.merchandise_type,
                    "cost": c.assignment.cost,
                }
                for c in detail.completed_assignments
            ],
            "movements": [
                {"trip_id": m.trip_id, "trip_service_order": m.trip_service_order, **event_to_dict(m.event)}
                for m in detail.movements
            ],
            "assignments_total": detail.assignments_total,
            "movements_total": detail.movements_total,
            "total": detail.total,
        })


class ProfitabilityReportView(OperationErrorMixin, ResourcePermissionMixin, StoreMixin, View):
    resource_path = "/reports"

    def get(self, request):
        report = profitability_report(self.get_store().trips.list(), date_range=date_range_from(request))
        return json_response({
            "ok": True,
            "rows": [
                {
                    "trip_id": item.trip.id,
                    "service_order": item.trip.service_order,
                    "client_name": item.trip.client_name,
                    "completed_at": item.trip.updated_at,
                    "total_revenue": item.total_revenue,
                    "total_cost": item.total_cost,
                    "profit": item.profit,
                    "margin": item.margin,
                    "revenue_details": line_items(item.revenue_details),
                    "cost_details": line_items(item.cost_details),
                }
                for item in report
            ],
        })


class WorkOrderListView(OperationErrorMixin, ResourcePermissionMixin, StoreMixin, View):
    resource_path = "/work-orders"

    def get(self, request):
        groups = work_orders_by_client(self.get_store().trips.list())
        return json_response({
            "ok": True,
            "clients": [
                {
                    "client_name": g.client_name,
                    "active_count": g.active_count,
                    "orders": [
                        {
                            "trip_id": t.id,
                            "service_order": t.service_order,
                            "created_at": t.created_at,
                            "invoice_status": t.invoice_status,
                            "containers": [a.container_number or a.merchandise_type for a in t.assignments],
                        }
                        for t in g.orders
                    ],
                }
                for g in groups
            ],
        })
