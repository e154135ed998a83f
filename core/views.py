from django.views import View

from common.mixins import OperationErrorMixin, ResourcePermissionMixin
from common.responses import json_response
from core.store import StoreMixin
from reports.services.dashboard import dashboard_summary, demurrage_alerts


# Tablero operativo
class DashboardView(OperationErrorMixin, ResourcePermissionMixin, StoreMixin, View):
    resource_path = "/"

    def get(self, request):
        store = self.get_store()
        trips = store.trips.list()
        summary = dashboard_summary(trips, drivers=store.drivers.list(), trucks=store.trucks.list())
        return json_response({
            "ok": True,
            "weekly_trips": summary.weekly_trips,
            "monthly_trips": summary.monthly_trips,
            "yearly_trips": summary.yearly_trips,
            "active_trips": [
                {
                    "trip_id": a.trip.id,
                    "service_order": a.trip.service_order,
                    "client_name": a.trip.client_name,
                    "bill_of_lading": a.trip.bill_of_lading,
                    "assignments": len(a.trip.assignments),
                    "driver_name": a.driver_name,
                    "truck_plate": a.truck_plate,
                }
                for a in summary.active_trips
            ],
            "last_7_days": [{"date": day, "trips": count} for day, count in summary.last_7_days],
            "demurrage_alerts": sorted(demurrage_alerts(trips)),
        })
