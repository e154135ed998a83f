# trips/views.py
from django.views import View

from common.errors import BusinessValidationError
from common.mixins import AdminRequiredMixin, OperationErrorMixin, ResourcePermissionMixin
from common.permissions import PermissionAction, is_admin
from common.responses import json_response, read_json
from core.store import StoreMixin
from reports.services.dashboard import demurrage_alerts

from .choices import ProcessType
from .serializers import dmti_requests_from_dict, trip_from_dict, trip_to_dict
from .services import filter_trips


class TripListView(OperationErrorMixin, ResourcePermissionMixin, StoreMixin, View):
    """GET: bandeja de viajes (búsqueda y borrados). POST: alta de viaje."""
    resource_path = "/trips"

    def get(self, request):
        trips = self.get_store().trips.list()
        show_deleted = request.GET.get("show_deleted") == "1" and is_admin(request.user)
        alerts = demurrage_alerts(trips)
        rows = []
        for trip in filter_trips(trips, request.GET.get("q", ""), show_deleted=show_deleted):
            data = trip_to_dict(trip)
            data["demurrage_alert"] = trip.id in alerts
            rows.append(data)
        return json_response({"ok": True, "trips": rows})

    def post(self, request):
        data = read_json(request)
        process_type = data.get("process_type") or ProcessType.TRIP
        dmti_requests = dmti_requests_from_dict(data) if process_type == ProcessType.DMTI else None
        trip = self.get_trip_service().create_trip(trip_from_dict(data), process_type, dmti_requests)
        return json_response({"ok": True, "trip": trip_to_dict(trip)}, status=201)


class TripDetailView(OperationErrorMixin, ResourcePermissionMixin, StoreMixin, View):
    """GET: un viaje. PUT: edición completa con control de versión."""
    resource_path = "/trips"

    def get(self, request, pk):
        trip = self.get_store().trips.get(pk)
        return json_response({"ok": True, "trip": trip_to_dict(trip)})

    def put(self, request, pk):
        data = read_json(request)
        expected_version = data.get("version")
        if expected_version not in (None, ""):
            try:
                expected_version = int(expected_version)
            except (TypeError, ValueError):
                raise BusinessValidationError("Versión inválida") from None
        else:
            expected_version = None
        trip = self.get_trip_service().update_trip(pk, trip_from_dict(data), expected_version=expected_version)
        return json_response({"ok": True, "trip": trip_to_dict(trip)})


class TripDeleteView(OperationErrorMixin, ResourcePermissionMixin, StoreMixin, View):
    resource_path = "/trips"
    permission_actions = {"post": PermissionAction.DELETE}

    def post(self, request, pk):
        self.get_trip_service().delete_trip(pk)
        return json_response({"ok": True})


class TripRecoverView(OperationErrorMixin, AdminRequiredMixin, StoreMixin, View):
    def post(self, request, pk):
        self.get_trip_service().recover_trip(pk)
        return json_response({"ok": True})


class TripInvoiceView(OperationErrorMixin, ResourcePermissionMixin, StoreMixin, View):
    """Marca una orden de trabajo como facturada (irreversible)."""
    resource_path = "/work-orders"
    permission_actions = {"post": PermissionAction.EDIT}

    def post(self, request, pk):
        trip = self.get_trip_service().mark_invoiced(pk)
        return json_response({"ok": True, "trip": trip_to_dict(trip)})
