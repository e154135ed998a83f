import json

import pytest
from django.contrib.auth.models import User
from django.urls import reverse

from accounts.models import Profile
from core.store import build_django_store
from drivers.entities import Driver
from trips.choices import EventType, TripStatus
from trips.models import TripEvent
from trucks.entities import Trailer

from tests.factories import assignment, at, closed_assignment, ev, trip

pytestmark = pytest.mark.django_db


def post_json(client, url, data):
    return client.post(url, json.dumps(data), content_type="application/json")


def put_json(client, url, data):
    return client.put(url, json.dumps(data), content_type="application/json")


@pytest.fixture
def admin_client(client):
    client.force_login(User.objects.create_superuser("admin", password="x"))
    return client


@pytest.fixture
def operator_client(client):
    user = User.objects.create_user("operador", password="x")
    Profile.objects.create(user=user, permissions={"/trips": ["view", "create", "edit"]})
    client.force_login(user)
    return client


@pytest.fixture
def db_store():
    return build_django_store()


TRIP_PAYLOAD = {
    "client_name": "Alfa",
    "status": "IN_PROGRESS",
    "cargo_type": "CONTAINER",
    "assignments": [
        {
            "container_number": "MSKU1",
            "driver_id": "d1",
            "cost": "150.00",
            "events": [
                {"event_type": "ASSIGNED", "timestamp": "2025-03-10T08:00:00Z"},
                {"event_type": "MOVEMENT", "timestamp": "2025-03-10T09:00:00Z", "amount": "12.50"},
            ],
        }
    ],
}


def test_anonymous_gets_403(client):
    assert client.get(reverse("trips:list")).status_code == 403


def test_user_without_permission_gets_403(client):
    user = User.objects.create_user("sinpermiso", password="x")
    Profile.objects.create(user=user, permissions={"/reports": ["view"]})
    client.force_login(user)
    assert client.get(reverse("trips:list")).status_code == 403
    assert client.get(reverse("reports:profitability")).status_code == 200


def test_create_and_read_trip(operator_client):
    response = post_json(operator_client, reverse("trips:list"), TRIP_PAYLOAD)
    assert response.status_code == 201
    created = response.json()["trip"]
    assert created["service_order"].startswith("IPS0001TT")
    assert created["version"] == 1
    assert created["assignments"][0]["events"][1]["amount"] == "12.50"

    detail = operator_client.get(reverse("trips:detail", args=[created["id"]]))
    assert detail.json()["trip"]["client_name"] == "Alfa"

    listing = operator_client.get(reverse("trips:list"), {"q": "msku1"})
    assert [t["id"] for t in listing.json()["trips"]] == [created["id"]]


def test_validation_error_is_400(operator_client):
    payload = dict(TRIP_PAYLOAD, status="COMPLETED")
    response = post_json(operator_client, reverse("trips:list"), payload)
    assert response.status_code == 400
    body = response.json()
    assert body["ok"] is False
    assert body["kind"] == "validation"
    assert "Fin de Retorno Vacío" in body["error"]


def test_invalid_json_is_400(operator_client):
    response = operator_client.post(reverse("trips:list"), "{no", content_type="application/json")
    assert response.status_code == 400


def test_unknown_trip_is_404(operator_client):
    response = operator_client.get(reverse("trips:detail", args=["nope"]))
    assert response.status_code == 404
    assert response.json()["kind"] == "not_found"


def test_stale_version_is_409(operator_client):
    created = post_json(operator_client, reverse("trips:list"), TRIP_PAYLOAD).json()["trip"]
    url = reverse("trips:detail", args=[created["id"]])

    first = put_json(operator_client, url, dict(TRIP_PAYLOAD, client_name="Beta", version=1))
    assert first.status_code == 200
    assert first.json()["trip"]["version"] == 2

    stale = put_json(operator_client, url, dict(TRIP_PAYLOAD, client_name="Gamma", version=1))
    assert stale.status_code == 409
    assert stale.json()["kind"] == "conflict"


def test_delete_needs_delete_permission(operator_client, db_store):
    created = db_store.trips.create(trip(service_order="IPS0001TT2025"))
    assert operator_client.post(reverse("trips:delete", args=[created.id])).status_code == 403


def test_admin_delete_recover_and_show_deleted(admin_client, db_store):
    created = db_store.trips.create(trip(service_order="IPS0001TT2025"))
    assert admin_client.post(reverse("trips:delete", args=[created.id])).status_code == 200

    listing = admin_client.get(reverse("trips:list"), {"show_deleted": "1"})
    assert [t["id"] for t in listing.json()["trips"]] == [created.id]

    assert admin_client.post(reverse("trips:recover", args=[created.id])).status_code == 200
    assert not db_store.trips.get(created.id).is_deleted


def test_recover_requires_admin(operator_client, db_store):
    created = db_store.trips.create(trip(service_order="IPS0001TT2025"))
    assert operator_client.post(reverse("trips:recover", args=[created.id])).status_code == 403


def test_django_admin_cannot_edit_trips_or_events(admin_client, db_store):
    created = db_store.trips.create(trip(service_order="IPS0001TT2025", assignments=[closed_assignment()]))
    response = admin_client.post(
        reverse("admin:trips_trip_change", args=[created.id]),
        {"service_order": "IPS0001TT2025", "status": "COMPLETED", "cargo_type": "CONTAINER"},
    )
    assert response.status_code == 403
    assert db_store.trips.get(created.id).status == TripStatus.CONFIRMED

    event = TripEvent.objects.first()
    assert admin_client.post(reverse("admin:trips_tripevent_delete", args=[event.pk]), {"post": "yes"}).status_code == 403
    assert admin_client.post(reverse("admin:trips_tripevent_change", args=[event.pk]), {}).status_code == 403
    assert TripEvent.objects.count() == 2
    assert admin_client.get(reverse("admin:trips_trip_add")).status_code == 403


def test_invoice_work_order(admin_client, db_store):
    done = db_store.trips.create(
        trip(service_order="IPS0001TT2025", status=TripStatus.COMPLETED, assignments=[closed_assignment()])
    )
    response = admin_client.post(reverse("trips:invoice", args=[done.id]))
    assert response.status_code == 200
    assert response.json()["trip"]["invoice_status"] == "INVOICED"

    orders = admin_client.get(reverse("reports:work_orders")).json()["clients"]
    assert orders[0]["orders"][0]["invoice_status"] == "INVOICED"
    assert orders[0]["active_count"] == 0


def test_reports_endpoints(admin_client, db_store):
    db_store.drivers.create(Driver(id="d1", name="Juan Pérez"))
    db_store.trailers.create(Trailer(id="r1", plate="RA 1111"))
    a = assignment(
        driver_id="d1",
        trailer_id="r1",
        cost="200",
        events=[ev(EventType.MOVEMENT, at(), amount="15"), ev(EventType.EMPTY_RETURN_END, at(days=1))],
    )
    db_store.trips.create(trip(service_order="IPS0001TT2025", status=TripStatus.COMPLETED, assignments=[a]))

    trailers = admin_client.get(reverse("reports:trailer_occupancy")).json()["trailers"]
    assert trailers["r1"]["status"] == "Disponible"

    rows = admin_client.get(reverse("reports:driver_payments"), {"start": "2025-03-01", "end": "2025-03-31"}).json()
    assert rows["rows"][0]["total_payment"] == "215.00"

    detail = admin_client.get(reverse("reports:driver_payment_detail", args=["d1"])).json()
    assert detail["movements"][0]["amount"] == "15.00"

    report = admin_client.get(reverse("reports:profitability")).json()["rows"]
    assert report[0]["profit"] == "-15.00"

    assert admin_client.get(reverse("reports:driver_payments"), {"start": "marzo"}).status_code == 400
    assert admin_client.get(reverse("reports:driver_payment_detail", args=["nadie"])).status_code == 404


def test_dashboard(admin_client, db_store):
    db_store.trips.create(trip(service_order="IPS0001TT2025", status=TripStatus.IN_PROGRESS))
    body = admin_client.get(reverse("dashboard")).json()
    assert body["ok"] is True
    assert len(body["active_trips"]) == 1
    assert len(body["last_7_days"]) == 7
