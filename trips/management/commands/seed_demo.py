from django.core.management.base import BaseCommand
from django.utils import timezone
from faker import Faker
import random
from datetime import timedelta
from decimal import Decimal

from core.store import build_django_store
from customers.choices import CompanySize
from customers.entities import Client
from drivers.entities import Driver
from trips.choices import CargoType, EventType, TripStatus
from trips.entities import Assignment, Trip, make_event
from trips.sequences import DatabaseServiceOrderSequence
from trips.services import TripService
from trucks.choices import VehicleStatus
from trucks.entities import Trailer, Truck


class Command(BaseCommand):
    help = "Genera datos de demostración: motoristas, cabezales, remolques, clientes y viajes (faker)"

    def add_arguments(self, parser):
        parser.add_argument("--trips", type=int, default=15, help="Cantidad de viajes a crear")
        parser.add_argument("--seed", type=int, default=None, help="Semilla para datos reproducibles")

    def handle(self, *args, **opts):
        fake = Faker("es_MX")
        if opts["seed"] is not None:
            Faker.seed(opts["seed"])
            random.seed(opts["seed"])

        store = build_django_store()
        sequence = DatabaseServiceOrderSequence()

        drivers = []
        trucks = []
        for _ in range(3):
            plate = fake.bothify(text="??? ####").upper()
            trucks.append(store.trucks.create(Truck(plate=plate, status=VehicleStatus.ACTIVE)))
            drivers.append(store.drivers.create(Driver(
                name=f"{fake.first_name()} {fake.last_name()}",
                contact=fake.numerify("555-####"),
                license_number=fake.bothify(text="?#######").upper(),
                dui_number=fake.numerify("0###-19##-#####"),
                truck_plate=plate,
            )))

        trailers = [
            store.trailers.create(Trailer(plate=fake.bothify(text="R? ####").upper(), trailer_type=kind, trailer_size=size))
            for kind, size in (("Contenedor", "40ft"), ("Contenedor", "20ft"), ("Plataforma", ""))
        ]

        clients = [
            store.clients.create(Client(
                razon_social=fake.company()[:200],
                nit=fake.numerify("##############"),
                giro_comercial=fake.bs()[:150],
                company_size=random.choice(CompanySize.values),
                phone=fake.numerify("####-####"),
                email=fake.company_email(),
                reference_person=fake.name(),
                flete=Decimal(random.randint(450, 700)),
                dmti=Decimal(random.randint(40, 90)),
            ))
            for _ in range(4)
        ]

        now = timezone.now()
        created = 0
        for i in range(opts["trips"]):
            created_at = now - timedelta(days=8 - (i % 7))
            completed = i < 10
            cargo_type = CargoType.LOOSE_CARGO if i % 5 == 0 else CargoType.CONTAINER

            events = [make_event(EventType.ASSIGNED, created_at)]
            if completed:
                events += [
                    make_event(EventType.PORT_DEPARTURE, created_at + timedelta(hours=2)),
                    make_event(EventType.ARRIVAL_DESTINATION, created_at + timedelta(hours=20)),
                    make_event(EventType.UNLOADING_END, created_at + timedelta(hours=22)),
                    make_event(EventType.EMPTY_RETURN_END, created_at + timedelta(days=1)),
                ]

            assignment = Assignment(
                container_number=fake.bothify(text="MSKU######") if cargo_type == CargoType.CONTAINER else "",
                merchandise_type=f"Carga variada #{i + 1}" if cargo_type == CargoType.LOOSE_CARGO else "",
                driver_id=drivers[i % len(drivers)].id,
                truck_id=trucks[i % len(trucks)].id,
                trailer_id=trailers[i % len(trailers)].id,
                cost=Decimal(random.randint(500, 700)),
                events=events,
            )
            status = TripStatus.COMPLETED if completed else (TripStatus.IN_PROGRESS if i < 13 else TripStatus.CONFIRMED)
            trip = Trip(
                client_name=clients[i % len(clients)].razon_social,
                status=status,
                cargo_type=cargo_type,
                bill_of_lading=f"BL{1000 + i}",
                shipping_line="Maersk" if i % 2 == 0 else "CMA CGM",
                origin="Puerto Cortés",
                destination="Tegucigalpa",
                weight_kg=Decimal(22000 + i * 100),
                assignments=[assignment],
            )

            service = TripService(store, sequence, clock=lambda at=created_at: at)
            trip = service.create_trip(trip)
            if completed:
                store.trips.update(trip.id, {"updated_at": created_at + timedelta(days=1)})
                if i % 2 == 0:
                    service.mark_invoiced(trip.id)
            created += 1

        self.stdout.write(self.style.SUCCESS(f"Se crearon {created} viajes de demostración."))
