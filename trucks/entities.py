# trucks/entities.py
from dataclasses import dataclass
from datetime import date
from typing import Optional

from common.entities import Recoverable

from .choices import VehicleStatus


@dataclass
class Truck(Recoverable):
    """Cabezal."""
    id: str = ""
    plate: str = ""
    status: str = VehicleStatus.ACTIVE
    last_maintenance_date: Optional[date] = None
    is_deleted: bool = False

    @property
    def vehicle_type(self) -> str:
        return "truck"


@dataclass
class Trailer(Recoverable):
    """Remolque (chasis / plataforma)."""
    id: str = ""
    plate: str = ""
    trailer_type: str = ""
    trailer_size: str = ""
    is_deleted: bool = False

    @property
    def vehicle_type(self) -> str:
        return "trailer"
