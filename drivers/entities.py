# drivers/entities.py
from dataclasses import dataclass

from common.entities import Recoverable


@dataclass
class Driver(Recoverable):
    id: str = ""
    name: str = ""
    contact: str = ""
    license_number: str = ""
    dui_number: str = ""
    truck_plate: str = ""
    observations: str = ""
    is_deleted: bool = False
