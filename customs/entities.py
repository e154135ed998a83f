# customs/entities.py
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from .choices import DMTIUser


@dataclass
class DMTI:
    """
    Declaración de tránsito registrada ante aduana.
    El `id` es el correlativo; no admite borrado lógico.
    """
    id: str = ""
    client_name: str = ""
    container_number: str = ""
    registration_date: Optional[date] = None
    user: str = DMTIUser.TRANSPORTE
    starting_customs: str = ""
    created_at: Optional[datetime] = None
