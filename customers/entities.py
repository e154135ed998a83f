# customers/entities.py
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from common.entities import Recoverable

from .choices import CompanySize


@dataclass
class Client(Recoverable):
    id: str = ""
    razon_social: str = ""
    nit: str = ""
    giro_comercial: str = ""
    company_size: str = CompanySize.SMALL
    phone: str = ""
    email: str = ""
    reference_person: str = ""
    # Tarifas por defecto que se proponen al capturar un viaje
    flete: Optional[Decimal] = None
    dmti: Optional[Decimal] = None
    is_deleted: bool = False
