# common/entities.py
"""
Piezas compartidas por las entidades de dominio (dataclasses) de todas las apps.

Las entidades son lo que viaja entre el almacén de recursos y el motor de
cálculo; los modelos de Django solo las persisten.
"""
import uuid
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation

from .errors import BusinessValidationError

ZERO = Decimal("0")

# Clave de orden para fechas ausentes
EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def new_id() -> str:
    return uuid.uuid4().hex


class Recoverable:
    """
    Marca de capacidad: la entidad admite borrado lógico (``is_deleted``)
    y recuperación. Las entidades sin esta marca se eliminan físicamente.
    """


class Versioned:
    """
    Marca de capacidad: la entidad lleva ``version`` para concurrencia
    optimista. Cada actualización la incrementa en 1.
    """


def supports_soft_delete(entity_cls) -> bool:
    return issubclass(entity_cls, Recoverable)


def is_versioned(entity_cls) -> bool:
    return issubclass(entity_cls, Versioned)


def to_decimal(value, field_name: str = "valor") -> Decimal:
    """Convierte montos capturados (texto, int, float) a Decimal."""
    if isinstance(value, Decimal):
        return value
    if value is None or value == "":
        return ZERO
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise BusinessValidationError(f"El campo {field_name} debe ser numérico.") from None
