# customs/services.py
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from django.conf import settings
from django.utils import timezone

from common.errors import BusinessValidationError

from .choices import DMTIUser
from .correlatives import DEFAULT_USER_CODE, next_dmti_correlative
from .entities import DMTI

logger = logging.getLogger(__name__)


@dataclass
class DMTIRequest:
    """Datos de DMTI capturados por contenedor al crear un viaje."""
    starting_customs: str = ""
    registration_date: Optional[date] = None
    user: str = DMTIUser.TRANSPORTE


def register_dmti(
    repository,
    client_name: str,
    container_number: str,
    request: DMTIRequest,
    clock: Callable[[], datetime] = timezone.now,
    user_code: Optional[str] = None,
) -> DMTI:
    if not (request.starting_customs or "").strip():
        raise BusinessValidationError("La Aduana de Inicio es obligatoria para registrar la DMTI.")

    now = clock()
    registration_date = request.registration_date or now.date()
    user_code = user_code or getattr(settings, "DMTI_USER_CODE", DEFAULT_USER_CODE)

    correlative = next_dmti_correlative(
        repository.list(), registration_date, request.starting_customs, user_code=user_code
    )
    dmti = repository.create(
        DMTI(
            id=correlative,
            client_name=client_name,
            container_number=container_number,
            registration_date=registration_date,
            user=request.user or DMTIUser.TRANSPORTE,
            starting_customs=request.starting_customs.strip(),
            created_at=now,
        )
    )
    logger.info("DMTI %s registrada para contenedor %s", dmti.id, container_number)
    return dmti
