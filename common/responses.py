# common/responses.py
import json
import logging

from django.core.serializers.json import DjangoJSONEncoder
from django.http import JsonResponse

from .errors import BusinessValidationError, ErrorKind, OperationError

logger = logging.getLogger(__name__)

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
}


def read_json(request) -> dict:
    try:
        data = json.loads(request.body.decode("utf-8") or "{}")
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise BusinessValidationError("JSON inválido") from None
    if not isinstance(data, dict):
        raise BusinessValidationError("JSON inválido")
    return data


def json_response(data, status: int = 200) -> JsonResponse:
    # Decimal, datetime y date salen como texto ISO
    return JsonResponse(data, status=status, encoder=DjangoJSONEncoder, safe=False)


def error_response(error: OperationError) -> JsonResponse:
    status = STATUS_BY_KIND.get(error.kind, 400)
    logger.info("Operación rechazada (%s): %s", error.kind.value, error.message)
    return JsonResponse(
        {"ok": False, "kind": error.kind.value, "error": error.message},
        status=status,
    )
