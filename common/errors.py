# common/errors.py
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"


class OperationError(Exception):
    """
    Error controlado de una operación de negocio.
    Ninguna operación que lo lanza deja cambios a medias.
    """
    kind = ErrorKind.VALIDATION

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BusinessValidationError(OperationError):
    kind = ErrorKind.VALIDATION


class NotFoundError(OperationError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(OperationError):
    kind = ErrorKind.CONFLICT
