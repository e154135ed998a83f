# common/permissions.py
from dataclasses import dataclass, field

from django.db import models

SUPERADMIN_GROUP = "superadmin"
ADMIN_GROUP = "admin"


class Role(models.TextChoices):
    ADMIN = "ADMIN", "Administrador"
    USER = "USER", "Usuario"


class PermissionAction(models.TextChoices):
    VIEW = "view", "Ver"
    CREATE = "create", "Crear"
    EDIT = "edit", "Editar"
    DELETE = "delete", "Eliminar"


# Rutas de recurso que pueden aparecer en el mapa de permisos de un perfil
RESOURCE_PATHS = (
    "/",
    "/trips",
    "/work-orders",
    "/clients",
    "/drivers",
    "/trucks",
    "/trailers",
    "/driver-payments",
    "/reports",
    "/dmti",
)


@dataclass(frozen=True)
class Identity:
    """Usuario actual tal como lo ve el motor."""
    id: str
    username: str
    role: str = Role.USER
    permissions: dict = field(default_factory=dict)

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def normalize_path(resource_path: str) -> str:
    path = (resource_path or "").strip()
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/")
    return path


def is_admin(user):
    if not user.is_authenticated:
        return False
    if user.is_superuser or user.groups.filter(name__in=[ADMIN_GROUP, SUPERADMIN_GROUP]).exists():
        return True
    profile = getattr(user, "profile", None)
    return profile is not None and profile.role == Role.ADMIN


def identity_for(user) -> Identity:
    profile = getattr(user, "profile", None)
    permissions = dict(profile.permissions or {}) if profile is not None else {}
    return Identity(
        id=str(user.pk),
        username=user.get_username(),
        role=Role.ADMIN if is_admin(user) else Role.USER,
        permissions=permissions,
    )


def has_permission(user_or_identity, resource_path: str, action: str = PermissionAction.VIEW) -> bool:
    """
    Admin pasa siempre; el resto necesita la acción en el mapa
    ``{ruta: [acciones]}`` de su perfil.
    """
    if isinstance(user_or_identity, Identity):
        identity = user_or_identity
    else:
        if not user_or_identity.is_authenticated:
            return False
        identity = identity_for(user_or_identity)

    if identity.is_admin:
        return True
    allowed = identity.permissions.get(normalize_path(resource_path)) or []
    return str(action) in allowed
