from django.contrib.auth.models import User
from django.core.exceptions import ValidationError
from django.db import models

from common.permissions import RESOURCE_PATHS, PermissionAction, Role, normalize_path


class Profile(models.Model):
    """
    Rol y permisos por recurso de un usuario.
    `permissions` guarda ``{"/trips": ["view", "edit"], ...}``.
    """
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name="profile")
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.USER)
    permissions = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.user.username

    def clean(self):
        if not isinstance(self.permissions, dict):
            raise ValidationError({"permissions": "Debe ser un objeto {ruta: [acciones]}."})
        cleaned = {}
        for path, actions in self.permissions.items():
            path = normalize_path(path)
            if path not in RESOURCE_PATHS:
                raise ValidationError({"permissions": f"Ruta desconocida: {path}"})
            unknown = set(actions or []) - set(PermissionAction.values)
            if unknown:
                raise ValidationError({"permissions": f"Acciones inválidas en {path}: {', '.join(sorted(unknown))}"})
            cleaned[path] = list(actions or [])
        self.permissions = cleaned
