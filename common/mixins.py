# common/mixins.py
from django.contrib.auth.mixins import LoginRequiredMixin
from django.core.exceptions import PermissionDenied

from .errors import OperationError
from .permissions import PermissionAction, has_permission, is_admin
from .responses import error_response


class AdminRequiredMixin(LoginRequiredMixin):
    raise_exception = True

    def dispatch(self, request, *args, **kwargs):
        if request.user.is_authenticated and not is_admin(request.user):
            raise PermissionDenied  # 403
        return super().dispatch(request, *args, **kwargs)


class ResourcePermissionMixin(LoginRequiredMixin):
    """
    Restringe la vista a quien tenga permiso sobre `resource_path`.
    La acción se toma de `permission_actions` según el método HTTP.
    """
    raise_exception = True
    resource_path = "/"
    permission_actions = {
        "get": PermissionAction.VIEW,
        "post": PermissionAction.CREATE,
        "put": PermissionAction.EDIT,
        "patch": PermissionAction.EDIT,
        "delete": PermissionAction.DELETE,
    }

    def get_permission_action(self, request):
        return self.permission_actions.get(request.method.lower(), PermissionAction.VIEW)

    def dispatch(self, request, *args, **kwargs):
        if request.user.is_authenticated:
            action = self.get_permission_action(request)
            if not has_permission(request.user, self.resource_path, action):
                raise PermissionDenied  # 403
        return super().dispatch(request, *args, **kwargs)


class OperationErrorMixin:
    """Traduce los errores controlados del motor a respuestas JSON 400/404/409."""

    def dispatch(self, request, *args, **kwargs):
        try:
            return super().dispatch(request, *args, **kwargs)
        except OperationError as exc:
            return error_response(exc)
