#apps/authentication/permissions.py:

from rest_framework.permissions import BasePermission, SAFE_METHODS
from .models import ROL_INSTRUCTOR, es_administrador, tiene_rol


class IsAdministradorOrReadOnly(BasePermission):
    """
    Permiso personalizado que solo permite a administradores modificar.
    Otros usuarios solo pueden leer.
    """
    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return request.user.is_authenticated
        return es_administrador(request.user)


class IsAdministrador(BasePermission):
    """
    Solo administradores pueden acceder
    """
    message = 'Solo administradores pueden realizar esta acción'

    def has_permission(self, request, view):
        return es_administrador(request.user)


class IsInstructorOrAdministrador(BasePermission):
    """
    Solo instructores y administradores pueden acceder
    """
    message = 'Solo instructores y administradores pueden realizar esta acción'

    def has_permission(self, request, view):
        return es_administrador(request.user) or tiene_rol(request.user, ROL_INSTRUCTOR)


class IsInstructorOrAdministradorOrReadOnly(IsInstructorOrAdministrador):
    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return request.user.is_authenticated
        return super().has_permission(request, view)


def es_personal(user):
    """Administradores e instructores ven todos los registros"""
    return es_administrador(user) or tiene_rol(user, ROL_INSTRUCTOR)
