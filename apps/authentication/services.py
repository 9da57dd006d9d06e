# apps/authentication/services.py

import logging
from datetime import timedelta

from django.db import DatabaseError, transaction
from django.utils import timezone

from .models import LogActividad

logger = logging.getLogger(__name__)


class LogActions:
    CREAR = 'CREAR'
    ACTUALIZAR = 'ACTUALIZAR'
    ELIMINAR = 'ELIMINAR'
    LOGIN = 'LOGIN'
    LOGOUT = 'LOGOUT'
    CONSULTAR = 'CONSULTAR'
    EXPORTAR = 'EXPORTAR'
    IMPORTAR = 'IMPORTAR'
    CONFIGURAR = 'CONFIGURAR'


class LogModules:
    ALUMNOS = 'ALUMNOS'
    EVALUACIONES = 'EVALUACIONES'
    PAGOS = 'PAGOS'
    USUARIOS = 'USUARIOS'
    HORARIOS = 'HORARIOS'
    NIVELES = 'NIVELES'
    REPRESENTANTES = 'REPRESENTANTES'
    CONFIGURACION = 'CONFIGURACION'
    AUTH = 'AUTH'
    SISTEMA = 'SISTEMA'


def _ip_de(request):
    reenviada = request.META.get('HTTP_X_FORWARDED_FOR')
    if reenviada:
        return reenviada.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


def registrar_log(request, accion, modulo, descripcion, usuario=None):
    """
    Guarda una entrada en el log de actividades. Un fallo al escribir el log
    se registra en el logger y no interrumpe la operación que lo originó.
    """
    ip_address = None
    user_agent = ''
    if request is not None:
        if usuario is None and request.user.is_authenticated:
            usuario = request.user
        ip_address = _ip_de(request)
        user_agent = request.META.get('HTTP_USER_AGENT', '')[:255]

    try:
        with transaction.atomic():
            entrada = LogActividad.objects.create(
                usuario=usuario,
                accion=accion,
                modulo=modulo,
                descripcion=descripcion,
                ip_address=ip_address,
                user_agent=user_agent,
            )
    except DatabaseError:
        logger.exception("No se pudo registrar el log: %s en %s", accion, modulo)
        return None

    logger.info("Log registrado: %s en %s - %s", accion, modulo, descripcion)
    return entrada


def limpiar_logs(dias=90):
    """Elimina los logs con más de ``dias`` días. Devuelve cuántos se borraron"""
    limite = timezone.now() - timedelta(days=dias)
    eliminados, _ = LogActividad.objects.filter(fecha__lt=limite).delete()
    logger.info("Eliminados %s logs anteriores a %s días", eliminados, dias)
    return eliminados
