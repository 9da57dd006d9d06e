# apps/common/exceptions.py

import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ReglaNegocioError(Exception):
    """Rechazo por regla de negocio: se informa al usuario y no se escribe nada"""

    def __init__(self, mensaje):
        super().__init__(mensaje)
        self.mensaje = mensaje

    def __str__(self):
        return self.mensaje


class ConflictoError(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'El registro entra en conflicto con uno existente'
    default_code = 'conflicto'


def extraer_mensaje(detalle):
    """Obtiene un mensaje legible a partir del detalle de un error de DRF"""
    if isinstance(detalle, dict):
        if 'error' in detalle:
            return extraer_mensaje(detalle['error'])
        if 'detail' in detalle:
            return extraer_mensaje(detalle['detail'])
        for campo, valor in detalle.items():
            mensaje = extraer_mensaje(valor)
            if campo == 'non_field_errors':
                return mensaje
            return f"{campo}: {mensaje}"
        return ''
    if isinstance(detalle, (list, tuple)):
        return extraer_mensaje(detalle[0]) if detalle else ''
    return str(detalle)


def manejador_excepciones(exc, context):
    """Añade la clave 'error' a todas las respuestas de error de la API"""
    if isinstance(exc, ReglaNegocioError):
        return Response({'error': exc.mensaje}, status=status.HTTP_400_BAD_REQUEST)

    response = exception_handler(exc, context)
    if response is None:
        logger.exception('Error no controlado en %s', context.get('view').__class__.__name__)
        return None

    if isinstance(response.data, dict):
        if 'error' not in response.data:
            response.data['error'] = extraer_mensaje(response.data)
    else:
        response.data = {'error': extraer_mensaje(response.data), 'errores': response.data}
    return response
