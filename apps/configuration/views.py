#apps/configuration/views.py:

import logging

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from apps.authentication.permissions import IsAdministrador
from apps.authentication.services import registrar_log, LogActions, LogModules
from .models import Configuracion
from .serializers import (
    ConfiguracionSerializer, ValorSerializer, ConfiguracionMasivaSerializer, RespaldoSerializer
)
from . import backup, demo

logger = logging.getLogger(__name__)


def _solo_administradores(request):
    if not IsAdministrador().has_permission(request, None):
        return Response(
            {'error': 'Solo administradores pueden modificar la configuración'},
            status=status.HTTP_403_FORBIDDEN
        )
    return None


@api_view(['GET', 'PUT'])
@permission_classes([AllowAny])
def configuracion_view(request):
    """
    GET: perfil del dojo y tema (público, lo usa la pantalla de login).
    PUT: guarda varias claves a la vez (solo administradores).
    """
    if request.method == 'GET':
        return Response(Configuracion.como_dict())

    if not request.user.is_authenticated:
        return Response({'error': 'Debe iniciar sesión'}, status=status.HTTP_401_UNAUTHORIZED)
    rechazo = _solo_administradores(request)
    if rechazo:
        return rechazo

    serializer = ConfiguracionMasivaSerializer(data={'valores': request.data})
    serializer.is_valid(raise_exception=True)
    valores = serializer.validated_data['valores']
    for clave, valor in valores.items():
        Configuracion.guardar(clave, valor)

    registrar_log(request, LogActions.CONFIGURAR, LogModules.CONFIGURACION,
                  f"Configuración actualizada: {', '.join(sorted(valores))}")
    return Response({
        'message': 'Configuración actualizada exitosamente',
        'config': Configuracion.como_dict(),
    })


@api_view(['GET', 'PUT'])
@permission_classes([IsAuthenticated])
def configuracion_clave_view(request, clave):
    """Leer o actualizar (solo administradores) una clave concreta"""
    if request.method == 'GET':
        return Response(ConfiguracionSerializer(get_object_or_404(Configuracion, clave=clave)).data)

    rechazo = _solo_administradores(request)
    if rechazo:
        return rechazo

    serializer = ValorSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    configuracion = Configuracion.guardar(clave, serializer.validated_data['valor'])
    if 'descripcion' in serializer.validated_data:
        configuracion.descripcion = serializer.validated_data['descripcion']
        configuracion.save(update_fields=['descripcion', 'updated_at'])

    registrar_log(request, LogActions.CONFIGURAR, LogModules.CONFIGURACION, f'Configuración actualizada: {clave}')
    return Response(ConfiguracionSerializer(configuracion).data)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdministrador])
def restablecer_view(request):
    """Vuelve el perfil del dojo y el tema a los valores por defecto"""
    Configuracion.restablecer()
    registrar_log(request, LogActions.CONFIGURAR, LogModules.CONFIGURACION, 'Configuración restablecida')
    return Response({
        'message': 'Configuración restablecida',
        'config': Configuracion.como_dict(),
    })


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdministrador])
def exportar_view(request):
    """Respaldo completo en JSON"""
    respaldo = backup.exportar()
    backup.registrar_backup()
    registrar_log(request, LogActions.EXPORTAR, LogModules.SISTEMA, 'Respaldo de datos exportado')
    return Response(respaldo)


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdministrador])
def importar_view(request):
    """Restaura un respaldo generado por la exportación"""
    serializer = RespaldoSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    importados = backup.importar(serializer.validated_data['respaldo'])
    registrar_log(request, LogActions.IMPORTAR, LogModules.SISTEMA,
                  f'Respaldo importado: {sum(importados.values())} registros')
    return Response({
        'message': 'Respaldo importado exitosamente',
        'importados': importados,
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdministrador])
def registrar_backup_view(request):
    fecha = backup.registrar_backup()
    registrar_log(request, LogActions.EXPORTAR, LogModules.SISTEMA, 'Respaldo registrado')
    return Response({'ultimo_backup': fecha})


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdministrador])
def estadisticas_view(request):
    return Response(backup.estadisticas())


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdministrador])
def integridad_view(request):
    """Revisión de consistencia de los datos (no modifica nada)"""
    return Response(backup.verificar_integridad())


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdministrador])
def generar_demo_view(request):
    resumen = demo.generar_demo()
    registrar_log(request, LogActions.CREAR, LogModules.SISTEMA, f'Datos de demostración generados: {resumen}')
    return Response({
        'message': 'Datos de demostración generados',
        'resumen': resumen,
    }, status=status.HTTP_201_CREATED)


@api_view(['DELETE'])
@permission_classes([IsAuthenticated, IsAdministrador])
def eliminar_demo_view(request):
    resumen = demo.eliminar_demo()
    registrar_log(request, LogActions.ELIMINAR, LogModules.SISTEMA, f'Datos de demostración eliminados: {resumen}')
    return Response({
        'message': 'Datos de demostración eliminados',
        'resumen': resumen,
    })
