#apps/payments/views.py:

import logging

import pandas as pd
from django.db import DatabaseError
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import viewsets, status
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import SearchFilter, OrderingFilter

from apps.authentication.models import PerfilUsuario
from apps.authentication.permissions import IsAdministrador, es_personal
from apps.authentication.services import registrar_log, LogActions, LogModules
from apps.common.exceptions import ReglaNegocioError
from apps.common.mixins import ContextoLocalMixin
from apps.common.validators import limpiar_campos_invalidos
from .models import ConfigPagos, Pago
from .serializers import (
    ConfigPagosSerializer, PagoSerializer, VerificacionPagoSerializer, PagoUpdateSerializer
)
from . import services

logger = logging.getLogger(__name__)

CAMPOS_CUENTA = {'cedula_titular': 'cedula', 'telefono_cuenta': 'telefono', 'referencia': 'referencia'}
CAMPOS_DEPENDIENTES_DEL_METODO = ['banco_origen', 'referencia', 'cedula_titular', 'telefono_cuenta']


def _idioma(request):
    return PerfilUsuario.de(request.user).idioma


def _alumno_para(request, alumno_id=None):
    """Alumno indicado (si el usuario puede verlo) o el primero propio del usuario"""
    from apps.students.models import Alumno

    queryset = Alumno.objects.filter(eliminado=False).select_related('categoria_edad')
    if not es_personal(request.user):
        queryset = queryset.filter(usuario=request.user)
    if alumno_id:
        return get_object_or_404(queryset, pk=alumno_id)

    alumno = queryset.filter(usuario=request.user).order_by('id').first()
    if alumno is None:
        raise ReglaNegocioError('No se pudo determinar el alumno asociado')
    return alumno


@api_view(['GET', 'PUT', 'PATCH'])
@permission_classes([IsAuthenticated])
def config_pagos_view(request):
    """Obtener o actualizar (solo administradores) la configuración de pagos"""
    config = ConfigPagos.cargar()
    if request.method == 'GET':
        return Response(ConfigPagosSerializer(config).data)

    if not IsAdministrador().has_permission(request, None):
        return Response(
            {'error': 'Solo administradores pueden modificar la configuración de pagos'},
            status=status.HTTP_403_FORBIDDEN
        )
    serializer = ConfigPagosSerializer(config, data=request.data, partial=True)
    serializer.is_valid(raise_exception=True)
    serializer.save()
    registrar_log(request, LogActions.CONFIGURAR, LogModules.PAGOS, 'Configuración de pagos actualizada')
    return Response({
        'message': 'Configuración actualizada exitosamente',
        'config': serializer.data
    })


class PagoViewSet(ContextoLocalMixin, viewsets.ModelViewSet):
    queryset = Pago.objects.select_related('alumno', 'registrado_por')
    serializer_class = PagoSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ['mes', 'anio', 'estado', 'alumno', 'metodo_pago']
    search_fields = ['alumno__nombre', 'alumno__cedula', 'referencia']
    ordering_fields = ['fecha_pago', 'anio', 'mes', 'monto']
    ordering = ['-fecha_pago', '-created_at']

    def get_serializer_class(self):
        if self.action == 'create':
            return VerificacionPagoSerializer
        if self.action in ['update', 'partial_update']:
            return PagoUpdateSerializer
        return PagoSerializer

    def get_permissions(self):
        if self.action in ['update', 'partial_update', 'destroy', 'pendientes', 'resumen']:
            permission_classes = [IsAuthenticated, IsAdministrador]
        else:
            permission_classes = [IsAuthenticated]
        return [permission() for permission in permission_classes]

    def get_queryset(self):
        queryset = super().get_queryset()
        user = self.request.user
        if not es_personal(user):
            queryset = queryset.filter(alumno__usuario=user)
        return queryset

    def create(self, request, *args, **kwargs):
        """Registrar el pago del formulario de verificación"""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        datos = serializer.validated_data
        alumno = _alumno_para(request, datos.get('alumno'))

        pago, destino = services.registrar_pago(
            alumno, datos, request.user, timezone.localdate(), serializer.idioma
        )
        registrar_log(
            request, LogActions.CREAR, LogModules.PAGOS,
            f'Pago registrado: {alumno.nombre} - {pago.mes_correspondiente} ({pago.monto})'
        )
        return Response({
            'message': (
                f'¡Pago adelantado confirmado! Registrado para {pago.mes_correspondiente}'
                if pago.es_adelantado else
                'Tu pago ha sido verificado y confirmado exitosamente'
            ),
            'pago': PagoSerializer(pago).data,
            'advertencias': destino.advertencias,
        }, status=status.HTTP_201_CREATED)

    def perform_update(self, serializer):
        pago = serializer.save()
        registrar_log(self.request, LogActions.ACTUALIZAR, LogModules.PAGOS,
                      f'Pago {pago.pk} actualizado: estado {pago.estado}')

    def perform_destroy(self, instance):
        registrar_log(self.request, LogActions.ELIMINAR, LogModules.PAGOS,
                      f'Pago eliminado: {instance}')
        instance.delete()

    @action(detail=False, methods=['get'])
    def precio(self, request):
        """Monto a pagar por un alumno (mensualidad, inscripción, ajuste y conversión)"""
        alumno = _alumno_para(request, request.query_params.get('alumno'))
        config = ConfigPagos.cargar()
        hoy = timezone.localdate()
        pagos = list(alumno.pagos.all())
        destino = services.resolver_mes_pago(pagos, hoy, _idioma(request))
        desglose = services.calcular_monto(
            alumno.categoria_edad, config, destino, hoy, es_primer_pago=not pagos
        )
        return Response({
            'alumno_id': alumno.id,
            'nombre': alumno.nombre,
            'edad': alumno.edad,
            'categoria_nombre': alumno.categoria_edad.nombre if alumno.categoria_edad else None,
            **desglose.como_dict(),
        })

    @action(detail=False, methods=['get'])
    def ciclo(self, request):
        """A qué mes se acreditaría el próximo pago del alumno"""
        alumno = _alumno_para(request, request.query_params.get('alumno'))
        idioma = _idioma(request)
        hoy = timezone.localdate()
        advertencias = []
        verificado = True
        try:
            pagos = list(alumno.pagos.all())
        except DatabaseError:
            logger.exception("No se pudo leer el historial de pagos del alumno %s", alumno.pk)
            pagos = []
            verificado = False
            advertencias.append(
                'Could not verify previous payments' if idioma == 'en'
                else 'No se pudo verificar los pagos anteriores'
            )

        destino = services.resolver_mes_pago(pagos, hoy, idioma)
        desglose = services.calcular_monto(
            alumno.categoria_edad, ConfigPagos.cargar(), destino, hoy,
            es_primer_pago=verificado and not pagos
        )
        return Response({
            'alumno_id': alumno.id,
            'mes': destino.mes,
            'anio': destino.anio,
            'mes_correspondiente': services.nombre_mes(destino.mes, destino.anio, idioma),
            'es_adelantado': destino.es_adelantado,
            'advertencias': advertencias + destino.advertencias,
            'monto': desglose.como_dict(),
        })

    @action(detail=False, methods=['post'])
    def revalidar(self, request):
        """
        Vacía los datos del formulario que dejan de ser válidos al cambiar de
        país o de método de pago.
        """
        datos = dict(request.data.get('datos') or {})
        pais = request.data.get('pais') or ConfigPagos.cargar().pais_configuracion
        limpios, vaciados = limpiar_campos_invalidos(datos, CAMPOS_CUENTA, pais)

        metodo_anterior = request.data.get('metodo_pago_anterior')
        if metodo_anterior and metodo_anterior != datos.get('metodo_pago'):
            for campo in CAMPOS_DEPENDIENTES_DEL_METODO:
                if limpios.get(campo):
                    limpios[campo] = ''
                    if campo not in vaciados:
                        vaciados.append(campo)
        return Response({'datos': limpios, 'campos_vaciados': vaciados})

    @action(detail=False, methods=['get'], url_path=r'alumno/(?P<alumno_id>\d+)')
    def alumno(self, request, alumno_id=None):
        """Historial de pagos de un alumno"""
        alumno = _alumno_para(request, alumno_id)
        pagos = alumno.pagos.select_related('registrado_por').order_by('-anio', '-mes')
        return Response(PagoSerializer(pagos, many=True).data)

    @action(detail=False, methods=['get'])
    def pendientes(self, request):
        """Alumnos activos sin pago del mes actual"""
        from apps.students.models import Alumno

        hoy = timezone.localdate()
        con_pago = Pago.objects.filter(mes=hoy.month, anio=hoy.year).values('alumno_id')
        alumnos = Alumno.objects.filter(activo=True, eliminado=False).exclude(
            id__in=con_pago
        ).order_by('nombre')
        return Response({
            'mes': hoy.month,
            'anio': hoy.year,
            'alumnos': [
                {'id': a.id, 'nombre': a.nombre, 'cedula': a.cedula}
                for a in alumnos
            ]
        })

    @action(detail=False, methods=['get'])
    def resumen(self, request):
        """Ingresos por mes del año indicado (por defecto el actual)"""
        anio = request.query_params.get('anio') or timezone.localdate().year
        try:
            anio = int(anio)
        except ValueError:
            return Response({'error': 'Año inválido'}, status=status.HTTP_400_BAD_REQUEST)

        registros = list(Pago.objects.filter(anio=anio).values('mes', 'monto', 'estado', 'metodo_pago'))
        if not registros:
            return Response({'anio': anio, 'total': 0, 'meses': [], 'por_metodo': []})

        df = pd.DataFrame(registros)
        df['monto'] = df['monto'].astype(float)
        df['confirmado'] = df['estado'] == Pago.ESTADO_CONFIRMADO

        por_mes = df.groupby('mes').agg(
            total=('monto', 'sum'),
            pagos=('monto', 'count'),
            confirmados=('confirmado', 'sum'),
        ).reset_index()
        por_metodo = df.groupby('metodo_pago')['monto'].sum().round(2).reset_index()

        return Response({
            'anio': anio,
            'total': round(float(df['monto'].sum()), 2),
            'meses': [
                {
                    'mes': int(fila.mes),
                    'nombre': services.MESES_ES[int(fila.mes) - 1],
                    'total': round(float(fila.total), 2),
                    'pagos': int(fila.pagos),
                    'confirmados': int(fila.confirmados),
                }
                for fila in por_mes.itertuples()
            ],
            'por_metodo': por_metodo.to_dict(orient='records'),
        })
