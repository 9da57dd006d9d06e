# apps/configuration/backup.py

"""
Respaldo de las tablas del dojo en JSON usando los serializers de Django.
Los usuarios y el log de actividades no se incluyen.
"""

import logging

from django.apps import apps
from django.core import serializers
from django.core.exceptions import FieldDoesNotExist
from django.core.serializers.base import DeserializationError
from django.db import IntegrityError, transaction
from django.utils import timezone

from apps.common.exceptions import ReglaNegocioError
from apps.levels.services import calcular_edad
from .models import Configuracion, CLAVE_ULTIMO_BACKUP

logger = logging.getLogger(__name__)

# en orden de dependencias para poder importarlas
MODELOS_RESPALDO = [
    'levels.categoriaedad',
    'levels.cinta',
    'guardians.representante',
    'students.alumno',
    'students.alumnorepresentante',
    'payments.configpagos',
    'payments.pago',
    'evaluations.evaluacion',
    'evaluations.alumnoevaluacion',
    'schedules.horarioclase',
    'schedules.diafestivo',
    'configuration.configuracion',
]


def exportar():
    datos = {}
    for etiqueta in MODELOS_RESPALDO:
        modelo = apps.get_model(etiqueta)
        datos[etiqueta] = serializers.serialize('python', modelo.objects.order_by('pk'))
    return {
        'version': 1,
        'fecha': timezone.now().isoformat(),
        'datos': datos,
    }


def importar(respaldo):
    """
    Carga un respaldo generado por ``exportar``. Todo o nada: si un registro
    falla no se guarda ninguno. Devuelve el número de registros por tabla.
    """
    if not isinstance(respaldo, dict) or not isinstance(respaldo.get('datos'), dict):
        raise ReglaNegocioError('Formato de respaldo inválido')

    desconocidas = set(respaldo['datos']) - set(MODELOS_RESPALDO)
    if desconocidas:
        raise ReglaNegocioError(f"Tablas desconocidas en el respaldo: {', '.join(sorted(desconocidas))}")

    importados = {}
    try:
        with transaction.atomic():
            for etiqueta in MODELOS_RESPALDO:
                registros = respaldo['datos'].get(etiqueta) or []
                for objeto in serializers.deserialize('python', registros):
                    objeto.save()
                importados[etiqueta] = len(registros)
    except (DeserializationError, FieldDoesNotExist, IntegrityError) as exc:
        logger.warning("Importación de respaldo rechazada: %s", exc)
        raise ReglaNegocioError(f'No se pudo importar el respaldo: {exc}')

    logger.info("Respaldo importado: %s", importados)
    return importados


def registrar_backup():
    fecha = timezone.now().isoformat()
    Configuracion.guardar(CLAVE_ULTIMO_BACKUP, fecha)
    return fecha


def estadisticas():
    from django.contrib.auth.models import User
    from apps.authentication.models import LogActividad
    from apps.evaluations.models import Evaluacion
    from apps.payments.models import Pago
    from apps.students.models import Alumno

    ultimo = Configuracion.objects.filter(clave=CLAVE_ULTIMO_BACKUP).values_list('valor', flat=True).first()
    return {
        'total_alumnos': Alumno.objects.filter(eliminado=False).count(),
        'total_evaluaciones': Evaluacion.objects.count(),
        'total_pagos': Pago.objects.count(),
        'total_usuarios': User.objects.count(),
        'total_logs': LogActividad.objects.count(),
        'tablas': [
            {'tabla': etiqueta, 'registros': apps.get_model(etiqueta).objects.count()}
            for etiqueta in MODELOS_RESPALDO
        ],
        'ultimo_backup': ultimo or 'Nunca',
    }


def verificar_integridad(hoy=None):
    """Problemas de datos que conviene revisar; no modifica nada"""
    from apps.payments.models import Pago
    from apps.students.models import Alumno

    hoy = hoy or timezone.localdate()
    problemas = []
    alumnos = list(Alumno.objects.filter(eliminado=False).select_related('categoria_edad'))

    sin_categoria = [a for a in alumnos if a.categoria_edad is None]
    if sin_categoria:
        problemas.append({
            'tipo': 'advertencia',
            'mensaje': f'{len(sin_categoria)} alumno(s) sin categoría de edad asignada',
        })

    fuera_de_rango = [
        a for a in alumnos
        if a.categoria_edad is not None
        and not a.categoria_edad.contiene_edad(calcular_edad(a.fecha_nacimiento, hoy))
    ]
    if fuera_de_rango:
        problemas.append({
            'tipo': 'advertencia',
            'mensaje': f'{len(fuera_de_rango)} alumno(s) cuya edad ya no corresponde a su categoría',
            'alumnos': [a.id for a in fuera_de_rango],
        })

    sin_cinta = [a for a in alumnos if a.cinta_id is None]
    if sin_cinta:
        problemas.append({
            'tipo': 'advertencia',
            'mensaje': f'{len(sin_cinta)} alumno(s) sin cinta asignada',
        })

    pagos_inactivos = Pago.objects.filter(alumno__activo=False).count()
    if pagos_inactivos:
        problemas.append({
            'tipo': 'error',
            'mensaje': f'{pagos_inactivos} pago(s) de alumnos inactivos',
        })

    return {
        'estado': 'correcto' if not problemas else 'problemas_encontrados',
        'total_problemas': len(problemas),
        'problemas': problemas,
    }
