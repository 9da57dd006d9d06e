# apps/students/services.py

import logging

from django.contrib.auth.models import User
from django.db import transaction
from django.utils import timezone

from apps.authentication.models import ROL_INSTRUCTOR
from apps.levels.models import CategoriaEdad
from apps.levels import services as niveles
from .models import Alumno, AlumnoRepresentante

logger = logging.getLogger(__name__)


def instructores_activos():
    return User.objects.filter(groups__name=ROL_INSTRUCTOR, is_active=True).distinct()


def sensei_aleatorio():
    """Un instructor activo cualquiera, o None si no hay"""
    sensei = instructores_activos().order_by('?').first()
    if sensei is None:
        logger.warning("No hay instructores activos para asignar como sensei")
    return sensei


def calcular_preparacion(categoria, cinta, desde=None):
    """(meses de preparación, fecha del próximo examen)"""
    desde = desde or timezone.localdate()
    meses = niveles.calcular_tiempo_preparacion(
        categoria.nombre if categoria else '',
        cinta.nombre if cinta else '',
    )
    return meses, niveles.sumar_meses(desde, meses)


def categoria_para_fecha(fecha_nacimiento):
    edad = niveles.calcular_edad(fecha_nacimiento, timezone.localdate())
    return niveles.resolver_categoria(edad, CategoriaEdad.objects.all())


@transaction.atomic
def crear_alumno(datos, representantes=None, usuario=None):
    """
    Crea el alumno resolviendo la categoría por la fecha de nacimiento si no
    se indicó, calcula la preparación hasta el próximo examen, le asigna un
    sensei al azar y lo vincula con sus representantes.
    """
    datos = dict(datos)
    if datos.get('categoria_edad') is None:
        datos['categoria_edad'] = categoria_para_fecha(datos['fecha_nacimiento'])
    if datos.get('sensei') is None:
        datos['sensei'] = sensei_aleatorio()
    if usuario is not None:
        datos['usuario'] = usuario

    meses, proximo = calcular_preparacion(datos['categoria_edad'], datos.get('cinta'))
    alumno = Alumno.objects.create(
        tiempo_preparacion_meses=meses,
        proximo_examen_fecha=proximo,
        **datos
    )
    for representante, parentesco in representantes or []:
        AlumnoRepresentante.objects.create(
            alumno=alumno, representante=representante, parentesco=parentesco
        )
    logger.info("Alumno %s creado en categoría %s", alumno.pk, alumno.categoria_edad)
    return alumno


def recalcular_preparacion(alumno):
    meses, proximo = calcular_preparacion(
        alumno.categoria_edad, alumno.cinta, alumno.fecha_inscripcion
    )
    alumno.tiempo_preparacion_meses = meses
    alumno.proximo_examen_fecha = proximo
    return alumno


def eliminar_alumno(alumno):
    """Baja lógica: el alumno queda en la papelera hasta restaurarlo"""
    alumno.eliminado = True
    alumno.activo = False
    alumno.fecha_eliminacion = timezone.now()
    alumno.save(update_fields=['eliminado', 'activo', 'fecha_eliminacion', 'updated_at'])


def restaurar_alumno(alumno):
    alumno.eliminado = False
    alumno.activo = True
    alumno.fecha_eliminacion = None
    alumno.save(update_fields=['eliminado', 'activo', 'fecha_eliminacion', 'updated_at'])
