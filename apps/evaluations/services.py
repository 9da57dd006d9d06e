# apps/evaluations/services.py

"""
Exámenes oficiales de cambio de cinta y selección de los alumnos que pueden
presentarlos. Un alumno es elegible solo si su cinta actual es exactamente la
cinta de origen del examen (sin coincidencias por rango).
"""

import logging
from collections import namedtuple

from django.db import transaction

from apps.common.exceptions import ReglaNegocioError
from apps.levels.services import normalizar_cinta
from .models import Evaluacion, AlumnoEvaluacion

logger = logging.getLogger(__name__)

ExamenOficial = namedtuple('ExamenOficial', 'id nombre_es nombre_en cinta_origen cinta_destino')

EXAMENES_OFICIALES = [
    ExamenOficial('blanco-amarillo', 'Blanco → Amarillo (6º Kyu)', 'White → Yellow (6th Kyu)', 'Blanco', 'Amarillo'),
    ExamenOficial('amarillo-naranja', 'Amarillo → Naranja (5º Kyu)', 'Yellow → Orange (5th Kyu)', 'Amarillo', 'Naranja'),
    ExamenOficial('naranja-verde', 'Naranja → Verde (4º Kyu)', 'Orange → Green (4th Kyu)', 'Naranja', 'Verde'),
    ExamenOficial('verde-azul', 'Verde → Azul (3º Kyu)', 'Green → Blue (3rd Kyu)', 'Verde', 'Azul'),
    ExamenOficial('azul-marron', 'Azul → Marrón (2º Kyu)', 'Blue → Brown (2nd Kyu)', 'Azul', 'Marrón'),
    ExamenOficial('marron-negro', 'Marrón → Negro (1º Dan)', 'Brown → Black (1st Dan)', 'Marrón', 'Negro'),
    ExamenOficial('dan-avanzado', 'Dan Avanzado (2º, 3º, etc.)', 'Advanced Dan (2nd, 3rd, etc.)', 'Negro', 'Negro'),
]


class ExamenDesconocido(ReglaNegocioError):
    pass


class SinAlumnosSeleccionados(ReglaNegocioError):
    pass


def examen_por_id(examen_id):
    for examen in EXAMENES_OFICIALES:
        if examen.id == examen_id:
            return examen
    raise ExamenDesconocido(f'Tipo de examen desconocido: {examen_id}')


def nombre_examen(examen, idioma='es'):
    return examen.nombre_en if idioma == 'en' else examen.nombre_es


def examen_como_dict(examen, idioma='es'):
    return {
        'id': examen.id,
        'nombre': nombre_examen(examen, idioma),
        'cinta_origen': examen.cinta_origen,
        'cinta_destino': examen.cinta_destino,
    }


def es_elegible(alumno, examen):
    if not alumno.activo or alumno.eliminado or alumno.cinta is None:
        return False
    return normalizar_cinta(alumno.cinta.nombre) == normalizar_cinta(examen.cinta_origen)


def alumnos_elegibles(examen, alumnos):
    """Alumnos activos cuya cinta coincide con la cinta de origen del examen"""
    return [alumno for alumno in alumnos if es_elegible(alumno, examen)]


def crear_evaluacion(datos, alumnos_ids, alumnos, idioma='es'):
    """
    Crea la evaluación y su lista de alumnos en una sola transacción. Los ids
    que no son elegibles se omiten con una advertencia; si no queda ninguno
    se rechaza la creación.
    """
    if not alumnos_ids:
        raise SinAlumnosSeleccionados('Debes seleccionar al menos un alumno para la evaluación')

    examen = examen_por_id(datos['examen_tipo'])
    por_id = {alumno.pk: alumno for alumno in alumnos}
    seleccionados = []
    advertencias = []
    for alumno_id in dict.fromkeys(alumnos_ids):
        alumno = por_id.get(alumno_id)
        if alumno is None:
            advertencias.append(f'Alumno {alumno_id} no encontrado')
        elif not es_elegible(alumno, examen):
            cinta = alumno.cinta.nombre if alumno.cinta else 'sin cinta'
            advertencias.append(
                f'{alumno.nombre} (tiene cinta {cinta}, requiere {examen.cinta_origen})'
            )
        else:
            seleccionados.append(alumno)

    if not seleccionados:
        raise SinAlumnosSeleccionados('Ninguno de los alumnos seleccionados puede presentar este examen')
    if advertencias:
        logger.warning("Alumnos no agregados a la evaluación: %s", ', '.join(advertencias))

    with transaction.atomic():
        evaluacion = Evaluacion.objects.create(
            nombre=datos.get('nombre') or nombre_examen(examen, idioma),
            examen_tipo=examen.id,
            fecha=datos['fecha'],
            hora=datos['hora'],
            descripcion=datos.get('descripcion', ''),
            instructor=datos.get('instructor'),
        )
        AlumnoEvaluacion.objects.bulk_create([
            AlumnoEvaluacion(evaluacion=evaluacion, alumno=alumno) for alumno in seleccionados
        ])
    logger.info("Evaluación %s creada con %s alumno(s)", evaluacion.pk, len(seleccionados))
    return evaluacion, seleccionados, advertencias
