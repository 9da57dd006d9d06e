# apps/configuration/demo.py

import logging
from datetime import date, time, timedelta

from django.db import transaction
from django.utils import timezone

from apps.evaluations.models import Evaluacion
from apps.evaluations import services as evaluaciones
from apps.guardians.models import Representante
from apps.levels.management.commands.poblar_niveles import poblar_niveles
from apps.levels.models import CategoriaEdad, Cinta
from apps.levels.services import precio_para
from apps.payments.models import Pago
from apps.payments.services import nombre_mes
from apps.schedules.models import HorarioClase, DiaFestivo
from apps.students.models import Alumno, AlumnoRepresentante
from apps.students import services as alumnos_services

logger = logging.getLogger(__name__)

# día, inicio, fin, categoría, instructor, capacidad
HORARIOS_DEMO = [
    ('Lunes', time(16, 0), time(17, 0), 'Benjamín', 'Sensei María', 15),
    ('Miércoles', time(16, 0), time(17, 0), 'Benjamín', 'Sensei María', 15),
    ('Lunes', time(17, 0), time(18, 0), 'Alevín', 'Sensei Carlos', 18),
    ('Martes', time(17, 0), time(18, 30), 'Infantil', 'Sensei Ana', 20),
    ('Jueves', time(18, 30), time(20, 0), 'Cadete', 'Sensei Roberto', 22),
    ('Viernes', time(19, 0), time(20, 30), 'Junior', 'Sensei Miguel', 25),
    ('Martes', time(20, 0), time(21, 30), 'Senior', 'Sensei José', 30),
    ('Sábado', time(10, 0), time(12, 0), 'Senior', 'Sensei José', 30),
    ('Lunes', time(7, 0), time(8, 30), 'Veterano', 'Sensei Luis', 20),
    ('Sábado', time(14, 0), time(16, 0), None, 'Sensei Principal', 35),
]

# nombre, cédula, edad, cinta
ALUMNOS_DEMO = [
    ('Sofía Pérez', 'V-30000001', 6, 'Blanco'),
    ('Diego Rojas', 'V-30000002', 7, 'Blanco'),
    ('Valentina Díaz', 'V-30000003', 9, 'Amarillo'),
    ('Mateo González', 'V-30000004', 11, 'Naranja'),
    ('Camila Torres', 'V-30000005', 13, 'Verde'),
    ('Sebastián Castillo', 'V-30000006', 15, 'Azul'),
    ('Andrés Mendoza', 'V-30000007', 25, 'Marrón'),
    ('Gabriela Suárez', 'V-30000008', 41, 'Negro'),
]

REPRESENTANTE_DEMO = ('V-20000001', 'Laura Pérez', '04121234567')


def _fecha_para_edad(edad, hoy):
    # cumpleaños a mitad de año para que la edad sea estable durante la demo
    anio = hoy.year - edad - (1 if (hoy.month, hoy.day) < (6, 15) else 0)
    return date(anio, 6, 15)


@transaction.atomic
def generar_demo(hoy=None):
    """
    Crea categorías y cintas si faltan, horarios, un representante, alumnos
    con pagos del mes y una evaluación. Todo queda marcado como demo.
    """
    hoy = hoy or timezone.localdate()
    poblar_niveles(es_demo=True)
    categorias = {c.nombre: c for c in CategoriaEdad.objects.all()}
    cintas = {c.nombre: c for c in Cinta.objects.all()}

    horarios = [
        HorarioClase.objects.create(
            dia_semana=dia, hora_inicio=inicio, hora_fin=fin,
            categoria_edad=categorias.get(categoria) if categoria else None,
            instructor=instructor, capacidad_maxima=capacidad, es_demo=True,
        )
        for dia, inicio, fin, categoria, instructor, capacidad in HORARIOS_DEMO
    ]
    DiaFestivo.objects.get_or_create(
        fecha=date(hoy.year, 12, 25),
        defaults={'descripcion': 'Navidad', 'es_demo': True}
    )

    cedula, nombre, telefono = REPRESENTANTE_DEMO
    representante, _ = Representante.objects.get_or_create(
        cedula=cedula, defaults={'nombre': nombre, 'telefono': telefono, 'es_demo': True}
    )

    alumnos = []
    for nombre, cedula, edad, cinta in ALUMNOS_DEMO:
        if Alumno.objects.filter(cedula=cedula).exists():
            continue
        alumno = alumnos_services.crear_alumno({
            'nombre': nombre,
            'cedula': cedula,
            'fecha_nacimiento': _fecha_para_edad(edad, hoy),
            'cinta': cintas.get(cinta),
            'es_demo': True,
        })
        if edad < 18:
            AlumnoRepresentante.objects.create(alumno=alumno, representante=representante, parentesco='MADRE')
        alumnos.append(alumno)

    pagos = []
    for alumno in alumnos[::2]:
        pagos.append(Pago.objects.create(
            alumno=alumno,
            mes=hoy.month,
            anio=hoy.year,
            monto=precio_para(alumno.categoria_edad),
            metodo_pago='pago_movil',
            referencia=f'{alumno.pk:06d}',
            banco_origen='Banco de Venezuela',
            fecha_pago=hoy,
            mes_correspondiente=nombre_mes(hoy.month, hoy.year),
            estado=Pago.ESTADO_CONFIRMADO,
            es_demo=True,
        ))

    evaluacion = None
    examen = evaluaciones.examen_por_id('blanco-amarillo')
    elegibles = evaluaciones.alumnos_elegibles(examen, alumnos)
    if elegibles:
        evaluacion, _, _ = evaluaciones.crear_evaluacion(
            {'examen_tipo': examen.id, 'fecha': hoy + timedelta(days=30), 'hora': time(10, 0),
             'descripcion': 'Evaluación de demostración'},
            [a.pk for a in elegibles],
            elegibles,
        )
        evaluacion.es_demo = True
        evaluacion.save(update_fields=['es_demo'])

    resumen = {
        'horarios': len(horarios),
        'alumnos': len(alumnos),
        'pagos': len(pagos),
        'evaluaciones': 1 if evaluacion else 0,
    }
    logger.info("Datos de demostración generados: %s", resumen)
    return resumen


@transaction.atomic
def eliminar_demo():
    """Borra solo los registros marcados como demo"""
    resumen = {
        'pagos': Pago.objects.filter(es_demo=True).delete()[0],
        'evaluaciones': Evaluacion.objects.filter(es_demo=True).delete()[0],
        'alumnos': Alumno.objects.filter(es_demo=True).delete()[0],
        'horarios': HorarioClase.objects.filter(es_demo=True).delete()[0],
        'festivos': DiaFestivo.objects.filter(es_demo=True).delete()[0],
        'representantes': Representante.objects.filter(
            es_demo=True, alumnos_representados__isnull=True
        ).delete()[0],
        # las categorías demo en uso por alumnos reales se conservan
        'categorias': CategoriaEdad.objects.filter(
            es_demo=True, alumnos__isnull=True
        ).delete()[0],
    }
    logger.info("Datos de demostración eliminados: %s", resumen)
    return resumen
