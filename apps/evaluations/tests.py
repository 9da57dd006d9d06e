#apps/evaluations/tests.py:

from datetime import date, time, timedelta

from django.contrib.auth.models import User, Group
from django.test import SimpleTestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.authentication.models import ROL_ADMINISTRADOR, ROL_INSTRUCTOR, ROL_USUARIO
from apps.levels.management.commands.poblar_niveles import poblar_niveles
from apps.levels.models import Cinta
from apps.students.models import Alumno
from .models import Evaluacion, AlumnoEvaluacion
from . import services


def usuario_con_rol(username, rol):
    user = User.objects.create_user(username, password='clave-segura-1')
    user.groups.add(Group.objects.get_or_create(name=rol)[0])
    return user


class ElegibilidadTest(SimpleTestCase):
    def setUp(self):
        self.examen = services.examen_por_id('amarillo-naranja')

    def test_coincidencia_exacta_de_cinta(self):
        self.assertTrue(services.es_elegible(Alumno(cinta=Cinta(nombre='Amarillo')), self.examen))
        self.assertTrue(services.es_elegible(Alumno(cinta=Cinta(nombre='amarilla')), self.examen))
        self.assertFalse(services.es_elegible(Alumno(cinta=Cinta(nombre='Blanco')), self.examen))
        self.assertFalse(services.es_elegible(Alumno(cinta=Cinta(nombre='Naranja')), self.examen))

    def test_inactivos_y_sin_cinta_no_son_elegibles(self):
        self.assertFalse(services.es_elegible(Alumno(cinta=Cinta(nombre='Amarillo'), activo=False), self.examen))
        self.assertFalse(services.es_elegible(Alumno(cinta=Cinta(nombre='Amarillo'), eliminado=True), self.examen))
        self.assertFalse(services.es_elegible(Alumno(), self.examen))

    def test_dan_avanzado_parte_de_negro(self):
        examen = services.examen_por_id('dan-avanzado')
        self.assertTrue(services.es_elegible(Alumno(cinta=Cinta(nombre='Negra')), examen))

    def test_examen_desconocido(self):
        with self.assertRaises(services.ExamenDesconocido):
            services.examen_por_id('rojo-negro')

    def test_siete_examenes_en_orden(self):
        self.assertEqual(len(services.EXAMENES_OFICIALES), 7)
        self.assertEqual(services.EXAMENES_OFICIALES[0].cinta_origen, 'Blanco')
        self.assertEqual(services.nombre_examen(services.EXAMENES_OFICIALES[-1], 'en'), 'Advanced Dan (2nd, 3rd, etc.)')


class EvaluacionAPITest(APITestCase):
    def setUp(self):
        poblar_niveles()
        self.instructor = usuario_con_rol('sensei', ROL_INSTRUCTOR)
        self.admin = usuario_con_rol('admin', ROL_ADMINISTRADOR)
        self.usuario = usuario_con_rol('usuario', ROL_USUARIO)
        self.manana = timezone.localdate() + timedelta(days=1)

        self.amarillo = Alumno.objects.create(
            cedula='V-10000001', nombre='Ana', fecha_nacimiento=date(2015, 1, 1),
            cinta=Cinta.objects.get(nombre='Amarillo'), usuario=self.usuario
        )
        self.blanco = Alumno.objects.create(
            cedula='V-10000002', nombre='Beto', fecha_nacimiento=date(2015, 1, 1),
            cinta=Cinta.objects.get(nombre='Blanco')
        )

    def datos(self, **extra):
        datos = {
            'examen_tipo': 'amarillo-naranja',
            'fecha': self.manana.isoformat(),
            'hora': '10:00',
            'instructor': self.instructor.pk,
            'alumnos_ids': [self.amarillo.pk, self.blanco.pk],
        }
        datos.update(extra)
        return datos

    def test_solo_se_inscriben_los_elegibles(self):
        self.client.force_authenticate(self.instructor)
        response = self.client.post('/api/evaluaciones/', self.datos(), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['evaluacion']['total_alumnos'], 1)
        self.assertEqual(response.data['evaluacion']['nombre'], 'Amarillo → Naranja (5º Kyu)')
        self.assertEqual(len(response.data['advertencias']), 1)
        self.assertIn('Beto', response.data['advertencias'][0])

    def test_ningun_alumno_elegible(self):
        self.client.force_authenticate(self.instructor)
        response = self.client.post('/api/evaluaciones/', self.datos(alumnos_ids=[self.blanco.pk]), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Evaluacion.objects.exists())

        response = self.client.post('/api/evaluaciones/', self.datos(alumnos_ids=[]), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_fecha_pasada(self):
        self.client.force_authenticate(self.instructor)
        ayer = timezone.localdate() - timedelta(days=1)
        response = self.client.post('/api/evaluaciones/', self.datos(fecha=ayer.isoformat()), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('fecha', response.data)

    def test_usuario_no_crea_y_solo_ve_las_de_sus_alumnos(self):
        otra = Evaluacion.objects.create(
            nombre='Otra', examen_tipo='blanco-amarillo', fecha=self.manana, hora=time(9, 0)
        )
        AlumnoEvaluacion.objects.create(evaluacion=otra, alumno=self.blanco)
        propia = Evaluacion.objects.create(
            nombre='Propia', examen_tipo='amarillo-naranja', fecha=self.manana, hora=time(10, 0)
        )
        AlumnoEvaluacion.objects.create(evaluacion=propia, alumno=self.amarillo)

        self.client.force_authenticate(self.usuario)
        self.assertEqual(
            self.client.post('/api/evaluaciones/', self.datos(), format='json').status_code,
            status.HTTP_403_FORBIDDEN
        )
        response = self.client.get('/api/evaluaciones/')
        self.assertEqual([e['id'] for e in response.data], [propia.pk])

    def test_examenes_y_elegibles(self):
        self.client.force_authenticate(self.usuario)
        self.assertEqual(len(self.client.get('/api/evaluaciones/examenes/').data), 7)

        self.client.force_authenticate(self.instructor)
        response = self.client.get('/api/evaluaciones/elegibles/', {'examen': 'blanco-amarillo'})
        self.assertEqual([a['id'] for a in response.data['alumnos']], [self.blanco.pk])

        response = self.client.get('/api/evaluaciones/elegibles/', {'examen': 'nada'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_resultados_respetan_el_tiempo_de_preparacion(self):
        self.client.force_authenticate(self.instructor)
        evaluacion_id = self.client.post('/api/evaluaciones/', self.datos(), format='json').data['evaluacion']['id']
        url = f'/api/evaluaciones/{evaluacion_id}/resultados/'

        self.amarillo.proximo_examen_fecha = self.manana + timedelta(days=60)
        self.amarillo.save()
        self.assertEqual(self.client.get(url).data, [])

        self.amarillo.proximo_examen_fecha = self.manana
        self.amarillo.save()
        self.assertEqual(len(self.client.get(url).data), 1)

        response = self.client.post(url, {'alumno': self.amarillo.pk, 'notas': 'Aprobado'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(AlumnoEvaluacion.objects.get(alumno=self.amarillo).notas, 'Aprobado')

    def test_no_se_elimina_con_alumnos_inscritos(self):
        self.client.force_authenticate(self.admin)
        evaluacion_id = self.client.post('/api/evaluaciones/', self.datos(), format='json').data['evaluacion']['id']
        response = self.client.delete(f'/api/evaluaciones/{evaluacion_id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Evaluacion.objects.filter(pk=evaluacion_id).exists())
