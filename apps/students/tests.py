#apps/students/tests.py:

from datetime import date
from decimal import Decimal

from django.contrib.auth.models import User, Group
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.authentication.models import ROL_ADMINISTRADOR, ROL_INSTRUCTOR, ROL_USUARIO
from apps.guardians.models import Representante
from apps.levels.management.commands.poblar_niveles import poblar_niveles
from apps.levels.models import CategoriaEdad, Cinta
from apps.levels.services import sumar_meses
from .models import Alumno, AlumnoRepresentante
from . import services


def usuario_con_rol(username, rol):
    user = User.objects.create_user(username, password='clave-segura-1')
    user.groups.add(Group.objects.get_or_create(name=rol)[0])
    return user


def nacimiento_para_edad(edad):
    return date(timezone.localdate().year - edad, 1, 1)


class AlumnoServicesTest(TestCase):
    def setUp(self):
        poblar_niveles()
        self.instructor = usuario_con_rol('sensei', ROL_INSTRUCTOR)

    def test_crear_alumno_resuelve_categoria_sensei_y_preparacion(self):
        alumno = services.crear_alumno({
            'cedula': 'V-11111111',
            'nombre': 'Luis',
            'fecha_nacimiento': nacimiento_para_edad(10),
            'cinta': Cinta.objects.get(nombre='Verde'),
        })
        self.assertEqual(alumno.categoria_edad.nombre, 'Infantil')
        self.assertEqual(alumno.sensei, self.instructor)
        self.assertEqual(alumno.tiempo_preparacion_meses, 7)
        self.assertEqual(alumno.proximo_examen_fecha, sumar_meses(timezone.localdate(), 7))

    def test_sin_instructores_queda_sin_sensei(self):
        self.instructor.is_active = False
        self.instructor.save()
        alumno = services.crear_alumno({
            'cedula': 'V-22222222', 'nombre': 'Eva', 'fecha_nacimiento': nacimiento_para_edad(20),
        })
        self.assertIsNone(alumno.sensei)
        self.assertEqual(alumno.categoria_edad.nombre, 'Senior')

    def test_edad_con_la_fecha_local(self):
        alumno = Alumno(fecha_nacimiento=nacimiento_para_edad(10))
        self.assertEqual(alumno.edad, 10)

    def test_papelera(self):
        alumno = services.crear_alumno({
            'cedula': 'V-33333333', 'nombre': 'Ana', 'fecha_nacimiento': nacimiento_para_edad(12),
        })
        services.eliminar_alumno(alumno)
        alumno.refresh_from_db()
        self.assertTrue(alumno.eliminado)
        self.assertFalse(alumno.activo)
        self.assertIsNotNone(alumno.fecha_eliminacion)

        services.restaurar_alumno(alumno)
        alumno.refresh_from_db()
        self.assertFalse(alumno.eliminado)
        self.assertTrue(alumno.activo)
        self.assertIsNone(alumno.fecha_eliminacion)


class AlumnoAPITest(APITestCase):
    def setUp(self):
        poblar_niveles()
        self.admin = usuario_con_rol('admin', ROL_ADMINISTRADOR)
        self.instructor = usuario_con_rol('sensei', ROL_INSTRUCTOR)
        self.usuario = usuario_con_rol('usuario', ROL_USUARIO)
        self.client.force_authenticate(self.admin)

    def crear(self, **datos):
        base = {'cedula': 'V-12345678', 'nombre': 'Luis Rojas', 'fecha_nacimiento': nacimiento_para_edad(10)}
        base.update(datos)
        return self.client.post('/api/alumnos/', base, format='json')

    def test_crear_alumno(self):
        response = self.crear(cedula='v-12345678')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['cedula'], 'V-12345678')
        self.assertEqual(response.data['categoria_nombre'], 'Infantil')
        self.assertEqual(response.data['sensei'], self.instructor.pk)

    def test_cedula_duplicada_e_invalida(self):
        self.crear()
        duplicada = self.crear(nombre='Otro')
        self.assertEqual(duplicada.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('cedula', duplicada.data)
        invalida = self.crear(cedula='12345678')
        self.assertEqual(invalida.status_code, status.HTTP_400_BAD_REQUEST)

    def test_cinta_por_encima_del_tope_de_la_categoria(self):
        response = self.crear(
            fecha_nacimiento=nacimiento_para_edad(6), cinta=Cinta.objects.get(nombre='Verde').pk
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('cinta', response.data)

        response = self.crear(
            fecha_nacimiento=nacimiento_para_edad(6), cinta=Cinta.objects.get(nombre='Naranja').pk
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_telefono_segun_pais(self):
        response = self.crear(telefono='(555) 123-4567')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('telefono', response.data)

    def test_cambio_de_fecha_reasigna_categoria(self):
        alumno_id = self.crear().data['id']
        response = self.client.patch(
            f'/api/alumnos/{alumno_id}/', {'fecha_nacimiento': nacimiento_para_edad(8)}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['categoria_nombre'], 'Alevín')
        self.assertIn('Alevín', response.data['aviso_categoria'])

    def test_crear_con_representantes(self):
        representante = Representante.objects.create(cedula='V-20000001', nombre='Laura')
        response = self.crear(representantes=[{'representante': representante.pk, 'parentesco': 'MADRE'}])
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['representantes'][0]['parentesco'], 'MADRE')

    def test_representante_repetido(self):
        representante = Representante.objects.create(cedula='V-20000003', nombre='Laura')
        response = self.crear(representantes=[
            {'representante': representante.pk}, {'representante': representante.pk, 'parentesco': 'MADRE'}
        ])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('representantes', response.data)
        self.assertFalse(Alumno.objects.exists())

    def test_papelera_por_api(self):
        alumno_id = self.crear().data['id']
        self.assertEqual(self.client.delete(f'/api/alumnos/{alumno_id}/').status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.get('/api/alumnos/').data, [])
        self.assertEqual(len(self.client.get('/api/alumnos/eliminados/').data), 1)

        restaurado = self.client.post(f'/api/alumnos/{alumno_id}/restaurar/')
        self.assertEqual(restaurado.status_code, status.HTTP_200_OK)
        self.assertTrue(restaurado.data['alumno']['activo'])

        # solo se borra definitivamente desde la papelera
        self.assertEqual(
            self.client.delete(f'/api/alumnos/{alumno_id}/permanente/').status_code,
            status.HTTP_404_NOT_FOUND
        )
        self.client.delete(f'/api/alumnos/{alumno_id}/')
        self.assertEqual(
            self.client.delete(f'/api/alumnos/{alumno_id}/permanente/').status_code,
            status.HTTP_204_NO_CONTENT
        )
        self.assertFalse(Alumno.objects.filter(pk=alumno_id).exists())

    def test_usuario_solo_ve_sus_alumnos(self):
        self.crear()
        propio = services.crear_alumno({
            'cedula': 'V-99999999', 'nombre': 'Propio', 'fecha_nacimiento': nacimiento_para_edad(15),
        }, usuario=self.usuario)
        self.client.force_authenticate(self.usuario)
        response = self.client.get('/api/alumnos/')
        self.assertEqual([a['id'] for a in response.data], [propio.pk])
        self.assertEqual(self.crear(cedula='V-55555555').status_code, status.HTTP_403_FORBIDDEN)

    def test_inscripcion_propia(self):
        self.client.force_authenticate(self.usuario)
        response = self.client.post('/api/alumnos/inscribirme/', {
            'cedula': 'V-44444444', 'nombre': 'Yo Mismo', 'fecha_nacimiento': nacimiento_para_edad(25),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['nombre_categoria'], 'Senior')
        self.assertEqual(response.data['primer_pago']['total_usd'], Decimal('65.00'))
        self.assertEqual(Alumno.objects.get(cedula='V-44444444').usuario, self.usuario)

    def test_asignar_sensei(self):
        alumno_id = self.crear().data['id']
        response = self.client.post(f'/api/alumnos/{alumno_id}/asignar_sensei/', {'sensei_id': self.usuario.pk})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.post(f'/api/alumnos/{alumno_id}/asignar_sensei/', {'sensei_id': self.instructor.pk})
        self.assertEqual(response.data['sensei'], self.instructor.pk)

    def test_vincular_y_desvincular_representante(self):
        alumno_id = self.crear().data['id']
        representante = Representante.objects.create(cedula='V-20000002', nombre='Pedro')
        url = f'/api/alumnos/{alumno_id}/asignar_representante/'

        self.assertEqual(
            self.client.post(url, {'representante': representante.pk, 'parentesco': 'PADRE'}).status_code,
            status.HTTP_201_CREATED
        )
        self.assertEqual(
            self.client.post(url, {'representante': representante.pk}).status_code,
            status.HTTP_400_BAD_REQUEST
        )

        url = f'/api/alumnos/{alumno_id}/desasignar_representante/?representante={representante.pk}'
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_200_OK)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(AlumnoRepresentante.objects.exists())

    def test_categorias_y_cintas_permitidas(self):
        response = self.client.get(
            '/api/alumnos/categorias_permitidas/', {'fecha_nacimiento': nacimiento_para_edad(14).isoformat()}
        )
        self.assertEqual(response.data['categoria_sugerida']['nombre'], 'Junior')

        benjamin = CategoriaEdad.objects.get(nombre='Benjamín')
        response = self.client.get('/api/alumnos/cintas_permitidas/', {'categoria': benjamin.pk})
        self.assertEqual(len(response.data), 3)
