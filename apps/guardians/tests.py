#apps/guardians/tests.py:

from datetime import date

from django.contrib.auth.models import User, Group
from rest_framework import status
from rest_framework.test import APITestCase

from apps.authentication.models import ROL_ADMINISTRADOR, ROL_USUARIO
from apps.payments.models import ConfigPagos
from apps.students.models import Alumno, AlumnoRepresentante
from .models import Representante


class RepresentanteAPITest(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user('admin', password='clave-segura-1')
        self.admin.groups.add(Group.objects.get_or_create(name=ROL_ADMINISTRADOR)[0])
        self.client.force_authenticate(self.admin)

    def test_crear_normaliza_la_cedula(self):
        response = self.client.post('/api/representantes/', {
            'cedula': ' v-20000001 ', 'nombre': 'Laura Pérez', 'telefono': '0412-1234567'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['cedula'], 'V-20000001')
        self.assertEqual(response.data['alumnos_asignados'], [])

    def test_cedula_duplicada(self):
        Representante.objects.create(cedula='V-20000001', nombre='Laura')
        response = self.client.post('/api/representantes/', {
            'cedula': 'V-20000001', 'nombre': 'Otra'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'cedula: Ya existe un representante con esta cédula')

    def test_reglas_del_pais_configurado(self):
        config = ConfigPagos.cargar()
        config.pais_configuracion = 'usa'
        config.save()
        response = self.client.post('/api/representantes/', {
            'cedula': 'V-20000001', 'nombre': 'Laura'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        response = self.client.post('/api/representantes/', {
            'cedula': '123-45-6789', 'nombre': 'Laura', 'telefono': '(555) 123-4567'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_no_se_elimina_con_alumnos(self):
        representante = Representante.objects.create(cedula='V-20000001', nombre='Laura')
        alumno = Alumno.objects.create(cedula='V-30000001', nombre='Sofía', fecha_nacimiento=date(2016, 5, 5))
        AlumnoRepresentante.objects.create(alumno=alumno, representante=representante, parentesco='MADRE')

        response = self.client.delete(f'/api/representantes/{representante.pk}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        alumnos = self.client.get(f'/api/representantes/{representante.pk}/alumnos/')
        self.assertEqual(alumnos.data[0]['parentesco'], 'MADRE')

        AlumnoRepresentante.objects.all().delete()
        response = self.client.delete(f'/api/representantes/{representante.pk}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

    def test_sin_alumnos(self):
        libre = Representante.objects.create(cedula='V-20000001', nombre='Libre')
        ocupado = Representante.objects.create(cedula='V-20000002', nombre='Ocupado')
        alumno = Alumno.objects.create(cedula='V-30000001', nombre='Sofía', fecha_nacimiento=date(2016, 5, 5))
        AlumnoRepresentante.objects.create(alumno=alumno, representante=ocupado)

        response = self.client.get('/api/representantes/sin_alumnos/')
        self.assertEqual([r['id'] for r in response.data], [libre.pk])

    def test_usuarios_solo_leen(self):
        usuario = User.objects.create_user('usuario', password='clave-segura-1')
        usuario.groups.add(Group.objects.get_or_create(name=ROL_USUARIO)[0])
        self.client.force_authenticate(usuario)
        self.assertEqual(self.client.get('/api/representantes/').status_code, status.HTTP_200_OK)
        response = self.client.post('/api/representantes/', {'cedula': 'V-20000009', 'nombre': 'X'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
