#apps/schedules/tests.py:

from datetime import date, time

from django.contrib.auth.models import User, Group
from rest_framework import status
from rest_framework.test import APITestCase

from apps.authentication.models import ROL_ADMINISTRADOR, ROL_USUARIO
from apps.levels.management.commands.poblar_niveles import poblar_niveles
from apps.levels.models import CategoriaEdad
from apps.students.models import Alumno
from .models import HorarioClase, DiaFestivo


class HorariosAPITest(APITestCase):
    def setUp(self):
        poblar_niveles()
        self.admin = User.objects.create_user('admin', password='clave-segura-1')
        self.admin.groups.add(Group.objects.get_or_create(name=ROL_ADMINISTRADOR)[0])
        self.usuario = User.objects.create_user('usuario', password='clave-segura-1')
        self.usuario.groups.add(Group.objects.get_or_create(name=ROL_USUARIO)[0])
        self.infantil = CategoriaEdad.objects.get(nombre='Infantil')
        self.senior = CategoriaEdad.objects.get(nombre='Senior')

    def test_orden_por_dia_de_la_semana(self):
        HorarioClase.objects.create(dia_semana='Sábado', hora_inicio=time(10), hora_fin=time(12))
        HorarioClase.objects.create(dia_semana='Lunes', hora_inicio=time(18), hora_fin=time(19))
        HorarioClase.objects.create(dia_semana='Lunes', hora_inicio=time(7), hora_fin=time(8))
        HorarioClase.objects.create(dia_semana='Miércoles', hora_inicio=time(16), hora_fin=time(17))

        self.client.force_authenticate(self.admin)
        response = self.client.get('/api/horarios/clases/')
        self.assertEqual(
            [(h['dia_semana'], h['hora_inicio']) for h in response.data],
            [('Lunes', '07:00:00'), ('Lunes', '18:00:00'), ('Miércoles', '16:00:00'), ('Sábado', '10:00:00')]
        )

    def test_usuario_ve_clases_de_la_categoria_de_sus_alumnos(self):
        propia = HorarioClase.objects.create(
            dia_semana='Martes', hora_inicio=time(17), hora_fin=time(18), categoria_edad=self.infantil
        )
        HorarioClase.objects.create(
            dia_semana='Martes', hora_inicio=time(20), hora_fin=time(21), categoria_edad=self.senior
        )
        general = HorarioClase.objects.create(dia_semana='Sábado', hora_inicio=time(14), hora_fin=time(16))
        Alumno.objects.create(
            cedula='V-30000001', nombre='Sofía', fecha_nacimiento=date(2014, 1, 1),
            categoria_edad=self.infantil, usuario=self.usuario
        )

        self.client.force_authenticate(self.usuario)
        response = self.client.get('/api/horarios/clases/')
        self.assertEqual([h['id'] for h in response.data], [propia.pk, general.pk])

    def test_validaciones_de_horario(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post('/api/horarios/clases/', {
            'dia_semana': 'Lunes', 'hora_inicio': '18:00', 'hora_fin': '17:00'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('hora_fin', response.data)

        response = self.client.post('/api/horarios/clases/', {
            'dia_semana': 'Lunes', 'hora_inicio': '17:00', 'hora_fin': '18:00', 'capacidad_maxima': 0
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.post('/api/horarios/clases/', {
            'dia_semana': 'Lunes', 'hora_inicio': '17:00', 'hora_fin': '18:00',
            'categoria_edad': self.infantil.pk, 'instructor': 'Sensei Ana', 'capacidad_maxima': 20
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['categoria_edad_nombre'], 'Infantil')

    def test_dia_festivo_unico(self):
        DiaFestivo.objects.create(fecha=date(2025, 12, 25), descripcion='Navidad')
        self.client.force_authenticate(self.admin)
        response = self.client.post('/api/horarios/festivos/', {
            'fecha': '2025-12-25', 'descripcion': 'Otra vez'
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'fecha: Ya existe un día festivo en esa fecha')

    def test_usuarios_no_modifican(self):
        self.client.force_authenticate(self.usuario)
        response = self.client.post('/api/horarios/festivos/', {'fecha': '2025-01-01', 'descripcion': 'Año nuevo'})
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
