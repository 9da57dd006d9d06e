#apps/authentication/tests.py:

from datetime import timedelta

from django.contrib.auth.models import User, Group
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.payments.models import ConfigPagos
from .models import LogActividad, PerfilUsuario, ROL_ADMINISTRADOR, ROL_INSTRUCTOR, ROL_USUARIO
from .permissions import es_personal
from .services import limpiar_logs


class AuthAPITest(APITestCase):
    def setUp(self):
        self.admin = User.objects.create_user('admin', password='clave-segura-1')
        self.admin.groups.add(Group.objects.get(name=ROL_ADMINISTRADOR))
        self.usuario = User.objects.create_user('usuario', password='clave-segura-1')
        self.usuario.groups.add(Group.objects.get(name=ROL_USUARIO))

    def test_grupos_por_defecto(self):
        self.assertEqual(
            set(Group.objects.values_list('name', flat=True)),
            {ROL_ADMINISTRADOR, ROL_INSTRUCTOR, ROL_USUARIO}
        )

    def test_login_devuelve_tokens_y_registra_log(self):
        response = self.client.post('/api/auth/login/', {'username': 'usuario', 'password': 'clave-segura-1'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)
        self.assertEqual(response.data['user']['roles'], [ROL_USUARIO])
        self.assertTrue(LogActividad.objects.filter(accion='LOGIN', usuario=self.usuario).exists())

    def test_login_invalido(self):
        response = self.client.post('/api/auth/login/', {'username': 'usuario', 'password': 'otra'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Credenciales inválidas')

    def test_registro_solo_administradores(self):
        datos = {
            'username': 'nuevo', 'password': 'clave-segura-2', 'password_confirm': 'clave-segura-2',
            'roles': [ROL_INSTRUCTOR], 'idioma': 'en',
        }
        self.client.force_authenticate(self.usuario)
        self.assertEqual(
            self.client.post('/api/auth/register/', datos, format='json').status_code,
            status.HTTP_403_FORBIDDEN
        )
        self.client.force_authenticate(self.admin)
        response = self.client.post('/api/auth/register/', datos, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        nuevo = User.objects.get(username='nuevo')
        self.assertTrue(es_personal(nuevo))
        self.assertEqual(PerfilUsuario.de(nuevo).idioma, 'en')

    def test_registro_con_rol_inexistente(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post('/api/auth/register/', {
            'username': 'nuevo', 'password': 'clave-segura-2', 'password_confirm': 'clave-segura-2',
            'roles': ['Sensei'],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_cambiar_idioma(self):
        self.client.force_authenticate(self.usuario)
        response = self.client.put('/api/auth/cambiar-idioma/', {'idioma': 'en'})
        self.assertEqual(response.data['idioma'], 'en')
        self.assertEqual(
            self.client.put('/api/auth/cambiar-idioma/', {'idioma': 'fr'}).status_code,
            status.HTTP_400_BAD_REQUEST
        )

    def test_idioma_global_actualiza_usuarios_y_sistema(self):
        self.client.force_authenticate(self.admin)
        response = self.client.put('/api/auth/cambiar-idioma-global/', {'idioma': 'en'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(PerfilUsuario.de(self.usuario).idioma, 'en')
        self.assertEqual(ConfigPagos.cargar().idioma_sistema, 'en')

        self.client.force_authenticate(None)
        self.assertEqual(self.client.get('/api/auth/idioma-sistema/').data['idioma_sistema'], 'en')

    def test_instructores_activos(self):
        instructor = User.objects.create_user('sensei', password='clave-segura-1', first_name='Ana')
        instructor.groups.add(Group.objects.get(name=ROL_INSTRUCTOR))
        inactivo = User.objects.create_user('viejo', password='clave-segura-1', is_active=False)
        inactivo.groups.add(Group.objects.get(name=ROL_INSTRUCTOR))

        self.client.force_authenticate(self.usuario)
        response = self.client.get('/api/auth/instructores/')
        self.assertEqual([i['username'] for i in response.data], ['sensei'])
        self.assertEqual(response.data[0]['nombre_completo'], 'Ana')

    def test_limpiar_logs(self):
        viejo = LogActividad.objects.create(accion='LOGIN', modulo='AUTH', descripcion='viejo')
        LogActividad.objects.filter(pk=viejo.pk).update(fecha=timezone.now() - timedelta(days=120))
        LogActividad.objects.create(accion='LOGIN', modulo='AUTH', descripcion='reciente')

        self.assertEqual(limpiar_logs(90), 1)
        self.assertEqual(list(LogActividad.objects.values_list('descripcion', flat=True)), ['reciente'])

    def test_logs_solo_administradores(self):
        self.client.force_authenticate(self.usuario)
        self.assertEqual(self.client.get('/api/auth/logs/').status_code, status.HTTP_403_FORBIDDEN)
