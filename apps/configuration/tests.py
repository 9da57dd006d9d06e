#apps/configuration/tests.py:

from datetime import date

from django.contrib.auth.models import User, Group
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APITestCase

from apps.authentication.models import LogActividad, ROL_ADMINISTRADOR, ROL_INSTRUCTOR, ROL_USUARIO
from apps.evaluations.models import Evaluacion
from apps.guardians.models import Representante
from apps.levels.management.commands.poblar_niveles import poblar_niveles
from apps.levels.models import CategoriaEdad, Cinta
from apps.payments.models import Pago
from apps.schedules.models import HorarioClase
from apps.students.models import Alumno
from .models import Configuracion, VALORES_DEFECTO
from . import backup, demo


def usuario_con_rol(username, rol):
    user = User.objects.create_user(username, password='clave-segura-1')
    user.groups.add(Group.objects.get_or_create(name=rol)[0])
    return user


class ConfiguracionModelTest(TestCase):
    def test_valores_por_defecto_y_guardados(self):
        self.assertEqual(Configuracion.como_dict(), VALORES_DEFECTO)
        Configuracion.guardar('dojo_nombre', 'Dojo Central')
        self.assertEqual(Configuracion.como_dict()['dojo_nombre'], 'Dojo Central')

        Configuracion.restablecer()
        self.assertEqual(Configuracion.como_dict()['dojo_nombre'], VALORES_DEFECTO['dojo_nombre'])


class BackupTest(TestCase):
    def setUp(self):
        poblar_niveles()
        self.alumno = Alumno.objects.create(
            cedula='V-12345678', nombre='Ana', fecha_nacimiento=date(2010, 3, 3),
            categoria_edad=CategoriaEdad.objects.get(nombre='Infantil'),
        )

    def test_exportar_e_importar(self):
        respaldo = backup.exportar()
        self.assertEqual(respaldo['version'], 1)
        self.assertEqual(len(respaldo['datos']['students.alumno']), 1)

        Alumno.objects.all().delete()
        importados = backup.importar(respaldo)
        self.assertEqual(importados['students.alumno'], 1)
        self.assertTrue(Alumno.objects.filter(cedula='V-12345678').exists())

    def test_importar_rechaza_tablas_desconocidas(self):
        with self.assertRaises(backup.ReglaNegocioError):
            backup.importar({'datos': {'auth.user': []}})
        with self.assertRaises(backup.ReglaNegocioError):
            backup.importar([])

    def test_importar_rechaza_campos_desconocidos(self):
        respaldo = {'datos': {'levels.cinta': [
            {'model': 'levels.cinta', 'pk': 50, 'fields': {'nombre': 'Roja', 'colorx': '#f00'}}
        ]}}
        with self.assertRaises(backup.ReglaNegocioError):
            backup.importar(respaldo)
        self.assertFalse(Cinta.objects.filter(pk=50).exists())

    def test_integridad_detecta_edad_fuera_de_categoria(self):
        resultado = backup.verificar_integridad(hoy=date(2025, 6, 1))
        self.assertEqual(resultado['estado'], 'problemas_encontrados')
        mensajes = [p['mensaje'] for p in resultado['problemas']]
        self.assertTrue(any('ya no corresponde' in m for m in mensajes))
        self.assertTrue(any('sin cinta' in m for m in mensajes))

    def test_registrar_backup(self):
        self.assertEqual(backup.estadisticas()['ultimo_backup'], 'Nunca')
        fecha = backup.registrar_backup()
        self.assertEqual(backup.estadisticas()['ultimo_backup'], fecha)


class DemoTest(TestCase):
    def setUp(self):
        usuario_con_rol('sensei', ROL_INSTRUCTOR)

    def test_generar_y_eliminar(self):
        hoy = date(2025, 3, 10)
        resumen = demo.generar_demo(hoy=hoy)
        self.assertEqual(resumen['alumnos'], len(demo.ALUMNOS_DEMO))
        self.assertEqual(resumen['horarios'], len(demo.HORARIOS_DEMO))
        self.assertEqual(resumen['pagos'], 4)
        self.assertEqual(resumen['evaluaciones'], 1)
        self.assertEqual(
            Alumno.objects.get(cedula='V-30000001').representantes.get().representante.cedula,
            demo.REPRESENTANTE_DEMO[0]
        )

        real = Alumno.objects.create(
            cedula='V-99999999', nombre='Real', fecha_nacimiento=date(2000, 1, 1),
            categoria_edad=CategoriaEdad.objects.get(nombre='Senior'),
        )
        demo.eliminar_demo()
        self.assertEqual(list(Alumno.objects.all()), [real])
        self.assertFalse(Pago.objects.exists())
        self.assertFalse(Evaluacion.objects.exists())
        self.assertFalse(HorarioClase.objects.exists())
        self.assertFalse(Representante.objects.exists())
        self.assertEqual(list(CategoriaEdad.objects.values_list('nombre', flat=True)), ['Senior'])


class ConfiguracionAPITest(APITestCase):
    def setUp(self):
        self.admin = usuario_con_rol('admin', ROL_ADMINISTRADOR)
        self.usuario = usuario_con_rol('usuario', ROL_USUARIO)

    def test_lectura_publica(self):
        response = self.client.get('/api/configuracion/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['tema_modo'], 'light')

    def test_actualizar_varias_claves(self):
        self.client.force_authenticate(self.usuario)
        response = self.client.put('/api/configuracion/', {'dojo_nombre': 'X'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(self.admin)
        response = self.client.put(
            '/api/configuracion/', {'dojo_nombre': 'Dojo Central', 'tema_modo': 'dark'}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['config']['dojo_nombre'], 'Dojo Central')
        self.assertTrue(LogActividad.objects.filter(modulo='CONFIGURACION').exists())

        response = self.client.put('/api/configuracion/', {'clave_rara': '1'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_una_clave(self):
        self.client.force_authenticate(self.admin)
        response = self.client.put('/api/configuracion/dojo_lema/', {'valor': 'Respeto'}, format='json')
        self.assertEqual(response.data['valor'], 'Respeto')
        self.assertEqual(self.client.get('/api/configuracion/dojo_lema/').data['valor'], 'Respeto')
        self.assertEqual(
            self.client.get('/api/configuracion/no_existe/').status_code, status.HTTP_404_NOT_FOUND
        )

    def test_backup_solo_administradores(self):
        self.client.force_authenticate(self.usuario)
        self.assertEqual(
            self.client.get('/api/configuracion/backup/exportar/').status_code, status.HTTP_403_FORBIDDEN
        )
        self.client.force_authenticate(self.admin)
        exportado = self.client.get('/api/configuracion/backup/exportar/')
        self.assertEqual(exportado.status_code, status.HTTP_200_OK)
        self.assertNotEqual(self.client.get('/api/configuracion/backup/estadisticas/').data['ultimo_backup'], 'Nunca')

    def test_importar_formato_invalido(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            '/api/configuracion/backup/importar/', {'respaldo': {'datos': 'nada'}}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error'], 'Formato de respaldo inválido')
