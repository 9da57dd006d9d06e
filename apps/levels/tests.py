#apps/levels/tests.py:

from datetime import date
from decimal import Decimal

from django.contrib.auth.models import User, Group
from django.test import SimpleTestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.authentication.models import ROL_ADMINISTRADOR, ROL_USUARIO
from .management.commands.poblar_niveles import poblar_niveles
from .models import CategoriaEdad, Cinta
from . import services


def categoria(nombre, edad_min, edad_max, orden=0, pk=None, precio=None):
    return CategoriaEdad(
        pk=pk, nombre=nombre, edad_min=edad_min, edad_max=edad_max,
        orden=orden, precio_mensualidad=precio
    )


def cintas_base():
    return [Cinta(pk=orden, nombre=nombre, orden=orden) for nombre, _, _, orden in services.CINTAS_BASE]


class EdadTest(SimpleTestCase):
    def test_edad_antes_y_despues_del_cumpleanos(self):
        nacimiento = date(2010, 5, 20)
        self.assertEqual(services.calcular_edad(nacimiento, date(2024, 5, 19)), 13)
        self.assertEqual(services.calcular_edad(nacimiento, date(2024, 5, 20)), 14)

    def test_nacido_el_29_de_febrero(self):
        self.assertEqual(services.calcular_edad(date(2012, 2, 29), date(2023, 2, 28)), 10)
        self.assertEqual(services.calcular_edad(date(2012, 2, 29), date(2023, 3, 1)), 11)

    def test_sumar_meses_ajusta_fin_de_mes(self):
        self.assertEqual(services.sumar_meses(date(2024, 1, 31), 1), date(2024, 2, 29))
        self.assertEqual(services.sumar_meses(date(2024, 11, 15), 3), date(2025, 2, 15))


class CategoriasPorEdadTest(SimpleTestCase):
    def test_gana_el_rango_mas_estrecho(self):
        amplia = categoria('Mixta', 0, 20, pk=1)
        estrecha = categoria('Infantil', 10, 12, pk=2)
        resultado = services.categorias_para_edad(11, [amplia, estrecha])
        self.assertEqual(resultado, [estrecha, amplia])

    def test_rango_inclusivo(self):
        alevin = categoria('Alevín', 8, 9, pk=1)
        self.assertEqual(services.categorias_para_edad(8, [alevin]), [alevin])
        self.assertEqual(services.categorias_para_edad(9, [alevin]), [alevin])
        self.assertEqual(services.categorias_para_edad(10, [alevin]), [])

    def test_sin_edad_maxima_no_tiene_tope(self):
        veterano = categoria('Veterano', 35, None, pk=1)
        self.assertEqual(services.categorias_para_edad(90, [veterano]), [veterano])

    def test_resolver_por_nombre_si_ningun_rango_coincide(self):
        grupo = categoria('Grupo Infantil', 50, 60, pk=1)
        self.assertEqual(services.resolver_categoria(10, [grupo]), grupo)

    def test_resolver_sin_coincidencias(self):
        self.assertIsNone(services.resolver_categoria(10, [categoria('Senior', 16, 34, pk=1)]))

    def test_nombre_fijo_por_edad(self):
        self.assertEqual(services.nombre_categoria_por_edad(7), 'Benjamín')
        self.assertEqual(services.nombre_categoria_por_edad(8), 'Alevín')
        self.assertEqual(services.nombre_categoria_por_edad(34), 'Senior')
        self.assertEqual(services.nombre_categoria_por_edad(40), 'Veterano')
        self.assertEqual(services.nombre_categoria_por_edad(40, 'en'), 'Veteran')


class ReasignarCategoriaTest(SimpleTestCase):
    def setUp(self):
        self.benjamin = categoria('Benjamín', 0, 7, pk=1)
        self.alevin = categoria('Alevín', 8, 9, pk=2)
        self.categorias = [self.benjamin, self.alevin]

    def test_categoria_vigente_se_conserva(self):
        self.assertEqual(
            services.reasignar_categoria(self.benjamin, 6, self.categorias),
            (self.benjamin, None)
        )

    def test_cambia_a_la_categoria_de_la_nueva_edad(self):
        nueva, aviso = services.reasignar_categoria(self.benjamin, 9, self.categorias)
        self.assertEqual(nueva, self.alevin)
        self.assertIn('Alevín', aviso)

    def test_sin_categoria_para_la_edad_se_limpia(self):
        nueva, aviso = services.reasignar_categoria(self.alevin, 30, self.categorias, 'en')
        self.assertIsNone(nueva)
        self.assertIn('30', aviso)

    def test_solapamientos(self):
        mini = categoria('Mini', 5, 8, pk=3)
        self.assertEqual(services.solapamientos(mini, self.categorias + [mini]), self.categorias)


class CintasPermitidasTest(SimpleTestCase):
    def test_benjamin_llega_hasta_naranja(self):
        permitidas = services.cintas_permitidas(categoria('Benjamín', 0, 7), cintas_base())
        self.assertEqual([c.nombre for c in permitidas], ['Blanco', 'Amarillo', 'Naranja'])

    def test_cadete_llega_hasta_marron(self):
        permitidas = services.cintas_permitidas(categoria('Cadete', 12, 13), cintas_base())
        self.assertEqual(permitidas[-1].nombre, 'Marrón')
        self.assertEqual(len(permitidas), 6)

    def test_categoria_no_tabulada_permite_todas(self):
        permitidas = services.cintas_permitidas(categoria('Adultos', 18, 99), cintas_base())
        self.assertEqual(len(permitidas), 7)

    def test_normalizar_cinta(self):
        self.assertEqual(services.normalizar_cinta('Marrón'), 'marron')
        self.assertEqual(services.normalizar_cinta(' Blanca '), 'blanco')
        self.assertEqual(services.normalizar_cinta('NEGRA'), 'negro')


class TiempoPreparacionTest(SimpleTestCase):
    def test_multiplicador_por_categoria(self):
        self.assertEqual(services.calcular_tiempo_preparacion('Infantil', 'Verde'), 7)
        self.assertEqual(services.calcular_tiempo_preparacion('Benjamín', 'Amarilla'), 4)

    def test_redondeo_medio_hacia_arriba(self):
        # 5 * 1.1 = 5.5
        self.assertEqual(services.calcular_tiempo_preparacion('Junior', 'Amarillo'), 6)

    def test_limites(self):
        # 4 * 0.8 = 3.2 y 20 * 1.3 = 26
        self.assertEqual(services.calcular_tiempo_preparacion('Benjamín', 'Blanco'), 3)
        self.assertEqual(services.calcular_tiempo_preparacion('Veterano', 'Negro'), 24)

    def test_cinta_desconocida_usa_base_por_defecto(self):
        self.assertEqual(services.calcular_tiempo_preparacion('Cadete', 'Roja'), 6)
        self.assertEqual(services.calcular_tiempo_preparacion('', ''), 6)


class PrecioTest(SimpleTestCase):
    def test_precio_de_categoria_o_base(self):
        self.assertEqual(
            services.precio_para(categoria('Senior', 16, 34, precio=Decimal('40.00')), Decimal('50')),
            Decimal('40.00')
        )
        self.assertEqual(services.precio_para(categoria('Senior', 16, 34), Decimal('50')), Decimal('50'))
        self.assertEqual(services.precio_para(None, Decimal('35.5')), Decimal('35.5'))


class NivelesAPITest(APITestCase):
    def setUp(self):
        poblar_niveles()
        self.admin = User.objects.create_user('admin', password='clave-segura-1')
        self.admin.groups.add(Group.objects.get_or_create(name=ROL_ADMINISTRADOR)[0])
        self.usuario = User.objects.create_user('usuario', password='clave-segura-1')
        self.usuario.groups.add(Group.objects.get_or_create(name=ROL_USUARIO)[0])

    def test_poblar_niveles_es_idempotente(self):
        self.assertEqual(poblar_niveles(), ([], []))
        self.assertEqual(CategoriaEdad.objects.count(), 7)
        self.assertEqual(Cinta.objects.count(), 7)

    def test_por_edad(self):
        self.client.force_authenticate(self.usuario)
        response = self.client.get('/api/niveles/categorias/por_edad/', {'edad': 10})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['nombre_categoria'], 'Infantil')
        self.assertEqual(response.data['categoria_sugerida']['nombre'], 'Infantil')

    def test_por_edad_desde_fecha_de_nacimiento(self):
        self.client.force_authenticate(self.usuario)
        nacimiento = date(timezone.localdate().year - 14, 1, 1)
        response = self.client.get(
            '/api/niveles/categorias/por_edad/', {'fecha_nacimiento': nacimiento.isoformat()}
        )
        self.assertEqual(response.data['edad'], 14)

    def test_por_edad_sin_parametros(self):
        self.client.force_authenticate(self.usuario)
        response = self.client.get('/api/niveles/categorias/por_edad/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)

    def test_crear_categoria_solapada_devuelve_advertencia(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            '/api/niveles/categorias/', {'nombre': 'Mini', 'edad_min': 5, 'edad_max': 8}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn('Benjamín', response.data['advertencia'])

    def test_rango_invertido(self):
        self.client.force_authenticate(self.admin)
        response = self.client.post(
            '/api/niveles/categorias/', {'nombre': 'Mal', 'edad_min': 10, 'edad_max': 5}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_solo_administradores_modifican(self):
        self.client.force_authenticate(self.usuario)
        response = self.client.post(
            '/api/niveles/cintas/', {'nombre': 'Roja', 'color_hex': '#FF0000', 'orden': 8}, format='json'
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_cintas_permitidas_de_categoria(self):
        self.client.force_authenticate(self.usuario)
        alevin = CategoriaEdad.objects.get(nombre='Alevín')
        response = self.client.get(f'/api/niveles/categorias/{alevin.pk}/cintas_permitidas/')
        self.assertEqual(response.data['cinta_maxima'], 'verde')
        self.assertEqual([c['nombre'] for c in response.data['cintas']], ['Blanco', 'Amarillo', 'Naranja', 'Verde'])
