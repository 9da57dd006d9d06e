#apps/payments/tests.py:

from datetime import date, timedelta
from decimal import Decimal

from django.contrib.auth.models import User, Group
from django.test import SimpleTestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.authentication.models import ROL_ADMINISTRADOR, ROL_USUARIO
from apps.students.models import Alumno
from .models import ConfigPagos, Pago
from . import services


def pago(mes, anio, estado=Pago.ESTADO_CONFIRMADO):
    return Pago(mes=mes, anio=anio, estado=estado)


class ResolverMesPagoTest(SimpleTestCase):
    hoy = date(2024, 12, 10)

    def test_sin_pagos_se_acredita_al_mes_actual(self):
        destino = services.resolver_mes_pago([], self.hoy)
        self.assertEqual((destino.mes, destino.anio, destino.es_adelantado), (12, 2024, False))
        self.assertEqual(destino.advertencias, [])

    def test_mes_actual_pendiente_no_adelanta(self):
        destino = services.resolver_mes_pago([pago(12, 2024, Pago.ESTADO_PENDIENTE)], self.hoy)
        self.assertEqual((destino.mes, destino.anio), (12, 2024))
        self.assertFalse(destino.es_adelantado)

    def test_solo_existe_el_mes_siguiente(self):
        destino = services.resolver_mes_pago([pago(1, 2025)], self.hoy)
        self.assertEqual((destino.mes, destino.anio), (12, 2024))

    def test_mes_actual_confirmado_adelanta_y_cruza_el_anio(self):
        destino = services.resolver_mes_pago([pago(12, 2024)], self.hoy)
        self.assertEqual((destino.mes, destino.anio, destino.es_adelantado), (1, 2025, True))

    def test_ambos_meses_pagados_queda_en_el_actual_con_aviso(self):
        destino = services.resolver_mes_pago([pago(12, 2024), pago(1, 2025)], self.hoy, 'en')
        self.assertEqual((destino.mes, destino.anio, destino.es_adelantado), (12, 2024, False))
        self.assertEqual(destino.advertencias, ['Already a payment for January 2025'])

    def test_pago_adelantado_exige_mes_actual_confirmado(self):
        with self.assertRaises(services.PagoAdelantadoNoPermitido):
            services.verificar_pago_adelantado([pago(12, 2024, Pago.ESTADO_PENDIENTE)], self.hoy)
        services.verificar_pago_adelantado([pago(12, 2024)], self.hoy)


class FechasPagoTest(SimpleTestCase):
    def test_transferencia_de_hoy_o_ayer(self):
        hoy = date(2025, 3, 1)
        self.assertEqual(services.validar_fecha_transferencia(hoy, hoy), hoy)
        self.assertEqual(services.validar_fecha_transferencia(date(2025, 2, 28), hoy), date(2025, 2, 28))
        with self.assertRaises(services.FechaTransferenciaInvalida):
            services.validar_fecha_transferencia(date(2025, 2, 27), hoy)
        with self.assertRaises(services.FechaTransferenciaInvalida):
            services.validar_fecha_transferencia(date(2025, 3, 2), hoy)

    def test_rango_del_formulario(self):
        hoy = date(2024, 3, 31)
        self.assertTrue(services.validar_fecha_formulario(date(2024, 2, 29), hoy))
        self.assertFalse(services.validar_fecha_formulario(date(2024, 2, 28), hoy))
        self.assertFalse(services.validar_fecha_formulario(date(2024, 4, 1), hoy))
        self.assertTrue(services.validar_fecha_formulario(date(2023, 12, 15), date(2024, 1, 15)))

    def test_nombre_mes(self):
        self.assertEqual(services.nombre_mes(1, 2025), 'enero de 2025')
        self.assertEqual(services.nombre_mes(12, 2024, 'en'), 'December 2024')


class CalcularMontoTest(SimpleTestCase):
    def setUp(self):
        self.config = ConfigPagos(
            dia_corte=5,
            descuento_pago_adelantado=Decimal('10'),
            recargo_mora=Decimal('5'),
            moneda='USD$',
            tipo_cambio_usd_bs=Decimal('220.00'),
            precio_base=Decimal('50.00'),
        )

    def test_primer_pago_incluye_inscripcion_sin_ajuste(self):
        desglose = services.calcular_monto(
            None, self.config, services.DestinoPago(12, 2024), date(2024, 12, 20), es_primer_pago=True
        )
        self.assertEqual(desglose.inscripcion, Decimal('15.00'))
        self.assertIsNone(desglose.ajuste_tipo)
        self.assertEqual(desglose.total_usd, Decimal('65.00'))
        self.assertEqual(desglose.total_bs, Decimal('14300.00'))

    def test_descuento_por_pago_adelantado(self):
        destino = services.DestinoPago(1, 2025, es_adelantado=True)
        desglose = services.calcular_monto(None, self.config, destino, date(2024, 12, 20))
        self.assertEqual(desglose.ajuste_tipo, 'descuento')
        self.assertEqual(desglose.ajuste_monto, Decimal('-5.00'))
        self.assertEqual(desglose.total_usd, Decimal('45.00'))

    def test_recargo_despues_del_dia_de_corte(self):
        desglose = services.calcular_monto(None, self.config, services.DestinoPago(12, 2024), date(2024, 12, 10))
        self.assertEqual(desglose.ajuste_tipo, 'recargo')
        self.assertEqual(desglose.total_usd, Decimal('52.50'))

    def test_a_tiempo_sin_ajuste(self):
        desglose = services.calcular_monto(None, self.config, services.DestinoPago(12, 2024), date(2024, 12, 5))
        self.assertIsNone(desglose.ajuste_tipo)
        self.assertEqual(desglose.total_usd, Decimal('50.00'))

    def test_moneda_bolivares(self):
        self.config.moneda = 'BS.'
        desglose = services.calcular_monto(None, self.config)
        self.assertEqual(desglose.total, Decimal('11000.00'))
        self.assertEqual(services.convertir_a_usd(Decimal('11000'), Decimal('220')), Decimal('50.00'))
        self.assertEqual(services.monto_en_usd(Decimal('11000'), self.config), Decimal('50.00'))


class PagosAPITest(APITestCase):
    def setUp(self):
        self.hoy = timezone.localdate()
        self.admin = User.objects.create_user('admin', password='clave-segura-1')
        self.admin.groups.add(Group.objects.get_or_create(name=ROL_ADMINISTRADOR)[0])
        self.usuario = User.objects.create_user('usuario', password='clave-segura-1')
        self.usuario.groups.add(Group.objects.get_or_create(name=ROL_USUARIO)[0])
        self.alumno = Alumno.objects.create(
            cedula='V-12345678', nombre='Ana Pérez', fecha_nacimiento=date(2012, 4, 1), usuario=self.usuario
        )

    def datos_pago(self, **extra):
        datos = {
            'alumno': self.alumno.pk,
            'monto': '50.00',
            'metodo_pago': 'pago_movil',
            'referencia': '123456',
            'banco_origen': 'Banesco',
            'cedula_titular': 'V-12345678',
            'telefono_cuenta': '04121234567',
            'fecha_pago': self.hoy.isoformat(),
        }
        datos.update(extra)
        return datos

    def test_ciclo_completo_y_duplicado(self):
        self.client.force_authenticate(self.usuario)

        primero = self.client.post('/api/pagos/', self.datos_pago(), format='json')
        self.assertEqual(primero.status_code, status.HTTP_201_CREATED)
        self.assertEqual(primero.data['pago']['mes'], self.hoy.month)
        self.assertEqual(primero.data['pago']['estado'], Pago.ESTADO_CONFIRMADO)

        segundo = self.client.post('/api/pagos/', self.datos_pago(referencia='654321'), format='json')
        self.assertEqual(segundo.status_code, status.HTTP_201_CREATED)
        self.assertTrue(segundo.data['pago']['es_adelantado'])
        mes_sig, anio_sig = services.mes_siguiente(self.hoy.month, self.hoy.year)
        self.assertEqual((segundo.data['pago']['mes'], segundo.data['pago']['anio']), (mes_sig, anio_sig))

        tercero = self.client.post('/api/pagos/', self.datos_pago(referencia='111111'), format='json')
        self.assertEqual(tercero.status_code, status.HTTP_409_CONFLICT)
        self.assertIn('error', tercero.data)
        self.assertEqual(Pago.objects.filter(alumno=self.alumno).count(), 2)

    def test_monto_distinto_al_calculado_queda_registrado(self):
        self.client.force_authenticate(self.usuario)
        with self.assertNoLogs('apps.payments.services', level='WARNING'):
            response = self.client.post('/api/pagos/', self.datos_pago(monto='65.00'), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        Pago.objects.all().delete()
        with self.assertLogs('apps.payments.services', level='WARNING') as logs:
            response = self.client.post('/api/pagos/', self.datos_pago(monto='10.00'), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIn('65.00', logs.output[0])

    def test_adelantado_sin_mes_actual_confirmado(self):
        self.client.force_authenticate(self.usuario)
        response = self.client.post('/api/pagos/', self.datos_pago(es_adelantado=True), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Pago.objects.exists())

    def test_zelle_no_requiere_datos_de_cuenta(self):
        self.client.force_authenticate(self.usuario)
        response = self.client.post('/api/pagos/', {
            'monto': '50.00',
            'metodo_pago': 'zelle',
            'referencia': '778899',
            'fecha_pago': self.hoy.isoformat(),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['pago']['alumno'], self.alumno.pk)

    def test_cedula_del_titular_segun_pais(self):
        self.client.force_authenticate(self.usuario)
        response = self.client.post('/api/pagos/', self.datos_pago(cedula_titular='123-45-6789'), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('cedula_titular', response.data)

        config = ConfigPagos.cargar()
        config.pais_configuracion = 'usa'
        config.save()
        response = self.client.post('/api/pagos/', self.datos_pago(
            cedula_titular='123-45-6789', telefono_cuenta='(555) 123-4567'
        ), format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_transferencia_antigua_se_rechaza(self):
        self.client.force_authenticate(self.usuario)
        fecha = self.hoy - timedelta(days=3)
        response = self.client.post('/api/pagos/', self.datos_pago(fecha_pago=fecha.isoformat()), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('error', response.data)

    def test_ciclo_y_precio_del_primer_pago(self):
        self.client.force_authenticate(self.usuario)
        response = self.client.get('/api/pagos/ciclo/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['mes'], self.hoy.month)
        self.assertTrue(response.data['monto']['es_primer_pago'])

        precio = self.client.get('/api/pagos/precio/')
        self.assertEqual(precio.data['inscripcion'], Decimal('15.00'))

    def test_usuario_no_ve_alumnos_ajenos(self):
        otro = Alumno.objects.create(cedula='V-87654321', nombre='Otro', fecha_nacimiento=date(2010, 1, 1))
        self.client.force_authenticate(self.usuario)
        response = self.client.get(f'/api/pagos/alumno/{otro.pk}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_revalidar_al_cambiar_de_pais(self):
        self.client.force_authenticate(self.usuario)
        response = self.client.post('/api/pagos/revalidar/', {
            'pais': 'usa',
            'datos': {'cedula_titular': 'V-12345678', 'telefono_cuenta': '04121234567', 'referencia': '123456'},
        }, format='json')
        self.assertEqual(response.data['campos_vaciados'], ['cedula_titular', 'telefono_cuenta'])
        self.assertEqual(response.data['datos']['referencia'], '123456')

    def test_config_solo_administradores(self):
        self.client.force_authenticate(self.usuario)
        self.assertEqual(
            self.client.put('/api/pagos/config/', {'recargo_mora': '5'}, format='json').status_code,
            status.HTTP_403_FORBIDDEN
        )
        self.client.force_authenticate(self.admin)
        response = self.client.put('/api/pagos/config/', {'recargo_mora': '5'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(ConfigPagos.cargar().recargo_mora, Decimal('5'))

    def test_resumen_anual(self):
        Pago.objects.create(alumno=self.alumno, mes=1, anio=2024, monto=Decimal('50'), metodo_pago='zelle',
                            fecha_pago=date(2024, 1, 3), estado=Pago.ESTADO_CONFIRMADO)
        Pago.objects.create(alumno=self.alumno, mes=2, anio=2024, monto=Decimal('45.50'), metodo_pago='zelle',
                            fecha_pago=date(2024, 2, 3))
        self.client.force_authenticate(self.admin)
        response = self.client.get('/api/pagos/resumen/', {'anio': 2024})
        self.assertEqual(response.data['total'], 95.5)
        self.assertEqual([m['mes'] for m in response.data['meses']], [1, 2])
        self.assertEqual(response.data['meses'][1]['confirmados'], 0)
