#apps/common/tests.py:

from datetime import date

from django.test import SimpleTestCase
from rest_framework import serializers
from rest_framework.exceptions import ValidationError

from .exceptions import ReglaNegocioError, ConflictoError, manejador_excepciones, extraer_mensaje
from .validators import (
    reglas_para, normalizar_pais, validar_campo, limpiar_campos_invalidos,
    validar_fecha_nacimiento, PAIS_USA, PAIS_VENEZUELA
)


class ReglasPaisTest(SimpleTestCase):
    def test_cedula_venezuela(self):
        regla = reglas_para(PAIS_VENEZUELA)['cedula']
        for valido in ['V-12345678', 'V1234567', 'e-87654321']:
            self.assertTrue(regla.es_valido(valido), valido)
        for invalido in ['12345678', 'X-12345678', 'V-123', '123-45-6789']:
            self.assertFalse(regla.es_valido(invalido), invalido)

    def test_cedula_usa(self):
        regla = reglas_para(PAIS_USA)['cedula']
        self.assertTrue(regla.es_valido('123-45-6789'))
        self.assertTrue(regla.es_valido('123456789'))
        self.assertFalse(regla.es_valido('V-12345678'))

    def test_telefonos(self):
        self.assertTrue(reglas_para(PAIS_VENEZUELA)['telefono'].es_valido('0412-1234567'))
        self.assertFalse(reglas_para(PAIS_VENEZUELA)['telefono'].es_valido('(555) 123-4567'))
        self.assertTrue(reglas_para(PAIS_USA)['telefono'].es_valido('(555) 123-4567'))
        self.assertTrue(reglas_para(PAIS_USA)['telefono'].es_valido('5551234567'))

    def test_telefono_opcional_acepta_vacio(self):
        reglas = reglas_para(PAIS_VENEZUELA)
        self.assertTrue(reglas['telefono_opcional'].es_valido(''))
        self.assertFalse(reglas['telefono'].es_valido(''))

    def test_referencia(self):
        regla = reglas_para(PAIS_USA)['referencia']
        self.assertTrue(regla.es_valido('1234'))
        self.assertFalse(regla.es_valido('123'))
        self.assertFalse(regla.es_valido('12AB5678'))

    def test_pais_por_idioma(self):
        self.assertEqual(normalizar_pais(None, 'en'), PAIS_USA)
        self.assertEqual(normalizar_pais(None, 'es'), PAIS_VENEZUELA)
        self.assertEqual(normalizar_pais('US'), PAIS_USA)

    def test_mensaje_en_el_idioma_del_usuario(self):
        reglas = reglas_para(PAIS_VENEZUELA)
        with self.assertRaises(serializers.ValidationError) as ctx:
            validar_campo(reglas, 'cedula', '123', 'en')
        self.assertIn('Invalid ID format', str(ctx.exception.detail[0]))


class RevalidacionTest(SimpleTestCase):
    def test_cambio_de_pais_vacia_los_campos_invalidos(self):
        datos = {'cedula_titular': 'V-12345678', 'telefono_cuenta': '04121234567', 'referencia': '998877'}
        campos = {'cedula_titular': 'cedula', 'telefono_cuenta': 'telefono', 'referencia': 'referencia'}
        limpios, vaciados = limpiar_campos_invalidos(datos, campos, PAIS_USA)
        self.assertEqual(vaciados, ['cedula_titular', 'telefono_cuenta'])
        self.assertEqual(limpios['cedula_titular'], '')
        self.assertEqual(limpios['referencia'], '998877')

    def test_campos_vacios_no_se_reportan(self):
        _, vaciados = limpiar_campos_invalidos({'cedula_titular': ''}, {'cedula_titular': 'cedula'}, PAIS_USA)
        self.assertEqual(vaciados, [])


class FechaNacimientoTest(SimpleTestCase):
    def test_limites(self):
        hoy = date(2025, 3, 10)
        self.assertEqual(validar_fecha_nacimiento(date(1935, 1, 1), hoy), date(1935, 1, 1))
        self.assertEqual(validar_fecha_nacimiento(date(2024, 12, 31), hoy), date(2024, 12, 31))
        with self.assertRaises(serializers.ValidationError):
            validar_fecha_nacimiento(date(2025, 1, 1), hoy)
        with self.assertRaises(serializers.ValidationError):
            validar_fecha_nacimiento(date(1934, 12, 31), hoy)


class ManejadorExcepcionesTest(SimpleTestCase):
    def test_regla_de_negocio_es_400(self):
        response = manejador_excepciones(ReglaNegocioError('No permitido'), {})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data, {'error': 'No permitido'})

    def test_conflicto_es_409_con_error(self):
        response = manejador_excepciones(ConflictoError('Duplicado'), {})
        self.assertEqual(response.status_code, 409)
        self.assertEqual(response.data['error'], 'Duplicado')

    def test_errores_de_validacion_llevan_mensaje_legible(self):
        response = manejador_excepciones(ValidationError({'cedula': ['Formato inválido']}), {})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data['error'], 'cedula: Formato inválido')

    def test_extraer_mensaje(self):
        self.assertEqual(extraer_mensaje({'non_field_errors': ['Las contraseñas no coinciden']}),
                         'Las contraseñas no coinciden')
        self.assertEqual(extraer_mensaje([]), '')
