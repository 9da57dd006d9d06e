# apps/common/validators.py

"""
Reglas de validación de formularios según el país configurado.

Cada campo validado es una ``Regla`` (patrón + mensajes) y el conjunto de
reglas se elige una vez por formulario a partir del país (``venezuela`` o
``usa``). Los serializers reciben las reglas ya seleccionadas y no vuelven a
preguntar por el país campo a campo.
"""

import re
from datetime import date

from rest_framework import serializers

PAIS_VENEZUELA = 'venezuela'
PAIS_USA = 'usa'
PAISES = (PAIS_VENEZUELA, PAIS_USA)

FECHA_NACIMIENTO_MINIMA = date(1935, 1, 1)


class Regla:
    def __init__(self, patron, mensaje_es, mensaje_en, obligatorio=True):
        self.patron = re.compile(patron)
        self.mensaje_es = mensaje_es
        self.mensaje_en = mensaje_en
        self.obligatorio = obligatorio

    def es_valido(self, valor):
        if valor in (None, ''):
            return not self.obligatorio
        return self.patron.fullmatch(str(valor).strip()) is not None

    def mensaje(self, idioma='es'):
        return self.mensaje_en if idioma == 'en' else self.mensaje_es

    def opcional(self):
        return Regla(self.patron.pattern, self.mensaje_es, self.mensaje_en, obligatorio=False)


REGLA_REFERENCIA = Regla(
    r'\d{4,20}',
    'La referencia debe tener entre 4 y 20 dígitos numéricos',
    'Reference must contain between 4 and 20 digits',
)

REGLAS_POR_PAIS = {
    PAIS_VENEZUELA: {
        'cedula': Regla(
            r'^[VvEeJjGgPp]-?\d{7,8}$',
            'Formato de cédula inválido (ej: V-12345678 o V12345678)',
            'Invalid ID format (e.g: V-12345678 or V12345678)',
        ),
        'telefono': Regla(
            r'^0\d{3}-?\d{7}$',
            'Formato de teléfono inválido (ej: 04121234567 o 0412-1234567)',
            'Invalid phone format (e.g: 04121234567 or 0412-1234567)',
        ),
    },
    PAIS_USA: {
        'cedula': Regla(
            r'^\d{3}-?\d{2}-?\d{4}$|^\d{9}$',
            'Formato de ID inválido (ej: 123-45-6789 o 123456789)',
            'Invalid ID format (e.g: 123-45-6789 or 123456789)',
        ),
        'telefono': Regla(
            r'^\(\d{3}\)\s?\d{3}-?\d{4}$|^\d{3}-?\d{3}-?\d{4}$|^\d{10}$',
            'Formato de teléfono inválido (ej: (555) 123-4567 o 555-123-4567)',
            'Invalid phone format (e.g: (555) 123-4567 or 555-123-4567)',
        ),
    },
}


def normalizar_pais(pais=None, idioma=None):
    """Devuelve el país de validación; sin país explícito se deduce del idioma"""
    if pais:
        pais = str(pais).strip().lower()
        if pais in ('us', 'usa', 'eeuu', 'estados_unidos'):
            return PAIS_USA
        if pais in ('ve', 'venezuela'):
            return PAIS_VENEZUELA
    if idioma == 'en':
        return PAIS_USA
    return PAIS_VENEZUELA


def reglas_para(pais):
    """
    Conjunto de reglas del país: cédula y teléfono (obligatorios), sus
    variantes opcionales para campos secundarios y la referencia bancaria.
    """
    base = REGLAS_POR_PAIS[normalizar_pais(pais)]
    return {
        'cedula': base['cedula'],
        'telefono': base['telefono'],
        'telefono_opcional': base['telefono'].opcional(),
        'referencia': REGLA_REFERENCIA,
    }


def validar_campo(reglas, nombre_regla, valor, idioma='es'):
    regla = reglas[nombre_regla]
    if not regla.es_valido(valor):
        raise serializers.ValidationError(regla.mensaje(idioma))
    return valor


def campos_invalidos(datos, reglas_campos, reglas):
    """Nombres de los campos de ``datos`` que no cumplen su regla"""
    invalidos = []
    for campo, nombre_regla in reglas_campos.items():
        valor = datos.get(campo)
        if valor in (None, ''):
            continue
        if not reglas[nombre_regla].es_valido(valor):
            invalidos.append(campo)
    return invalidos


def limpiar_campos_invalidos(datos, reglas_campos, pais_nuevo):
    """
    Al cambiar de país, vacía los valores ya capturados que no cumplen las
    nuevas reglas. Devuelve (datos_limpios, campos_vaciados).
    """
    reglas = reglas_para(pais_nuevo)
    vaciados = campos_invalidos(datos, reglas_campos, reglas)
    limpios = dict(datos)
    for campo in vaciados:
        limpios[campo] = ''
    return limpios, vaciados


def validar_fecha_nacimiento(fecha, hoy, idioma='es'):
    """Entre 1935 y el 31 de diciembre del año pasado"""
    maxima = date(hoy.year - 1, 12, 31)
    if fecha < FECHA_NACIMIENTO_MINIMA or fecha > maxima:
        raise serializers.ValidationError(
            'Date must be between 1935 and last year'
            if idioma == 'en' else
            'La fecha debe estar entre 1935 y el año pasado'
        )
    return fecha
