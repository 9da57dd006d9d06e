# apps/levels/services.py

"""
Resolución de edad, categoría de edad, cintas permitidas y precio.

Las funciones reciben colecciones ya cargadas (listas o querysets) y una
fecha de referencia, no guardan estado y pueden probarse con instancias sin
guardar.
"""

import calendar
import logging
import unicodedata
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings

logger = logging.getLogger(__name__)

# (edad máxima inclusiva, nombre es, nombre en); por encima del último, Veterano
CATEGORIAS_POR_EDAD = [
    (7, 'Benjamín', 'Benjamin'),
    (9, 'Alevín', 'Alevin'),
    (11, 'Infantil', 'Infant'),
    (13, 'Cadete', 'Cadet'),
    (15, 'Junior', 'Junior'),
    (34, 'Senior', 'Senior'),
]
CATEGORIA_VETERANO = ('Veterano', 'Veteran')

# nombre, nombre_en, color, orden
CINTAS_BASE = [
    ('Blanco', 'White', '#FFFFFF', 1),
    ('Amarillo', 'Yellow', '#FFD700', 2),
    ('Naranja', 'Orange', '#FFA500', 3),
    ('Verde', 'Green', '#008000', 4),
    ('Azul', 'Blue', '#0000FF', 5),
    ('Marrón', 'Brown', '#8B4513', 6),
    ('Negro', 'Black', '#000000', 7),
]

# Cinta más alta que puede tener un alumno de cada categoría
CINTA_MAXIMA_POR_CATEGORIA = {
    'benjamin': 'naranja',
    'alevin': 'verde',
    'infantil': 'azul',
    'cadete': 'marron',
    'junior': 'negro',
    'senior': 'negro',
    'veterano': 'negro',
}

MESES_BASE_POR_CINTA = {
    'blanco': 4,
    'amarillo': 5,
    'naranja': 6,
    'verde': 7,
    'azul': 9,
    'marron': 15,
    'negro': 20,
}
MULTIPLICADOR_POR_CATEGORIA = {
    'benjamin': Decimal('0.8'),
    'alevin': Decimal('0.9'),
    'infantil': Decimal('1.0'),
    'cadete': Decimal('1.0'),
    'junior': Decimal('1.1'),
    'senior': Decimal('1.2'),
    'veterano': Decimal('1.3'),
}
MESES_BASE_DEFECTO = 6
MESES_PREPARACION_MIN = 3
MESES_PREPARACION_MAX = 24

VARIANTES_CINTA = {
    'blanca': 'blanco',
    'amarilla': 'amarillo',
    'negra': 'negro',
}


def normalizar_texto(texto):
    """Minúsculas y sin acentos"""
    if not texto:
        return ''
    descompuesto = unicodedata.normalize('NFKD', str(texto).strip().lower())
    return ''.join(c for c in descompuesto if not unicodedata.combining(c))


def normalizar_cinta(nombre):
    """
    Nombre canónico de una cinta: sin acentos, en minúsculas y con las
    variantes femeninas llevadas a la masculina (blanca -> blanco,
    marrón -> marron).
    """
    texto = normalizar_texto(nombre)
    return VARIANTES_CINTA.get(texto, texto)


def clave_categoria(nombre):
    """Clave de las tablas fijas para un nombre de categoría persistido"""
    texto = normalizar_texto(nombre)
    if texto in CINTA_MAXIMA_POR_CATEGORIA:
        return texto
    for clave in CINTA_MAXIMA_POR_CATEGORIA:
        if clave in texto:
            return clave
    return None


def calcular_edad(fecha_nacimiento, hoy=None):
    """Edad en años cumplidos a la fecha ``hoy``"""
    hoy = hoy or date.today()
    return hoy.year - fecha_nacimiento.year - (
        (hoy.month, hoy.day) < (fecha_nacimiento.month, fecha_nacimiento.day)
    )


def sumar_meses(fecha, meses):
    mes_total = fecha.month - 1 + meses
    anio = fecha.year + mes_total // 12
    mes = mes_total % 12 + 1
    dia = min(fecha.day, calendar.monthrange(anio, mes)[1])
    return date(anio, mes, dia)


def _amplitud(categoria):
    return categoria.maximo - categoria.minimo


def categorias_para_edad(edad, categorias):
    """
    Categorías cuyo rango inclusivo contiene la edad. Si los rangos se solapan
    la primera es la de rango más estrecho (luego orden, edad mínima e id).
    Sin coincidencias devuelve una lista vacía.
    """
    coincidencias = [c for c in categorias if c.contiene_edad(edad)]
    return sorted(
        coincidencias,
        key=lambda c: (_amplitud(c), c.orden, c.minimo, c.pk or 0),
    )


def nombre_categoria_por_edad(edad, idioma='es'):
    """Nombre fijo de categoría para mostrar cuando no hay ninguna persistida"""
    indice = 1 if idioma == 'en' else 0
    for edad_max, *nombres in CATEGORIAS_POR_EDAD:
        if edad <= edad_max:
            return nombres[indice]
    return CATEGORIA_VETERANO[indice]


def resolver_categoria(edad, categorias):
    """
    Busca primero por rango de edad y, si ninguna coincide, por nombre: la
    categoría persistida cuyo nombre contiene el nombre fijo de la edad.
    """
    categorias = list(categorias)
    por_rango = categorias_para_edad(edad, categorias)
    if por_rango:
        return por_rango[0]

    for idioma in ('es', 'en'):
        buscado = normalizar_texto(nombre_categoria_por_edad(edad, idioma))
        for categoria in categorias:
            if buscado in normalizar_texto(categoria.nombre):
                logger.info(
                    "Categoría para edad %s resuelta por nombre: %s", edad, categoria.nombre
                )
                return categoria
    return None


def reasignar_categoria(actual, edad, categorias, idioma='es'):
    """
    Comprueba que la categoría actual siga conteniendo la edad. Devuelve
    (categoria, aviso): la misma categoría sin aviso, la primera que sí
    coincide con un aviso, o None con aviso si ninguna coincide.
    """
    if actual is not None and actual.contiene_edad(edad):
        return actual, None

    candidatas = categorias_para_edad(edad, categorias)
    if candidatas:
        nueva = candidatas[0]
        if idioma == 'en':
            aviso = f"Category changed to {nueva.nombre} for age {edad}"
        else:
            aviso = f"La categoría se cambió a {nueva.nombre} por la edad ({edad} años)"
        logger.info("Categoría reasignada a %s para edad %s", nueva.nombre, edad)
        return nueva, aviso

    if actual is None:
        return None, None
    if idioma == 'en':
        aviso = f"No category matches age {edad}; category cleared"
    else:
        aviso = f"Ninguna categoría corresponde a la edad ({edad} años); se quitó la categoría"
    logger.warning("Sin categoría para edad %s, se limpia la asignación", edad)
    return None, aviso


def solapamientos(categoria, categorias):
    """Otras categorías cuyo rango se cruza con el de ``categoria``"""
    return [
        otra for otra in categorias
        if otra.pk != categoria.pk
        and otra.minimo <= categoria.maximo
        and categoria.minimo <= otra.maximo
    ]


def precio_para(categoria, precio_base=None):
    """Precio mensual de la categoría o el precio base del sistema"""
    if precio_base is None:
        precio_base = settings.DOJO['PRECIO_BASE']
    if categoria is not None and categoria.precio_mensualidad is not None:
        return Decimal(categoria.precio_mensualidad)
    return Decimal(precio_base)


def cinta_maxima_para(categoria):
    """Nombre canónico de la cinta tope de la categoría, o None si no está tabulada"""
    if categoria is None:
        return None
    clave = clave_categoria(categoria.nombre)
    return CINTA_MAXIMA_POR_CATEGORIA.get(clave)


def cintas_permitidas(categoria, cintas):
    """Cintas con orden menor o igual al de la cinta tope de la categoría"""
    cintas = list(cintas)
    tope = cinta_maxima_para(categoria)
    if tope is None:
        return cintas
    ordenes = [c.orden for c in cintas if normalizar_cinta(c.nombre) == tope]
    if not ordenes:
        return cintas
    return [c for c in cintas if c.orden <= max(ordenes)]


def calcular_tiempo_preparacion(categoria_nombre, cinta_nombre):
    """Meses de preparación hasta el próximo examen, entre 3 y 24"""
    base = MESES_BASE_POR_CINTA.get(normalizar_cinta(cinta_nombre), MESES_BASE_DEFECTO)
    multiplicador = MULTIPLICADOR_POR_CATEGORIA.get(
        clave_categoria(categoria_nombre), Decimal('1.0')
    )
    meses = int((base * multiplicador).quantize(Decimal('1'), rounding=ROUND_HALF_UP))
    return max(MESES_PREPARACION_MIN, min(MESES_PREPARACION_MAX, meses))
