# apps/payments/services.py

"""
Ciclo de mensualidades: a qué mes se acredita un pago, cuánto se cobra y
qué fechas de transferencia se aceptan.

``resolver_mes_pago`` es una función pura sobre el historial del alumno; la
unicidad (alumno, mes, año) la garantiza la base de datos y un choque se
devuelve como ``PagoDuplicado`` (HTTP 409).
"""

import calendar
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

from django.conf import settings
from django.db import IntegrityError, transaction

from apps.common.exceptions import ConflictoError, ReglaNegocioError
from apps.levels.services import precio_para
from .models import ConfigPagos, Pago

logger = logging.getLogger(__name__)

CENTAVOS = Decimal('0.01')

MESES_ES = ['enero', 'febrero', 'marzo', 'abril', 'mayo', 'junio', 'julio',
            'agosto', 'septiembre', 'octubre', 'noviembre', 'diciembre']
MESES_EN = ['January', 'February', 'March', 'April', 'May', 'June', 'July',
            'August', 'September', 'October', 'November', 'December']


class FechaTransferenciaInvalida(ReglaNegocioError):
    pass


class PagoAdelantadoNoPermitido(ReglaNegocioError):
    pass


class PagoDuplicado(ConflictoError):
    default_detail = 'Ya existe un pago registrado para ese mes'
    default_code = 'pago_duplicado'


@dataclass
class DestinoPago:
    mes: int
    anio: int
    es_adelantado: bool = False
    advertencias: List[str] = field(default_factory=list)


@dataclass
class DesgloseMonto:
    mensualidad: Decimal
    inscripcion: Decimal
    ajuste_porcentaje: Decimal
    ajuste_tipo: Optional[str]
    ajuste_monto: Decimal
    total_usd: Decimal
    total_bs: Decimal
    moneda: str
    tipo_cambio: Decimal
    es_primer_pago: bool

    @property
    def total(self):
        return self.total_bs if self.moneda == 'BS.' else self.total_usd

    def como_dict(self):
        return {
            'mensualidad': self.mensualidad,
            'inscripcion': self.inscripcion,
            'ajuste_tipo': self.ajuste_tipo,
            'ajuste_porcentaje': self.ajuste_porcentaje,
            'ajuste_monto': self.ajuste_monto,
            'total_usd': self.total_usd,
            'total_bs': self.total_bs,
            'total': self.total,
            'moneda': self.moneda,
            'tipo_cambio': self.tipo_cambio,
            'es_primer_pago': self.es_primer_pago,
        }


def redondear(valor):
    return Decimal(valor).quantize(CENTAVOS, rounding=ROUND_HALF_UP)


def mes_siguiente(mes, anio):
    if mes == 12:
        return 1, anio + 1
    return mes + 1, anio


def nombre_mes(mes, anio, idioma='es'):
    if idioma == 'en':
        return f"{MESES_EN[mes - 1]} {anio}"
    return f"{MESES_ES[mes - 1]} de {anio}"


def _confirmado_en(pagos, mes, anio):
    return any(p.mes == mes and p.anio == anio and p.estado == Pago.ESTADO_CONFIRMADO for p in pagos)


def _existe_en(pagos, mes, anio):
    return any(p.mes == mes and p.anio == anio for p in pagos)


def resolver_mes_pago(pagos, hoy, idioma='es'):
    """
    Decide a qué mes se acredita el próximo pago del alumno.

    | mes actual confirmado | existe pago del mes siguiente | destino            |
    |-----------------------|-------------------------------|--------------------|
    | no                    | no                            | mes actual         |
    | no                    | sí                            | mes actual         |
    | sí                    | no                            | mes siguiente      |
    | sí                    | sí                            | mes actual + aviso |
    """
    pagos = list(pagos)
    actual_confirmado = _confirmado_en(pagos, hoy.month, hoy.year)
    mes_sig, anio_sig = mes_siguiente(hoy.month, hoy.year)
    siguiente_existe = _existe_en(pagos, mes_sig, anio_sig)

    if actual_confirmado and not siguiente_existe:
        logger.info("Pago adelantado: se acredita a %02d/%s", mes_sig, anio_sig)
        return DestinoPago(mes_sig, anio_sig, es_adelantado=True)

    destino = DestinoPago(hoy.month, hoy.year)
    if actual_confirmado and siguiente_existe:
        destino.advertencias.append(
            f"Already a payment for {nombre_mes(mes_sig, anio_sig, 'en')}"
            if idioma == 'en' else
            f"Ya existe un pago para {nombre_mes(mes_sig, anio_sig)}"
        )
        logger.warning("Ya existe pago para %02d/%s, no se adelanta", mes_sig, anio_sig)
    return destino


def verificar_pago_adelantado(pagos, hoy):
    """Un pago adelantado exige el mes actual pagado y confirmado"""
    if not _confirmado_en(list(pagos), hoy.month, hoy.year):
        raise PagoAdelantadoNoPermitido(
            f"No se puede realizar un pago adelantado. Debe pagar primero el mes actual "
            f"({hoy.month}/{hoy.year}) y que esté confirmado."
        )


def validar_fecha_formulario(fecha, hoy):
    """Rango del formulario: desde hace un mes hasta hoy"""
    mes_pasado = hoy.month - 1 or 12
    anio_pasado = hoy.year if hoy.month > 1 else hoy.year - 1
    dia = min(hoy.day, calendar.monthrange(anio_pasado, mes_pasado)[1])
    minima = date(anio_pasado, mes_pasado, dia)
    return minima <= fecha <= hoy


def validar_fecha_transferencia(fecha, hoy):
    """La transferencia debe ser de hoy o de ayer"""
    diferencia = (hoy - fecha).days
    if diferencia < 0 or diferencia > 1:
        raise FechaTransferenciaInvalida('La transferencia debe haber sido realizada el día de hoy')
    return fecha


def determinar_ajuste(config, destino, hoy, es_primer_pago):
    """
    Descuento por pago adelantado o recargo por mora (excluyentes).
    El primer pago no lleva ajuste.
    """
    if es_primer_pago:
        return None, Decimal('0')
    if destino.es_adelantado and config.descuento_pago_adelantado > 0:
        return 'descuento', Decimal(config.descuento_pago_adelantado)
    if not destino.es_adelantado and hoy.day > config.dia_corte and config.recargo_mora > 0:
        return 'recargo', Decimal(config.recargo_mora)
    return None, Decimal('0')


def convertir_a_bs(monto_usd, tipo_cambio):
    return redondear(Decimal(monto_usd) * Decimal(tipo_cambio))


def convertir_a_usd(monto_bs, tipo_cambio):
    return redondear(Decimal(monto_bs) / Decimal(tipo_cambio))


def monto_en_usd(monto, config):
    if config.moneda == 'BS.':
        return convertir_a_usd(monto, config.tipo_cambio_usd_bs)
    return redondear(monto)


def calcular_monto(categoria, config, destino=None, hoy=None, es_primer_pago=False):
    """Desglose del monto a pagar en USD y en Bs."""
    mensualidad = redondear(precio_para(categoria, config.precio_base))
    inscripcion = redondear(settings.DOJO['COSTO_INSCRIPCION']) if es_primer_pago else Decimal('0.00')

    ajuste_tipo, porcentaje = (None, Decimal('0'))
    if destino is not None and hoy is not None:
        ajuste_tipo, porcentaje = determinar_ajuste(config, destino, hoy, es_primer_pago)
    ajuste_monto = redondear(mensualidad * porcentaje / 100)
    if ajuste_tipo == 'descuento':
        ajuste_monto = -ajuste_monto

    total_usd = redondear(mensualidad + ajuste_monto + inscripcion)
    return DesgloseMonto(
        mensualidad=mensualidad,
        inscripcion=inscripcion,
        ajuste_porcentaje=porcentaje,
        ajuste_tipo=ajuste_tipo,
        ajuste_monto=ajuste_monto,
        total_usd=total_usd,
        total_bs=convertir_a_bs(total_usd, config.tipo_cambio_usd_bs),
        moneda=config.moneda,
        tipo_cambio=Decimal(config.tipo_cambio_usd_bs),
        es_primer_pago=es_primer_pago,
    )


def registrar_pago(alumno, datos, usuario, hoy, idioma='es'):
    """
    Crea el pago del formulario de verificación. El mes se decide en el
    servidor con el historial leído bajo bloqueo del alumno; si quien envía
    indica pago adelantado se vuelve a comprobar que el mes actual esté
    confirmado.
    """
    from apps.students.models import Alumno

    validar_fecha_transferencia(datos['fecha_pago'], hoy)

    with transaction.atomic():
        Alumno.objects.select_for_update().get(pk=alumno.pk)
        pagos = list(alumno.pagos.all())

        if datos.get('es_adelantado'):
            verificar_pago_adelantado(pagos, hoy)
        destino = resolver_mes_pago(pagos, hoy, idioma)

        config = ConfigPagos.cargar()
        esperado = calcular_monto(alumno.categoria_edad, config, destino, hoy, es_primer_pago=not pagos)
        if monto_en_usd(datos['monto'], config) != esperado.total_usd:
            logger.warning(
                "Monto %s distinto al calculado %s %s para alumno %s",
                datos['monto'], esperado.total, config.moneda, alumno.pk
            )

        mes_correspondiente = nombre_mes(destino.mes, destino.anio, idioma)
        observaciones = datos.get('observaciones', '')
        if destino.es_adelantado:
            prefijo = 'Advanced payment - ' if idioma == 'en' else 'Pago adelantado - '
            observaciones = f"{prefijo}{mes_correspondiente} {observaciones}".strip()

        try:
            with transaction.atomic():
                pago = Pago.objects.create(
                    alumno=alumno,
                    mes=destino.mes,
                    anio=destino.anio,
                    monto=datos['monto'],
                    metodo_pago=datos['metodo_pago'],
                    referencia=datos.get('referencia', ''),
                    banco_origen=datos.get('banco_origen', ''),
                    cedula_titular=datos.get('cedula_titular', ''),
                    telefono_cuenta=datos.get('telefono_cuenta', ''),
                    fecha_pago=datos['fecha_pago'],
                    mes_correspondiente=mes_correspondiente,
                    estado=Pago.ESTADO_CONFIRMADO,
                    es_adelantado=destino.es_adelantado,
                    observaciones=observaciones,
                    registrado_por=usuario,
                )
        except IntegrityError:
            logger.warning("Pago duplicado para alumno %s en %02d/%s", alumno.pk, destino.mes, destino.anio)
            raise PagoDuplicado(f"Ya existe un pago registrado para el mes {destino.mes}/{destino.anio}")

    logger.info(
        "Pago %s registrado para alumno %s en %02d/%s (adelantado=%s)",
        pago.pk, alumno.pk, pago.mes, pago.anio, pago.es_adelantado
    )
    return pago, destino
