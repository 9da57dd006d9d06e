#apps/payments/models.py:

from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


def metodos_pago_defecto():
    return ['Efectivo', 'Transferencia', 'Pago Móvil']


class ConfigPagos(models.Model):
    """Configuración de pagos del dojo; existe una sola fila (pk=1)"""
    MONEDA_CHOICES = [
        ('USD$', 'Dólares'),
        ('BS.', 'Bolívares'),
    ]
    PAIS_CHOICES = [
        ('venezuela', 'Venezuela'),
        ('usa', 'Estados Unidos'),
    ]
    IDIOMA_CHOICES = [
        ('es', 'Español'),
        ('en', 'English'),
    ]

    dia_corte = models.PositiveSmallIntegerField(
        default=1, validators=[MinValueValidator(1), MaxValueValidator(31)]
    )
    descuento_pago_adelantado = models.DecimalField(
        max_digits=5, decimal_places=2, default=Decimal('0'),
        validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    recargo_mora = models.DecimalField(
        max_digits=5, decimal_places=2, default=Decimal('0'),
        validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    moneda = models.CharField(max_length=5, choices=MONEDA_CHOICES, default='USD$')
    tipo_cambio_usd_bs = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('220.00'))
    precio_base = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('50.00'))
    pais_configuracion = models.CharField(max_length=10, choices=PAIS_CHOICES, default='venezuela')
    metodos_pago = models.JSONField(default=metodos_pago_defecto)
    datos_bancarios = models.TextField(blank=True, default='')
    idioma_sistema = models.CharField(max_length=2, choices=IDIOMA_CHOICES, default='es')
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'config_pagos'
        verbose_name = 'Configuración de pagos'
        verbose_name_plural = 'Configuración de pagos'

    def __str__(self):
        return f"Configuración de pagos ({self.moneda}, {self.pais_configuracion})"

    def save(self, *args, **kwargs):
        self.pk = 1
        super().save(*args, **kwargs)

    @classmethod
    def cargar(cls):
        config, _ = cls.objects.get_or_create(
            pk=1,
            defaults={
                'precio_base': settings.DOJO['PRECIO_BASE'],
                'tipo_cambio_usd_bs': settings.DOJO['TIPO_CAMBIO_USD_BS'],
                'pais_configuracion': settings.DOJO['PAIS_DEFECTO'],
            }
        )
        return config


class Pago(models.Model):
    METODO_CHOICES = [
        ('transferencia', 'Transferencia'),
        ('pago_movil', 'Pago Móvil'),
        ('zelle', 'Zelle'),
        ('paypal', 'PayPal'),
    ]
    ESTADO_PENDIENTE = 'pendiente'
    ESTADO_CONFIRMADO = 'confirmado'
    ESTADO_CHOICES = [
        (ESTADO_PENDIENTE, 'Pendiente'),
        (ESTADO_CONFIRMADO, 'Confirmado'),
    ]

    alumno = models.ForeignKey('students.Alumno', on_delete=models.CASCADE, related_name='pagos')
    mes = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(12)])
    anio = models.PositiveIntegerField()
    monto = models.DecimalField(max_digits=12, decimal_places=2)
    metodo_pago = models.CharField(max_length=20, choices=METODO_CHOICES)
    referencia = models.CharField(max_length=20, blank=True, default='')
    banco_origen = models.CharField(max_length=100, blank=True, default='')
    cedula_titular = models.CharField(max_length=20, blank=True, default='')
    telefono_cuenta = models.CharField(max_length=20, blank=True, default='')
    fecha_pago = models.DateField()
    mes_correspondiente = models.CharField(max_length=40, blank=True, default='')
    estado = models.CharField(max_length=10, choices=ESTADO_CHOICES, default=ESTADO_PENDIENTE)
    es_adelantado = models.BooleanField(default=False)
    observaciones = models.TextField(blank=True, default='')
    registrado_por = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='pagos_registrados'
    )
    es_demo = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'pago'
        verbose_name = 'Pago'
        verbose_name_plural = 'Pagos'
        ordering = ['-anio', '-mes', '-created_at']
        constraints = [
            models.UniqueConstraint(fields=['alumno', 'mes', 'anio'], name='pago_unico_por_alumno_mes'),
        ]

    def __str__(self):
        return f"{self.alumno} - {self.mes:02d}/{self.anio} ({self.estado})"

    @property
    def confirmado(self):
        return self.estado == self.ESTADO_CONFIRMADO
