from decimal import Decimal

import apps.payments.models
from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('students', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ConfigPagos',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('dia_corte', models.PositiveSmallIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(31)])),
                ('descuento_pago_adelantado', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=5, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ('recargo_mora', models.DecimalField(decimal_places=2, default=Decimal('0'), max_digits=5, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100)])),
                ('moneda', models.CharField(choices=[('USD$', 'Dólares'), ('BS.', 'Bolívares')], default='USD$', max_length=5)),
                ('tipo_cambio_usd_bs', models.DecimalField(decimal_places=2, default=Decimal('220.00'), max_digits=12)),
                ('precio_base', models.DecimalField(decimal_places=2, default=Decimal('50.00'), max_digits=10)),
                ('pais_configuracion', models.CharField(choices=[('venezuela', 'Venezuela'), ('usa', 'Estados Unidos')], default='venezuela', max_length=10)),
                ('metodos_pago', models.JSONField(default=apps.payments.models.metodos_pago_defecto)),
                ('datos_bancarios', models.TextField(blank=True, default='')),
                ('idioma_sistema', models.CharField(choices=[('es', 'Español'), ('en', 'English')], default='es', max_length=2)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Configuración de pagos',
                'verbose_name_plural': 'Configuración de pagos',
                'db_table': 'config_pagos',
            },
        ),
        migrations.CreateModel(
            name='Pago',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('mes', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)])),
                ('anio', models.PositiveIntegerField()),
                ('monto', models.DecimalField(decimal_places=2, max_digits=12)),
                ('metodo_pago', models.CharField(choices=[('transferencia', 'Transferencia'), ('pago_movil', 'Pago Móvil'), ('zelle', 'Zelle'), ('paypal', 'PayPal')], max_length=20)),
                ('referencia', models.CharField(blank=True, default='', max_length=20)),
                ('banco_origen', models.CharField(blank=True, default='', max_length=100)),
                ('cedula_titular', models.CharField(blank=True, default='', max_length=20)),
                ('telefono_cuenta', models.CharField(blank=True, default='', max_length=20)),
                ('fecha_pago', models.DateField()),
                ('mes_correspondiente', models.CharField(blank=True, default='', max_length=40)),
                ('estado', models.CharField(choices=[('pendiente', 'Pendiente'), ('confirmado', 'Confirmado')], default='pendiente', max_length=10)),
                ('es_adelantado', models.BooleanField(default=False)),
                ('observaciones', models.TextField(blank=True, default='')),
                ('es_demo', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('alumno', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='pagos', to='students.alumno')),
                ('registrado_por', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='pagos_registrados', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Pago',
                'verbose_name_plural': 'Pagos',
                'db_table': 'pago',
                'ordering': ['-anio', '-mes', '-created_at'],
            },
        ),
        migrations.AddConstraint(
            model_name='pago',
            constraint=models.UniqueConstraint(fields=('alumno', 'mes', 'anio'), name='pago_unico_por_alumno_mes'),
        ),
    ]
