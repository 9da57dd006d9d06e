#apps/payments/serializers.py:

from django.utils import timezone
from rest_framework import serializers

from apps.common.mixins import ReglasPaisMixin
from apps.common.validators import validar_campo
from .models import ConfigPagos, Pago
from .services import validar_fecha_formulario

# métodos que exigen los datos de la cuenta de origen
METODOS_CON_CUENTA = ('transferencia', 'pago_movil')


class ConfigPagosSerializer(serializers.ModelSerializer):
    class Meta:
        model = ConfigPagos
        fields = [
            'dia_corte', 'descuento_pago_adelantado', 'recargo_mora', 'moneda',
            'tipo_cambio_usd_bs', 'precio_base', 'pais_configuracion', 'metodos_pago',
            'datos_bancarios', 'idioma_sistema', 'updated_at'
        ]
        read_only_fields = ['updated_at']

    def validate_tipo_cambio_usd_bs(self, value):
        if value <= 0:
            raise serializers.ValidationError("El tipo de cambio debe ser mayor que cero")
        return value

    def validate_metodos_pago(self, value):
        if not isinstance(value, list) or not all(isinstance(m, str) and m.strip() for m in value):
            raise serializers.ValidationError("Debe ser una lista de nombres de métodos de pago")
        return value


class PagoSerializer(serializers.ModelSerializer):
    alumno_nombre = serializers.CharField(source='alumno.nombre', read_only=True)
    registrado_por_nombre = serializers.CharField(source='registrado_por.username', read_only=True, default=None)
    metodo_pago_display = serializers.CharField(source='get_metodo_pago_display', read_only=True)

    class Meta:
        model = Pago
        fields = [
            'id', 'alumno', 'alumno_nombre', 'mes', 'anio', 'monto', 'metodo_pago',
            'metodo_pago_display', 'referencia', 'banco_origen', 'cedula_titular',
            'telefono_cuenta', 'fecha_pago', 'mes_correspondiente', 'estado',
            'es_adelantado', 'observaciones', 'registrado_por', 'registrado_por_nombre',
            'created_at'
        ]
        read_only_fields = fields


class VerificacionPagoSerializer(ReglasPaisMixin, serializers.Serializer):
    """
    Datos del formulario de verificación de pago. Las reglas de cédula y
    teléfono dependen del país configurado en ConfigPagos.
    """
    alumno = serializers.IntegerField(required=False)
    monto = serializers.DecimalField(max_digits=12, decimal_places=2)
    metodo_pago = serializers.ChoiceField(choices=Pago.METODO_CHOICES)
    referencia = serializers.CharField(max_length=20)
    banco_origen = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')
    cedula_titular = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    telefono_cuenta = serializers.CharField(max_length=20, required=False, allow_blank=True, default='')
    fecha_pago = serializers.DateField()
    observaciones = serializers.CharField(required=False, allow_blank=True, default='')
    es_adelantado = serializers.BooleanField(required=False, default=False)

    def validate_monto(self, value):
        if value <= 0:
            raise serializers.ValidationError(
                "Amount must be a positive number" if self.idioma == 'en'
                else "El monto debe ser un número positivo"
            )
        return value

    def validate_referencia(self, value):
        return validar_campo(self.reglas, 'referencia', value, self.idioma)

    def validate_fecha_pago(self, value):
        if not validar_fecha_formulario(value, timezone.localdate()):
            raise serializers.ValidationError(
                "Date must be between last month and today" if self.idioma == 'en'
                else "La fecha debe estar entre el mes pasado y hoy"
            )
        return value

    def validate(self, attrs):
        errores = {}
        requiere_cuenta = attrs['metodo_pago'] in METODOS_CON_CUENTA

        if requiere_cuenta and not attrs.get('banco_origen'):
            errores['banco_origen'] = 'Select the bank' if self.idioma == 'en' else 'Seleccione el banco'

        for campo, regla in (('cedula_titular', 'cedula'), ('telefono_cuenta', 'telefono')):
            valor = attrs.get(campo)
            if not valor and not requiere_cuenta:
                continue
            try:
                validar_campo(self.reglas, regla, valor, self.idioma)
            except serializers.ValidationError as exc:
                errores[campo] = exc.detail

        if errores:
            raise serializers.ValidationError(errores)
        return attrs


class PagoUpdateSerializer(serializers.ModelSerializer):
    """Edición administrativa de un pago"""

    class Meta:
        model = Pago
        fields = ['monto', 'estado', 'observaciones', 'referencia', 'banco_origen']

    def validate_monto(self, value):
        if value <= 0:
            raise serializers.ValidationError("El monto debe ser un número positivo")
        return value
