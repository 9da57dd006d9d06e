#apps/configuration/serializers.py:

from rest_framework import serializers
from .models import Configuracion, VALORES_DEFECTO

MODOS_TEMA = ['light', 'dark']


class ConfiguracionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Configuracion
        fields = ['id', 'clave', 'valor', 'descripcion', 'updated_at']
        read_only_fields = ['clave', 'updated_at']


class ValorSerializer(serializers.Serializer):
    valor = serializers.CharField(allow_blank=True, allow_null=True)
    descripcion = serializers.CharField(max_length=255, required=False, allow_blank=True)


class ConfiguracionMasivaSerializer(serializers.Serializer):
    """Diccionario clave -> valor con las claves conocidas del dojo"""
    valores = serializers.DictField(child=serializers.CharField(allow_blank=True, allow_null=True))

    def validate_valores(self, value):
        desconocidas = set(value) - set(VALORES_DEFECTO)
        if desconocidas:
            raise serializers.ValidationError(
                f"Claves desconocidas: {', '.join(sorted(desconocidas))}"
            )
        modo = value.get('tema_modo')
        if modo is not None and modo not in MODOS_TEMA:
            raise serializers.ValidationError("El modo del tema debe ser 'light' o 'dark'")
        return value


class RespaldoSerializer(serializers.Serializer):
    respaldo = serializers.DictField()
