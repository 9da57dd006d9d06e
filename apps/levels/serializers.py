#apps/levels/serializers.py:

import re

from rest_framework import serializers
from .models import CategoriaEdad, Cinta
from .services import precio_para


class CategoriaEdadSerializer(serializers.ModelSerializer):
    rango = serializers.CharField(source='rango_texto', read_only=True)
    precio_efectivo = serializers.SerializerMethodField()
    total_alumnos = serializers.SerializerMethodField()

    class Meta:
        model = CategoriaEdad
        fields = [
            'id', 'nombre', 'edad_min', 'edad_max', 'precio_mensualidad', 'orden',
            'rango', 'precio_efectivo', 'total_alumnos', 'created_at', 'updated_at'
        ]
        read_only_fields = ['created_at', 'updated_at']

    def get_precio_efectivo(self, obj):
        return precio_para(obj)

    def get_total_alumnos(self, obj):
        return obj.alumnos.filter(eliminado=False).count()

    def validate_precio_mensualidad(self, value):
        if value is not None and value < 0:
            raise serializers.ValidationError("El precio no puede ser negativo")
        return value

    def validate(self, attrs):
        edad_min = attrs.get('edad_min', getattr(self.instance, 'edad_min', None))
        edad_max = attrs.get('edad_max', getattr(self.instance, 'edad_max', None))
        if edad_min is not None and edad_max is not None and edad_min > edad_max:
            raise serializers.ValidationError("La edad mínima no puede ser mayor que la edad máxima")
        return attrs


class CintaSerializer(serializers.ModelSerializer):
    total_alumnos = serializers.SerializerMethodField()

    class Meta:
        model = Cinta
        fields = [
            'id', 'nombre', 'nombre_en', 'color_hex', 'orden', 'es_dan', 'nivel_dan',
            'total_alumnos', 'created_at', 'updated_at'
        ]
        read_only_fields = ['created_at', 'updated_at']

    def get_total_alumnos(self, obj):
        return obj.alumnos.filter(eliminado=False).count()

    def validate_color_hex(self, value):
        if not re.fullmatch(r'#[0-9A-Fa-f]{6}', value):
            raise serializers.ValidationError("El color debe tener el formato #RRGGBB")
        return value.upper()

    def validate(self, attrs):
        es_dan = attrs.get('es_dan', getattr(self.instance, 'es_dan', False))
        nivel_dan = attrs.get('nivel_dan', getattr(self.instance, 'nivel_dan', None))
        if nivel_dan and not es_dan:
            raise serializers.ValidationError("Solo las cintas Dan pueden tener nivel Dan")
        return attrs
