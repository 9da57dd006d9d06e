#apps/schedules/serializers.py:

from rest_framework import serializers
from .models import HorarioClase, DiaFestivo


class HorarioClaseSerializer(serializers.ModelSerializer):
    categoria_edad_nombre = serializers.CharField(source='categoria_edad.nombre', read_only=True, default=None)

    class Meta:
        model = HorarioClase
        fields = [
            'id', 'dia_semana', 'hora_inicio', 'hora_fin', 'categoria_edad', 'categoria_edad_nombre',
            'capacidad_maxima', 'instructor', 'activo', 'es_demo', 'created_at', 'updated_at'
        ]
        read_only_fields = ['es_demo', 'created_at', 'updated_at']

    def validate_capacidad_maxima(self, value):
        if value is not None and value < 1:
            raise serializers.ValidationError("La capacidad debe ser al menos 1")
        return value

    def validate(self, attrs):
        hora_inicio = attrs.get('hora_inicio', getattr(self.instance, 'hora_inicio', None))
        hora_fin = attrs.get('hora_fin', getattr(self.instance, 'hora_fin', None))
        if hora_inicio and hora_fin and hora_inicio >= hora_fin:
            raise serializers.ValidationError({'hora_fin': 'La hora de fin debe ser posterior a la de inicio'})
        return attrs


class DiaFestivoSerializer(serializers.ModelSerializer):
    class Meta:
        model = DiaFestivo
        fields = ['id', 'fecha', 'descripcion', 'es_demo', 'created_at']
        read_only_fields = ['es_demo', 'created_at']
        extra_kwargs = {
            'fecha': {'validators': []},
        }

    def validate_fecha(self, value):
        existentes = DiaFestivo.objects.filter(fecha=value)
        if self.instance is not None:
            existentes = existentes.exclude(pk=self.instance.pk)
        if existentes.exists():
            raise serializers.ValidationError("Ya existe un día festivo en esa fecha")
        return value
