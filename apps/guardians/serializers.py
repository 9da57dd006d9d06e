#apps/guardians/serializers.py:

from rest_framework import serializers

from apps.common.mixins import ReglasPaisMixin
from apps.common.validators import validar_campo
from .models import Representante


class RepresentanteSerializer(ReglasPaisMixin, serializers.ModelSerializer):
    alumnos_asignados = serializers.SerializerMethodField()

    class Meta:
        model = Representante
        fields = [
            'id', 'cedula', 'nombre', 'telefono', 'email', 'direccion',
            'alumnos_asignados', 'es_demo', 'created_at', 'updated_at'
        ]
        read_only_fields = ['es_demo', 'created_at', 'updated_at']
        extra_kwargs = {
            # la unicidad se valida en validate_cedula con mensaje propio
            'cedula': {'validators': []},
        }

    def get_alumnos_asignados(self, obj):
        """Alumnos vigentes a cargo del representante"""
        relaciones = obj.alumnos_representados.filter(
            alumno__eliminado=False
        ).select_related('alumno')
        return [
            {
                'id': relacion.alumno.id,
                'nombre': relacion.alumno.nombre,
                'cedula': relacion.alumno.cedula,
                'parentesco': relacion.parentesco,
            } for relacion in relaciones
        ]

    def validate_cedula(self, value):
        value = value.strip().upper()
        validar_campo(self.reglas, 'cedula', value, self.idioma)
        existentes = Representante.objects.filter(cedula=value)
        if self.instance is not None:
            existentes = existentes.exclude(pk=self.instance.pk)
        if existentes.exists():
            raise serializers.ValidationError(
                "A guardian with this ID already exists" if self.idioma == 'en'
                else "Ya existe un representante con esta cédula"
            )
        return value

    def validate_telefono(self, value):
        return validar_campo(self.reglas, 'telefono_opcional', value.strip(), self.idioma)

    def validate_nombre(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError(
                "Name is required" if self.idioma == 'en' else "El nombre es obligatorio"
            )
        return value
