#apps/evaluations/serializers.py:

from django.contrib.auth.models import User
from django.utils import timezone
from rest_framework import serializers

from apps.authentication.models import ROL_INSTRUCTOR
from .models import Evaluacion, AlumnoEvaluacion
from .services import EXAMENES_OFICIALES


def _validar_fecha_futura(value, idioma):
    if value < timezone.localdate():
        raise serializers.ValidationError(
            "You cannot create an evaluation with a date before today" if idioma == 'en'
            else "No puedes crear una evaluación con una fecha anterior a hoy"
        )
    return value


class AlumnoEvaluacionSerializer(serializers.ModelSerializer):
    alumno_nombre = serializers.CharField(source='alumno.nombre', read_only=True)
    alumno_cedula = serializers.CharField(source='alumno.cedula', read_only=True)
    cinta_nombre = serializers.CharField(source='alumno.cinta.nombre', read_only=True, default=None)
    proximo_examen_fecha = serializers.DateField(source='alumno.proximo_examen_fecha', read_only=True)
    tiempo_preparacion_meses = serializers.IntegerField(source='alumno.tiempo_preparacion_meses', read_only=True)

    class Meta:
        model = AlumnoEvaluacion
        fields = [
            'id', 'alumno', 'alumno_nombre', 'alumno_cedula', 'cinta_nombre', 'notas',
            'proximo_examen_fecha', 'tiempo_preparacion_meses', 'created_at'
        ]
        read_only_fields = ['created_at']


class EvaluacionSerializer(serializers.ModelSerializer):
    instructor_nombre = serializers.SerializerMethodField()
    total_alumnos = serializers.SerializerMethodField()
    niveles = serializers.SerializerMethodField()

    class Meta:
        model = Evaluacion
        fields = [
            'id', 'nombre', 'examen_tipo', 'fecha', 'hora', 'descripcion', 'instructor',
            'instructor_nombre', 'total_alumnos', 'niveles', 'es_demo', 'created_at'
        ]
        read_only_fields = fields

    def get_instructor_nombre(self, obj):
        if obj.instructor is None:
            return None
        return obj.instructor.get_full_name() or obj.instructor.username

    def get_total_alumnos(self, obj):
        return obj.inscripciones.count()

    def get_niveles(self, obj):
        """Combinaciones categoría - cinta de los alumnos inscritos"""
        niveles = []
        for inscripcion in obj.inscripciones.select_related('alumno__categoria_edad', 'alumno__cinta'):
            alumno = inscripcion.alumno
            if alumno.categoria_edad and alumno.cinta:
                nivel = f"{alumno.categoria_edad.nombre} - {alumno.cinta.nombre}"
                if nivel not in niveles:
                    niveles.append(nivel)
        return ', '.join(niveles) or None


class EvaluacionCreateSerializer(serializers.Serializer):
    examen_tipo = serializers.ChoiceField(choices=[e.id for e in EXAMENES_OFICIALES])
    nombre = serializers.CharField(max_length=150, required=False, allow_blank=True)
    fecha = serializers.DateField()
    hora = serializers.TimeField()
    descripcion = serializers.CharField(required=False, allow_blank=True, default='')
    instructor = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.filter(groups__name=ROL_INSTRUCTOR, is_active=True)
    )
    alumnos_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=True)

    def validate_fecha(self, value):
        return _validar_fecha_futura(value, self.context.get('idioma', 'es'))


class EvaluacionUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = Evaluacion
        fields = ['nombre', 'fecha', 'hora', 'descripcion', 'instructor']

    def validate_fecha(self, value):
        if self.instance is not None and value == self.instance.fecha:
            return value
        return _validar_fecha_futura(value, self.context.get('idioma', 'es'))

    def validate_instructor(self, value):
        if value is not None and not value.groups.filter(name=ROL_INSTRUCTOR).exists():
            raise serializers.ValidationError("El instructor seleccionado no tiene rol de instructor")
        return value


class ResultadoSerializer(serializers.Serializer):
    alumno = serializers.IntegerField()
    notas = serializers.CharField(allow_blank=True)
