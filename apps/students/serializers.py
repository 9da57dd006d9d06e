#apps/students/serializers.py:

from django.contrib.auth.models import User
from django.utils import timezone
from rest_framework import serializers

from apps.authentication.models import ROL_INSTRUCTOR
from apps.common.mixins import ReglasPaisMixin
from apps.common.validators import validar_campo, validar_fecha_nacimiento
from apps.guardians.models import Representante
from apps.levels.models import CategoriaEdad, Cinta
from apps.levels import services as niveles
from .models import Alumno, AlumnoRepresentante
from . import services

CAMPOS_TELEFONO = ['telefono', 'telefono_emergencia', 'telefono_padre', 'telefono_madre']


class AlumnoRepresentanteSerializer(serializers.ModelSerializer):
    representante_nombre = serializers.CharField(source='representante.nombre', read_only=True)
    representante_cedula = serializers.CharField(source='representante.cedula', read_only=True)
    representante_telefono = serializers.CharField(source='representante.telefono', read_only=True)
    alumno_nombre = serializers.CharField(source='alumno.nombre', read_only=True)

    class Meta:
        model = AlumnoRepresentante
        fields = [
            'id', 'alumno', 'alumno_nombre', 'representante', 'representante_nombre',
            'representante_cedula', 'representante_telefono', 'parentesco', 'created_at'
        ]
        read_only_fields = ['created_at']


class AlumnoSerializer(serializers.ModelSerializer):
    edad = serializers.IntegerField(read_only=True)
    categoria_nombre = serializers.CharField(source='categoria_edad.nombre', read_only=True, default=None)
    cinta_nombre = serializers.CharField(source='cinta.nombre', read_only=True, default=None)
    cinta_color = serializers.CharField(source='cinta.color_hex', read_only=True, default=None)
    sensei_nombre = serializers.SerializerMethodField()

    class Meta:
        model = Alumno
        fields = [
            'id', 'cedula', 'nombre', 'fecha_nacimiento', 'edad', 'telefono', 'email',
            'categoria_edad', 'categoria_nombre', 'cinta', 'cinta_nombre', 'cinta_color',
            'sensei', 'sensei_nombre', 'usuario', 'activo', 'fecha_inscripcion',
            'tiempo_preparacion_meses', 'proximo_examen_fecha', 'es_demo'
        ]
        read_only_fields = fields

    def get_sensei_nombre(self, obj):
        if obj.sensei is None:
            return None
        return obj.sensei.get_full_name() or obj.sensei.username


class AlumnoDetailSerializer(AlumnoSerializer):
    representantes = AlumnoRepresentanteSerializer(many=True, read_only=True)
    ultimo_pago = serializers.SerializerMethodField()

    class Meta(AlumnoSerializer.Meta):
        fields = AlumnoSerializer.Meta.fields + [
            'direccion', 'contacto_emergencia', 'telefono_emergencia', 'nombre_padre',
            'telefono_padre', 'nombre_madre', 'telefono_madre', 'representantes',
            'ultimo_pago', 'eliminado', 'fecha_eliminacion', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_ultimo_pago(self, obj):
        pago = obj.pagos.order_by('-anio', '-mes').first()
        if pago is None:
            return None
        return {
            'mes': pago.mes,
            'anio': pago.anio,
            'mes_correspondiente': pago.mes_correspondiente,
            'estado': pago.estado,
            'monto': pago.monto,
        }


class RepresentanteVinculoSerializer(serializers.Serializer):
    representante = serializers.PrimaryKeyRelatedField(queryset=Representante.objects.all())
    parentesco = serializers.ChoiceField(choices=AlumnoRepresentante.PARENTESCO_CHOICES, default='OTRO')


class AlumnoWriteSerializer(ReglasPaisMixin, serializers.ModelSerializer):
    """
    Alta y edición de alumnos. Valida cédula y teléfonos según el país
    configurado y mantiene la categoría coherente con la edad.
    """
    representantes = RepresentanteVinculoSerializer(many=True, write_only=True, required=False)

    class Meta:
        model = Alumno
        fields = [
            'cedula', 'nombre', 'fecha_nacimiento', 'telefono', 'email', 'direccion',
            'contacto_emergencia', 'telefono_emergencia', 'nombre_padre', 'telefono_padre',
            'nombre_madre', 'telefono_madre', 'categoria_edad', 'cinta', 'sensei', 'activo',
            'representantes'
        ]
        extra_kwargs = {
            'cedula': {'validators': []},
            'sensei': {'required': False},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.aviso_categoria = None

    def _mensaje(self, es, en):
        return en if self.idioma == 'en' else es

    def validate_cedula(self, value):
        value = value.strip().upper()
        validar_campo(self.reglas, 'cedula', value, self.idioma)
        existentes = Alumno.objects.filter(cedula=value)
        if self.instance is not None:
            existentes = existentes.exclude(pk=self.instance.pk)
        if existentes.exists():
            raise serializers.ValidationError(
                self._mensaje("Ya existe un alumno con esta cédula", "A student with this ID already exists")
            )
        return value

    def validate_fecha_nacimiento(self, value):
        return validar_fecha_nacimiento(value, timezone.localdate(), self.idioma)

    def validate_representantes(self, value):
        ids = [v['representante'].pk for v in value]
        if len(ids) != len(set(ids)):
            raise serializers.ValidationError(
                self._mensaje("Un representante no puede repetirse", "A guardian cannot be listed twice")
            )
        return value

    def validate_sensei(self, value):
        if value is not None and not value.groups.filter(name=ROL_INSTRUCTOR).exists():
            raise serializers.ValidationError(
                self._mensaje("El sensei debe ser un instructor", "Sensei must be an instructor")
            )
        return value

    def validate(self, attrs):
        errores = {}
        for campo in CAMPOS_TELEFONO:
            valor = attrs.get(campo)
            if valor:
                try:
                    validar_campo(self.reglas, 'telefono_opcional', valor.strip(), self.idioma)
                except serializers.ValidationError as exc:
                    errores[campo] = exc.detail
        if errores:
            raise serializers.ValidationError(errores)

        fecha = attrs.get('fecha_nacimiento', getattr(self.instance, 'fecha_nacimiento', None))
        categoria = attrs.get('categoria_edad', getattr(self.instance, 'categoria_edad', None))
        if fecha is not None:
            edad = niveles.calcular_edad(fecha, timezone.localdate())
            categorias = CategoriaEdad.objects.all()
            if categoria is None and self.instance is None:
                categoria = niveles.resolver_categoria(edad, categorias)
            else:
                categoria, self.aviso_categoria = niveles.reasignar_categoria(
                    categoria, edad, categorias, self.idioma
                )
            attrs['categoria_edad'] = categoria

        cinta = attrs.get('cinta', getattr(self.instance, 'cinta', None))
        if cinta is not None and categoria is not None:
            permitidas = niveles.cintas_permitidas(categoria, Cinta.objects.all())
            if cinta.pk not in {c.pk for c in permitidas}:
                raise serializers.ValidationError({
                    'cinta': self._mensaje(
                        f"La cinta {cinta.nombre} no está permitida para la categoría {categoria.nombre}",
                        f"Belt {cinta.nombre_para('en')} is not allowed for category {categoria.nombre}",
                    )
                })
        return attrs

    def create(self, validated_data):
        vinculos = validated_data.pop('representantes', [])
        return services.crear_alumno(
            validated_data,
            representantes=[(v['representante'], v['parentesco']) for v in vinculos],
        )

    def update(self, instance, validated_data):
        validated_data.pop('representantes', None)
        cambia_nivel = (
            validated_data.get('categoria_edad', instance.categoria_edad) != instance.categoria_edad
            or validated_data.get('cinta', instance.cinta) != instance.cinta
        )
        alumno = super().update(instance, validated_data)
        if cambia_nivel:
            services.recalcular_preparacion(alumno)
            alumno.save(update_fields=['tiempo_preparacion_meses', 'proximo_examen_fecha', 'updated_at'])
        return alumno


class InscripcionPropiaSerializer(AlumnoWriteSerializer):
    """Alta de un alumno hecha por el propio usuario"""

    class Meta(AlumnoWriteSerializer.Meta):
        fields = [
            'cedula', 'nombre', 'fecha_nacimiento', 'telefono', 'email', 'direccion',
            'contacto_emergencia', 'telefono_emergencia', 'nombre_padre', 'telefono_padre',
            'nombre_madre', 'telefono_madre', 'cinta'
        ]

    def create(self, validated_data):
        return services.crear_alumno(validated_data, usuario=self.context['request'].user)


class AsignarSenseiSerializer(serializers.Serializer):
    sensei_id = serializers.IntegerField()

    def validate_sensei_id(self, value):
        sensei = services.instructores_activos().filter(pk=value).first()
        if sensei is None:
            raise serializers.ValidationError("Instructor no encontrado o inactivo")
        return value

    @property
    def sensei(self):
        return User.objects.get(pk=self.validated_data['sensei_id'])
