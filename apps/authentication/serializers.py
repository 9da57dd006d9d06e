from rest_framework import serializers
from django.contrib.auth.models import User, Group, Permission
from django.contrib.auth import authenticate
from .models import PerfilUsuario, LogActividad, IDIOMA_CHOICES, es_administrador


def _validar_grupos(nombres):
    existentes = set(Group.objects.filter(name__in=nombres).values_list('name', flat=True))
    faltantes = set(nombres) - existentes
    if faltantes:
        raise serializers.ValidationError(f"Los roles {sorted(faltantes)} no existen")


class UserSerializer(serializers.ModelSerializer):
    roles = serializers.SlugRelatedField(source='groups', slug_field='name', many=True, read_only=True)
    idioma = serializers.SerializerMethodField()
    es_administrador = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'first_name', 'last_name', 'is_active',
                  'roles', 'idioma', 'es_administrador', 'date_joined', 'last_login']
        read_only_fields = ['id', 'date_joined', 'last_login']

    def get_idioma(self, obj):
        return PerfilUsuario.de(obj).idioma

    def get_es_administrador(self, obj):
        return es_administrador(obj)


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField(write_only=True)

    def validate(self, attrs):
        user = authenticate(username=attrs.get('username'), password=attrs.get('password'))
        if not user:
            raise serializers.ValidationError('Credenciales inválidas')
        if not user.is_active:
            raise serializers.ValidationError('Usuario inactivo')
        attrs['user'] = user
        return attrs


class RegisterSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=8)
    password_confirm = serializers.CharField(write_only=True)
    roles = serializers.ListField(
        child=serializers.CharField(),
        write_only=True,
        required=False,
        help_text="Nombres de los roles a asignar (Administrador, Instructor, Usuario)"
    )
    idioma = serializers.ChoiceField(choices=IDIOMA_CHOICES, write_only=True, required=False)

    class Meta:
        model = User
        fields = ['username', 'email', 'first_name', 'last_name', 'password',
                  'password_confirm', 'roles', 'idioma', 'is_active']

    def validate(self, attrs):
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError("Las contraseñas no coinciden")
        _validar_grupos(attrs.get('roles', []))
        return attrs

    def create(self, validated_data):
        password = validated_data.pop('password')
        validated_data.pop('password_confirm')
        roles = validated_data.pop('roles', None) or ['Usuario']
        idioma = validated_data.pop('idioma', 'es')

        user = User.objects.create_user(password=password, **validated_data)
        user.groups.set(Group.objects.filter(name__in=roles))
        PerfilUsuario.objects.create(usuario=user, idioma=idioma)
        return user


class PermissionSerializer(serializers.ModelSerializer):
    app_label = serializers.CharField(source='content_type.app_label', read_only=True)

    class Meta:
        model = Permission
        fields = ['id', 'name', 'codename', 'app_label']


class GroupSerializer(serializers.ModelSerializer):
    permission_count = serializers.SerializerMethodField()
    user_count = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = ['id', 'name', 'permission_count', 'user_count']

    def get_permission_count(self, obj):
        return obj.permissions.count()

    def get_user_count(self, obj):
        return obj.user_set.count()


class UserUpdateSerializer(serializers.ModelSerializer):
    roles = serializers.ListField(child=serializers.CharField(), write_only=True, required=False)

    class Meta:
        model = User
        fields = ['username', 'email', 'first_name', 'last_name', 'is_active', 'roles']

    def validate_roles(self, value):
        _validar_grupos(value)
        return value

    def update(self, instance, validated_data):
        roles = validated_data.pop('roles', None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()

        if roles is not None:
            instance.groups.set(Group.objects.filter(name__in=roles))
        return instance


class PasswordChangeSerializer(serializers.Serializer):
    old_password = serializers.CharField(write_only=True)
    new_password = serializers.CharField(write_only=True, min_length=8)
    new_password_confirm = serializers.CharField(write_only=True)

    def validate(self, attrs):
        if attrs['new_password'] != attrs['new_password_confirm']:
            raise serializers.ValidationError("Las nuevas contraseñas no coinciden")
        return attrs

    def validate_old_password(self, value):
        if not self.context['request'].user.check_password(value):
            raise serializers.ValidationError("La contraseña actual es incorrecta")
        return value


class ProfileUpdateSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['email', 'first_name', 'last_name']

    def validate_email(self, value):
        if User.objects.exclude(pk=self.instance.pk).filter(email=value).exists():
            raise serializers.ValidationError("Este email ya está en uso")
        return value


class AdminPasswordResetSerializer(serializers.Serializer):
    new_password = serializers.CharField(write_only=True, min_length=8)
    new_password_confirm = serializers.CharField(write_only=True)

    def validate(self, attrs):
        if attrs['new_password'] != attrs['new_password_confirm']:
            raise serializers.ValidationError("Las contraseñas no coinciden")
        return attrs


class IdiomaSerializer(serializers.Serializer):
    idioma = serializers.ChoiceField(
        choices=IDIOMA_CHOICES,
        error_messages={'invalid_choice': 'Idioma inválido (debe ser es o en)'}
    )


class InstructorSerializer(serializers.ModelSerializer):
    nombre_completo = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ['id', 'username', 'nombre_completo', 'email']

    def get_nombre_completo(self, obj):
        return obj.get_full_name() or obj.username


class LogActividadSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source='usuario.username', read_only=True, default=None)

    class Meta:
        model = LogActividad
        fields = ['id', 'usuario', 'username', 'accion', 'modulo', 'descripcion',
                  'ip_address', 'user_agent', 'fecha']
