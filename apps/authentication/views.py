#apps/authentication/views.py:

import logging

from rest_framework import status, viewsets
from rest_framework.decorators import api_view, permission_classes, action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.filters import SearchFilter, OrderingFilter
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.exceptions import TokenError
from django.contrib.auth.models import User, Group
from django.contrib.auth import update_session_auth_hash
from django_filters.rest_framework import DjangoFilterBackend
from .models import PerfilUsuario, LogActividad, ROL_INSTRUCTOR
from .permissions import IsAdministrador
from .serializers import (
    LoginSerializer, RegisterSerializer, UserSerializer, GroupSerializer,
    PermissionSerializer, UserUpdateSerializer, PasswordChangeSerializer,
    ProfileUpdateSerializer, AdminPasswordResetSerializer, IdiomaSerializer,
    InstructorSerializer, LogActividadSerializer
)
from .services import registrar_log, limpiar_logs, LogActions, LogModules

logger = logging.getLogger(__name__)


@api_view(['POST'])
@permission_classes([AllowAny])
def login_view(request):
    """Iniciar sesión y obtener tokens JWT"""
    serializer = LoginSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = serializer.validated_data['user']
    refresh = RefreshToken.for_user(user)
    registrar_log(request, LogActions.LOGIN, LogModules.AUTH, f'Inicio de sesión: {user.username}', usuario=user)

    return Response({
        'access': str(refresh.access_token),
        'refresh': str(refresh),
        'user': UserSerializer(user).data
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated, IsAdministrador])
def register_view(request):
    """Registrar nuevo usuario (solo administradores)"""
    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    user = serializer.save()
    registrar_log(request, LogActions.CREAR, LogModules.USUARIOS, f'Usuario creado: {user.username}')
    return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def logout_view(request):
    """Cerrar sesión invalidando el refresh token"""
    refresh_token = request.data.get('refresh')
    if not refresh_token:
        return Response({'error': 'Debe enviar el refresh token'}, status=status.HTTP_400_BAD_REQUEST)
    try:
        RefreshToken(refresh_token).blacklist()
    except TokenError:
        return Response({'error': 'Token inválido'}, status=status.HTTP_400_BAD_REQUEST)

    registrar_log(request, LogActions.LOGOUT, LogModules.AUTH, f'Cierre de sesión: {request.user.username}')
    return Response({'message': 'Sesión cerrada exitosamente'})


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def profile_view(request):
    """Obtener perfil del usuario actual"""
    return Response(UserSerializer(request.user).data)


@api_view(['GET'])
@permission_classes([AllowAny])
def idioma_sistema_view(request):
    """Idioma global del sistema (público, se usa antes del login)"""
    from apps.payments.models import ConfigPagos
    return Response({'idioma_sistema': ConfigPagos.cargar().idioma_sistema})


@api_view(['PUT'])
@permission_classes([IsAuthenticated])
def cambiar_idioma_view(request):
    """Cambiar el idioma preferido del usuario actual"""
    serializer = IdiomaSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    perfil = PerfilUsuario.de(request.user)
    perfil.idioma = serializer.validated_data['idioma']
    perfil.save(update_fields=['idioma', 'updated_at'])
    return Response({'message': 'Idioma actualizado exitosamente', 'idioma': perfil.idioma})


@api_view(['PUT'])
@permission_classes([IsAuthenticated, IsAdministrador])
def cambiar_idioma_global_view(request):
    """Cambiar el idioma del sistema y de todos los usuarios (solo administradores)"""
    from apps.payments.models import ConfigPagos

    serializer = IdiomaSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    idioma = serializer.validated_data['idioma']

    for user in User.objects.filter(perfil__isnull=True):
        PerfilUsuario.objects.create(usuario=user, idioma=idioma)
    actualizados = PerfilUsuario.objects.update(idioma=idioma)

    config = ConfigPagos.cargar()
    config.idioma_sistema = idioma
    config.save(update_fields=['idioma_sistema', 'updated_at'])

    registrar_log(request, LogActions.CONFIGURAR, LogModules.SISTEMA, f'Idioma global cambiado a {idioma}')
    return Response({
        'message': 'Idioma actualizado globalmente para todos los usuarios',
        'idioma': idioma,
        'usuarios_actualizados': actualizados
    })


class GroupViewSet(viewsets.ReadOnlyModelViewSet):
    """Roles del sistema"""
    queryset = Group.objects.all().order_by('name')
    serializer_class = GroupSerializer
    permission_classes = [IsAuthenticated]

    @action(detail=True, methods=['get'])
    def users(self, request, pk=None):
        """Usuarios con este rol"""
        group = self.get_object()
        return Response(UserSerializer(group.user_set.all(), many=True).data)

    @action(detail=True, methods=['get'])
    def permissions(self, request, pk=None):
        group = self.get_object()
        return Response(PermissionSerializer(group.permissions.select_related('content_type'), many=True).data)


class UserManagementViewSet(viewsets.ModelViewSet):
    """
    Gestión de usuarios por administradores
    - No incluye CREATE (usar /register/)
    """
    queryset = User.objects.all()
    permission_classes = [IsAuthenticated, IsAdministrador]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ['is_active']
    search_fields = ['username', 'email', 'first_name', 'last_name']
    ordering_fields = ['username', 'email', 'date_joined', 'last_login']
    ordering = ['-date_joined']
    http_method_names = ['get', 'put', 'patch', 'delete', 'post', 'head', 'options']

    def get_serializer_class(self):
        if self.action in ['update', 'partial_update']:
            return UserUpdateSerializer
        if self.action == 'change_password':
            return AdminPasswordResetSerializer
        return UserSerializer

    def get_queryset(self):
        queryset = super().get_queryset()
        rol = self.request.query_params.get('rol')
        if rol:
            queryset = queryset.filter(groups__name__iexact=rol)
        return queryset.distinct()

    def create(self, request, *args, **kwargs):
        return Response(
            {'error': 'Use /api/auth/register/ para crear usuarios'},
            status=status.HTTP_405_METHOD_NOT_ALLOWED
        )

    def perform_update(self, serializer):
        user = serializer.save()
        registrar_log(self.request, LogActions.ACTUALIZAR, LogModules.USUARIOS, f'Usuario actualizado: {user.username}')

    def destroy(self, request, *args, **kwargs):
        user = self.get_object()
        if user == request.user:
            return Response({'error': 'No puede eliminar su propio usuario'}, status=status.HTTP_400_BAD_REQUEST)
        registrar_log(request, LogActions.ELIMINAR, LogModules.USUARIOS, f'Usuario eliminado: {user.username}')
        return super().destroy(request, *args, **kwargs)

    @action(detail=True, methods=['post'])
    def change_password(self, request, pk=None):
        """Restablecer la contraseña de un usuario"""
        user = self.get_object()
        serializer = AdminPasswordResetSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user.set_password(serializer.validated_data['new_password'])
        user.save()
        return Response({'message': f'Contraseña actualizada para {user.username}'})

    @action(detail=True, methods=['post'])
    def toggle_active(self, request, pk=None):
        """Activar/desactivar usuario"""
        user = self.get_object()
        user.is_active = not user.is_active
        user.save(update_fields=['is_active'])

        status_text = "activado" if user.is_active else "desactivado"
        registrar_log(request, LogActions.ACTUALIZAR, LogModules.USUARIOS, f'Usuario {user.username} {status_text}')
        return Response({
            'message': f'Usuario {user.username} {status_text}',
            'is_active': user.is_active
        })

    @action(detail=False, methods=['get'])
    def statistics(self, request):
        """Estadísticas de usuarios"""
        total_users = User.objects.count()
        active_users = User.objects.filter(is_active=True).count()

        return Response({
            'total_users': total_users,
            'active_users': active_users,
            'inactive_users': total_users - active_users,
            'users_by_group': [
                {'group': group.name, 'count': group.user_set.count()}
                for group in Group.objects.all().order_by('name')
            ]
        })


class ProfileManagementViewSet(viewsets.GenericViewSet):
    """Gestión del propio perfil"""
    permission_classes = [IsAuthenticated]

    @action(detail=False, methods=['put', 'patch'])
    def update_profile(self, request):
        """Actualizar perfil del usuario actual"""
        serializer = ProfileUpdateSerializer(
            request.user,
            data=request.data,
            partial=request.method == 'PATCH'
        )
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response({
            'message': 'Perfil actualizado exitosamente',
            'user': UserSerializer(request.user).data
        })

    @action(detail=False, methods=['post'])
    def change_password(self, request):
        """Cambiar contraseña del usuario actual"""
        serializer = PasswordChangeSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        user = request.user
        user.set_password(serializer.validated_data['new_password'])
        user.save()
        update_session_auth_hash(request, user)
        return Response({'message': 'Contraseña actualizada exitosamente'})


class InstructorViewSet(viewsets.ReadOnlyModelViewSet):
    """Usuarios activos con rol Instructor"""
    serializer_class = InstructorSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return User.objects.filter(
            groups__name=ROL_INSTRUCTOR, is_active=True
        ).distinct().order_by('first_name', 'username')


class LogActividadViewSet(viewsets.ReadOnlyModelViewSet):
    """Log de actividades (solo administradores)"""
    queryset = LogActividad.objects.select_related('usuario')
    serializer_class = LogActividadSerializer
    permission_classes = [IsAuthenticated, IsAdministrador]
    filter_backends = [DjangoFilterBackend, SearchFilter]
    filterset_fields = ['accion', 'modulo', 'usuario']
    search_fields = ['descripcion']

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        limite = request.query_params.get('limit', '100')
        if limite.isdigit():
            queryset = queryset[:int(limite)]
        return Response(self.get_serializer(queryset, many=True).data)

    @action(detail=False, methods=['delete'])
    def limpiar(self, request):
        """Eliminar logs anteriores a N días (por defecto 90)"""
        dias = request.query_params.get('days', '90')
        if not dias.isdigit():
            return Response({'error': 'El parámetro days debe ser un número'}, status=status.HTTP_400_BAD_REQUEST)
        eliminados = limpiar_logs(int(dias))
        registrar_log(request, LogActions.ELIMINAR, LogModules.SISTEMA, f'Limpieza de logs: {eliminados} eliminados')
        return Response({
            'message': f'Se eliminaron {eliminados} logs anteriores a {dias} días',
            'eliminados': eliminados
        })
