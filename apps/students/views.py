#apps/students/views.py:

from datetime import date

from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import SearchFilter, OrderingFilter

from apps.authentication.permissions import IsAdministrador, es_personal
from apps.authentication.serializers import InstructorSerializer
from apps.authentication.services import registrar_log, LogActions, LogModules
from apps.common.mixins import ContextoLocalMixin
from apps.guardians.models import Representante
from apps.levels.models import CategoriaEdad, Cinta
from apps.levels.serializers import CategoriaEdadSerializer, CintaSerializer
from apps.levels import services as niveles
from .models import Alumno, AlumnoRepresentante
from .serializers import (
    AlumnoSerializer, AlumnoDetailSerializer, AlumnoWriteSerializer,
    InscripcionPropiaSerializer, AsignarSenseiSerializer, AlumnoRepresentanteSerializer,
    RepresentanteVinculoSerializer
)
from . import services

ACCIONES_PAPELERA = ['eliminados', 'restaurar', 'permanente']
ACCIONES_ADMIN = [
    'create', 'update', 'partial_update', 'destroy', 'asignar_sensei',
    'asignar_representante', 'desasignar_representante'
] + ACCIONES_PAPELERA


class AlumnoViewSet(ContextoLocalMixin, viewsets.ModelViewSet):
    queryset = Alumno.objects.select_related('categoria_edad', 'cinta', 'sensei')
    serializer_class = AlumnoSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ['categoria_edad', 'cinta', 'activo', 'sensei']
    search_fields = ['nombre', 'cedula', 'email']
    ordering_fields = ['nombre', 'fecha_nacimiento', 'fecha_inscripcion']
    ordering = ['nombre']

    def get_serializer_class(self):
        if self.action in ['create', 'update', 'partial_update']:
            return AlumnoWriteSerializer
        if self.action == 'inscribirme':
            return InscripcionPropiaSerializer
        if self.action == 'retrieve':
            return AlumnoDetailSerializer
        return AlumnoSerializer

    def get_permissions(self):
        """Permisos específicos por acción"""
        if self.action in ACCIONES_ADMIN:
            permission_classes = [IsAuthenticated, IsAdministrador]
        else:
            permission_classes = [IsAuthenticated]
        return [permission() for permission in permission_classes]

    def get_queryset(self):
        queryset = super().get_queryset().filter(eliminado=self.action in ACCIONES_PAPELERA)
        user = self.request.user
        # los usuarios solo ven a sus propios alumnos
        if not es_personal(user):
            queryset = queryset.filter(usuario=user)
        return queryset

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        alumno = serializer.save()
        registrar_log(request, LogActions.CREAR, LogModules.ALUMNOS,
                      f'Alumno creado: {alumno.nombre} ({alumno.cedula})')
        return Response(AlumnoDetailSerializer(alumno).data, status=status.HTTP_201_CREATED)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = self.get_serializer(self.get_object(), data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        alumno = serializer.save()
        registrar_log(request, LogActions.ACTUALIZAR, LogModules.ALUMNOS,
                      f'Alumno actualizado: {alumno.nombre}')
        data = AlumnoDetailSerializer(alumno).data
        data['aviso_categoria'] = serializer.aviso_categoria
        return Response(data)

    def destroy(self, request, *args, **kwargs):
        alumno = self.get_object()
        services.eliminar_alumno(alumno)
        registrar_log(request, LogActions.ELIMINAR, LogModules.ALUMNOS,
                      f'Alumno enviado a la papelera: {alumno.nombre}')
        return Response({'message': 'Alumno eliminado. Puede restaurarlo desde la papelera'})

    @action(detail=False, methods=['post'])
    def inscribirme(self, request):
        """El usuario autenticado se inscribe como alumno"""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        alumno = serializer.save()
        registrar_log(request, LogActions.CREAR, LogModules.ALUMNOS,
                      f'Inscripción propia: {alumno.nombre} ({alumno.cedula})')

        from apps.payments.models import ConfigPagos
        from apps.payments.services import calcular_monto

        desglose = calcular_monto(alumno.categoria_edad, ConfigPagos.cargar(), es_primer_pago=True)
        return Response({
            'message': 'Inscripción realizada exitosamente',
            'alumno': AlumnoDetailSerializer(alumno).data,
            'edad': alumno.edad,
            'nombre_categoria': niveles.nombre_categoria_por_edad(alumno.edad, serializer.idioma),
            'categoria': CategoriaEdadSerializer(alumno.categoria_edad).data if alumno.categoria_edad else None,
            'primer_pago': desglose.como_dict(),
        }, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['get'])
    def eliminados(self, request):
        """Alumnos en la papelera"""
        alumnos = self.filter_queryset(self.get_queryset())
        return Response(AlumnoSerializer(alumnos, many=True).data)

    @action(detail=True, methods=['post'])
    def restaurar(self, request, pk=None):
        alumno = self.get_object()
        services.restaurar_alumno(alumno)
        registrar_log(request, LogActions.ACTUALIZAR, LogModules.ALUMNOS,
                      f'Alumno restaurado: {alumno.nombre}')
        return Response({'message': 'Alumno restaurado', 'alumno': AlumnoSerializer(alumno).data})

    @action(detail=True, methods=['delete'])
    def permanente(self, request, pk=None):
        """Eliminación definitiva de un alumno que ya está en la papelera"""
        alumno = self.get_object()
        nombre = alumno.nombre
        alumno.delete()
        registrar_log(request, LogActions.ELIMINAR, LogModules.ALUMNOS,
                      f'Alumno eliminado definitivamente: {nombre}')
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=False, methods=['get'])
    def senseis_disponibles(self, request):
        instructores = services.instructores_activos().order_by('first_name', 'username')
        return Response(InstructorSerializer(instructores, many=True).data)

    @action(detail=True, methods=['post'])
    def asignar_sensei(self, request, pk=None):
        alumno = self.get_object()
        serializer = AsignarSenseiSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        alumno.sensei = serializer.sensei
        alumno.save(update_fields=['sensei', 'updated_at'])
        registrar_log(request, LogActions.ACTUALIZAR, LogModules.ALUMNOS,
                      f'Sensei {alumno.sensei.username} asignado a {alumno.nombre}')
        return Response(AlumnoSerializer(alumno).data)

    @action(detail=False, methods=['get'])
    def categorias_permitidas(self, request):
        """Categorías que corresponden a la fecha de nacimiento indicada"""
        fecha = request.query_params.get('fecha_nacimiento')
        if not fecha:
            return Response({'error': 'fecha_nacimiento es requerida'}, status=status.HTTP_400_BAD_REQUEST)
        try:
            fecha = date.fromisoformat(fecha)
        except ValueError:
            return Response({'error': 'Fecha inválida'}, status=status.HTTP_400_BAD_REQUEST)

        idioma = self.get_serializer_context().get('idioma', 'es')
        edad = niveles.calcular_edad(fecha, timezone.localdate())
        categorias = CategoriaEdad.objects.all()
        sugerida = niveles.resolver_categoria(edad, categorias)
        return Response({
            'edad': edad,
            'nombre_categoria': niveles.nombre_categoria_por_edad(edad, idioma),
            'categorias': CategoriaEdadSerializer(niveles.categorias_para_edad(edad, categorias), many=True).data,
            'categoria_sugerida': CategoriaEdadSerializer(sugerida).data if sugerida else None,
        })

    @action(detail=False, methods=['get'])
    def cintas_permitidas(self, request):
        """Cintas permitidas para la categoría indicada"""
        categoria_id = request.query_params.get('categoria')
        if not categoria_id:
            return Response({'error': 'categoria es requerida'}, status=status.HTTP_400_BAD_REQUEST)
        categoria = get_object_or_404(CategoriaEdad, pk=categoria_id)
        cintas = niveles.cintas_permitidas(categoria, Cinta.objects.all())
        return Response(CintaSerializer(cintas, many=True).data)

    @action(detail=True, methods=['post'])
    def asignar_representante(self, request, pk=None):
        alumno = self.get_object()
        serializer = RepresentanteVinculoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        representante = serializer.validated_data['representante']

        relacion, creada = AlumnoRepresentante.objects.get_or_create(
            alumno=alumno,
            representante=representante,
            defaults={'parentesco': serializer.validated_data['parentesco']}
        )
        if not creada:
            return Response(
                {'error': 'El representante ya está asignado a este alumno'},
                status=status.HTTP_400_BAD_REQUEST
            )
        registrar_log(request, LogActions.ACTUALIZAR, LogModules.ALUMNOS,
                      f'Representante {representante.nombre} asignado a {alumno.nombre}')
        return Response(AlumnoRepresentanteSerializer(relacion).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['delete'])
    def desasignar_representante(self, request, pk=None):
        alumno = self.get_object()
        representante_id = request.data.get('representante') or request.query_params.get('representante')
        if not representante_id:
            return Response({'error': 'representante es requerido'}, status=status.HTTP_400_BAD_REQUEST)

        representante = get_object_or_404(Representante, pk=representante_id)
        borradas, _ = AlumnoRepresentante.objects.filter(
            alumno=alumno, representante=representante
        ).delete()
        if not borradas:
            return Response(
                {'error': 'Relación alumno-representante no encontrada'},
                status=status.HTTP_404_NOT_FOUND
            )
        registrar_log(request, LogActions.ACTUALIZAR, LogModules.ALUMNOS,
                      f'Representante {representante.nombre} desasignado de {alumno.nombre}')
        return Response({'message': 'Representante desasignado'})
