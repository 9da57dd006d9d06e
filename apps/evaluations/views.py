#apps/evaluations/views.py:

from django.db.models import Q
from django.shortcuts import get_object_or_404
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import SearchFilter, OrderingFilter

from apps.authentication.permissions import IsInstructorOrAdministrador, es_personal
from apps.authentication.services import registrar_log, LogActions, LogModules
from apps.common.mixins import ContextoLocalMixin
from apps.students.models import Alumno
from apps.students.serializers import AlumnoSerializer
from .models import Evaluacion, AlumnoEvaluacion
from .serializers import (
    EvaluacionSerializer, EvaluacionCreateSerializer, EvaluacionUpdateSerializer,
    AlumnoEvaluacionSerializer, ResultadoSerializer
)
from . import services


class EvaluacionViewSet(ContextoLocalMixin, viewsets.ModelViewSet):
    queryset = Evaluacion.objects.select_related('instructor')
    serializer_class = EvaluacionSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ['examen_tipo', 'instructor', 'fecha']
    search_fields = ['nombre', 'descripcion']
    ordering_fields = ['fecha', 'hora', 'nombre']
    ordering = ['-fecha', '-hora']

    def get_serializer_class(self):
        if self.action == 'create':
            return EvaluacionCreateSerializer
        if self.action in ['update', 'partial_update']:
            return EvaluacionUpdateSerializer
        return EvaluacionSerializer

    def get_permissions(self):
        if self.action in ['list', 'retrieve', 'examenes']:
            permission_classes = [IsAuthenticated]
        else:
            permission_classes = [IsAuthenticated, IsInstructorOrAdministrador]
        return [permission() for permission in permission_classes]

    def get_queryset(self):
        queryset = super().get_queryset()
        user = self.request.user
        # los usuarios ven las evaluaciones en las que están inscritos sus alumnos
        if not es_personal(user):
            queryset = queryset.filter(
                inscripciones__alumno__usuario=user,
                inscripciones__alumno__eliminado=False,
            ).distinct()
        return queryset

    def _alumnos_activos(self):
        return Alumno.objects.filter(activo=True, eliminado=False).select_related('cinta', 'categoria_edad')

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        datos = serializer.validated_data
        idioma = self.get_serializer_context().get('idioma', 'es')

        evaluacion, seleccionados, advertencias = services.crear_evaluacion(
            datos, datos['alumnos_ids'], self._alumnos_activos(), idioma
        )
        registrar_log(
            request, LogActions.CREAR, LogModules.EVALUACIONES,
            f'Evaluación creada: {evaluacion.nombre} - Fecha: {evaluacion.fecha}, Hora: {evaluacion.hora}'
        )
        return Response({
            'message': (
                f'Evaluation created with {len(seleccionados)} student(s) enabled' if idioma == 'en'
                else f'Evaluación creada con {len(seleccionados)} alumno(s) habilitado(s)'
            ),
            'evaluacion': EvaluacionSerializer(evaluacion).data,
            'advertencias': advertencias,
        }, status=status.HTTP_201_CREATED)

    def perform_update(self, serializer):
        evaluacion = serializer.save()
        registrar_log(self.request, LogActions.ACTUALIZAR, LogModules.EVALUACIONES,
                      f'Evaluación actualizada: {evaluacion.nombre}')

    def destroy(self, request, *args, **kwargs):
        evaluacion = self.get_object()
        if evaluacion.inscripciones.exists():
            return Response(
                {'error': 'No se puede eliminar la evaluación porque tiene resultados asociados'},
                status=status.HTTP_400_BAD_REQUEST
            )
        registrar_log(request, LogActions.ELIMINAR, LogModules.EVALUACIONES,
                      f'Evaluación eliminada: {evaluacion.nombre}')
        return super().destroy(request, *args, **kwargs)

    @action(detail=False, methods=['get'])
    def examenes(self, request):
        """Los siete exámenes oficiales de cambio de cinta"""
        idioma = self.get_serializer_context().get('idioma', 'es')
        return Response([services.examen_como_dict(e, idioma) for e in services.EXAMENES_OFICIALES])

    @action(detail=False, methods=['get'])
    def elegibles(self, request):
        """Alumnos activos que pueden presentar el examen indicado (?examen=)"""
        examen = services.examen_por_id(request.query_params.get('examen'))
        elegibles = services.alumnos_elegibles(examen, self._alumnos_activos())
        idioma = self.get_serializer_context().get('idioma', 'es')
        return Response({
            'examen': services.examen_como_dict(examen, idioma),
            'alumnos': AlumnoSerializer(elegibles, many=True).data,
        })

    @action(detail=True, methods=['get', 'post'])
    def resultados(self, request, pk=None):
        """
        GET: alumnos activos de la evaluación que ya cumplieron su tiempo de
        preparación. POST: registra las notas de un alumno.
        """
        evaluacion = self.get_object()
        if request.method == 'GET':
            inscripciones = evaluacion.inscripciones.select_related('alumno__cinta').filter(
                alumno__activo=True
            ).filter(
                Q(alumno__proximo_examen_fecha__isnull=True) |
                Q(alumno__proximo_examen_fecha__lte=evaluacion.fecha)
            )
            return Response(AlumnoEvaluacionSerializer(inscripciones, many=True).data)

        serializer = ResultadoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        alumno = get_object_or_404(Alumno, pk=serializer.validated_data['alumno'], eliminado=False)
        resultado, creado = AlumnoEvaluacion.objects.update_or_create(
            evaluacion=evaluacion,
            alumno=alumno,
            defaults={'notas': serializer.validated_data['notas']}
        )
        registrar_log(request, LogActions.ACTUALIZAR, LogModules.EVALUACIONES,
                      f'Resultado registrado: {alumno.nombre} en {evaluacion.nombre}')
        return Response(
            AlumnoEvaluacionSerializer(resultado).data,
            status=status.HTTP_201_CREATED if creado else status.HTTP_200_OK
        )
