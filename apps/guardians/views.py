#apps/guardians/views.py:

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import SearchFilter, OrderingFilter

from apps.authentication.permissions import IsAdministradorOrReadOnly
from apps.authentication.services import registrar_log, LogActions, LogModules
from apps.common.mixins import ContextoLocalMixin
from .models import Representante
from .serializers import RepresentanteSerializer


class RepresentanteViewSet(ContextoLocalMixin, viewsets.ModelViewSet):
    queryset = Representante.objects.all()
    serializer_class = RepresentanteSerializer
    permission_classes = [IsAuthenticated, IsAdministradorOrReadOnly]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ['es_demo']
    search_fields = ['nombre', 'cedula', 'email', 'telefono']
    ordering = ['nombre']

    def perform_create(self, serializer):
        representante = serializer.save()
        registrar_log(self.request, LogActions.CREAR, LogModules.REPRESENTANTES,
                      f'Representante creado: {representante.nombre}')

    def perform_update(self, serializer):
        representante = serializer.save()
        registrar_log(self.request, LogActions.ACTUALIZAR, LogModules.REPRESENTANTES,
                      f'Representante actualizado: {representante.nombre}')

    def destroy(self, request, *args, **kwargs):
        representante = self.get_object()
        if representante.alumnos_representados.exists():
            return Response(
                {'error': 'No se puede eliminar el representante porque tiene alumnos asociados'},
                status=status.HTTP_400_BAD_REQUEST
            )
        registrar_log(request, LogActions.ELIMINAR, LogModules.REPRESENTANTES,
                      f'Representante eliminado: {representante.nombre}')
        return super().destroy(request, *args, **kwargs)

    @action(detail=True, methods=['get'])
    def alumnos(self, request, pk=None):
        """Alumnos a cargo del representante"""
        representante = self.get_object()
        return Response(self.get_serializer(representante).data['alumnos_asignados'])

    @action(detail=False, methods=['get'])
    def sin_alumnos(self, request):
        """Representantes que no tienen alumnos asignados"""
        sin_alumnos = self.get_queryset().filter(alumnos_representados__isnull=True)
        serializer = self.get_serializer(sin_alumnos, many=True)
        return Response(serializer.data)
