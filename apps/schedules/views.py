#apps/schedules/views.py:

from django.db.models import Q
from rest_framework import viewsets
from rest_framework.permissions import IsAuthenticated
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import SearchFilter

from apps.authentication.permissions import IsAdministradorOrReadOnly, es_personal
from apps.authentication.services import registrar_log, LogActions, LogModules
from .models import HorarioClase, DiaFestivo
from .serializers import HorarioClaseSerializer, DiaFestivoSerializer


class HorarioClaseViewSet(viewsets.ModelViewSet):
    queryset = HorarioClase.objects.select_related('categoria_edad')
    serializer_class = HorarioClaseSerializer
    permission_classes = [IsAuthenticated, IsAdministradorOrReadOnly]
    filter_backends = [DjangoFilterBackend, SearchFilter]
    filterset_fields = ['dia_semana', 'categoria_edad', 'activo']
    search_fields = ['instructor']

    def get_queryset(self):
        queryset = super().get_queryset()
        user = self.request.user
        # los usuarios ven las clases de las categorías de sus alumnos y las generales
        if not es_personal(user):
            categorias = user.alumnos.filter(
                eliminado=False, activo=True, categoria_edad__isnull=False
            ).values('categoria_edad')
            queryset = queryset.filter(
                Q(categoria_edad__in=categorias) | Q(categoria_edad__isnull=True)
            )
        return queryset.ordenados()

    def perform_create(self, serializer):
        horario = serializer.save()
        registrar_log(self.request, LogActions.CREAR, LogModules.HORARIOS, f'Horario creado: {horario}')

    def perform_update(self, serializer):
        horario = serializer.save()
        registrar_log(self.request, LogActions.ACTUALIZAR, LogModules.HORARIOS, f'Horario actualizado: {horario}')

    def perform_destroy(self, instance):
        registrar_log(self.request, LogActions.ELIMINAR, LogModules.HORARIOS, f'Horario eliminado: {instance}')
        instance.delete()


class DiaFestivoViewSet(viewsets.ModelViewSet):
    queryset = DiaFestivo.objects.all()
    serializer_class = DiaFestivoSerializer
    permission_classes = [IsAuthenticated, IsAdministradorOrReadOnly]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ['fecha']

    def perform_create(self, serializer):
        festivo = serializer.save()
        registrar_log(self.request, LogActions.CREAR, LogModules.HORARIOS, f'Día festivo agregado: {festivo}')

    def perform_destroy(self, instance):
        registrar_log(self.request, LogActions.ELIMINAR, LogModules.HORARIOS, f'Día festivo eliminado: {instance}')
        instance.delete()
