#apps/levels/views.py:

from datetime import date

from django.utils import timezone
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework.filters import SearchFilter, OrderingFilter
from .models import CategoriaEdad, Cinta
from .serializers import CategoriaEdadSerializer, CintaSerializer
from . import services
from apps.authentication.permissions import IsAdministradorOrReadOnly
from apps.authentication.services import registrar_log, LogActions, LogModules


class CategoriaEdadViewSet(viewsets.ModelViewSet):
    queryset = CategoriaEdad.objects.all()
    serializer_class = CategoriaEdadSerializer
    permission_classes = [IsAuthenticated, IsAdministradorOrReadOnly]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    search_fields = ['nombre']
    ordering_fields = ['orden', 'edad_min', 'nombre']
    ordering = ['orden', 'edad_min']

    def _con_advertencia_solapamiento(self, response, categoria):
        otras = services.solapamientos(categoria, CategoriaEdad.objects.all())
        if otras:
            nombres = ', '.join(o.nombre for o in otras)
            response.data['advertencia'] = f'El rango de edad se solapa con: {nombres}'
        return response

    def create(self, request, *args, **kwargs):
        response = super().create(request, *args, **kwargs)
        categoria = CategoriaEdad.objects.get(pk=response.data['id'])
        registrar_log(request, LogActions.CREAR, LogModules.NIVELES,
                      f'Categoría creada: {categoria.nombre}')
        return self._con_advertencia_solapamiento(response, categoria)

    def update(self, request, *args, **kwargs):
        response = super().update(request, *args, **kwargs)
        categoria = self.get_object()
        registrar_log(request, LogActions.ACTUALIZAR, LogModules.NIVELES,
                      f'Categoría actualizada: {categoria.nombre}')
        return self._con_advertencia_solapamiento(response, categoria)

    def destroy(self, request, *args, **kwargs):
        categoria = self.get_object()
        en_uso = categoria.alumnos.filter(eliminado=False).count()
        if en_uso:
            return Response(
                {'error': f'No se puede eliminar la categoría: tiene {en_uso} alumno(s) asignado(s)'},
                status=status.HTTP_400_BAD_REQUEST
            )
        registrar_log(request, LogActions.ELIMINAR, LogModules.NIVELES,
                      f'Categoría eliminada: {categoria.nombre}')
        return super().destroy(request, *args, **kwargs)

    @action(detail=False, methods=['get'])
    def por_edad(self, request):
        """Categorías que corresponden a una fecha de nacimiento o edad"""
        fecha = request.query_params.get('fecha_nacimiento')
        edad = request.query_params.get('edad')
        idioma = request.query_params.get('idioma', 'es')

        try:
            if fecha:
                edad = services.calcular_edad(date.fromisoformat(fecha), timezone.localdate())
            elif edad is not None:
                edad = int(edad)
            else:
                return Response(
                    {'error': 'Debe indicar fecha_nacimiento o edad'},
                    status=status.HTTP_400_BAD_REQUEST
                )
        except ValueError:
            return Response({'error': 'Fecha o edad inválida'}, status=status.HTTP_400_BAD_REQUEST)

        categorias = CategoriaEdad.objects.all()
        coincidencias = services.categorias_para_edad(edad, categorias)
        sugerida = services.resolver_categoria(edad, categorias)
        return Response({
            'edad': edad,
            'nombre_categoria': services.nombre_categoria_por_edad(edad, idioma),
            'categorias': CategoriaEdadSerializer(coincidencias, many=True).data,
            'categoria_sugerida': CategoriaEdadSerializer(sugerida).data if sugerida else None,
        })

    @action(detail=True, methods=['get'])
    def cintas_permitidas(self, request, pk=None):
        """Cintas que puede tener un alumno de esta categoría"""
        categoria = self.get_object()
        cintas = services.cintas_permitidas(categoria, Cinta.objects.all())
        return Response({
            'categoria': categoria.nombre,
            'cinta_maxima': services.cinta_maxima_para(categoria),
            'cintas': CintaSerializer(cintas, many=True).data,
        })


class CintaViewSet(viewsets.ModelViewSet):
    queryset = Cinta.objects.all()
    serializer_class = CintaSerializer
    permission_classes = [IsAuthenticated, IsAdministradorOrReadOnly]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ['es_dan']
    search_fields = ['nombre', 'nombre_en']
    ordering = ['orden']

    def perform_create(self, serializer):
        cinta = serializer.save()
        registrar_log(self.request, LogActions.CREAR, LogModules.NIVELES, f'Cinta creada: {cinta.nombre}')

    def perform_update(self, serializer):
        cinta = serializer.save()
        registrar_log(self.request, LogActions.ACTUALIZAR, LogModules.NIVELES, f'Cinta actualizada: {cinta.nombre}')

    def destroy(self, request, *args, **kwargs):
        cinta = self.get_object()
        en_uso = cinta.alumnos.filter(eliminado=False).count()
        if en_uso:
            return Response(
                {'error': f'No se puede eliminar la cinta: tiene {en_uso} alumno(s) asignado(s)'},
                status=status.HTTP_400_BAD_REQUEST
            )
        registrar_log(request, LogActions.ELIMINAR, LogModules.NIVELES, f'Cinta eliminada: {cinta.nombre}')
        return super().destroy(request, *args, **kwargs)
