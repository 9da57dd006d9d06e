#apps/schedules/models.py:

from django.db import models
from django.db.models import Case, IntegerField, Value, When

DIAS_SEMANA = ['Lunes', 'Martes', 'Miércoles', 'Jueves', 'Viernes', 'Sábado', 'Domingo']
ORDEN_DIAS = {dia: indice for indice, dia in enumerate(DIAS_SEMANA, start=1)}


class HorarioClaseQuerySet(models.QuerySet):
    def ordenados(self):
        """Por día de la semana (lunes primero) y hora de inicio"""
        return self.annotate(
            orden_dia=Case(
                *[When(dia_semana=dia, then=Value(orden)) for dia, orden in ORDEN_DIAS.items()],
                default=Value(99),
                output_field=IntegerField(),
            )
        ).order_by('orden_dia', 'hora_inicio')


class HorarioClase(models.Model):
    DIA_CHOICES = [(dia, dia) for dia in DIAS_SEMANA]

    dia_semana = models.CharField(max_length=10, choices=DIA_CHOICES)
    hora_inicio = models.TimeField()
    hora_fin = models.TimeField()
    categoria_edad = models.ForeignKey(
        'levels.CategoriaEdad', on_delete=models.SET_NULL, null=True, blank=True, related_name='horarios'
    )
    capacidad_maxima = models.PositiveIntegerField(null=True, blank=True)
    instructor = models.CharField(max_length=100, blank=True, default='')
    activo = models.BooleanField(default=True)
    es_demo = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = HorarioClaseQuerySet.as_manager()

    class Meta:
        db_table = 'horario_clase'
        verbose_name = 'Horario de clase'
        verbose_name_plural = 'Horarios de clase'

    def __str__(self):
        return f"{self.dia_semana} {self.hora_inicio:%H:%M}-{self.hora_fin:%H:%M}"


class DiaFestivo(models.Model):
    fecha = models.DateField(unique=True)
    descripcion = models.CharField(max_length=200)
    es_demo = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'dia_festivo'
        verbose_name = 'Día festivo'
        verbose_name_plural = 'Días festivos'
        ordering = ['fecha']

    def __str__(self):
        return f"{self.fecha}: {self.descripcion}"
