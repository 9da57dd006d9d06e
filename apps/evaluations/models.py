#apps/evaluations/models.py:

from django.db import models
from django.contrib.auth.models import User


class Evaluacion(models.Model):
    nombre = models.CharField(max_length=150)
    examen_tipo = models.CharField(max_length=30, blank=True, default='')
    fecha = models.DateField()
    hora = models.TimeField()
    descripcion = models.TextField(blank=True, default='')
    instructor = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name='evaluaciones_dirigidas'
    )
    alumnos = models.ManyToManyField(
        'students.Alumno', through='AlumnoEvaluacion', related_name='evaluaciones'
    )
    es_demo = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'evaluacion'
        verbose_name = 'Evaluación'
        verbose_name_plural = 'Evaluaciones'
        ordering = ['-fecha', '-hora']

    def __str__(self):
        return f"{self.nombre} ({self.fecha})"


class AlumnoEvaluacion(models.Model):
    evaluacion = models.ForeignKey(Evaluacion, on_delete=models.CASCADE, related_name='inscripciones')
    alumno = models.ForeignKey('students.Alumno', on_delete=models.CASCADE, related_name='inscripciones_examen')
    notas = models.TextField(blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'alumno_evaluacion'
        verbose_name = 'Alumno en evaluación'
        verbose_name_plural = 'Alumnos en evaluación'
        unique_together = ('evaluacion', 'alumno')

    def __str__(self):
        return f"{self.alumno.nombre} - {self.evaluacion.nombre}"
