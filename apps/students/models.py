#apps/students/models.py:

from django.db import models
from django.contrib.auth.models import User
from django.utils import timezone

from apps.levels.services import calcular_edad


class Alumno(models.Model):
    cedula = models.CharField(max_length=20, unique=True)
    nombre = models.CharField(max_length=100)
    fecha_nacimiento = models.DateField()
    telefono = models.CharField(max_length=20, blank=True, default='')
    email = models.EmailField(blank=True, default='')
    direccion = models.CharField(max_length=255, blank=True, default='')
    contacto_emergencia = models.CharField(max_length=100, blank=True, default='')
    telefono_emergencia = models.CharField(max_length=20, blank=True, default='')
    nombre_padre = models.CharField(max_length=100, blank=True, default='')
    telefono_padre = models.CharField(max_length=20, blank=True, default='')
    nombre_madre = models.CharField(max_length=100, blank=True, default='')
    telefono_madre = models.CharField(max_length=20, blank=True, default='')
    categoria_edad = models.ForeignKey(
        'levels.CategoriaEdad', on_delete=models.SET_NULL, null=True, blank=True, related_name='alumnos'
    )
    cinta = models.ForeignKey(
        'levels.Cinta', on_delete=models.SET_NULL, null=True, blank=True, related_name='alumnos'
    )
    usuario = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name='alumnos'
    )
    sensei = models.ForeignKey(
        User, on_delete=models.SET_NULL, null=True, blank=True, related_name='alumnos_a_cargo'
    )
    activo = models.BooleanField(default=True)
    eliminado = models.BooleanField(default=False)
    fecha_eliminacion = models.DateTimeField(null=True, blank=True)
    es_demo = models.BooleanField(default=False)
    fecha_inscripcion = models.DateField(auto_now_add=True)
    tiempo_preparacion_meses = models.PositiveSmallIntegerField(null=True, blank=True)
    proximo_examen_fecha = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'alumno'
        verbose_name = 'Alumno'
        verbose_name_plural = 'Alumnos'
        ordering = ['nombre']

    def __str__(self):
        return f"{self.nombre} ({self.cedula})"

    @property
    def edad(self):
        return calcular_edad(self.fecha_nacimiento, timezone.localdate())


class AlumnoRepresentante(models.Model):
    PARENTESCO_CHOICES = [
        ('PADRE', 'Padre'),
        ('MADRE', 'Madre'),
        ('ABUELO', 'Abuelo'),
        ('ABUELA', 'Abuela'),
        ('TIO', 'Tío'),
        ('TIA', 'Tía'),
        ('HERMANO', 'Hermano'),
        ('HERMANA', 'Hermana'),
        ('TUTOR_LEGAL', 'Tutor Legal'),
        ('OTRO', 'Otro'),
    ]

    alumno = models.ForeignKey(Alumno, on_delete=models.CASCADE, related_name='representantes')
    representante = models.ForeignKey(
        'guardians.Representante', on_delete=models.CASCADE, related_name='alumnos_representados'
    )
    parentesco = models.CharField(max_length=20, choices=PARENTESCO_CHOICES, default='OTRO')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'alumno_representante'
        verbose_name = 'Relación Alumno-Representante'
        verbose_name_plural = 'Relaciones Alumno-Representante'
        unique_together = ('alumno', 'representante')

    def __str__(self):
        return f"{self.representante.nombre} ({self.parentesco}) - {self.alumno.nombre}"
