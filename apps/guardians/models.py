#apps/guardians/models.py:

from django.db import models


class Representante(models.Model):
    cedula = models.CharField(max_length=20, unique=True)
    nombre = models.CharField(max_length=100)
    telefono = models.CharField(max_length=20, blank=True, default='')
    email = models.EmailField(blank=True, default='')
    direccion = models.CharField(max_length=255, blank=True, default='')
    es_demo = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'representante'
        verbose_name = 'Representante'
        verbose_name_plural = 'Representantes'
        ordering = ['nombre']

    def __str__(self):
        return f"{self.nombre} ({self.cedula})"
