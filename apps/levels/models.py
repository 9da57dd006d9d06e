#apps/levels/models.py:

from django.db import models


class CategoriaEdad(models.Model):
    nombre = models.CharField(max_length=50, unique=True)
    edad_min = models.PositiveIntegerField(null=True, blank=True)
    edad_max = models.PositiveIntegerField(null=True, blank=True)
    precio_mensualidad = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    orden = models.PositiveIntegerField(default=0)
    es_demo = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'categoria_edad'
        verbose_name = 'Categoría de edad'
        verbose_name_plural = 'Categorías de edad'
        ordering = ['orden', 'edad_min', 'id']

    def __str__(self):
        return f"{self.nombre} ({self.rango_texto})"

    @property
    def minimo(self):
        return self.edad_min if self.edad_min is not None else 0

    @property
    def maximo(self):
        from django.conf import settings
        return self.edad_max if self.edad_max is not None else settings.DOJO['EDAD_MAXIMA']

    @property
    def rango_texto(self):
        return f"{self.minimo}-{self.maximo} años"

    def contiene_edad(self, edad):
        return self.minimo <= edad <= self.maximo


class Cinta(models.Model):
    nombre = models.CharField(max_length=50, unique=True)
    nombre_en = models.CharField(max_length=50, blank=True, default='')
    color_hex = models.CharField(max_length=7, default='#FFFFFF')
    orden = models.PositiveIntegerField(default=1)
    es_dan = models.BooleanField(default=False)
    nivel_dan = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'cinta'
        verbose_name = 'Cinta'
        verbose_name_plural = 'Cintas'
        ordering = ['orden', 'id']

    def __str__(self):
        if self.es_dan and self.nivel_dan:
            return f"{self.nombre} ({self.nivel_dan}º Dan)"
        return self.nombre

    def nombre_para(self, idioma='es'):
        if idioma == 'en' and self.nombre_en:
            return self.nombre_en
        return self.nombre
