#apps/configuration/models.py:

from django.db import models

# Perfil del dojo y tema de la interfaz
VALORES_DEFECTO = {
    'dojo_nombre': 'Mi Dojo de Judo',
    'dojo_lema': 'Excelencia en el arte marcial',
    'dojo_direccion': '',
    'dojo_telefono': '',
    'dojo_email': '',
    'dojo_facebook': '',
    'dojo_instagram': '',
    'dojo_twitter': '',
    'dojo_horarios': '',
    'dojo_logo_url': '',
    'dojo_fondo_url': '',
    'tema_color_primario': '#0ea5e9',
    'tema_modo': 'light',
    'tema_sidebar': 'current',
}

CLAVE_ULTIMO_BACKUP = 'ultimo_backup'


class Configuracion(models.Model):
    clave = models.CharField(max_length=100, unique=True)
    valor = models.TextField(blank=True, default='')
    descripcion = models.CharField(max_length=255, blank=True, default='')
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'configuracion'
        verbose_name = 'Configuración'
        verbose_name_plural = 'Configuraciones'
        ordering = ['clave']

    def __str__(self):
        return f"{self.clave} = {self.valor}"

    @classmethod
    def como_dict(cls):
        """Valores por defecto completados con los guardados"""
        valores = dict(VALORES_DEFECTO)
        valores.update(cls.objects.values_list('clave', 'valor'))
        return valores

    @classmethod
    def guardar(cls, clave, valor):
        configuracion, _ = cls.objects.update_or_create(
            clave=clave, defaults={'valor': '' if valor is None else str(valor)}
        )
        return configuracion

    @classmethod
    def restablecer(cls):
        for clave, valor in VALORES_DEFECTO.items():
            cls.guardar(clave, valor)
