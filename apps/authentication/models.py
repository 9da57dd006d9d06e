# apps/authentication/models.py:

from django.conf import settings
from django.db import models
from django.contrib.auth.models import Group, Permission
from django.db.models.signals import post_migrate
from django.dispatch import receiver

ROL_ADMINISTRADOR = 'Administrador'
ROL_INSTRUCTOR = 'Instructor'
ROL_USUARIO = 'Usuario'

IDIOMA_CHOICES = [
    ('es', 'Español'),
    ('en', 'English'),
]


class RoleManager:
    """Manager para crear los roles del dojo"""

    @staticmethod
    def create_default_groups():
        """Crea los grupos por defecto del sistema"""
        admin_group, _ = Group.objects.get_or_create(name=ROL_ADMINISTRADOR)
        instructor_group, _ = Group.objects.get_or_create(name=ROL_INSTRUCTOR)
        user_group, _ = Group.objects.get_or_create(name=ROL_USUARIO)

        # Administrador recibe todos los permisos la primera vez
        if admin_group.permissions.count() == 0:
            admin_group.permissions.set(Permission.objects.all())

        return admin_group, instructor_group, user_group


@receiver(post_migrate)
def create_default_groups(sender, **kwargs):
    """Crear grupos automáticamente después de las migraciones"""
    if sender.name == 'apps.authentication':
        RoleManager.create_default_groups()


def tiene_rol(user, *roles):
    return bool(
        user and user.is_authenticated
        and user.groups.filter(name__in=roles).exists()
    )


def es_administrador(user):
    return bool(user and user.is_authenticated and (user.is_superuser or tiene_rol(user, ROL_ADMINISTRADOR)))


class PerfilUsuario(models.Model):
    usuario = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='perfil')
    idioma = models.CharField(max_length=2, choices=IDIOMA_CHOICES, default='es')
    telefono = models.CharField(max_length=20, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'perfil_usuario'
        verbose_name = 'Perfil de usuario'
        verbose_name_plural = 'Perfiles de usuario'

    def __str__(self):
        return f"{self.usuario.username} ({self.idioma})"

    @classmethod
    def de(cls, user):
        perfil, _ = cls.objects.get_or_create(usuario=user)
        return perfil


class LogActividad(models.Model):
    ACCION_CHOICES = [
        ('CREAR', 'Crear'),
        ('ACTUALIZAR', 'Actualizar'),
        ('ELIMINAR', 'Eliminar'),
        ('LOGIN', 'Inicio de sesión'),
        ('LOGOUT', 'Cierre de sesión'),
        ('CONSULTAR', 'Consultar'),
        ('EXPORTAR', 'Exportar'),
        ('IMPORTAR', 'Importar'),
        ('CONFIGURAR', 'Configurar'),
    ]
    MODULO_CHOICES = [
        ('ALUMNOS', 'Alumnos'),
        ('EVALUACIONES', 'Evaluaciones'),
        ('PAGOS', 'Pagos'),
        ('USUARIOS', 'Usuarios'),
        ('HORARIOS', 'Horarios'),
        ('NIVELES', 'Niveles'),
        ('REPRESENTANTES', 'Representantes'),
        ('CONFIGURACION', 'Configuración'),
        ('AUTH', 'Autenticación'),
        ('SISTEMA', 'Sistema'),
    ]

    usuario = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name='logs_actividad'
    )
    accion = models.CharField(max_length=20, choices=ACCION_CHOICES)
    modulo = models.CharField(max_length=20, choices=MODULO_CHOICES)
    descripcion = models.TextField()
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=255, blank=True, default='')
    fecha = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        db_table = 'log_actividad'
        verbose_name = 'Log de actividad'
        verbose_name_plural = 'Logs de actividad'
        ordering = ['-fecha']

    def __str__(self):
        return f"[{self.accion}] {self.modulo}: {self.descripcion[:60]}"
