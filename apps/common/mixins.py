# apps/common/mixins.py

from django.conf import settings

from .validators import reglas_para


class ContextoLocalMixin:
    """Añade al contexto del serializer el idioma del usuario y el país configurado"""

    def get_serializer_context(self):
        context = super().get_serializer_context()
        user = self.request.user if self.request else None
        if user is not None and user.is_authenticated:
            from apps.authentication.models import PerfilUsuario
            from apps.payments.models import ConfigPagos
            context['idioma'] = PerfilUsuario.de(user).idioma
            context['pais'] = ConfigPagos.cargar().pais_configuracion
        return context


class ReglasPaisMixin:
    """Selecciona una vez, al crear el serializer, las reglas del país del contexto"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.idioma = self.context.get('idioma', 'es')
        self.reglas = reglas_para(self.context.get('pais') or settings.DOJO['PAIS_DEFECTO'])
