# core/urls.py
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path('admin/', admin.site.urls),

    # API endpoints
    path('api/auth/', include('apps.authentication.urls')),
    path('api/niveles/', include('apps.levels.urls')),
    path('api/representantes/', include('apps.guardians.urls')),
    path('api/alumnos/', include('apps.students.urls')),
    path('api/pagos/', include('apps.payments.urls')),
    path('api/evaluaciones/', include('apps.evaluations.urls')),
    path('api/horarios/', include('apps.schedules.urls')),
    path('api/configuracion/', include('apps.configuration.urls')),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
]
