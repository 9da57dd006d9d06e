#apps/configuration/urls.py:

from django.urls import path
from . import views

urlpatterns = [
    path('', views.configuracion_view, name='configuracion'),
    path('restablecer/', views.restablecer_view, name='configuracion-restablecer'),
    path('backup/exportar/', views.exportar_view, name='backup-exportar'),
    path('backup/importar/', views.importar_view, name='backup-importar'),
    path('backup/registrar/', views.registrar_backup_view, name='backup-registrar'),
    path('backup/estadisticas/', views.estadisticas_view, name='backup-estadisticas'),
    path('backup/integridad/', views.integridad_view, name='backup-integridad'),
    path('demo/generar/', views.generar_demo_view, name='demo-generar'),
    path('demo/eliminar/', views.eliminar_demo_view, name='demo-eliminar'),
    path('<str:clave>/', views.configuracion_clave_view, name='configuracion-clave'),
]
