#apps/schedules/urls.py:

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'festivos', views.DiaFestivoViewSet)
router.register(r'clases', views.HorarioClaseViewSet)

urlpatterns = [
    path('', include(router.urls)),
]
