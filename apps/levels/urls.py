#apps/levels/urls.py:

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

router = DefaultRouter()
router.register(r'categorias', views.CategoriaEdadViewSet)
router.register(r'cintas', views.CintaViewSet)

urlpatterns = [
    path('', include(router.urls)),
]
