#apps/payments/urls.py:

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

router = SimpleRouter()
router.register(r'', views.PagoViewSet)

urlpatterns = [
    path('config/', views.config_pagos_view, name='config-pagos'),
    path('', include(router.urls)),
]
