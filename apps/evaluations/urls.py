#apps/evaluations/urls.py:

from django.urls import path, include
from rest_framework.routers import SimpleRouter
from . import views

router = SimpleRouter()
router.register(r'', views.EvaluacionViewSet)

urlpatterns = [
    path('', include(router.urls)),
]
