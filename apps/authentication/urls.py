#authentication/urls.py
from django.urls import path, include
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenRefreshView
from . import views

router = DefaultRouter()
router.register(r'roles', views.GroupViewSet)
router.register(r'users-admin', views.UserManagementViewSet, basename='user-management')
router.register(r'profile', views.ProfileManagementViewSet, basename='profile-management')
router.register(r'instructores', views.InstructorViewSet, basename='instructor')
router.register(r'logs', views.LogActividadViewSet)

urlpatterns = [
    path('login/', views.login_view, name='login'),
    path('register/', views.register_view, name='register'),
    path('logout/', views.logout_view, name='logout'),
    path('profile/', views.profile_view, name='profile'),
    path('refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('idioma-sistema/', views.idioma_sistema_view, name='idioma-sistema'),
    path('cambiar-idioma/', views.cambiar_idioma_view, name='cambiar-idioma'),
    path('cambiar-idioma-global/', views.cambiar_idioma_global_view, name='cambiar-idioma-global'),

    path('', include(router.urls)),
]
