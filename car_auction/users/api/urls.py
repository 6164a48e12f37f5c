from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import ProfileViewSet, RegistrationViewSet

router = DefaultRouter()
router.register(r'register', RegistrationViewSet, basename='register')
router.register(r'profiles', ProfileViewSet, basename='profile')

urlpatterns = [
    path('', include(router.urls)),
]
