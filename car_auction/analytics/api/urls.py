from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import AnalyticsViewSet

router = SimpleRouter()
router.register(r'', AnalyticsViewSet, basename='analytics')

urlpatterns = [
    path('', include(router.urls)),
]
