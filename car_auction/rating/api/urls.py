from django.urls import path, include
from rest_framework.routers import SimpleRouter

from .views import UserRatingViewSet

router = SimpleRouter()
router.register(r'ratings', UserRatingViewSet, basename='rating')

urlpatterns = [
    path('', include(router.urls)),
]
