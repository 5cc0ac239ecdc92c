# Mounted at /api/property-types/
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import PropertyTypeViewSet

router = DefaultRouter()
router.register(r'', PropertyTypeViewSet, basename='property-types')

urlpatterns = [
    path('', include(router.urls)),
]
