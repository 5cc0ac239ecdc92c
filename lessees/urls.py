from django.urls import path, include
from rest_framework.routers import DefaultRouter

from .views import LesseeViewSet

router = DefaultRouter()
router.register(r'', LesseeViewSet, basename='lessees')

urlpatterns = [
    path('', include(router.urls)),
]
