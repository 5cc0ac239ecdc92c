# myleasing/urls.py
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, include
from myleasing.views import health

urlpatterns = [
    path("admin/", admin.site.urls),

    # Health
    path("health/", health, name="health"),
    path("api/health", health, name="api_health"),

    # App routers
    path("api/account/", include("users.urls")),
    path("api/owners/", include("owners.urls")),
    path("api/lessees/", include("lessees.urls")),
    path("api/managers/", include("managers.urls")),
    path("api/properties/", include("properties.urls")),
    path("api/property-types/", include("properties.type_urls")),
    path("api/contracts/", include("contracts.urls")),
]

# Uploaded property images in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
