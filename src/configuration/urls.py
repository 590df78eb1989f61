"""
URL configuration for the classifieds backend.

API routes live under /api/ and are split by audience: auth, core
(public and signed-in users) and admin (moderators). Swagger and ReDoc
are generated from the same patterns.
"""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path, re_path
from django.views.generic import RedirectView
from drf_yasg import openapi
from drf_yasg.views import get_schema_view
from rest_framework import permissions

# Define URL patterns first, without Swagger URLs
api_urlpatterns = [
    path("api/admin/", include("classifieds.apis.admin.urls")),
    path("api/auth/", include("classifieds.apis.auth.urls")),
    path("api/core/", include("classifieds.apis.core.urls")),
]

# Then create schema view with the API patterns
schema_view = get_schema_view(
    openapi.Info(
        title="Classifieds API",
        default_version="v1",
        description="Classified ads marketplace: listings, moderation, favorites and accounts.",
        contact=openapi.Contact(email="support@classifieds.example.com"),
        license=openapi.License(name="BSD License"),
    ),
    public=True,
    permission_classes=(permissions.AllowAny,),
    patterns=api_urlpatterns,  # Pass API patterns to schema view
)

# Finally, combine API and Swagger URLs
urlpatterns = [
    *api_urlpatterns,
    path("django-admin/", admin.site.urls),
    re_path(
        r"^swagger(?P<format>\.json|\.yaml)$",
        schema_view.without_ui(cache_timeout=0),
        name="schema-json",
    ),
    path(
        "swagger/",
        schema_view.with_ui("swagger", cache_timeout=0),
        name="schema-swagger-ui",
    ),
    path("redoc/", schema_view.with_ui("redoc", cache_timeout=0), name="schema-redoc"),
    path(
        "", RedirectView.as_view(url="/swagger/", permanent=False)
    ),  # Optional: redirect root to swagger
]

# Only serves files when DEBUG is on
urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)
urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
