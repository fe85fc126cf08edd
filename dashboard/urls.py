"""
URL configuration for the hospital operations dashboard.

The JSON API lives under ``/api/`` and is provided by the clinic app.
The Django admin is mounted at ``/admin/`` and OpenAPI documentation is
exposed at ``/swagger/`` and ``/redoc/``.
"""
from django.contrib import admin
from django.urls import path, include

from rest_framework import permissions
from drf_yasg.views import get_schema_view
from drf_yasg import openapi

# API metadata for Swagger/OpenAPI documentation
api_info = openapi.Info(
    title="Hospital Operations Dashboard API",
    default_version='v1',
    description="Patients, doctors, departments, pharmacy, laboratory and billing for the dashboard.",
)

schema_view = get_schema_view(
    api_info,
    public=True,
    permission_classes=(permissions.AllowAny,),
)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('swagger/', schema_view.with_ui('swagger', cache_timeout=0), name='schema-swagger-ui'),
    path('redoc/', schema_view.with_ui('redoc', cache_timeout=0), name='schema-redoc'),
    path('', include('django_prometheus.urls')),
    # API routes come last: they end with the /api/* catch-all.
    path('', include('clinic.routers')),
]
