"""
URL configuration for config project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.1/topics/http/urls/
"""

# Routes:
# - GET / -> home
# - GET /weather/<city> -> weather.urls
# - /metrics -> Prometheus exposition
# - /api/schema/ -> OpenAPI schema
# - /api/docs/ -> Swagger UI

from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from .views import home

urlpatterns = [
    path("", home, name="home"),
    path("", include("weather.urls")),
    path("", include("django_prometheus.urls")),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
]
