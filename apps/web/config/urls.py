"""
URL configuration for the Mayara Burguer's backend.
"""

from django.contrib import admin
from django.urls import include, path

from apps.web.restaurant import views

urlpatterns = [
    path("", views.health, name="health"),
    path("admin/", admin.site.urls),
    # Public API endpoints
    path("api/", include("apps.web.restaurant.urls")),
]

handler404 = "apps.web.core.http.not_found"
