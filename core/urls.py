"""
URL configuration for core project.

Las vistas devuelven JSON; la autenticación es la de django.contrib.auth.
"""
from django.contrib import admin
from django.urls import path, include
from core import views as core_views

urlpatterns = [
    path("admin/", admin.site.urls),
    path("dashboard/", core_views.DashboardView.as_view(), name="dashboard"),
    path("trips/", include("trips.urls", namespace="trips")),
    path("reports/", include("reports.urls", namespace="reports")),
]
