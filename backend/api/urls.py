"""API URL configuration."""
from __future__ import annotations

from django.urls import path

from backend.api.views import MAISummaryView

urlpatterns = [
    path("weather-summary", MAISummaryView.as_view(), name="weather-summary"),
]
