# reports/urls.py

from django.urls import path
from .views import RevenueView, StatsView

urlpatterns = [
    path("stats", StatsView.as_view(), name="reports-stats"),
    path("revenue", RevenueView.as_view(), name="reports-revenue"),
]
