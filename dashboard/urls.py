from django.urls import path
from .adapters.viewsets.dashboard_stats_viewset import DashboardStatsView

urlpatterns = [
    path('analytics/dashboard-stats/', DashboardStatsView.as_view(), name='dashboard-stats'),
]
