from django.urls import path
from . import views

app_name = "dashboard_api"

urlpatterns = [
    path("dashboard/", views.dashboard_stats, name="stats"),
    path("dashboard/summary/", views.dashboard_summary, name="summary"),
    path("seed/", views.seed, name="seed"),
]
