from django.urls import path
from . import views

app_name = "attendance"

urlpatterns = [
    path("attendance/", views.attendance, name="list"),
]
