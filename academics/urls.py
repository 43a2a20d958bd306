from django.urls import path
from . import views

app_name = "academics"

urlpatterns = [
    path("departments/", views.department_list, name="departments"),
    path("results/", views.results, name="results"),
]
