from django.urls import path
from . import views

app_name = "students"

urlpatterns = [
    path("students/", views.student_list, name="list"),
    path("students/export/", views.export_csv, name="export"),
    path("students/import/", views.import_csv, name="import"),
    path("students/<int:pk>/", views.student_detail, name="detail"),
]
