from django.contrib import admin
from .models import Student


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ("name", "roll", "department", "semester", "gender")
    list_filter = ("department", "semester", "gender")
    search_fields = ("name", "roll", "email")
