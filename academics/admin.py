from django.contrib import admin
from .models import Department, Result, Teacher


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    search_fields = ("name", "code")
    list_display = ("code", "name")


@admin.register(Teacher)
class TeacherAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "subject", "department")
    search_fields = ("name", "email")


@admin.register(Result)
class ResultAdmin(admin.ModelAdmin):
    list_display = ("student", "subject", "marks", "total_marks", "grade", "semester", "published")
    list_filter = ("published", "semester", "grade")
    search_fields = ("student__name", "subject")
    readonly_fields = ("grade",)
