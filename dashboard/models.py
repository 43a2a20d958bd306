from django.conf import settings
from django.db import models


class Activity(models.Model):
    TYPE_CHOICES = [
        ("login", "Login"),
        ("student_add", "Student added"),
        ("attendance", "Attendance"),
        ("result", "Result"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True, on_delete=models.SET_NULL
    )
    student = models.ForeignKey(
        "students.Student", null=True, blank=True, on_delete=models.SET_NULL
    )
    type = models.CharField(max_length=32, choices=TYPE_CHOICES)
    description = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        verbose_name_plural = "activities"

    def __str__(self):
        return self.description
