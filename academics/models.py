from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from students.models import Student

from .grading import GRADE_CHOICES, grade_for


DEFAULT_DEPARTMENTS = [
    ("Computer Science", "CSE"),
    ("Electrical Engineering", "EEE"),
    ("Mechanical Engineering", "ME"),
    ("Civil Engineering", "CE"),
    ("Business Administration", "BBA"),
]


class Department(models.Model):
    name = models.CharField(max_length=128, unique=True)
    code = models.CharField(max_length=16, unique=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.code})"


class Teacher(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="teacher_profile",
    )
    name = models.CharField(max_length=128)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=32, blank=True)
    subject = models.CharField(max_length=128, blank=True)
    department = models.CharField(max_length=128, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.name


class Result(models.Model):
    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="results")
    subject = models.CharField(max_length=128)
    marks = models.FloatField(validators=[MinValueValidator(0)])
    total_marks = models.FloatField(default=100)
    grade = models.CharField(max_length=2, choices=GRADE_CHOICES, editable=False)
    semester = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(8)]
    )
    exam_type = models.CharField(max_length=32, default="Final")
    published = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["semester", "subject", "id"]

    def save(self, *args, **kwargs):
        self.grade = grade_for(self.marks, self.total_marks)
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and (
            "marks" in update_fields or "total_marks" in update_fields
        ):
            kwargs["update_fields"] = set(update_fields) | {"grade"}
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.student} - {self.subject}: {self.marks}/{self.total_marks} ({self.grade})"
