from django.db import models
from students.models import Student


class AttendanceRecord(models.Model):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    STATUS_CHOICES = [
        (PRESENT, "Present"),
        (ABSENT, "Absent"),
        (LATE, "Late"),
    ]
    ATTENDING = {PRESENT, LATE}

    student = models.ForeignKey(Student, on_delete=models.CASCADE, related_name="attendance_records")
    date = models.DateField(db_index=True)
    status = models.CharField(max_length=16, choices=STATUS_CHOICES)
    remark = models.CharField(max_length=255, blank=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=["student", "date"], name="unique_attendance_per_day"),
        ]
        ordering = ["-date", "student_id"]

    def __str__(self):
        return f"{self.student} {self.date}: {self.status}"
