from rest_framework import serializers

from students.models import Student
from students.serializers import StudentBriefSerializer

from .grading import grade_for
from .models import Department, Result


class DepartmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Department
        fields = ["id", "name", "code"]


class ResultSerializer(serializers.ModelSerializer):
    studentId = serializers.PrimaryKeyRelatedField(source="student", queryset=Student.objects.all())
    student = StudentBriefSerializer(read_only=True)
    totalMarks = serializers.FloatField(source="total_marks", required=False, default=100)
    examType = serializers.CharField(source="exam_type", required=False, default="Final")
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Result
        fields = [
            "id",
            "studentId",
            "student",
            "subject",
            "marks",
            "totalMarks",
            "grade",
            "semester",
            "examType",
            "published",
            "createdAt",
        ]
        read_only_fields = ["grade"]

    def validate(self, attrs):
        marks = attrs.get("marks", getattr(self.instance, "marks", None))
        total = attrs.get("total_marks", getattr(self.instance, "total_marks", None))
        # raises a ValidationError for zero/negative totals or negative marks
        grade_for(marks, total)
        return attrs
