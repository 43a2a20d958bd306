from rest_framework import serializers

from students.models import Student
from students.serializers import StudentBriefSerializer

from .models import AttendanceRecord


class AttendanceSerializer(serializers.ModelSerializer):
    studentId = serializers.IntegerField(source="student_id", read_only=True)
    student = StudentBriefSerializer(read_only=True)

    class Meta:
        model = AttendanceRecord
        fields = ["id", "studentId", "student", "date", "status", "remark"]
        read_only_fields = fields


class AttendanceMarkSerializer(serializers.Serializer):
    studentId = serializers.PrimaryKeyRelatedField(queryset=Student.objects.all())
    date = serializers.DateField()
    status = serializers.ChoiceField(choices=AttendanceRecord.STATUS_CHOICES)
    remark = serializers.CharField(required=False, allow_blank=True, default="")

    def create(self, validated_data):
        # one record per (student, date): a repeat mark overwrites
        record, _ = AttendanceRecord.objects.update_or_create(
            student=validated_data["studentId"],
            date=validated_data["date"],
            defaults={"status": validated_data["status"], "remark": validated_data["remark"]},
        )
        return record
