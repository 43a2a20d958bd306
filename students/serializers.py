from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from rest_framework import serializers

from .models import Student


class StudentBriefSerializer(serializers.ModelSerializer):
    class Meta:
        model = Student
        fields = ["id", "name", "roll", "department", "semester"]


class StudentSerializer(serializers.ModelSerializer):
    dateOfBirth = serializers.DateField(source="date_of_birth", required=False, allow_null=True)
    profileImage = serializers.URLField(source="profile_image", required=False, allow_blank=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    userId = serializers.IntegerField(source="user_id", read_only=True)
    password = serializers.CharField(write_only=True, required=False, trim_whitespace=False)

    class Meta:
        model = Student
        fields = [
            "id",
            "userId",
            "name",
            "email",
            "phone",
            "department",
            "semester",
            "roll",
            "gender",
            "address",
            "dateOfBirth",
            "profileImage",
            "createdAt",
            "password",
        ]

    def validate_email(self, value):
        User = get_user_model()
        value = User.objects.normalize_email(value)
        users = User.objects.filter(email__iexact=value)
        if self.instance is not None:
            users = users.exclude(pk=self.instance.user_id)
        if users.exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return value

    @transaction.atomic
    def create(self, validated_data):
        password = validated_data.pop("password", None) or settings.DEFAULT_STUDENT_PASSWORD
        user = get_user_model().objects.create_user(
            email=validated_data["email"],
            password=password,
            name=validated_data.get("name", ""),
            role="student",
        )
        return Student.objects.create(user=user, **validated_data)

    @transaction.atomic
    def update(self, instance, validated_data):
        validated_data.pop("password", None)
        student = super().update(instance, validated_data)
        user = student.user
        user.email = student.email
        user.name = student.name
        user.save(update_fields=["email", "name"])
        return student


class StudentDetailSerializer(StudentSerializer):
    attendance = serializers.SerializerMethodField()
    results = serializers.SerializerMethodField()

    class Meta(StudentSerializer.Meta):
        fields = StudentSerializer.Meta.fields + ["attendance", "results"]

    def get_attendance(self, obj):
        from attendance.serializers import AttendanceSerializer

        recent = obj.attendance_records.order_by("-date")[:30]
        return AttendanceSerializer(recent, many=True).data

    def get_results(self, obj):
        from academics.serializers import ResultSerializer

        results = obj.results.all()
        if self.context.get("published_only"):
            results = results.filter(published=True)
        return ResultSerializer(results, many=True).data
