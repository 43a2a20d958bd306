import logging

from django.db import DatabaseError
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from dashboard.services import record_activity
from students.models import Student
from students.permissions import IsStaffRoleOrReadOnly

from .models import Department, Result
from .serializers import DepartmentSerializer, ResultSerializer

logger = logging.getLogger(__name__)


def _as_id(value):
    """int() for ids from query strings or JSON; ValueError on anything else."""
    if isinstance(value, bool):
        raise ValueError(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(value) from None


def _visible_results(request):
    qs = Result.objects.select_related("student")
    user = request.user
    if not user.is_staff_role and not user.is_superuser:
        profile = getattr(user, "student_profile", None)
        if profile is None:
            return qs.none()
        return qs.filter(student=profile, published=True)
    return qs


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def department_list(request):
    return Response(DepartmentSerializer(Department.objects.all(), many=True).data)


@api_view(["GET", "POST", "PUT", "DELETE"])
@permission_classes([IsStaffRoleOrReadOnly])
def results(request):
    if request.method == "GET":
        qs = _visible_results(request)
        student_id = request.query_params.get("studentId")
        semester = request.query_params.get("semester")
        published = request.query_params.get("published")
        if student_id:
            try:
                qs = qs.filter(student_id=_as_id(student_id))
            except ValueError:
                return Response({"error": "studentId must be a number"}, status=status.HTTP_400_BAD_REQUEST)
        if semester:
            try:
                qs = qs.filter(semester=int(semester))
            except ValueError:
                return Response({"error": "semester must be a number"}, status=status.HTTP_400_BAD_REQUEST)
        if published is not None:
            qs = qs.filter(published=published == "true")
        return Response(ResultSerializer(qs.order_by("semester", "subject"), many=True).data)

    if request.method == "POST":
        ser = ResultSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        result = ser.save()
        record_activity(
            "result",
            f"Result added for {result.subject}: {result.marks:g}/{result.total_marks:g} ({result.grade})",
            user=request.user,
            student=result.student,
        )
        return Response(ResultSerializer(result).data, status=status.HTTP_201_CREATED)

    if request.method == "PUT":
        data = request.data
        if data.get("publishAll") and data.get("studentId"):
            try:
                student_id = _as_id(data["studentId"])
            except ValueError:
                return Response({"error": "studentId must be a number"}, status=status.HTTP_400_BAD_REQUEST)
            student = get_object_or_404(Student, pk=student_id)
            updated = Result.objects.filter(student=student).update(published=True)
            record_activity(
                "result",
                "All results published",
                user=request.user,
                student=student,
            )
            logger.info("Published %s results for student %s", updated, student_id)
            return Response({"success": True, "message": "All results published"})
        if data.get("id"):
            try:
                result_id = _as_id(data["id"])
            except ValueError:
                return Response({"error": "id must be a number"}, status=status.HTTP_400_BAD_REQUEST)
            result = get_object_or_404(Result, pk=result_id)
            payload = {}
            for key in ("marks", "totalMarks", "published"):
                if key in data:
                    payload[key] = data[key]
            ser = ResultSerializer(result, data=payload, partial=True)
            ser.is_valid(raise_exception=True)
            return Response(ResultSerializer(ser.save()).data)
        return Response({"error": "Invalid request"}, status=status.HTTP_400_BAD_REQUEST)

    result_id = request.query_params.get("id")
    if not result_id:
        return Response({"error": "Result ID required"}, status=status.HTTP_400_BAD_REQUEST)
    try:
        result_id = _as_id(result_id)
    except ValueError:
        return Response({"error": "id must be a number"}, status=status.HTTP_400_BAD_REQUEST)
    result = get_object_or_404(Result, pk=result_id)
    try:
        result.delete()
    except DatabaseError:
        logger.exception("Failed to delete result %s", result_id)
        return Response({"error": "Failed to delete result"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response({"success": True})
