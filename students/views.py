import logging

from django.db import DatabaseError, transaction
from django.db.models import Q
from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, parser_classes, permission_classes
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from dashboard.services import record_activity

from .csv_io import export_students_csv, parse_student_rows
from .models import Student
from .permissions import IsStaffRoleOrReadOnly, user_can_view_student
from .serializers import StudentDetailSerializer, StudentSerializer

logger = logging.getLogger(__name__)


def _filtered_students(request):
    qs = Student.objects.all()
    department = request.query_params.get("department")
    semester = request.query_params.get("semester")
    search = request.query_params.get("search")
    if department and department != "all":
        qs = qs.filter(department=department)
    if semester and semester != "all":
        qs = qs.filter(semester=int(semester))
    if search:
        qs = qs.filter(
            Q(name__icontains=search) | Q(roll__icontains=search) | Q(email__icontains=search)
        )
    return qs


def _create_student(data, actor):
    ser = StudentSerializer(data=data)
    ser.is_valid(raise_exception=True)
    student = ser.save()
    record_activity(
        "student_add",
        f"New student {student.name} registered in {student.department}",
        user=actor,
        student=student,
    )
    return student


@api_view(["GET", "POST"])
@permission_classes([IsStaffRoleOrReadOnly])
def student_list(request):
    if request.method == "POST":
        student = _create_student(request.data, request.user)
        return Response(StudentSerializer(student).data, status=status.HTTP_201_CREATED)

    if not request.user.is_staff_role and not request.user.is_superuser:
        qs = Student.objects.filter(user=request.user)
    else:
        try:
            qs = _filtered_students(request)
        except ValueError:
            return Response({"error": "semester must be a number"}, status=status.HTTP_400_BAD_REQUEST)
    return Response(StudentSerializer(qs, many=True).data)


@api_view(["GET", "PUT", "DELETE"])
@permission_classes([IsStaffRoleOrReadOnly])
def student_detail(request, pk: int):
    student = get_object_or_404(Student, pk=pk)
    if request.method == "GET":
        if not user_can_view_student(request.user, student.id):
            return Response({"error": "forbidden"}, status=status.HTTP_403_FORBIDDEN)
        published_only = not (request.user.is_staff_role or request.user.is_superuser)
        ser = StudentDetailSerializer(student, context={"published_only": published_only})
        return Response(ser.data)

    if request.method == "PUT":
        ser = StudentSerializer(student, data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        return Response(StudentSerializer(ser.save()).data)

    user = student.user
    try:
        with transaction.atomic():
            student.delete()
            user.delete()
    except DatabaseError:
        logger.exception("Failed to delete student %s", pk)
        return Response({"error": "Failed to delete student"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response({"success": True})


@api_view(["GET"])
@permission_classes([IsStaffRoleOrReadOnly])
def export_csv(request):
    if not request.user.is_staff_role and not request.user.is_superuser:
        return Response({"error": "forbidden"}, status=status.HTTP_403_FORBIDDEN)
    try:
        qs = _filtered_students(request)
    except ValueError:
        return Response({"error": "semester must be a number"}, status=status.HTTP_400_BAD_REQUEST)
    filename = f"students_{timezone.localdate().isoformat()}.csv"
    response = HttpResponse(export_students_csv(qs), content_type="text/csv")
    response["Content-Disposition"] = f'attachment; filename="{filename}"'
    return response


@api_view(["POST"])
@permission_classes([IsStaffRoleOrReadOnly])
@parser_classes([MultiPartParser, FormParser, JSONParser])
def import_csv(request):
    upload = request.FILES.get("file")
    if upload is not None:
        try:
            text = upload.read().decode("utf-8-sig")
        except UnicodeDecodeError:
            return Response({"error": "CSV file must be UTF-8 encoded"}, status=status.HTTP_400_BAD_REQUEST)
    else:
        text = request.data.get("csv") or ""
    if not text.strip():
        return Response({"error": "No CSV data provided"}, status=status.HTTP_400_BAD_REQUEST)

    created = 0
    skipped = 0
    errors = []
    for line_number, payload in parse_student_rows(text):
        if payload is None:
            skipped += 1
            continue
        ser = StudentSerializer(data=payload)
        if not ser.is_valid():
            skipped += 1
            errors.append({"row": line_number, "errors": ser.errors})
            continue
        with transaction.atomic():
            ser.save()
        created += 1
    if created:
        record_activity(
            "student_add",
            f"Imported {created} students from CSV",
            user=request.user,
        )
    logger.info("CSV import: %s created, %s skipped", created, skipped)
    return Response({"created": created, "skipped": skipped, "errors": errors})
