from django.db import transaction
from django.utils.dateparse import parse_date
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from dashboard.services import record_activity
from students.permissions import IsStaffRoleOrReadOnly

from .models import AttendanceRecord
from .serializers import AttendanceMarkSerializer, AttendanceSerializer


def _date_param(request, name):
    raw = request.query_params.get(name)
    if not raw:
        return None
    value = parse_date(raw)
    if value is None:
        raise ValueError(name)
    return value


@api_view(["GET", "POST"])
@permission_classes([IsStaffRoleOrReadOnly])
def attendance(request):
    if request.method == "GET":
        qs = AttendanceRecord.objects.select_related("student")
        user = request.user
        if not user.is_staff_role and not user.is_superuser:
            qs = qs.filter(student__user=user)
        try:
            day = _date_param(request, "date")
            start = _date_param(request, "startDate")
            end = _date_param(request, "endDate")
        except ValueError as exc:
            return Response({"error": f"Invalid date for {exc}"}, status=status.HTTP_400_BAD_REQUEST)
        student_id = request.query_params.get("studentId")
        department = request.query_params.get("department")
        if student_id:
            try:
                qs = qs.filter(student_id=int(student_id))
            except ValueError:
                return Response({"error": "studentId must be a number"}, status=status.HTTP_400_BAD_REQUEST)
        if day:
            qs = qs.filter(date=day)
        if start and end:
            qs = qs.filter(date__gte=start, date__lte=end)
        if department and department != "all":
            qs = qs.filter(student__department=department)
        return Response(AttendanceSerializer(qs.order_by("-date"), many=True).data)

    many = isinstance(request.data, list)
    ser = AttendanceMarkSerializer(data=request.data, many=many)
    ser.is_valid(raise_exception=True)
    with transaction.atomic():
        saved = ser.save()
    if many:
        record_activity(
            "attendance",
            f"Bulk attendance marked for {len(saved)} students",
            user=request.user,
        )
        return Response(AttendanceSerializer(saved, many=True).data)
    record_activity(
        "attendance",
        f"Attendance marked as {saved.status}",
        user=request.user,
        student=saved.student,
    )
    return Response(AttendanceSerializer(saved).data)
