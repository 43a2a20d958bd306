from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.db import DatabaseError
from django.db.models import Count
from django.utils import timezone

from academics.models import Department, Teacher
from academics.services import average_gpa_by_department, published_result_rows
from attendance.models import AttendanceRecord
from attendance.services import (
    percentage_present,
    rank_students,
    student_attendance_rows,
    trend_by_date,
)
from students.models import Student

from .models import Activity

logger = logging.getLogger(__name__)

TOP_STUDENTS_LIMIT = 6
SUMMARY_TOP_STUDENTS_LIMIT = 3
RECENT_ACTIVITY_LIMIT = 10


class DashboardAggregationError(Exception):
    """A collaborator query failed; no partial dashboard is returned."""


def record_activity(kind, description, user=None, student=None, student_id=None):
    if user is not None and not getattr(user, "is_authenticated", False):
        user = None
    if student is not None:
        student_id = student.id
    return Activity.objects.create(
        type=kind,
        description=description[:255],
        user=user,
        student_id=student_id,
    )


def _attendance_records() -> List[Dict[str, Any]]:
    return list(
        AttendanceRecord.objects.order_by("id").values(
            "student_id",
            "status",
            "student__name",
            "student__department",
            "student__semester",
        )
    )


def _stats(records) -> Dict[str, int]:
    return {
        "totalStudents": Student.objects.count(),
        "totalTeachers": Teacher.objects.count(),
        "totalDepartments": Department.objects.count(),
        "attendancePercentage": percentage_present(records),
    }


def _grouped_counts(qs, field):
    return list(qs.values(field).annotate(count=Count("id")).order_by(field))


def _recent_activities() -> List[Dict[str, Any]]:
    items = Activity.objects.select_related("user")[:RECENT_ACTIVITY_LIMIT]
    return [
        {
            "id": a.id,
            "type": a.type,
            "description": a.description,
            "createdAt": a.created_at.isoformat(),
            "user": (
                {"name": a.user.name or a.user.email, "role": a.user.role}
                if a.user
                else None
            ),
        }
        for a in items
    ]


def trend_window(window_start: Optional[date], window_end: Optional[date], today: date):
    end = window_end or today
    start = window_start or end - timedelta(days=settings.DASHBOARD_TREND_DAYS)
    return start, end


def build_dashboard_stats(
    window_start: Optional[date] = None,
    window_end: Optional[date] = None,
    today: Optional[date] = None,
) -> Dict[str, Any]:
    """
    One dashboard snapshot. Each block runs its own query, so under
    concurrent writes the blocks may reflect slightly different moments.
    """
    today = today or timezone.localdate()
    explicit_window = window_start is not None or window_end is not None
    start, end = trend_window(window_start, window_end, today)

    try:
        records = _attendance_records()
        stats = _stats(records)
        by_department = _grouped_counts(Student.objects.all(), "department")
        by_semester = _grouped_counts(Student.objects.all(), "semester")
        by_gender = _grouped_counts(Student.objects.all(), "gender")
        today_attendance = _grouped_counts(
            AttendanceRecord.objects.filter(date=today), "status"
        )
        trend_records = list(
            AttendanceRecord.objects.filter(date__gte=start, date__lte=end)
            .order_by("date")
            .values("date", "status")
        )
        gpa_rows = list(published_result_rows())
        activities = _recent_activities()
    except DatabaseError as exc:
        logger.exception("Dashboard aggregation failed")
        raise DashboardAggregationError("Dashboard aggregation failed") from exc

    trend = trend_by_date(trend_records, start, end)
    if not explicit_window:
        trend = trend[-settings.DASHBOARD_TREND_DISPLAY_DAYS:]

    return {
        "stats": stats,
        "studentsByDepartment": [
            {"department": row["department"], "count": row["count"]}
            for row in by_department
        ],
        "studentsBySemester": [
            {"semester": row["semester"], "count": row["count"]}
            for row in by_semester
        ],
        "todayAttendance": [
            {"status": row["status"], "count": row["count"]}
            for row in today_attendance
        ],
        "averageGpaByDepartment": average_gpa_by_department(gpa_rows),
        "attendanceTrend": trend,
        "topStudents": rank_students(
            student_attendance_rows(records), limit=TOP_STUDENTS_LIMIT
        ),
        "genderDistribution": [
            {"gender": row["gender"] or "Unknown", "count": row["count"]}
            for row in by_gender
        ],
        "recentActivities": activities,
    }


def build_dashboard_summary() -> Dict[str, Any]:
    try:
        records = _attendance_records()
        stats = _stats(records)
    except DatabaseError as exc:
        logger.exception("Dashboard summary aggregation failed")
        raise DashboardAggregationError("Dashboard aggregation failed") from exc
    return {
        "stats": stats,
        "topStudents": rank_students(
            student_attendance_rows(records), limit=SUMMARY_TOP_STUDENTS_LIMIT
        ),
    }
