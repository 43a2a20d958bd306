"""
Attendance rollups used by the dashboard and reports.

Everything here works on already-fetched records: model instances, or the
dicts produced by ``.values()``. ``late`` counts as attending.
"""
from __future__ import annotations

import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from django.utils.dateparse import parse_date

from academics.grading import round_half_up

from .models import AttendanceRecord

STATUSES = [choice[0] for choice in AttendanceRecord.STATUS_CHOICES]
ATTENDING = AttendanceRecord.ATTENDING


def _field(record, name):
    if isinstance(record, dict):
        return record.get(name)
    return getattr(record, name, None)


def _as_date(value) -> Optional[datetime.date]:
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        return parse_date(value)
    return None


def attending_percentage(attending: int, total: int) -> int:
    if not total:
        return 0
    return round_half_up(Decimal(100 * attending) / Decimal(total))


def counts_by_status(records: Iterable) -> Dict[str, int]:
    counts = {status: 0 for status in STATUSES}
    for record in records:
        status = _field(record, "status")
        counts[status] = counts.get(status, 0) + 1
    return counts


def percentage_present(records: Iterable) -> int:
    total = 0
    attending = 0
    for record in records:
        total += 1
        if _field(record, "status") in ATTENDING:
            attending += 1
    return attending_percentage(attending, total)


def trend_by_date(records: Iterable, window_start, window_end) -> List[Dict[str, Any]]:
    start = _as_date(window_start)
    end = _as_date(window_end)
    days: Dict[datetime.date, List[int]] = {}
    for record in records:
        day = _as_date(_field(record, "date"))
        if day is None:
            continue
        if (start and day < start) or (end and day > end):
            continue
        bucket = days.setdefault(day, [0, 0])
        bucket[0] += 1
        if _field(record, "status") in ATTENDING:
            bucket[1] += 1
    return [
        {
            "date": day.isoformat(),
            "total": total,
            "present": present,
            "percentage": attending_percentage(present, total),
        }
        for day, (total, present) in sorted(days.items())
    ]


def _student_info(record) -> Optional[Dict[str, Any]]:
    if isinstance(record, dict):
        if record.get("student_id") is None or record.get("student__name") is None:
            return None
        return {
            "id": record["student_id"],
            "name": record["student__name"],
            "department": record.get("student__department"),
            "semester": record.get("student__semester"),
        }
    student = getattr(record, "student", None)
    if student is None:
        return None
    return {
        "id": student.id,
        "name": student.name,
        "department": student.department,
        "semester": student.semester,
    }


def student_attendance_rows(records: Iterable) -> List[Dict[str, Any]]:
    """One row per student, in the order each student is first seen."""
    rows: Dict[Any, Dict[str, Any]] = {}
    for record in records:
        info = _student_info(record)
        if info is None:
            continue
        row = rows.get(info["id"])
        if row is None:
            row = rows[info["id"]] = {**info, "total": 0, "attending": 0}
        row["total"] += 1
        if _field(record, "status") in ATTENDING:
            row["attending"] += 1
    return list(rows.values())


def rank_students(rows: Iterable[Dict[str, Any]], limit: Optional[int] = None) -> List[Dict[str, Any]]:
    scored = [
        {
            "id": row["id"],
            "name": row["name"],
            "department": row["department"],
            "semester": row["semester"],
            "percentage": attending_percentage(row["attending"], row["total"]),
        }
        for row in rows
    ]
    # sorted() is stable: equal percentages keep their input order
    ranked = sorted(scored, key=lambda row: row["percentage"], reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return ranked
