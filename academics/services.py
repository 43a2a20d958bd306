from decimal import Decimal
from typing import Any, Dict, Iterable, List

from .grading import points_for, round_half_up
from .models import Result


def published_result_rows():
    """(department, grade) rows for every published result."""
    return (
        Result.objects.filter(published=True)
        .order_by("id")
        .values_list("student__department", "grade")
    )


def average_gpa_by_department(rows: Iterable) -> List[Dict[str, Any]]:
    totals: Dict[str, List[Decimal]] = {}
    for department, grade in rows:
        if not department:
            continue
        bucket = totals.setdefault(department, [Decimal(0), Decimal(0)])
        bucket[0] += Decimal(str(points_for(grade)))
        bucket[1] += 1
    averages = [
        {
            "department": department,
            "averageGpa": round_half_up(total / count, 2),
        }
        for department, (total, count) in totals.items()
    ]
    return sorted(averages, key=lambda row: row["averageGpa"], reverse=True)
