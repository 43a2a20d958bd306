"""
Letter grades and GPA points.

Grades are banded on ``marks / total_marks * 100`` with inclusive lower
bounds; the thresholds must stay fixed because stored results and external
reports were produced with them.
"""
from decimal import ROUND_HALF_UP, Decimal

from django.core.exceptions import ValidationError

GRADE_THRESHOLDS = [
    (90, "A+"),
    (85, "A"),
    (80, "A-"),
    (75, "B+"),
    (70, "B"),
    (65, "B-"),
    (60, "C+"),
    (55, "C"),
    (50, "D"),
]
FAILING_GRADE = "F"

GRADE_POINTS = {
    "A+": 4.0,
    "A": 4.0,
    "A-": 3.7,
    "B+": 3.3,
    "B": 3.0,
    "B-": 2.7,
    "C+": 2.3,
    "C": 2.0,
    "D": 1.0,
    "F": 0.0,
}

GRADE_CHOICES = [(g, g) for _, g in GRADE_THRESHOLDS] + [(FAILING_GRADE, FAILING_GRADE)]


def grade_for(marks, total_marks) -> str:
    if total_marks is None or total_marks <= 0:
        raise ValidationError("Total marks must be greater than zero.", code="invalid_total")
    if marks is None or marks < 0:
        raise ValidationError("Marks cannot be negative.", code="invalid_marks")
    percentage = marks / total_marks * 100
    for threshold, grade in GRADE_THRESHOLDS:
        if percentage >= threshold:
            return grade
    return FAILING_GRADE


def points_for(grade) -> float:
    return GRADE_POINTS.get(grade or FAILING_GRADE, 0.0)


def round_half_up(value, places=0):
    """Round like a report card does: .5 always goes up."""
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    if places == 0:
        return int(rounded)
    return float(rounded)
