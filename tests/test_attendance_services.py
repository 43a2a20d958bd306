from datetime import date

from attendance.services import (
    attending_percentage,
    counts_by_status,
    percentage_present,
    rank_students,
    student_attendance_rows,
    trend_by_date,
)


def rec(status, day="2024-03-04", student_id=None, name=None, department="Computer Science", semester=1):
    row = {"status": status, "date": day}
    if student_id is not None:
        row.update(
            {
                "student_id": student_id,
                "student__name": name or f"Student {student_id}",
                "student__department": department,
                "student__semester": semester,
            }
        )
    return row


def test_percentage_present_empty_is_zero():
    assert percentage_present([]) == 0
    assert attending_percentage(0, 0) == 0


def test_late_counts_as_attending():
    records = [rec("present"), rec("present"), rec("absent"), rec("late")]
    assert percentage_present(records) == 75


def test_percentage_rounds_half_up():
    assert percentage_present([rec("present"), rec("late"), rec("absent")]) == 67
    # 1/8 = 12.5%
    assert attending_percentage(1, 8) == 13


def test_counts_by_status_fills_missing_statuses():
    assert counts_by_status([rec("present"), rec("present")]) == {
        "present": 2,
        "absent": 0,
        "late": 0,
    }


def test_trend_is_windowed_and_sorted_by_date():
    records = [
        rec("present", "2024-03-06"),
        rec("absent", "2024-03-04"),
        rec("late", "2024-03-04"),
        rec("present", "2024-02-01"),
        rec("present", "2024-04-01"),
    ]
    trend = trend_by_date(records, date(2024, 3, 1), "2024-03-31")
    assert trend == [
        {"date": "2024-03-04", "total": 2, "present": 1, "percentage": 50},
        {"date": "2024-03-06", "total": 1, "present": 1, "percentage": 100},
    ]


def test_trend_window_bounds_are_inclusive():
    records = [rec("present", "2024-03-01"), rec("absent", "2024-03-31")]
    trend = trend_by_date(records, "2024-03-01", "2024-03-31")
    assert [d["date"] for d in trend] == ["2024-03-01", "2024-03-31"]


def test_trend_days_without_records_are_omitted():
    trend = trend_by_date([rec("present", "2024-03-02")], "2024-03-01", "2024-03-03")
    assert len(trend) == 1


def test_student_rows_skip_records_without_a_student():
    records = [
        rec("present", student_id=1, name="Ada"),
        {"status": "present", "date": "2024-03-04", "student_id": 2, "student__name": None},
        rec("absent", student_id=1, name="Ada"),
    ]
    rows = student_attendance_rows(records)
    assert rows == [
        {
            "id": 1,
            "name": "Ada",
            "department": "Computer Science",
            "semester": 1,
            "total": 2,
            "attending": 1,
        }
    ]


def test_ranking_is_descending_and_stable_for_ties():
    records = []
    # students 1..8 in first-seen order; 3 and 5 tie at 100, 1 and 2 tie at 50
    scores = {1: ["present", "absent"], 2: ["late", "absent"], 3: ["present"], 4: ["absent"],
              5: ["present", "late"], 6: ["present", "present", "absent"], 7: ["absent", "absent"],
              8: ["present", "absent", "absent", "absent"]}
    for student_id, statuses in scores.items():
        for status in statuses:
            records.append(rec(status, student_id=student_id))

    ranked = rank_students(student_attendance_rows(records))
    assert [r["id"] for r in ranked] == [3, 5, 6, 1, 2, 8, 4, 7]
    assert [r["percentage"] for r in ranked] == [100, 100, 67, 50, 50, 25, 0, 0]

    assert [r["id"] for r in rank_students(student_attendance_rows(records), limit=6)] == [3, 5, 6, 1, 2, 8]
    assert [r["id"] for r in rank_students(student_attendance_rows(records), limit=3)] == [3, 5, 6]


def test_rank_rows_carry_student_fields():
    ranked = rank_students(student_attendance_rows([rec("late", student_id=9, name="Lin", semester=4)]))
    assert ranked == [
        {"id": 9, "name": "Lin", "department": "Computer Science", "semester": 4, "percentage": 100}
    ]


def test_mixed_days_overall_and_single_day_trend():
    records = [
        rec("present", "2024-03-04"),
        rec("late", "2024-03-05"),
        rec("absent", "2024-03-06"),
    ]
    assert percentage_present(records) == 67
    assert trend_by_date(records, "2024-03-05", "2024-03-05") == [
        {"date": "2024-03-05", "total": 1, "present": 1, "percentage": 100}
    ]
