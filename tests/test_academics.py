import pytest

from academics.models import Result
from academics.services import average_gpa_by_department, published_result_rows


def test_average_gpa_rounds_half_up_to_two_places():
    rows = [("CS", "A"), ("CS", "A-"), ("CS", "A-"), ("CS", "C+")]
    # (4.0 + 3.7 + 3.7 + 2.3) / 4 = 3.425
    assert average_gpa_by_department(rows) == [{"department": "CS", "averageGpa": 3.43}]


def test_average_gpa_sorted_descending_and_skips_blank_departments():
    rows = [("Civil", "C"), ("CS", "A+"), ("", "A+"), (None, "F"), ("EEE", "B"), ("Civil", "D")]
    assert average_gpa_by_department(rows) == [
        {"department": "CS", "averageGpa": 4.0},
        {"department": "EEE", "averageGpa": 3.0},
        {"department": "Civil", "averageGpa": 1.5},
    ]


def test_average_gpa_empty():
    assert average_gpa_by_department([]) == []


@pytest.mark.django_db
def test_result_grade_is_derived_on_save(make_student):
    student = make_student()
    result = Result.objects.create(student=student, subject="Physics", marks=82, total_marks=100, semester=1)
    result.refresh_from_db()
    assert result.grade == "A-"

    result.marks = 91
    result.save(update_fields=["marks"])
    result.refresh_from_db()
    assert result.grade == "A+"


@pytest.mark.django_db
def test_department_with_only_unpublished_results_is_absent(make_student):
    cs = make_student(department="Computer Science")
    civil = make_student(department="Civil Engineering")
    Result.objects.create(student=cs, subject="Maths", marks=95, semester=1, published=True)
    Result.objects.create(student=civil, subject="Maths", marks=95, semester=1, published=False)

    gpa = average_gpa_by_department(published_result_rows())
    assert gpa == [{"department": "Computer Science", "averageGpa": 4.0}]


@pytest.mark.django_db
def test_results_api_rejects_zero_total(staff_client, make_student):
    student = make_student()
    resp = staff_client.post(
        "/api/results/",
        {"studentId": student.id, "subject": "Maths", "marks": 10, "totalMarks": 0, "semester": 1},
        format="json",
    )
    assert resp.status_code == 400
    assert not Result.objects.exists()


@pytest.mark.django_db
def test_results_api_creates_and_logs_activity(staff_client, make_student):
    from dashboard.models import Activity

    student = make_student()
    resp = staff_client.post(
        "/api/results/",
        {"studentId": student.id, "subject": "Maths", "marks": 41, "totalMarks": 50, "semester": 1},
        format="json",
    )
    assert resp.status_code == 201
    assert resp.json()["grade"] == "A-"
    activity = Activity.objects.get(type="result")
    assert activity.description == "Result added for Maths: 41/50 (A-)"
    assert activity.student_id == student.id


@pytest.mark.django_db
def test_results_api_update_recomputes_grade(staff_client, make_student):
    student = make_student()
    result = Result.objects.create(student=student, subject="Maths", marks=40, semester=1)
    resp = staff_client.put("/api/results/", {"id": result.id, "marks": 88}, format="json")
    assert resp.status_code == 200
    assert resp.json()["grade"] == "A"


@pytest.mark.django_db
def test_publish_all_results_for_student(staff_client, make_student):
    student = make_student()
    Result.objects.create(student=student, subject="Maths", marks=40, semester=1)
    Result.objects.create(student=student, subject="Physics", marks=70, semester=1)
    resp = staff_client.put("/api/results/", {"publishAll": True, "studentId": student.id}, format="json")
    assert resp.status_code == 200
    assert Result.objects.filter(published=False).count() == 0


@pytest.mark.django_db
def test_student_sees_only_own_published_results(student_client, make_student):
    own = student_client.student
    other = make_student()
    Result.objects.create(student=own, subject="Maths", marks=80, semester=1, published=True)
    Result.objects.create(student=own, subject="Physics", marks=80, semester=1, published=False)
    Result.objects.create(student=other, subject="Maths", marks=80, semester=1, published=True)

    resp = student_client.get("/api/results/")
    assert resp.status_code == 200
    assert [r["subject"] for r in resp.json()] == ["Maths"]
    assert resp.json()[0]["studentId"] == own.id


@pytest.mark.django_db
def test_student_cannot_write_results(student_client):
    resp = student_client.post(
        "/api/results/",
        {"studentId": student_client.student.id, "subject": "Maths", "marks": 99, "semester": 1},
        format="json",
    )
    assert resp.status_code == 403
