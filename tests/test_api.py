import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from attendance.models import AttendanceRecord
from dashboard.models import Activity
from students.models import Student

pytestmark = pytest.mark.django_db


def test_login_returns_session_payload(make_student, settings):
    settings.ALLOW_DEMO_SEED = False
    student = make_student(name="Ada")
    resp = APIClient().post(
        "/api/auth/login/",
        {"email": student.email, "password": "pass-1234"},
        format="json",
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["role"] == "student"
    assert body["studentId"] == student.id
    assert body["department"] == "Computer Science"
    assert Activity.objects.filter(type="login", user=student.user).exists()


def test_login_rejects_wrong_password(make_user, settings):
    settings.ALLOW_DEMO_SEED = False
    user = make_user(role="teacher")
    resp = APIClient().post(
        "/api/auth/login/", {"email": user.email, "password": "nope"}, format="json"
    )
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid email or password"}


def test_first_login_seeds_empty_install(settings):
    settings.ALLOW_DEMO_SEED = True
    resp = APIClient().post(
        "/api/auth/login/",
        {"email": settings.SEED_ADMIN_EMAIL, "password": settings.SEED_ADMIN_PASSWORD},
        format="json",
    )
    assert resp.status_code == 200
    assert resp.json()["role"] == "admin"
    assert Student.objects.exists()


def test_staff_creates_student_with_default_password(staff_client, settings):
    resp = staff_client.post(
        "/api/students/",
        {
            "name": "Grace",
            "email": "grace@school.edu",
            "department": "Computer Science",
            "semester": 3,
            "dateOfBirth": "2001-05-04",
        },
        format="json",
    )
    assert resp.status_code == 201
    body = resp.json()
    assert "password" not in body
    assert body["dateOfBirth"] == "2001-05-04"

    user = get_user_model().objects.get(email="grace@school.edu")
    assert user.role == "student"
    assert user.check_password(settings.DEFAULT_STUDENT_PASSWORD)
    assert Activity.objects.filter(type="student_add", student_id=body["id"]).exists()


def test_duplicate_email_is_rejected(staff_client, make_student):
    existing = make_student()
    resp = staff_client.post(
        "/api/students/",
        {"name": "Dup", "email": existing.email, "department": "Computer Science", "semester": 1},
        format="json",
    )
    assert resp.status_code == 400
    assert "email" in resp.json()


def test_semester_out_of_range_is_rejected(staff_client):
    resp = staff_client.post(
        "/api/students/",
        {"name": "Late", "email": "late@school.edu", "department": "Computer Science", "semester": 9},
        format="json",
    )
    assert resp.status_code == 400


def test_student_list_filters(staff_client, make_student):
    make_student(name="Ada", department="Computer Science", semester=1)
    make_student(name="Bo", department="Civil Engineering", semester=3)

    names = [s["name"] for s in staff_client.get("/api/students/", {"department": "Civil Engineering"}).json()]
    assert names == ["Bo"]
    names = [s["name"] for s in staff_client.get("/api/students/", {"semester": "1"}).json()]
    assert names == ["Ada"]
    names = [s["name"] for s in staff_client.get("/api/students/", {"search": "ad"}).json()]
    assert names == ["Ada"]


def test_update_syncs_user_account(staff_client, make_student):
    student = make_student(name="Old Name")
    resp = staff_client.put(
        f"/api/students/{student.id}/", {"name": "New Name", "email": "new@school.edu"}, format="json"
    )
    assert resp.status_code == 200
    student.user.refresh_from_db()
    assert student.user.name == "New Name"
    assert student.user.email == "new@school.edu"


def test_delete_removes_student_and_user(staff_client, make_student):
    student = make_student()
    user_id = student.user_id
    resp = staff_client.delete(f"/api/students/{student.id}/")
    assert resp.status_code == 200
    assert not Student.objects.filter(pk=student.id).exists()
    assert not get_user_model().objects.filter(pk=user_id).exists()


def test_student_sees_only_own_record(student_client, make_student):
    other = make_student()
    listing = student_client.get("/api/students/").json()
    assert [s["id"] for s in listing] == [student_client.student.id]
    assert student_client.get(f"/api/students/{other.id}/").status_code == 403
    assert student_client.get(f"/api/students/{student_client.student.id}/").status_code == 200


def test_student_cannot_create_students(student_client):
    resp = student_client.post(
        "/api/students/",
        {"name": "X", "email": "x@school.edu", "department": "Computer Science", "semester": 1},
        format="json",
    )
    assert resp.status_code == 403


def test_marking_attendance_twice_overwrites(staff_client, make_student):
    student = make_student()
    payload = {"studentId": student.id, "date": "2024-03-04", "status": "absent"}
    assert staff_client.post("/api/attendance/", payload, format="json").status_code == 200
    payload["status"] = "late"
    resp = staff_client.post("/api/attendance/", payload, format="json")
    assert resp.status_code == 200
    assert resp.json()["status"] == "late"
    assert AttendanceRecord.objects.filter(student=student).count() == 1


def test_bulk_attendance(staff_client, make_student):
    a, b = make_student(), make_student()
    resp = staff_client.post(
        "/api/attendance/",
        [
            {"studentId": a.id, "date": "2024-03-04", "status": "present"},
            {"studentId": b.id, "date": "2024-03-04", "status": "absent"},
        ],
        format="json",
    )
    assert resp.status_code == 200
    assert len(resp.json()) == 2
    assert Activity.objects.get(type="attendance").description == "Bulk attendance marked for 2 students"

    day = staff_client.get("/api/attendance/", {"date": "2024-03-04"}).json()
    assert {r["studentId"] for r in day} == {a.id, b.id}


def test_attendance_rejects_unknown_status_and_bad_dates(staff_client, make_student):
    student = make_student()
    resp = staff_client.post(
        "/api/attendance/",
        {"studentId": student.id, "date": "2024-03-04", "status": "sick"},
        format="json",
    )
    assert resp.status_code == 400
    assert staff_client.get("/api/attendance/", {"date": "not-a-date"}).status_code == 400


def test_csv_export_header(staff_client, make_student):
    make_student(name="Ada", roll="R-1")
    resp = staff_client.get("/api/students/export/")
    assert resp.status_code == 200
    assert resp["Content-Type"].startswith("text/csv")
    assert "attachment" in resp["Content-Disposition"]
    lines = resp.content.decode().splitlines()
    assert lines[0] == "ID,Name,Email,Department,Semester,Roll,Phone,Gender"
    assert "Ada" in lines[1]


def test_csv_export_is_staff_only(student_client):
    assert student_client.get("/api/students/export/").status_code == 403


def test_csv_import_skips_incomplete_rows(staff_client):
    text = (
        "Name,Email,Phone,Department,Semester,Roll,Gender\n"
        "Ada,ada@school.edu,123,Civil Engineering,2,R-1,Female\n"
        ",missing@school.edu,,,,,\n"
        "No Email,,,,,,\n"
        "Bo,bo@school.edu,,,,,\n"
    )
    upload = SimpleUploadedFile("students.csv", text.encode(), content_type="text/csv")
    resp = staff_client.post("/api/students/import/", {"file": upload}, format="multipart")
    assert resp.status_code == 200
    assert resp.json()["created"] == 2
    assert resp.json()["skipped"] == 2

    bo = Student.objects.get(email="bo@school.edu")
    assert bo.department == "Computer Science"
    assert bo.semester == 1
    assert bo.gender == ""


def test_csv_import_requires_data(staff_client):
    resp = staff_client.post("/api/students/import/", {"csv": ""}, format="json")
    assert resp.status_code == 400


def test_departments_listing(staff_client, departments):
    body = staff_client.get("/api/departments/").json()
    assert [d["code"] for d in body] == ["CE", "CSE"]


def test_non_numeric_semester_filter_is_rejected(staff_client):
    resp = staff_client.get("/api/students/", {"semester": "third"})
    assert resp.status_code == 400


def test_csv_import_rejects_non_utf8_file(staff_client):
    upload = SimpleUploadedFile("students.csv", b"Name,Email\n\xff\xfe bad,x@y.z\n", content_type="text/csv")
    resp = staff_client.post("/api/students/import/", {"file": upload}, format="multipart")
    assert resp.status_code == 400
    assert "error" in resp.json()
    assert not Student.objects.exists()


def test_attendance_rejects_non_numeric_student_id(staff_client):
    resp = staff_client.get("/api/attendance/", {"studentId": "abc"})
    assert resp.status_code == 400


@pytest.mark.parametrize(
    "method,kwargs",
    [
        ("get", {"path": "/api/results/", "data": {"studentId": "abc"}}),
        ("delete", {"path": "/api/results/?id=abc"}),
        ("put", {"path": "/api/results/", "data": {"id": "abc", "marks": 5}, "format": "json"}),
        ("put", {"path": "/api/results/", "data": {"publishAll": True, "studentId": "abc"}, "format": "json"}),
    ],
)
def test_results_reject_non_numeric_ids(staff_client, method, kwargs):
    resp = getattr(staff_client, method)(**kwargs)
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_publish_all_for_unknown_student_is_404(staff_client):
    resp = staff_client.put("/api/results/", {"publishAll": True, "studentId": 999999}, format="json")
    assert resp.status_code == 404
