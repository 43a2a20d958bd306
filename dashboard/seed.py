"""
Demo data for a fresh install.

The admin account doubles as the "already seeded" marker: it is inserted
first, inside the seeding transaction, and the unique email constraint makes
that insert the claim. A second caller (another request, process or host)
hits IntegrityError and backs off instead of seeding twice.
"""
import logging
import random
from datetime import date, timedelta

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.utils import timezone

from academics.models import DEFAULT_DEPARTMENTS, Department, Result, Teacher
from attendance.models import AttendanceRecord
from students.models import Student

logger = logging.getLogger(__name__)

SUBJECTS = [
    "Mathematics", "Physics", "Chemistry", "Programming", "Database Systems",
    "Data Structures", "Algorithms", "Operating Systems", "Computer Networks", "Software Engineering",
]

TEACHER_COUNT = 5
STUDENT_COUNT = 30
ATTENDANCE_DAYS = 30
RESULTS_PER_STUDENT = 3


def _phone(rng):
    return f"+8801{rng.randint(100000000, 999999999)}"


def _claim_seed():
    User = get_user_model()
    if User.objects.filter(email=settings.SEED_ADMIN_EMAIL).exists():
        return None
    try:
        with transaction.atomic():
            return User.objects.create_superuser(
                email=settings.SEED_ADMIN_EMAIL,
                password=settings.SEED_ADMIN_PASSWORD,
                name="Admin User",
            )
    except IntegrityError:
        return None


def _seed_people(rng):
    User = get_user_model()
    for name, code in DEFAULT_DEPARTMENTS:
        Department.objects.get_or_create(code=code, defaults={"name": name})

    for i in range(1, TEACHER_COUNT + 1):
        email = f"teacher{i}@school.edu"
        user = User.objects.filter(email=email).first()
        if user is None:
            user = User.objects.create_user(
                email=email,
                password=settings.SEED_TEACHER_PASSWORD,
                name=f"Teacher {i}",
                role=User.ROLE_TEACHER,
            )
        Teacher.objects.get_or_create(
            user=user,
            defaults={
                "name": user.name,
                "email": user.email,
                "phone": _phone(rng),
                "subject": SUBJECTS[i % len(SUBJECTS)],
                "department": DEFAULT_DEPARTMENTS[i % len(DEFAULT_DEPARTMENTS)][0],
            },
        )

    students = []
    for i in range(1, STUDENT_COUNT + 1):
        email = f"student{i}@school.edu"
        user = User.objects.filter(email=email).first()
        if user is None:
            user = User.objects.create_user(
                email=email,
                password=settings.DEFAULT_STUDENT_PASSWORD,
                name=f"Student {i}",
                role=User.ROLE_STUDENT,
            )
        student, _ = Student.objects.get_or_create(
            user=user,
            defaults={
                "name": user.name,
                "email": user.email,
                "phone": _phone(rng),
                "department": DEFAULT_DEPARTMENTS[i % len(DEFAULT_DEPARTMENTS)][0],
                "semester": (i % 8) + 1,
                "roll": f"ROLL-{i:04d}",
                "gender": "Male" if i % 2 == 0 else "Female",
                "address": f"Address {i}, City",
                "date_of_birth": date(1995 + (i % 10), (i % 12) + 1, (i % 28) + 1),
            },
        )
        students.append(student)
    return students


def _seed_attendance(students, rng, today):
    records = []
    for offset in range(ATTENDANCE_DAYS):
        day = today - timedelta(days=offset)
        if day.weekday() >= 5:
            continue
        for student in students:
            roll = rng.random()
            status = AttendanceRecord.PRESENT
            if roll > 0.95:
                status = AttendanceRecord.LATE
            elif roll > 0.80:
                status = AttendanceRecord.ABSENT
            records.append(AttendanceRecord(student=student, date=day, status=status))
    AttendanceRecord.objects.bulk_create(records, ignore_conflicts=True)
    return len(records)


def _seed_results(students, rng):
    count = 0
    for student in students:
        for offset in range(RESULTS_PER_STUDENT):
            # save() derives the grade; bulk_create would skip it
            Result.objects.create(
                student=student,
                subject=SUBJECTS[(student.semester + offset) % len(SUBJECTS)],
                marks=rng.randint(60, 99),
                total_marks=100,
                semester=student.semester,
                exam_type="Final",
                published=True,
            )
            count += 1
    return count


def ensure_seed_data(rng=None, today=None) -> bool:
    """Seed demo data once. Returns False when the data was already there."""
    rng = rng or random.Random()
    today = today or timezone.localdate()
    with transaction.atomic():
        admin = _claim_seed()
        if admin is None:
            logger.info("Seed data already present; skipping")
            return False
        logger.info("Seeding database...")
        students = _seed_people(rng)
        attendance = _seed_attendance(students, rng, today)
        results = _seed_results(students, rng)
    logger.info(
        "Database seeded: %s students, %s attendance records, %s results",
        len(students),
        attendance,
        results,
    )
    return True
