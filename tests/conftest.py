import itertools

import pytest
from rest_framework.test import APIClient

from academics.models import Department
from students.models import Student

_seq = itertools.count(1)


@pytest.fixture(autouse=True)
def fast_hashing(settings):
    settings.PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]


@pytest.fixture
def make_user(db, django_user_model):
    def _make(role="admin", email=None, password="pass-1234", **extra):
        n = next(_seq)
        return django_user_model.objects.create_user(
            email=email or f"{role}{n}@school.edu",
            password=password,
            name=extra.pop("name", None) or f"{role.title()} {n}",
            role=role,
            **extra,
        )

    return _make


@pytest.fixture
def make_student(make_user):
    def _make(name=None, department="Computer Science", semester=1, gender="Male", **extra):
        user = make_user(role="student", name=name)
        return Student.objects.create(
            user=user,
            name=user.name,
            email=user.email,
            department=department,
            semester=semester,
            gender=gender,
            **extra,
        )

    return _make


@pytest.fixture
def departments(db):
    return [
        Department.objects.create(name="Computer Science", code="CSE"),
        Department.objects.create(name="Civil Engineering", code="CE"),
    ]


@pytest.fixture
def staff_client(make_user):
    client = APIClient()
    user = make_user(role="admin")
    client.force_authenticate(user=user)
    client.user = user
    return client


@pytest.fixture
def student_client(make_student):
    student = make_student(name="Visible Student")
    client = APIClient()
    client.force_authenticate(user=student.user)
    client.student = student
    return client
