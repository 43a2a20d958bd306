import logging

from django.conf import settings
from django.contrib.auth import authenticate, get_user_model, login
from django.shortcuts import redirect
from rest_framework import serializers, status
from rest_framework.decorators import api_view, authentication_classes, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

logger = logging.getLogger(__name__)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(trim_whitespace=False)


def session_payload(user):
    student = getattr(user, "student_profile", None)
    teacher = getattr(user, "teacher_profile", None)
    department = None
    if student is not None:
        department = student.department
    elif teacher is not None:
        department = teacher.department
    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "role": user.role,
        "avatar": user.avatar or None,
        "studentId": student.id if student is not None else None,
        "teacherId": teacher.id if teacher is not None else None,
        "department": department or None,
    }


def _authenticate(request, email, password):
    # axes reads the "username" credential; ModelBackend maps it to USERNAME_FIELD
    return authenticate(request._request, username=email, password=password)


def home(request):
    if request.user.is_authenticated:
        return redirect("dashboard:index")
    return redirect("account_login")


@api_view(["POST"])
@authentication_classes([])
@permission_classes([AllowAny])
def api_login(request):
    ser = LoginSerializer(data=request.data)
    ser.is_valid(raise_exception=True)
    email = ser.validated_data["email"]
    password = ser.validated_data["password"]
    user = _authenticate(request, email, password)
    if user is None and settings.ALLOW_DEMO_SEED:
        # first login on an empty install seeds the demo accounts
        if not get_user_model().objects.filter(email__iexact=email).exists():
            from dashboard.seed import ensure_seed_data

            if ensure_seed_data():
                user = _authenticate(request, email, password)
    if user is None:
        logger.info("Rejected login for %s", email)
        return Response(
            {"error": "Invalid email or password"},
            status=status.HTTP_401_UNAUTHORIZED,
        )
    login(request._request, user)
    return Response(session_payload(user))
