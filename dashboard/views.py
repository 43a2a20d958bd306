import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.contrib.auth.decorators import login_required
from django.shortcuts import render
from django.utils.dateparse import parse_date
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from .seed import ensure_seed_data
from .services import (
    DashboardAggregationError,
    build_dashboard_stats,
    build_dashboard_summary,
)

logger = logging.getLogger(__name__)

AGGREGATION_FAILED = {"error": "Dashboard aggregation failed"}


def _window(params):
    start = params.get("start")
    end = params.get("end")
    start_date = parse_date(start) if start else None
    end_date = parse_date(end) if end else None
    if (start and start_date is None) or (end and end_date is None):
        raise ValueError("start and end must be ISO dates (YYYY-MM-DD)")
    if start_date and end_date and start_date > end_date:
        raise ValueError("start must not be after end")
    return start_date, end_date


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def dashboard_stats(request):
    try:
        start, end = _window(request.query_params)
    except ValueError as exc:
        return Response({"error": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
    try:
        payload = build_dashboard_stats(window_start=start, window_end=end)
    except DashboardAggregationError:
        return Response(AGGREGATION_FAILED, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(payload)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def dashboard_summary(request):
    try:
        payload = build_dashboard_summary()
    except DashboardAggregationError:
        return Response(AGGREGATION_FAILED, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    return Response(payload)


@api_view(["GET"])
@permission_classes([AllowAny])
def seed(request):
    if not settings.ALLOW_DEMO_SEED:
        return Response({"error": "Seeding is disabled"}, status=status.HTTP_403_FORBIDDEN)
    seeded = ensure_seed_data()
    return Response(
        {
            "message": "Database seeded successfully!" if seeded else "Database already seeded",
            "seeded": seeded,
            "totalUsers": get_user_model().objects.count(),
            "accounts": {
                "admin": settings.SEED_ADMIN_EMAIL,
                "teacher": "teacher1@school.edu",
                "student": "student1@school.edu",
            },
        }
    )


@login_required
def index(request):
    ctx = {"active_nav": "dashboard", "error": None, "data": None}
    try:
        ctx["data"] = build_dashboard_stats()
    except DashboardAggregationError:
        ctx["error"] = AGGREGATION_FAILED["error"]
    return render(request, "dashboard/index.html", ctx)
