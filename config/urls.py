from django.contrib import admin
from django.urls import include, path
from accounts import views as accounts_views

api_urlpatterns = [
    path("", include("accounts.urls")),
    path("", include("students.urls")),
    path("", include("academics.urls")),
    path("", include("attendance.urls")),
    path("", include("dashboard.api_urls")),
]

urlpatterns = [
    path("admin/", admin.site.urls),
    path("accounts/", include("allauth.urls")),
    path("api/", include(api_urlpatterns)),
    path("dashboard/", include("dashboard.urls")),
    path("", accounts_views.home, name="home"),
]
