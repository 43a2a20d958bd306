from django.contrib import admin
from .models import Activity

@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ("created_at", "type", "description", "user")
    list_filter = ("type",)
    search_fields = ("description", "user__email")
