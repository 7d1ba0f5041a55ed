from django.contrib import admin

from .models import Alert


@admin.register(Alert)
class AlertAdmin(admin.ModelAdmin):
    list_display = ("id", "type", "related_person", "role_target",
                    "user_target_id", "seen", "created_at")
    list_filter = ("type", "seen", "role_target")
    search_fields = ("message",)
    readonly_fields = ("created_at", "updated_at")
