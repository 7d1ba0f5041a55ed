from django.contrib import admin

from .models import Case, StatusHistory, Tip


class StatusHistoryInline(admin.TabularInline):
    model = StatusHistory
    extra = 0
    can_delete = False
    readonly_fields = ("previous_status", "new_status", "changed_by",
                       "changed_at")

    def has_add_permission(self, request, obj=None):
        return False


class TipInline(admin.TabularInline):
    model = Tip
    extra = 0
    readonly_fields = ("submitted_by", "created_at")


@admin.register(Case)
class CaseAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "age", "status", "reported_by",
                    "date", "updated_at")
    list_filter = ("status",)
    search_fields = ("name", "last_seen")
    list_select_related = ("reported_by",)
    inlines = [StatusHistoryInline, TipInline]


@admin.register(StatusHistory)
class StatusHistoryAdmin(admin.ModelAdmin):
    list_display = ("person", "previous_status", "new_status",
                    "changed_by", "changed_at")
    list_filter = ("new_status",)


@admin.register(Tip)
class TipAdmin(admin.ModelAdmin):
    list_display = ("id", "person", "submitted_by", "created_at")
    search_fields = ("content",)
