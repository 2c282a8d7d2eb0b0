from django.contrib import admin

from .models import Case, CaseStatusLog


class CaseStatusLogInline(admin.TabularInline):
    model = CaseStatusLog
    extra = 0
    can_delete = False
    readonly_fields = ("action", "from_status", "to_status", "changed_by",
                       "message", "created_at")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Case)
class CaseAdmin(admin.ModelAdmin):
    """
    Read-only view of cases.  Lifecycle changes go through the API so
    that every write is versioned and audited.
    """

    list_display = ("id", "status", "closed", "station", "officer",
                    "complain_date", "version")
    list_filter = ("status", "closed", "station")
    search_fields = ("id", "incident_location", "description")
    readonly_fields = ("status", "closed", "officer", "criminal", "version",
                       "created_at", "updated_at")
    inlines = [CaseStatusLogInline]
