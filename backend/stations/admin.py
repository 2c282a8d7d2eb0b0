from django.contrib import admin

from .models import Officer, Station


@admin.action(description="Approve selected records")
def approve(modeladmin, request, queryset):
    queryset.update(approval=True)


@admin.action(description="Suspend selected records")
def suspend(modeladmin, request, queryset):
    queryset.update(approval=False)


class OfficerInline(admin.TabularInline):
    model = Officer
    extra = 0
    fields = ("hrms", "user", "rank", "approval")


@admin.register(Station)
class StationAdmin(admin.ModelAdmin):
    list_display = ("sid", "name", "approval", "admin", "incharge")
    list_filter = ("approval",)
    search_fields = ("name", "address")
    actions = [approve, suspend]
    inlines = [OfficerInline]


@admin.register(Officer)
class OfficerAdmin(admin.ModelAdmin):
    list_display = ("hrms", "user", "station", "rank", "approval")
    list_filter = ("approval", "station")
    search_fields = ("user__username", "user__first_name", "user__last_name")
    actions = [approve, suspend]
