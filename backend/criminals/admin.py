from django.contrib import admin

from .models import Criminal


@admin.register(Criminal)
class CriminalAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "status", "station", "registered_by")
    list_filter = ("status", "station")
    search_fields = ("name", "phone_number", "identification_marks")
