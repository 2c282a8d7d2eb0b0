from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "email", "phone_number",
                    "first_name", "last_name", "role", "is_active")
    search_fields = ("username", "email", "phone_number")
    list_filter = ("role", "is_active", "is_staff")
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Extra Info", {"fields": ("phone_number", "role")}),
    )
    add_fieldsets = BaseUserAdmin.add_fieldsets + (
        ("Extra Info", {"fields": ("email", "phone_number",
                                   "first_name", "last_name", "role")}),
    )
