"""Admin configuration for users app"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin for accounts, with the listing role up front"""

    list_display = ["email", "first_name", "last_name", "user_type", "facility_count", "created_at"]
    list_filter = ["user_type", "is_staff", "is_active"]
    search_fields = ["email", "first_name", "last_name", "phone"]
    ordering = ["-created_at"]
    fieldsets = BaseUserAdmin.fieldsets + (("Role", {"fields": ("user_type", "phone")}),)
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": (
                    "email",
                    "first_name",
                    "last_name",
                    "user_type",
                    "password1",
                    "password2",
                ),
            },
        ),
    )

    def facility_count(self, obj):
        return obj.facilities.count()

    facility_count.short_description = "Facilities"
