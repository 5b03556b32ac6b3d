"""Django admin configuration"""

from django.contrib import admin
from django.urls import reverse
from django.utils.html import format_html, format_html_join

from .models import Facility, FacilityImage, FacilityStatus


@admin.register(Facility)
class FacilityAdmin(admin.ModelAdmin):
    """Admin interface for Facility model"""

    list_display = (
        "name",
        "user_info",
        "facility_type",
        "starting_price",
        "status",
        "created_at",
    )
    list_filter = ("status", "facility_type", "created_at")
    search_fields = (
        "name",
        "description",
        "user__email",
        "user__first_name",
        "user__last_name",
    )
    ordering = ("-created_at",)
    readonly_fields = ("created_at", "updated_at", "starting_price", "rental_plan_table")

    fieldsets = (
        ("Owner", {"fields": ("user",)}),
        ("Basic Info", {"fields": ("facility_type", "name", "description", "status")}),
        ("Media", {"fields": ("images", "video_link")}),
        ("Pricing", {"fields": ("rental_plan_table", "rental_plans", "starting_price")}),
        ("Details", {"fields": ("details",)}),
        ("Metadata", {"fields": ("created_at", "updated_at")}),
    )

    actions = ["activate_facilities", "deactivate_facilities"]

    def user_info(self, obj):
        """Display user with link to their profile"""
        return format_html(
            '<a href="{}">{}</a>',
            reverse("admin:users_user_change", args=[obj.user.id]),
            obj.user.email,
        )

    user_info.short_description = "User"

    def rental_plan_table(self, obj):
        """Rental plans as a readable list"""
        if not obj or not obj.rental_plans:
            return "No rental plans"
        return format_html(
            "<ul>{}</ul>",
            format_html_join(
                "", "<li>{}: {}</li>", ((plan["name"], plan["price"]) for plan in obj.rental_plans)
            ),
        )

    rental_plan_table.short_description = "Rental Plans"

    def activate_facilities(self, request, queryset):
        """Reactivate selected facilities"""
        count = queryset.filter(status=FacilityStatus.DEACTIVATED).update(
            status=FacilityStatus.ACTIVE
        )
        self.message_user(request, f"{count} facility listing(s) activated.")

    activate_facilities.short_description = "Activate selected facilities"

    def deactivate_facilities(self, request, queryset):
        """Deactivate selected facilities"""
        count = queryset.filter(status=FacilityStatus.ACTIVE).update(
            status=FacilityStatus.DEACTIVATED
        )
        self.message_user(request, f"{count} facility listing(s) deactivated.")

    deactivate_facilities.short_description = "Deactivate selected facilities"


@admin.register(FacilityImage)
class FacilityImageAdmin(admin.ModelAdmin):
    """Admin interface for uploaded images"""

    list_display = ("filename", "user", "uploaded_at")
    search_fields = ("filename", "url", "user__email")
    ordering = ("-uploaded_at",)
    readonly_fields = ("uploaded_at",)
