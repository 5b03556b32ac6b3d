"""Django models for facility listings"""

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models

from .schemas import FacilityType


class FacilityStatus:
    """Facility status choices"""

    ACTIVE = "active"
    DEACTIVATED = "deactivated"

    CHOICES = [
        (ACTIVE, "Active"),
        (DEACTIVATED, "Deactivated"),
    ]


class Facility(models.Model):
    """A rentable facility listed by a service provider"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    facility_type = models.CharField(max_length=30, choices=FacilityType.choices())
    name = models.CharField(max_length=200)
    description = models.TextField()
    images = models.JSONField(default=list, blank=True)  # stored image URLs
    video_link = models.CharField(max_length=500, blank=True, default="")

    # [{"name": "Monthly", "price": 5000, "duration": "Monthly"}, ...]
    rental_plans = models.JSONField(default=list, blank=True)
    # Type specific fields as they appear in the payload (totalSeats, equipment, areaDetails)
    details = models.JSONField(default=dict, blank=True)

    # Lowest plan price, for filtering (never shown as-is)
    starting_price = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True, db_index=True
    )

    status = models.CharField(
        max_length=20, choices=FacilityStatus.CHOICES, default=FacilityStatus.ACTIVE
    )

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="facilities"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def save(self, *args, **kwargs):
        """Keep starting_price in step with the rental plans"""
        prices = [
            Decimal(str(plan["price"]))
            for plan in self.rental_plans
            if plan.get("price") is not None
        ]
        self.starting_price = min(prices) if prices else None
        super().save(*args, **kwargs)

    def deactivate(self):
        self.status = FacilityStatus.DEACTIVATED
        self.save()

    def to_payload(self):
        """The listing as the API shapes it"""
        payload = {
            "type": self.facility_type,
            "name": self.name,
            "description": self.description,
            "images": list(self.images),
            "videoLink": self.video_link,
            "rentalPlans": list(self.rental_plans),
        }
        payload.update(self.details)
        return payload

    def to_summary(self):
        return {
            "id": str(self.id),
            "type": self.facility_type,
            "name": self.name,
            "status": self.status,
            "starting_price": str(self.starting_price) if self.starting_price is not None else None,
            "image": self.images[0] if self.images else None,
        }

    def __str__(self):
        status_display = dict(FacilityStatus.CHOICES).get(self.status, self.status)
        return f"{self.name} ({status_display})"

    class Meta:
        ordering = ["-created_at"]
        verbose_name_plural = "facilities"


class FacilityImage(models.Model):
    """An image stored for a user by the upload endpoint"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    filename = models.CharField(max_length=255, unique=True)
    url = models.CharField(max_length=500, db_index=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="facility_images"
    )
    uploaded_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.filename} for {self.user.email}"

    class Meta:
        ordering = ["uploaded_at"]
