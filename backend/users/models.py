"""User models for the facility listings project"""

import uuid

from django.conf import settings
from django.contrib.auth.models import AbstractUser, UserManager as BaseUserManager
from django.db import models
from django.urls import reverse


class UserType:
    """Account roles"""

    STARTUP = "startup"
    SERVICE_PROVIDER = "service-provider"

    CHOICES = [
        (STARTUP, "Startup"),
        (SERVICE_PROVIDER, "Service Provider"),
    ]


class UserManager(BaseUserManager):
    """Custom user manager that uses email instead of username"""

    def create_user(self, email, password=None, **extra_fields):
        """Create and save a regular user"""
        if not email:
            raise ValueError("Email is required")
        email = self.normalize_email(email)
        extra_fields.setdefault("username", email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Create and save a superuser"""
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("username", email)
        return self.create_user(email, password, **extra_fields)


class User(AbstractUser):
    """Custom user model"""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    first_name = models.CharField(max_length=50)
    last_name = models.CharField(max_length=50)
    email = models.EmailField(unique=True)
    phone = models.CharField(max_length=20, blank=True, null=True)
    user_type = models.CharField(
        max_length=20, choices=UserType.CHOICES, default=UserType.SERVICE_PROVIDER
    )
    created_at = models.DateTimeField(auto_now_add=True)

    # Django requires username field, we'll use email
    username = models.CharField(max_length=150, unique=True)

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["first_name", "last_name"]

    objects = UserManager()

    def save(self, *args, **kwargs):
        """Auto-set username to email"""
        if not self.username:
            self.username = self.email
        super().save(*args, **kwargs)

    def can_create_listing(self):
        """Only service providers list facilities"""
        return self.user_type == UserType.SERVICE_PROVIDER

    def get_dashboard_url(self):
        """Where to land after signing in"""
        if self.user_type == UserType.STARTUP:
            return settings.STARTUP_DASHBOARD_URL
        return reverse("dashboard")

    def __str__(self):
        return f"{self.first_name} {self.last_name}"
