"""Test sign-in views"""

import pytest
from django.urls import reverse

from users.views import BAD_PASSWORD_MESSAGE, NO_ACCOUNT_MESSAGE


def login(client, email, password, query=""):
    return client.post(
        reverse("login") + query,
        {"email": email, "password": password},
        content_type="application/json",
    )


@pytest.mark.django_db
class TestLogin:
    """Test user login"""

    def test_service_provider_lands_on_dashboard(self, client, test_user):
        """Service providers go to the listing dashboard"""
        response = login(client, "test@example.com", "testpass123")
        assert response.status_code == 200
        assert response.json() == {"success": True, "redirect": reverse("dashboard")}
        assert "_auth_user_id" in client.session

    def test_startup_lands_on_startup_dashboard(self, client, startup_user, settings):
        response = login(client, "startup@example.com", "testpass123")
        assert response.json()["redirect"] == settings.STARTUP_DASHBOARD_URL

    def test_from_parameter_wins(self, client, test_user):
        """A safe return path overrides the role dashboard"""
        response = login(client, "test@example.com", "testpass123", "?from=/facilities/new/raw-space-lab/")
        assert response.json()["redirect"] == "/facilities/new/raw-space-lab/"

    def test_external_from_is_ignored(self, client, test_user):
        """Open redirects are refused"""
        response = login(client, "test@example.com", "testpass123", "?from=https://evil.example.com/")
        assert response.json()["redirect"] == reverse("dashboard")

    def test_wrong_password(self, client, test_user):
        response = login(client, "test@example.com", "wrongpass")
        assert response.status_code == 400
        assert response.json()["errors"]["root"] == BAD_PASSWORD_MESSAGE
        assert "_auth_user_id" not in client.session

    def test_unknown_email(self, client, db):
        response = login(client, "nobody@example.com", "whatever")
        assert response.status_code == 400
        assert response.json()["errors"]["root"] == NO_ACCOUNT_MESSAGE

    def test_missing_fields(self, client, db):
        response = login(client, "not-an-email", "")
        assert response.status_code == 400
        errors = response.json()["errors"]
        assert errors["email"] == "Enter a valid email address"
        assert errors["password"] == "Password is required"

    def test_form_encoded_login(self, client, test_user):
        """Plain form posts are accepted"""
        response = client.post(
            reverse("login"), {"email": "test@example.com", "password": "testpass123"}
        )
        assert response.json()["success"] is True

    def test_login_is_rate_limited(self, client, test_user):
        """Repeated attempts from one address are blocked"""
        for _ in range(10):
            login(client, "test@example.com", "wrongpass")
        response = login(client, "test@example.com", "testpass123")
        assert response.status_code == 403

    def test_login_requires_post(self, client, db):
        response = client.get(reverse("login"))
        assert response.status_code == 405


@pytest.mark.django_db
class TestLogout:
    """Test user logout"""

    def test_logout(self, client, logged_in_user):
        response = client.post(reverse("logout"))
        assert response.status_code == 200
        assert "_auth_user_id" not in client.session
