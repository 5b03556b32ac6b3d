"""Test configuration and fixtures for Django"""

import pytest
from django.test import Client

from users.models import User


@pytest.fixture
def client():
    """Django test client"""
    return Client()


@pytest.fixture
def test_user(db):
    """Create a test user"""
    user = User.objects.create_user(
        username="test@example.com",
        email="test@example.com",
        password="testpass123",
        first_name="Test",
        last_name="User",
    )
    return user
