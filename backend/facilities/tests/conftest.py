"""Test configuration and fixtures for facilities app"""

import pytest
from django.test import Client

from facilities.models import Facility, FacilityStatus
from facilities.schemas import BioAlliedLabsDraft, CoworkingSpaceDraft, RawSpaceLabDraft
from users.models import User, UserType


@pytest.fixture
def client():
    """Django test client"""
    return Client()


@pytest.fixture
def test_user(db):
    """Create a service provider"""
    return User.objects.create_user(
        username="provider@example.com",
        email="provider@example.com",
        password="testpass123",
        first_name="Service",
        last_name="Provider",
        user_type=UserType.SERVICE_PROVIDER,
    )


@pytest.fixture
def startup_user(db):
    """Create a startup account (cannot list facilities)"""
    return User.objects.create_user(
        username="startup@example.com",
        email="startup@example.com",
        password="testpass123",
        first_name="Start",
        last_name="Up",
        user_type=UserType.STARTUP,
    )


@pytest.fixture
def logged_in_user(client, test_user):
    """Service provider that's already logged in"""
    client.login(username="provider@example.com", password="testpass123")
    return test_user


@pytest.fixture
def logged_in_startup(client, startup_user):
    """Startup that's already logged in"""
    client.login(username="startup@example.com", password="testpass123")
    return startup_user


@pytest.fixture
def bio_lab_values():
    """A complete Bio Allied Labs draft"""
    values = BioAlliedLabsDraft.initial_values()
    values.update(
        name="Lab A",
        images=["u1"],
        selected_rental_plans=["Monthly"],
        rent_per_month=5000,
        equipment=[{"lab_name": "L1", "equipment_name": "E1", "capacity_and_make": "C1"}],
    )
    return values


@pytest.fixture
def coworking_values():
    """A complete Coworking Spaces draft"""
    values = CoworkingSpaceDraft.initial_values()
    values.update(
        name="Hot Desk Hub",
        description="Open plan desks near the metro",
        images=["https://cdn.example.com/hub.jpg"],
        selected_rental_plans=["Monthly", "One Day (24 Hours)"],
        rent_per_month=4000,
        day_pass_rent=300,
        total_seats=40,
        available_seats=12,
    )
    return values


@pytest.fixture
def raw_space_values():
    """A complete Raw Space Lab draft"""
    values = RawSpaceLabDraft.initial_values()
    values.update(
        name="Shell Floor 3",
        description="Bare shell space for fit-out",
        images=["https://cdn.example.com/floor3.jpg"],
        selected_rental_plans=["Annual"],
        rent_per_year=1200000,
        area_details=[
            {
                "area": 2500,
                "type": "Covered",
                "furnishing": "Not Furnished",
                "customisation": "Open to Customisation",
            }
        ],
    )
    return values


@pytest.fixture
def coworking_payload():
    """Listing API payload for a coworking space"""
    return {
        "type": "coworking-spaces",
        "name": "Hot Desk Hub",
        "description": "Open plan desks near the metro",
        "images": ["https://cdn.example.com/hub.jpg"],
        "videoLink": "",
        "rentalPlans": [
            {"name": "Monthly", "price": 4000, "duration": "Monthly"},
            {"name": "One Day (24 Hours)", "price": 300, "duration": "One Day (24 Hours)"},
        ],
        "totalSeats": 40,
        "availableSeats": 12,
    }


@pytest.fixture
def bio_lab_payload():
    """Listing API payload for a bio allied lab"""
    return {
        "type": "bio-allied-labs",
        "name": "Lab A",
        "description": "",
        "images": ["u1"],
        "videoLink": "",
        "equipment": [{"labName": "L1", "equipmentName": "E1", "capacityAndMake": "C1"}],
        "rentalPlans": [{"name": "Monthly", "price": 5000, "duration": "Monthly"}],
        "rentPerYear": None,
        "rentPerMonth": 5000,
        "rentPerWeek": None,
        "dayPassRent": None,
    }


@pytest.fixture
def active_facility(test_user):
    """A saved, active coworking facility"""
    return Facility.objects.create(
        user=test_user,
        facility_type="coworking-spaces",
        name="Hot Desk Hub",
        description="Open plan desks near the metro",
        images=["/media/hub.jpg"],
        rental_plans=[
            {"name": "Monthly", "price": 4000, "duration": "Monthly"},
            {"name": "One Day (24 Hours)", "price": 300, "duration": "One Day (24 Hours)"},
        ],
        details={"totalSeats": 40, "availableSeats": 12},
        status=FacilityStatus.ACTIVE,
    )


@pytest.fixture
def deactivated_facility(test_user):
    """A saved raw space lab that was taken down"""
    return Facility.objects.create(
        user=test_user,
        facility_type="raw-space-lab",
        name="Shell Floor 3",
        description="Bare shell space",
        images=["/media/floor3.jpg"],
        rental_plans=[{"name": "Annual", "price": 1200000, "duration": "Annual"}],
        details={
            "areaDetails": [
                {
                    "area": 2500,
                    "type": "Covered",
                    "furnishing": "Not Furnished",
                    "customisation": "Open to Customisation",
                }
            ]
        },
        status=FacilityStatus.DEACTIVATED,
    )
