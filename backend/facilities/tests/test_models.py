"""Test facility models"""

from decimal import Decimal

import pytest

from facilities.models import Facility, FacilityStatus


@pytest.mark.django_db
class TestFacilityModel:
    """Test Facility model"""

    def test_create_facility(self, active_facility):
        """Test creating a facility"""
        assert active_facility.name == "Hot Desk Hub"
        assert active_facility.status == FacilityStatus.ACTIVE
        assert active_facility.id is not None
        assert str(active_facility) == "Hot Desk Hub (Active)"

    def test_starting_price_is_lowest_plan(self, active_facility):
        """starting_price tracks the cheapest plan"""
        assert active_facility.starting_price == Decimal("300.00")

    def test_starting_price_empty_without_plans(self, test_user):
        facility = Facility.objects.create(
            user=test_user, facility_type="raw-space-lab", name="Empty", description=""
        )
        assert facility.starting_price is None

    def test_deactivate(self, active_facility):
        """Deactivated facilities keep their data"""
        active_facility.deactivate()
        active_facility.refresh_from_db()
        assert active_facility.status == FacilityStatus.DEACTIVATED
        assert active_facility.name == "Hot Desk Hub"

    def test_to_payload_merges_details(self, active_facility):
        """Type specific fields sit at the payload's top level"""
        payload = active_facility.to_payload()
        assert payload["type"] == "coworking-spaces"
        assert payload["totalSeats"] == 40
        assert payload["videoLink"] == ""
        assert payload["rentalPlans"][0]["name"] == "Monthly"

    def test_to_summary(self, deactivated_facility):
        deactivated_facility.refresh_from_db()
        summary = deactivated_facility.to_summary()
        assert summary["id"] == str(deactivated_facility.id)
        assert summary["status"] == "deactivated"
        assert summary["starting_price"] == "1200000.00"
        assert summary["image"] == "/media/floor3.jpg"

    def test_user_relationship(self, test_user, active_facility, deactivated_facility):
        """Users reach their facilities"""
        assert set(test_user.facilities.all()) == {active_facility, deactivated_facility}

