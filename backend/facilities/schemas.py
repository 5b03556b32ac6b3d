"""Pydantic schemas for facility listings

Draft schemas describe what a form must hold before it can be submitted.
Payload schemas describe what the listing API accepts. Field names are
snake_case in Python and camelCase on the wire.
"""

from enum import Enum
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class FacilityType(str, Enum):
    """Listing kinds, valued with the API's `type` discriminator"""

    COWORKING_SPACES = "coworking-spaces"
    BIO_ALLIED_LABS = "bio-allied-labs"
    RAW_SPACE_LAB = "raw-space-lab"

    @classmethod
    def choices(cls):
        return [
            (cls.COWORKING_SPACES.value, "Coworking Spaces"),
            (cls.BIO_ALLIED_LABS.value, "Bio Allied Labs"),
            (cls.RAW_SPACE_LAB.value, "Raw Space Lab"),
        ]


class RentalPlanName(str, Enum):
    ANNUAL = "Annual"
    MONTHLY = "Monthly"
    WEEKLY = "Weekly"
    ONE_DAY = "One Day (24 Hours)"


# Each rental plan is priced by exactly one draft field
PLAN_PRICE_FIELDS = {
    RentalPlanName.ANNUAL: "rent_per_year",
    RentalPlanName.MONTHLY: "rent_per_month",
    RentalPlanName.WEEKLY: "rent_per_week",
    RentalPlanName.ONE_DAY: "day_pass_rent",
}


class AreaType(str, Enum):
    COVERED = "Covered"
    UNCOVERED = "Uncovered"


class Furnishing(str, Enum):
    FURNISHED = "Furnished"
    NOT_FURNISHED = "Not Furnished"


class Customisation(str, Enum):
    OPEN = "Open to Customisation"
    FIXED = "Cannot be Customised"


def as_number(value):
    """Render whole floats as ints so prices serialise as 5000, not 5000.0"""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class WireModel(BaseModel):
    """Accepts both snake_case and camelCase keys, dumps camelCase by alias"""

    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# Repeatable rows


class EquipmentRow(WireModel):
    """One piece of lab equipment"""

    lab_name: str = ""
    equipment_name: str = ""
    capacity_and_make: str = ""

    def is_complete(self) -> bool:
        return all(
            value.strip()
            for value in (self.lab_name, self.equipment_name, self.capacity_and_make)
        )

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)


class AreaDetailRow(WireModel):
    """One block of raw space"""

    area: float = Field(default=0, ge=0)
    type: AreaType = AreaType.COVERED
    furnishing: Furnishing = Furnishing.NOT_FURNISHED
    customisation: Customisation = Customisation.OPEN

    def is_complete(self) -> bool:
        return self.area > 0

    def to_payload(self) -> dict:
        payload = self.model_dump(by_alias=True, mode="json")
        payload["area"] = as_number(float(self.area))
        return payload


# Draft schemas (form state at submit time)


class FacilityDraft(WireModel):
    """Fields shared by every listing form"""

    facility_type: ClassVar[FacilityType]
    # Repeatable row collections: field name -> row model
    repeatable: ClassVar[dict] = {}
    # Shown when no complete row is present in a repeatable collection
    rows_message: ClassVar[str] = ""
    # Field path (row indexes as "*") -> message shown for any error there
    messages: ClassVar[dict] = {
        "name": "Name is required",
        "images": "At least one image is required",
        "video_link": "Video link must be text",
        "selected_rental_plans": "At least one rental plan is required",
        "rent_per_year": "Rent must be greater than 0",
        "rent_per_month": "Rent must be greater than 0",
        "rent_per_week": "Rent must be greater than 0",
        "day_pass_rent": "Rent must be greater than 0",
    }

    name: str = Field(min_length=1)
    description: str = ""
    images: list[str] = Field(min_length=1)
    video_link: str | None = None
    selected_rental_plans: list[RentalPlanName] = Field(min_length=1)
    rent_per_year: float | None = Field(default=None, gt=0)
    rent_per_month: float | None = Field(default=None, gt=0)
    rent_per_week: float | None = Field(default=None, gt=0)
    day_pass_rent: float | None = Field(default=None, gt=0)

    @classmethod
    def initial_values(cls) -> dict:
        """Values of an empty form, JSON serialisable"""
        values = {
            "name": "",
            "description": "",
            "images": [],
            "video_link": "",
            "selected_rental_plans": [],
        }
        values.update({field: None for field in PLAN_PRICE_FIELDS.values()})
        for name, row_model in cls.repeatable.items():
            values[name] = [row_model().model_dump(mode="json")]
        return values

    def price_for(self, plan: RentalPlanName):
        return getattr(self, PLAN_PRICE_FIELDS[plan])

    def extra_payload(self) -> dict:
        """Type specific payload fields other than the repeatable rows"""
        return {}


class CoworkingSpaceDraft(FacilityDraft):
    facility_type = FacilityType.COWORKING_SPACES
    messages = {
        **FacilityDraft.messages,
        "total_seats": "Must have at least 1 seat",
        "available_seats": "Available seats cannot be negative",
    }

    total_seats: int = Field(ge=1)
    available_seats: int = Field(ge=0)

    @classmethod
    def initial_values(cls) -> dict:
        values = super().initial_values()
        values.update(total_seats=0, available_seats=0)
        return values

    def extra_payload(self) -> dict:
        return {
            "totalSeats": self.total_seats,
            "availableSeats": self.available_seats,
        }


class BioAlliedLabsDraft(FacilityDraft):
    facility_type = FacilityType.BIO_ALLIED_LABS
    repeatable = {"equipment": EquipmentRow}
    rows_message = "Please add at least one equipment with all fields filled"
    messages = {
        **FacilityDraft.messages,
        "equipment": "At least one equipment item is required",
    }

    equipment: list[EquipmentRow] = Field(min_length=1)

    def extra_payload(self) -> dict:
        # Raw rent fields travel alongside rentalPlans for this listing kind
        return {
            to_camel(field): as_number(getattr(self, field))
            for field in PLAN_PRICE_FIELDS.values()
        }


class RawSpaceLabDraft(FacilityDraft):
    facility_type = FacilityType.RAW_SPACE_LAB
    repeatable = {"area_details": AreaDetailRow}
    rows_message = "Please add at least one area detail with all fields filled"
    messages = {
        **FacilityDraft.messages,
        "area_details": "At least one area detail is required",
        "area_details.*.area": "Area must be a number, 0 or more",
    }

    area_details: list[AreaDetailRow] = Field(min_length=1)


DRAFT_SCHEMAS = {
    schema.facility_type: schema
    for schema in (CoworkingSpaceDraft, BioAlliedLabsDraft, RawSpaceLabDraft)
}


def get_draft_schema(facility_type) -> type[FacilityDraft]:
    """Look up the draft schema for a listing kind (raises ValueError if unknown)"""
    return DRAFT_SCHEMAS[FacilityType(facility_type)]


# Payload schemas (what the listing API accepts)


class RentalPlan(WireModel):
    name: RentalPlanName
    price: float = Field(gt=0)
    duration: str


class FacilityPayloadBase(WireModel):
    name: str = Field(min_length=1)
    description: str = ""
    images: list[str] = Field(min_length=1)
    video_link: str = ""
    rental_plans: list[RentalPlan] = Field(min_length=1)

    def details(self) -> dict:
        """Type specific fields, stored as they appear on the wire"""
        return {}


class CoworkingSpacePayload(FacilityPayloadBase):
    type: Literal["coworking-spaces"]
    total_seats: int = Field(ge=1)
    available_seats: int = Field(ge=0)

    @model_validator(mode="after")
    def check_seat_counts(self):
        if self.available_seats > self.total_seats:
            raise ValueError("Available seats cannot exceed total seats")
        return self

    def details(self) -> dict:
        return {"totalSeats": self.total_seats, "availableSeats": self.available_seats}


class BioAlliedLabsPayload(FacilityPayloadBase):
    type: Literal["bio-allied-labs"]
    equipment: list[EquipmentRow] = Field(min_length=1)

    def details(self) -> dict:
        return {"equipment": [row.to_payload() for row in self.equipment]}


class RawSpaceLabPayload(FacilityPayloadBase):
    type: Literal["raw-space-lab"]
    area_details: list[AreaDetailRow] = Field(min_length=1)

    def details(self) -> dict:
        return {"areaDetails": [row.to_payload() for row in self.area_details]}


PAYLOAD_SCHEMAS = {
    FacilityType.COWORKING_SPACES: CoworkingSpacePayload,
    FacilityType.BIO_ALLIED_LABS: BioAlliedLabsPayload,
    FacilityType.RAW_SPACE_LAB: RawSpaceLabPayload,
}


def get_payload_schema(facility_type) -> type[FacilityPayloadBase]:
    return PAYLOAD_SCHEMAS[FacilityType(facility_type)]
