"""Draft validation: schema field errors plus the form-level rules"""

import re
from dataclasses import dataclass, field

from pydantic import ValidationError
from pydantic.alias_generators import to_snake

from .schemas import PLAN_PRICE_FIELDS, FacilityDraft, RentalPlanName, get_draft_schema

ROOT = "root"
INVALID_FIELDS_MESSAGE = "Please correct the highlighted fields"
NO_IMAGES_MESSAGE = "Please upload at least one image"
NO_PLAN_MESSAGE = "Please select at least one rental plan"
MISSING_RENT_MESSAGE = "Please provide rent values for all selected rental plans"


@dataclass
class ValidationResult:
    """Outcome of validating one draft"""

    draft: FacilityDraft | None = None
    field_errors: dict = field(default_factory=dict)
    root_errors: list = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.draft is not None and not self.field_errors and not self.root_errors

    @property
    def errors(self) -> dict:
        """Field errors plus the root summary, keyed like the form fields"""
        if self.is_valid:
            return {}
        errors = dict(self.field_errors)
        errors[ROOT] = self.root_errors[0] if self.root_errors else INVALID_FIELDS_MESSAGE
        return errors


def error_path(loc) -> str:
    """('equipment', 0, 'labName') -> 'equipment.0.lab_name'"""
    return ".".join(to_snake(part) if isinstance(part, str) else str(part) for part in loc)


def field_errors_from(exc: ValidationError, messages=None) -> dict:
    """Collapse a pydantic error list to one message per field path"""
    messages = messages or {}
    errors = {}
    for error in exc.errors():
        path = error_path(error["loc"]) or ROOT
        pattern = re.sub(r"\.\d+(?=\.|$)", ".*", path)
        errors.setdefault(path, messages.get(pattern, error["msg"]))
    return errors


def to_number(value):
    """Best-effort float for raw form input; None when blank or not numeric"""
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def complete_rows(values, name, row_model) -> list:
    rows = []
    for raw in values.get(name) or []:
        try:
            row = row_model.model_validate(raw)
        except ValidationError:
            continue
        if row.is_complete():
            rows.append(row)
    return rows


# Form-level rules, checked in this order. Each returns a message or None.


def require_images(schema, values):
    if not values.get("images"):
        return NO_IMAGES_MESSAGE
    return None


def require_complete_rows(schema, values):
    for name, row_model in schema.repeatable.items():
        if not complete_rows(values, name, row_model):
            return schema.rows_message
    return None


def require_rental_plan(schema, values):
    if not values.get("selected_rental_plans"):
        return NO_PLAN_MESSAGE
    return None


def require_plan_prices(schema, values):
    for plan in values.get("selected_rental_plans") or []:
        try:
            price_field = PLAN_PRICE_FIELDS[RentalPlanName(plan)]
        except ValueError:
            return MISSING_RENT_MESSAGE
        price = to_number(values.get(price_field))
        if price is None or price <= 0:
            return MISSING_RENT_MESSAGE
    return None


ROOT_RULES = (require_images, require_complete_rows, require_rental_plan, require_plan_prices)


def check_seat_counts(values) -> dict:
    total = to_number(values.get("total_seats"))
    available = to_number(values.get("available_seats"))
    if total is not None and total <= 0:
        return {"total_seats": "Total seats must be greater than 0"}
    if total is not None and available is not None and available > total:
        return {"available_seats": "Available seats cannot exceed total seats"}
    return {}


# Cross-field rules that report on a specific field
FIELD_RULES = {
    "coworking-spaces": (check_seat_counts,),
}


def validate_draft(facility_type, values) -> ValidationResult:
    """Validate raw form values for one listing kind. Never mutates `values`."""
    schema = get_draft_schema(facility_type)
    result = ValidationResult()

    try:
        result.draft = schema.model_validate(values)
    except ValidationError as exc:
        result.field_errors = field_errors_from(exc, schema.messages)

    # Cross-field messages replace the schema's for the same field
    for rule in FIELD_RULES.get(schema.facility_type.value, ()):
        result.field_errors.update(rule(values))

    for rule in ROOT_RULES:
        message = rule(schema, values)
        if message:
            result.root_errors.append(message)

    return result
