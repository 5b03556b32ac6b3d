"""Form controller for facility listing drafts

Holds the editable values of one listing form, per-field errors and the
submission state machine:

    idle -> validating -> idle (errors)
                       -> submitting -> idle (reset) | idle (root error)
"""

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum

from pydantic.alias_generators import to_snake

from .records import RecordArrayEditor
from .schemas import PLAN_PRICE_FIELDS, FacilityType, RentalPlanName, get_draft_schema
from .submission import (
    SUBMIT_FAILED_MESSAGE,
    SubmissionAdapter,
    SubmissionError,
    SubmissionInProgress,
)
from .validation import ROOT, validate_draft

logger = logging.getLogger(__name__)

PLANS_FIELD = "selected_rental_plans"


class SubmissionState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"


class InvalidFieldPath(ValueError):
    """A field path that does not exist in the form"""


@dataclass
class SubmissionOutcome:
    success: bool
    payload: dict | None = None
    errors: dict = field(default_factory=dict)
    result: object = None


def _segments(path):
    if not isinstance(path, str) or not path:
        raise InvalidFieldPath(path)
    return [int(part) if part.isdigit() else part for part in path.split(".")]


def _snake_keys(value):
    if isinstance(value, dict):
        return {to_snake(key): _snake_keys(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_snake_keys(item) for item in value]
    return value


def values_from_payload(payload):
    """Form values for editing a listing, from its API payload"""
    plans = payload.get("rentalPlans") or []
    values = {
        key: value
        for key, value in _snake_keys(payload).items()
        if key not in ("type", "rental_plans")
    }
    values[PLANS_FIELD] = [plan["name"] for plan in plans]
    for plan in plans:
        price_field = PLAN_PRICE_FIELDS[RentalPlanName(plan["name"])]
        values[price_field] = plan.get("price")
    return values


class FacilityFormController:
    """Editable state of one listing form"""

    def __init__(self, facility_type, initial=None, submitter=None, facility_id=None, row_keys=None):
        self.facility_type = FacilityType(facility_type)
        self.schema = get_draft_schema(self.facility_type)
        self.values = self.schema.initial_values()
        if initial:
            for key, value in _snake_keys(initial).items():
                if key in self.values:
                    self.values[key] = copy.deepcopy(value)
        self.errors = {}
        self.state = SubmissionState.IDLE
        self.facility_id = facility_id
        self.adapter = SubmissionAdapter(submitter)
        row_keys = row_keys or {}
        self.editors = {
            name: RecordArrayEditor(self, name, row_model, keys=row_keys.get(name))
            for name, row_model in self.schema.repeatable.items()
        }

    @classmethod
    def from_facility(cls, facility, submitter=None):
        """Start an edit draft pre-populated from a saved facility"""
        return cls(
            facility.facility_type,
            initial=values_from_payload(facility.to_payload()),
            submitter=submitter,
            facility_id=str(facility.id),
        )

    @classmethod
    def from_state(cls, state, submitter=None):
        controller = cls(
            state["type"],
            initial=state.get("values"),
            submitter=submitter,
            facility_id=state.get("facility_id"),
            row_keys=state.get("row_keys"),
        )
        controller.errors = dict(state.get("errors") or {})
        controller.state = SubmissionState(state.get("state") or SubmissionState.IDLE.value)
        return controller

    def to_state(self):
        """JSON-serialisable state, for keeping a draft in the session"""
        return {
            "type": self.facility_type.value,
            "values": copy.deepcopy(self.values),
            "errors": dict(self.errors),
            "row_keys": {name: list(editor.keys) for name, editor in self.editors.items()},
            "facility_id": self.facility_id,
            "state": self.state.value,
        }

    def snapshot(self):
        """State plus the derived parts a client renders from"""
        state = self.to_state()
        state.update(
            visible_fields=self.visible_fields(),
            can_submit=self.can_submit,
        )
        return state

    def use_submitter(self, submitter):
        self.adapter = SubmissionAdapter(submitter)

    # Field access

    def watch(self, path):
        """Current value at a dotted path, None when absent"""
        value = self.values
        for part in _segments(path):
            try:
                value = value[part]
            except (KeyError, IndexError, TypeError):
                return None
        return value

    def set_field(self, path, value):
        """Overwrite the value at `path` and clear any error recorded there"""
        parts = _segments(path)
        container = self.values
        try:
            for part in parts[:-1]:
                container = container[part]
        except (KeyError, IndexError, TypeError):
            raise InvalidFieldPath(path) from None

        last = parts[-1]
        if isinstance(container, dict):
            if last not in container:
                raise InvalidFieldPath(path)
        elif isinstance(container, list):
            if not isinstance(last, int) or last >= len(container):
                raise InvalidFieldPath(path)
        else:
            raise InvalidFieldPath(path)

        if path == PLANS_FIELD:
            # Form posts send a single checked plan as a plain string
            if isinstance(value, str):
                value = [value] if value else []
            self._clear_deselected_prices(container[last] or [], value or [])

        container[last] = copy.deepcopy(value)
        self._clear_errors(path)

        editor = self.editors.get(parts[0])
        if editor is not None:
            editor.pull()

    def toggle_plan(self, plan, checked):
        """Checkbox handler for one rental plan"""
        plan = RentalPlanName(plan).value
        plans = [p for p in self.values.get(PLANS_FIELD) or [] if p != plan]
        if checked:
            plans.append(plan)
        self.set_field(PLANS_FIELD, plans)

    def visible_fields(self):
        """Price fields shown for the currently selected plans"""
        selected = set(self.values.get(PLANS_FIELD) or [])
        return [
            price_field
            for plan, price_field in PLAN_PRICE_FIELDS.items()
            if plan.value in selected
        ]

    def editor(self, name):
        """Row editor for a repeatable field (KeyError if the form has none)"""
        return self.editors[name]

    def bind_rows(self, name, rows):
        self.values[name] = [dict(row) for row in rows]
        self._clear_errors(name)

    def _clear_deselected_prices(self, old_plans, new_plans):
        # A price for an unselected plan is absent, not invalid
        for plan in set(old_plans) - set(new_plans):
            try:
                price_field = PLAN_PRICE_FIELDS[RentalPlanName(plan)]
            except ValueError:
                continue
            self.values[price_field] = None
            self._clear_errors(price_field)

    def _clear_errors(self, path):
        prefix = path + "."
        for key in [k for k in self.errors if k == path or k.startswith(prefix)]:
            del self.errors[key]

    # Submission

    @property
    def busy(self):
        return self.state is SubmissionState.SUBMITTING

    @property
    def can_submit(self):
        return not self.busy

    def reset(self):
        """Back to an empty form of the same kind"""
        self.values = self.schema.initial_values()
        self.errors = {}
        self.facility_id = None
        for editor in self.editors.values():
            editor.keys = []
            editor.pull()

    def validate_and_submit(self):
        """Validate the whole form; submit and reset on success"""
        if self.busy:
            raise SubmissionInProgress("A submission is already running")

        logger.info("Form submission started: %s", self.facility_type.value)
        self.state = SubmissionState.VALIDATING
        result = validate_draft(self.facility_type, self.values)
        if not result.is_valid:
            self.errors = result.errors
            self.state = SubmissionState.IDLE
            logger.info("Validation failed: %s", self.errors.get(ROOT))
            return SubmissionOutcome(success=False, errors=dict(self.errors))

        self.errors = {}
        self.state = SubmissionState.SUBMITTING
        try:
            payload, response = self.adapter.submit(result.draft)
        except SubmissionError as exc:
            logger.warning("Form submission failed: %s", exc.message)
            self.errors = {ROOT: SUBMIT_FAILED_MESSAGE}
            return SubmissionOutcome(success=False, errors=dict(self.errors))
        finally:
            self.state = SubmissionState.IDLE

        logger.info("Form submission successful: %s", self.facility_type.value)
        self.reset()
        return SubmissionOutcome(success=True, payload=payload, result=response)
