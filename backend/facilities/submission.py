"""Turn a validated draft into a listing payload and hand it to the listing API"""

import logging

from pydantic.alias_generators import to_camel

from .schemas import FacilityDraft, as_number

logger = logging.getLogger(__name__)

SUBMIT_FAILED_MESSAGE = "Failed to submit form. Please try again."


class SubmissionError(Exception):
    """The listing API rejected a payload or could not be reached"""

    def __init__(self, message=SUBMIT_FAILED_MESSAGE, errors=None):
        super().__init__(message)
        self.message = message
        self.errors = errors or {}


class SubmissionInProgress(RuntimeError):
    """A second submit was attempted while one is still running"""


def rental_plans_for(draft: FacilityDraft) -> list:
    """One {name, price, duration} entry per selected plan, in selection order"""
    return [
        {
            "name": plan.value,
            "price": as_number(draft.price_for(plan) or 0),
            "duration": plan.value,
        }
        for plan in draft.selected_rental_plans
    ]


def build_payload(draft: FacilityDraft) -> dict:
    """Assemble the `type`-tagged payload, dropping incomplete rows"""
    payload = {
        "type": draft.facility_type.value,
        "name": draft.name,
        "description": draft.description,
        "images": list(draft.images),
        "videoLink": draft.video_link or "",
    }
    for name in draft.repeatable:
        rows = [row for row in getattr(draft, name) if row.is_complete()]
        payload[to_camel(name)] = [row.to_payload() for row in rows]
    payload["rentalPlans"] = rental_plans_for(draft)
    payload.update(draft.extra_payload())
    return payload


class SubmissionAdapter:
    """Calls the create/update listing operation with a built payload

    `submitter` is any callable taking the payload dict. It returns whatever
    the listing API returns and raises SubmissionError on rejection.
    """

    def __init__(self, submitter=None):
        self.submitter = submitter

    def submit(self, draft: FacilityDraft):
        if self.submitter is None:
            raise SubmissionError("No listing service configured")
        payload = build_payload(draft)
        logger.debug("Submitting %s payload: %s", payload["type"], payload)
        result = self.submitter(payload)
        return payload, result
