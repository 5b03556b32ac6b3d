"""The create/update listing operation"""

import logging

from django.db import DatabaseError
from pydantic import ValidationError

from .models import Facility, FacilityImage
from .schemas import as_number, get_payload_schema
from .submission import SubmissionError
from .utils import delete_photo_file
from .validation import field_errors_from

logger = logging.getLogger(__name__)


def parse_payload(payload):
    """Validate a listing payload against the schema its `type` names"""
    if not isinstance(payload, dict):
        raise SubmissionError("Listing payload must be an object")
    try:
        schema = get_payload_schema(payload.get("type"))
    except ValueError:
        raise SubmissionError("Unknown listing type", errors={"type": "Unknown listing type"}) from None
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise SubmissionError("Invalid listing payload", errors=field_errors_from(exc)) from exc


def save_facility(payload, user, facility=None):
    """Create a facility for `user`, or update `facility` in place"""
    data = parse_payload(payload)

    if facility is None:
        facility = Facility(user=user)
    elif facility.facility_type != data.type:
        raise SubmissionError("Listing type cannot be changed", errors={"type": "Listing type cannot be changed"})

    facility.facility_type = data.type
    facility.name = data.name
    facility.description = data.description
    facility.images = list(data.images)
    facility.video_link = data.video_link
    facility.rental_plans = [
        {"name": plan.name.value, "price": as_number(plan.price), "duration": plan.duration}
        for plan in data.rental_plans
    ]
    facility.details = data.details()

    try:
        facility.save()
    except DatabaseError as exc:
        logger.exception("Could not save facility %s", facility.id)
        raise SubmissionError() from exc

    logger.info("Saved %s facility %s for user %s", facility.facility_type, facility.id, user.pk)
    return facility


def release_images(urls, user):
    """Delete stored files behind `urls` that `user` uploaded and no facility still shows"""
    removed = []
    for image in FacilityImage.objects.filter(user=user, url__in=list(urls)):
        still_shown = any(
            image.url in facility.images
            for facility in Facility.objects.filter(images__icontains=image.url)
        )
        if still_shown:
            continue
        delete_photo_file(image.filename)
        image.delete()
        removed.append(image.filename)
    return removed
