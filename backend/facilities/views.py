"""Django views for facility listings

Listing forms are edited as drafts kept in the session. Each endpoint applies
one form action and answers with the draft's current snapshot as JSON.
"""

import json
import logging

from django.conf import settings
from django.contrib.auth.decorators import login_required
from django.core.exceptions import BadRequest
from django.http import Http404, JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_http_methods

from config.decorators import handle_database_errors
from users.decorators import service_provider_required

from .controller import FacilityFormController, InvalidFieldPath
from .models import Facility, FacilityImage, FacilityStatus
from .schemas import FacilityType
from .services import release_images, save_facility
from .submission import SubmissionError, SubmissionInProgress
from .utils import filename_from_url, save_picture

logger = logging.getLogger(__name__)

DRAFTS_SESSION_KEY = "facility_drafts"


def _facility_type_or_404(facility_type):
    try:
        return FacilityType(facility_type)
    except ValueError:
        raise Http404("Unknown facility type") from None


def _read_data(request):
    """JSON body, or form fields for form-encoded posts"""
    if request.content_type == "application/json":
        try:
            data = json.loads(request.body or b"{}")
        except json.JSONDecodeError:
            raise BadRequest("Malformed JSON body") from None
        if not isinstance(data, dict):
            raise BadRequest("Expected a JSON object")
        return data
    return request.POST.dict()


def _load_draft(request, facility_type):
    state = request.session.get(DRAFTS_SESSION_KEY, {}).get(facility_type.value)
    if state:
        return FacilityFormController.from_state(state)
    return FacilityFormController(facility_type)


def _store_draft(request, controller):
    drafts = request.session.get(DRAFTS_SESSION_KEY, {})
    drafts[controller.facility_type.value] = controller.to_state()
    request.session[DRAFTS_SESSION_KEY] = drafts


def _draft_response(controller, status=200, **extra):
    body = {"success": status < 400, **extra, "draft": controller.snapshot()}
    return JsonResponse(body, status=status)


def _submitter_for(request, controller):
    """The create/update listing call for the signed-in user"""

    def submit(payload):
        # Other requests for this session must see the draft as submitting
        _store_draft(request, controller)
        request.session.save()

        facility = None
        if controller.facility_id:
            facility = Facility.objects.filter(id=controller.facility_id, user=request.user).first()
            if facility is None:
                raise SubmissionError("Listing not found")
        return save_facility(payload, request.user, facility=facility)

    return submit


# Dashboard
@login_required
@service_provider_required
@handle_database_errors
def dashboard(request):
    """The user's facilities grouped by status"""
    facilities = Facility.objects.filter(user=request.user).order_by("-created_at")
    grouped = {status: [] for status, _ in FacilityStatus.CHOICES}
    for facility in facilities:
        grouped.setdefault(facility.status, []).append(facility.to_summary())
    return JsonResponse({"success": True, "facilities": grouped})


# Draft editing
@login_required
@service_provider_required
@require_http_methods(["GET", "POST"])
def draft(request, facility_type):
    """GET the current draft, POST to start a fresh one"""
    facility_type = _facility_type_or_404(facility_type)
    if request.method == "POST":
        controller = FacilityFormController(facility_type)
        _store_draft(request, controller)
    else:
        controller = _load_draft(request, facility_type)
    return _draft_response(controller)


@login_required
@service_provider_required
@require_http_methods(["POST"])
def draft_set_field(request, facility_type):
    """Set one field: {"path": "equipment.0.lab_name", "value": "..."}"""
    controller = _load_draft(request, _facility_type_or_404(facility_type))
    data = _read_data(request)
    try:
        controller.set_field(data.get("path"), data.get("value"))
    except InvalidFieldPath:
        return _draft_response(controller, status=400, error=f"Unknown field: {data.get('path')}")
    _store_draft(request, controller)
    return _draft_response(controller)


@login_required
@service_provider_required
@require_http_methods(["POST"])
def draft_toggle_plan(request, facility_type):
    """Check or uncheck a rental plan: {"plan": "Monthly", "checked": true}"""
    controller = _load_draft(request, _facility_type_or_404(facility_type))
    data = _read_data(request)
    checked = data.get("checked")
    if isinstance(checked, str):
        checked = checked.lower() in ("1", "true", "on")
    try:
        controller.toggle_plan(data.get("plan"), bool(checked))
    except ValueError:
        return _draft_response(controller, status=400, error=f"Unknown rental plan: {data.get('plan')}")
    _store_draft(request, controller)
    return _draft_response(controller)


@login_required
@service_provider_required
@require_http_methods(["POST"])
def draft_add_row(request, facility_type, name):
    """Append a default row to a repeatable field"""
    controller = _load_draft(request, _facility_type_or_404(facility_type))
    try:
        editor = controller.editor(name)
    except KeyError:
        raise Http404("Unknown row collection") from None
    key = editor.add()
    _store_draft(request, controller)
    return _draft_response(controller, key=key)


@login_required
@service_provider_required
@require_http_methods(["POST"])
def draft_remove_row(request, facility_type, name, index):
    """Remove a row; the first row is kept"""
    controller = _load_draft(request, _facility_type_or_404(facility_type))
    try:
        editor = controller.editor(name)
    except KeyError:
        raise Http404("Unknown row collection") from None
    if not editor.can_remove(index):
        return _draft_response(controller, status=400, error="This row cannot be removed")
    editor.remove(index)
    _store_draft(request, controller)
    return _draft_response(controller)


@login_required
@service_provider_required
@require_http_methods(["POST"])
@handle_database_errors
def draft_upload_images(request, facility_type):
    """Store uploaded images and append their URLs to the draft"""
    controller = _load_draft(request, _facility_type_or_404(facility_type))
    images = list(controller.watch("images") or [])
    remaining_slots = settings.MAX_LISTING_IMAGES - len(images)

    rejected = []
    for upload in request.FILES.getlist("images")[:max(remaining_slots, 0)]:
        url = save_picture(upload)
        if url:
            FacilityImage.objects.create(
                filename=filename_from_url(url), url=url, user=request.user
            )
            images.append(url)
        else:
            rejected.append(upload.name)

    controller.set_field("images", images)
    _store_draft(request, controller)
    return _draft_response(controller, rejected=rejected)


@login_required
@service_provider_required
@require_http_methods(["POST"])
def draft_submit(request, facility_type):
    """Validate the draft and submit it to the listing service"""
    controller = _load_draft(request, _facility_type_or_404(facility_type))
    controller.use_submitter(_submitter_for(request, controller))
    try:
        outcome = controller.validate_and_submit()
    except SubmissionInProgress:
        return _draft_response(controller, status=409, error="Submission already in progress")
    _store_draft(request, controller)

    if not outcome.success:
        return _draft_response(controller, status=400, errors=outcome.errors)
    return _draft_response(
        controller,
        status=201,
        facility_id=str(outcome.result.id),
        payload=outcome.payload,
    )


# Listing management
@login_required
@service_provider_required
@require_http_methods(["POST"])
def edit_facility(request, facility_id):
    """Open an edit draft pre-populated from a saved facility"""
    facility = get_object_or_404(Facility, id=facility_id, user=request.user)
    controller = FacilityFormController.from_facility(facility)
    _store_draft(request, controller)
    return _draft_response(controller)


@login_required
@require_http_methods(["POST"])
@handle_database_errors
def delete_facility(request, facility_id):
    """Delete facility and the images this user uploaded for it"""
    facility = get_object_or_404(Facility, id=facility_id, user=request.user)
    images = list(facility.images)
    facility.delete()
    release_images(images, request.user)

    return JsonResponse({"success": True, "message": "Listing deleted."})


@login_required
@require_http_methods(["POST"])
@handle_database_errors
def deactivate_facility(request, facility_id):
    """Deactivate facility"""
    facility = get_object_or_404(Facility, id=facility_id, user=request.user)
    facility.deactivate()
    return JsonResponse({"success": True, "message": "Listing deactivated."})


# Listing API
@login_required
@service_provider_required
@require_http_methods(["POST"])
@handle_database_errors
def api_create_facility(request):
    """Create a facility from a listing payload"""
    try:
        facility = save_facility(_read_data(request), request.user)
    except SubmissionError as e:
        return JsonResponse(
            {"success": False, "error": e.message, "errors": e.errors}, status=400
        )
    return JsonResponse(
        {"success": True, "facility_id": str(facility.id), "facility": facility.to_payload()},
        status=201,
    )


@login_required
@service_provider_required
@require_http_methods(["GET", "POST"])
@handle_database_errors
def api_facility(request, facility_id):
    """GET a facility's payload, POST a payload to update it"""
    facility = get_object_or_404(Facility, id=facility_id, user=request.user)
    if request.method == "POST":
        try:
            facility = save_facility(_read_data(request), request.user, facility=facility)
        except SubmissionError as e:
            return JsonResponse(
                {"success": False, "error": e.message, "errors": e.errors}, status=400
            )
    return JsonResponse(
        {"success": True, "facility_id": str(facility.id), "facility": facility.to_payload()}
    )
