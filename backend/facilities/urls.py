"""URL patterns for facilities app"""

from django.urls import path

from . import views

urlpatterns = [
    # Service provider dashboard
    path("service-provider/dashboard/", views.dashboard, name="dashboard"),
    # Draft editing, one draft per facility type
    path("facilities/new/<slug:facility_type>/", views.draft, name="draft"),
    path(
        "facilities/new/<slug:facility_type>/field/",
        views.draft_set_field,
        name="draft_set_field",
    ),
    path(
        "facilities/new/<slug:facility_type>/plans/",
        views.draft_toggle_plan,
        name="draft_toggle_plan",
    ),
    path(
        "facilities/new/<slug:facility_type>/rows/<slug:name>/add/",
        views.draft_add_row,
        name="draft_add_row",
    ),
    path(
        "facilities/new/<slug:facility_type>/rows/<slug:name>/<int:index>/remove/",
        views.draft_remove_row,
        name="draft_remove_row",
    ),
    path(
        "facilities/new/<slug:facility_type>/images/",
        views.draft_upload_images,
        name="draft_upload_images",
    ),
    path(
        "facilities/new/<slug:facility_type>/submit/",
        views.draft_submit,
        name="draft_submit",
    ),
    # Listing management
    path("facilities/<uuid:facility_id>/edit/", views.edit_facility, name="edit_facility"),
    path("facilities/<uuid:facility_id>/delete/", views.delete_facility, name="delete_facility"),
    path(
        "facilities/<uuid:facility_id>/deactivate/",
        views.deactivate_facility,
        name="deactivate_facility",
    ),
    # Listing API
    path("api/facilities/", views.api_create_facility, name="api_create_facility"),
    path("api/facilities/<uuid:facility_id>/", views.api_facility, name="api_facility"),
]
