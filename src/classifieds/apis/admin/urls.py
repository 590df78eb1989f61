from django.urls import path

from classifieds.apis.admin.moderation_api import (
    ApproveListingAPI,
    ModerationQueueAPI,
    RejectListingAPI,
)

urlpatterns = [
    # Moderation
    path(
        "moderation/listings/", ModerationQueueAPI.as_view(), name="moderation_queue"
    ),
    path(
        "moderation/listings/<int:listing_id>/approve/",
        ApproveListingAPI.as_view(),
        name="approve_listing",
    ),
    path(
        "moderation/listings/<int:listing_id>/reject/",
        RejectListingAPI.as_view(),
        name="reject_listing",
    ),
]
