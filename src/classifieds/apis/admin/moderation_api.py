# classifieds/apis/admin/moderation_api.py

import logging

from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from classifieds.permissions import IsModeratorAccess, IsUserAccess
from classifieds.serializers.listing_serializers import ListingSerializer
from classifieds.services.listing_service import ListingService

logger = logging.getLogger(__name__)

notes_body = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        "notes": openapi.Schema(
            type=openapi.TYPE_STRING, description="Notes explaining the decision"
        ),
    },
)


class ModerationQueueAPI(APIView):
    """
    Listings waiting for a manual decision, oldest first.
    """

    permission_classes = [IsUserAccess, IsModeratorAccess]

    @swagger_auto_schema(
        operation_description="Get pending listings waiting for review.",
        manual_parameters=[
            openapi.Parameter(
                "limit", openapi.IN_QUERY, type=openapi.TYPE_INTEGER,
                description="Maximum number of listings (default 50)",
            ),
        ],
        responses={200: ListingSerializer(many=True), 403: "Moderator access required"},
    )
    def get(self, request):
        try:
            limit = int(request.query_params.get("limit", 50))
        except (TypeError, ValueError):
            limit = 0
        if limit < 1:
            return Response(
                {"error": "limit must be a positive integer."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        listings = ListingService.pending_listings(limit=min(limit, 200))
        return Response(
            {
                "message": "Moderation queue retrieved successfully",
                "data": ListingSerializer(listings, many=True).data,
            },
            status=status.HTTP_200_OK,
        )


class ApproveListingAPI(APIView):
    permission_classes = [IsUserAccess, IsModeratorAccess]

    @swagger_auto_schema(
        operation_description="Publish a listing.",
        request_body=notes_body,
        responses={200: ListingSerializer, 404: "Listing not found"},
    )
    def post(self, request, listing_id):
        listing = ListingService.approve_listing(
            listing_id, request.user_id, notes=request.data.get("notes")
        )
        logger.info(f"Listing {listing_id} approved by moderator {request.user_id}")
        return Response(
            {
                "message": "Listing approved",
                "data": ListingSerializer(listing).data,
            },
            status=status.HTTP_200_OK,
        )


class RejectListingAPI(APIView):
    permission_classes = [IsUserAccess, IsModeratorAccess]

    @swagger_auto_schema(
        operation_description="Reject a listing.",
        request_body=notes_body,
        responses={200: ListingSerializer, 404: "Listing not found"},
    )
    def post(self, request, listing_id):
        listing = ListingService.reject_listing(
            listing_id, request.user_id, notes=request.data.get("notes") or ""
        )
        logger.info(f"Listing {listing_id} rejected by moderator {request.user_id}")
        return Response(
            {
                "message": "Listing rejected",
                "data": ListingSerializer(listing).data,
            },
            status=status.HTTP_200_OK,
        )
