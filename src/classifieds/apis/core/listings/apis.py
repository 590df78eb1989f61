# classifieds/apis/core/listings/apis.py

import logging

from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from classifieds.models import ListingSort
from classifieds.permissions import IsUserAccess
from classifieds.serializers.listing_serializers import (
    ListingSearchSerializer,
    ListingSerializer,
)
from classifieds.services.analytics_service import AnalyticsService
from classifieds.services.favorite_service import FavoriteService
from classifieds.services.listing_service import ListingService
from classifieds.throttling import ListingCreateRateThrottle
from classifiedsutils.log_helpers import get_client_ip

logger = logging.getLogger(__name__)


def serialize_listings(listings, viewer_id=None, many=True):
    """Listing payloads with ``is_favorited`` filled for the viewer."""
    items = listings if many else [listings]
    favorite_ids = FavoriteService.favorite_ids(
        viewer_id, [listing.listing_id for listing in items]
    )
    return ListingSerializer(
        listings, many=many, context={"favorite_ids": favorite_ids}
    ).data


listing_fields = {
    "title": openapi.Schema(type=openapi.TYPE_STRING),
    "description": openapi.Schema(type=openapi.TYPE_STRING),
    "category_id": openapi.Schema(type=openapi.TYPE_INTEGER),
    "price": openapi.Schema(type=openapi.TYPE_NUMBER, description="Optional"),
    "location": openapi.Schema(type=openapi.TYPE_STRING),
    "contact_phone": openapi.Schema(type=openapi.TYPE_STRING),
    "contact_email": openapi.Schema(type=openapi.TYPE_STRING),
}


# ─── Browsing ────────────────────────────────────────────────


class ListListingsAPI(APIView):
    """Public search over approved, active listings."""

    permission_classes = [AllowAny]

    @swagger_auto_schema(
        operation_description="Search approved listings.",
        manual_parameters=[
            openapi.Parameter("category_id", openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
            openapi.Parameter(
                "category", openapi.IN_QUERY, type=openapi.TYPE_STRING,
                description="Category slug",
            ),
            openapi.Parameter("location", openapi.IN_QUERY, type=openapi.TYPE_STRING),
            openapi.Parameter("min_price", openapi.IN_QUERY, type=openapi.TYPE_NUMBER),
            openapi.Parameter("max_price", openapi.IN_QUERY, type=openapi.TYPE_NUMBER),
            openapi.Parameter(
                "search", openapi.IN_QUERY, type=openapi.TYPE_STRING,
                description="Matches title or description",
            ),
            openapi.Parameter(
                "sort_by", openapi.IN_QUERY, type=openapi.TYPE_STRING,
                enum=ListingSort.values(),
            ),
            openapi.Parameter(
                "limit", openapi.IN_QUERY, type=openapi.TYPE_INTEGER,
                description="Page size (default 20, max 100)",
            ),
            openapi.Parameter("offset", openapi.IN_QUERY, type=openapi.TYPE_INTEGER),
        ],
        responses={200: "List of listings", 400: "Invalid query parameters"},
    )
    def get(self, request):
        params = ListingSearchSerializer(data=request.query_params)
        if not params.is_valid():
            return Response(
                {"error": "Invalid query parameters", "errors": params.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )

        listings, total = ListingService.search_listings(**params.validated_data)
        return Response(
            {
                "message": "Listings retrieved successfully",
                "data": serialize_listings(listings, getattr(request, "user_id", None)),
                "pagination": {
                    "total": total,
                    "limit": params.validated_data["limit"],
                    "offset": params.validated_data["offset"],
                },
            },
            status=status.HTTP_200_OK,
        )


class ListingDetailAPI(APIView):
    """
    A single listing. Each successful read counts as a view.
    """

    permission_classes = [AllowAny]

    @swagger_auto_schema(
        operation_description=(
            "Get a listing. Unapproved listings are only visible to their owner."
        ),
        responses={200: ListingSerializer, 404: "Listing not found"},
    )
    def get(self, request, listing_id):
        viewer_id = getattr(request, "user_id", None)
        listing = ListingService.get_visible_listing(listing_id, viewer_id)

        AnalyticsService.record_view(
            listing.listing_id,
            user_agent=request.META.get("HTTP_USER_AGENT", ""),
            ip_address=get_client_ip(request),
            referrer=request.META.get("HTTP_REFERER", ""),
        )
        listing.refresh_from_db(fields=["view_count"])

        return Response(
            {
                "message": "Listing retrieved successfully",
                "data": serialize_listings(listing, viewer_id, many=False),
            },
            status=status.HTTP_200_OK,
        )


class MyListingsAPI(APIView):
    permission_classes = [IsUserAccess]

    @swagger_auto_schema(
        operation_description="All listings of the signed-in user, in any moderation state.",
        responses={200: ListingSerializer(many=True)},
    )
    def get(self, request):
        user_id = getattr(request, "user_id", None)
        listings = list(ListingService.owner_listings(user_id))
        return Response(
            {
                "message": "Listings retrieved successfully",
                "data": serialize_listings(listings, user_id),
            },
            status=status.HTTP_200_OK,
        )


# ─── Owner operations ────────────────────────────────────────


class CreateListingAPI(APIView):
    """
    Submit a new listing.

    The text and the first image are scored by the moderation oracle; the
    listing is published immediately only when both pass.
    """

    permission_classes = [IsUserAccess]
    throttle_classes = [ListingCreateRateThrottle]
    parser_classes = [MultiPartParser, FormParser, JSONParser]

    @swagger_auto_schema(
        operation_description="Create a listing (multipart, up to 10 'images').",
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={
                **listing_fields,
                "category_name": openapi.Schema(
                    type=openapi.TYPE_STRING,
                    description="Category label sent to moderation",
                ),
            },
            required=["title", "description", "category_id", "location"],
        ),
        responses={
            201: "Listing created",
            400: "Validation error",
            401: "Unauthorized",
            429: "Too many submissions",
        },
    )
    def post(self, request):
        user_id = getattr(request, "user_id", None)
        images = request.FILES.getlist("images")
        if hasattr(request.data, "getlist"):
            alt_texts = request.data.getlist("alt_texts")
        else:
            alt_texts = request.data.get("alt_texts") or []
            if not isinstance(alt_texts, list):
                logger.warning(f"Ignoring non-list alt_texts from user {user_id}")
                alt_texts = []

        result = ListingService().submit_listing(
            owner_id=user_id,
            content=request.data,
            images=images,
            alt_texts=alt_texts,
        )

        return Response(
            {
                "message": "Listing created successfully",
                "data": {
                    "listing": serialize_listings(result.listing, user_id, many=False),
                    "moderation": result.moderation_summary(),
                },
            },
            status=status.HTTP_201_CREATED,
        )


class UpdateListingAPI(APIView):
    """
    Edit an owned listing. Any successful edit sends it back to moderation.
    """

    permission_classes = [IsUserAccess]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    @swagger_auto_schema(
        operation_description="Update listing fields; the listing returns to pending.",
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={**listing_fields, "is_active": openapi.Schema(type=openapi.TYPE_BOOLEAN)},
        ),
        responses={200: ListingSerializer, 400: "Validation error", 404: "Listing not found"},
    )
    def put(self, request, listing_id):
        user_id = getattr(request, "user_id", None)
        listing = ListingService().edit_listing(listing_id, user_id, request.data)
        return Response(
            {
                "message": "Listing updated successfully",
                "data": serialize_listings(listing, user_id, many=False),
            },
            status=status.HTTP_200_OK,
        )

    @swagger_auto_schema(
        operation_description="Partially update listing fields; the listing returns to pending.",
        responses={200: ListingSerializer, 400: "Validation error", 404: "Listing not found"},
    )
    def patch(self, request, listing_id):
        return self.put(request, listing_id)


class DeleteListingAPI(APIView):
    permission_classes = [IsUserAccess]

    @swagger_auto_schema(
        operation_description="Delete an owned listing and its images.",
        responses={200: "Deleted", 401: "Unauthorized", 404: "Listing not found"},
    )
    def delete(self, request, listing_id):
        user_id = getattr(request, "user_id", None)
        ListingService().delete_listing(listing_id, user_id)
        return Response({"success": True}, status=status.HTTP_200_OK)


class ListingAnalyticsAPI(APIView):
    permission_classes = [IsUserAccess]

    @swagger_auto_schema(
        operation_description="Daily view counts of an owned listing.",
        manual_parameters=[
            openapi.Parameter(
                "days", openapi.IN_QUERY, type=openapi.TYPE_INTEGER,
                description="Window size in days (1-365, default 30)",
            ),
        ],
        responses={200: "Daily views", 400: "Invalid days", 404: "Listing not found"},
    )
    def get(self, request, listing_id):
        user_id = getattr(request, "user_id", None)
        try:
            days = int(request.query_params.get("days", 30))
        except (TypeError, ValueError):
            days = 0
        if not 1 <= days <= 365:
            return Response(
                {"error": "days must be an integer between 1 and 365."},
                status=status.HTTP_400_BAD_REQUEST,
            )

        views = AnalyticsService.daily_views(listing_id, user_id, days=days)
        return Response(
            {
                "message": "Listing analytics retrieved successfully",
                "data": {"listing_id": listing_id, "days": days, "daily_views": views},
            },
            status=status.HTTP_200_OK,
        )
