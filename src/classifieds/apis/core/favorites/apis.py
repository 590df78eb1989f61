# classifieds/apis/core/favorites/apis.py

from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from classifieds.permissions import IsUserAccess
from classifieds.serializers.listing_serializers import ListingSerializer
from classifieds.services.favorite_service import FavoriteService


class ToggleFavoriteAPI(APIView):
    permission_classes = [IsUserAccess]

    @swagger_auto_schema(
        operation_description="Add the listing to favorites, or remove it if already there.",
        responses={200: "Favorite state", 404: "Listing not found"},
    )
    def post(self, request, listing_id):
        user_id = getattr(request, "user_id", None)
        favorited = FavoriteService.toggle(user_id, listing_id)
        return Response(
            {
                "message": "Added to favorites" if favorited else "Removed from favorites",
                "favorited": favorited,
            },
            status=status.HTTP_200_OK,
        )


class ListFavoritesAPI(APIView):
    permission_classes = [IsUserAccess]

    @swagger_auto_schema(
        operation_description="Favorite listings of the signed-in user.",
        responses={200: ListingSerializer(many=True)},
    )
    def get(self, request):
        user_id = getattr(request, "user_id", None)
        listings = list(FavoriteService.favorite_listings(user_id))
        favorite_ids = {listing.listing_id for listing in listings}
        return Response(
            {
                "message": "Favorites retrieved successfully",
                "data": ListingSerializer(
                    listings, many=True, context={"favorite_ids": favorite_ids}
                ).data,
            },
            status=status.HTTP_200_OK,
        )
