from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from classifieds.permissions import IsUserAccess
from classifieds.serializers.listing_serializers import CategorySerializer
from classifieds.services.analytics_service import AnalyticsService
from classifieds.services.category_service import CategoryService


class ListCategoriesAPI(APIView):
    permission_classes = [AllowAny]

    @swagger_auto_schema(
        operation_description="Active categories with their number of published listings.",
        responses={200: CategorySerializer(many=True)},
    )
    def get(self, request):
        categories = CategoryService.active_categories()
        return Response(
            {
                "message": "Categories retrieved successfully",
                "data": CategorySerializer(categories, many=True).data,
            },
            status=status.HTTP_200_OK,
        )


class CategoryDetailAPI(APIView):
    permission_classes = [AllowAny]

    @swagger_auto_schema(
        operation_description="A single active category by slug.",
        responses={200: CategorySerializer, 404: "Category not found"},
    )
    def get(self, request, slug):
        category = CategoryService.get_by_slug(slug)
        if category is None:
            return Response(
                {"error": "Category not found"}, status=status.HTTP_404_NOT_FOUND
            )
        return Response(
            {
                "message": "Category retrieved successfully",
                "data": CategorySerializer(category).data,
            },
            status=status.HTTP_200_OK,
        )


class DashboardAPI(APIView):
    """Listing counts and activity for the signed-in user."""

    permission_classes = [IsUserAccess]

    @swagger_auto_schema(
        operation_description="Dashboard statistics of the signed-in user.",
        responses={200: "Dashboard statistics"},
    )
    def get(self, request):
        stats = AnalyticsService.dashboard_stats(request.user_id)
        stats["two_factor_enabled"] = request.user.two_factor_enabled
        return Response(
            {"message": "Dashboard retrieved successfully", "data": stats},
            status=status.HTTP_200_OK,
        )
