from django.urls import path

from .apis import (
    CreateListingAPI,
    DeleteListingAPI,
    ListingAnalyticsAPI,
    ListingDetailAPI,
    ListListingsAPI,
    MyListingsAPI,
    UpdateListingAPI,
)

urlpatterns = [
    path("", ListListingsAPI.as_view(), name="list_listings"),
    path("mine/", MyListingsAPI.as_view(), name="my_listings"),
    path("create/", CreateListingAPI.as_view(), name="create_listing"),
    path("<int:listing_id>/", ListingDetailAPI.as_view(), name="listing_detail"),
    path(
        "<int:listing_id>/update/", UpdateListingAPI.as_view(), name="update_listing"
    ),
    path(
        "<int:listing_id>/delete/", DeleteListingAPI.as_view(), name="delete_listing"
    ),
    path(
        "<int:listing_id>/analytics/",
        ListingAnalyticsAPI.as_view(),
        name="listing_analytics",
    ),
]
