from django.urls import include, path

from classifieds.apis.core.core_api import (
    CategoryDetailAPI,
    DashboardAPI,
    ListCategoriesAPI,
)

urlpatterns = [
    path("listings/", include("classifieds.apis.core.listings.urls")),
    path("favorites/", include("classifieds.apis.core.favorites.urls")),
    # Categories
    path("categories/", ListCategoriesAPI.as_view(), name="list_categories"),
    path("categories/<slug:slug>/", CategoryDetailAPI.as_view(), name="category_detail"),
    # Dashboard
    path("dashboard/", DashboardAPI.as_view(), name="dashboard"),
]
