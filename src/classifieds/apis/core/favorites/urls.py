from django.urls import path

from .apis import ListFavoritesAPI, ToggleFavoriteAPI

urlpatterns = [
    path("", ListFavoritesAPI.as_view(), name="list_favorites"),
    path(
        "<int:listing_id>/toggle/", ToggleFavoriteAPI.as_view(), name="toggle_favorite"
    ),
]
