# classifieds/models/favorite.py

from django.db import models


class UserFavorite(models.Model):
    """A listing bookmarked by a user."""

    favorite_id = models.AutoField(
        db_column="FavoriteID",
        primary_key=True,
        help_text="Unique identifier for the favorite",
    )
    user = models.ForeignKey(
        "User",
        models.CASCADE,
        db_column="UserID",
        related_name="favorites",
        help_text="User who saved the listing",
    )
    listing = models.ForeignKey(
        "Listing",
        models.CASCADE,
        db_column="ListingID",
        related_name="favorited_by",
        help_text="Saved listing",
    )
    created_at = models.DateTimeField(
        db_column="CreatedAt",
        auto_now_add=True,
        help_text="When the listing was saved",
    )

    class Meta:
        managed = True
        db_table = "UserFavorites"
        verbose_name = "User Favorite"
        verbose_name_plural = "User Favorites"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["user", "listing"], name="unique_user_favorite"
            )
        ]
        app_label = "classifieds"

    def __str__(self):
        return f"User #{self.user_id} -> Listing #{self.listing_id}"
