from collections.abc import Iterable

from django.db import IntegrityError, transaction

from classifieds.exceptions import ListingNotFoundError
from classifieds.models import Listing, UserFavorite
from classifiedsutils.logging import get_logger

logger = get_logger(__name__)


class FavoriteService:
    """
    A user's saved listings.
    """

    @staticmethod
    def toggle(user_id: int, listing_id: int) -> bool:
        """
        Flip the favorite state of a listing for a user.

        Returns:
            True when the listing is now a favorite, False when it was removed
        """
        if not Listing.objects.filter(listing_id=listing_id).exists():
            raise ListingNotFoundError()

        removed, _ = UserFavorite.objects.filter(
            user_id=user_id, listing_id=listing_id
        ).delete()
        if removed:
            logger.info("favorite_removed", user_id=user_id, listing_id=listing_id)
            return False

        try:
            with transaction.atomic():
                UserFavorite.objects.create(user_id=user_id, listing_id=listing_id)
        except IntegrityError:
            # a concurrent toggle already inserted the row
            pass
        logger.info("favorite_added", user_id=user_id, listing_id=listing_id)
        return True

    @staticmethod
    def favorite_listings(user_id: int):
        """Listings the user saved that are still publicly visible, newest save first."""
        return (
            Listing.objects.visible()
            .filter(favorited_by__user_id=user_id)
            .select_related("category")
            .prefetch_related("images")
            .order_by("-favorited_by__created_at")
        )

    @staticmethod
    def favorite_ids(user_id: int | None, listing_ids: Iterable[int]) -> set[int]:
        if not user_id:
            return set()
        return set(
            UserFavorite.objects.filter(
                user_id=user_id, listing_id__in=list(listing_ids)
            ).values_list("listing_id", flat=True)
        )
