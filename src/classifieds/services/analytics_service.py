from datetime import timedelta

from django.db.models import Count, F, Q, Sum
from django.db.models.functions import TruncDate
from django.utils import timezone

from classifieds.exceptions import ListingNotFoundError
from classifieds.models import Listing, ListingView, ModerationStatus, UserFavorite


class AnalyticsService:
    """
    View tracking and per-owner statistics.
    """

    @staticmethod
    def record_view(
        listing_id: int,
        user_agent: str = "",
        ip_address: str = "",
        referrer: str = "",
    ) -> None:
        """
        Count one detail-page view.

        The counter is bumped with a single UPDATE so concurrent views are
        never lost.
        """
        Listing.objects.filter(listing_id=listing_id).update(
            view_count=F("view_count") + 1
        )
        ListingView.objects.create(
            listing_id=listing_id,
            user_agent=(user_agent or "")[:500] or None,
            ip_address=(ip_address or "")[:45] or None,
            referrer=(referrer or "")[:500] or None,
        )

    @staticmethod
    def daily_views(listing_id: int, owner_id: int, days: int = 30) -> list[dict]:
        """
        Views per day over the last ``days`` days, oldest first.

        Only the owner may read a listing's analytics.
        """
        if not Listing.objects.filter(listing_id=listing_id, user_id=owner_id).exists():
            raise ListingNotFoundError()

        since = timezone.now() - timedelta(days=days)
        rows = (
            ListingView.objects.filter(listing_id=listing_id, view_date__gte=since)
            .annotate(date=TruncDate("view_date"))
            .values("date")
            .annotate(views=Count("view_id"))
            .order_by("date")
        )
        return [{"date": row["date"].isoformat(), "views": row["views"]} for row in rows]

    @staticmethod
    def dashboard_stats(user_id: int) -> dict:
        """
        Counts for the owner's dashboard.
        """
        stats = Listing.objects.owned_by(user_id).aggregate(
            total_listings=Count("listing_id"),
            active_listings=Count("listing_id", filter=Q(is_active=True)),
            approved_listings=Count(
                "listing_id",
                filter=Q(moderation_status=ModerationStatus.APPROVED.value),
            ),
            pending_listings=Count(
                "listing_id",
                filter=Q(moderation_status=ModerationStatus.PENDING.value),
            ),
            rejected_listings=Count(
                "listing_id",
                filter=Q(moderation_status=ModerationStatus.REJECTED.value),
            ),
            total_views=Sum("view_count"),
        )
        stats["total_views"] = stats["total_views"] or 0
        stats["favorites"] = UserFavorite.objects.filter(user_id=user_id).count()
        return stats

    @staticmethod
    def prune_views(older_than_days: int) -> int:
        cutoff = timezone.now() - timedelta(days=older_than_days)
        deleted, _ = ListingView.objects.filter(view_date__lt=cutoff).delete()
        return deleted
