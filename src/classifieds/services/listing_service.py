# listing_service.py
"""
Listing publication workflow.

submit -> oracle check -> auto-approve or pending -> stored listing.

Owner edits always send a listing back to pending; owner deletes are a
single predicate delete. Moderators approve or reject pending listings by
hand. "Not yours" and "does not exist" are the same error everywhere.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from django.conf import settings
from django.db import DatabaseError, transaction
from django.db.models import Q
from django.utils import timezone

from classifieds.exceptions import ListingNotFoundError, ListingValidationError
from classifieds.models import Listing, ListingImage, ListingSort, ModerationStatus
from classifieds.serializers.listing_serializers import (
    ListingContentSerializer,
    ListingUpdateSerializer,
)
from classifieds.services.moderation_service import (
    ImageAbsent,
    ImageModeration,
    ImagePresent,
    ModerationService,
    ModerationVerdict,
)
from classifieds.services.upload_service import UploadService
from classifieds.tasks.tasks import delete_listing_files_task
from classifiedsutils.log_helpers import log_business_event
from classifiedsutils.logging import get_logger

logger = get_logger(__name__)

AUTO_APPROVED_NOTE = "Auto-approved by AI"


@dataclass(frozen=True)
class SubmissionResult:
    """A stored listing together with the verdicts that decided its state."""

    listing: Listing
    text_verdict: ModerationVerdict
    image_moderation: ImageModeration

    @property
    def approved(self) -> bool:
        return self.listing.is_approved

    def moderation_summary(self) -> dict:
        return {
            "approved": self.approved,
            "text_moderation": self.text_verdict.as_dict(),
            "image_moderation": self.image_moderation.verdict.as_dict(),
        }


class ListingService:
    """Create, edit, delete and moderate listings."""

    def __init__(self, moderation_service: ModerationService | None = None):
        self.moderation = moderation_service or ModerationService()

    # ------------------------------------------------------------------
    # Decision helpers
    # ------------------------------------------------------------------

    @staticmethod
    def auto_approve_threshold() -> float:
        return float(getattr(settings, "MODERATION_AUTO_APPROVE_THRESHOLD", 0.8))

    @staticmethod
    def should_auto_approve(
        text_verdict: ModerationVerdict,
        image_moderation: ImageModeration,
        threshold: float,
    ) -> bool:
        """Both verdicts must approve with confidence strictly above the threshold."""
        return text_verdict.passes(threshold) and image_moderation.verdict.passes(
            threshold
        )

    @staticmethod
    def moderation_notes(
        auto_approved: bool,
        text_verdict: ModerationVerdict,
        image_verdict: ModerationVerdict,
    ) -> str:
        if auto_approved:
            return AUTO_APPROVED_NOTE
        return (
            f"AI Moderation - Text: {', '.join(text_verdict.reasons)} | "
            f"Images: {', '.join(image_verdict.reasons)}"
        )

    @staticmethod
    def validate_content(data: Mapping, partial: bool = False) -> dict:
        serializer_class = ListingUpdateSerializer if partial else ListingContentSerializer
        serializer = serializer_class(data=data, partial=partial)
        if not serializer.is_valid():
            raise ListingValidationError(serializer.errors)
        return dict(serializer.validated_data)

    # ------------------------------------------------------------------
    # Owner operations
    # ------------------------------------------------------------------

    def submit_listing(
        self,
        owner_id: int,
        content: Mapping,
        images: Sequence = (),
        alt_texts: Sequence[str] | None = None,
    ) -> SubmissionResult:
        """
        Validate, moderate and store a new listing.

        Only the first image is sent to the oracle; the rest are stored
        unchecked. Oracle failures never fail the submission, they leave
        the listing pending.

        Raises:
            ListingValidationError: before any oracle call or write
        """
        validated = self.validate_content(content)
        uploads = UploadService.validate_images(list(images))

        category = validated.pop("category")
        validated.pop("category_id")
        category_label = validated.pop("category_name", "") or category.name

        text_verdict = self.moderation.moderate_text(
            validated["title"],
            validated["description"],
            category_label,
            validated.get("price"),
        )
        if uploads:
            lead_image = uploads[0]
            image_moderation = ImagePresent(
                self.moderation.moderate_image(
                    lead_image.as_base64(), lead_image.mime_type
                )
            )
        else:
            image_moderation = ImageAbsent()

        auto_approved = self.should_auto_approve(
            text_verdict, image_moderation, self.auto_approve_threshold()
        )
        notes = self.moderation_notes(
            auto_approved, text_verdict, image_moderation.verdict
        )

        if isinstance(alt_texts, str):
            alt_texts = [alt_texts]
        alt_texts = [text if isinstance(text, str) else "" for text in alt_texts or []]
        stored_paths = []
        try:
            for upload in uploads:
                stored_paths.append(UploadService.store_image(upload))
            with transaction.atomic():
                listing = Listing.objects.create(
                    user_id=owner_id,
                    category=category,
                    is_approved=auto_approved,
                    moderation_status=(
                        ModerationStatus.APPROVED.value
                        if auto_approved
                        else ModerationStatus.PENDING.value
                    ),
                    published_at=timezone.now() if auto_approved else None,
                    moderation_notes=notes,
                    **validated,
                )
                ListingImage.objects.bulk_create(
                    [
                        ListingImage(
                            listing=listing,
                            image_path=path,
                            alt_text=(
                                alt_texts[index]
                                if index < len(alt_texts) and alt_texts[index]
                                else f"{listing.title} - Image {index + 1}"
                            ),
                            sort_order=index,
                        )
                        for index, path in enumerate(stored_paths)
                    ]
                )
        except (DatabaseError, OSError):
            UploadService.delete_files(stored_paths)
            raise

        log_business_event(
            "listing_submitted",
            user_id=owner_id,
            listing_id=listing.listing_id,
            status=listing.moderation_status,
            image_count=len(stored_paths),
            text_confidence=text_verdict.confidence,
            image_confidence=image_moderation.verdict.confidence,
        )
        if auto_approved:
            logger.info(
                "listing_auto_approved",
                listing_id=listing.listing_id,
                threshold=self.auto_approve_threshold(),
            )
        return SubmissionResult(listing, text_verdict, image_moderation)

    def edit_listing(self, listing_id: int, owner_id: int, updates: Mapping) -> Listing:
        """
        Apply owner updates and send the listing back to pending.

        The reset happens on every successful edit, even when nothing
        changed. No oracle call is made.
        """
        validated = self.validate_content(updates, partial=True)
        category = validated.pop("category", None)
        validated.pop("category_name", None)
        if category is not None:
            validated["category_id"] = category.category_id

        updated = Listing.objects.filter(
            listing_id=listing_id, user_id=owner_id
        ).update(
            **validated,
            is_approved=False,
            moderation_status=ModerationStatus.PENDING.value,
            published_at=None,
            updated_at=timezone.now(),
        )
        if not updated:
            raise ListingNotFoundError()

        logger.info(
            "listing_edited",
            listing_id=listing_id,
            user_id=owner_id,
            fields=sorted(validated),
        )
        return self.get_listing(listing_id)

    def delete_listing(self, listing_id: int, owner_id: int) -> None:
        """Delete an owned listing; its stored files are removed after commit."""
        owned = Listing.objects.filter(listing_id=listing_id, user_id=owner_id)
        with transaction.atomic():
            paths = list(
                ListingImage.objects.filter(
                    listing__listing_id=listing_id, listing__user_id=owner_id
                ).values_list("image_path", flat=True)
            )
            _, per_model = owned.delete()
            if not per_model.get(Listing._meta.label, 0):
                raise ListingNotFoundError()
            if paths:
                transaction.on_commit(lambda: delete_listing_files_task.delay(paths))

        log_business_event(
            "listing_deleted",
            user_id=owner_id,
            listing_id=listing_id,
            image_count=len(paths),
        )

    # ------------------------------------------------------------------
    # Moderator operations
    # ------------------------------------------------------------------

    @staticmethod
    def approve_listing(
        listing_id: int, moderator_id: int, notes: str | None = None
    ) -> Listing:
        listing = Listing.objects.filter(listing_id=listing_id).first()
        if listing is None:
            raise ListingNotFoundError()
        listing.approve(notes=notes or None)
        log_business_event(
            "listing_approved",
            user_id=moderator_id,
            listing_id=listing_id,
            status=listing.moderation_status,
        )
        return listing

    @staticmethod
    def reject_listing(listing_id: int, moderator_id: int, notes: str = "") -> Listing:
        listing = Listing.objects.filter(listing_id=listing_id).first()
        if listing is None:
            raise ListingNotFoundError()
        listing.reject(notes=notes)
        log_business_event(
            "listing_rejected",
            user_id=moderator_id,
            listing_id=listing_id,
            status=listing.moderation_status,
        )
        return listing

    @staticmethod
    def pending_listings(limit: int = 50):
        return (
            Listing.objects.pending()
            .select_related("category", "user")
            .prefetch_related("images")
            .order_by("created_at", "listing_id")[:limit]
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @staticmethod
    def get_listing(listing_id: int) -> Listing:
        listing = (
            Listing.objects.select_related("category")
            .prefetch_related("images")
            .filter(listing_id=listing_id)
            .first()
        )
        if listing is None:
            raise ListingNotFoundError()
        return listing

    @staticmethod
    def get_visible_listing(listing_id: int, viewer_id: int | None = None) -> Listing:
        """
        Fetch a listing for the detail page.

        Approved active listings are visible to everyone; anything else
        only to its owner.
        """
        visibility = Q(is_active=True, is_approved=True)
        if viewer_id:
            visibility |= Q(user_id=viewer_id)

        listing = (
            Listing.objects.select_related("category")
            .prefetch_related("images")
            .filter(visibility, listing_id=listing_id)
            .first()
        )
        if listing is None:
            raise ListingNotFoundError()
        return listing

    @staticmethod
    def owner_listings(owner_id: int):
        return (
            Listing.objects.owned_by(owner_id)
            .select_related("category")
            .prefetch_related("images")
            .order_by("-created_at", "-listing_id")
        )

    @staticmethod
    def search_listings(
        category_id: int | None = None,
        category: str | None = None,
        location: str | None = None,
        min_price=None,
        max_price=None,
        search: str | None = None,
        sort_by: str = ListingSort.NEWEST.value,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Listing], int]:
        """Public search over visible listings. Returns (page, total)."""
        queryset = Listing.objects.visible()

        if category_id:
            queryset = queryset.filter(category_id=category_id)
        if category:
            queryset = queryset.filter(category__slug=category)
        if location:
            queryset = queryset.filter(location__icontains=location)
        if min_price is not None:
            queryset = queryset.filter(price__gte=min_price)
        if max_price is not None:
            queryset = queryset.filter(price__lte=max_price)
        if search:
            queryset = queryset.filter(
                Q(title__icontains=search) | Q(description__icontains=search)
            )

        total = queryset.count()
        page = list(
            queryset.select_related("category")
            .prefetch_related("images")
            .order_by(*ListingSort(sort_by).ordering)[offset : offset + limit]
        )
        return page, total
