# classifieds/models/listing.py
"""
Listing models.

Provides:
- Listing: a user's classified ad together with its moderation state
- ListingImage: uploaded pictures of a listing, in submission order

Moderation state invariant: ``is_approved`` is True exactly when
``moderation_status`` is "approved", and exactly when ``published_at``
is set. Every state change goes through the helpers below or through
``ListingService``, which write the three columns together.
"""

from django.core.files.storage import default_storage
from django.db import models
from django.utils import timezone

from .base import TimeStampedModel
from .choices import ModerationStatus


class ListingQuerySet(models.QuerySet):
    def visible(self):
        """Listings the public may see."""
        return self.filter(is_active=True, is_approved=True)

    def owned_by(self, user_id):
        return self.filter(user_id=user_id)

    def pending(self):
        return self.filter(moderation_status=ModerationStatus.PENDING.value)


class Listing(TimeStampedModel):
    """A classified advertisement posted by a user."""

    listing_id = models.AutoField(
        db_column="ListingID",
        primary_key=True,
        help_text="Unique identifier for the listing",
    )
    user = models.ForeignKey(
        "User",
        models.CASCADE,
        db_column="UserID",
        related_name="listings",
        help_text="Owner of the listing",
    )
    category = models.ForeignKey(
        "Category",
        models.PROTECT,
        db_column="CategoryID",
        related_name="listings",
        help_text="Category the listing is filed under",
    )
    title = models.CharField(
        db_column="Title",
        max_length=200,
        help_text="Listing headline",
    )
    description = models.TextField(
        db_column="Description",
        help_text="Full description of the item or service",
    )
    price = models.DecimalField(
        db_column="Price",
        max_digits=10,
        decimal_places=2,
        blank=True,
        null=True,
        help_text="Asking price; empty when the seller gives none",
    )
    location = models.CharField(
        db_column="Location",
        max_length=200,
        help_text="Free-text location of the item",
    )
    contact_phone = models.CharField(
        db_column="ContactPhone",
        max_length=20,
        blank=True,
        null=True,
        help_text="Phone number buyers may call",
    )
    contact_email = models.CharField(
        db_column="ContactEmail",
        max_length=100,
        blank=True,
        null=True,
        help_text="Email address buyers may write to",
    )

    # Moderation state
    is_active = models.BooleanField(
        db_column="IsActive",
        default=True,
        help_text="Owner-controlled flag; inactive listings are hidden",
    )
    is_approved = models.BooleanField(
        db_column="IsApproved",
        default=False,
        help_text="Whether the listing is publicly visible",
    )
    is_featured = models.BooleanField(
        db_column="IsFeatured",
        default=False,
        help_text="Promoted listing",
    )
    moderation_status = models.CharField(
        db_column="ModerationStatus",
        max_length=20,
        choices=ModerationStatus.choices(),
        default=ModerationStatus.PENDING.value,
        help_text="Moderation state (pending, approved, rejected)",
    )
    moderation_notes = models.TextField(
        db_column="ModerationNotes",
        blank=True,
        null=True,
        help_text="Automated or manual moderation notes",
    )
    view_count = models.IntegerField(
        db_column="ViewCount",
        default=0,
        help_text="Number of detail page views",
    )
    published_at = models.DateTimeField(
        db_column="PublishedAt",
        blank=True,
        null=True,
        help_text="When the listing was approved; empty while not approved",
    )

    objects = ListingQuerySet.as_manager()

    class Meta:
        managed = True
        db_table = "Listings"
        verbose_name = "Listing"
        verbose_name_plural = "Listings"
        indexes = [
            models.Index(
                fields=["is_active", "is_approved", "created_at"],
                name="listings_visible_idx",
            ),
            models.Index(fields=["user", "created_at"], name="listings_user_created_idx"),
            models.Index(
                fields=["category", "is_approved"], name="listings_cat_approved_idx"
            ),
            models.Index(
                fields=["moderation_status", "created_at"],
                name="listings_status_created_idx",
            ),
        ]
        ordering = ["-created_at"]
        app_label = "classifieds"

    def __str__(self):
        return f"Listing #{self.listing_id}: {self.title[:50]}"

    def approve(self, notes: str | None = None):
        """Publish the listing."""
        self.is_approved = True
        self.moderation_status = ModerationStatus.APPROVED.value
        self.published_at = timezone.now()
        if notes is not None:
            self.moderation_notes = notes
        self.save(
            update_fields=[
                "is_approved",
                "moderation_status",
                "published_at",
                "moderation_notes",
                "updated_at",
            ]
        )

    def reject(self, notes: str = ""):
        """Hide the listing permanently until it is edited and reviewed again."""
        self.is_approved = False
        self.moderation_status = ModerationStatus.REJECTED.value
        self.published_at = None
        self.moderation_notes = notes
        self.save(
            update_fields=[
                "is_approved",
                "moderation_status",
                "published_at",
                "moderation_notes",
                "updated_at",
            ]
        )


class ListingImage(models.Model):
    """
    A picture attached to a listing.

    ``image_path`` is the storage-relative name returned by Django's default
    storage; the public URL is derived from it.
    """

    image_id = models.AutoField(
        db_column="ImageID",
        primary_key=True,
        help_text="Unique identifier for the image",
    )
    listing = models.ForeignKey(
        Listing,
        models.CASCADE,
        db_column="ListingID",
        related_name="images",
        help_text="Listing the image belongs to",
    )
    image_path = models.CharField(
        db_column="ImagePath",
        max_length=500,
        help_text="Storage path of the uploaded file",
    )
    alt_text = models.CharField(
        db_column="AltText",
        max_length=200,
        blank=True,
        null=True,
        help_text="Alternative text for the image",
    )
    sort_order = models.IntegerField(
        db_column="SortOrder",
        default=0,
        help_text="0-based position in the order the images were submitted",
    )
    created_at = models.DateTimeField(
        db_column="CreatedAt",
        auto_now_add=True,
        help_text="Timestamp when the image was uploaded",
    )

    class Meta:
        managed = True
        db_table = "ListingImages"
        verbose_name = "Listing Image"
        verbose_name_plural = "Listing Images"
        ordering = ["sort_order", "image_id"]
        app_label = "classifieds"

    def __str__(self):
        return f"Image {self.sort_order} of listing #{self.listing_id}"

    @property
    def image_url(self) -> str:
        return default_storage.url(self.image_path)
