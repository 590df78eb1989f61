# Initial schema for the classifieds marketplace.
#
# Tables:
# 1. Users (custom auth user with two-factor columns)
# 2. Categories
# 3. Listings and ListingImages
# 4. UserFavorites
# 5. ListingAnalytics (per-view records)

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

import classifieds.models.user


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        # =====================================================================
        # 1. Users
        # =====================================================================
        migrations.CreateModel(
            name="User",
            fields=[
                (
                    "last_login",
                    models.DateTimeField(
                        blank=True,
                        db_column="LastLogin",
                        help_text="Last login timestamp",
                        null=True,
                    ),
                ),
                (
                    "is_active",
                    models.IntegerField(
                        blank=True,
                        db_column="IsActive",
                        default=1,
                        help_text="Flag indicating if the record is active (1=active, 0=inactive)",
                        null=True,
                    ),
                ),
                (
                    "is_deleted",
                    models.IntegerField(
                        blank=True,
                        db_column="IsDeleted",
                        default=0,
                        help_text="Flag indicating if the record is soft-deleted (1=deleted, 0=not deleted)",
                        null=True,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_column="CreatedAt",
                        help_text="Timestamp when the record was created",
                        null=True,
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        db_column="UpdatedAt",
                        help_text="Timestamp when the record was last updated",
                        null=True,
                    ),
                ),
                (
                    "created_by",
                    models.IntegerField(
                        blank=True,
                        db_column="CreatedBy",
                        help_text="ID of the user who created this record",
                        null=True,
                    ),
                ),
                (
                    "updated_by",
                    models.IntegerField(
                        blank=True,
                        db_column="UpdatedBy",
                        help_text="ID of the user who last updated this record",
                        null=True,
                    ),
                ),
                (
                    "user_id",
                    models.AutoField(
                        db_column="UserID",
                        help_text="Unique identifier for the user",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "email",
                    models.CharField(
                        db_column="Email",
                        help_text="User's email address (used for login)",
                        max_length=255,
                        unique=True,
                    ),
                ),
                (
                    "password",
                    models.CharField(
                        db_column="PasswordHash",
                        help_text="Hashed password",
                        max_length=255,
                    ),
                ),
                (
                    "first_name",
                    models.CharField(
                        blank=True,
                        db_column="FirstName",
                        default="",
                        help_text="User's first name",
                        max_length=100,
                    ),
                ),
                (
                    "last_name",
                    models.CharField(
                        blank=True,
                        db_column="LastName",
                        default="",
                        help_text="User's last name",
                        max_length=100,
                    ),
                ),
                (
                    "phone",
                    models.CharField(
                        blank=True,
                        db_column="Phone",
                        help_text="User's phone number",
                        max_length=20,
                        null=True,
                    ),
                ),
                (
                    "profile_image_url",
                    models.CharField(
                        blank=True,
                        db_column="ProfileImageUrl",
                        help_text="URL of the user's profile picture",
                        max_length=500,
                        null=True,
                    ),
                ),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("Admin", "Administrator"),
                            ("User", "Standard User"),
                            ("Moderator", "Moderator"),
                        ],
                        db_column="Role",
                        default="User",
                        help_text="User role determining permissions",
                        max_length=12,
                    ),
                ),
                (
                    "is_staff",
                    models.BooleanField(
                        default=False,
                        help_text="Designates whether the user can log into the admin site.",
                    ),
                ),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text="Designates that this user has all permissions.",
                    ),
                ),
                (
                    "two_factor_secret",
                    models.CharField(
                        blank=True,
                        db_column="TwoFactorSecret",
                        help_text="Base32 TOTP secret generated during two-factor setup",
                        max_length=64,
                        null=True,
                    ),
                ),
                (
                    "two_factor_enabled",
                    models.BooleanField(
                        db_column="TwoFactorEnabled",
                        default=False,
                        help_text="Whether a verified TOTP code is required at login",
                    ),
                ),
            ],
            options={
                "verbose_name": "User",
                "verbose_name_plural": "Users",
                "db_table": "Users",
                "managed": True,
                "indexes": [
                    models.Index(
                        fields=["email", "is_active"], name="users_email_active_idx"
                    ),
                    models.Index(
                        fields=["role", "is_active"], name="users_role_active_idx"
                    ),
                ],
            },
            managers=[
                ("objects", classifieds.models.user.UserManager()),
            ],
        ),
        # =====================================================================
        # 2. Categories
        # =====================================================================
        migrations.CreateModel(
            name="Category",
            fields=[
                (
                    "category_id",
                    models.AutoField(
                        db_column="CategoryID",
                        help_text="Unique identifier for the category",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "name",
                    models.CharField(
                        db_column="Name",
                        help_text="Display name of the category",
                        max_length=100,
                    ),
                ),
                (
                    "slug",
                    models.SlugField(
                        db_column="Slug",
                        help_text="URL-safe unique identifier of the category",
                        max_length=100,
                        unique=True,
                    ),
                ),
                (
                    "icon",
                    models.CharField(
                        blank=True,
                        db_column="Icon",
                        help_text="Icon class shown next to the category (e.g. 'fas fa-car')",
                        max_length=50,
                        null=True,
                    ),
                ),
                (
                    "description",
                    models.TextField(
                        blank=True,
                        db_column="Description",
                        help_text="Short description of the category",
                        null=True,
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        db_column="IsActive",
                        default=True,
                        help_text="Inactive categories are hidden and reject new listings",
                    ),
                ),
                (
                    "sort_order",
                    models.IntegerField(
                        db_column="SortOrder",
                        default=0,
                        help_text="Position of the category in menus",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_column="CreatedAt",
                        help_text="Timestamp when the category was created",
                    ),
                ),
            ],
            options={
                "verbose_name": "Category",
                "verbose_name_plural": "Categories",
                "db_table": "Categories",
                "ordering": ["sort_order", "name"],
                "managed": True,
            },
        ),
        # =====================================================================
        # 3. Listings and images
        # =====================================================================
        migrations.CreateModel(
            name="Listing",
            fields=[
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_column="CreatedAt",
                        help_text="Timestamp when the record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        db_column="UpdatedAt",
                        help_text="Timestamp when the record was last updated",
                    ),
                ),
                (
                    "listing_id",
                    models.AutoField(
                        db_column="ListingID",
                        help_text="Unique identifier for the listing",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "title",
                    models.CharField(
                        db_column="Title", help_text="Listing headline", max_length=200
                    ),
                ),
                (
                    "description",
                    models.TextField(
                        db_column="Description",
                        help_text="Full description of the item or service",
                    ),
                ),
                (
                    "price",
                    models.DecimalField(
                        blank=True,
                        db_column="Price",
                        decimal_places=2,
                        help_text="Asking price; empty when the seller gives none",
                        max_digits=10,
                        null=True,
                    ),
                ),
                (
                    "location",
                    models.CharField(
                        db_column="Location",
                        help_text="Free-text location of the item",
                        max_length=200,
                    ),
                ),
                (
                    "contact_phone",
                    models.CharField(
                        blank=True,
                        db_column="ContactPhone",
                        help_text="Phone number buyers may call",
                        max_length=20,
                        null=True,
                    ),
                ),
                (
                    "contact_email",
                    models.CharField(
                        blank=True,
                        db_column="ContactEmail",
                        help_text="Email address buyers may write to",
                        max_length=100,
                        null=True,
                    ),
                ),
                (
                    "is_active",
                    models.BooleanField(
                        db_column="IsActive",
                        default=True,
                        help_text="Owner-controlled flag; inactive listings are hidden",
                    ),
                ),
                (
                    "is_approved",
                    models.BooleanField(
                        db_column="IsApproved",
                        default=False,
                        help_text="Whether the listing is publicly visible",
                    ),
                ),
                (
                    "is_featured",
                    models.BooleanField(
                        db_column="IsFeatured",
                        default=False,
                        help_text="Promoted listing",
                    ),
                ),
                (
                    "moderation_status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("approved", "Approved"),
                            ("rejected", "Rejected"),
                        ],
                        db_column="ModerationStatus",
                        default="pending",
                        help_text="Moderation state (pending, approved, rejected)",
                        max_length=20,
                    ),
                ),
                (
                    "moderation_notes",
                    models.TextField(
                        blank=True,
                        db_column="ModerationNotes",
                        help_text="Automated or manual moderation notes",
                        null=True,
                    ),
                ),
                (
                    "view_count",
                    models.IntegerField(
                        db_column="ViewCount",
                        default=0,
                        help_text="Number of detail page views",
                    ),
                ),
                (
                    "published_at",
                    models.DateTimeField(
                        blank=True,
                        db_column="PublishedAt",
                        help_text="When the listing was approved; empty while not approved",
                        null=True,
                    ),
                ),
                (
                    "category",
                    models.ForeignKey(
                        db_column="CategoryID",
                        help_text="Category the listing is filed under",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="listings",
                        to="classifieds.category",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        db_column="UserID",
                        help_text="Owner of the listing",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="listings",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Listing",
                "verbose_name_plural": "Listings",
                "db_table": "Listings",
                "ordering": ["-created_at"],
                "managed": True,
                "indexes": [
                    models.Index(
                        fields=["is_active", "is_approved", "created_at"],
                        name="listings_visible_idx",
                    ),
                    models.Index(
                        fields=["user", "created_at"],
                        name="listings_user_created_idx",
                    ),
                    models.Index(
                        fields=["category", "is_approved"],
                        name="listings_cat_approved_idx",
                    ),
                    models.Index(
                        fields=["moderation_status", "created_at"],
                        name="listings_status_created_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="ListingImage",
            fields=[
                (
                    "image_id",
                    models.AutoField(
                        db_column="ImageID",
                        help_text="Unique identifier for the image",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "image_path",
                    models.CharField(
                        db_column="ImagePath",
                        help_text="Storage path of the uploaded file",
                        max_length=500,
                    ),
                ),
                (
                    "alt_text",
                    models.CharField(
                        blank=True,
                        db_column="AltText",
                        help_text="Alternative text for the image",
                        max_length=200,
                        null=True,
                    ),
                ),
                (
                    "sort_order",
                    models.IntegerField(
                        db_column="SortOrder",
                        default=0,
                        help_text="0-based position in the order the images were submitted",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_column="CreatedAt",
                        help_text="Timestamp when the image was uploaded",
                    ),
                ),
                (
                    "listing",
                    models.ForeignKey(
                        db_column="ListingID",
                        help_text="Listing the image belongs to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="images",
                        to="classifieds.listing",
                    ),
                ),
            ],
            options={
                "verbose_name": "Listing Image",
                "verbose_name_plural": "Listing Images",
                "db_table": "ListingImages",
                "ordering": ["sort_order", "image_id"],
                "managed": True,
            },
        ),
        # =====================================================================
        # 4. Favorites
        # =====================================================================
        migrations.CreateModel(
            name="UserFavorite",
            fields=[
                (
                    "favorite_id",
                    models.AutoField(
                        db_column="FavoriteID",
                        help_text="Unique identifier for the favorite",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_column="CreatedAt",
                        help_text="When the listing was saved",
                    ),
                ),
                (
                    "listing",
                    models.ForeignKey(
                        db_column="ListingID",
                        help_text="Saved listing",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="favorited_by",
                        to="classifieds.listing",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        db_column="UserID",
                        help_text="User who saved the listing",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="favorites",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "User Favorite",
                "verbose_name_plural": "User Favorites",
                "db_table": "UserFavorites",
                "ordering": ["-created_at"],
                "managed": True,
                "constraints": [
                    models.UniqueConstraint(
                        fields=("user", "listing"), name="unique_user_favorite"
                    )
                ],
            },
        ),
        # =====================================================================
        # 5. View analytics
        # =====================================================================
        migrations.CreateModel(
            name="ListingView",
            fields=[
                (
                    "view_id",
                    models.AutoField(
                        db_column="ViewID",
                        help_text="Unique identifier for the view record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "view_date",
                    models.DateTimeField(
                        db_column="ViewDate",
                        default=django.utils.timezone.now,
                        help_text="When the listing was viewed",
                    ),
                ),
                (
                    "user_agent",
                    models.TextField(
                        blank=True,
                        db_column="UserAgent",
                        help_text="User-Agent header of the viewer",
                        null=True,
                    ),
                ),
                (
                    "ip_address",
                    models.CharField(
                        blank=True,
                        db_column="IpAddress",
                        help_text="Client IP address of the viewer (IPv4 or IPv6)",
                        max_length=45,
                        null=True,
                    ),
                ),
                (
                    "referrer",
                    models.TextField(
                        blank=True,
                        db_column="Referrer",
                        help_text="Referer header of the request",
                        null=True,
                    ),
                ),
                (
                    "listing",
                    models.ForeignKey(
                        db_column="ListingID",
                        help_text="Viewed listing",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="views",
                        to="classifieds.listing",
                    ),
                ),
            ],
            options={
                "verbose_name": "Listing View",
                "verbose_name_plural": "Listing Views",
                "db_table": "ListingAnalytics",
                "ordering": ["-view_date"],
                "managed": True,
                "indexes": [
                    models.Index(
                        fields=["listing", "view_date"], name="listing_views_date_idx"
                    )
                ],
            },
        ),
    ]
