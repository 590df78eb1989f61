from django.contrib import admin
from django.utils.html import format_html

from .models import (
    Category,
    Listing,
    ListingImage,
    ListingView,
    ModerationStatus,
    User,
    UserFavorite,
)
from .services.listing_service import ListingService

# =============================================================================
# ACCOUNTS
# =============================================================================


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = (
        "user_id",
        "full_name",
        "email",
        "role",
        "two_factor_enabled",
        "is_active_status",
        "created_at",
    )
    list_filter = ("role", "two_factor_enabled", "is_active", "is_deleted")
    search_fields = ("email", "first_name", "last_name", "phone")
    readonly_fields = ("user_id", "created_at", "updated_at", "password", "last_login")
    exclude = ("two_factor_secret",)

    def is_active_status(self, obj):
        if obj.is_active == 1:
            return format_html('<span style="color: {};">{}</span>', "green", "Active")
        return format_html('<span style="color: {};">{}</span>', "red", "Inactive")

    is_active_status.short_description = "Status"


# =============================================================================
# CATALOGUE
# =============================================================================


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "icon", "sort_order", "is_active")
    list_editable = ("sort_order", "is_active")
    search_fields = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}


class ListingImageInline(admin.TabularInline):
    model = ListingImage
    extra = 0
    fields = ("image_path", "alt_text", "sort_order")
    readonly_fields = ("image_path",)


@admin.register(Listing)
class ListingAdmin(admin.ModelAdmin):
    list_display = (
        "listing_id",
        "title",
        "user",
        "category",
        "price",
        "moderation_badge",
        "view_count",
        "created_at",
    )
    list_filter = ("moderation_status", "is_active", "is_featured", "category")
    search_fields = ("title", "description", "location", "user__email")
    readonly_fields = (
        "listing_id",
        "is_approved",
        "moderation_status",
        "published_at",
        "view_count",
        "created_at",
        "updated_at",
    )
    raw_id_fields = ("user",)
    inlines = [ListingImageInline]
    actions = ["approve_selected", "reject_selected"]
    content_fields = (
        "title",
        "description",
        "category",
        "price",
        "location",
        "contact_phone",
        "contact_email",
    )

    def moderation_badge(self, obj):
        colors = {"approved": "green", "pending": "orange", "rejected": "red"}
        return format_html(
            '<span style="color: {};">{}</span>',
            colors.get(obj.moderation_status, "grey"),
            obj.get_moderation_status_display(),
        )

    moderation_badge.short_description = "Moderation"

    def save_model(self, request, obj, form, change):
        # Changed content has not been moderated yet
        if change and set(form.changed_data) & set(self.content_fields):
            obj.is_approved = False
            obj.moderation_status = ModerationStatus.PENDING.value
            obj.published_at = None
        super().save_model(request, obj, form, change)

    @admin.action(description="Approve selected listings")
    def approve_selected(self, request, queryset):
        for listing in queryset:
            ListingService.approve_listing(
                listing.listing_id, request.user.user_id, notes="Approved in admin"
            )

    @admin.action(description="Reject selected listings")
    def reject_selected(self, request, queryset):
        for listing in queryset:
            ListingService.reject_listing(
                listing.listing_id, request.user.user_id, notes="Rejected in admin"
            )


# =============================================================================
# ACTIVITY
# =============================================================================


@admin.register(UserFavorite)
class UserFavoriteAdmin(admin.ModelAdmin):
    list_display = ("user", "listing", "created_at")
    raw_id_fields = ("user", "listing")


@admin.register(ListingView)
class ListingViewAdmin(admin.ModelAdmin):
    list_display = ("listing", "view_date", "ip_address")
    list_filter = ("view_date",)
    raw_id_fields = ("listing",)
