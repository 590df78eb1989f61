"""
Unit tests for Django models.
"""

import pytest
from django.db import IntegrityError

from classifieds.models import (
    Category,
    Listing,
    ListingImage,
    ListingSort,
    ModerationStatus,
    Role,
    User,
    UserFavorite,
)


@pytest.mark.unit
class TestUserModel:
    def test_create_user(self):
        user = User.objects.create_user(email="Seller@Example.com", password="secret123")
        assert user.email == "Seller@example.com"
        assert user.role == Role.USER
        assert user.check_password("secret123")
        assert user.two_factor_enabled is False

    def test_create_user_requires_email(self):
        with pytest.raises(ValueError):
            User.objects.create_user(email="", password="secret123")

    def test_create_superuser(self):
        user = User.objects.create_superuser(email="root@example.com", password="x")
        assert user.is_staff is True
        assert user.role == Role.ADMIN
        assert user.is_moderator()

    def test_full_name_falls_back_to_email(self):
        user = User.objects.create_user(email="anon@example.com", password="x")
        assert user.full_name == "anon@example.com"

    def test_full_name(self, test_user):
        assert test_user.full_name == "Test User"

    def test_moderator_role(self, moderator_user):
        assert moderator_user.is_moderator()
        assert not moderator_user.is_admin()


@pytest.mark.unit
class TestCategoryModel:
    def test_default_categories_seeded(self):
        slugs = set(Category.objects.values_list("slug", flat=True))
        assert {"motors", "real-estate", "electronics", "pets"} <= slugs
        assert Category.objects.count() == 10

    def test_ordering_by_sort_order(self):
        first = Category.objects.first()
        assert first.slug == "motors"


@pytest.mark.unit
class TestListingModel:
    def test_defaults(self, test_user, category):
        listing = Listing.objects.create(
            user=test_user,
            category=category,
            title="Lamp",
            description="Desk lamp",
            location="Krakow",
        )
        assert listing.is_active is True
        assert listing.is_approved is False
        assert listing.moderation_status == ModerationStatus.PENDING.value
        assert listing.published_at is None
        assert listing.view_count == 0
        assert listing.price is None

    def test_approve_sets_state_together(self, make_listing):
        listing = make_listing(approved=False)
        listing.approve(notes="Looks fine")
        listing.refresh_from_db()

        assert listing.is_approved is True
        assert listing.moderation_status == ModerationStatus.APPROVED.value
        assert listing.published_at is not None
        assert listing.moderation_notes == "Looks fine"

    def test_reject_clears_publication(self, make_listing):
        listing = make_listing(approved=True)
        listing.reject(notes="Prohibited item")
        listing.refresh_from_db()

        assert listing.is_approved is False
        assert listing.moderation_status == ModerationStatus.REJECTED.value
        assert listing.published_at is None

    def test_visible_queryset(self, make_listing):
        visible = make_listing(approved=True)
        make_listing(approved=False)
        make_listing(approved=True, is_active=False)

        assert list(Listing.objects.visible()) == [visible]

    def test_images_ordered_by_sort_order(self, make_listing):
        listing = make_listing()
        ListingImage.objects.create(listing=listing, image_path="listings/b.jpg", sort_order=1)
        ListingImage.objects.create(listing=listing, image_path="listings/a.jpg", sort_order=0)

        assert [image.sort_order for image in listing.images.all()] == [0, 1]

    def test_image_url_uses_media_url(self, make_listing):
        image = ListingImage.objects.create(
            listing=make_listing(), image_path="listings/a.jpg"
        )
        assert image.image_url == "/media/listings/a.jpg"

    def test_category_in_use_cannot_be_deleted(self, make_listing, category):
        from django.db.models import ProtectedError

        make_listing()
        with pytest.raises(ProtectedError):
            category.delete()


@pytest.mark.unit
class TestUserFavoriteModel:
    def test_unique_per_user_and_listing(self, test_user, make_listing):
        listing = make_listing()
        UserFavorite.objects.create(user=test_user, listing=listing)
        with pytest.raises(IntegrityError):
            UserFavorite.objects.create(user=test_user, listing=listing)


@pytest.mark.unit
class TestListingSort:
    def test_orderings(self):
        assert ListingSort("price_asc").ordering[0] == "price"
        assert ListingSort("price_desc").ordering[0] == "-price"
        assert ListingSort("newest").ordering[0] == "-created_at"
        assert ListingSort("oldest").ordering[0] == "created_at"

    def test_unknown_sort_rejected(self):
        with pytest.raises(ValueError):
            ListingSort("cheapest")
