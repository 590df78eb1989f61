"""
Unit tests for API endpoints.

Tests use the URL names defined in the project's urls.py files.
"""

import pytest
from django.urls import reverse
from rest_framework import status


@pytest.mark.unit
class TestAuthAPI:
    """Tests for authentication API endpoints."""

    def test_register_user(self, api_client):
        url = reverse("register")
        data = {
            "email": "NewUser@Example.com",
            "password": "SecurePass123!",
            "first_name": "New",
        }
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["access"]
        assert response.data["refresh"]
        assert response.data["role"] == "User"
        assert response.data["user"]["email"] == "newuser@example.com"
        assert "password" not in response.data["user"]

    def test_register_duplicate_email(self, api_client, test_user):
        url = reverse("register")
        data = {"email": test_user.email, "password": "SecurePass123!"}
        response = api_client.post(url, data)
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "email" in response.data["errors"]

    def test_login_valid_credentials(self, api_client, test_user):
        url = reverse("login")
        data = {"email": test_user.email, "password": "testpass123"}
        response = api_client.post(url, data)

        assert response.status_code == status.HTTP_200_OK
        assert "access" in response.data
        assert response.data["user_id"] == test_user.user_id

    def test_login_invalid_credentials(self, api_client, test_user):
        url = reverse("login")
        data = {"email": test_user.email, "password": "wrongpassword"}
        response = api_client.post(url, data)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_login_missing_fields(self, api_client):
        response = api_client.post(reverse("login"), {"email": "a@example.com"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_token_refresh(self, api_client, test_user):
        login = api_client.post(
            reverse("login"), {"email": test_user.email, "password": "testpass123"}
        )
        response = api_client.post(
            reverse("token_refresh"), {"refresh": login.data["refresh"]}
        )
        assert response.status_code == status.HTTP_200_OK
        assert "access" in response.data

    def test_get_user_unauthorized(self, api_client):
        response = api_client.get(reverse("get_user"))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_get_user_authorized(self, auth_client):
        client = auth_client["client"]
        response = client.get(reverse("get_user"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["data"]["email"] == auth_client["user"].email

    def test_blacklisted_token_rejected(self, auth_client):
        from django.core.cache import cache
        from rest_framework_simplejwt.tokens import AccessToken

        jti = AccessToken(auth_client["token"])["jti"]
        cache.set(f"blacklist:{jti}", True)

        response = auth_client["client"].get(reverse("get_user"))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_deleted_account_rejected(self, auth_client):
        user = auth_client["user"]
        user.soft_delete()

        response = auth_client["client"].get(reverse("get_user"))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.unit
class TestListingBrowsingAPI:
    """Public search and detail endpoints."""

    def test_list_only_visible(self, api_client, make_listing):
        make_listing(title="Bike")
        make_listing(title="Hidden", approved=False)

        response = api_client.get(reverse("list_listings"))

        assert response.status_code == status.HTTP_200_OK
        titles = [item["title"] for item in response.data["data"]]
        assert titles == ["Bike"]
        assert response.data["pagination"] == {"total": 1, "limit": 20, "offset": 0}

    def test_list_filters(self, api_client, make_listing):
        make_listing(title="Cheap", price="50.00")
        make_listing(title="Pricey", price="500.00")

        response = api_client.get(
            reverse("list_listings"),
            {"min_price": "100", "category": "motors", "sort_by": "price_asc"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert [item["title"] for item in response.data["data"]] == ["Pricey"]

    def test_list_invalid_params(self, api_client):
        response = api_client.get(
            reverse("list_listings"), {"min_price": "500", "max_price": "10"}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

        response = api_client.get(reverse("list_listings"), {"sort_by": "random"})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_detail_counts_view(self, api_client, make_listing):
        listing = make_listing()
        url = reverse("listing_detail", args=[listing.listing_id])

        api_client.get(url)
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data["data"]["view_count"] == 2
        assert response.data["data"]["category"]["slug"] == "motors"

    def test_pending_listing_hidden_from_others(self, other_client, make_listing):
        listing = make_listing(approved=False)
        url = reverse("listing_detail", args=[listing.listing_id])

        response = other_client["client"].get(url)
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_pending_listing_visible_to_owner(self, auth_client, make_listing):
        listing = make_listing(approved=False)
        url = reverse("listing_detail", args=[listing.listing_id])

        response = auth_client["client"].get(url)
        assert response.status_code == status.HTTP_200_OK
        assert response.data["data"]["moderation_status"] == "pending"

    def test_my_listings(self, auth_client, other_user, make_listing):
        mine = make_listing(approved=False)
        make_listing(user=other_user)

        response = auth_client["client"].get(reverse("my_listings"))

        assert response.status_code == status.HTTP_200_OK
        assert [item["listing_id"] for item in response.data["data"]] == [
            mine.listing_id
        ]


@pytest.mark.unit
class TestListingOwnerAPI:
    """Create, update, delete and analytics endpoints."""

    def test_create_listing(self, auth_client, listing_data, mock_oracle, image_file):
        client = auth_client["client"]
        data = {**listing_data, "images": [image_file(), image_file(name="b.jpg")]}

        response = client.post(reverse("create_listing"), data, format="multipart")

        assert response.status_code == status.HTTP_201_CREATED
        listing = response.data["data"]["listing"]
        assert listing["is_approved"] is True
        assert listing["moderation_notes"] == "Auto-approved by AI"
        assert [image["sort_order"] for image in listing["images"]] == [0, 1]
        assert response.data["data"]["moderation"]["approved"] is True

    def test_create_listing_ignores_non_list_alt_texts(
        self, auth_client, listing_data, mock_oracle
    ):
        from unittest.mock import patch

        from classifieds.services.listing_service import ListingService

        with patch.object(
            ListingService, "submit_listing", wraps=ListingService().submit_listing
        ) as submit:
            response = auth_client["client"].post(
                reverse("create_listing"),
                {**listing_data, "alt_texts": "Front"},
                format="json",
            )

        assert response.status_code == status.HTTP_201_CREATED
        assert submit.call_args.kwargs["alt_texts"] == []

    def test_create_listing_validation_error(self, auth_client, mock_oracle):
        response = auth_client["client"].post(
            reverse("create_listing"), {"title": "Bike"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "errors" in response.data
        mock_oracle.assert_not_called()

    def test_create_listing_unauthenticated(self, api_client, listing_data):
        response = api_client.post(reverse("create_listing"), listing_data)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_create_listing_rate_limited(self, auth_client, listing_data, mock_oracle):
        client = auth_client["client"]
        url = reverse("create_listing")

        for _ in range(5):
            response = client.post(url, listing_data, format="json")
            assert response.status_code == status.HTTP_201_CREATED

        response = client.post(url, listing_data, format="json")
        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS

    def test_create_rate_limit_shared_per_address(
        self, auth_client, other_client, listing_data, mock_oracle
    ):
        url = reverse("create_listing")
        codes = [
            client["client"].post(
                url, listing_data, format="json", REMOTE_ADDR="10.0.0.7"
            ).status_code
            for client in (auth_client, other_client)
            for _ in range(3)
        ]

        assert codes == [201] * 5 + [429]

    def test_create_rate_limit_separate_addresses(
        self, auth_client, listing_data, mock_oracle
    ):
        client = auth_client["client"]
        url = reverse("create_listing")

        for _ in range(5):
            client.post(url, listing_data, format="json", REMOTE_ADDR="10.0.0.8")

        response = client.post(url, listing_data, format="json", REMOTE_ADDR="10.0.0.9")
        assert response.status_code == status.HTTP_201_CREATED

    def test_update_listing_resets_approval(self, auth_client, make_listing):
        listing = make_listing(approved=True)

        response = auth_client["client"].patch(
            reverse("update_listing", args=[listing.listing_id]),
            {"title": "Bike (new tyres)"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["data"]["title"] == "Bike (new tyres)"
        assert response.data["data"]["is_approved"] is False
        assert response.data["data"]["moderation_status"] == "pending"

    def test_update_other_users_listing(self, other_client, make_listing):
        listing = make_listing()

        response = other_client["client"].put(
            reverse("update_listing", args=[listing.listing_id]),
            {"title": "Stolen"},
            format="json",
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_unauthenticated(self, api_client, make_listing):
        listing = make_listing()

        response = api_client.delete(reverse("delete_listing", args=[listing.listing_id]))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        listing.refresh_from_db()

    def test_delete_listing(self, auth_client, make_listing):
        from classifieds.models import Listing

        listing = make_listing()

        response = auth_client["client"].delete(
            reverse("delete_listing", args=[listing.listing_id])
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {"success": True}
        assert not Listing.objects.filter(listing_id=listing.listing_id).exists()

    def test_delete_other_users_listing(self, other_client, make_listing):
        listing = make_listing()

        response = other_client["client"].delete(
            reverse("delete_listing", args=[listing.listing_id])
        )
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data == {"error": "Listing not found or unauthorized"}

    def test_listing_analytics(self, auth_client, api_client, make_listing):
        listing = make_listing()
        api_client.get(reverse("listing_detail", args=[listing.listing_id]))

        response = auth_client["client"].get(
            reverse("listing_analytics", args=[listing.listing_id]), {"days": 7}
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["data"]["days"] == 7
        assert sum(row["views"] for row in response.data["data"]["daily_views"]) == 1

    def test_listing_analytics_bad_days(self, auth_client, make_listing):
        listing = make_listing()
        response = auth_client["client"].get(
            reverse("listing_analytics", args=[listing.listing_id]), {"days": 0}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.unit
class TestFavoritesAPI:
    def test_toggle_and_list(self, auth_client, make_listing):
        client = auth_client["client"]
        listing = make_listing()
        url = reverse("toggle_favorite", args=[listing.listing_id])

        response = client.post(url)
        assert response.status_code == status.HTTP_200_OK
        assert response.data["favorited"] is True

        response = client.get(reverse("list_favorites"))
        assert [item["listing_id"] for item in response.data["data"]] == [
            listing.listing_id
        ]
        assert response.data["data"][0]["is_favorited"] is True

        response = client.post(url)
        assert response.data["favorited"] is False

    def test_toggle_missing_listing(self, auth_client):
        response = auth_client["client"].post(reverse("toggle_favorite", args=[999]))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_favorites_require_auth(self, api_client):
        response = api_client.get(reverse("list_favorites"))
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.unit
class TestCategoriesAndDashboardAPI:
    def test_list_categories(self, api_client, make_listing):
        make_listing()

        response = api_client.get(reverse("list_categories"))

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data["data"]) == 10
        motors = next(item for item in response.data["data"] if item["slug"] == "motors")
        assert motors["listing_count"] == 1

    def test_category_detail(self, api_client):
        response = api_client.get(reverse("category_detail", args=["electronics"]))
        assert response.status_code == status.HTTP_200_OK
        assert response.data["data"]["slug"] == "electronics"

    def test_category_not_found(self, api_client):
        response = api_client.get(reverse("category_detail", args=["spaceships"]))
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_dashboard(self, auth_client, make_listing):
        make_listing()
        make_listing(approved=False)

        response = auth_client["client"].get(reverse("dashboard"))

        assert response.status_code == status.HTTP_200_OK
        data = response.data["data"]
        assert data["total_listings"] == 2
        assert data["pending_listings"] == 1
        assert data["two_factor_enabled"] is False


@pytest.mark.unit
class TestModerationAPI:
    def test_queue_requires_moderator(self, auth_client):
        response = auth_client["client"].get(reverse("moderation_queue"))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_queue(self, moderator_client, make_listing):
        pending = make_listing(approved=False)
        make_listing(approved=True)

        response = moderator_client["client"].get(reverse("moderation_queue"))

        assert response.status_code == status.HTTP_200_OK
        assert [item["listing_id"] for item in response.data["data"]] == [
            pending.listing_id
        ]

    def test_queue_bad_limit(self, moderator_client):
        response = moderator_client["client"].get(
            reverse("moderation_queue"), {"limit": "-1"}
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_approve(self, moderator_client, make_listing):
        listing = make_listing(approved=False)

        response = moderator_client["client"].post(
            reverse("approve_listing", args=[listing.listing_id]),
            {"notes": "Checked by hand"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["data"]["is_approved"] is True
        assert response.data["data"]["published_at"] is not None

    def test_reject(self, moderator_client, make_listing):
        listing = make_listing(approved=False)

        response = moderator_client["client"].post(
            reverse("reject_listing", args=[listing.listing_id]),
            {"notes": "Prohibited item"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["data"]["moderation_status"] == "rejected"

    def test_regular_user_cannot_approve(self, auth_client, make_listing):
        listing = make_listing(approved=False)

        response = auth_client["client"].post(
            reverse("approve_listing", args=[listing.listing_id])
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        listing.refresh_from_db()
        assert listing.is_approved is False
