"""
pytest configuration and shared fixtures for the classifieds backend tests.

Settings come from ``configuration.settings.test`` (see pyproject.toml).
The moderation oracle is never called for real: tests that submit listings
use ``mock_oracle``, which patches the HTTP call.
"""

import io
import json
from unittest.mock import MagicMock, patch

import pytest


@pytest.fixture(autouse=True)
def enable_db_access(db):
    """Enable database access for all tests."""
    pass


@pytest.fixture(autouse=True)
def isolated_storage(settings, tmp_path):
    """Fresh cache and a temporary MEDIA_ROOT for every test."""
    from django.core.cache import cache

    settings.MEDIA_ROOT = str(tmp_path / "media")
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def api_client():
    """API client for testing endpoints."""
    from rest_framework.test import APIClient

    return APIClient()


def _authenticated_client(user):
    from rest_framework.test import APIClient

    from classifieds.apis.auth.auth_api import issue_tokens

    tokens = issue_tokens(user)
    client = APIClient()
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")
    return {"client": client, "user": user, "token": tokens["access"]}


@pytest.fixture
def test_user():
    """Create a test user."""
    from classifieds.models import User

    return User.objects.create_user(
        email="testuser@example.com",
        password="testpass123",
        first_name="Test",
        last_name="User",
    )


@pytest.fixture
def other_user():
    """A second account, for ownership checks."""
    from classifieds.models import User

    return User.objects.create_user(
        email="otheruser@example.com",
        password="otherpass123",
        first_name="Other",
    )


@pytest.fixture
def moderator_user():
    from classifieds.models import Role, User

    return User.objects.create_user(
        email="moderator@example.com",
        password="modpass123",
        role=Role.MODERATOR,
    )


@pytest.fixture
def auth_client(test_user):
    """Authenticated API client with the test_user."""
    return _authenticated_client(test_user)


@pytest.fixture
def other_client(other_user):
    return _authenticated_client(other_user)


@pytest.fixture
def moderator_client(moderator_user):
    """Authenticated API client with moderator privileges."""
    return _authenticated_client(moderator_user)


@pytest.fixture
def category():
    """One of the categories seeded by migration 0002."""
    from classifieds.models import Category

    return Category.objects.get(slug="motors")


@pytest.fixture
def make_listing(test_user, category):
    """
    Factory for stored listings. Approved by default; pass ``approved=False``
    for one waiting in the moderation queue.
    """
    from django.utils import timezone

    from classifieds.models import Listing, ModerationStatus

    def _make_listing(user=None, approved=True, **fields):
        values = {
            "title": "Bike",
            "description": "A sturdy city bike.",
            "price": "150.00",
            "location": "Warsaw",
            "category": category,
        }
        values.update(fields)
        return Listing.objects.create(
            user=user or test_user,
            is_approved=approved,
            moderation_status=(
                ModerationStatus.APPROVED.value
                if approved
                else ModerationStatus.PENDING.value
            ),
            published_at=timezone.now() if approved else None,
            **values,
        )

    return _make_listing


@pytest.fixture
def listing_data(category):
    """Valid submission payload."""
    return {
        "title": "Bike",
        "description": "A sturdy city bike, barely used.",
        "category_id": category.category_id,
        "price": "150.00",
        "location": "Warsaw",
    }


@pytest.fixture
def image_file():
    """Factory for uploaded image files built with Pillow."""
    from django.core.files.uploadedfile import SimpleUploadedFile
    from PIL import Image

    def _image_file(name="photo.jpg", image_format="JPEG", size=(16, 16), color="red"):
        buffer = io.BytesIO()
        Image.new("RGB", size, color).save(buffer, format=image_format)
        content_type = Image.MIME.get(image_format, "application/octet-stream")
        return SimpleUploadedFile(name, buffer.getvalue(), content_type=content_type)

    return _image_file


@pytest.fixture
def oracle_response():
    """Build a fake chat-completions HTTP response around a verdict payload."""

    def _oracle_response(payload):
        response = MagicMock()
        response.raise_for_status.return_value = None
        response.json.return_value = {
            "choices": [{"message": {"content": json.dumps(payload)}}]
        }
        return response

    return _oracle_response


@pytest.fixture
def mock_oracle(oracle_response):
    """
    Patch the oracle HTTP call. Every call approves with confidence 0.95
    unless the test sets ``return_value`` or ``side_effect``.
    """
    with patch("classifieds.services.moderation_service.requests.post") as mock_post:
        mock_post.return_value = oracle_response(
            {
                "approved": True,
                "confidence": 0.95,
                "reasons": [],
                "category": "appropriate",
            }
        )
        yield mock_post
