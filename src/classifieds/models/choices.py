# classifieds/models/choices.py
"""
Choice field definitions for model enums and request parameters.

Centralized choice definitions keep the values used by models, serializers
and query-string parsing in one place.
"""

from collections.abc import Sequence as SequenceType
from enum import Enum


class ModerationStatus(str, Enum):
    """Moderation state of a listing."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"

    @classmethod
    def choices(cls) -> SequenceType[tuple[str, str]]:
        return [(item.value, item.name.title()) for item in cls]

    @classmethod
    def values(cls) -> SequenceType[str]:
        return [item.value for item in cls]


class VerdictCategory(str, Enum):
    """Category reported by the moderation oracle for a piece of content."""

    CONTENT_QUALITY = "content_quality"
    SPAM = "spam"
    SCAM = "scam"
    PROHIBITED = "prohibited"
    APPROPRIATE = "appropriate"
    INAPPROPRIATE = "inappropriate"
    UNKNOWN = "unknown"
    ERROR = "error"

    @classmethod
    def choices(cls) -> SequenceType[tuple[str, str]]:
        return [(item.value, item.name.replace("_", " ").title()) for item in cls]

    @classmethod
    def values(cls) -> SequenceType[str]:
        return [item.value for item in cls]


class ListingSort(str, Enum):
    """Sort orders accepted by the public listing search."""

    NEWEST = "newest"
    OLDEST = "oldest"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"

    @classmethod
    def choices(cls) -> SequenceType[tuple[str, str]]:
        return [(item.value, item.name.replace("_", " ").title()) for item in cls]

    @classmethod
    def values(cls) -> SequenceType[str]:
        return [item.value for item in cls]

    @property
    def ordering(self) -> list[str]:
        """ORM ordering for this sort, newest first as the tiebreaker."""
        return {
            ListingSort.NEWEST: ["-created_at", "-listing_id"],
            ListingSort.OLDEST: ["created_at", "listing_id"],
            ListingSort.PRICE_ASC: ["price", "-created_at"],
            ListingSort.PRICE_DESC: ["-price", "-created_at"],
        }[self]
