# classifieds/models/__init__.py
"""
Models package for the classifieds application.

Models are organized by domain:
- Base model classes
- User and authentication models
- Categories
- Listings and their images
- Favorites
- View analytics
"""

from .analytics import ListingView
from .base import BaseModel, TimeStampedModel
from .category import Category
from .choices import ListingSort, ModerationStatus, VerdictCategory
from .favorite import UserFavorite
from .listing import Listing, ListingImage, ListingQuerySet
from .user import Role, User, UserManager

__all__ = [
    # Base models
    "BaseModel",
    # Domain models
    "Category",
    "Listing",
    "ListingImage",
    "ListingQuerySet",
    # Choices/Enums
    "ListingSort",
    "ListingView",
    "ModerationStatus",
    "Role",
    "TimeStampedModel",
    "User",
    "UserFavorite",
    "UserManager",
    "VerdictCategory",
]
