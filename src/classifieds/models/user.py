# classifieds/models/user.py
"""
User and authentication-related models.

This module contains:
- Role: role constants used in JWT claims and permissions
- UserManager: custom manager for creating users
- User: marketplace account with profile and two-factor settings
"""

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import models

from .base import BaseModel


class Role:
    """User role constants."""

    ADMIN = "Admin"
    USER = "User"
    MODERATOR = "Moderator"

    CHOICES = [
        (ADMIN, "Administrator"),
        (USER, "Standard User"),
        (MODERATOR, "Moderator"),
    ]

    # Roles allowed to review and decide on pending listings
    REVIEWERS = (ADMIN, MODERATOR)


class UserManager(BaseUserManager):
    """
    Custom manager for User model.

    Provides create_user() and create_superuser() methods
    compatible with Django's auth system.
    """

    def create_user(self, email, password=None, **extra_fields):
        """Create and return a regular user with an email and password."""
        if not email:
            raise ValueError("The Email field must be set")
        email = self.normalize_email(email)
        extra_fields.setdefault("role", Role.USER)
        extra_fields.setdefault("is_active", 1)
        extra_fields.setdefault("is_deleted", 0)
        extra_fields.setdefault("is_staff", False)

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """Create and return a superuser with admin privileges."""
        extra_fields.setdefault("role", Role.ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, BaseModel):
    """
    Marketplace account.

    Email is the login name. ``two_factor_secret`` holds the base32 TOTP
    secret once setup has started; ``two_factor_enabled`` flips only after
    the first code has been verified.
    """

    user_id = models.AutoField(
        db_column="UserID",
        primary_key=True,
        help_text="Unique identifier for the user",
    )
    email = models.CharField(
        db_column="Email",
        unique=True,
        max_length=255,
        help_text="User's email address (used for login)",
    )
    password = models.CharField(
        db_column="PasswordHash",
        max_length=255,
        help_text="Hashed password",
    )
    first_name = models.CharField(
        db_column="FirstName",
        max_length=100,
        blank=True,
        default="",
        help_text="User's first name",
    )
    last_name = models.CharField(
        db_column="LastName",
        max_length=100,
        blank=True,
        default="",
        help_text="User's last name",
    )
    phone = models.CharField(
        db_column="Phone",
        max_length=20,
        blank=True,
        null=True,
        help_text="User's phone number",
    )
    profile_image_url = models.CharField(
        db_column="ProfileImageUrl",
        max_length=500,
        blank=True,
        null=True,
        help_text="URL of the user's profile picture",
    )
    role = models.CharField(
        db_column="Role",
        max_length=12,
        choices=Role.CHOICES,
        default=Role.USER,
        help_text="User role determining permissions",
    )

    # Django auth integration fields
    is_staff = models.BooleanField(
        default=False,
        help_text="Designates whether the user can log into the admin site.",
    )
    is_superuser = models.BooleanField(
        default=False,
        help_text="Designates that this user has all permissions.",
    )
    last_login = models.DateTimeField(
        db_column="LastLogin",
        blank=True,
        null=True,
        help_text="Last login timestamp",
    )

    # Two-factor authentication
    two_factor_secret = models.CharField(
        db_column="TwoFactorSecret",
        max_length=64,
        blank=True,
        null=True,
        help_text="Base32 TOTP secret generated during two-factor setup",
    )
    two_factor_enabled = models.BooleanField(
        db_column="TwoFactorEnabled",
        default=False,
        help_text="Whether a verified TOTP code is required at login",
    )

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        managed = True
        db_table = "Users"
        verbose_name = "User"
        verbose_name_plural = "Users"
        indexes = [
            models.Index(fields=["email", "is_active"], name="users_email_active_idx"),
            models.Index(fields=["role", "is_active"], name="users_role_active_idx"),
        ]
        app_label = "classifieds"

    def __str__(self) -> str:
        return f"{self.full_name} ({self.email})"

    @property
    def id(self) -> int:
        """Alias for user_id to support generic access patterns."""
        return self.user_id

    @property
    def full_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.email

    def clean(self) -> None:
        """Validate email format before saving."""
        if self.email:
            try:
                validate_email(self.email)
            except ValidationError:
                raise ValidationError(
                    {"email": "Enter a valid email address."}
                ) from None

    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def is_moderator(self) -> bool:
        """Moderators and admins can both review listings."""
        return self.role in Role.REVIEWERS

    def has_perm(self, perm, obj=None) -> bool:
        if self.is_superuser:
            return True
        return self.role == Role.ADMIN

    def has_module_perms(self, app_label) -> bool:
        if self.is_superuser:
            return True
        return self.role == Role.ADMIN
