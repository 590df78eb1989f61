# classifieds/models/base.py
"""
Abstract base models shared by the marketplace models.

- BaseModel: audit columns plus the integer active/deleted flags used by accounts
- TimeStampedModel: created_at / updated_at only
"""

from django.db import models


class BaseModel(models.Model):
    """
    Abstract base model with audit and soft-delete columns.

    The flags are stored as integers (1/0) so that lookups such as
    ``is_active=1, is_deleted=0`` match the rest of the schema.
    """

    is_active = models.IntegerField(
        db_column="IsActive",
        blank=True,
        null=True,
        default=1,
        help_text="Flag indicating if the record is active (1=active, 0=inactive)",
    )
    is_deleted = models.IntegerField(
        db_column="IsDeleted",
        blank=True,
        null=True,
        default=0,
        help_text="Flag indicating if the record is soft-deleted (1=deleted, 0=not deleted)",
    )
    created_at = models.DateTimeField(
        db_column="CreatedAt",
        auto_now_add=True,
        null=True,
        help_text="Timestamp when the record was created",
    )
    updated_at = models.DateTimeField(
        db_column="UpdatedAt",
        auto_now=True,
        null=True,
        help_text="Timestamp when the record was last updated",
    )
    created_by = models.IntegerField(
        db_column="CreatedBy",
        blank=True,
        null=True,
        help_text="ID of the user who created this record",
    )
    updated_by = models.IntegerField(
        db_column="UpdatedBy",
        blank=True,
        null=True,
        help_text="ID of the user who last updated this record",
    )

    class Meta:
        abstract = True
        get_latest_by = "created_at"

    def soft_delete(self) -> None:
        """Flag the record as deleted and inactive, keeping the row."""
        self.is_deleted = 1
        self.is_active = 0
        self.save(update_fields=["is_deleted", "is_active", "updated_at"])


class TimeStampedModel(models.Model):
    """Abstract base model providing creation and modification timestamps."""

    created_at = models.DateTimeField(
        db_column="CreatedAt",
        auto_now_add=True,
        help_text="Timestamp when the record was created",
    )
    updated_at = models.DateTimeField(
        db_column="UpdatedAt",
        auto_now=True,
        help_text="Timestamp when the record was last updated",
    )

    class Meta:
        abstract = True
        get_latest_by = "created_at"
