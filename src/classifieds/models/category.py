# classifieds/models/category.py
"""
Listing categories.

Categories are reference data: the default set is seeded by a data
migration and by the ``seed_categories`` management command.
"""

from django.db import models


class Category(models.Model):
    """A browsable category that listings are filed under."""

    category_id = models.AutoField(
        db_column="CategoryID",
        primary_key=True,
        help_text="Unique identifier for the category",
    )
    name = models.CharField(
        db_column="Name",
        max_length=100,
        help_text="Display name of the category",
    )
    slug = models.SlugField(
        db_column="Slug",
        max_length=100,
        unique=True,
        help_text="URL-safe unique identifier of the category",
    )
    icon = models.CharField(
        db_column="Icon",
        max_length=50,
        blank=True,
        null=True,
        help_text="Icon class shown next to the category (e.g. 'fas fa-car')",
    )
    description = models.TextField(
        db_column="Description",
        blank=True,
        null=True,
        help_text="Short description of the category",
    )
    is_active = models.BooleanField(
        db_column="IsActive",
        default=True,
        help_text="Inactive categories are hidden and reject new listings",
    )
    sort_order = models.IntegerField(
        db_column="SortOrder",
        default=0,
        help_text="Position of the category in menus",
    )
    created_at = models.DateTimeField(
        db_column="CreatedAt",
        auto_now_add=True,
        help_text="Timestamp when the category was created",
    )

    class Meta:
        managed = True
        db_table = "Categories"
        verbose_name = "Category"
        verbose_name_plural = "Categories"
        ordering = ["sort_order", "name"]
        app_label = "classifieds"

    def __str__(self):
        return self.name
