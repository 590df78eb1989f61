# classifieds/models/analytics.py
"""
Analytics models.

This module contains:
- ListingView: one row per detail view of a listing, aggregated per day
  for the owner's analytics page
"""

from django.db import models
from django.utils import timezone


class ListingView(models.Model):
    """A single detail view of a listing."""

    view_id = models.AutoField(
        db_column="ViewID",
        primary_key=True,
        help_text="Unique identifier for the view record",
    )
    listing = models.ForeignKey(
        "Listing",
        models.CASCADE,
        db_column="ListingID",
        related_name="views",
        help_text="Viewed listing",
    )
    view_date = models.DateTimeField(
        db_column="ViewDate",
        default=timezone.now,
        help_text="When the listing was viewed",
    )
    user_agent = models.TextField(
        db_column="UserAgent",
        blank=True,
        null=True,
        help_text="User-Agent header of the viewer",
    )
    ip_address = models.CharField(
        db_column="IpAddress",
        max_length=45,
        blank=True,
        null=True,
        help_text="Client IP address of the viewer (IPv4 or IPv6)",
    )
    referrer = models.TextField(
        db_column="Referrer",
        blank=True,
        null=True,
        help_text="Referer header of the request",
    )

    class Meta:
        managed = True
        db_table = "ListingAnalytics"
        verbose_name = "Listing View"
        verbose_name_plural = "Listing Views"
        indexes = [
            models.Index(fields=["listing", "view_date"], name="listing_views_date_idx"),
        ]
        ordering = ["-view_date"]
        app_label = "classifieds"

    def __str__(self):
        return f"View of listing #{self.listing_id} at {self.view_date:%Y-%m-%d %H:%M}"
