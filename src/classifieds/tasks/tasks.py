import logging

from celery import shared_task

from classifiedsutils.log_helpers import log_task

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, default_retry_delay=30)
def delete_listing_files_task(self, image_paths: list[str]):
    """
    Remove the stored files of a deleted listing.

    Queued after the delete commits, so the rows are already gone when
    this runs. Files that no longer exist are skipped.

    Args:
        image_paths: storage paths of the listing's images
    """
    from classifieds.services.upload_service import UploadService

    try:
        removed = UploadService.delete_files(image_paths)
    except OSError as exc:
        logger.warning(f"Could not remove listing files {image_paths}: {exc}")
        status = "failure" if self.request.retries >= self.max_retries else "retry"
        log_task(
            "delete_listing_files", status, error=exc,
            image_count=len(image_paths), retries=self.request.retries,
        )
        raise self.retry(exc=exc) from exc

    result = {"requested": len(image_paths), "removed": removed}
    log_task("delete_listing_files", "success", result=result)
    return result


@shared_task
def prune_listing_views_task(days: int | None = None):
    """
    Periodic task that deletes view records older than the retention window.

    Args:
        days: retention in days (defaults to LISTING_VIEW_RETENTION_DAYS)
    """
    from django.conf import settings

    from classifieds.services.analytics_service import AnalyticsService

    days = days or getattr(settings, "LISTING_VIEW_RETENTION_DAYS", 365)
    deleted = AnalyticsService.prune_views(days)
    logger.info(f"Pruned {deleted} listing views older than {days} days")
    log_task("prune_listing_views", "success", result=deleted, days=days)
    return {"days": days, "deleted": deleted}
