from .tasks import delete_listing_files_task, prune_listing_views_task

__all__ = ["delete_listing_files_task", "prune_listing_views_task"]
