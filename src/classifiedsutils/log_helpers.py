# classifiedsutils/log_helpers.py
"""
Helpers for the log events the marketplace emits over and over:
authentication outcomes, listing lifecycle events and background tasks.

Usage:
    from classifiedsutils.log_helpers import log_business_event

    log_business_event("listing_approved", user_id=7, listing_id=42)
"""

from typing import Any

from django.http import HttpRequest

from .logging import get_logger

logger = get_logger("classifieds.events")


def get_client_ip(request: HttpRequest) -> str:
    """Client address, honouring the first hop of ``X-Forwarded-For``."""
    forwarded_for = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR", "")


def log_auth_event(
    event_type: str,
    user_id: int | None = None,
    email: str | None = None,
    success: bool = True,
    failure_reason: str | None = None,
    **extra_context: Any,
) -> None:
    """
    Log an authentication event (login, register, 2fa_enabled, ...).

    Failures are logged at warning level.

    Example:
        log_auth_event("login", email="user@example.com", success=False,
                       failure_reason="invalid_otp")
    """
    context = {"auth_event": event_type, "auth_success": success}
    if user_id:
        context["user_id"] = user_id
    if email:
        context["user_email"] = email
    if failure_reason:
        context["failure_reason"] = failure_reason
    context.update(extra_context)

    if success:
        logger.info("auth_event", **context)
    else:
        logger.warning("auth_event", **context)


def log_business_event(
    event_type: str,
    user_id: int | None = None,
    listing_id: int | None = None,
    status: str | None = None,
    **extra_context: Any,
) -> None:
    """
    Log a listing lifecycle event.

    Example:
        log_business_event("listing_submitted", user_id=3, listing_id=42,
                           status="pending", image_count=2)
    """
    context = {"business_event": event_type}
    if user_id:
        context["user_id"] = user_id
    if listing_id:
        context["listing_id"] = listing_id
    if status:
        context["status"] = status
    context.update(extra_context)

    logger.info("business_event", **context)


def log_task(
    task_name: str,
    status: str,
    result: Any = None,
    error: Exception | None = None,
    **extra_context: Any,
) -> None:
    """Log a Celery task outcome (started, success, retry, failure)."""
    context = {"task_name": task_name, "task_status": status}
    if result is not None:
        context["task_result"] = str(result)[:500]
    if error:
        context["exception_type"] = type(error).__name__
        context["exception_message"] = str(error)
    context.update(extra_context)

    if status == "failure":
        logger.error("celery_task", **context)
    else:
        logger.info("celery_task", **context)


__all__ = [
    "get_client_ip",
    "log_auth_event",
    "log_business_event",
    "log_task",
]
