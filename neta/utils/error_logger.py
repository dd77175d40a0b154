"""
Structured error logging for sources and the guide batch.

Records go through the standard logging tree, so the JSONL handler installed
by neta.core.logging.setup_logging stores ``component``, ``operation``,
``item_id``, ``context_data`` and ``http_details`` alongside the message.
"""

from typing import Any

import httpx

from neta.core.logging import get_logger


def _extract_http_details(response: httpx.Response) -> dict[str, Any]:
    return {
        "status_code": response.status_code,
        "url": str(response.url),
        "response_body": response.text[:1000],
    }


def log_error(
    component: str,
    error: Exception,
    *,
    operation: str | None = None,
    context: dict[str, Any] | None = None,
    http_response: httpx.Response | None = None,
    item_id: str | None = None,
) -> None:
    """Log ``error`` at ERROR with traceback and structured fields."""
    operation_str = f" during {operation}" if operation else ""
    item_str = f" (item: {item_id})" if item_id else ""
    http_details = None
    if http_response is not None:
        http_details = _extract_http_details(http_response)

    get_logger(f"error.{component}").error(
        f"{component} error{operation_str}{item_str}: {error}",
        exc_info=error,
        extra={
            "component": component,
            "operation": operation,
            "context_data": context,
            "http_details": http_details,
            "item_id": item_id,
            "error_type": type(error).__name__,
            "error_message": str(error),
        },
    )


def log_processing_error(
    component: str,
    item_id: str,
    error: Exception,
    *,
    operation: str | None = None,
    context: dict[str, Any] | None = None,
) -> None:
    log_error(
        component,
        error,
        operation=operation or "item_processing",
        context=context,
        item_id=item_id,
    )


def log_http_error(
    component: str,
    url: str,
    *,
    response: httpx.Response,
    operation: str | None = None,
    context: dict[str, Any] | None = None,
) -> None:
    """Log a non-2xx upstream response with its status and body excerpt."""
    error = Exception(f"HTTP error for {url} (status: {response.status_code})")
    log_error(
        component,
        error,
        operation=operation or "http_request",
        context={"url": url, **(context or {})},
        http_response=response,
    )


def log_feed_error(
    component: str,
    feed_url: str,
    error: Exception,
    *,
    feed_name: str | None = None,
    entries_processed: int | None = None,
) -> None:
    log_error(
        component,
        error,
        operation="feed_processing",
        context={
            "feed_url": feed_url,
            "feed_name": feed_name,
            "entries_processed": entries_processed,
        },
    )
