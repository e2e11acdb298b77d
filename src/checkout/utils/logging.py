"""Structured logging utilities with correlation ID support.

Provides:
- Correlation ID context management for request tracing
- Structured logging formatter for consistent log output
- Helper functions for checkout and webhook logging

Usage:
    from checkout.utils.logging import get_logger, set_correlation_id

    # In middleware/request handler:
    set_correlation_id(request.headers.get("X-Correlation-ID"))

    # In service code:
    logger = get_logger(__name__)
    logger.info("Creating session", extra={"amount": 500})
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Any

# Context variable for correlation ID - thread-safe and async-safe
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def generate_correlation_id() -> str:
    """Generate a new correlation ID.

    Returns:
        UUID-based correlation ID string
    """
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set the correlation ID for the current request context.

    Args:
        correlation_id: Optional existing correlation ID. If None, generates new one.

    Returns:
        The correlation ID that was set
    """
    cid = correlation_id or generate_correlation_id()
    _correlation_id.set(cid)
    return cid


def get_correlation_id() -> str | None:
    """Get the current correlation ID."""
    return _correlation_id.get()


def clear_correlation_id() -> None:
    """Clear the correlation ID context."""
    _correlation_id.set(None)


class CorrelationIdFilter(logging.Filter):
    """Logging filter that adds correlation_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "no-correlation-id"
        return True


class StructuredFormatter(logging.Formatter):
    """Formatter for structured log output with correlation ID."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "correlation_id"):
            record.correlation_id = get_correlation_id() or "no-correlation-id"

        base = super().format(record)

        # Prefix for easy grep/filtering
        return f"[{record.correlation_id}] {base}"


def configure_logging(level: int | str = logging.INFO) -> None:
    """Install the structured formatter on the root logger.

    Safe to call more than once; an existing structured handler is reused.

    Args:
        level: Root log level
    """
    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers:
        if isinstance(handler.formatter, StructuredFormatter):
            return

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter(LOG_FORMAT))
    handler.addFilter(CorrelationIdFilter())
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with correlation ID support.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not any(isinstance(f, CorrelationIdFilter) for f in logger.filters):
        logger.addFilter(CorrelationIdFilter())

    return logger


def log_payment_operation(
    logger: logging.Logger,
    operation: str,
    *,
    session_id: str | None = None,
    client_reference_id: str | None = None,
    amount: int | None = None,
    currency: str | None = None,
    error: str | None = None,
    **extra: Any,
) -> None:
    """Log a checkout operation with structured context.

    Args:
        logger: Logger instance
        operation: Operation name (e.g., "create_checkout_session")
        session_id: Checkout session ID if available
        client_reference_id: Correlation ID attached to the session
        amount: Amount in minor units if relevant
        currency: Currency code if relevant
        error: Error message if operation failed
        **extra: Additional context fields
    """
    context: dict[str, Any] = {"operation": operation}

    if session_id:
        context["session_id"] = session_id
    if client_reference_id:
        context["client_reference_id"] = client_reference_id
    if amount is not None:
        context["amount"] = amount
    if currency:
        context["currency"] = currency
    if error:
        context["error"] = error

    context.update(extra)

    msg_parts = [f"Payment operation: {operation}"]
    for key, value in context.items():
        if key != "operation":
            msg_parts.append(f"{key}={value}")

    message = " | ".join(msg_parts)

    if error:
        logger.error(message, extra=context)
    else:
        logger.info(message, extra=context)


def log_webhook_event(
    logger: logging.Logger,
    event_type: str,
    event_id: str,
    *,
    result: str | None = None,
    error: str | None = None,
    **fields: Any,
) -> None:
    """Log a webhook event with structured context.

    Every keyword in ``fields`` is appended to the message as ``key=value``
    and attached to the record under ``extra["fields"]``.

    Args:
        logger: Logger instance
        event_type: Stripe event type (e.g., "checkout.session.completed")
        event_id: Stripe event ID
        result: Processing result (received, handled, skipped, error)
        error: Error message if processing failed
        **fields: Event-specific fields to log
    """
    context: dict[str, Any] = {
        "event_type": event_type,
        "event_id": event_id,
        "fields": dict(fields),
    }

    if result:
        context["result"] = result
    if error:
        context["error"] = error

    msg_parts = [f"Webhook event: {event_type} ({event_id})"]
    if result:
        msg_parts.append(f"result={result}")
    for key, value in fields.items():
        msg_parts.append(f"{key}={value}")
    if error:
        msg_parts.append(f"error={error}")

    message = " | ".join(msg_parts)

    if result == "error":
        logger.error(message, extra=context)
    elif result == "skipped":
        logger.warning(message, extra=context)
    else:
        logger.info(message, extra=context)
