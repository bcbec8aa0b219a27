"""Structured error logging for request handlers."""

from datetime import datetime, timezone


def log_error(logger, error, context):
    """Log ``error`` with a timestamp and a context dict.

    ``context`` usually names the endpoint, message id, operation and caller
    role so failures can be traced back to one request.

    Usage:
        log_error(logger, e, {
            'endpoint': 'POST /api/translations',
            'messageId': message_id,
            'operation': 'cache_storage',
        })
    """
    logger.error(
        f"[{type(error).__name__}] {error} | "
        f"timestamp={datetime.now(timezone.utc).isoformat()} context={context}",
        exc_info=error,
    )
