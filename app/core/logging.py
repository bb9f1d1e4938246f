"""Structured logging configuration for application events."""

import logging
import sys
from datetime import UTC, datetime
from typing import Any

from pythonjsonlogger import jsonlogger

# Create logger for application events
app_logger = logging.getLogger("app")

HUMAN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
JSON_FORMAT = "%(timestamp)s %(level)s %(name)s %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(jsonlogger.JsonFormatter):
    """Render each record as a single JSON line."""

    def add_fields(
        self, log_record: dict[str, Any], record: logging.LogRecord, message_dict: dict[str, Any]
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = datetime.fromtimestamp(record.created, UTC).isoformat()
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def setup_logging(level: str = "INFO", log_format: str = "human") -> None:
    """
    Configure the "app" logger hierarchy.

    Safe to call more than once; the previous handlers are replaced.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: "human" for plain lines, "json" for one JSON object per line.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    if log_format == "json":
        console_handler.setFormatter(JsonFormatter(JSON_FORMAT))
    else:
        console_handler.setFormatter(logging.Formatter(HUMAN_FORMAT, datefmt=DATE_FORMAT))

    for handler in app_logger.handlers[:]:
        app_logger.removeHandler(handler)
    app_logger.addHandler(console_handler)
    app_logger.setLevel(log_level)
    app_logger.propagate = False


def mask_api_key(api_key: str) -> str:
    """
    Mask an API key for logging (show only the last 4 chars).

    Args:
        api_key: Secret to mask.

    Returns:
        Masked key string (e.g., "***-123").
    """
    if not api_key or len(api_key) <= 4:
        return "***"
    return f"***{api_key[-4:]}"


def get_client_info(request: Any) -> tuple[str | None, str | None]:
    """
    Extract IP address and user agent from FastAPI request.

    Args:
        request: FastAPI Request object.

    Returns:
        Tuple of (ip_address, user_agent).
    """
    ip_address = None
    if hasattr(request, "client") and request.client:
        ip_address = request.client.host

    # Check for forwarded IP (behind proxy/load balancer)
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        ip_address = forwarded_for.split(",")[0].strip()

    user_agent = request.headers.get("User-Agent")

    return ip_address, user_agent


def log_integration_created(
    integration_id: int,
    provider: str,
    api_key: str,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> None:
    """
    Log a stored integration key.

    Args:
        integration_id: Assigned row ID.
        provider: Provider identifier.
        api_key: Stored key (will be masked).
        ip_address: Client IP address (optional).
        user_agent: Client user agent (optional).
    """
    app_logger.info(
        f"Integration created - id={integration_id}, provider={provider}, "
        f"api_key={mask_api_key(api_key)}"
        + (f", ip={ip_address}" if ip_address else "")
        + (f", user_agent={user_agent}" if user_agent else "")
    )


def log_validation_failure(path: str, message: str, field: str | None = None) -> None:
    """
    Log a rejected request payload.

    Args:
        path: Request path.
        message: First validation message.
        field: Dotted path of the offending field (optional).
    """
    app_logger.warning(
        f"Validation failed - path={path}, message={message}"
        + (f", field={field}" if field else "")
    )
