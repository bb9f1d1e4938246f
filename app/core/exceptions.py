"""Custom exceptions shared by the API, the storage layer and the client."""

from typing import Any


class ContractValidationError(ValueError):
    """Payload does not match the integrations contract.

    Carries the first offending error only, so callers can answer with a
    ``{"message": ..., "field": ...}`` body without leaking schema internals.

    Example:
        raise ContractValidationError(
            message="String should have at least 1 character",
            field="provider",
        )
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize contract validation error.

        Args:
            message: Human-readable error message.
            field: Dotted path of the offending field, if any.
        """
        super().__init__(message)
        self.message = message
        self.field = field

    def to_dict(self) -> dict[str, Any]:
        """Body for a 400 response (``field`` omitted when unknown)."""
        body: dict[str, Any] = {"message": self.message}
        if self.field:
            body["field"] = self.field
        return body


class StorageError(RuntimeError):
    """Backing store failed to read or write integrations."""


class IntegrationClientError(RuntimeError):
    """Integrations API answered with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize client error.

        Args:
            message: Message returned by the server, or a generic fallback.
            status_code: HTTP status of the failed response (optional).
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
