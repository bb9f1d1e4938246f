"""Pydantic schemas for API requests and responses."""

from app.schemas.integration import (
    IntegrationCreate,
    IntegrationResponse,
    InternalErrorResponse,
    ValidationErrorResponse,
)
from app.schemas.routes import (
    RouteContract,
    api,
    build_url,
    parse_response,
    validate_input,
)

__all__ = [
    "IntegrationCreate",
    "IntegrationResponse",
    "InternalErrorResponse",
    "ValidationErrorResponse",
    "RouteContract",
    "api",
    "build_url",
    "parse_response",
    "validate_input",
]
