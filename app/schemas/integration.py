"""Integration schemas for API requests and responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class IntegrationCreate(BaseModel):
    """Schema for storing an API key for a provider.

    ``id`` and ``createdAt`` are assigned by storage; unknown keys are dropped.
    """

    model_config = ConfigDict(
        extra="ignore",
        validate_by_name=True,
        validate_by_alias=True,
        serialize_by_alias=True,
        json_schema_extra={"example": {"provider": "slack", "apiKey": "xoxb-123"}},
    )

    provider: str = Field(
        ..., description="Provider identifier (e.g. 'notion')", min_length=1, strict=True
    )
    api_key: str = Field(
        ..., alias="apiKey", description="Provider API key", min_length=1, strict=True
    )


class IntegrationResponse(BaseModel):
    """Schema for a stored integration."""

    model_config = ConfigDict(
        from_attributes=True,
        validate_by_name=True,
        validate_by_alias=True,
        serialize_by_alias=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "provider": "slack",
                "apiKey": "xoxb-123",
                "createdAt": "2025-01-17T10:00:00Z",
            }
        },
    )

    id: int
    provider: str
    api_key: str = Field(..., alias="apiKey")
    created_at: datetime | None = Field(None, alias="createdAt")


class ValidationErrorResponse(BaseModel):
    """Body of a 400 response."""

    message: str = Field(..., description="Human-readable error message")
    field: str | None = Field(None, description="Dotted path of the offending field")


class InternalErrorResponse(BaseModel):
    """Body of a 500 response."""

    message: str = Field(..., description="Human-readable error message")
