"""Integrations router: list and store provider API keys."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from app.core.db.deps import get_storage
from app.core.logging import get_client_info, log_integration_created
from app.repositories.integration_repository import IntegrationStorage
from app.schemas.integration import IntegrationCreate, IntegrationResponse
from app.schemas.routes import api

router = APIRouter(tags=["integrations"])


@router.get(
    api.integrations.list.path,
    response_model=list[IntegrationResponse],
    status_code=status.HTTP_200_OK,
    summary="List integrations",
    description="List every stored integration in storage order.",
    responses={
        200: {"description": "Integrations retrieved successfully"},
        500: {"model": api.errors["internal"], "description": "Storage failure"},
    },
)
def list_integrations(
    storage: Annotated[IntegrationStorage, Depends(get_storage)],
) -> list[IntegrationResponse]:
    """
    List all stored integrations.

    Args:
        storage: Storage configured at process start.

    Returns:
        List of integrations validated against the response contract.
    """
    integrations = storage.get_integrations()
    return [IntegrationResponse.model_validate(i) for i in integrations]


@router.post(
    api.integrations.create.path,
    response_model=IntegrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create integration",
    description="Store an API key for a provider. Each call appends a new row.",
    responses={
        201: {"description": "Integration created successfully"},
        400: {
            "model": api.errors["validation"],
            "description": "Invalid payload",
            "content": {
                "application/json": {
                    "example": {
                        "message": "String should have at least 1 character",
                        "field": "provider",
                    }
                }
            },
        },
        500: {"model": api.errors["internal"], "description": "Storage failure"},
    },
)
def create_integration(
    integration_data: IntegrationCreate,
    request: Request,
    storage: Annotated[IntegrationStorage, Depends(get_storage)],
) -> IntegrationResponse:
    """
    Store an API key for a provider.

    Args:
        integration_data: Validated payload (``provider``, ``apiKey``).
        request: FastAPI request object (for client info).
        storage: Storage configured at process start.

    Returns:
        The created integration, including its assigned ``id`` and ``createdAt``.

    Raises:
        StorageError: If the write fails (rendered as 500).
    """
    integration = storage.create_integration(
        provider=integration_data.provider,
        api_key=integration_data.api_key,
    )

    ip_address, user_agent = get_client_info(request)
    log_integration_created(
        integration.id, integration.provider, integration.api_key, ip_address, user_agent
    )

    return IntegrationResponse.model_validate(integration)
