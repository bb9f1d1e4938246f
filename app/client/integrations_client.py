"""HTTP client for the integrations API.

Validates outgoing payloads and incoming bodies against the shared route
contract, so callers only ever see contract-shaped data.
"""

import logging
from typing import Any

import httpx

from app.core.exceptions import IntegrationClientError
from app.schemas.integration import IntegrationCreate, IntegrationResponse
from app.schemas.routes import RouteContract, api, build_url, parse_response, validate_input

logger = logging.getLogger(__name__)


class IntegrationsClient:
    """Client for ``/api/integrations``."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = 10.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: API root (e.g. ``http://localhost:8000``).
            timeout: Request timeout in seconds.
            http_client: Pre-built client (e.g. a FastAPI ``TestClient``);
                takes precedence over ``base_url``.
        """
        if http_client is None and base_url is None:
            raise ValueError("Either base_url or http_client is required")
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "IntegrationsClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def list_integrations(self) -> list[IntegrationResponse]:
        """
        Fetch every stored integration.

        Returns:
            Integrations validated against the list response contract.

        Raises:
            IntegrationClientError: If the server answers with an error status.
            ContractValidationError: If the body does not match the contract.
        """
        route = api.integrations.list
        response = self._client.request(route.method, build_url(route.path))
        if response.is_error:
            logger.warning(f"List integrations failed - status={response.status_code}")
            raise IntegrationClientError("Failed to fetch integrations", response.status_code)
        return parse_response(route, response.status_code, response.json())

    def create_integration(self, provider: str, api_key: str) -> IntegrationResponse:
        """
        Store an API key for a provider.

        The payload is validated before anything is sent.

        Args:
            provider: Provider identifier.
            api_key: Key to store.

        Returns:
            The created integration.

        Raises:
            ContractValidationError: If the payload or the response body does not match.
            IntegrationClientError: If the server answers with an error status.
        """
        route = api.integrations.create
        validated: IntegrationCreate = validate_input(
            route, {"provider": provider, "apiKey": api_key}
        )

        response = self._client.request(
            route.method,
            build_url(route.path),
            json=validated.model_dump(mode="json", by_alias=True),
        )
        if response.is_error:
            raise IntegrationClientError(
                _error_message(route, response, "Failed to create integration"),
                response.status_code,
            )
        return parse_response(route, response.status_code, response.json())


def _error_message(route: RouteContract, response: httpx.Response, fallback: str) -> str:
    """Server-provided ``message`` when the error body matches the contract."""
    try:
        error = parse_response(route, response.status_code, response.json())
    except ValueError:
        return fallback
    return error.message or fallback
