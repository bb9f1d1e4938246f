"""Integration tests for IntegrationsClient."""

from unittest.mock import patch

import httpx
import pytest

from app.client.integrations_client import IntegrationsClient
from app.core.exceptions import (
    ContractValidationError,
    IntegrationClientError,
    StorageError,
)
from app.schemas.integration import IntegrationResponse
from app.schemas.routes import build_url


def _mock_client(handler) -> IntegrationsClient:
    transport = httpx.MockTransport(handler)
    return IntegrationsClient(http_client=httpx.Client(transport=transport, base_url="http://orcho.test"))


def test_list_empty(integrations_client):
    """Test listing an empty store."""
    assert integrations_client.list_integrations() == []


def test_create_and_list(integrations_client):
    """Test the created record matches what the listing returns."""
    created = integrations_client.create_integration("slack", "xoxb-123")

    assert isinstance(created, IntegrationResponse)
    assert created.id == 1
    assert created.provider == "slack"
    assert created.api_key == "xoxb-123"
    assert integrations_client.list_integrations() == [created]


def test_invalid_input_is_not_sent(integrations_client, storage):
    """Test payloads failing the contract never reach the server."""
    with patch.object(storage, "create_integration") as mock_create:
        with pytest.raises(ContractValidationError) as exc_info:
            integrations_client.create_integration("", "xoxb-123")

    assert exc_info.value.field == "provider"
    mock_create.assert_not_called()


def test_server_error_message_is_surfaced(integrations_client, storage):
    """Test the server's message is carried by the client error."""
    with patch.object(
        storage, "create_integration", side_effect=StorageError("Failed to store integration")
    ):
        with pytest.raises(IntegrationClientError) as exc_info:
            integrations_client.create_integration("slack", "k")

    assert exc_info.value.message == "Failed to store integration"
    assert exc_info.value.status_code == 500


def test_validation_response_message_is_surfaced():
    """Test a 400 body's message becomes the error message."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json={"message": "Provider is disabled", "field": "provider"})

    with _mock_client(handler) as client:
        with pytest.raises(IntegrationClientError) as exc_info:
            client.create_integration("slack", "k")

    assert str(exc_info.value) == "Provider is disabled"
    assert exc_info.value.status_code == 400


def test_create_error_without_json_uses_fallback():
    """Test a non-JSON error body falls back to a generic message."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="Bad Gateway")

    with _mock_client(handler) as client:
        with pytest.raises(IntegrationClientError) as exc_info:
            client.create_integration("slack", "k")

    assert exc_info.value.message == "Failed to create integration"


def test_list_error():
    """Test a failing listing raises a generic client error."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"message": "Failed to read integrations"})

    with _mock_client(handler) as client:
        with pytest.raises(IntegrationClientError) as exc_info:
            client.list_integrations()

    assert exc_info.value.message == "Failed to fetch integrations"


def test_sends_contract_payload():
    """Test the request uses the contract method, path and wire names."""
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = request.read()
        return httpx.Response(
            201, json={"id": 4, "provider": "github", "apiKey": "ghp_1", "createdAt": None}
        )

    with _mock_client(handler) as client:
        created = client.create_integration("github", "ghp_1")

    assert seen["method"] == "POST"
    assert seen["path"] == "/api/integrations"
    assert httpx.Response(200, content=seen["body"]).json() == {"provider": "github", "apiKey": "ghp_1"}
    assert created.id == 4


def test_malformed_response_is_rejected():
    """Test a body not matching the contract raises ContractValidationError."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"provider": "slack"}])

    with _mock_client(handler) as client:
        with pytest.raises(ContractValidationError):
            client.list_integrations()


def test_requires_base_url_or_client():
    with pytest.raises(ValueError):
        IntegrationsClient()


def test_error_body_outside_contract_uses_fallback():
    """Test a 500 body that does not match the error schema is not surfaced."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "boom"})

    with _mock_client(handler) as client:
        with pytest.raises(IntegrationClientError) as exc_info:
            client.create_integration("slack", "k")

    assert exc_info.value.message == "Failed to create integration"
    assert exc_info.value.status_code == 500


def test_undeclared_error_status_uses_fallback():
    """Test a message on a status the contract does not declare is not surfaced."""

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Not Found"})

    with _mock_client(handler) as client:
        with pytest.raises(IntegrationClientError) as exc_info:
            client.create_integration("slack", "k")

    assert exc_info.value.message == "Failed to create integration"


def test_requests_go_through_build_url():
    """Test both calls resolve their path through the contract URL builder."""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        if request.method == "POST":
            return httpx.Response(
                201, json={"id": 1, "provider": "slack", "apiKey": "k", "createdAt": None}
            )
        return httpx.Response(200, json=[])

    with patch(
        "app.client.integrations_client.build_url", wraps=build_url
    ) as url_builder, _mock_client(handler) as client:
        client.list_integrations()
        client.create_integration("slack", "k")

    assert url_builder.call_count == 2
    assert seen == [("GET", "/api/integrations"), ("POST", "/api/integrations")]
