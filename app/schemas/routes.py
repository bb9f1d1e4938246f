"""Shared route contract for the integrations API.

One table describes each endpoint (method, path, input schema, response
schema per status). The server validates requests and responses against it
and the client validates what it sends and what it receives against the
same definitions.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from app.core.exceptions import ContractValidationError
from app.schemas.integration import (
    IntegrationCreate,
    IntegrationResponse,
    InternalErrorResponse,
    ValidationErrorResponse,
)

# Location prefixes FastAPI adds in front of the field path
REQUEST_LOCATIONS = frozenset({"body", "query", "path", "header", "cookie"})

error_schemas: dict[str, type[BaseModel]] = {
    "validation": ValidationErrorResponse,
    "internal": InternalErrorResponse,
}


@dataclass(frozen=True)
class RouteContract:
    """Contract for a single endpoint."""

    method: str
    path: str
    responses: Mapping[int, TypeAdapter]
    input: type[BaseModel] | None = None


@dataclass(frozen=True)
class IntegrationRoutes:
    list: RouteContract
    create: RouteContract


@dataclass(frozen=True)
class ApiContract:
    integrations: IntegrationRoutes
    errors: Mapping[str, type[BaseModel]] = field(default_factory=lambda: dict(error_schemas))


api = ApiContract(
    integrations=IntegrationRoutes(
        list=RouteContract(
            method="GET",
            path="/api/integrations",
            responses={
                200: TypeAdapter(list[IntegrationResponse]),
                500: TypeAdapter(error_schemas["internal"]),
            },
        ),
        create=RouteContract(
            method="POST",
            path="/api/integrations",
            input=IntegrationCreate,
            responses={
                201: TypeAdapter(IntegrationResponse),
                400: TypeAdapter(error_schemas["validation"]),
                500: TypeAdapter(error_schemas["internal"]),
            },
        ),
    )
)


def first_error(
    errors: Iterable[Mapping[str, Any]], strip_location: bool = False
) -> ContractValidationError:
    """Build a ContractValidationError from the first pydantic-style error.

    Args:
        errors: Errors as returned by ``ValidationError.errors()`` or
            ``RequestValidationError.errors()``.
        strip_location: Drop a leading request location such as ``body``.

    Returns:
        ContractValidationError with the message and dotted field path.
    """
    for error in errors:
        loc = list(error.get("loc", ()))
        if strip_location and loc and loc[0] in REQUEST_LOCATIONS:
            loc = loc[1:]
            # A lone int here is a character offset into an undecodable body.
            if len(loc) == 1 and isinstance(loc[0], int):
                loc = []
        if error.get("type") == "json_invalid":
            loc = []
        field_path = ".".join(str(part) for part in loc) or None
        return ContractValidationError(message=error.get("msg", "Invalid input"), field=field_path)
    return ContractValidationError(message="Invalid input")


def validate_input(route: RouteContract, payload: Any) -> BaseModel:
    """
    Validate an outgoing or incoming request payload.

    Args:
        route: Endpoint contract (must declare an input schema).
        payload: Decoded JSON payload.

    Returns:
        Validated input model (server-assigned keys stripped).

    Raises:
        ContractValidationError: If the payload does not match.
    """
    if route.input is None:
        raise ContractValidationError(message=f"{route.method} {route.path} takes no input")
    try:
        return route.input.model_validate(payload)
    except ValidationError as e:
        raise first_error(e.errors()) from None


def parse_response(route: RouteContract, status_code: int, data: Any) -> Any:
    """
    Validate a response body against the schema declared for its status.

    Args:
        route: Endpoint contract.
        status_code: HTTP status of the response.
        data: Decoded JSON body.

    Returns:
        Validated model (or list of models).

    Raises:
        ContractValidationError: If the status is undeclared or the body does not match.
    """
    adapter = route.responses.get(status_code)
    if adapter is None:
        raise ContractValidationError(
            message=f"Unexpected status {status_code} for {route.method} {route.path}"
        )
    try:
        return adapter.validate_python(data)
    except ValidationError as e:
        raise first_error(e.errors()) from None


def build_url(path: str, params: Mapping[str, str | int] | None = None) -> str:
    """
    Substitute ``:name`` placeholders in a route path.

    Args:
        path: Route path, e.g. ``/api/integrations/:id``.
        params: Placeholder values; unknown keys are ignored.

    Returns:
        Path with placeholders replaced.
    """
    url = path
    if params:
        for key, value in params.items():
            placeholder = f":{key}"
            if placeholder in url:
                url = url.replace(placeholder, str(value))
    return url
