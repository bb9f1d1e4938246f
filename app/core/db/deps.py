from fastapi import Request

from app.repositories.integration_repository import IntegrationStorage


def get_storage(request: Request) -> IntegrationStorage:
    """
    Dependency function that provides the integration storage.

    The instance is created once by ``create_app`` and held on ``app.state``.

    Returns:
        IntegrationStorage: storage configured at process start
    """
    return request.app.state.storage
