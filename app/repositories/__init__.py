"""Repositories for data access operations."""

from app.repositories.integration_repository import (
    DatabaseStorage,
    InMemoryStorage,
    IntegrationStorage,
)

__all__ = [
    "DatabaseStorage",
    "InMemoryStorage",
    "IntegrationStorage",
]
