"""Integration storage: the capability interface and its backends."""

import logging
import threading
from datetime import UTC, datetime
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from app.core.exceptions import StorageError
from app.models.integration import Integration

logger = logging.getLogger(__name__)


class IntegrationStorage(Protocol):
    """Protocol for integration storage operations.

    Every backend stores rows append-only; a provider may appear more than once.
    """

    def get_integrations(self) -> list[Integration]:
        """Return every stored integration in natural storage order.

        Raises:
            StorageError: If the backing store cannot be read
        """
        ...

    def create_integration(self, provider: str, api_key: str) -> Integration:
        """Insert a new integration and return it with ``id`` and ``created_at`` set.

        Raises:
            StorageError: If the write fails
        """
        ...


class DatabaseStorage:
    """SQLAlchemy implementation of IntegrationStorage."""

    def __init__(self, session_factory: sessionmaker):
        """Initialize storage with a session factory."""
        self.session_factory = session_factory

    def get_integrations(self) -> list[Integration]:
        """Get all integrations, oldest first."""
        try:
            with self.session_factory() as db:
                return db.query(Integration).order_by(Integration.id).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to list integrations: {e}")
            raise StorageError("Failed to read integrations") from e

    def create_integration(self, provider: str, api_key: str) -> Integration:
        """Create a new integration."""
        with self.session_factory() as db:
            integration = Integration(provider=provider, api_key=api_key)
            try:
                db.add(integration)
                db.commit()
                db.refresh(integration)
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Failed to create integration for provider={provider}: {e}")
                raise StorageError("Failed to store integration") from e
            return integration


class InMemoryStorage:
    """List-backed implementation of IntegrationStorage.

    Suitable for development and tests; ids start at 1 and are never reused.
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._rows: list[Integration] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def get_integrations(self) -> list[Integration]:
        """Get all integrations, oldest first."""
        with self._lock:
            return list(self._rows)

    def create_integration(self, provider: str, api_key: str) -> Integration:
        """Create a new integration."""
        with self._lock:
            integration = Integration(
                id=self._next_id,
                provider=provider,
                api_key=api_key,
                created_at=datetime.now(UTC),
            )
            self._rows.append(integration)
            self._next_id += 1
            return integration
