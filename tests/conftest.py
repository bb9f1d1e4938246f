import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from app.client.integrations_client import IntegrationsClient
from app.core.config_file import Settings
from app.core.db.session import Base, build_session_factory
from app.main import create_app
from app.models.integration import Integration  # noqa: F401
from app.repositories.integration_repository import DatabaseStorage, InMemoryStorage

# Test database URL (in-memory SQLite shared across threads)
TEST_DATABASE_URL = "sqlite://"


@pytest.fixture
def test_settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(
        _env_file=None,
        ENV="test",
        DEBUG=False,
        DATABASE_URL=TEST_DATABASE_URL,
        STORAGE_BACKEND="memory",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def test_engine():
    """Create test database engine with a fresh schema."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    """Session factory bound to the test engine."""
    return build_session_factory(test_engine)


@pytest.fixture
def storage(session_factory) -> DatabaseStorage:
    """Database-backed storage on the test engine."""
    return DatabaseStorage(session_factory)


@pytest.fixture
def memory_storage() -> InMemoryStorage:
    """Empty in-memory storage."""
    return InMemoryStorage()


@pytest.fixture
def test_app(storage, test_settings):
    """Application serving from the test database."""
    return create_app(storage=storage, settings=test_settings)


@pytest.fixture
def client(test_app):
    """HTTP test client."""
    with TestClient(test_app) as test_client:
        yield test_client


@pytest.fixture
def integrations_client(client) -> IntegrationsClient:
    """API client routed through the test client."""
    return IntegrationsClient(http_client=client)
