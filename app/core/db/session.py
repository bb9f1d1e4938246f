from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.core.config_file import Settings

Base = declarative_base()


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine for the given URL.

    Postgres gets a pooled engine pinned to UTC; other backends (SQLite in
    tests and local runs) use driver defaults.
    """
    if database_url.startswith("postgresql"):
        return create_engine(
            database_url,
            echo=echo,
            future=True,
            pool_pre_ping=True,
            pool_size=10,
            max_overflow=20,
            connect_args={
                "connect_timeout": 10,
                "options": "-c timezone=utc",
            },
        )
    return create_engine(database_url, echo=echo, future=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    """Create a session factory bound to ``engine``."""
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )


def get_session_factory(settings: Settings) -> sessionmaker:
    """Session factory for the database named by ``settings``."""
    return build_session_factory(build_engine(settings.database_url, echo=settings.DEBUG))
