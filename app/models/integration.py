"""Integration model for stored third-party service credentials."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Integer, Text

from app.core.db.session import Base


class Integration(Base):
    """API key stored for one external provider.

    Rows are append-only: a provider may have several, the latest one wins.
    """

    __tablename__ = "integrations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    provider = Column(Text, nullable=False)
    api_key = Column("api_key", Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=True)

    def __repr__(self) -> str:
        return f"<Integration(id={self.id}, provider={self.provider})>"
