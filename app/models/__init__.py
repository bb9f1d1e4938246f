from app.core.db.session import Base
from app.models.integration import Integration

__all__ = [
    "Base",
    "Integration",
]
