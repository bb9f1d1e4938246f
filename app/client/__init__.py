"""Client for the integrations API."""

from app.client.integrations_client import IntegrationsClient

__all__ = ["IntegrationsClient"]
