"""Catalog of providers users can connect, and connection lookups."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol, TypeVar


@dataclass(frozen=True)
class ProviderInfo:
    """Display metadata for a provider."""

    id: str
    name: str
    color: str


PROVIDER_CATALOG: tuple[ProviderInfo, ...] = (
    ProviderInfo("notion", "Notion", "#000000"),
    ProviderInfo("linear", "Linear", "#5E6AD2"),
    ProviderInfo("slack", "Slack", "#4A154B"),
    ProviderInfo("github", "GitHub", "#181717"),
    ProviderInfo("google-drive", "Google Drive", "#4285F4"),
    ProviderInfo("confluence", "Confluence", "#172B4D"),
    ProviderInfo("pagerduty", "PagerDuty", "#06AC38"),
    ProviderInfo("datadog", "Datadog", "#632CA6"),
    ProviderInfo("servicenow", "ServiceNow", "#293E40"),
)


class _StoredIntegration(Protocol):
    id: int
    provider: str


T = TypeVar("T", bound=_StoredIntegration)


def get_provider(provider_id: str) -> ProviderInfo | None:
    """Catalog entry for ``provider_id``, if listed."""
    for info in PROVIDER_CATALOG:
        if info.id == provider_id:
            return info
    return None


def find_integration(integrations: Iterable[T], provider_id: str) -> T | None:
    """The integration currently in effect for a provider.

    Rows are append-only, so the one with the highest id wins.
    """
    matches = [i for i in integrations if i.provider == provider_id]
    if not matches:
        return None
    return max(matches, key=lambda i: i.id)


def is_connected(integrations: Iterable[_StoredIntegration], provider_id: str) -> bool:
    """True when at least one integration is stored for ``provider_id``."""
    return any(i.provider == provider_id for i in integrations)
