"""Integration commands: browse providers and store API keys."""

import httpx
import typer
from rich.console import Console
from rich.table import Table

from app.client.integrations_client import IntegrationsClient
from app.core.config_file import get_settings
from app.core.exceptions import ContractValidationError, IntegrationClientError
from app.core.logging import mask_api_key
from app.core.provider_catalog import (
    PROVIDER_CATALOG,
    find_integration,
    get_provider,
    is_connected,
)

app = typer.Typer(help="Provider integration commands")
console = Console()


def _get_client() -> IntegrationsClient:
    settings = get_settings()
    return IntegrationsClient(base_url=settings.API_BASE_URL, timeout=settings.HTTP_TIMEOUT)


@app.command("list")
def list_providers() -> None:
    """List providers and whether each one is connected."""
    try:
        with _get_client() as client:
            integrations = client.list_integrations()
    except (IntegrationClientError, ContractValidationError, httpx.HTTPError) as e:
        console.print(f"[red]Failed to load integrations: {e}[/red]")
        raise typer.Exit(code=1)

    table = Table(title="Integrations", show_header=True, header_style="bold cyan")
    table.add_column("Provider", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Status")
    table.add_column("API key", style="dim")

    for info in PROVIDER_CATALOG:
        if is_connected(integrations, info.id):
            current = find_integration(integrations, info.id)
            table.add_row(info.id, info.name, "[green]Connected[/green]", mask_api_key(current.api_key))
        else:
            table.add_row(info.id, info.name, "-", "-")

    console.print(table)


@app.command()
def connect(
    provider: str = typer.Argument(..., help="Provider id (e.g. 'notion')"),
    api_key: str | None = typer.Option(None, "--api-key", "-k", help="API key (prompted if omitted)"),
) -> None:
    """Store or update the API key for a provider."""
    info = get_provider(provider)
    if info is None:
        known = ", ".join(p.id for p in PROVIDER_CATALOG)
        console.print(f"[red]Unknown provider '{provider}'. Choose one of: {known}[/red]")
        raise typer.Exit(code=1)

    try:
        with _get_client() as client:
            if api_key is None:
                current = find_integration(client.list_integrations(), info.id)
                api_key = typer.prompt(
                    f"{info.name} API key",
                    default=current.api_key if current else None,
                    hide_input=True,
                )
            client.create_integration(info.id, api_key)
    except (IntegrationClientError, ContractValidationError, httpx.HTTPError) as e:
        console.print(f"[red]Connection Failed: {e}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]Connected[/green] {info.name}")
