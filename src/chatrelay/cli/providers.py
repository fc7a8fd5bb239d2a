"""Factory functions for CLI commands.

Centralizes creation of relay clients and upstream checks from settings.
Hides configuration details from command implementations.
"""

import typer
from rich.console import Console

from ..client import RelayClient
from ..config import get_settings

# Default console for output
_console = Console()


def get_relay_client(url: str | None = None, timeout: float | None = None) -> RelayClient:
    """Create a relay client, falling back to environment settings.

    Args:
        url: Relay address (default: RELAY_URL)
        timeout: Request timeout in seconds (default: RELAY_TIMEOUT)
    """
    settings = get_settings()
    return RelayClient(
        base_url=url or settings.relay_url,
        timeout=timeout if timeout is not None else settings.relay_timeout,
    )


def require_api_key(console: Console | None = None) -> str:
    """Return the upstream API key, exiting if it is not configured.

    Raises:
        typer.Exit: If OPENAI_API_KEY is not set

    Environment variables:
        OPENAI_API_KEY: OpenAI API key (required)
        OPENAI_ORGANIZATION: OpenAI organization id (optional)
    """
    con = console or _console
    settings = get_settings()
    if not settings.openai_api_key:
        con.print("[red]Error: OPENAI_API_KEY not set in environment[/red]")
        raise typer.Exit(code=1)
    if not settings.openai_organization:
        con.print("[yellow]Warning: OPENAI_ORGANIZATION not set, using the key's default organization[/yellow]")
    return settings.openai_api_key
