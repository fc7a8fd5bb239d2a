"""Main CLI application using Typer."""
import asyncio
import logging

import typer
import uvicorn
from rich.console import Console
from rich.text import Text

from ..client import ChatSession, SessionListener
from ..config import configure_logging, get_settings
from .providers import get_relay_client, require_api_key

# Create Typer app
app = typer.Typer(
    name="chatrelay",
    help="Chat relay for an OpenAI completion backend, with console and terminal UI clients",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

EXIT_WORDS = ("exit", "quit", "q")


class ConsoleListener(SessionListener):
    """Prints relay failures as they happen."""

    def __init__(self, console: Console) -> None:
        self._console = console

    def on_error(self, error: Exception) -> None:
        self._console.print(Text.assemble(("Error: ", "bold red"), str(error)))


@app.command()
def serve(
    host: str | None = typer.Option(
        None,
        "--host",
        help="Bind address (default: RELAY_HOST or 0.0.0.0)"
    ),
    port: int | None = typer.Option(
        None,
        "--port",
        "-p",
        help="Port to listen on (default: RELAY_PORT or 8000)"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Log level: debug, info, warning, error (default: LOG_LEVEL or info)"
    ),
):
    """Start the relay server."""
    settings = get_settings()
    require_api_key(console)

    level = (log_level or settings.log_level).upper()
    configure_logging(level)

    bind_host = host or settings.relay_host
    bind_port = port if port is not None else settings.relay_port
    console.print(f"[bold cyan]Relay listening on {bind_host}:{bind_port}[/bold cyan] [dim](model: {settings.chat_model})[/dim]")

    uvicorn.run(
        "chatrelay.relay.app:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        log_level=level.lower(),
        log_config=None,
    )


@app.command()
def chat(
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Relay address (default: RELAY_URL or http://localhost:8000)"
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Request timeout in seconds"
    ),
):
    """Interactive console chat against a relay."""
    configure_logging(get_settings().log_level)
    # ConsoleListener prints relay failures; don't log them a second time
    logging.getLogger("chatrelay.client").setLevel(logging.ERROR)

    async def _chat():
        relay = get_relay_client(url, timeout)
        session = ChatSession(relay, listener=ConsoleListener(console))

        console.print("[bold cyan]ChatRelay Interactive Chat[/bold cyan]")
        console.print(f"[dim]Relay: {relay.base_url}[/dim]")
        console.print("[dim]Type 'exit', 'quit', or 'q' to leave[/dim]\n")

        try:
            while True:
                try:
                    user_input = console.input("[bold yellow]You:[/bold yellow] ")

                    if not user_input.strip():
                        continue

                    if user_input.strip().lower() in EXIT_WORDS:
                        console.print("[dim]Goodbye![/dim]")
                        break

                    reply = await session.submit(user_input)
                    if reply is not None:
                        console.print(Text.assemble((f"{reply.role.upper()}: ", "bold green"), reply.content))
                        console.print()

                except KeyboardInterrupt:
                    console.print("\n[dim]Goodbye![/dim]")
                    break
                except EOFError:
                    console.print("\n[dim]Goodbye![/dim]")
                    break
        finally:
            await session.close()
            await relay.close()

    asyncio.run(_chat())


@app.command(name="tui")
def tui_command(
    url: str | None = typer.Option(
        None,
        "--url",
        "-u",
        help="Relay address (default: RELAY_URL or http://localhost:8000)"
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        "-t",
        help="Request timeout in seconds"
    ),
):
    """Launch the Textual chat UI against a relay."""
    from textual.logging import TextualHandler

    from ..ui import run_textual_tui

    # Console handlers would draw over the TUI
    logging.basicConfig(level=get_settings().log_level, handlers=[TextualHandler()], force=True)

    relay = get_relay_client(url, timeout)
    asyncio.run(run_textual_tui(relay))


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
