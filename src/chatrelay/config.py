"""Application settings loaded from environment variables.

Keeps every credential and tunable in one place. A ``.env`` file in the
working directory is loaded first; real environment variables win.
"""

import logging
import os
from functools import lru_cache

from dotenv import load_dotenv
from rich.logging import RichHandler

load_dotenv()

DEFAULT_CHAT_MODEL = "gpt-3.5-turbo"
DEFAULT_RELAY_PORT = 8000


class Settings:
    """Relay and client configuration.

    Environment variables:
        OPENAI_API_KEY: Upstream API key (required by the relay)
        OPENAI_ORGANIZATION: Upstream organization id (``organization`` also accepted)
        OPENAI_CHAT_MODEL: Model id (default: gpt-3.5-turbo)
        OPENAI_BASE_URL: Optional upstream base URL
        RELAY_HOST / RELAY_PORT: Relay bind address (default: 0.0.0.0:8000)
        RELAY_URL: Relay address used by clients (default: http://localhost:8000)
        RELAY_TIMEOUT: Client request timeout in seconds (default: 60)
        LOG_LEVEL: Logging level name (default: INFO)
    """

    def __init__(self) -> None:
        self.openai_api_key: str | None = os.getenv("OPENAI_API_KEY") or None
        self.openai_organization: str | None = (
            os.getenv("OPENAI_ORGANIZATION") or os.getenv("organization") or None
        )
        self.chat_model: str = os.getenv("OPENAI_CHAT_MODEL", DEFAULT_CHAT_MODEL)
        self.openai_base_url: str | None = os.getenv("OPENAI_BASE_URL") or None
        self.relay_host: str = os.getenv("RELAY_HOST", "0.0.0.0")
        self.relay_port: int = int(os.getenv("RELAY_PORT", str(DEFAULT_RELAY_PORT)))
        self.relay_url: str = os.getenv("RELAY_URL", f"http://localhost:{DEFAULT_RELAY_PORT}")
        self.relay_timeout: float = float(os.getenv("RELAY_TIMEOUT", "60"))
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def configure_logging(level: str | int = "INFO") -> None:
    """Route the root logger through Rich."""
    logging.basicConfig(
        level=level,
        format="%(name)s - %(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
