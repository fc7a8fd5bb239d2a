"""HTTP relay between chat clients and the upstream completion service."""

from .app import create_app, get_relay_service
from .models import RelayRequest, RelayResponse
from .service import (
    SYSTEM_INSTRUCTION,
    SYSTEM_MESSAGE,
    RelayService,
    build_messages,
    build_relay_service,
)

__all__ = [
    "RelayRequest",
    "RelayResponse",
    "RelayService",
    "SYSTEM_INSTRUCTION",
    "SYSTEM_MESSAGE",
    "build_messages",
    "build_relay_service",
    "create_app",
    "get_relay_service",
]
