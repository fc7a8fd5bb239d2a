"""Chat client: relay transport, speech service interfaces, session controller."""

from .models import RecognitionConfig, RecognitionEnd, SessionState, Utterance
from .relay_client import RelayClient, RelayClientError
from .session import BUSY_STATES, ChatRelay, ChatSession, SessionListener
from .speech import SpeechRecognizer, SpeechSynthesizer

__all__ = [
    "BUSY_STATES",
    "ChatRelay",
    "ChatSession",
    "RecognitionConfig",
    "RecognitionEnd",
    "RelayClient",
    "RelayClientError",
    "SessionListener",
    "SessionState",
    "SpeechRecognizer",
    "SpeechSynthesizer",
    "Utterance",
]
