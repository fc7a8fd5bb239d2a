"""Data structures for the chat client.

Hides the representation of session state and speech values.
"""

from dataclasses import dataclass
from enum import Enum


class SessionState(str, Enum):
    """Where a chat session is in its send/reply/speak cycle."""

    IDLE = "idle"
    COMPOSING = "composing"
    SENDING = "sending"
    AWAITING_REPLY = "awaiting_reply"
    SPEAKING = "speaking"


class RecognitionEnd(str, Enum):
    """Why a dictation session finished."""

    USER_STOPPED = "user_stopped"  # stop() was called
    END_OF_SPEECH = "end_of_speech"  # the recognizer ended on its own


@dataclass(frozen=True)
class Utterance:
    """A single unit of speech output, consumed once by the synthesizer."""

    text: str
    role: str = "ai"


@dataclass(frozen=True)
class RecognitionConfig:
    """Dictation settings handed to a recognizer when capture starts."""

    interim_results: bool = True
    continuous: bool = True
    lang: str = "en-US"
