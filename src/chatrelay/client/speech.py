from collections.abc import Callable
from typing import Protocol

from .models import RecognitionConfig, RecognitionEnd, Utterance


# --------- Protocols ---------
class SpeechSynthesizer(Protocol):
    """Text-to-speech output service."""

    def speak(self, utterance: Utterance, on_end: Callable[[], None]) -> None: ...
    """
    Start playing the utterance. ``on_end`` is called once playback finishes
    on its own; it is not called after ``cancel()``.
    """

    def cancel(self) -> None: ...
    """
    Stop any playback in progress.
    """


class SpeechRecognizer(Protocol):
    """Speech-to-text dictation service."""

    def start(
        self,
        config: RecognitionConfig,
        on_transcript: Callable[[str], None],
        on_end: Callable[[RecognitionEnd], None],
    ) -> None: ...
    """
    Begin a dictation session. ``on_transcript`` receives the full transcript
    so far (interim results replace each other); ``on_end`` is called once
    with the reason the session finished.
    """

    def stop(self) -> None: ...
    """
    Stop the dictation session. The recognizer reports
    ``RecognitionEnd.USER_STOPPED`` through ``on_end``.
    """
