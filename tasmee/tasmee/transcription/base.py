"""
Transcriber interface.

The engine treats speech recognition as a black box: any object implementing
BaseTranscriber can be plugged into the Verifier.
"""

import asyncio
from abc import ABC, abstractmethod
from concurrent.futures import Executor

from tasmee.models import AudioSample, Transcript


class BaseTranscriber(ABC):
    """
    Abstract speech recognizer.

    Implementations raise TranscriptionError when the audio is unintelligible
    or the model is unavailable.
    """

    @property
    @abstractmethod
    def is_loaded(self) -> bool:
        """Whether the model is ready to transcribe."""

    @abstractmethod
    def load(self) -> None:
        """Load the model into memory."""

    @abstractmethod
    def unload(self) -> None:
        """Release the model."""

    @abstractmethod
    def transcribe(self, sample: AudioSample) -> Transcript:
        """
        Transcribe one audio sample.

        Args:
            sample: Captured audio

        Returns:
            Recognized text, one entry per line
        """

    async def transcribe_async(self, sample: AudioSample, executor: Executor | None = None) -> Transcript:
        """
        Asynchronously transcribe an audio sample.

        Uses run_in_executor to avoid blocking the event loop.

        Args:
            sample: Captured audio
            executor: Executor to run transcribe() on; None uses the loop's default
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(executor, self.transcribe, sample)

    def __enter__(self):
        self.load()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.unload()
