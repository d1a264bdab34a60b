"""
Exception hierarchy for Tasmee.

Only DecodeError is fatal to an attempt; the verifier converts the other
engine errors into degraded results.
"""


class TasmeeError(Exception):
    """Base class for all Tasmee errors."""


class DecodeError(TasmeeError):
    """The audio sample is not valid audio or uses an unsupported codec."""

    def __init__(self, message: str, reason: str | None = None):
        self.reason = reason
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class TranscriptionError(TasmeeError):
    """The recognizer is unavailable or produced no usable text."""

    def __init__(self, message: str, model_id: str | None = None):
        self.model_id = model_id
        super().__init__(message)


class ModelNotLoadedError(TranscriptionError):
    """transcribe() was called before load()."""

    def __init__(self, model_id: str | None = None):
        super().__init__(
            "Model not loaded. Call load() or use the transcriber as a context manager.",
            model_id=model_id,
        )


class AnalysisFault(TasmeeError):
    """A rule analyzer could not extract any signal from the waveform."""

    def __init__(self, category, message: str):
        self.category = category
        if category is None:
            super().__init__(message)
        else:
            name = getattr(category, "value", category)
            super().__init__(f"{name}: {message}")


class ConfigurationError(TasmeeError):
    """Settings describe an unsupported combination."""


class ReferenceDataError(TasmeeError):
    """The reference text source is missing, unreadable or empty."""
