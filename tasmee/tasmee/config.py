"""
Configuration management for Tasmee.

Uses Pydantic Settings for type-safe configuration with environment variable support.
All settings can be overridden via environment variables with the TASMEE_ prefix.
"""

from typing import Literal
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class TasmeeSettings(BaseSettings):
    """
    Configuration settings for Tasmee.

    All settings can be overridden via environment variables with TASMEE_ prefix.

    Example:
        export TASMEE_MODEL_ID="jonatasgrosman/wav2vec2-large-xlsr-53-arabic"
        export TASMEE_MODEL_TYPE="transformers"
        export TASMEE_TRANSCRIPTION_TIMEOUT="60"
    """

    model_config = SettingsConfigDict(
        env_prefix="TASMEE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        protected_namespaces=(),
    )

    # ============ Model Settings ============

    model_id: str = Field(
        default="OdyAsh/faster-whisper-base-ar-quran",
        description="HuggingFace model ID for speech recognition",
    )

    device: Literal["auto", "cpu", "cuda", "mps"] = Field(
        default="auto",
        description="Device for model inference (auto, cpu, cuda, mps)",
    )

    model_type: Literal["transformers", "faster-whisper"] = Field(
        default="faster-whisper",
        description="Model backend type",
    )

    language: str = Field(
        default="ar",
        description="Language code passed to the recognizer",
    )

    transcription_timeout: float = Field(
        default=120.0,
        description="Maximum wait for a transcription (seconds) before it counts as failed",
        gt=0.0,
    )

    split_on_silence: bool = Field(
        default=True,
        description="Transcribe each non-silent chunk as its own transcript line",
    )

    # ============ Audio Processing ============

    sample_rate: int = Field(
        default=16000,
        description="Audio sample rate for processing",
        ge=1000,
    )

    channels: int = Field(
        default=1,
        description="Channel count audio samples are decoded to",
        ge=1,
        le=2,
    )

    silence_threshold_db: int = Field(
        default=-30,
        description="Silence detection threshold in dB (relative to peak)",
        ge=-60,
        le=0,
    )

    min_silence_ms: int = Field(
        default=300,
        description="Minimum silence duration in milliseconds between transcript chunks",
        ge=100,
        le=2000,
    )

    frame_ms: float = Field(
        default=25.0,
        description="Analysis frame length in milliseconds",
        gt=0.0,
    )

    hop_ms: float = Field(
        default=10.0,
        description="Analysis hop length in milliseconds",
        gt=0.0,
    )

    # ============ Rule Thresholds ============

    madd_min_duration: float = Field(
        default=0.5,
        description="A sustained vowel longer than this (seconds) counts as Madd",
        gt=0.0,
    )

    madd_flux_threshold: float = Field(
        default=0.35,
        description="Normalized spectral flux below which a voiced frame is sustained",
        gt=0.0,
        le=1.0,
    )

    ghunnah_min_duration: float = Field(
        default=0.3,
        description="Cumulative nasal duration (seconds) required for Ghunnah",
        gt=0.0,
    )

    ghunnah_band_ratio: float = Field(
        default=0.6,
        description="Share of spectral energy in the nasal band for a nasal frame",
        gt=0.0,
        le=1.0,
    )

    waqf_min_pause: float = Field(
        default=0.15,
        description="Trailing silence (seconds) required after the last voiced frame",
        ge=0.0,
    )

    qalqalah_max_burst: float = Field(
        default=0.12,
        description="Longest voiced region (seconds) still counted as a Qalqalah bounce",
        gt=0.0,
    )

    qalqalah_min_peak: float = Field(
        default=0.2,
        description="Minimum normalized RMS peak of a bounce",
        gt=0.0,
        le=1.0,
    )

    qalqalah_min_rise: float = Field(
        default=0.05,
        description="Minimum frame-to-frame RMS rise at the bounce onset",
        gt=0.0,
        le=1.0,
    )

    sakinah_min_gap: float = Field(
        default=0.03,
        description="Shortest unvoiced gap (seconds) counted as a silent letter",
        ge=0.0,
    )

    sakinah_max_gap: float = Field(
        default=0.2,
        description="Longest unvoiced gap (seconds) counted as a silent letter",
        gt=0.0,
    )

    # ============ Scoring ============

    rule_penalty: float = Field(
        default=5.0,
        description="Flat penalty (points) for each rule marked incorrect",
        ge=0.0,
    )

    normalize_text: bool = Field(
        default=False,
        description="Strip diacritics and unify letter variants before measuring edit distance",
    )

    # ============ Reference Data ============

    reference_path: Path | None = Field(
        default=None,
        description="UTF-8 text (one line per verse) or JSON list holding the reference text",
    )

    # ============ Validators ============

    @field_validator("reference_path", mode="before")
    @classmethod
    def convert_to_path(cls, v: str | Path | None) -> Path | None:
        """Convert string paths to Path objects."""
        if isinstance(v, str):
            return Path(v) if v else None
        return v

    @field_validator("sakinah_max_gap")
    @classmethod
    def gap_window_ordered(cls, v: float, info) -> float:
        """Ensure the silent-letter gap window is not inverted."""
        if "sakinah_min_gap" in info.data and v <= info.data["sakinah_min_gap"]:
            raise ValueError("sakinah_max_gap must be > sakinah_min_gap")
        return v

    def get_resolved_device(self, device: str | None = None) -> str:
        """
        Resolve 'auto' device to the best available option.

        Args:
            device: Device to resolve instead of the configured one

        Returns:
            str: The resolved device (cuda, mps, or cpu)
        """
        device = device or self.device
        if device != "auto":
            return device

        try:
            import torch

            if torch.cuda.is_available():
                return "cuda"
            elif torch.backends.mps.is_available():
                return "mps"
        except ImportError:
            pass

        return "cpu"


# Default settings instance
_default_settings: TasmeeSettings | None = None


def get_settings() -> TasmeeSettings:
    """
    Get the default settings instance (lazily created).

    Returns:
        TasmeeSettings: The default settings
    """
    global _default_settings
    if _default_settings is None:
        _default_settings = TasmeeSettings()
    return _default_settings


def configure(**kwargs) -> TasmeeSettings:
    """
    Create and set new default settings.

    Args:
        **kwargs: Settings to override

    Returns:
        TasmeeSettings: The new settings instance
    """
    global _default_settings
    _default_settings = TasmeeSettings(**kwargs)
    return _default_settings
