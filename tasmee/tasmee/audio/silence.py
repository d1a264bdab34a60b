"""
Silence detection on decoded waveforms.

Frame-based RMS detection with librosa + numpy. Thresholds are in dB relative
to the loudest frame, matching pydub's dBFS-style settings.
"""

import numpy as np

from tasmee.models import Waveform


def _frame_rms(waveform: Waveform, window_ms: float) -> tuple[np.ndarray, np.ndarray]:
    """Normalized RMS per frame and the frame start times in milliseconds."""
    import librosa

    y = waveform.mono()
    sr = waveform.sample_rate

    frame_length = max(2, int(sr * window_ms / 1000))
    hop_length = max(1, frame_length // 2)  # 50% overlap

    rms = librosa.feature.rms(y=y, frame_length=frame_length, hop_length=hop_length)[0]

    rms_max = np.max(rms) if len(rms) and np.max(rms) > 0 else 1.0
    times_ms = librosa.frames_to_time(np.arange(len(rms)), sr=sr, hop_length=hop_length) * 1000
    return rms / rms_max, times_ms


def detect_silences(
    waveform: Waveform,
    min_silence_len: int = 300,
    silence_thresh: int = -30,
) -> list[tuple[int, int]]:
    """
    Detect silent portions of a waveform.

    Args:
        waveform: Decoded audio
        min_silence_len: Minimum silence length in milliseconds
        silence_thresh: Silence threshold in dB

    Returns:
        List of (start_ms, end_ms) tuples for silent portions
    """
    if waveform.is_empty:
        return []

    # -30 dB ≈ 0.0316 amplitude ratio
    amplitude_thresh = 10 ** (silence_thresh / 20)
    rms_normalized, frame_times_ms = _frame_rms(waveform, window_ms=10)
    is_silent = rms_normalized < amplitude_thresh

    silences = []
    in_silence = False
    silence_start = 0.0

    for i, silent in enumerate(is_silent):
        if silent and not in_silence:
            in_silence = True
            silence_start = frame_times_ms[i]
        elif not silent and in_silence:
            in_silence = False
            silence_end = frame_times_ms[i]
            if silence_end - silence_start >= min_silence_len:
                silences.append((int(silence_start), int(silence_end)))

    # Audio ends in silence
    if in_silence:
        silence_end = waveform.duration * 1000
        if silence_end - silence_start >= min_silence_len:
            silences.append((int(silence_start), int(silence_end)))

    return silences


def detect_non_silent_chunks(
    waveform: Waveform,
    min_silence_len: int = 300,
    silence_thresh: int = -30,
) -> list[tuple[int, int]]:
    """
    Detect non-silent (speech) portions of a waveform.

    Chunks separated by less than min_silence_len are merged.

    Args:
        waveform: Decoded audio
        min_silence_len: Minimum silence length in milliseconds
        silence_thresh: Silence threshold in dB

    Returns:
        List of (start_ms, end_ms) tuples for non-silent portions
    """
    duration_ms = int(waveform.duration * 1000)
    if waveform.is_empty:
        return []

    amplitude_thresh = 10 ** (silence_thresh / 20)
    rms_normalized, frame_times_ms = _frame_rms(waveform, window_ms=10)
    is_speech = rms_normalized >= amplitude_thresh

    chunks = []
    in_speech = False
    speech_start = 0.0

    for i, speech in enumerate(is_speech):
        if speech and not in_speech:
            in_speech = True
            speech_start = frame_times_ms[i]
        elif not speech and in_speech:
            in_speech = False
            chunks.append((int(speech_start), int(frame_times_ms[i])))

    # Audio ends in speech
    if in_speech:
        chunks.append((int(speech_start), duration_ms))

    if len(chunks) > 1:
        merged = [chunks[0]]
        for start, end in chunks[1:]:
            prev_start, prev_end = merged[-1]
            if start - prev_end < min_silence_len:
                merged[-1] = (prev_start, end)
            else:
                merged.append((start, end))
        chunks = merged

    return chunks


def extract_segment(
    waveform: Waveform,
    start_ms: int,
    end_ms: int,
) -> Waveform:
    """
    Cut a time range out of a waveform.

    Args:
        waveform: Source audio
        start_ms: Start time in milliseconds
        end_ms: End time in milliseconds

    Returns:
        New Waveform holding the range
    """
    start_sample = int((start_ms / 1000) * waveform.sample_rate)
    end_sample = int((end_ms / 1000) * waveform.sample_rate)
    return Waveform(samples=waveform.samples[start_sample:end_sample], sample_rate=waveform.sample_rate)
