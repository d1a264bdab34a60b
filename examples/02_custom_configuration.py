"""
Custom Configuration Example

This example demonstrates:
- Overriding settings in code (the same fields read TASMEE_* environment variables)
- A custom reference text file
- Following the pipeline states of an attempt
- Running the rule analyzers on their own
"""

import sys
from pathlib import Path

from tasmee import AudioSample, PipelineState, Verifier, configure
from tasmee.analysis import analyze_features
from tasmee.audio import decode_audio, detect_silences
from tasmee.data import load_reference_text
from tasmee.transcription import WhisperTranscriber


def on_state(state: PipelineState) -> None:
    print(f"  -> {state.value}")


def main():
    audio_path = Path(sys.argv[1] if len(sys.argv) > 1 else "recitations/ikhlas.wav")
    reference_path = Path(sys.argv[2] if len(sys.argv) > 2 else "references/ikhlas.txt")

    # Step 1: Configure global settings
    settings = configure(
        model_id="jonatasgrosman/wav2vec2-large-xlsr-53-arabic",
        model_type="transformers",
        device="auto",
        rule_penalty=5.0,
        normalize_text=True,  # ignore tashkeel when counting errors
        madd_min_duration=0.5,
        transcription_timeout=60,
    )

    sample = AudioSample(data=audio_path.read_bytes(), format=audio_path.suffix.lstrip(".") or "wav")
    reference = load_reference_text(reference_path)

    # Step 2: Inspect the audio before verifying
    waveform = decode_audio(sample, settings)
    silences = detect_silences(waveform, settings.min_silence_ms, settings.silence_threshold_db)
    print(f"{waveform}: {len(silences)} pause(s)")

    verdicts = analyze_features(waveform, settings)
    print(f"Rules only: {verdicts}\n")

    # Step 3: Full verification with state tracking
    print("Pipeline:")
    with Verifier(reference, WhisperTranscriber(), settings=settings, on_state=on_state) as verifier:
        report = verifier.verify(sample)

    print(f"\n{report}")
    for line_diff in report.diffs:
        if line_diff.has_mistakes:
            print(f"  line {line_diff.index + 1}: missing {line_diff.removed_words}, extra {line_diff.added_words}")


if __name__ == "__main__":
    main()
