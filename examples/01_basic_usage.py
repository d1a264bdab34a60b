"""
Basic Usage Example for Tasmee

This example demonstrates the simplest way to use Tasmee:
1. Read a recording of Al-Fatiha
2. Load the reference text
3. Verify the recitation
4. Inspect feedback, word diffs and the score
"""

import logging
import sys
from pathlib import Path

from tasmee import AudioSample, DiffStatus, Verifier
from tasmee.data import load_al_fatiha
from tasmee.transcription import WhisperTranscriber

MARKS = {DiffStatus.UNCHANGED: "", DiffStatus.REMOVED: "[-{}-]", DiffStatus.ADDED: "{+{}+}"}


def render(line_diff) -> str:
    """Inline diff: [-missing-] and {+extra+} words."""
    parts = []
    for segment in line_diff.segments:
        mark = MARKS[segment.status]
        parts.append(mark.replace("{}", segment.text) if mark else segment.text)
    return "".join(parts)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    audio_path = Path(sys.argv[1] if len(sys.argv) > 1 else "recitations/al_fatiha.wav")
    sample = AudioSample(data=audio_path.read_bytes(), format=audio_path.suffix.lstrip(".") or "wav")

    # Step 1: Load the reference text
    reference = load_al_fatiha()
    print(f"Reference: {reference}\n")

    # Step 2: Verify (the transcriber is loaded for the duration of the block)
    with Verifier(reference, WhisperTranscriber()) as verifier:
        report = verifier.verify(sample)

    # Step 3: Tajweed feedback
    print("Feedback:")
    for message in report.feedback.messages():
        print(f"  {message}")

    # Step 4: Word diffs per line
    print("\nComparison:")
    print("-" * 80)
    for line_diff in report.diffs:
        status = "ok" if not line_diff.has_mistakes else "mistakes"
        print(f"{line_diff.index + 1}. ({status}) {render(line_diff)}")

    # Step 5: Score
    print("\n" + "=" * 80)
    print(f"Score: {report.score.display}")
    print(f"  Character errors: {report.score.total_errors} over {report.score.total_words} words")
    print(f"  Rule penalties:   {report.score.total_penalty:.0f}")

    if report.errors:
        print("\nDegraded stages:")
        for error in report.errors:
            print(f"  {error}")


if __name__ == "__main__":
    main()
