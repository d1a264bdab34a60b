"""
Recitation verification pipeline.

decode -> (rule analysis || transcription) -> align -> score

The five rule analyzers and the transcriber run concurrently; alignment and
scoring wait for both. The recognizer runs on a worker thread owned by the
attempt, released without waiting once the attempt ends, so a timed-out or
cancelled transcription never holds up the caller. Only a decode failure ends an attempt in the FAILED
state, and even then a complete (zero-scored) report is returned.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Callable

from tasmee.analysis import RuleAnalyzer, RuleCheck, SignalFeatures, build_analyzers, verdicts_from_checks
from tasmee.audio import AudioDecoder
from tasmee.config import TasmeeSettings, get_settings
from tasmee.core.diff import align
from tasmee.core.scoring import ScoreCalculator
from tasmee.exceptions import AnalysisFault, DecodeError, TranscriptionError
from tasmee.models import (
    AudioSample,
    FeatureVerdicts,
    PipelineState,
    ReferenceText,
    Transcript,
    Verdict,
    VerificationReport,
    Waveform,
)
from tasmee.transcription.base import BaseTranscriber

logger = logging.getLogger(__name__)

StateCallback = Callable[[PipelineState], None]


@dataclass
class _Attempt:
    """State owned by a single verification attempt."""

    on_state: StateCallback | None = None
    history: list[PipelineState] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def state(self) -> PipelineState:
        return self.history[-1] if self.history else PipelineState.IDLE

    def enter(self, state: PipelineState) -> None:
        self.history.append(state)
        logger.info("Verification state: %s", state.value)
        if self.on_state:
            self.on_state(state)

    def degrade(self, stage: str, error: Exception | str) -> None:
        message = f"{stage}: {error}"
        logger.warning("Degraded %s", message)
        self.errors.append(message)


class Verifier:
    """
    Checks recitation attempts against one reference text.

    A Verifier holds no per-attempt state, so one instance can serve
    concurrent attempts.

    Example:
        with Verifier(reference, WhisperTranscriber()) as verifier:
            report = verifier.verify(AudioSample(data=wav_bytes))

        print(report.score.display)
        for line in report.diffs:
            print(line.segments)
    """

    def __init__(
        self,
        reference: ReferenceText | Sequence[str] | None,
        transcriber: BaseTranscriber,
        settings: TasmeeSettings | None = None,
        decoder: AudioDecoder | None = None,
        on_state: StateCallback | None = None,
    ):
        """
        Initialize the verifier.

        Args:
            reference: Reference text; None loads the configured default
            transcriber: Speech recognizer
            settings: Settings instance to use
            decoder: Audio decoder (default AudioDecoder(settings))
            on_state: Called with every state an attempt enters
        """
        self._settings = settings or get_settings()

        if reference is None:
            from tasmee.data import get_reference_text

            reference = get_reference_text(self._settings)

        self.reference = ReferenceText.coerce(reference)
        self.transcriber = transcriber
        self._decoder = decoder or AudioDecoder(self._settings)
        self._analyzers: list[RuleAnalyzer] = build_analyzers(self._settings)
        self._calculator = ScoreCalculator(self._settings)
        self._on_state = on_state

    def __enter__(self) -> "Verifier":
        self.transcriber.load()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.transcriber.unload()

    def verify(self, sample: AudioSample) -> VerificationReport:
        """Blocking wrapper around verify_async()."""
        return asyncio.run(self.verify_async(sample))

    async def verify_async(self, sample: AudioSample) -> VerificationReport:
        """
        Run one verification attempt.

        Args:
            sample: Captured audio

        Returns:
            VerificationReport in state DONE, or FAILED when the audio could not
            be decoded
        """
        attempt = _Attempt(on_state=self._on_state)
        attempt.enter(PipelineState.IDLE)
        loop = asyncio.get_running_loop()

        attempt.enter(PipelineState.DECODING)
        try:
            waveform = await loop.run_in_executor(None, self._decoder.decode, sample)
        except DecodeError as e:
            logger.error("Cannot decode %s: %s", sample, e)
            attempt.errors.append(f"decode: {e}")
            attempt.enter(PipelineState.FAILED)
            # No waveform and no transcript, but the caller still gets a full report
            feedback = FeatureVerdicts.uniform(Verdict.INCORRECT, "audio could not be decoded")
            return self._report(attempt, feedback, Transcript.empty())

        attempt.enter(PipelineState.ANALYZING)
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="tasmee-transcribe")
        transcription = asyncio.ensure_future(self._transcribe(sample, attempt, executor))
        analysis = asyncio.ensure_future(self._analyze(waveform, attempt))
        try:
            checks = await analysis
            del waveform

            attempt.enter(PipelineState.TRANSCRIBING)
            transcript = await transcription
        except asyncio.CancelledError:
            for task in (transcription, analysis):
                task.cancel()
            raise
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        feedback = verdicts_from_checks(checks)

        attempt.enter(PipelineState.ALIGNING)
        diffs = align(self.reference, transcript)

        attempt.enter(PipelineState.SCORING)
        score = self._calculator.score(self.reference, transcript, feedback)

        attempt.enter(PipelineState.DONE)
        return VerificationReport(
            state=attempt.state,
            history=attempt.history,
            feedback=feedback,
            transcript=transcript,
            diffs=diffs,
            score=score,
            errors=attempt.errors,
        )

    def _report(
        self,
        attempt: _Attempt,
        feedback: FeatureVerdicts,
        transcript: Transcript,
    ) -> VerificationReport:
        """Assemble a report without moving through the align/score states."""
        return VerificationReport(
            state=attempt.state,
            history=attempt.history,
            feedback=feedback,
            transcript=transcript,
            diffs=align(self.reference, transcript),
            score=self._calculator.score(self.reference, transcript, feedback),
            errors=attempt.errors,
        )

    async def _analyze(self, waveform: Waveform, attempt: _Attempt) -> list[RuleCheck]:
        """Extract features once, then judge every rule on them concurrently."""
        loop = asyncio.get_running_loop()
        try:
            features = await loop.run_in_executor(
                None, SignalFeatures.from_waveform, waveform, self._settings
            )
        except AnalysisFault as e:
            return [analyzer.fail(e) for analyzer in self._analyzers]
        except Exception as e:
            logger.error("Feature extraction fault", exc_info=True)
            attempt.degrade("analysis", e)
            return [
                RuleCheck(analyzer.category, Verdict.INCORRECT, f"analysis fault: {e}")
                for analyzer in self._analyzers
            ]

        checks = [
            asyncio.ensure_future(self._check(analyzer, features, attempt))
            for analyzer in self._analyzers
        ]
        try:
            return list(await asyncio.gather(*checks))
        except asyncio.CancelledError:
            for task in checks:
                task.cancel()
            raise

    async def _check(self, analyzer: RuleAnalyzer, features: SignalFeatures, attempt: _Attempt) -> RuleCheck:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, analyzer.judge, features)
        except Exception as e:
            logger.error("%s analyzer fault", analyzer.category.value, exc_info=True)
            attempt.degrade(analyzer.category.value, e)
            return RuleCheck(analyzer.category, Verdict.INCORRECT, f"analysis fault: {e}")

    async def _transcribe(
        self, sample: AudioSample, attempt: _Attempt, executor: ThreadPoolExecutor
    ) -> Transcript:
        timeout = self._settings.transcription_timeout
        try:
            return await asyncio.wait_for(
                self.transcriber.transcribe_async(sample, executor), timeout=timeout
            )
        except asyncio.TimeoutError:
            attempt.degrade("transcription", f"no result after {timeout:g}s")
        except TranscriptionError as e:
            attempt.degrade("transcription", e)
        except Exception as e:
            logger.error("Transcriber fault", exc_info=True)
            attempt.degrade("transcription", e)
        return Transcript.empty()


def verify(
    sample: AudioSample,
    reference: ReferenceText | Sequence[str] | None,
    transcriber: BaseTranscriber,
    settings: TasmeeSettings | None = None,
) -> VerificationReport:
    """
    Convenience function for a single attempt.

    The transcriber must already be loaded.
    """
    return Verifier(reference, transcriber, settings=settings).verify(sample)
