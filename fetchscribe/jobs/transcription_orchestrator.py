"""Job-layer orchestrator for staged, polled transcription jobs."""

from __future__ import annotations

import logging
import threading
import time
import uuid
from pathlib import Path
from typing import Callable

from fetchscribe.adapters import JobBackendPort, ObjectStorePort
from fetchscribe.domain import (
    JobBackendError,
    JobCancelledError,
    JobSpec,
    JobStatus,
    ObjectStoreError,
    PollTimeoutError,
    TranscriptionCredentials,
    TranscriptionOutcome,
    TranscriptionResult,
    domain_build_stage_event,
    domain_transcription_is_available,
)

from .interfaces import TranscriberPort
from .poll_strategy import PollRetryStrategy

logger = logging.getLogger(__name__)


def _job_generate_name() -> str:
    return str(uuid.uuid4())


class TranscriptionJobOrchestrator(TranscriberPort):
    """Concrete orchestrator driving upload, submit, poll and retrieve stages.

    Polling runs on the calling thread. The orchestrator keeps no per-job
    state, so independent jobs may be driven concurrently from several
    threads as long as the store and backend clients are thread safe.
    """

    def __init__(
        self,
        object_store: ObjectStorePort,
        job_backend: JobBackendPort,
        credentials: TranscriptionCredentials,
        poll_strategy: PollRetryStrategy | None = None,
        poll_timeout_seconds: float = 900.0,
        sleep_provider: Callable[[float], None] | None = None,
        monotonic_provider: Callable[[], float] | None = None,
        job_name_provider: Callable[[], str] | None = None,
    ):
        """Initialize orchestrator dependencies.

        Args:
            object_store: Store used to stage input and read output.
            job_backend: Backend running transcription jobs.
            credentials: Immutable credentials checked by the availability gate.
            poll_strategy: Wait schedule between status polls.
            poll_timeout_seconds: Client-side deadline for reaching a terminal status.
            sleep_provider: Optional sleep function used when no cancel event is given.
            monotonic_provider: Optional monotonic clock.
            job_name_provider: Optional job name generator; defaults to random UUIDs.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies or config values are invalid.
        """

        if object_store is None:
            raise ValueError("object_store must not be None")
        if job_backend is None:
            raise ValueError("job_backend must not be None")
        if credentials is None:
            raise ValueError("credentials must not be None")
        if poll_timeout_seconds <= 0:
            raise ValueError("poll_timeout_seconds must be > 0")

        self._object_store = object_store
        self._job_backend = job_backend
        self._credentials = credentials
        self._poll_strategy = poll_strategy or PollRetryStrategy()
        self._poll_timeout_seconds = poll_timeout_seconds
        self._sleep = sleep_provider or time.sleep
        self._monotonic = monotonic_provider or time.monotonic
        self._job_name_provider = job_name_provider or _job_generate_name

    def transcription_is_available(self) -> bool:
        """Return whether credentials pass the availability gate.

        Returns:
            bool: True when identity, secret and bucket are all configured.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        return domain_transcription_is_available(self._credentials)

    def transcription_submit(self, source_path: str | Path, language_hint: str | None = None) -> TranscriptionResult:
        """Stage input and submit one job without waiting for completion.

        Args:
            source_path: Local media file to transcribe.
            language_hint: Optional source language code.

        Returns:
            TranscriptionResult: SUBMITTED with the job name, or UNAVAILABLE.

        Raises:
            ValueError: Raised when source_path is blank.
            UploadError: Raised when staging fails; no job is submitted.
            JobBackendError: Raised when the backend rejects submission.
        """

        timeline: list[dict[str, object]] = []
        if not self.transcription_is_available():
            return self._job_unavailable_result(timeline)

        job_name = self._job_stage_and_submit(source_path, language_hint, timeline)
        return TranscriptionResult(
            outcome=TranscriptionOutcome.SUBMITTED,
            job_name=job_name,
            stage_timeline=timeline,
        )

    def transcription_run(
        self,
        source_path: str | Path,
        language_hint: str | None = None,
        cancel_event: threading.Event | None = None,
    ) -> TranscriptionResult:
        """Submit one job and block until it reaches a terminal status.

        Args:
            source_path: Local media file to transcribe.
            language_hint: Optional source language code.
            cancel_event: Optional caller cancellation signal checked every poll.

        Returns:
            TranscriptionResult: COMPLETED with transcript, FAILED, or UNAVAILABLE.

        Raises:
            ValueError: Raised when source_path is blank.
            UploadError: Raised when staging fails; no job is submitted.
            JobBackendError: Raised when the backend rejects a call.
            ObjectStoreError: Raised when completed output cannot be read.
            PollTimeoutError: Raised when the poll deadline elapses.
            JobCancelledError: Raised when cancellation is observed.
        """

        timeline: list[dict[str, object]] = []
        if not self.transcription_is_available():
            return self._job_unavailable_result(timeline)

        job_name = self._job_stage_and_submit(source_path, language_hint, timeline)
        return self._job_wait_and_retrieve(job_name, cancel_event, timeline)

    def transcription_get_result(
        self,
        job_name: str,
        cancel_event: threading.Event | None = None,
    ) -> TranscriptionResult:
        """Wait for an existing job and read its output when completed.

        Repeated calls for a completed job return the same payload and issue
        only status polls and object reads.

        Args:
            job_name: Job name returned by submit.
            cancel_event: Optional caller cancellation signal checked every poll.

        Returns:
            TranscriptionResult: COMPLETED with transcript, FAILED, or UNAVAILABLE.

        Raises:
            ValueError: Raised when job_name is blank.
            JobBackendError: Raised when the backend rejects a status query.
            ObjectStoreError: Raised when completed output cannot be read.
            PollTimeoutError: Raised when the poll deadline elapses.
            JobCancelledError: Raised when cancellation is observed.
        """

        timeline: list[dict[str, object]] = []
        if not self.transcription_is_available():
            return self._job_unavailable_result(timeline)

        normalized_job_name = job_name.strip()
        if not normalized_job_name:
            raise ValueError("job_name must not be blank")
        return self._job_wait_and_retrieve(normalized_job_name, cancel_event, timeline)

    def _job_unavailable_result(self, timeline: list[dict[str, object]]) -> TranscriptionResult:
        timeline.append(
            domain_build_stage_event(stage="gate", status="unavailable", details={"reason": "credentials_not_configured"})
        )
        logger.debug("transcription unavailable: credentials not configured")
        return TranscriptionResult(outcome=TranscriptionOutcome.UNAVAILABLE, stage_timeline=timeline)

    def _job_stage_and_submit(
        self,
        source_path: str | Path,
        language_hint: str | None,
        timeline: list[dict[str, object]],
    ) -> str:
        """Upload input under a fresh job name, then submit the job.

        Args:
            source_path: Local media file to stage.
            language_hint: Optional source language code.
            timeline: Mutable stage timeline events.

        Returns:
            str: Submitted job name.

        Raises:
            ValueError: Raised when source_path is blank.
            UploadError: Raised when staging fails; submission is never attempted.
            JobBackendError: Raised when the backend rejects submission or returns a foreign id.
        """

        if not str(source_path).strip():
            raise ValueError("source_path must not be blank")

        bucket_name = self._job_bucket_name()
        job_name = self._job_name_provider()
        normalized_language_hint = (language_hint or "").strip() or None

        timeline.append(domain_build_stage_event(stage="upload", status="started", job_name=job_name))
        self._object_store.store_put(bucket_name, job_name, source_path)
        timeline.append(domain_build_stage_event(stage="upload", status="completed", job_name=job_name))

        job_spec = JobSpec(
            source_locator=self._object_store.store_url_for(bucket_name, job_name),
            output_namespace=bucket_name,
            output_key=self._job_backend.backend_output_key(job_name),
            job_name=job_name,
            language_hint=normalized_language_hint,
        )
        timeline.append(domain_build_stage_event(stage="submit", status="started", job_name=job_name))
        job_id = self._job_backend.backend_submit(job_spec)
        if job_id != job_name:
            raise JobBackendError(
                f"backend returned job id={job_id} for job_name={job_name}",
                error_code="BACKEND_JOB_ID_MISMATCH",
            )
        timeline.append(
            domain_build_stage_event(
                stage="submit",
                status="completed",
                job_name=job_name,
                details={"source_locator": job_spec.source_locator, "language_hint": normalized_language_hint},
            )
        )
        logger.info("submitted transcription job %s from %s", job_name, source_path)
        return job_name

    def _job_wait_and_retrieve(
        self,
        job_name: str,
        cancel_event: threading.Event | None,
        timeline: list[dict[str, object]],
    ) -> TranscriptionResult:
        terminal_status = self._job_poll_until_terminal(job_name, cancel_event, timeline)
        if terminal_status is JobStatus.FAILED:
            timeline.append(domain_build_stage_event(stage="retrieve", status="skipped", job_name=job_name))
            logger.info("transcription job %s failed remotely", job_name)
            return TranscriptionResult(
                outcome=TranscriptionOutcome.FAILED,
                job_name=job_name,
                stage_timeline=timeline,
            )

        output_key = self._job_backend.backend_output_key(job_name)
        timeline.append(domain_build_stage_event(stage="retrieve", status="started", job_name=job_name))
        payload = self._object_store.store_get(self._job_bucket_name(), output_key)
        try:
            transcript = payload.decode("utf-8")
        except UnicodeDecodeError as error:
            raise ObjectStoreError(
                f"job output is not valid utf-8: key={output_key}",
                error_code="OUTPUT_DECODE_ERROR",
            ) from error
        timeline.append(
            domain_build_stage_event(
                stage="retrieve",
                status="completed",
                job_name=job_name,
                details={"output_key": output_key, "payload_bytes": len(payload)},
            )
        )
        logger.info("transcription job %s completed", job_name)
        return TranscriptionResult(
            outcome=TranscriptionOutcome.COMPLETED,
            job_name=job_name,
            transcript=transcript,
            stage_timeline=timeline,
        )

    def _job_poll_until_terminal(
        self,
        job_name: str,
        cancel_event: threading.Event | None,
        timeline: list[dict[str, object]],
    ) -> JobStatus:
        """Poll job status with backoff until terminal, deadline or cancellation.

        Args:
            job_name: Job to poll.
            cancel_event: Optional caller cancellation signal.
            timeline: Mutable stage timeline events.

        Returns:
            JobStatus: COMPLETED or FAILED.

        Raises:
            JobBackendError: Raised when the backend rejects a status query.
            PollTimeoutError: Raised when the deadline elapses before a terminal status.
            JobCancelledError: Raised when cancellation is observed between polls.
        """

        deadline = self._monotonic() + self._poll_timeout_seconds
        poll_count = 0
        timeline.append(domain_build_stage_event(stage="poll", status="started", job_name=job_name))

        while True:
            if cancel_event is not None and cancel_event.is_set():
                raise JobCancelledError(f"polling cancelled for job_name={job_name}", job_name=job_name)

            job_status = self._job_backend.backend_status(job_name)
            poll_count += 1
            if job_status.status_is_terminal():
                timeline.append(
                    domain_build_stage_event(
                        stage="poll",
                        status="completed",
                        job_name=job_name,
                        details={"poll_count": poll_count, "job_status": job_status.value},
                    )
                )
                return job_status

            remaining_seconds = deadline - self._monotonic()
            if remaining_seconds <= 0:
                timeline.append(
                    domain_build_stage_event(
                        stage="poll",
                        status="timed_out",
                        job_name=job_name,
                        details={"poll_count": poll_count},
                    )
                )
                raise PollTimeoutError(
                    f"job_name={job_name} not terminal after {self._poll_timeout_seconds}s",
                    job_name=job_name,
                    poll_count=poll_count,
                )

            wait_seconds = min(
                self._poll_strategy.strategy_calculate_wait_seconds(poll_index=poll_count - 1),
                remaining_seconds,
            )
            logger.debug("job %s still running after poll %d; waiting %.2fs", job_name, poll_count, wait_seconds)
            if cancel_event is not None:
                if cancel_event.wait(wait_seconds):
                    raise JobCancelledError(f"polling cancelled for job_name={job_name}", job_name=job_name)
            elif wait_seconds > 0:
                self._sleep(wait_seconds)

    def _job_bucket_name(self) -> str:
        return (self._credentials.bucket_name or "").strip()
