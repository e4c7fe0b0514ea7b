"""Typed interfaces for job-layer transcription responsibilities."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Protocol

from fetchscribe.domain import TranscriptionResult


class TranscriberPort(Protocol):
    """Port definition for submitting and resolving transcription jobs."""

    def transcription_is_available(self) -> bool:
        """Return whether transcription credentials are configured.

        Returns:
            bool: True when every credential field holds a real value.

        Raises:
            RuntimeError: Implementations do not raise runtime errors.
        """

    def transcription_submit(self, source_path: str | Path, language_hint: str | None = None) -> TranscriptionResult:
        """Stage input and submit one job without waiting.

        Args:
            source_path: Local media file to transcribe.
            language_hint: Optional source language code.

        Returns:
            TranscriptionResult: SUBMITTED with job name, or UNAVAILABLE.

        Raises:
            UploadError: Raised when staging fails; no job is submitted.
            JobBackendError: Raised when the backend rejects submission.
        """

    def transcription_run(
        self,
        source_path: str | Path,
        language_hint: str | None = None,
        cancel_event: threading.Event | None = None,
    ) -> TranscriptionResult:
        """Submit one job and wait for its terminal outcome.

        Args:
            source_path: Local media file to transcribe.
            language_hint: Optional source language code.
            cancel_event: Optional caller cancellation signal.

        Returns:
            TranscriptionResult: COMPLETED, FAILED or UNAVAILABLE.

        Raises:
            UploadError: Raised when staging fails.
            JobBackendError: Raised when the backend rejects a call.
            PollTimeoutError: Raised when the poll deadline elapses.
            JobCancelledError: Raised when cancellation is observed.
        """

    def transcription_get_result(
        self,
        job_name: str,
        cancel_event: threading.Event | None = None,
    ) -> TranscriptionResult:
        """Wait for one existing job and return its output when completed.

        Args:
            job_name: Job name returned by submit.
            cancel_event: Optional caller cancellation signal.

        Returns:
            TranscriptionResult: COMPLETED, FAILED or UNAVAILABLE.

        Raises:
            JobBackendError: Raised when the backend rejects a status query.
            ObjectStoreError: Raised when completed output cannot be read.
            PollTimeoutError: Raised when the poll deadline elapses.
            JobCancelledError: Raised when cancellation is observed.
        """
