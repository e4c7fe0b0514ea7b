"""Typed domain models shared across runtime layers.

This module provides simple data contracts for the transcription job
lifecycle and fetch metadata exchanged between adapters, fetchers and jobs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class JobStatus(str, Enum):
    """Client-side view of a remote job status."""

    RUNNING = "RUNNING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    def status_is_terminal(self) -> bool:
        """Return whether no further status transitions are expected.

        Returns:
            bool: True for COMPLETED and FAILED.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return self is not JobStatus.RUNNING


def domain_job_status_from_backend_value(value: str | None) -> JobStatus:
    """Map a backend-reported status string onto the client status enum.

    Only the two terminal values are recognized; every other value, including
    queued, in-progress, blank and unknown strings, is treated as RUNNING.

    Args:
        value: Raw backend status value.

    Returns:
        JobStatus: Mapped client status.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    normalized_value = (value or "").strip().upper()
    if normalized_value == JobStatus.COMPLETED.value:
        return JobStatus.COMPLETED
    if normalized_value == JobStatus.FAILED.value:
        return JobStatus.FAILED
    return JobStatus.RUNNING


@dataclass(frozen=True)
class JobSpec:
    """Immutable description of one submitted transcription job.

    Attributes:
        source_locator: Object store locator of the staged input.
        output_namespace: Object store namespace receiving job output.
        output_key: Object store key the backend writes output under.
        job_name: Generated unique job name, also used as job id.
        language_hint: Optional source language code.
    """

    source_locator: str
    output_namespace: str
    output_key: str
    job_name: str
    language_hint: str | None = None


@dataclass(frozen=True)
class TranscriptionCredentials:
    """Immutable transcription credentials and destination namespace.

    Attributes:
        client_id: Provider access key identifier.
        client_secret: Provider secret key.
        bucket_name: Object store namespace used for staging and output.
    """

    client_id: str | None
    client_secret: str | None
    bucket_name: str | None


class TranscriptionOutcome(str, Enum):
    """Caller-visible outcome of a transcription operation."""

    UNAVAILABLE = "unavailable"
    SUBMITTED = "submitted"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class TranscriptionResult:
    """Result contract for transcription submit, run and result operations.

    Attributes:
        outcome: Caller-visible outcome.
        job_name: Job name when a job exists, else None.
        transcript: Output payload text, present only for COMPLETED.
        stage_timeline: Structured stage events captured during the call.
    """

    outcome: TranscriptionOutcome
    job_name: str | None = None
    transcript: str | None = None
    stage_timeline: list[dict[str, Any]] = field(default_factory=list)
