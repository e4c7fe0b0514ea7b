"""Stage timeline events collected by transcription jobs."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Final

JOB_STAGES: Final[frozenset[str]] = frozenset({"gate", "upload", "submit", "poll", "retrieve"})


def domain_build_stage_event(
    stage: str,
    status: str,
    job_name: str | None = None,
    details: dict[str, Any] | None = None,
) -> dict[str, object]:
    """Build one job stage event stamped with the current UTC time.

    Args:
        stage: One of `JOB_STAGES`.
        status: Stage status marker such as `started`, `completed` or `timed_out`.
        job_name: Job the event belongs to; omitted before a name exists.
        details: Optional structured details, copied into the event.

    Returns:
        dict[str, object]: JSON-serializable stage event.

    Raises:
        ValueError: Raised when stage is not a known job stage.
    """

    if stage not in JOB_STAGES:
        raise ValueError(f"unknown job stage={stage}")

    stage_event: dict[str, object] = {
        "stage": stage,
        "status": status,
        "at_utc": datetime.now(timezone.utc).isoformat(),
    }
    if job_name is not None:
        stage_event["job_name"] = job_name
    if details:
        stage_event["details"] = dict(details)
    return stage_event
