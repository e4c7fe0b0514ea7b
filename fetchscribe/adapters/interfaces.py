"""Typed interfaces for object store and job backend collaborators."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from fetchscribe.domain import JobSpec, JobStatus


class ObjectStorePort(Protocol):
    """Port definition for namespace/key addressed blob storage.

    Implementations must be safe for concurrent use from multiple threads.
    """

    def store_put(self, namespace: str, key: str, source: str | Path | bytes) -> None:
        """Store a local file or raw bytes under the given key.

        Args:
            namespace: Bucket or container name.
            key: Object key.
            source: Local file path or raw payload bytes.

        Returns:
            None: Stores object as side effect.

        Raises:
            UploadError: Raised when the object could not be stored.
        """

    def store_get(self, namespace: str, key: str) -> bytes:
        """Read one object payload.

        Args:
            namespace: Bucket or container name.
            key: Object key.

        Returns:
            bytes: Object payload.

        Raises:
            ObjectNotFoundError: Raised when the key does not exist.
            ObjectStoreError: Raised for other read failures.
        """

    def store_url_for(self, namespace: str, key: str) -> str:
        """Return a backend-resolvable locator for one object.

        Args:
            namespace: Bucket or container name.
            key: Object key.

        Returns:
            str: Object locator.

        Raises:
            RuntimeError: Implementations do not raise runtime errors.
        """


class JobBackendPort(Protocol):
    """Port definition for remote asynchronous transcription work.

    Implementations must be safe for concurrent use from multiple threads.
    """

    def backend_submit(self, spec: JobSpec) -> str:
        """Submit one job and return its job id.

        Args:
            spec: Immutable job description.

        Returns:
            str: Job id, equal to `spec.job_name`.

        Raises:
            JobBackendError: Raised when the backend rejects the submission.
        """

    def backend_status(self, job_id: str) -> JobStatus:
        """Return current client-side status for one job.

        Args:
            job_id: Job id returned by submit.

        Returns:
            JobStatus: Mapped status; unknown backend values map to RUNNING.

        Raises:
            JobBackendError: Raised when the status query is rejected.
        """

    def backend_output_key(self, job_id: str) -> str:
        """Return the object store key the backend writes job output under.

        Args:
            job_id: Job id.

        Returns:
            str: Output object key within the output namespace.

        Raises:
            RuntimeError: Implementations do not raise runtime errors.
        """
