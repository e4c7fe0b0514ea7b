"""Project-native typed exceptions for fetch and transcription failures."""

from __future__ import annotations


class FetchScribeError(Exception):
    """Base exception for fetch and transcription job failures.

    Attributes:
        error_code: Optional deterministic error code for diagnostics.
    """

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        self.error_code = error_code


class ConfigurationError(FetchScribeError, ValueError):
    """Required connection parameters or credentials are absent or placeholders."""


class FetchError(FetchScribeError, RuntimeError):
    """Fetch source could not resolve or stream the requested key."""


class FetchNotFoundError(FetchError, LookupError):
    """Fetch key does not resolve within the fetcher namespace."""


class UploadError(FetchScribeError, ConnectionError):
    """Staging job input into the object store failed."""


class ObjectStoreError(FetchScribeError, ConnectionError):
    """Object store read failed."""


class ObjectNotFoundError(ObjectStoreError, LookupError):
    """Object store key does not exist in the namespace."""


class JobBackendError(FetchScribeError, RuntimeError):
    """Job backend rejected a submission or status query."""


class PollTimeoutError(FetchScribeError, TimeoutError):
    """Client-side deadline exceeded while waiting for a job terminal status.

    Attributes:
        job_name: Job whose polling deadline elapsed.
        poll_count: Number of status calls issued before giving up.
    """

    def __init__(self, message: str, job_name: str, poll_count: int):
        super().__init__(message=message, error_code="POLL_TIMEOUT")
        self.job_name = job_name
        self.poll_count = poll_count


class JobCancelledError(FetchScribeError, RuntimeError):
    """Caller cancellation observed between poll iterations."""

    def __init__(self, message: str, job_name: str):
        super().__init__(message=message, error_code="POLL_CANCELLED")
        self.job_name = job_name
