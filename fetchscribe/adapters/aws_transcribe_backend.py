"""AWS Transcribe job backend adapter."""

from __future__ import annotations

from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from fetchscribe.domain import JobBackendError, JobSpec, JobStatus, domain_job_status_from_backend_value

from .aws_clients import adapter_client_error_code
from .interfaces import JobBackendPort


class AwsTranscribeJobBackend(JobBackendPort):
    """Job backend implementation for AWS Transcribe batch transcription jobs."""

    _OUTPUT_KEY_SUFFIX = ".json"

    def __init__(self, transcribe_client: Any):
        """Initialize Transcribe backend adapter.

        Args:
            transcribe_client: boto3 `transcribe` client.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when transcribe_client is None.
        """

        if transcribe_client is None:
            raise ValueError("transcribe_client must not be None")
        self._transcribe_client = transcribe_client

    def backend_submit(self, spec: JobSpec) -> str:
        """Start one transcription job.

        The service requires either a language code or automatic language
        identification, so jobs without a hint request identification.

        Args:
            spec: Immutable job description.

        Returns:
            str: Job id, equal to `spec.job_name`.

        Raises:
            JobBackendError: Raised when Transcribe rejects the request.
        """

        request_parameters: dict[str, Any] = {
            "TranscriptionJobName": spec.job_name,
            "Media": {"MediaFileUri": spec.source_locator},
            "OutputBucketName": spec.output_namespace,
            "OutputKey": spec.output_key,
        }
        if spec.language_hint:
            request_parameters["LanguageCode"] = spec.language_hint
        else:
            request_parameters["IdentifyLanguage"] = True

        try:
            self._transcribe_client.start_transcription_job(**request_parameters)
        except ClientError as error:
            raise JobBackendError(
                f"Transcribe rejected job submission: job_name={spec.job_name}, "
                f"code={adapter_client_error_code(error)}",
                error_code="BACKEND_SUBMIT_REJECTED",
            ) from error
        except BotoCoreError as error:
            raise JobBackendError(
                f"Transcribe submission transport failed: job_name={spec.job_name}",
                error_code="BACKEND_TRANSPORT_ERROR",
            ) from error
        return spec.job_name

    def backend_status(self, job_id: str) -> JobStatus:
        """Query one job status.

        Args:
            job_id: Transcription job name.

        Returns:
            JobStatus: Mapped status; QUEUED and IN_PROGRESS map to RUNNING.

        Raises:
            JobBackendError: Raised when Transcribe rejects the query.
        """

        try:
            response = self._transcribe_client.get_transcription_job(TranscriptionJobName=job_id)
        except ClientError as error:
            raise JobBackendError(
                f"Transcribe rejected status query: job_name={job_id}, code={adapter_client_error_code(error)}",
                error_code="BACKEND_STATUS_REJECTED",
            ) from error
        except BotoCoreError as error:
            raise JobBackendError(
                f"Transcribe status transport failed: job_name={job_id}",
                error_code="BACKEND_TRANSPORT_ERROR",
            ) from error

        status_value = response.get("TranscriptionJob", {}).get("TranscriptionJobStatus")
        return domain_job_status_from_backend_value(status_value)

    def backend_output_key(self, job_id: str) -> str:
        """Return the output transcript key written by Transcribe.

        Args:
            job_id: Transcription job name.

        Returns:
            str: Output key.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        return f"{job_id}{self._OUTPUT_KEY_SUFFIX}"
