"""Transcription API router composition for job submit and result endpoints."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from fetchscribe.domain import (
    JobBackendError,
    ObjectStoreError,
    PollTimeoutError,
    TranscriptionOutcome,
    TranscriptionResult,
    UploadError,
    domain_resolve_confined_path,
)
from fetchscribe.jobs import TranscriberPort


class TranscriptionSubmitRequest(BaseModel):
    """Request body for transcription submission.

    Attributes:
        source_path: Server-local media file path to stage and transcribe.
        language_hint: Optional source language code.
    """

    source_path: str = Field(min_length=1)
    language_hint: str | None = None


def api_serialize_transcription_result(result: TranscriptionResult) -> dict[str, object]:
    """Serialize one transcription result into API-safe primitives.

    Args:
        result: Transcription result contract.

    Returns:
        dict[str, object]: JSON-serializable payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "outcome": result.outcome.value,
        "job_name": result.job_name,
        "transcript": result.transcript,
        "stage_timeline": result.stage_timeline,
    }


def api_create_transcriptions_router(
    transcriber: TranscriberPort,
    source_base_path: str | Path | None = None,
) -> APIRouter:
    """Create transcription router with submit and result endpoints.

    Args:
        transcriber: Transcription orchestrator.
        source_base_path: Directory submitted source paths must resolve under;
            None accepts any server-local path.

    Returns:
        APIRouter: Router exposing transcription APIs.

    Raises:
        ValueError: Raised when transcriber is None.
    """

    if transcriber is None:
        raise ValueError("transcriber must not be None")

    resolved_source_base_path = None
    if source_base_path is not None and str(source_base_path).strip():
        resolved_source_base_path = Path(source_base_path).expanduser().resolve()

    router = APIRouter(prefix="/transcriptions", tags=["transcriptions"])

    @router.post("")
    def api_transcriptions_submit(request: TranscriptionSubmitRequest) -> JSONResponse:
        """Stage and submit one transcription job without waiting.

        Args:
            request: Submission request body.

        Returns:
            JSONResponse: 202 with job name, 503 when unconfigured, or error payload.

        Raises:
            RuntimeError: Raised when execution fails unexpectedly.
        """

        source_path = request.source_path
        if resolved_source_base_path is not None:
            try:
                source_path = str(domain_resolve_confined_path(resolved_source_base_path, request.source_path))
            except ValueError as error:
                return _api_error_response(status.HTTP_400_BAD_REQUEST, "SOURCE_PATH_FORBIDDEN", str(error))

        try:
            result = transcriber.transcription_submit(
                source_path=source_path,
                language_hint=request.language_hint,
            )
        except UploadError as error:
            return _api_error_response(status.HTTP_502_BAD_GATEWAY, "UPLOAD_FAILED", str(error))
        except JobBackendError as error:
            return _api_error_response(status.HTTP_502_BAD_GATEWAY, "BACKEND_FAILED", str(error))
        except ValueError as error:
            return _api_error_response(status.HTTP_400_BAD_REQUEST, "INVALID_REQUEST", str(error))

        status_code = status.HTTP_202_ACCEPTED
        if result.outcome is TranscriptionOutcome.UNAVAILABLE:
            status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return JSONResponse(content=api_serialize_transcription_result(result), status_code=status_code)

    @router.get("/{job_name}")
    def api_transcriptions_result(job_name: str) -> JSONResponse:
        """Wait for one job and return its terminal outcome.

        Remote failure is a normal outcome and returns 200 with a null
        transcript.

        Args:
            job_name: Job name returned by submission.

        Returns:
            JSONResponse: Result payload, or error payload.

        Raises:
            RuntimeError: Raised when execution fails unexpectedly.
        """

        try:
            result = transcriber.transcription_get_result(job_name=job_name)
        except PollTimeoutError as error:
            return _api_error_response(status.HTTP_504_GATEWAY_TIMEOUT, "POLL_TIMEOUT", str(error))
        except JobBackendError as error:
            return _api_error_response(status.HTTP_502_BAD_GATEWAY, "BACKEND_FAILED", str(error))
        except ObjectStoreError as error:
            return _api_error_response(status.HTTP_502_BAD_GATEWAY, "OUTPUT_READ_FAILED", str(error))

        status_code = status.HTTP_200_OK
        if result.outcome is TranscriptionOutcome.UNAVAILABLE:
            status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return JSONResponse(content=api_serialize_transcription_result(result), status_code=status_code)

    return router


def _api_error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = {"status": "error", "code": code, "message": message}
    return JSONResponse(content=payload, status_code=status_code)
