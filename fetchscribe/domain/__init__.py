"""Domain models used across application layer boundaries."""

from .availability import (
	PLACEHOLDER_BUCKET_NAME,
	PLACEHOLDER_CLIENT_ID,
	PLACEHOLDER_CLIENT_SECRET,
	domain_transcription_is_available,
)
from .errors import (
	ConfigurationError,
	FetchError,
	FetchNotFoundError,
	FetchScribeError,
	JobBackendError,
	JobCancelledError,
	ObjectNotFoundError,
	ObjectStoreError,
	PollTimeoutError,
	UploadError,
)
from .metadata import (
	METADATA_CONTENT_LENGTH,
	METADATA_CONTENT_TYPE,
	METADATA_LAST_MODIFIED,
	METADATA_PLUGIN_ID,
	METADATA_SOURCE_LOCATOR,
	domain_metadata_copy_user_metadata,
)
from .models import (
	JobSpec,
	JobStatus,
	TranscriptionCredentials,
	TranscriptionOutcome,
	TranscriptionResult,
	domain_job_status_from_backend_value,
)
from .paths import domain_resolve_confined_path
from .timeline import domain_build_stage_event

__all__ = [
	"ConfigurationError",
	"FetchError",
	"FetchNotFoundError",
	"FetchScribeError",
	"JobBackendError",
	"JobCancelledError",
	"JobSpec",
	"JobStatus",
	"METADATA_CONTENT_LENGTH",
	"METADATA_CONTENT_TYPE",
	"METADATA_LAST_MODIFIED",
	"METADATA_PLUGIN_ID",
	"METADATA_SOURCE_LOCATOR",
	"ObjectNotFoundError",
	"ObjectStoreError",
	"PLACEHOLDER_BUCKET_NAME",
	"PLACEHOLDER_CLIENT_ID",
	"PLACEHOLDER_CLIENT_SECRET",
	"PollTimeoutError",
	"TranscriptionCredentials",
	"TranscriptionOutcome",
	"TranscriptionResult",
	"UploadError",
	"domain_build_stage_event",
	"domain_job_status_from_backend_value",
	"domain_metadata_copy_user_metadata",
	"domain_resolve_confined_path",
	"domain_transcription_is_available",
]
