"""Typed runtime settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fetchscribe.domain import (
    PLACEHOLDER_BUCKET_NAME,
    PLACEHOLDER_CLIENT_ID,
    PLACEHOLDER_CLIENT_SECRET,
    TranscriptionCredentials,
)


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for API runtime, fetchers and transcription jobs.

    Environment variable names map directly to field names in uppercase.
    Example: `transcribe_bucket_name` reads from `TRANSCRIBE_BUCKET_NAME`.

    Credential fields default to placeholder values, which keep transcription
    unavailable until real values are supplied.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        log_level: Root logger level name.
        transcribe_client_id: AWS access key id for transcription.
        transcribe_client_secret: AWS secret access key for transcription.
        transcribe_bucket_name: S3 bucket used to stage input and receive output.
        transcribe_region: AWS region for S3 and Transcribe clients.
        transcribe_poll_initial_wait_seconds: Delay floor between status polls.
        transcribe_poll_backoff_base_seconds: Base poll delay for exponential backoff.
        transcribe_poll_backoff_max_seconds: Maximum poll delay cap.
        transcribe_poll_jitter_min_multiplier: Minimum poll jitter multiplier.
        transcribe_poll_jitter_max_multiplier: Maximum poll jitter multiplier.
        transcribe_poll_timeout_seconds: Client-side deadline for job completion.
        fetch_spool_to_temp: Default spool mode for remote fetchers.
        fetch_extract_user_metadata: Copy provider user metadata into fetch metadata.
        fetch_file_base_path: Base directory enabling the file system fetcher.
        fetch_s3_bucket: Bucket enabling the S3 fetcher.
        fetch_s3_prefix: Key prefix for the S3 fetcher.
        fetch_s3_region: Region for the S3 fetcher client.
        fetch_s3_endpoint_url: Optional endpoint for S3-compatible stores.
        fetch_az_blob_endpoint: Azure blob endpoint enabling the Azure fetcher.
        fetch_az_blob_container: Azure container for the Azure fetcher.
        fetch_az_blob_sas_token: Azure SAS token for the Azure fetcher.
        fetch_http_enabled: Whether the HTTP fetcher is registered; off by default.
        fetch_http_allowed_hosts: Comma-separated host names the HTTP fetcher may
            contact, checked on every redirect hop; empty allows any host.
        fetch_http_timeout_seconds: HTTP fetch request timeout.
        transcribe_source_base_path: Directory that API job submissions must
            stay inside; unset leaves API submissions unrestricted.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=8000, ge=1, le=65535)
    log_level: str = Field(default="INFO")
    transcribe_client_id: str | None = Field(default=PLACEHOLDER_CLIENT_ID)
    transcribe_client_secret: str | None = Field(default=PLACEHOLDER_CLIENT_SECRET)
    transcribe_bucket_name: str | None = Field(default=PLACEHOLDER_BUCKET_NAME)
    transcribe_region: str = Field(default="us-east-1", min_length=1)
    transcribe_poll_initial_wait_seconds: float = Field(default=1.0, gt=0)
    transcribe_poll_backoff_base_seconds: float = Field(default=2.0, ge=0)
    transcribe_poll_backoff_max_seconds: float = Field(default=30.0, gt=0)
    transcribe_poll_jitter_min_multiplier: float = Field(default=0.5, gt=0)
    transcribe_poll_jitter_max_multiplier: float = Field(default=1.5, gt=0)
    transcribe_poll_timeout_seconds: float = Field(default=900.0, gt=0)
    fetch_spool_to_temp: bool = Field(default=False)
    fetch_extract_user_metadata: bool = Field(default=False)
    fetch_file_base_path: str | None = Field(default=None)
    fetch_s3_bucket: str | None = Field(default=None)
    fetch_s3_prefix: str = Field(default="")
    fetch_s3_region: str = Field(default="us-east-1", min_length=1)
    fetch_s3_endpoint_url: str | None = Field(default=None)
    fetch_az_blob_endpoint: str | None = Field(default=None)
    fetch_az_blob_container: str | None = Field(default=None)
    fetch_az_blob_sas_token: str | None = Field(default=None)
    fetch_http_enabled: bool = Field(default=False)
    fetch_http_allowed_hosts: str = Field(default="")
    fetch_http_timeout_seconds: float = Field(default=30.0, gt=0)
    transcribe_source_base_path: str | None = Field(default=None)

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unsupported log_level={value}")
        return normalized_value

    @field_validator("transcribe_poll_backoff_max_seconds")
    @classmethod
    def _validate_backoff_cap_bounds(cls, value: float, info) -> float:
        backoff_base_seconds = float(info.data.get("transcribe_poll_backoff_base_seconds", 2.0))
        if value < backoff_base_seconds:
            raise ValueError(
                "transcribe_poll_backoff_max_seconds must be greater than or equal to "
                "transcribe_poll_backoff_base_seconds"
            )
        return value

    @field_validator("transcribe_poll_jitter_max_multiplier")
    @classmethod
    def _validate_jitter_bounds(cls, value: float, info) -> float:
        jitter_min_multiplier = float(info.data.get("transcribe_poll_jitter_min_multiplier", 0.5))
        if value < jitter_min_multiplier:
            raise ValueError(
                "transcribe_poll_jitter_max_multiplier must be greater than or equal to "
                "transcribe_poll_jitter_min_multiplier"
            )
        return value

    def settings_transcription_credentials(self) -> TranscriptionCredentials:
        """Return immutable transcription credentials for the availability gate.

        Returns:
            TranscriptionCredentials: Credential snapshot.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return TranscriptionCredentials(
            client_id=self.transcribe_client_id,
            client_secret=self.transcribe_client_secret,
            bucket_name=self.transcribe_bucket_name,
        )

    def settings_http_allowed_hosts(self) -> tuple[str, ...]:
        """Split the HTTP host allowlist into normalized host names.

        Returns:
            tuple[str, ...]: Lowercase host names; empty when no allowlist is set.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return tuple(
            host_name.strip().lower() for host_name in self.fetch_http_allowed_hosts.split(",") if host_name.strip()
        )


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
