"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from fetchscribe.adapters import AwsTranscribeJobBackend, S3ObjectStore, adapter_create_aws_client
from fetchscribe.api import create_api_application
from fetchscribe.config import AppSettings, config_load_settings
from fetchscribe.fetchers import (
    AzureBlobFetcher,
    FetcherPort,
    FetcherRegistry,
    FileSystemFetcher,
    HttpFetcher,
    S3Fetcher,
)
from fetchscribe.jobs import PollRetryStrategy, TranscriptionJobOrchestrator


def bootstrap_create_application() -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
        ConfigurationError: Raised when a partially configured fetcher is invalid.
    """

    settings = config_load_settings()
    return create_api_application(
        settings=settings,
        fetcher_registry=bootstrap_create_fetcher_registry(settings),
        transcriber=bootstrap_create_transcription_orchestrator(settings),
    )


def bootstrap_create_transcription_orchestrator(settings: AppSettings | None = None) -> TranscriptionJobOrchestrator:
    """Build transcription orchestrator backed by S3 and AWS Transcribe.

    Clients are built even when credentials are placeholders; the availability
    gate keeps them unused until real credentials are supplied.

    Args:
        settings: Optional pre-loaded settings.

    Returns:
        TranscriptionJobOrchestrator: Fully wired orchestrator instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings or config_load_settings()
    credentials = resolved_settings.settings_transcription_credentials()
    s3_client = adapter_create_aws_client(
        service_name="s3",
        region_name=resolved_settings.transcribe_region,
        access_key_id=credentials.client_id,
        secret_access_key=credentials.client_secret,
    )
    transcribe_client = adapter_create_aws_client(
        service_name="transcribe",
        region_name=resolved_settings.transcribe_region,
        access_key_id=credentials.client_id,
        secret_access_key=credentials.client_secret,
    )
    return TranscriptionJobOrchestrator(
        object_store=S3ObjectStore(s3_client=s3_client),
        job_backend=AwsTranscribeJobBackend(transcribe_client=transcribe_client),
        credentials=credentials,
        poll_strategy=PollRetryStrategy(
            initial_wait_seconds=resolved_settings.transcribe_poll_initial_wait_seconds,
            backoff_base_seconds=resolved_settings.transcribe_poll_backoff_base_seconds,
            max_backoff_seconds=resolved_settings.transcribe_poll_backoff_max_seconds,
            jitter_min_multiplier=resolved_settings.transcribe_poll_jitter_min_multiplier,
            jitter_max_multiplier=resolved_settings.transcribe_poll_jitter_max_multiplier,
        ),
        poll_timeout_seconds=resolved_settings.transcribe_poll_timeout_seconds,
    )


def bootstrap_create_fetcher_registry(settings: AppSettings | None = None) -> FetcherRegistry:
    """Build the process-wide fetcher registry from configured sources.

    A fetcher is registered only when its namespace setting is present.

    Args:
        settings: Optional pre-loaded settings.

    Returns:
        FetcherRegistry: Registry of configured fetchers.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
        ConfigurationError: Raised when an enabled fetcher lacks required parameters.
    """

    resolved_settings = settings or config_load_settings()
    fetchers: list[FetcherPort] = []

    if resolved_settings.fetch_file_base_path:
        fetchers.append(FileSystemFetcher(base_path=resolved_settings.fetch_file_base_path))

    if resolved_settings.fetch_s3_bucket:
        fetchers.append(
            S3Fetcher(
                s3_client=adapter_create_aws_client(
                    service_name="s3",
                    region_name=resolved_settings.fetch_s3_region,
                    endpoint_url=resolved_settings.fetch_s3_endpoint_url,
                ),
                bucket=resolved_settings.fetch_s3_bucket,
                prefix=resolved_settings.fetch_s3_prefix,
                extract_user_metadata=resolved_settings.fetch_extract_user_metadata,
                spool_to_temp=resolved_settings.fetch_spool_to_temp,
            )
        )

    if resolved_settings.fetch_az_blob_endpoint or resolved_settings.fetch_az_blob_container:
        fetchers.append(
            AzureBlobFetcher(
                endpoint=resolved_settings.fetch_az_blob_endpoint,
                container=resolved_settings.fetch_az_blob_container,
                sas_token=resolved_settings.fetch_az_blob_sas_token,
                extract_user_metadata=resolved_settings.fetch_extract_user_metadata,
                spool_to_temp=resolved_settings.fetch_spool_to_temp,
            )
        )

    if resolved_settings.fetch_http_enabled:
        fetchers.append(
            HttpFetcher(
                timeout_seconds=resolved_settings.fetch_http_timeout_seconds,
                spool_to_temp=resolved_settings.fetch_spool_to_temp,
                allowed_hosts=resolved_settings.settings_http_allowed_hosts() or None,
            )
        )

    return FetcherRegistry(fetchers)
