"""FastAPI application factory for fetch and transcription services."""

from fastapi import FastAPI

from fetchscribe.config import AppSettings
from fetchscribe.fetchers import FetcherRegistry
from fetchscribe.jobs import TranscriberPort

from .routers import api_create_fetchers_router, api_create_health_router, api_create_transcriptions_router


def create_api_application(
    settings: AppSettings,
    fetcher_registry: FetcherRegistry,
    transcriber: TranscriberPort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        fetcher_registry: Registry of configured fetchers.
        transcriber: Transcription orchestrator.

    Returns:
        FastAPI: Framework application instance with all routers mounted.

    Raises:
        ValueError: Raised when router dependencies are invalid.
    """
    application = FastAPI(title="fetchscribe")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return a minimal service identification response.

        Returns:
            dict[str, str]: Service name, status and environment.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        return {
            "service": "fetchscribe",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(api_create_health_router(fetcher_registry=fetcher_registry, transcriber=transcriber))
    application.include_router(api_create_fetchers_router(fetcher_registry=fetcher_registry))
    application.include_router(
        api_create_transcriptions_router(
            transcriber=transcriber,
            source_base_path=settings.transcribe_source_base_path,
        )
    )

    return application
