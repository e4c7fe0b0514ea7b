"""Health endpoint router composition for app, transcription and fetcher status."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from fetchscribe.fetchers import FetcherRegistry
from fetchscribe.jobs import TranscriberPort


def api_create_health_router(fetcher_registry: FetcherRegistry, transcriber: TranscriberPort) -> APIRouter:
    """Create health-check router reporting availability without network calls.

    Args:
        fetcher_registry: Registry of configured fetchers.
        transcriber: Transcription orchestrator exposing the availability gate.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if fetcher_registry is None:
        raise ValueError("fetcher_registry must not be None")
    if transcriber is None:
        raise ValueError("transcriber must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application, transcription and fetcher health state.

        Unconfigured transcription is reported as `unavailable` while the
        overall status stays `ok`, since missing credentials are not a fault.

        Returns:
            JSONResponse: Deterministic health payload for operational checks.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        transcription_state = "available" if transcriber.transcription_is_available() else "unavailable"
        payload = {
            "status": "ok",
            "app": "up",
            "transcription": transcription_state,
            "fetchers": list(fetcher_registry.registry_plugin_ids()),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
