"""Fetcher API router composition for listing and streaming fetch sources."""

from __future__ import annotations

import json
from typing import BinaryIO, Iterator

from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse, StreamingResponse

from fetchscribe.domain import METADATA_CONTENT_TYPE, ConfigurationError, FetchError, FetchNotFoundError
from fetchscribe.fetchers import FetchContext, FetcherRegistry

_STREAM_CHUNK_BYTES = 64 * 1024


def _api_iter_stream(stream: BinaryIO) -> Iterator[bytes]:
    try:
        while True:
            chunk = stream.read(_STREAM_CHUNK_BYTES)
            if not chunk:
                return
            yield chunk
    finally:
        stream.close()


def api_create_fetchers_router(fetcher_registry: FetcherRegistry) -> APIRouter:
    """Create fetcher router with list and content streaming endpoints.

    Args:
        fetcher_registry: Registry of configured fetchers.

    Returns:
        APIRouter: Router exposing fetcher APIs.

    Raises:
        ValueError: Raised when fetcher_registry is None.
    """

    if fetcher_registry is None:
        raise ValueError("fetcher_registry must not be None")

    router = APIRouter(prefix="/fetchers", tags=["fetchers"])

    @router.get("")
    def api_fetchers_list() -> JSONResponse:
        """Return registered fetcher plugin identifiers.

        Returns:
            JSONResponse: Plugin identifier list payload.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        payload = {"items": list(fetcher_registry.registry_plugin_ids())}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/{plugin_id}/content", response_model=None)
    def api_fetchers_content(
        plugin_id: str,
        fetch_key: str = Query(min_length=1),
        spool_to_temp: bool | None = Query(default=None),
    ) -> StreamingResponse | JSONResponse:
        """Stream one fetched resource with metadata in a response header.

        Args:
            plugin_id: Fetcher plugin identifier.
            fetch_key: Key within the fetcher namespace.
            spool_to_temp: Optional per-call spool override.

        Returns:
            StreamingResponse | JSONResponse: Content stream, or error payload.

        Raises:
            RuntimeError: Raised when streaming fails after headers are sent.
        """

        metadata: dict[str, object] = {}
        try:
            stream = fetcher_registry.registry_fetch(
                plugin_id=plugin_id,
                fetch_key=fetch_key,
                metadata=metadata,
                context=FetchContext(spool_to_temp=spool_to_temp),
            )
        except FetchNotFoundError as error:
            return _api_error_response(status.HTTP_404_NOT_FOUND, "FETCH_NOT_FOUND", str(error))
        except (ConfigurationError, ValueError) as error:
            return _api_error_response(status.HTTP_400_BAD_REQUEST, "FETCH_INVALID_REQUEST", str(error))
        except FetchError as error:
            return _api_error_response(status.HTTP_502_BAD_GATEWAY, "FETCH_FAILED", str(error))

        media_type = str(metadata.get(METADATA_CONTENT_TYPE) or "application/octet-stream")
        return StreamingResponse(
            content=_api_iter_stream(stream),
            media_type=media_type,
            headers={"X-Fetch-Metadata": json.dumps(metadata, default=str)},
        )

    return router


def _api_error_response(status_code: int, code: str, message: str) -> JSONResponse:
    payload = {"status": "error", "code": code, "message": message}
    return JSONResponse(content=payload, status_code=status_code)
