"""Tests for fetcher listing and content streaming endpoints."""

from __future__ import annotations

import json
from pathlib import Path

from fastapi.testclient import TestClient

from fetchscribe.api.application import create_api_application
from fetchscribe.config import AppSettings
from fetchscribe.domain import FetchError
from fetchscribe.fetchers import FetcherRegistry, FileSystemFetcher


class _TranscriberStub:
    """Unavailable transcriber double for API factory dependency injection."""

    def transcription_is_available(self) -> bool:
        """Return unavailable state.

        Returns:
            bool: Always False.

        Raises:
            RuntimeError: Never raised by this test double.
        """

        return False


class _BrokenFetcherStub:
    """Fetcher double raising a transport failure."""

    def fetcher_plugin_id(self) -> str:
        """Return plugin id.

        Returns:
            str: Plugin id.

        Raises:
            RuntimeError: Never raised by this test double.
        """

        return "broken-fetcher"

    def fetcher_fetch(self, fetch_key, metadata, context=None):
        """Raise deterministic transport failure.

        Args:
            fetch_key: Fetch key.
            metadata: Caller metadata record.
            context: Optional fetch context.

        Returns:
            BinaryIO: This method does not return.

        Raises:
            FetchError: Always raised by this test double.
        """

        raise FetchError("upstream unreachable", error_code="FETCH_TRANSPORT_ERROR")


def _build_client(tmp_path: Path) -> TestClient:
    application = create_api_application(
        settings=AppSettings(),
        fetcher_registry=FetcherRegistry([FileSystemFetcher(base_path=tmp_path), _BrokenFetcherStub()]),
        transcriber=_TranscriberStub(),
    )
    return TestClient(application)


def test_api_fetchers_list_returns_sorted_plugin_ids(tmp_path: Path) -> None:
    """List registered plugin ids in deterministic order.

    Args:
        tmp_path: Pytest temporary directory.

    Returns:
        None: Assertions validate list payload.

    Raises:
        AssertionError: Raised when list payload differs.
    """

    response = _build_client(tmp_path).get("/fetchers")

    assert response.status_code == 200
    assert response.json() == {"items": ["broken-fetcher", "file-system-fetcher"]}


def test_api_fetchers_content_streams_bytes_with_metadata_header(tmp_path: Path) -> None:
    """Stream file content and expose fetch metadata as a JSON header.

    Args:
        tmp_path: Pytest temporary directory.

    Returns:
        None: Assertions validate streamed body and metadata header.

    Raises:
        AssertionError: Raised when body or header differs.
    """

    (tmp_path / "note.txt").write_bytes(b"hello fetch")

    response = _build_client(tmp_path).get(
        "/fetchers/file-system-fetcher/content",
        params={"fetch_key": "note.txt"},
    )

    assert response.status_code == 200
    assert response.content == b"hello fetch"
    metadata = json.loads(response.headers["X-Fetch-Metadata"])
    assert metadata["fetch:plugin_id"] == "file-system-fetcher"
    assert metadata["Content-Length"] == "11"


def test_api_fetchers_content_maps_errors_to_status_codes(tmp_path: Path) -> None:
    """Map not-found to 404, unknown plugin to 400 and transport failure to 502.

    Args:
        tmp_path: Pytest temporary directory.

    Returns:
        None: Assertions validate error status mapping.

    Raises:
        AssertionError: Raised when mapping differs.
    """

    client = _build_client(tmp_path)

    missing_response = client.get("/fetchers/file-system-fetcher/content", params={"fetch_key": "absent.txt"})
    unknown_response = client.get("/fetchers/s3-fetcher/content", params={"fetch_key": "a"})
    broken_response = client.get("/fetchers/broken-fetcher/content", params={"fetch_key": "a"})

    assert missing_response.status_code == 404
    assert missing_response.json()["code"] == "FETCH_NOT_FOUND"
    assert unknown_response.status_code == 400
    assert unknown_response.json()["code"] == "FETCH_INVALID_REQUEST"
    assert broken_response.status_code == 502
    assert broken_response.json() == {
        "status": "error",
        "code": "FETCH_FAILED",
        "message": "upstream unreachable",
    }


def test_api_fetchers_content_requires_fetch_key(tmp_path: Path) -> None:
    """Reject requests without a fetch key through request validation.

    Args:
        tmp_path: Pytest temporary directory.

    Returns:
        None: Assertions validate request validation.

    Raises:
        AssertionError: Raised when missing key is accepted.
    """

    response = _build_client(tmp_path).get("/fetchers/file-system-fetcher/content")

    assert response.status_code == 422
