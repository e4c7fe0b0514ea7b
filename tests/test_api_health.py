"""Tests for API health and foundation endpoint behavior.

These tests validate deterministic response behavior for configured and
unconfigured transcription states.
"""

from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from fetchscribe.api.application import create_api_application
from fetchscribe.config import AppSettings
from fetchscribe.fetchers import FetcherRegistry, FileSystemFetcher


class _TranscriberStub:
    """Test double exposing a fixed availability flag."""

    def __init__(self, available: bool) -> None:
        self._available = available

    def transcription_is_available(self) -> bool:
        """Return configured availability.

        Returns:
            bool: Availability flag.

        Raises:
            RuntimeError: Never raised by this test double.
        """

        return self._available


def _build_client(tmp_path: Path, available: bool) -> TestClient:
    application = create_api_application(
        settings=AppSettings(environment_name="test"),
        fetcher_registry=FetcherRegistry([FileSystemFetcher(base_path=tmp_path)]),
        transcriber=_TranscriberStub(available=available),
    )
    return TestClient(application)


def test_api_health_reports_available_transcription_and_fetchers(tmp_path: Path) -> None:
    """Return ok payload with transcription availability and fetcher ids.

    Args:
        tmp_path: Pytest temporary directory.

    Returns:
        None: Assertions validate response contract.

    Raises:
        AssertionError: Raised when endpoint payload differs.
    """

    response = _build_client(tmp_path, available=True).get("/health")

    assert response.status_code == 200
    assert response.json() == {
        "status": "ok",
        "app": "up",
        "transcription": "available",
        "fetchers": ["file-system-fetcher"],
    }


def test_api_health_reports_unconfigured_transcription_as_unavailable(tmp_path: Path) -> None:
    """Keep overall status ok while transcription is unavailable.

    Args:
        tmp_path: Pytest temporary directory.

    Returns:
        None: Assertions validate unconfigured state.

    Raises:
        AssertionError: Raised when unconfigured state is reported as failure.
    """

    response = _build_client(tmp_path, available=False).get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["transcription"] == "unavailable"


def test_api_foundation_index_reports_environment(tmp_path: Path) -> None:
    """Return service identification with configured environment label.

    Args:
        tmp_path: Pytest temporary directory.

    Returns:
        None: Assertions validate foundation payload.

    Raises:
        AssertionError: Raised when foundation payload differs.
    """

    response = _build_client(tmp_path, available=True).get("/")

    assert response.status_code == 200
    assert response.json() == {"service": "fetchscribe", "status": "ready", "environment": "test"}
