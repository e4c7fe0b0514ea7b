"""Tests for the Azure Blob fetch source using container client doubles."""

from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from azure.core.exceptions import ResourceNotFoundError, ServiceRequestError

from fetchscribe.domain import (
    METADATA_CONTENT_LENGTH,
    METADATA_CONTENT_TYPE,
    METADATA_LAST_MODIFIED,
    METADATA_SOURCE_LOCATOR,
    ConfigurationError,
    FetchError,
    FetchNotFoundError,
)
from fetchscribe.fetchers import AzureBlobFetcher, FetchContext


class _DownloaderStub:
    """Blob downloader double exposing properties and payload readers."""

    def __init__(self, payload: bytes) -> None:
        self._payload = payload
        self.properties = SimpleNamespace(
            size=len(payload),
            content_settings=SimpleNamespace(content_type="audio/ogg"),
            last_modified=datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
            metadata={"channel": "left"},
        )

    def readall(self) -> bytes:
        """Return full payload.

        Returns:
            bytes: Blob payload.

        Raises:
            RuntimeError: Never raised by this test double.
        """

        return self._payload

    def readinto(self, stream) -> int:
        """Write payload into stream.

        Args:
            stream: Writable binary stream.

        Returns:
            int: Bytes written.

        Raises:
            RuntimeError: Never raised by this test double.
        """

        return stream.write(self._payload)


class _BlobClientStub:
    """Blob client double returning a downloader or raising a configured error."""

    def __init__(self, blob_name: str, payload: bytes, error: Exception | None) -> None:
        self.url = f"https://account.blob.core.windows.net/media/{blob_name}"
        self._payload = payload
        self._error = error

    def download_blob(self) -> _DownloaderStub:
        """Return downloader or raise configured error.

        Returns:
            _DownloaderStub: Downloader double.

        Raises:
            Exception: Raised when error is configured.
        """

        if self._error is not None:
            raise self._error
        return _DownloaderStub(self._payload)


class _ContainerClientStub:
    """Container client double creating blob client doubles."""

    def __init__(self, payload: bytes = b"", error: Exception | None = None) -> None:
        self._payload = payload
        self._error = error
        self.requested_blobs: list[str] = []

    def get_blob_client(self, blob: str) -> _BlobClientStub:
        """Return blob client double.

        Args:
            blob: Blob name.

        Returns:
            _BlobClientStub: Blob client double.

        Raises:
            RuntimeError: Never raised by this test double.
        """

        self.requested_blobs.append(blob)
        return _BlobClientStub(blob, self._payload, self._error)


def _build_fetcher(container_client: _ContainerClientStub, **kwargs) -> AzureBlobFetcher:
    return AzureBlobFetcher(
        endpoint="https://account.blob.core.windows.net",
        container="media",
        sas_token="sv=2024&sig=abc",
        container_client=container_client,
        **kwargs,
    )


def test_fetchers_az_blob_returns_content_and_metadata() -> None:
    """Download blob into memory and record blob properties.

    Returns:
        None: Assertions validate content and metadata.

    Raises:
        AssertionError: Raised when fetch result is wrong.
    """

    container_client = _ContainerClientStub(payload=b"ogg-bytes")
    fetcher = _build_fetcher(container_client)
    metadata: dict[str, object] = {}

    stream = fetcher.fetcher_fetch("clips/a.ogg", metadata)

    assert stream.read() == b"ogg-bytes"
    assert container_client.requested_blobs == ["clips/a.ogg"]
    assert fetcher.fetcher_plugin_id() == "az-blob-fetcher"
    assert metadata[METADATA_SOURCE_LOCATOR] == "https://account.blob.core.windows.net/media/clips/a.ogg"
    assert metadata[METADATA_CONTENT_LENGTH] == "9"
    assert metadata[METADATA_CONTENT_TYPE] == "audio/ogg"
    assert metadata[METADATA_LAST_MODIFIED] == "2024-05-01T12:00:00+00:00"
    assert "channel" not in metadata


def test_fetchers_az_blob_spool_mode_and_user_metadata() -> None:
    """Spool blob to a temporary file and copy user metadata when enabled.

    Returns:
        None: Assertions validate spooled content and user metadata.

    Raises:
        AssertionError: Raised when spool or metadata extraction is wrong.
    """

    fetcher = _build_fetcher(_ContainerClientStub(payload=b"spooled"), extract_user_metadata=True)
    metadata: dict[str, object] = {}

    with fetcher.fetcher_fetch("a.ogg", metadata, FetchContext(spool_to_temp=True)) as stream:
        assert stream.read() == b"spooled"

    assert metadata["channel"] == "left"


def test_fetchers_az_blob_maps_azure_errors() -> None:
    """Map missing blobs to FetchNotFoundError and other failures to FetchError.

    Returns:
        None: Assertions validate error mapping.

    Raises:
        AssertionError: Raised when errors are misclassified.
    """

    missing_fetcher = _build_fetcher(_ContainerClientStub(error=ResourceNotFoundError("gone")))
    offline_fetcher = _build_fetcher(_ContainerClientStub(error=ServiceRequestError("offline")))

    with pytest.raises(FetchNotFoundError):
        missing_fetcher.fetcher_fetch("a.ogg", {})
    with pytest.raises(FetchError) as offline_error:
        offline_fetcher.fetcher_fetch("a.ogg", {})

    assert not isinstance(offline_error.value, FetchNotFoundError)


@pytest.mark.parametrize(
    ("endpoint", "container", "sas_token"),
    [
        (None, "media", "token"),
        ("https://account.blob.core.windows.net", "", "token"),
        ("https://account.blob.core.windows.net", "media", None),
    ],
)
def test_fetchers_az_blob_missing_configuration_raises(
    endpoint: str | None,
    container: str | None,
    sas_token: str | None,
) -> None:
    """Fail at construction when endpoint, container or SAS token is absent.

    Args:
        endpoint: Candidate endpoint.
        container: Candidate container.
        sas_token: Candidate SAS token.

    Returns:
        None: Assertions validate eager configuration checks.

    Raises:
        AssertionError: Raised when partial configuration is accepted.
    """

    with pytest.raises(ConfigurationError):
        AzureBlobFetcher(
            endpoint=endpoint,
            container=container,
            sas_token=sas_token,
            container_client=_ContainerClientStub(),
        )
