"""Azure Blob Storage fetch source."""

from __future__ import annotations

import io
import logging
import tempfile
from typing import Any, BinaryIO, Final

from azure.core.exceptions import AzureError, ResourceNotFoundError
from azure.storage.blob import ContainerClient

from fetchscribe.domain import (
    METADATA_CONTENT_LENGTH,
    METADATA_CONTENT_TYPE,
    METADATA_LAST_MODIFIED,
    METADATA_SOURCE_LOCATOR,
    ConfigurationError,
    FetchError,
    FetchNotFoundError,
    domain_metadata_copy_user_metadata,
)

from .interfaces import FetchContext, FetcherPort

logger = logging.getLogger(__name__)


class AzureBlobFetcher(FetcherPort):
    """Fetch source reading blobs from one Azure container via SAS token."""

    PLUGIN_ID: Final[str] = "az-blob-fetcher"

    def __init__(
        self,
        endpoint: str | None,
        container: str | None,
        sas_token: str | None,
        extract_user_metadata: bool = False,
        spool_to_temp: bool = False,
        container_client: Any | None = None,
    ):
        """Initialize Azure Blob fetcher.

        Args:
            endpoint: Storage account blob endpoint URL.
            container: Container holding fetchable blobs.
            sas_token: Shared access signature granting read access.
            extract_user_metadata: Copy blob user metadata into fetch metadata.
            spool_to_temp: Default spool mode when context does not override it.
            container_client: Optional pre-built container client.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ConfigurationError: Raised when endpoint, container or sas_token is absent.
        """

        normalized_endpoint = (endpoint or "").strip()
        normalized_container = (container or "").strip()
        normalized_sas_token = (sas_token or "").strip()
        if not normalized_endpoint:
            raise ConfigurationError("az blob fetcher requires endpoint", error_code="FETCH_CONFIG_MISSING")
        if not normalized_container:
            raise ConfigurationError("az blob fetcher requires container", error_code="FETCH_CONFIG_MISSING")
        if not normalized_sas_token:
            raise ConfigurationError("az blob fetcher requires sas_token", error_code="FETCH_CONFIG_MISSING")

        self._container = normalized_container
        self._extract_user_metadata = extract_user_metadata
        self._spool_to_temp = spool_to_temp
        self._container_client = container_client or ContainerClient(
            account_url=normalized_endpoint,
            container_name=normalized_container,
            credential=normalized_sas_token,
        )

    def fetcher_plugin_id(self) -> str:
        return self.PLUGIN_ID

    def fetcher_fetch(
        self,
        fetch_key: str,
        metadata: dict[str, object],
        context: FetchContext | None = None,
    ) -> BinaryIO:
        """Download one blob as a stream.

        Args:
            fetch_key: Blob name within the container.
            metadata: Caller-owned metadata record mutated as side effect.
            context: Optional per-call fetch options.

        Returns:
            BinaryIO: In-memory stream, or a temporary file in spool mode.

        Raises:
            ValueError: Raised when fetch_key is blank.
            FetchNotFoundError: Raised when the blob does not exist.
            FetchError: Raised for other Azure failures.
        """

        normalized_fetch_key = fetch_key.strip()
        if not normalized_fetch_key:
            raise ValueError("fetch_key must not be blank")

        spool_to_temp = (context or FetchContext()).context_resolve_spool(self._spool_to_temp)
        blob_client = self._container_client.get_blob_client(normalized_fetch_key)

        try:
            downloader = blob_client.download_blob()
            if spool_to_temp:
                stream: BinaryIO = tempfile.TemporaryFile()
                try:
                    downloader.readinto(stream)
                    stream.seek(0)
                except Exception:
                    stream.close()
                    raise
            else:
                stream = io.BytesIO(downloader.readall())
        except ResourceNotFoundError as error:
            raise FetchNotFoundError(
                f"blob not found: container={self._container}, key={normalized_fetch_key}",
                error_code="FETCH_NOT_FOUND",
            ) from error
        except AzureError as error:
            raise FetchError(
                f"blob fetch failed: container={self._container}, key={normalized_fetch_key}",
                error_code="FETCH_TRANSPORT_ERROR",
            ) from error

        blob_properties = downloader.properties
        metadata[METADATA_SOURCE_LOCATOR] = blob_client.url
        metadata[METADATA_CONTENT_LENGTH] = str(blob_properties.size)
        content_settings = getattr(blob_properties, "content_settings", None)
        if content_settings is not None and content_settings.content_type:
            metadata[METADATA_CONTENT_TYPE] = content_settings.content_type
        if blob_properties.last_modified is not None:
            metadata[METADATA_LAST_MODIFIED] = blob_properties.last_modified.isoformat()
        if self._extract_user_metadata:
            domain_metadata_copy_user_metadata(metadata, blob_properties.metadata)
        logger.debug("fetched blob %s/%s spool=%s", self._container, normalized_fetch_key, spool_to_temp)
        return stream
