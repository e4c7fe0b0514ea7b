"""S3 object store fetch source."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, BinaryIO, Final

from botocore.exceptions import BotoCoreError, ClientError

from fetchscribe.adapters import adapter_client_error_code
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
from .spooling import fetcher_iter_readable, fetcher_spool_chunks

logger = logging.getLogger(__name__)


class S3Fetcher(FetcherPort):
    """Fetch source reading objects from one S3 bucket."""

    PLUGIN_ID: Final[str] = "s3-fetcher"
    _NOT_FOUND_ERROR_CODES: Final[frozenset[str]] = frozenset({"NoSuchKey", "NotFound", "404"})

    def __init__(
        self,
        s3_client: Any,
        bucket: str | None,
        prefix: str = "",
        extract_user_metadata: bool = False,
        spool_to_temp: bool = False,
    ):
        """Initialize S3 fetcher.

        Args:
            s3_client: boto3 S3 client.
            bucket: Bucket holding fetchable objects.
            prefix: Key prefix prepended to every fetch key.
            extract_user_metadata: Copy object user metadata into fetch metadata.
            spool_to_temp: Default spool mode when context does not override it.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when s3_client is None.
            ConfigurationError: Raised when bucket is absent.
        """

        if s3_client is None:
            raise ValueError("s3_client must not be None")
        normalized_bucket = (bucket or "").strip()
        if not normalized_bucket:
            raise ConfigurationError("s3 fetcher requires bucket", error_code="FETCH_CONFIG_MISSING")

        self._s3_client = s3_client
        self._bucket = normalized_bucket
        self._prefix = prefix or ""
        self._extract_user_metadata = extract_user_metadata
        self._spool_to_temp = spool_to_temp

    def fetcher_plugin_id(self) -> str:
        return self.PLUGIN_ID

    def fetcher_fetch(
        self,
        fetch_key: str,
        metadata: dict[str, object],
        context: FetchContext | None = None,
    ) -> BinaryIO:
        """Open one S3 object as a stream.

        Args:
            fetch_key: Object key relative to the configured prefix.
            metadata: Caller-owned metadata record mutated as side effect.
            context: Optional per-call fetch options.

        Returns:
            BinaryIO: S3 streaming body, or a temporary file in spool mode.

        Raises:
            ValueError: Raised when fetch_key is blank.
            FetchNotFoundError: Raised when the object does not exist.
            FetchError: Raised for other S3 or transport failures.
        """

        normalized_fetch_key = fetch_key.strip()
        if not normalized_fetch_key:
            raise ValueError("fetch_key must not be blank")

        object_key = f"{self._prefix}{normalized_fetch_key}"
        spool_to_temp = (context or FetchContext()).context_resolve_spool(self._spool_to_temp)

        try:
            response = self._s3_client.get_object(Bucket=self._bucket, Key=object_key)
            body = response["Body"]
            if spool_to_temp:
                try:
                    stream = fetcher_spool_chunks(fetcher_iter_readable(body))
                finally:
                    body.close()
            else:
                stream = body
        except ClientError as error:
            error_code = adapter_client_error_code(error)
            if error_code in self._NOT_FOUND_ERROR_CODES:
                raise FetchNotFoundError(
                    f"S3 object not found: bucket={self._bucket}, key={object_key}",
                    error_code="FETCH_NOT_FOUND",
                ) from error
            raise FetchError(
                f"S3 fetch failed: bucket={self._bucket}, key={object_key}, code={error_code}",
                error_code="FETCH_REJECTED",
            ) from error
        except BotoCoreError as error:
            raise FetchError(
                f"S3 fetch transport failed: bucket={self._bucket}, key={object_key}",
                error_code="FETCH_TRANSPORT_ERROR",
            ) from error

        metadata[METADATA_SOURCE_LOCATOR] = f"s3://{self._bucket}/{object_key}"
        if response.get("ContentLength") is not None:
            metadata[METADATA_CONTENT_LENGTH] = str(response["ContentLength"])
        if response.get("ContentType"):
            metadata[METADATA_CONTENT_TYPE] = response["ContentType"]
        last_modified = response.get("LastModified")
        if isinstance(last_modified, datetime):
            metadata[METADATA_LAST_MODIFIED] = last_modified.isoformat()
        if self._extract_user_metadata:
            domain_metadata_copy_user_metadata(metadata, response.get("Metadata"))
        logger.debug("fetched s3://%s/%s spool=%s", self._bucket, object_key, spool_to_temp)
        return stream
