"""S3 object store adapter used to stage job input and read job output."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Final

from botocore.exceptions import BotoCoreError, ClientError

from fetchscribe.domain import ObjectNotFoundError, ObjectStoreError, UploadError

from .aws_clients import adapter_client_error_code
from .interfaces import ObjectStorePort

logger = logging.getLogger(__name__)


class S3ObjectStore(ObjectStorePort):
    """Object store implementation backed by a boto3 S3 client."""

    _NOT_FOUND_ERROR_CODES: Final[frozenset[str]] = frozenset({"NoSuchKey", "NotFound", "404"})

    def __init__(self, s3_client: Any):
        """Initialize S3 object store adapter.

        Args:
            s3_client: boto3 S3 client; boto3 clients are thread safe.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when s3_client is None.
        """

        if s3_client is None:
            raise ValueError("s3_client must not be None")
        self._s3_client = s3_client

    def store_put(self, namespace: str, key: str, source: str | Path | bytes) -> None:
        """Upload a local file or raw bytes to `s3://namespace/key`.

        Args:
            namespace: Bucket name.
            key: Object key.
            source: Local file path or raw payload bytes.

        Returns:
            None: Uploads object as side effect.

        Raises:
            UploadError: Raised when the file is unreadable or S3 rejects the upload.
        """

        try:
            if isinstance(source, bytes):
                self._s3_client.put_object(Bucket=namespace, Key=key, Body=source)
            else:
                self._s3_client.upload_file(Filename=str(source), Bucket=namespace, Key=key)
        except ClientError as error:
            raise UploadError(
                f"S3 upload failed: bucket={namespace}, key={key}, code={adapter_client_error_code(error)}",
                error_code="UPLOAD_REJECTED",
            ) from error
        except BotoCoreError as error:
            raise UploadError(
                f"S3 upload failed: bucket={namespace}, key={key}",
                error_code="UPLOAD_TRANSPORT_ERROR",
            ) from error
        except OSError as error:
            raise UploadError(
                f"S3 upload source unreadable: {source}",
                error_code="UPLOAD_SOURCE_UNREADABLE",
            ) from error
        logger.debug("staged object s3://%s/%s", namespace, key)

    def store_get(self, namespace: str, key: str) -> bytes:
        """Read `s3://namespace/key` fully into memory.

        Args:
            namespace: Bucket name.
            key: Object key.

        Returns:
            bytes: Object payload.

        Raises:
            ObjectNotFoundError: Raised when the key does not exist.
            ObjectStoreError: Raised for other S3 failures.
        """

        try:
            response = self._s3_client.get_object(Bucket=namespace, Key=key)
            body = response["Body"]
            try:
                return bytes(body.read())
            finally:
                body.close()
        except ClientError as error:
            error_code = adapter_client_error_code(error)
            if error_code in self._NOT_FOUND_ERROR_CODES:
                raise ObjectNotFoundError(
                    f"S3 object not found: bucket={namespace}, key={key}",
                    error_code="OBJECT_NOT_FOUND",
                ) from error
            raise ObjectStoreError(
                f"S3 read failed: bucket={namespace}, key={key}, code={error_code}",
                error_code="OBJECT_READ_REJECTED",
            ) from error
        except BotoCoreError as error:
            raise ObjectStoreError(
                f"S3 read failed: bucket={namespace}, key={key}",
                error_code="OBJECT_READ_TRANSPORT_ERROR",
            ) from error

    def store_url_for(self, namespace: str, key: str) -> str:
        """Return the `s3://` locator accepted by AWS Transcribe media input.

        Args:
            namespace: Bucket name.
            key: Object key.

        Returns:
            str: S3 URI.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        return f"s3://{namespace}/{key}"
