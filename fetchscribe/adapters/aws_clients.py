"""boto3 client construction helpers for S3 and Transcribe."""

from __future__ import annotations

from typing import Any

import boto3
from botocore.config import Config as BotoConfig


def adapter_create_aws_client(
    service_name: str,
    region_name: str,
    access_key_id: str | None = None,
    secret_access_key: str | None = None,
    endpoint_url: str | None = None,
    max_attempts: int = 3,
) -> Any:
    """Create a boto3 client with standard retry mode.

    Explicit keys are used when both are provided; otherwise boto3 resolves
    credentials from its default chain.

    Args:
        service_name: boto3 service name (`s3`, `transcribe`).
        region_name: AWS region.
        access_key_id: Optional access key id.
        secret_access_key: Optional secret access key.
        endpoint_url: Optional endpoint override for S3-compatible stores.
        max_attempts: SDK-level retry attempts for transient failures.

    Returns:
        Any: boto3 service client.

    Raises:
        ValueError: Raised when service or region is blank.
    """

    if not service_name.strip():
        raise ValueError("service_name must not be blank")
    if not region_name.strip():
        raise ValueError("region_name must not be blank")

    client_kwargs: dict[str, Any] = {
        "region_name": region_name.strip(),
        "config": BotoConfig(retries={"max_attempts": max_attempts, "mode": "standard"}),
    }
    if access_key_id and secret_access_key:
        client_kwargs["aws_access_key_id"] = access_key_id
        client_kwargs["aws_secret_access_key"] = secret_access_key
    if endpoint_url:
        client_kwargs["endpoint_url"] = endpoint_url
    return boto3.client(service_name, **client_kwargs)


def adapter_client_error_code(error: Exception) -> str:
    """Return the AWS error code carried by a botocore ClientError.

    Args:
        error: Caught botocore exception.

    Returns:
        str: Error code, or `UNKNOWN` when absent.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    response = getattr(error, "response", None) or {}
    return str(response.get("Error", {}).get("Code") or "UNKNOWN")
