"""Availability gate deciding whether transcription credentials are usable."""

from __future__ import annotations

from typing import Final

from .models import TranscriptionCredentials

PLACEHOLDER_CLIENT_ID: Final[str] = "dummy-id"
PLACEHOLDER_CLIENT_SECRET: Final[str] = "dummy-secret"
PLACEHOLDER_BUCKET_NAME: Final[str] = "dummy-bucket"


def _domain_value_is_configured(value: str | None, placeholder: str) -> bool:
    if value is None:
        return False
    normalized_value = value.strip()
    return bool(normalized_value) and normalized_value != placeholder


def domain_transcription_is_available(credentials: TranscriptionCredentials) -> bool:
    """Return whether every credential field is set to a real value.

    Partial configuration is unavailable. No network calls are made, so the
    result is deterministic for a given credentials object.

    Args:
        credentials: Immutable transcription credentials.

    Returns:
        bool: True only when identity, secret and bucket are all configured.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return (
        _domain_value_is_configured(credentials.client_id, PLACEHOLDER_CLIENT_ID)
        and _domain_value_is_configured(credentials.client_secret, PLACEHOLDER_CLIENT_SECRET)
        and _domain_value_is_configured(credentials.bucket_name, PLACEHOLDER_BUCKET_NAME)
    )
