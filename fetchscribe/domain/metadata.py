"""Standard metadata keys written by fetchers."""

from __future__ import annotations

from typing import Final, Mapping

METADATA_SOURCE_LOCATOR: Final[str] = "fetch:source_locator"
METADATA_PLUGIN_ID: Final[str] = "fetch:plugin_id"
METADATA_CONTENT_LENGTH: Final[str] = "Content-Length"
METADATA_CONTENT_TYPE: Final[str] = "Content-Type"
METADATA_LAST_MODIFIED: Final[str] = "Last-Modified"


def domain_metadata_copy_user_metadata(metadata: dict[str, object], user_metadata: Mapping[str, str] | None) -> None:
    """Copy provider user metadata verbatim, overwriting colliding keys.

    Args:
        metadata: Caller-owned metadata record mutated in place.
        user_metadata: Provider-supplied key/value tags.

    Returns:
        None: Metadata is updated as side effect.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if not user_metadata:
        return
    for metadata_key, metadata_value in user_metadata.items():
        metadata[metadata_key] = metadata_value
