"""Local file system fetch source."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, Final

from fetchscribe.domain import (
    METADATA_CONTENT_LENGTH,
    METADATA_LAST_MODIFIED,
    METADATA_SOURCE_LOCATOR,
    ConfigurationError,
    FetchError,
    FetchNotFoundError,
    domain_resolve_confined_path,
)

from .interfaces import FetchContext, FetcherPort

logger = logging.getLogger(__name__)


class FileSystemFetcher(FetcherPort):
    """Fetch source resolving keys as relative paths under a base directory.

    Local files are already seekable, so spool mode is accepted but has no
    effect.
    """

    PLUGIN_ID: Final[str] = "file-system-fetcher"

    def __init__(self, base_path: str | Path | None):
        """Initialize file system fetcher.

        Args:
            base_path: Directory every fetch key is resolved under.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ConfigurationError: Raised when base_path is absent or not a directory.
        """

        if base_path is None or not str(base_path).strip():
            raise ConfigurationError("file system fetcher requires base_path", error_code="FETCH_CONFIG_MISSING")
        resolved_base_path = Path(base_path).expanduser().resolve()
        if not resolved_base_path.is_dir():
            raise ConfigurationError(
                f"file system fetcher base_path is not a directory: {resolved_base_path}",
                error_code="FETCH_CONFIG_INVALID",
            )
        self._base_path = resolved_base_path

    def fetcher_plugin_id(self) -> str:
        return self.PLUGIN_ID

    def fetcher_fetch(
        self,
        fetch_key: str,
        metadata: dict[str, object],
        context: FetchContext | None = None,
    ) -> BinaryIO:
        """Open one file under the base directory.

        Args:
            fetch_key: Path relative to the base directory.
            metadata: Caller-owned metadata record mutated as side effect.
            context: Optional per-call fetch options.

        Returns:
            BinaryIO: Open binary file handle.

        Raises:
            ValueError: Raised when fetch_key is blank.
            FetchError: Raised when the key escapes the base directory or cannot be opened.
            FetchNotFoundError: Raised when no regular file exists for the key.
        """

        _ = context
        normalized_fetch_key = fetch_key.strip()
        if not normalized_fetch_key:
            raise ValueError("fetch_key must not be blank")

        try:
            target_path = domain_resolve_confined_path(self._base_path, normalized_fetch_key)
        except ValueError as error:
            raise FetchError(
                f"fetch_key resolves outside base path: {normalized_fetch_key}",
                error_code="FETCH_KEY_OUTSIDE_BASE",
            ) from error
        if not target_path.is_file():
            raise FetchNotFoundError(f"file not found for fetch_key={normalized_fetch_key}", error_code="FETCH_NOT_FOUND")

        try:
            file_stat = target_path.stat()
            stream = target_path.open("rb")
        except OSError as error:
            raise FetchError(f"file could not be opened: {target_path}", error_code="FETCH_IO_ERROR") from error

        metadata[METADATA_SOURCE_LOCATOR] = target_path.as_uri()
        metadata[METADATA_CONTENT_LENGTH] = str(file_stat.st_size)
        metadata[METADATA_LAST_MODIFIED] = datetime.fromtimestamp(file_stat.st_mtime, tz=timezone.utc).isoformat()
        logger.debug("opened %s (%d bytes)", target_path, file_stat.st_size)
        return stream
