"""Typed interfaces for pluggable fetch sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Protocol


@dataclass(frozen=True)
class FetchContext:
    """Per-call cross-cutting fetch options.

    Attributes:
        spool_to_temp: Materialize content into a local temporary file before
            returning it. None defers to the fetcher's configured default.
    """

    spool_to_temp: bool | None = None

    def context_resolve_spool(self, configured_default: bool) -> bool:
        """Return effective spool mode for one call.

        Args:
            configured_default: Fetcher-level configured spool mode.

        Returns:
            bool: Effective spool mode.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        if self.spool_to_temp is None:
            return configured_default
        return self.spool_to_temp


class FetcherPort(Protocol):
    """Port definition for retrieving a byte stream by fetch key.

    Implementations must be safe for concurrent invocation: they hold only
    immutable configuration and thread-safe SDK clients.
    """

    def fetcher_plugin_id(self) -> str:
        """Return the stable plugin identifier for this implementation.

        Returns:
            str: Class-level constant plugin identifier.

        Raises:
            RuntimeError: Implementations do not raise runtime errors.
        """

    def fetcher_fetch(
        self,
        fetch_key: str,
        metadata: dict[str, object],
        context: FetchContext | None = None,
    ) -> BinaryIO:
        """Open one resource and enrich caller metadata in place.

        Args:
            fetch_key: Non-blank key resolvable in the fetcher namespace.
            metadata: Caller-owned metadata record mutated as side effect.
            context: Optional per-call fetch options.

        Returns:
            BinaryIO: Open caller-owned stream positioned at offset 0.

        Raises:
            FetchNotFoundError: Raised when the key does not resolve.
            FetchError: Raised for transport or unreachable-source failures.
        """
