"""Process-wide fetcher registry keyed by plugin identifier."""

from __future__ import annotations

from typing import BinaryIO, Iterable

from fetchscribe.domain import METADATA_PLUGIN_ID, ConfigurationError

from .interfaces import FetchContext, FetcherPort


class FetcherRegistry:
    """Immutable mapping from plugin identifier to fetcher instance.

    The registry is assembled once at startup and only read afterwards, so
    concurrent lookups need no synchronization.
    """

    def __init__(self, fetchers: Iterable[FetcherPort] = ()):
        """Initialize registry from fetcher instances.

        Args:
            fetchers: Fetchers to register.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when two fetchers share a plugin identifier.
        """

        registered_fetchers: dict[str, FetcherPort] = {}
        for fetcher in fetchers:
            plugin_id = fetcher.fetcher_plugin_id()
            if plugin_id in registered_fetchers:
                raise ValueError(f"duplicate fetcher plugin_id={plugin_id}")
            registered_fetchers[plugin_id] = fetcher
        self._fetchers = registered_fetchers

    def registry_plugin_ids(self) -> tuple[str, ...]:
        """Return registered plugin identifiers in sorted order.

        Returns:
            tuple[str, ...]: Deterministic plugin identifiers.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return tuple(sorted(self._fetchers))

    def registry_get(self, plugin_id: str) -> FetcherPort:
        """Return the fetcher registered under one plugin identifier.

        Args:
            plugin_id: Plugin identifier.

        Returns:
            FetcherPort: Registered fetcher.

        Raises:
            ConfigurationError: Raised when no fetcher is registered for the id.
        """

        normalized_plugin_id = plugin_id.strip()
        fetcher = self._fetchers.get(normalized_plugin_id)
        if fetcher is None:
            raise ConfigurationError(
                f"no fetcher registered for plugin_id={normalized_plugin_id}",
                error_code="FETCHER_NOT_REGISTERED",
            )
        return fetcher

    def registry_fetch(
        self,
        plugin_id: str,
        fetch_key: str,
        metadata: dict[str, object],
        context: FetchContext | None = None,
    ) -> BinaryIO:
        """Fetch one key through the selected fetcher.

        Args:
            plugin_id: Plugin identifier selecting the fetcher.
            fetch_key: Key within the fetcher namespace.
            metadata: Caller-owned metadata record mutated as side effect.
            context: Optional per-call fetch options.

        Returns:
            BinaryIO: Open caller-owned stream.

        Raises:
            ConfigurationError: Raised when plugin id is not registered.
            FetchNotFoundError: Raised when the key does not resolve.
            FetchError: Raised for transport failures.
        """

        fetcher = self.registry_get(plugin_id)
        stream = fetcher.fetcher_fetch(fetch_key, metadata, context)
        metadata[METADATA_PLUGIN_ID] = fetcher.fetcher_plugin_id()
        return stream
