"""Tests for fetcher registry lookup and delegation."""

from __future__ import annotations

import io
from typing import BinaryIO

import pytest

from fetchscribe.domain import METADATA_PLUGIN_ID, ConfigurationError
from fetchscribe.fetchers import FetchContext, FetcherRegistry


class _FetcherStub:
    """Fetcher double recording fetch calls."""

    def __init__(self, plugin_id: str) -> None:
        self._plugin_id = plugin_id
        self.calls: list[tuple[str, FetchContext | None]] = []

    def fetcher_plugin_id(self) -> str:
        """Return configured plugin id.

        Returns:
            str: Plugin id.

        Raises:
            RuntimeError: Never raised by this test double.
        """

        return self._plugin_id

    def fetcher_fetch(
        self,
        fetch_key: str,
        metadata: dict[str, object],
        context: FetchContext | None = None,
    ) -> BinaryIO:
        """Return deterministic stream.

        Args:
            fetch_key: Fetch key.
            metadata: Caller metadata record.
            context: Optional fetch context.

        Returns:
            BinaryIO: In-memory stream.

        Raises:
            RuntimeError: Never raised by this test double.
        """

        self.calls.append((fetch_key, context))
        return io.BytesIO(f"{self._plugin_id}:{fetch_key}".encode())


def test_fetchers_registry_delegates_and_records_plugin_id() -> None:
    """Delegate to the selected fetcher and tag metadata with its plugin id.

    Returns:
        None: Assertions validate delegation.

    Raises:
        AssertionError: Raised when registry selects the wrong fetcher.
    """

    first_fetcher = _FetcherStub("b-fetcher")
    second_fetcher = _FetcherStub("a-fetcher")
    registry = FetcherRegistry([first_fetcher, second_fetcher])
    metadata: dict[str, object] = {}
    context = FetchContext(spool_to_temp=True)

    stream = registry.registry_fetch("a-fetcher", "key-1", metadata, context)

    assert stream.read() == b"a-fetcher:key-1"
    assert metadata[METADATA_PLUGIN_ID] == "a-fetcher"
    assert second_fetcher.calls == [("key-1", context)]
    assert first_fetcher.calls == []
    assert registry.registry_plugin_ids() == ("a-fetcher", "b-fetcher")


def test_fetchers_registry_unknown_plugin_raises_configuration_error() -> None:
    """Raise ConfigurationError for unregistered plugin ids.

    Returns:
        None: Assertions validate unknown plugin handling.

    Raises:
        AssertionError: Raised when lookup succeeds unexpectedly.
    """

    with pytest.raises(ConfigurationError) as error_info:
        FetcherRegistry().registry_get("s3-fetcher")

    assert error_info.value.error_code == "FETCHER_NOT_REGISTERED"


def test_fetchers_registry_rejects_duplicate_plugin_ids() -> None:
    """Reject two fetchers claiming the same plugin id.

    Returns:
        None: Assertions validate duplicate detection.

    Raises:
        AssertionError: Raised when duplicates are accepted.
    """

    with pytest.raises(ValueError, match="duplicate"):
        FetcherRegistry([_FetcherStub("same"), _FetcherStub("same")])


def test_fetchers_context_resolves_spool_default() -> None:
    """Fall back to configured spool default only when context leaves it unset.

    Returns:
        None: Assertions validate spool resolution.

    Raises:
        AssertionError: Raised when override precedence is wrong.
    """

    assert FetchContext().context_resolve_spool(True) is True
    assert FetchContext(spool_to_temp=False).context_resolve_spool(True) is False
    assert FetchContext(spool_to_temp=True).context_resolve_spool(False) is True
