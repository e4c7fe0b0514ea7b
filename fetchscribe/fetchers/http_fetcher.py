"""HTTP(S) fetch source."""

from __future__ import annotations

import io
import logging
from typing import BinaryIO, Final, Iterable
from urllib.parse import urlparse

import httpx

from fetchscribe.domain import (
    METADATA_CONTENT_LENGTH,
    METADATA_CONTENT_TYPE,
    METADATA_LAST_MODIFIED,
    METADATA_SOURCE_LOCATOR,
    FetchError,
    FetchNotFoundError,
)

from .interfaces import FetchContext, FetcherPort
from .spooling import fetcher_spool_chunks

logger = logging.getLogger(__name__)


class HttpFetcher(FetcherPort):
    """Fetch source treating fetch keys as absolute http(s) URLs."""

    PLUGIN_ID: Final[str] = "http-fetcher"
    _USER_AGENT: Final[str] = "fetchscribe/1.0 (Python/httpx)"
    _NOT_FOUND_STATUS_CODES: Final[frozenset[int]] = frozenset({404, 410})
    _SUPPORTED_SCHEMES: Final[frozenset[str]] = frozenset({"http", "https"})
    _MAX_REDIRECTS: Final[int] = 10

    def __init__(
        self,
        timeout_seconds: float = 30.0,
        spool_to_temp: bool = False,
        http_client: httpx.Client | None = None,
        allowed_hosts: Iterable[str] | None = None,
    ):
        """Initialize HTTP fetcher with one pooled client.

        Redirects are followed hop by hop so every target URL passes the same
        scheme and host checks as the fetch key itself.

        Args:
            timeout_seconds: Request timeout in seconds.
            spool_to_temp: Default spool mode when context does not override it.
            http_client: Optional pre-built client; owned by caller when given.
            allowed_hosts: Host names the fetcher may contact; None allows any host.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when timeout is not positive.
        """

        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")

        self._spool_to_temp = spool_to_temp
        self._allowed_hosts = (
            None if allowed_hosts is None else frozenset(host.strip().lower() for host in allowed_hosts if host.strip())
        )
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.Client(
            timeout=timeout_seconds,
            follow_redirects=False,
            headers={"User-Agent": self._USER_AGENT},
        )

    def fetcher_plugin_id(self) -> str:
        return self.PLUGIN_ID

    def fetcher_fetch(
        self,
        fetch_key: str,
        metadata: dict[str, object],
        context: FetchContext | None = None,
    ) -> BinaryIO:
        """Download one URL.

        Args:
            fetch_key: Absolute http(s) URL.
            metadata: Caller-owned metadata record mutated as side effect.
            context: Optional per-call fetch options.

        Returns:
            BinaryIO: In-memory stream, or a temporary file in spool mode.

        Raises:
            ValueError: Raised when fetch_key is blank.
            FetchNotFoundError: Raised for 404/410 responses.
            FetchError: Raised for unsupported or disallowed URLs, redirect loops,
                other HTTP errors and transport failures.
        """

        normalized_fetch_key = fetch_key.strip()
        if not normalized_fetch_key:
            raise ValueError("fetch_key must not be blank")
        self._fetcher_check_url(normalized_fetch_key)

        spool_to_temp = (context or FetchContext()).context_resolve_spool(self._spool_to_temp)

        try:
            response = self._fetcher_send_following_redirects(normalized_fetch_key)
            try:
                response.raise_for_status()
                if spool_to_temp:
                    stream: BinaryIO = fetcher_spool_chunks(response.iter_bytes())
                    payload_length = stream.seek(0, io.SEEK_END)
                    stream.seek(0)
                else:
                    payload = response.read()
                    payload_length = len(payload)
                    stream = io.BytesIO(payload)
                final_url = str(response.url)
                response_headers = response.headers
            finally:
                response.close()
        except httpx.HTTPStatusError as error:
            status_code = error.response.status_code
            if status_code in self._NOT_FOUND_STATUS_CODES:
                raise FetchNotFoundError(
                    f"http resource not found: url={normalized_fetch_key}, status={status_code}",
                    error_code="FETCH_NOT_FOUND",
                ) from error
            raise FetchError(
                f"http fetch rejected: url={normalized_fetch_key}, status={status_code}",
                error_code="FETCH_REJECTED",
            ) from error
        except httpx.HTTPError as error:
            raise FetchError(
                f"http fetch transport failed: url={normalized_fetch_key}",
                error_code="FETCH_TRANSPORT_ERROR",
            ) from error

        metadata[METADATA_SOURCE_LOCATOR] = final_url
        metadata[METADATA_CONTENT_LENGTH] = str(payload_length)
        if response_headers.get("content-type"):
            metadata[METADATA_CONTENT_TYPE] = response_headers["content-type"]
        if response_headers.get("last-modified"):
            metadata[METADATA_LAST_MODIFIED] = response_headers["last-modified"]
        logger.debug("fetched %s (%d bytes) spool=%s", final_url, payload_length, spool_to_temp)
        return stream

    def _fetcher_check_url(self, url: str) -> None:
        """Reject URLs with an unsupported scheme or a host outside the allowlist.

        Args:
            url: Absolute URL about to be requested.

        Returns:
            None: Returns only when the URL may be requested.

        Raises:
            FetchError: Raised with FETCH_KEY_INVALID for rejected URLs.
        """

        parsed_url = urlparse(url)
        if parsed_url.scheme.lower() not in self._SUPPORTED_SCHEMES or not parsed_url.hostname:
            raise FetchError(f"unsupported fetch url: {url}", error_code="FETCH_KEY_INVALID")
        if self._allowed_hosts is not None and parsed_url.hostname.lower() not in self._allowed_hosts:
            logger.warning("http fetch blocked for host=%s", parsed_url.hostname)
            raise FetchError(f"fetch host not allowed: {parsed_url.hostname}", error_code="FETCH_KEY_INVALID")

    def _fetcher_send_following_redirects(self, url: str) -> httpx.Response:
        """Send a streamed GET and follow redirects, checking every hop.

        Args:
            url: Already checked absolute URL.

        Returns:
            httpx.Response: Open streamed response of the final hop; caller closes it.

        Raises:
            FetchError: Raised when a redirect target is rejected or hops exceed the limit.
            httpx.HTTPError: Raised for transport failures.
        """

        request = self._http_client.build_request("GET", url)
        for _ in range(self._MAX_REDIRECTS + 1):
            response = self._http_client.send(request, stream=True, follow_redirects=False)
            if not response.is_redirect or response.next_request is None:
                return response
            next_request = response.next_request
            response.close()
            self._fetcher_check_url(str(next_request.url))
            request = next_request
        raise FetchError(f"too many redirects: url={url}", error_code="FETCH_TOO_MANY_REDIRECTS")

    def fetcher_close(self) -> None:
        """Close the pooled HTTP client when this fetcher created it.

        Returns:
            None: Releases connections as side effect.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        if self._owns_http_client:
            self._http_client.close()
