"""Temporary-file spooling shared by remote fetchers."""

from __future__ import annotations

import tempfile
from typing import BinaryIO, Iterable

_SPOOL_CHUNK_BYTES = 1024 * 1024


def fetcher_spool_chunks(chunks: Iterable[bytes]) -> BinaryIO:
    """Write chunks into an anonymous temporary file rewound to offset 0.

    The temporary file is removed when the caller closes the stream.

    Args:
        chunks: Payload chunks in order.

    Returns:
        BinaryIO: Open temporary file positioned at offset 0.

    Raises:
        OSError: Raised when the temporary file cannot be written.
    """

    spool_file = tempfile.TemporaryFile()
    try:
        for chunk in chunks:
            if chunk:
                spool_file.write(chunk)
        spool_file.flush()
        spool_file.seek(0)
    except Exception:
        spool_file.close()
        raise
    return spool_file


def fetcher_iter_readable(readable: object, chunk_bytes: int = _SPOOL_CHUNK_BYTES) -> Iterable[bytes]:
    """Yield fixed-size chunks from any object exposing `read(size)`.

    Args:
        readable: Source stream.
        chunk_bytes: Maximum chunk size.

    Returns:
        Iterable[bytes]: Chunk iterator ending at end of stream.

    Raises:
        OSError: Raised when the source read fails.
    """

    while True:
        chunk = readable.read(chunk_bytes)  # type: ignore[attr-defined]
        if not chunk:
            return
        yield chunk
