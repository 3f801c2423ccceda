# packages/dbfcodec/src/dbfcodec/streams.py
from __future__ import annotations
import io
from typing import BinaryIO, Union

from .errors import TruncatedInputError

__all__ = ["read_exact", "as_source", "Source"]

Source = Union[BinaryIO, bytes, bytearray, memoryview]


def as_source(src: Source) -> BinaryIO:
    """Wrap a bytes-like buffer into a stream; streams are returned as is."""
    if isinstance(src, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(src))
    return src


def read_exact(source: BinaryIO, n: int, what: str) -> bytes:
    """Read exactly `n` bytes from `source` or raise TruncatedInputError.

    Raw (unbuffered) streams may return short reads before EOF, hence the loop.
    """
    chunks = []
    got = 0
    while got < n:
        b = source.read(n - got)
        if not b:
            break
        chunks.append(b)
        got += len(b)
    if got != n:
        raise TruncatedInputError(what, n, got)
    return b"".join(chunks)
