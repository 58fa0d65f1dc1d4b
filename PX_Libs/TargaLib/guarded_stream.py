"""
A seekable stream paired with the lock that serializes access to it.

Seeking and then reading or writing is two calls on the underlying file,
so two threads sharing one stream can interleave and transfer at the
wrong offset. GuardedStream does both steps under one lock.
"""

import threading
from typing import BinaryIO, Optional

from PX_Libs.TargaLib.errors import UseAfterCloseError


class GuardedStream:
    """Positioned reads and writes on a shared stream, one at a time."""

    def __init__(self, stream: BinaryIO):
        self._stream: Optional[BinaryIO] = stream
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._stream is None

    def require_open(self) -> BinaryIO:
        if self._stream is None:
            raise UseAfterCloseError("I/O operation on closed image")
        return self._stream

    def read_at(self, offset: int, size: int) -> bytes:
        """Read up to size bytes starting at offset."""
        with self._lock:
            stream = self.require_open()
            stream.seek(offset)
            return stream.read(size)

    def write_at(self, offset: int, data: bytes) -> None:
        """Write all of data starting at offset."""
        with self._lock:
            stream = self.require_open()
            stream.seek(offset)
            stream.write(data)

    def close(self) -> None:
        """Close the underlying stream. Closing twice does nothing."""
        with self._lock:
            if self._stream is None:
                return
            stream, self._stream = self._stream, None
            stream.close()
