"""Thread-safe pool of reusable scratch buffers."""

import io
import threading
from contextlib import contextmanager


class BufferPool:
    """Hands out ``io.BytesIO`` scratch buffers and takes them back.

    Buffers are reset when acquired, not when released, so a buffer coming
    out of the pool never carries residue from its previous holder. Releasing
    into a full pool drops the buffer instead of queueing it.
    """

    def __init__(self, max_idle: int = 64):
        self._max_idle = max_idle
        self._idle: list[io.BytesIO] = []
        self._lock = threading.Lock()
        self._outstanding = 0

    def acquire(self) -> io.BytesIO:
        """Check out an empty buffer. Never blocks on capacity, never fails."""
        with self._lock:
            buf = self._idle.pop() if self._idle else None
            self._outstanding += 1

        if buf is None:
            return io.BytesIO()
        buf.seek(0)
        buf.truncate()
        return buf

    def release(self, buf: io.BytesIO):
        """Return a buffer. The caller must not touch it afterwards."""
        with self._lock:
            self._outstanding -= 1
            if len(self._idle) < self._max_idle:
                self._idle.append(buf)

    @contextmanager
    def borrow(self):
        """Context manager pairing ``acquire`` with an unconditional ``release``."""
        buf = self.acquire()
        try:
            yield buf
        finally:
            self.release(buf)

    @property
    def outstanding(self) -> int:
        """Number of buffers acquired and not yet released."""
        with self._lock:
            return self._outstanding

    @property
    def idle(self) -> int:
        with self._lock:
            return len(self._idle)
