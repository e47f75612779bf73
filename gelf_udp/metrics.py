"""Thread-safe counters for messages shipped by a UDPWriter."""

import threading
import time


class WriterMetrics:
    def __init__(self):
        self._lock = threading.Lock()
        self._messages_sent = 0
        self._chunked_messages = 0
        self._datagrams_sent = 0
        self._bytes_sent = 0
        self._failed_sends = 0
        self._start_time = time.monotonic()

    def record_send(self, datagrams: int, nbytes: int):
        """Count one delivered message made of ``datagrams`` datagrams."""
        with self._lock:
            self._messages_sent += 1
            self._datagrams_sent += datagrams
            self._bytes_sent += nbytes
            if datagrams > 1:
                self._chunked_messages += 1

    def record_failure(self):
        with self._lock:
            self._failed_sends += 1

    def snapshot(self) -> dict:
        """Return a point-in-time snapshot of all counters."""
        with self._lock:
            elapsed = time.monotonic() - self._start_time
            return {
                "messages_sent": self._messages_sent,
                "chunked_messages": self._chunked_messages,
                "datagrams_sent": self._datagrams_sent,
                "bytes_sent": self._bytes_sent,
                "failed_sends": self._failed_sends,
                "elapsed_seconds": round(elapsed, 2),
                "messages_per_second": round(self._messages_sent / elapsed, 2) if elapsed > 0 else 0.0,
            }
