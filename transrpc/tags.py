"""Correlation tag allocation.

Every outbound RPC carries an integer tag that the daemon echoes back. The
allocator hands out strictly increasing values and is safe to share between
threads. When the counter would pass the signed 64-bit limit it restarts at
zero, so the tag stream is observable as 1, 2, ..., MAX_TAG, 0, 1, ...
"""

import threading

MAX_TAG = 2**63 - 1


class TagAllocator:
    """Thread-safe, monotonically increasing tag counter."""

    def __init__(self, start: int = 0, maximum: int = MAX_TAG):
        if start < 0 or start > maximum:
            raise ValueError(f"start must be within [0, {maximum}], got {start}")
        self._value = start
        self._maximum = maximum
        self._lock = threading.Lock()

    def next(self) -> int:
        """Return the next tag, resetting to zero on overflow."""
        with self._lock:
            self._value += 1
            if self._value > self._maximum:
                self._value = 0
            return self._value

    @property
    def current(self) -> int:
        """Last tag handed out (or the start value)."""
        with self._lock:
            return self._value
