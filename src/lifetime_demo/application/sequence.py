"""Application layer - Creation sequence numbering."""

import threading


class SequenceCounter:
    """Thread-safe monotonic counter.

    Attributes:
        _value: Last number handed out.
        _lock: Guards increments across threads.
    """

    def __init__(self, start: int = 0) -> None:
        self._value = start
        self._lock = threading.Lock()

    def next(self) -> int:
        """Increment the counter and return the new value."""
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        """Last number handed out, 0 if none yet."""
        with self._lock:
            return self._value
