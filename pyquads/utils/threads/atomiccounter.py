import threading


class AtomicCounter:
    """Integer counter that can be shared between threads."""

    def __init__(self, value: int = 0):
        self._value = value
        self._lock = threading.Lock()

    def fetch_add(self, increment: int = 1) -> int:
        """Adds increment to the counter and returns the value it had before.

        Args:
            increment: Value to add.

        Returns:
            Previous value of counter.
        """
        with self._lock:
            previous = self._value
            self._value += increment
            return previous

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


__all__ = ["AtomicCounter"]
