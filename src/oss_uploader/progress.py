from threading import Lock
from typing import Protocol


class ProgressListener(Protocol):
    def on_bytes(self, n: int) -> None: ...

    def on_done(self) -> None: ...


class ProgressAggregator:
    """Thread safe byte counter shared by every upload worker.

    The counter only grows. ``mark_done`` is a separate event from the counter
    reaching ``total``.
    """

    def __init__(
        self, total: int | None = None, listener: ProgressListener | None = None
    ) -> None:
        self.total = total
        self.listener = listener
        self._bytes = 0
        self._done = False
        self._lock = Lock()

    def add(self, n: int) -> int:
        if n < 0:
            raise ValueError(f"Progress can only grow, got {n}")
        with self._lock:
            new_value = self._bytes + n
            if self.total is not None and new_value > self.total:
                raise ValueError(
                    f"Progress {new_value} would exceed total size {self.total}"
                )
            self._bytes = new_value
        if self.listener is not None:
            self.listener.on_bytes(n)
        return new_value

    @property
    def bytes_transferred(self) -> int:
        with self._lock:
            return self._bytes

    @property
    def is_done(self) -> bool:
        with self._lock:
            return self._done

    def mark_done(self) -> None:
        with self._lock:
            if self._done:
                return
            self._done = True
        if self.listener is not None:
            self.listener.on_done()
