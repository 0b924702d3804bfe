from __future__ import annotations

import time


class StopSignal:
    """
    Cooperative cancellation token.

    The engines poll it before each generation and after each evaluation
    batch. ``timeout`` (seconds) sets a wall-clock deadline measured from
    construction, or from ``start()`` when called again.
    """

    def __init__(self, timeout: float | None = None) -> None:
        if timeout is not None and timeout < 0:
            raise ValueError("timeout must be non-negative.")
        self.timeout = timeout
        self._cancelled = False
        self._deadline: float | None = None
        self.start()

    def start(self) -> None:
        self._deadline = None if self.timeout is None else time.monotonic() + self.timeout

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def should_stop(self) -> bool:
        return self._cancelled or self.expired


__all__ = ["StopSignal"]
