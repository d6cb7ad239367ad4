"""
Debounced execution for free-text input.

Each submission supersedes the previous one: the pending timer is cancelled
and a new one is scheduled. Submissions carry a generation number, and a call
only runs (and only delivers its result) while its generation is still the
latest one, so a slow, superseded invocation never publishes stale output.
"""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from .logging_config import SearchLogger, get_logger


class Debouncer:
    """
    Runs the latest submitted call after a quiet period.

    Attributes:
        delay: Quiet period in seconds; ``0`` runs submissions synchronously
        calls_run: Number of calls that actually executed
    """

    def __init__(self, delay: float, logger: SearchLogger | None = None) -> None:
        self.delay = delay
        self.logger = logger or get_logger()

        self._lock = threading.RLock()
        self._timer: threading.Timer | None = None
        self._generation = 0
        self._pending: tuple[int, Callable[..., Any], tuple[Any, ...], Callable[[Any], None] | None] | None = None

        self.calls_run = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._pending is not None

    def submit(
        self,
        fn: Callable[..., Any],
        *args: Any,
        callback: Callable[[Any], None] | None = None,
    ) -> int:
        """
        Schedule ``fn(*args)``, cancelling any call still waiting.

        Args:
            fn: Function to run once the input settles
            *args: Positional arguments for ``fn``
            callback: Receives the return value of ``fn``

        Returns:
            Generation number of this submission
        """
        with self._lock:
            self._cancel_timer()
            self._generation += 1
            generation = self._generation
            self._pending = (generation, fn, args, callback)

            if self.delay > 0:
                self._timer = threading.Timer(self.delay, self._fire, args=(generation,))
                self._timer.daemon = True
                self._timer.start()
                return generation

        self._fire(generation)
        return generation

    def flush(self) -> None:
        """Run the pending call now, if there is one."""
        with self._lock:
            if self._pending is None:
                return
            generation = self._pending[0]
            self._cancel_timer()
        self._fire(generation)

    def cancel(self) -> None:
        """Drop the pending call without running it."""
        with self._lock:
            self._cancel_timer()
            self._pending = None

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, generation: int) -> None:
        # The call itself runs unlocked; only claiming and delivery hold the lock
        with self._lock:
            if self._pending is None or self._pending[0] != generation:
                self.logger.debug(f"Dropped superseded call (generation {generation})")
                return
            _, fn, args, callback = self._pending
            self._pending = None
            self._timer = None

        try:
            result = fn(*args)
        except Exception as e:
            self.logger.error(f"Debounced call failed: {e}")
            return

        with self._lock:
            self.calls_run += 1
            if generation != self._generation:
                self.logger.debug(f"Discarded stale result (generation {generation})")
                return
            if callback is not None:
                callback(result)
