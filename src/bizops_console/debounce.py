from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

DEFAULT_DEBOUNCE_MS = 300


class _Timer(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], _Timer]


def _thread_timer(delay: float, callback: Callable[[], None]) -> _Timer:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    return timer


@dataclass
class SearchDebouncer:
    """Delay a search until typing pauses; only the last term is delivered."""

    callback: Callable[[str], Any]
    delay_ms: int = DEFAULT_DEBOUNCE_MS
    timer_factory: TimerFactory = _thread_timer
    _timer: _Timer | None = field(default=None, init=False, repr=False)
    _pending: str | None = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def submit(self, term: str) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = term
            immediate = self.delay_ms <= 0
            if immediate:
                self._timer = None
            else:
                self._timer = self.timer_factory(self.delay_ms / 1000, self._fire)
                self._timer.start()
        if immediate:
            self._fire()

    def flush(self) -> None:
        """Deliver the pending term now."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
        self._fire()

    def cancel(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._timer = None
            self._pending = None

    def _fire(self) -> None:
        with self._lock:
            term = self._pending
            self._pending = None
            self._timer = None
        if term is not None:
            self.callback(term)
