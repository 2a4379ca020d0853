"""Recurring background task with an explicit stop signal."""

from __future__ import annotations

import threading
import warnings
from collections.abc import Callable


class RecurringTask:
    """Run ``action`` every ``interval()`` seconds on one daemon thread.

    The interval is re-read before every wait. Runs happen sequentially on the
    same thread, so a tick never starts while the previous one is in flight.
    """

    def __init__(self, action: Callable[[], object], interval: Callable[[], float], name: str) -> None:
        self._action = action
        self._interval = interval
        self._name = name
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        if self.running:
            return False
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name=self._name, daemon=True)
        self._thread.start()
        return True

    def stop(self, timeout: float | None = None) -> None:
        self._stop.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        if thread is None or not thread.is_alive():
            self._thread = None

    def _run(self) -> None:
        while not self._stop.wait(self._interval()):
            try:
                self._action()
            except Exception as exc:
                warnings.warn(f"jsonvault: {self._name} tick failed: {exc}", stacklevel=2)
