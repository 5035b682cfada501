"""Timer-based scheduler backing the autosave debounce."""

import threading
from collections.abc import Callable


class ThreadingScheduler:
    """Runs each callback on a daemon threading.Timer."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> threading.Timer:
        timer = threading.Timer(delay_ms / 1000, callback)
        timer.daemon = True
        timer.start()
        return timer
