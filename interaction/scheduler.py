from typing import Callable


class FrameScheduler:
    """Runs requested callbacks once, on the next frame, with that frame's timestamp."""

    def __init__(self):
        self._pending: list[Callable[[float], None]] = []

    def request(self, callback: Callable[[float], None]) -> None:
        if callback not in self._pending:
            self._pending.append(callback)

    def has_pending(self) -> bool:
        return bool(self._pending)

    def run_pending(self, now: float) -> int:
        """Invoke everything requested so far. Requests made during the run wait for the next frame."""
        callbacks, self._pending = self._pending, []
        for callback in callbacks:
            callback(now)
        return len(callbacks)
