from __future__ import annotations

import time
from collections.abc import Callable

DEFAULT_WINDOW_SECONDS = 3.0


class CooldownTracker:
    """Per-user throttle shared by every panel button.

    Only accepted presses record a timestamp, so a rejected press does not
    extend the wait. Entries live in memory and are lost on restart.
    """

    def __init__(
        self,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.window_seconds = window_seconds
        self._clock = clock
        self._last_press: dict[int, float] = {}

    def __len__(self) -> int:
        return len(self._last_press)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._last_press

    def hit(self, user_id: int) -> bool:
        """Record a press and return ``True`` unless the user is still cooling down."""
        now = self._clock()
        last = self._last_press.get(user_id)
        if last is not None and now - last < self.window_seconds:
            return False
        self._last_press[user_id] = now
        return True

    def remaining(self, user_id: int) -> float:
        last = self._last_press.get(user_id)
        if last is None:
            return 0.0
        return max(0.0, self.window_seconds - (self._clock() - last))

    def prune(self) -> int:
        """Drop entries whose window has expired; return how many were removed."""
        now = self._clock()
        expired = [
            user_id
            for user_id, last in self._last_press.items()
            if now - last >= self.window_seconds
        ]
        for user_id in expired:
            del self._last_press[user_id]
        return len(expired)

    def clear(self) -> None:
        self._last_press.clear()
