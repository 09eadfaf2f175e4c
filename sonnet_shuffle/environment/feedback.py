import math
from typing import Optional, Set, Iterable
from pydantic import BaseModel, Field


class FeedbackTimer(BaseModel):
    """
    Decaying shake applied to slots flagged by the last check.

    The offset is a pure function of elapsed time; callers poll it with the
    current time on every redraw. Times are in milliseconds.

    Attributes:
        flagged_indices: Slots that shake
        start_time: When the shake started, or None when inactive
        duration_ms: How long a shake lasts
        frequency_hz: Oscillation frequency
        amplitude: Initial displacement, decaying linearly to 0
    """

    flagged_indices: Set[int] = Field(default_factory=set)
    start_time: Optional[float] = None
    duration_ms: float = Field(default=500.0, gt=0)
    frequency_hz: float = Field(default=20.0, gt=0)
    amplitude: float = Field(default=10.0, ge=0)

    def start(self, flagged: Iterable[int], now: float) -> None:
        """Replace any running shake with a fresh one; an empty set stops it."""
        flagged = set(flagged)
        if not flagged:
            self.stop()
            return
        self.flagged_indices = flagged
        self.start_time = now

    def stop(self) -> None:
        """Clear the shake."""
        self.flagged_indices = set()
        self.start_time = None

    def is_active(self, now: float) -> bool:
        """Whether a shake is running at `now` (expires it if it is over)."""
        if self.start_time is None:
            return False
        if self._elapsed(now) >= self.duration_ms:
            self.stop()
            return False
        return True

    def offset_for(self, index: int, now: float) -> float:
        """
        Horizontal displacement of a slot at time `now`.

        Args:
            index: Slot index
            now: Current time in milliseconds, never earlier than start_time

        Returns:
            0.0 for slots that are not shaking, otherwise the decaying sine
        """
        if not self.is_active(now) or index not in self.flagged_indices:
            return 0.0

        elapsed = self._elapsed(now)
        decay = 1 - elapsed / self.duration_ms
        return math.sin(elapsed * self.frequency_hz * math.pi / 1000) * self.amplitude * decay

    def _elapsed(self, now: float) -> float:
        elapsed = now - self.start_time
        if elapsed < 0:
            raise ValueError(
                f"Time went backwards: now={now} is before start_time={self.start_time}"
            )
        return elapsed
