"""Deterministic fake clocks for testing.

Both satisfy :class:`~chronoprobe.ClockPort` (PEP 544 structural
subtyping) and report milliseconds, with no real time dependency.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class FakeClock:
    """Test double returning a manually set time.

    Attributes:
        _time: The current "now" value in ms.

    Example::

        clock = FakeClock(42.0)
        assert clock.now() == 42.0
        clock._time = 99.0
        assert clock.now() == 99.0
    """

    _time: float = 0.0

    def now(self) -> float:
        """Return the manually set time value."""
        return self._time


@dataclass
class SteppingClock:
    """Quantised clock that advances by ``step`` every ``every`` reads.

    Reads ``0 .. every-1`` return ``start``, the next ``every`` reads
    return ``start + step``, and so on.  ``every=1`` gives a clock that
    advances on every read.

    Example::

        clock = SteppingClock(step=16, every=3)
        assert [clock.now() for _ in range(4)] == [0, 0, 0, 16]
    """

    step: float = 1.0
    every: int = 1
    start: float = 0.0
    calls: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.every < 1:
            msg = f"every must be >= 1, got {self.every}"
            raise ValueError(msg)

    def now(self) -> float:
        """Return the current quantised time and count the read."""
        value = self.start + (self.calls // self.every) * self.step
        self.calls += 1
        return value
