"""Millisecond clock port and system adapter.

Provides ClockPort (Protocol) and SystemClock for components that want a
timestamp source as an injectable object rather than a bare function.

All timestamps in chronoprobe are **milliseconds** as ``float``.  The
epoch is arbitrary and differs between clocks; only *differences*
between two ``now()`` calls on the same clock are meaningful.
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class ClockPort(Protocol):
    """Millisecond clock.

    Any object with a ``now() -> float`` method satisfies this port.
    Its bound ``now`` can be handed to :class:`~chronoprobe.ClockProvider`
    as the read function, which is how tests inject deterministic clocks.
    """

    def now(self) -> float:
        """Return the current time in milliseconds.

        Returns:
            A float representing milliseconds from an arbitrary epoch.
        """
        ...


class SystemClock:
    """Production clock wrapping ``time.perf_counter_ns()``.

    Satisfies :class:`ClockPort` via structural subtyping (PEP 544).

    Usage::

        clock = SystemClock()
        start = clock.now()
        # ... some work ...
        elapsed_ms = clock.now() - start
    """

    def now(self) -> float:
        """Return monotonic time in milliseconds."""
        return time.perf_counter_ns() / 1e6
