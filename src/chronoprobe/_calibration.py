"""Empirical resolution and cost calibration for a millisecond clock.

:func:`calibrate` samples a read function in a tight loop until the
clock has visibly advanced at least :data:`MIN_UPDATES` times *and* at
least :data:`CALIBRATION_WINDOW_MS` milliseconds have elapsed on the
clock itself.  From the samples it derives:

- **resolution**: the smallest positive step the clock reported.
  Zero when every read observed a new value, i.e. the clock is finer
  than the cost of reading it.
- **cost**: amortised time per read.  For a quantised clock this is
  the quantum divided by the largest run of reads that returned the
  same value; otherwise it is the smallest observed step.
- **new_start_now**: a read function guaranteed to return a value
  different from the reading taken just before it.  For a clock with
  zero resolution this is the read function itself.

Calibration cannot fail.  It runs roughly ``max(32 ms, 2 * quantum)``
and does not terminate on a clock that never advances.

Both calibration and the busy-wait in ``new_start_now`` are CPU-bound
and never yield.  Bound them externally if a timeout is required.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

logger = logging.getLogger(__name__)

CALIBRATION_WINDOW_MS = 32
"""Minimum clock time covered by the sampling loop."""

MIN_UPDATES = 2
"""Minimum number of observed clock advances."""

_INITIAL_MIN_INTERVAL = 1000


@dataclass(frozen=True, slots=True)
class Calibration:
    """Raw outcome of one :func:`calibrate` run.

    Attributes:
        resolution: Clock quantum in ms, ``0`` for sub-quantum clocks.
        cost: Amortised per-read cost in ms.
        min_interval: Smallest non-zero step observed (before rounding).
        max_no_updates: Longest run of reads with no clock advance.
        updates: Number of observed advances.
        samples: Number of reads taken by the sampling loop.
        new_start_now: Tick-advance read function.
    """

    resolution: float
    cost: float
    min_interval: float
    max_no_updates: int
    updates: int
    samples: int
    new_start_now: Callable[[], float] = field(repr=False, compare=False)

    @property
    def busy_waits(self) -> bool:
        """Whether ``new_start_now`` spins until the clock advances."""
        return self.resolution != 0


def _two_significant_digits(value: float) -> float:
    # Exact ties round away from zero, not to even.
    exact = Decimal(value)
    quantum = Decimal(1).scaleb(exact.adjusted() - 1)
    return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))


def _tick_advance(now: Callable[[], float]) -> Callable[[], float]:
    def new_start_now() -> float:
        t0 = now()
        t1 = now()
        while t1 == t0:
            t1 = now()
        return t1

    return new_start_now


def calibrate(now: Callable[[], float]) -> Calibration:
    """Measure the resolution and read cost of *now*.

    Args:
        now: Millisecond read function.  Must advance eventually;
            negative steps are not guarded against.

    Returns:
        A frozen :class:`Calibration`.  When no two consecutive reads
        ever returned the same value, ``new_start_now`` is *now*
        itself (same object).
    """
    min_interval: float = _INITIAL_MIN_INTERVAL
    max_no_updates = 0
    updates = 0
    no_updates = 0
    samples = 0

    t0 = now()
    end = t0 + CALIBRATION_WINDOW_MS
    while True:
        t1 = now()
        samples += 1
        dt = t1 - t0
        if dt == 0:
            no_updates += 1
            continue

        if dt < min_interval:
            min_interval = dt
        if no_updates > max_no_updates:
            max_no_updates = no_updates
        updates += 1
        if updates >= MIN_UPDATES and t1 >= end:
            break
        no_updates = 0
        t0 = t1

    if max_no_updates == 0:
        result = Calibration(
            resolution=0,
            cost=min_interval,
            min_interval=min_interval,
            max_no_updates=0,
            updates=updates,
            samples=samples,
            new_start_now=now,
        )
    else:
        resolution = min_interval
        if not float(resolution).is_integer():
            resolution = _two_significant_digits(resolution)
        result = Calibration(
            resolution=resolution,
            cost=resolution / max_no_updates,
            min_interval=min_interval,
            max_no_updates=max_no_updates,
            updates=updates,
            samples=samples,
            new_start_now=_tick_advance(now),
        )

    logger.debug(
        "Calibrated clock: resolution=%s ms, cost=%s ms",
        result.resolution,
        result.cost,
        extra={
            "resolution": result.resolution,
            "cost": result.cost,
            "max_no_updates": result.max_no_updates,
            "samples": result.samples,
        },
    )
    return result
