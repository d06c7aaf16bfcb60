"""Structured calibration report.

Converts a calibrated :class:`~chronoprobe.Timer` into a flat,
JSON-serialisable value object, suitable for printing from the CLI or
attaching to benchmark output.

Payload schema::

    {
        "api": "perf_counter_ns",
        "resolution": 0,
        "cost": 0.000042,
        "max_no_updates": 0,
        "updates": 712345,
        "samples": 712345,
        "busy_wait": false,
        "timestamp": "2026-10-19T12:34:56+00:00"
    }

Values are the raw calibration results; nothing is smoothed.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chronoprobe._timer import Timer


@dataclass(frozen=True, slots=True)
class CalibrationReport:
    """Immutable snapshot of one timer's calibration."""

    api: str
    resolution: float
    cost: float
    max_no_updates: int
    updates: int
    samples: int
    busy_wait: bool
    timestamp: str

    def to_json(self) -> str:
        """Serialise to a JSON string."""
        return json.dumps(asdict(self))

    def to_text(self) -> str:
        """Render as aligned ``key: value`` lines."""
        fields = asdict(self)
        width = max(len(key) for key in fields)
        return "\n".join(f"{key:<{width}}  {value}" for key, value in fields.items())


def build_report(
    timer: Timer,
    *,
    clock: Callable[[], datetime] | None = None,
) -> CalibrationReport:
    """Snapshot *timer* into a :class:`CalibrationReport`.

    Args:
        timer: A constructed timer.
        clock: Optional callable returning a :class:`~datetime.datetime`
            for the report timestamp.  Defaults to ``datetime.now(UTC)``.
    """
    calibration = timer.calibration
    created = clock() if clock is not None else datetime.now(UTC)
    return CalibrationReport(
        api=timer.api,
        resolution=timer.resolution,
        cost=timer.cost,
        max_no_updates=calibration.max_no_updates,
        updates=calibration.updates,
        samples=calibration.samples,
        busy_wait=calibration.busy_waits,
        timestamp=created.isoformat(),
    )
