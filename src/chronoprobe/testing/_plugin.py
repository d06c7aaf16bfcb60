"""Pytest plugin providing shared chronoprobe fixtures.

Auto-registers ``fake_clock``, ``stepping_clock`` and ``stub_registry``
for any test suite that depends on chronoprobe, via the ``pytest11``
entry point.

Imports are deferred into the fixture bodies so that chronoprobe modules
are first imported after ``pytest-cov`` has started tracing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from chronoprobe._registry import ClockRegistry
    from chronoprobe.testing._clock import FakeClock, SteppingClock


@pytest.fixture
def fake_clock() -> FakeClock:
    """FakeClock starting at time 0."""
    from chronoprobe.testing._clock import FakeClock

    return FakeClock()


@pytest.fixture
def stepping_clock() -> SteppingClock:
    """Quantised clock: 16 ms steps, one step every third read."""
    from chronoprobe.testing._clock import SteppingClock

    return SteppingClock(step=16.0, every=3)


@pytest.fixture
def stub_registry(stepping_clock: SteppingClock) -> ClockRegistry:
    """Registry with ``stepping_clock`` and one unavailable slot.

    Slots in order: ``"stub"``, ``"missing"`` (probe fails).
    """
    from chronoprobe.testing._registry import make_registry

    return make_registry({"stub": stepping_clock.now}, unavailable=("missing",))
