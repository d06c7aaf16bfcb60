"""Public test-support utilities for chronoprobe.

Re-exports test doubles and factories so that consumer test suites can
import everything from a single ``chronoprobe.testing`` namespace.

Provided symbols:

- :class:`FakeClock`: clock returning a manually set time.
- :class:`SteppingClock`: quantised clock advancing every N reads.
- :func:`make_registry`: registry built from plain read functions.
- :func:`make_settings`: factory for ``Settings`` without ``.env`` files.
"""

from chronoprobe.testing._clock import FakeClock, SteppingClock
from chronoprobe.testing._registry import make_registry
from chronoprobe.testing._settings import make_settings

__all__ = [
    "FakeClock",
    "SteppingClock",
    "make_registry",
    "make_settings",
]
