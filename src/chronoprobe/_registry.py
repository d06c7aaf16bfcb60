"""Clock registry and selector.

A :class:`ClockRegistry` is an ordered, immutable set of named clock
slots.  Each slot is backed by a :class:`ClockProvider` carrying a
one-time capability probe and a read function.  Probes run exactly once,
when the registry is built; slots whose probe fails stay in the registry
as *absent* entries and are never handed out by :func:`select_clock`.

Selection always succeeds: when no preferred slot is present, the
registry's fallback provider is returned.

**Unit contract:** every read function must return **milliseconds** as
a float.  The calibrator's sampling window is expressed in that unit, so
a provider reporting seconds or nanoseconds would silently mis-calibrate.
The built-in providers scale at the source.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from functools import cache
from types import MappingProxyType

logger = logging.getLogger(__name__)

ReadFunc = Callable[[], float]
"""Zero-argument callable returning a millisecond timestamp."""

FALLBACK_NAME = "datetime.now"
"""Name reported when no registered clock is available."""


def _always() -> bool:
    return True


@dataclass(frozen=True, slots=True)
class ClockProvider:
    """A named, possibly unavailable source of millisecond timestamps.

    Args:
        name: Unique slot name, used in preference orders.
        read: Read function returning milliseconds.  Must not be
            called when *available* reports ``False``.
        available: Capability probe.  Called once, at registry
            construction, and must be side-effect free.
    """

    name: str
    read: ReadFunc
    available: Callable[[], bool] = field(default=_always, repr=False)


def _fallback_read() -> float:
    return datetime.now().timestamp() * 1e3


FALLBACK_PROVIDER = ClockProvider(FALLBACK_NAME, _fallback_read)
"""Universal baseline clock.

Assumed strictly monotonic and advancing within the calibration window.
A frozen fallback clock would hang :func:`~chronoprobe.calibrate`; this
is a precondition, not a handled error.
"""


class ClockRegistry:
    """Immutable ordered mapping of clock name to optional read function.

    Example::

        registry = ClockRegistry(
            [ClockProvider("stub", read=clock.now)],
        )
        name, read = select_clock(registry)

    Args:
        providers: Candidates in declaration order.  Later duplicates
            of a name are ignored.
        fallback: Provider returned when no candidate is selectable.
            Its probe is not consulted.
    """

    __slots__ = ("_fallback", "_slots")

    def __init__(
        self,
        providers: Iterable[ClockProvider],
        *,
        fallback: ClockProvider = FALLBACK_PROVIDER,
    ) -> None:
        slots: dict[str, ReadFunc | None] = {}
        for provider in providers:
            if provider.name in slots:
                logger.warning("Duplicate clock %r ignored", provider.name)
                continue
            slots[provider.name] = provider.read if provider.available() else None
        self._slots = MappingProxyType(slots)
        self._fallback = fallback

    @property
    def names(self) -> tuple[str, ...]:
        """All registered slot names in declaration order."""
        return tuple(self._slots)

    @property
    def fallback(self) -> ClockProvider:
        """The baseline provider used when selection finds nothing."""
        return self._fallback

    def get(self, name: str) -> ReadFunc | None:
        """Return the read function for *name*, or ``None`` if absent."""
        return self._slots.get(name)

    def is_available(self, name: str) -> bool:
        """Whether *name* is registered and passed its probe."""
        return self._slots.get(name) is not None

    def __contains__(self, name: object) -> bool:
        return name in self._slots

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)

    def __len__(self) -> int:
        return len(self._slots)

    def __repr__(self) -> str:
        present = [n for n, read in self._slots.items() if read is not None]
        return f"ClockRegistry(available={present!r}, fallback={self._fallback.name!r})"


def select_clock(
    registry: ClockRegistry,
    preference: Sequence[str] = (),
) -> tuple[str, ReadFunc]:
    """Pick the first available clock from *preference*.

    Args:
        registry: Registry to select from.
        preference: Clock names in order of preference.  Empty means
            the registry's declaration order.  A single string is
            one name.  Names not present in the registry are skipped
            with a warning.

    Returns:
        ``(name, read)`` of the selected clock, or of the registry's
        fallback provider when nothing in *preference* is available.
    """
    if isinstance(preference, str):
        preference = (preference,)
    order = preference or registry.names
    for name in order:
        if name not in registry:
            logger.warning("Unknown clock %r in preference order, skipping", name)
            continue
        read = registry.get(name)
        if read is not None:
            logger.debug("Selected clock %s", name, extra={"api": name})
            return name, read

    fallback = registry.fallback
    logger.debug("No preferred clock available, falling back to %s", fallback.name)
    return fallback.name, fallback.read


# -------------------------------------------------------------------
# Built-in providers
# -------------------------------------------------------------------


def _has_time_func(attr: str) -> Callable[[], bool]:
    def probe() -> bool:
        return callable(getattr(time, attr, None))

    return probe


def _perf_counter_ns() -> float:
    return time.perf_counter_ns() / 1e6


def _perf_counter() -> float:
    return time.perf_counter() * 1e3


def _monotonic() -> float:
    return time.monotonic() * 1e3


def _time() -> float:
    return time.time() * 1e3


BUILTIN_PROVIDERS: tuple[ClockProvider, ...] = (
    ClockProvider("perf_counter_ns", _perf_counter_ns, _has_time_func("perf_counter_ns")),
    ClockProvider("perf_counter", _perf_counter, _has_time_func("perf_counter")),
    ClockProvider("monotonic", _monotonic, _has_time_func("monotonic")),
    ClockProvider("time", _time, _has_time_func("time")),
)
"""Host clocks in descending order of preference, all scaled to ms."""


@cache
def default_registry() -> ClockRegistry:
    """Return the process-wide registry of built-in clocks.

    Built on first call; probes run once and the result is reused.
    """
    return ClockRegistry(BUILTIN_PROVIDERS)
