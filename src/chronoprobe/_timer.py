"""Self-calibrating timer facade.

:class:`Timer` selects a clock from a :class:`ClockRegistry` and
calibrates it, once, at construction.  The resulting object is
immutable: there is no re-selection or re-calibration.

Usage::

    timer = Timer()
    start = timer.new_start_now()
    work()
    elapsed = timer.now() - start
    print(f"{elapsed:.3f} ms ± {timer.resolution} ms via {timer.api}")

Construction blocks for at least ~32 ms of the selected clock's time.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any, NoReturn

from chronoprobe._calibration import Calibration, calibrate
from chronoprobe._registry import ClockRegistry, default_registry, select_clock

if TYPE_CHECKING:
    from chronoprobe._settings import TimerSettings


class Timer:
    """Selected clock bundled with its calibration.

    Args:
        preference: Clock names in order of preference, or a single
            name.  Empty uses the registry's declaration order.
        registry: Registry to select from.  Defaults to
            :func:`default_registry`.

    Attributes are read-only; assigning to any of them raises
    :class:`AttributeError`.
    """

    __slots__ = ("_api", "_calibration", "_now")

    def __init__(
        self,
        preference: Sequence[str] = (),
        *,
        registry: ClockRegistry | None = None,
    ) -> None:
        if registry is None:
            registry = default_registry()
        api, now = select_clock(registry, preference)
        object.__setattr__(self, "_api", api)
        object.__setattr__(self, "_now", now)
        object.__setattr__(self, "_calibration", calibrate(now))

    @classmethod
    def from_settings(
        cls,
        settings: TimerSettings,
        *,
        registry: ClockRegistry | None = None,
    ) -> Timer:
        """Build a timer using ``settings.preference``."""
        return cls(settings.preference, registry=registry)

    def __setattr__(self, name: str, value: Any) -> NoReturn:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    def __delattr__(self, name: str) -> NoReturn:
        msg = f"{type(self).__name__} is immutable"
        raise AttributeError(msg)

    @property
    def api(self) -> str:
        """Name of the selected clock, or the fallback name."""
        return self._api

    @property
    def now(self) -> Callable[[], float]:
        """Read function of the selected clock (milliseconds)."""
        return self._now

    @property
    def resolution(self) -> float:
        """Clock quantum in ms; ``0`` when every read is fresh."""
        return self._calibration.resolution

    @property
    def cost(self) -> float:
        """Amortised cost of one ``now()`` call in ms."""
        return self._calibration.cost

    @property
    def new_start_now(self) -> Callable[[], float]:
        """Read function that waits until the clock visibly advances.

        Identical to :attr:`now` when :attr:`resolution` is zero.
        Otherwise a busy-wait with no timeout.
        """
        return self._calibration.new_start_now

    @property
    def calibration(self) -> Calibration:
        """Raw calibration outcome."""
        return self._calibration

    def __repr__(self) -> str:
        return (
            f"Timer(api={self._api!r}, resolution={self.resolution!r}, "
            f"cost={self.cost!r})"
        )
