"""Unit tests for the chronoprobe top-level public API surface.

Test Techniques Used:
    - Specification-based Testing: ``__all__`` completeness against the
      documented public API contract.
    - Importability: Every name in ``__all__`` resolves to a real object
      via ``getattr``.
"""

from __future__ import annotations

import chronoprobe


class TestChronoprobePublicAPI:
    """All expected symbols are importable and listed in ``__all__``."""

    EXPECTED_NAMES = {
        # Version
        "__version__",
        # Timer
        "Timer",
        # Calibration
        "CALIBRATION_WINDOW_MS",
        "MIN_UPDATES",
        "Calibration",
        "calibrate",
        # Registry
        "FALLBACK_NAME",
        "ClockProvider",
        "ClockRegistry",
        "default_registry",
        "select_clock",
        # Clock
        "ClockPort",
        "SystemClock",
        # Report
        "CalibrationReport",
        "build_report",
        # Logging
        "JsonFormatter",
        "configure_logging",
        # Settings
        "LoggingSettings",
        "Settings",
        "TimerSettings",
    }

    def test_all_contains_expected_symbols(self) -> None:
        """``__all__`` matches the documented public API exactly.

        Technique: Specification-based — verifying module contract.
        """
        assert set(chronoprobe.__all__) == self.EXPECTED_NAMES

    def test_all_symbols_importable(self) -> None:
        """Every name in ``__all__`` resolves to an attribute on the module.

        Technique: Specification-based — importability check.
        """
        for name in chronoprobe.__all__:
            obj = getattr(chronoprobe, name, None)
            assert obj is not None, f"{name!r} listed in __all__ but not importable"
