"""chronoprobe.

A self-calibrating millisecond timestamp source: picks the best clock the
host offers, measures its resolution and read cost, and provides a read
function that is guaranteed to step past the clock's granularity.
"""

from importlib.metadata import PackageNotFoundError, version

from chronoprobe._calibration import (
    CALIBRATION_WINDOW_MS,
    MIN_UPDATES,
    Calibration,
    calibrate,
)
from chronoprobe._clock import ClockPort, SystemClock
from chronoprobe._logging import JsonFormatter, configure_logging
from chronoprobe._registry import (
    FALLBACK_NAME,
    ClockProvider,
    ClockRegistry,
    default_registry,
    select_clock,
)
from chronoprobe._report import CalibrationReport, build_report
from chronoprobe._settings import LoggingSettings, Settings, TimerSettings
from chronoprobe._timer import Timer

try:
    __version__ = version("chronoprobe")
except PackageNotFoundError:
    # Source checkout without installed metadata
    __version__ = "0.0.0+unknown"

__all__ = [
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
]
