"""Command-line calibration probe (Typer-based).

``chronoprobe`` selects and calibrates a clock exactly as
:class:`~chronoprobe.Timer` does, then prints the resulting
:class:`~chronoprobe.CalibrationReport`::

    $ chronoprobe --clock monotonic --json
    {"api": "monotonic", "resolution": 0, "cost": 5.1e-05, ...}

    $ chronoprobe --list
    perf_counter_ns  available
    perf_counter     available
    monotonic        available
    time             available
    datetime.now     fallback
"""

from __future__ import annotations

import logging
import sys
from typing import Annotated, get_args

import typer
from pydantic import ValidationError

from chronoprobe._logging import configure_logging
from chronoprobe._registry import ClockRegistry, default_registry
from chronoprobe._report import build_report
from chronoprobe._settings import LoggingSettings, Settings, TimerSettings
from chronoprobe._timer import Timer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_USAGE_ERROR = 2  # typer.BadParameter, raised by click
EXIT_RUNTIME_ERROR = 3

# ---------------------------------------------------------------------------
# Allowed values (extracted from LoggingSettings Literal types)
# ---------------------------------------------------------------------------

_VALID_LOG_LEVELS: tuple[str, ...] = get_args(
    LoggingSettings.model_fields["level"].annotation,
)
_VALID_LOG_FORMATS: tuple[str, ...] = get_args(
    LoggingSettings.model_fields["format"].annotation,
)

SERVICE_NAME = "chronoprobe"


def _list_clocks(registry: ClockRegistry) -> None:
    width = max([len(name) for name in registry] + [len(registry.fallback.name)])
    for name in registry:
        status = "available" if registry.is_available(name) else "unavailable"
        typer.echo(f"{name:<{width}}  {status}")
    typer.echo(f"{registry.fallback.name:<{width}}  fallback")


def build_cli(registry: ClockRegistry | None = None) -> typer.Typer:
    """Construct the ``chronoprobe`` Typer app.

    Args:
        registry: Registry to select from.  Defaults to
            :func:`~chronoprobe.default_registry`.

    Returns:
        A configured :class:`typer.Typer` ready to invoke.
    """
    cli = typer.Typer(
        help="Select the best available clock and report its calibration.",
    )

    @cli.callback(invoke_without_command=True)
    def main(
        version_flag: Annotated[
            bool | None,
            typer.Option("--version", is_eager=True, help="Show version and exit."),
        ] = None,
        clock: Annotated[
            list[str] | None,
            typer.Option(
                "--clock",
                "-c",
                help="Preferred clock name. Repeat to give an order.",
            ),
        ] = None,
        list_clocks: Annotated[
            bool,
            typer.Option("--list", help="List registered clocks and exit."),
        ] = False,
        as_json: Annotated[
            bool,
            typer.Option("--json", help="Print the report as JSON."),
        ] = False,
        log_level: Annotated[
            str | None,
            typer.Option("--log-level", help="Override log level."),
        ] = None,
        log_format: Annotated[
            str | None,
            typer.Option("--log-format", help="Override log format."),
        ] = None,
        env_file: Annotated[
            str,
            typer.Option("--env-file", help="Path to .env file."),
        ] = ".env",
    ) -> None:
        from chronoprobe import __version__

        if version_flag:
            typer.echo(f"{SERVICE_NAME} v{__version__}")
            raise typer.Exit()

        if log_level is not None and log_level.upper() not in _VALID_LOG_LEVELS:
            raise typer.BadParameter(
                f"Invalid log level '{log_level}'. "
                f"Choose from: {', '.join(_VALID_LOG_LEVELS)}",
                param_hint="'--log-level'",
            )

        if log_format is not None and log_format.lower() not in _VALID_LOG_FORMATS:
            raise typer.BadParameter(
                f"Invalid log format '{log_format}'. "
                f"Choose from: {', '.join(_VALID_LOG_FORMATS)}",
                param_hint="'--log-format'",
            )

        try:
            settings = Settings(_env_file=env_file)  # type: ignore[call-arg]
            if clock:
                settings.timer = TimerSettings(preference=clock)
        except ValidationError as exc:
            logger.error("Configuration error: %s", exc)
            raise SystemExit(EXIT_CONFIG_ERROR) from exc

        if log_level is not None:
            settings.logging = settings.logging.model_copy(
                update={"level": log_level.upper()},
            )

        if log_format is not None:
            settings.logging = settings.logging.model_copy(
                update={"format": log_format.lower()},
            )

        configure_logging(settings.logging, service=SERVICE_NAME, version=__version__)

        active = registry if registry is not None else default_registry()
        if list_clocks:
            _list_clocks(active)
            raise typer.Exit()

        try:
            timer = Timer.from_settings(settings.timer, registry=active)
            report = build_report(timer)
        except Exception as exc:
            logger.error("Runtime error: %s", exc)
            sys.exit(EXIT_RUNTIME_ERROR)

        typer.echo(report.to_json() if as_json else report.to_text())

    return cli


def main() -> None:
    """Console-script entry point."""
    build_cli()()
