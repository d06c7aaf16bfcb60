"""Test factory for Settings.

Provides :func:`make_settings`, which creates
:class:`~chronoprobe.Settings` instances without depending on ``.env``
files or real environment variables.
"""

from __future__ import annotations

from typing import Any

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from chronoprobe._settings import Settings


class _IsolatedSettings(Settings):
    """Settings subclass that only reads constructor arguments.

    Strips the environment, dotenv and secrets sources so tests are
    deterministic regardless of the host environment.
    """

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],  # noqa: ARG003
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings,)


def make_settings(**overrides: Any) -> Settings:
    """Create a ``Settings`` instance isolated from the environment.

    Parameters:
        **overrides: Keyword arguments forwarded to the ``Settings``
            constructor.  Unset fields use model defaults.

    Example::

        settings = make_settings()
        assert settings.timer.preference == []

        from chronoprobe import TimerSettings
        custom = make_settings(timer=TimerSettings(preference=["time"]))
    """
    return _IsolatedSettings(_env_file=None, **overrides)  # type: ignore[call-arg]
