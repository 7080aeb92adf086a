from __future__ import annotations

import pytest

from switchpanel.core.config import Config, LoggingConfig
from switchpanel.runtime.logging import bootstrap_logging
from switchpanel.util.log import LogFormat, LogLevel


def _capture_configure(monkeypatch) -> dict[str, object]:  # type: ignore[no-untyped-def]
    seen: dict[str, object] = {}

    def fake_configure(
        cls,
        *,
        level,
        format,
        console,
        file,
        dev,
    ) -> None:
        seen["level"] = level
        seen["format"] = format
        seen["console"] = console
        seen["file"] = file
        seen["dev"] = dev

    monkeypatch.setattr("switchpanel.runtime.logging.Log.configure", classmethod(fake_configure))
    return seen


def _fake_config(monkeypatch, config: Config) -> None:  # type: ignore[no-untyped-def]
    async def fake_get(cls):
        return config

    monkeypatch.setattr("switchpanel.runtime.logging.ConfigManager.get", classmethod(fake_get))


def test_bootstrap_logging_uses_cli_defaults(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    _fake_config(monkeypatch, Config())
    seen = _capture_configure(monkeypatch)

    settings = bootstrap_logging(mode="cli")

    assert settings.level == LogLevel.INFO
    assert settings.format == LogFormat.KV
    assert settings.console is False
    assert settings.file is True
    assert settings.dev_file is False
    assert seen["file"] is True


def test_bootstrap_logging_prefers_logging_config(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    _fake_config(
        monkeypatch,
        Config(
            log_level="warn",
            logging=LoggingConfig(level="debug", format="json", console=True, file=False, dev_file=True),
        ),
    )
    seen = _capture_configure(monkeypatch)

    settings = bootstrap_logging(mode="cli")

    assert settings.level == LogLevel.DEBUG
    assert settings.format == LogFormat.JSON
    assert settings.console is True
    assert settings.file is False
    assert seen["dev"] is True


def test_bootstrap_logging_falls_back_to_log_level(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    _fake_config(monkeypatch, Config(log_level="error"))
    _capture_configure(monkeypatch)

    assert bootstrap_logging(mode="cli").level == LogLevel.ERROR


def test_panel_mode_never_logs_to_console(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    _fake_config(monkeypatch, Config(logging=LoggingConfig(console=True)))
    seen = _capture_configure(monkeypatch)

    settings = bootstrap_logging(mode="tui", console=True)

    assert settings.console is False
    assert seen["console"] is False


def test_explicit_arguments_override_config(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    _fake_config(monkeypatch, Config(logging=LoggingConfig(level="debug", file=True)))
    _capture_configure(monkeypatch)

    settings = bootstrap_logging(mode="cli", level="error", file=False)

    assert settings.level == LogLevel.ERROR
    assert settings.file is False


def test_invalid_level_is_rejected(monkeypatch) -> None:  # type: ignore[no-untyped-def]
    _fake_config(monkeypatch, Config(log_level="loud"))
    _capture_configure(monkeypatch)

    with pytest.raises(ValueError):
        bootstrap_logging(mode="cli")
