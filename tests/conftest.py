from collections.abc import Iterator
from pathlib import Path

import pytest

from switchpanel.core.config import ConfigManager
from switchpanel.util.log import Log


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    home = tmp_path / "home"
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.setenv("SWITCHPANEL_HOME", str(home))
    monkeypatch.delenv("SWITCHPANEL_URL", raising=False)
    monkeypatch.delenv("SWITCHPANEL_CONFIG_CONTENT", raising=False)
    monkeypatch.chdir(workdir)
    yield workdir


@pytest.fixture(autouse=True)
def config_context() -> Iterator[None]:
    token = ConfigManager.provide(ConfigManager())
    try:
        yield
    finally:
        ConfigManager.restore(token)


@pytest.fixture(autouse=True)
def _log_teardown() -> Iterator[None]:
    yield
    Log.configure(console=False, file=False)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"
