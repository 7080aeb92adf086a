"""Panel command - start the interactive control panel."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Optional

from ...core.config import Config
from ...tui.app import run_panel_async
from ...util.log import Log
from .control import load_config

log = Log.create({"service": "cli.panel"})


async def serve_panel(
    *,
    url: Optional[str],
    run: Callable[[Config], Awaitable[None]] | None = None,
) -> None:
    config = await load_config(url)
    log.info("starting panel", {"base_url": config.base_url, "poll_interval": config.poll_interval})
    call = run or run_panel_async
    await call(config)


def panel_command(url: Optional[str] = None) -> None:
    """Start the switcher control panel.

    Args:
        url: Backend base URL, overriding configuration
    """
    asyncio.run(serve_panel(url=url))
