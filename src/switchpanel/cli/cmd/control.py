"""One-shot control commands against the switcher backend."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, NoReturn, Optional, TypeVar

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...api_client import ApiClientError, CommandResult, SwitcherAPIClient
from ...core.config import Config, ConfigError, ConfigManager
from ...tui.dispatcher import (
    CONFIRM_SWITCH_BEST,
    GENERIC_ERROR,
    SWITCHING_BEST,
    SWITCHING_SELECTED,
    UPDATE_STARTED,
)
from ...tui.log_viewer import LogViewer, TextSource, logs_source, ping_source, subscription_source
from ...tui.state import StatusEnvelope, StatusSnapshot, select_panel_view
from ...util.log import Log

log = Log.create({"service": "cli.control"})

console = Console()

T = TypeVar("T")

CLIENT_ERRORS = (ApiClientError, httpx.HTTPError, ValidationError, ValueError)

_TIER_STYLES = {
    "online": "green",
    "warning": "yellow",
    "error": "red",
}


async def load_config(url: Optional[str] = None) -> Config:
    """Resolve configuration; an explicit ``url`` wins over every source."""
    config = await ConfigManager.get()
    if url:
        config = config.model_copy(update={"base_url": url})
    return config


def create_client(config: Config) -> SwitcherAPIClient:
    return SwitcherAPIClient(base_url=config.base_url, timeout=config.request_timeout)


def fail(message: str) -> NoReturn:
    console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(1)


def run_with_client(url: Optional[str], fn: Callable[[SwitcherAPIClient], Awaitable[T]]) -> T:
    """Run ``fn`` with a client for the configured backend.

    Configuration and transport failures are printed and exit with status 1.
    """

    async def run() -> T:
        config = await load_config(url)
        client = create_client(config)
        try:
            return await fn(client)
        finally:
            await client.aclose()

    try:
        return asyncio.run(run())
    except ConfigError as e:
        log.error("config error", {"path": e.path})
        fail(str(e))
    except CLIENT_ERRORS as e:
        log.error("command failed", {"error": e})
        fail(str(e))


async def fetch_snapshot(client: SwitcherAPIClient) -> StatusSnapshot:
    envelope = StatusEnvelope.model_validate(await client.get_status())
    if not envelope.success or envelope.data is None:
        raise ValueError(envelope.error or "status response without data")
    return envelope.data


def status_table(snapshot: StatusSnapshot) -> Table:
    view = select_panel_view(snapshot)
    tier_style = _TIER_STYLES[view.status_tier]
    paused_style = _TIER_STYLES[view.paused_tier]

    table = Table(title="Switcher status", show_header=False, box=None, pad_edge=False)
    table.add_column("field", style="dim")
    table.add_column("value")

    table.add_row("Current server", f"[{tier_style}]●[/{tier_style}] {escape(view.current_server)}")
    table.add_row("Uptime", escape(view.uptime))
    table.add_row("Auto switch", f"[{paused_style}]{escape(view.paused_label)}[/{paused_style}]")
    table.add_row("Error count", f"[{tier_style}]{view.error_count}[/{tier_style}]")
    table.add_row("Goroutines", view.goroutine_count)
    table.add_row("Memory usage", view.memory_usage)
    table.add_row("Memory allocated", view.memory_alloc)
    table.add_row("Naive version", escape(view.naive_version))
    table.add_row("Switcher version", escape(view.switcher_version))
    table.add_row(
        "Servers",
        "\n".join(escape(option.label) for option in view.server_options) or "[dim]none[/dim]",
    )
    table.add_row("Server failures", escape(view.down_stats))
    return table


def report_result(result: CommandResult, success_message: str) -> None:
    if not result.success:
        fail(result.error or GENERIC_ERROR)
    console.print(f"[green]{escape(success_message)}[/green]")


def status_command(url: Optional[str], *, as_json: bool = False) -> None:
    """Print the current backend status."""

    async def run(client: SwitcherAPIClient) -> Any:
        if as_json:
            return await client.get_status()
        return await fetch_snapshot(client)

    result = run_with_client(url, run)
    if as_json:
        console.print_json(data=result)
        return
    console.print(status_table(result))


def text_command(url: Optional[str], source_factory: Callable[[SwitcherAPIClient], TextSource]) -> None:
    """Fetch and print one text body (logs or a diagnostic report)."""

    async def run(client: SwitcherAPIClient):
        return await LogViewer(source_factory(client)).load()

    view = run_with_client(url, run)
    if view.state == "error":
        fail(view.text)
    if view.state == "empty":
        console.print(f"[dim]{escape(view.text)}[/dim]")
        return
    console.print(view.text, markup=False, highlight=False)


def logs_command(url: Optional[str]) -> None:
    text_command(url, logs_source)


def subscription_command(url: Optional[str]) -> None:
    text_command(url, subscription_source)


def ping_command(url: Optional[str]) -> None:
    text_command(url, ping_source)


def switch_command(url: Optional[str], *, target: Optional[str], assume_yes: bool) -> None:
    """Switch to ``target``, or away from the current server when omitted."""

    async def run(client: SwitcherAPIClient) -> Optional[CommandResult]:
        if target:
            if not assume_yes and not typer.confirm(f"Switch to {target}?"):
                return None
            return await client.switch_select(target)

        snapshot = await fetch_snapshot(client)
        if not assume_yes and not typer.confirm(CONFIRM_SWITCH_BEST):
            return None
        return await client.switch_avoid(snapshot.current_server or None)

    result = run_with_client(url, run)
    if result is None:
        console.print("[yellow]Cancelled[/yellow]")
        return
    report_result(result, SWITCHING_SELECTED if target else SWITCHING_BEST)


def auto_switch_command(url: Optional[str], action: str) -> None:
    """Pause or resume automatic failover."""

    async def run(client: SwitcherAPIClient) -> CommandResult:
        return await client.set_auto_switch(action)

    message = "Auto switch paused" if action == "pause" else "Auto switch resumed"
    report_result(run_with_client(url, run), message)


def update_command(url: Optional[str]) -> None:
    """Trigger the backend update check."""

    async def run(client: SwitcherAPIClient) -> CommandResult:
        return await client.trigger_update()

    report_result(run_with_client(url, run), UPDATE_STARTED)
