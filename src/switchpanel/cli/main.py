"""CLI entry point for Switchpanel.

Running `switchpanel` without arguments launches the control panel.
Subcommands talk to the backend once and exit.
"""

import asyncio
import json
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..core.config import ConfigError
from ..runtime.logging import bootstrap_logging

app = typer.Typer(
    name="switchpanel",
    help="Switchpanel - control panel for the failover switcher",
    no_args_is_help=False,  # the panel is the default when no args
    add_completion=False,
    invoke_without_command=True,
)

console = Console()


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        console.print(f"switchpanel {__version__}")
        raise typer.Exit()


def _url(ctx: typer.Context) -> Optional[str]:
    return (ctx.obj or {}).get("url")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    url: Optional[str] = typer.Option(
        None,
        "--url",
        "-u",
        help="Backend base URL (overrides configuration)",
    ),
):
    """Switchpanel - control panel for the failover switcher.

    Running without a subcommand launches the interactive panel.
    """
    ctx.obj = {"url": url}
    mode = "cli" if ctx.invoked_subcommand is not None else "tui"
    try:
        bootstrap_logging(mode=mode)
    except (ConfigError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if ctx.invoked_subcommand is not None:
        return

    from .cmd.panel import panel_command

    panel_command(url=url)


@app.command()
def status(
    ctx: typer.Context,
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Print the raw status response",
    ),
):
    """Show the backend status."""
    from .cmd.control import status_command

    status_command(_url(ctx), as_json=json_output)


@app.command()
def logs(ctx: typer.Context):
    """Print the backend logs."""
    from .cmd.control import logs_command

    logs_command(_url(ctx))


@app.command()
def switch(
    ctx: typer.Context,
    to: Optional[str] = typer.Option(
        None,
        "--to",
        "-t",
        help="Server to switch to (default: best server other than the current one)",
    ),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Do not ask for confirmation",
    ),
):
    """Switch the active server."""
    from .cmd.control import switch_command

    switch_command(_url(ctx), target=to, assume_yes=yes)


@app.command()
def pause(ctx: typer.Context):
    """Pause automatic switching."""
    from .cmd.control import auto_switch_command

    auto_switch_command(_url(ctx), "pause")


@app.command()
def resume(ctx: typer.Context):
    """Resume automatic switching."""
    from .cmd.control import auto_switch_command

    auto_switch_command(_url(ctx), "resume")


@app.command()
def update(ctx: typer.Context):
    """Trigger the backend update check."""
    from .cmd.control import update_command

    update_command(_url(ctx))


@app.command()
def subscription(ctx: typer.Context):
    """Refresh the server subscription and print the report."""
    from .cmd.control import subscription_command

    subscription_command(_url(ctx))


@app.command()
def ping(ctx: typer.Context):
    """Ping the subscribed hosts and print the report."""
    from .cmd.control import ping_command

    ping_command(_url(ctx))


@app.command()
def config(
    ctx: typer.Context,
    show: bool = typer.Option(
        False,
        "--show",
        help="Show current configuration",
    ),
    path: bool = typer.Option(
        False,
        "--path",
        help="Show configuration file path",
    ),
):
    """Inspect configuration."""
    from ..core.config import CONFIG_FILENAME, ConfigManager
    from ..core.global_paths import GlobalPath
    from .cmd.control import load_config

    if path:
        console.print(f"{GlobalPath.config()}/{CONFIG_FILENAME}", markup=False, highlight=False)
        return

    if show:
        async def show_config():
            config = await load_config(_url(ctx))
            console.print_json(json.dumps(config.model_dump(mode="json"), indent=2))
            for source in ConfigManager.sources():
                console.print(f"[dim]source: {escape(source)}[/dim]")

        try:
            asyncio.run(show_config())
        except ConfigError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}")
            raise typer.Exit(1)
        return

    console.print("Use --show to display configuration or --path to show config path")


if __name__ == "__main__":
    app()
