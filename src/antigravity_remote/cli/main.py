"""
Antigravity remote CLI: `agremote` command.

Commands:
  agremote config              Save host/port/timeouts
  agremote status              Is the editor's CDP endpoint up?
  agremote targets             List debuggable targets
  agremote screenshot          Save a screenshot of the editor
  agremote send <text>         Insert text and press Enter
  agremote chat                Scrape the agent conversation
  agremote workspace           Guess the open project's root
"""

import asyncio
import json
import logging
from pathlib import Path

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install antigravity-remote[cli]")

from antigravity_remote.client import AsyncAntigravity
from antigravity_remote.errors import AntigravityError

console = Console()
CONFIG_FILE = Path.home() / ".agremote" / "config.json"
CONFIG_KEYS = ("host", "port", "product_name", "request_timeout")


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_client() -> AsyncAntigravity:
    cfg = _load_config()
    return AsyncAntigravity(**{key: cfg[key] for key in CONFIG_KEYS if key in cfg})


def _run(coro):
    """Run a command coroutine; report library errors and exit 1."""
    try:
        return asyncio.run(coro)
    except AntigravityError as e:
        console.print(f"[red]{e.code}:[/red] {e}")
        raise SystemExit(1)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Log protocol activity")
def main(verbose: bool):
    """Antigravity remote: drive the editor over CDP."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@main.command("config")
@click.option("--host", default=None, help="CDP host (default localhost)")
@click.option("--port", type=int, default=None, help="CDP port (default 9222)")
@click.option("--product-name", default=None, help="Window title product name")
@click.option("--request-timeout", type=float, default=None, help="Per-request deadline in seconds")
def config_cmd(host, port, product_name, request_timeout):
    """Show or update saved connection settings."""
    cfg = _load_config()
    updates = {
        "host": host,
        "port": port,
        "product_name": product_name,
        "request_timeout": request_timeout,
    }
    changed = {k: v for k, v in updates.items() if v is not None}
    if changed:
        cfg.update(changed)
        _save_config(cfg)
        console.print(f"[dim]Saved to {CONFIG_FILE}[/dim]")
    click.echo(json.dumps(cfg, indent=2))


# Register subcommands from separate modules
from antigravity_remote.cli.inspect import metrics_cmd, screenshot_cmd, status_cmd, targets_cmd
from antigravity_remote.cli.input import focus_cmd, send_cmd, type_cmd
from antigravity_remote.cli.extract import chat_cmd, conversation_cmd, panel_cmd, workspace_cmd

for _command in (
    status_cmd, targets_cmd, metrics_cmd, screenshot_cmd,
    type_cmd, send_cmd, focus_cmd,
    chat_cmd, panel_cmd, conversation_cmd, workspace_cmd,
):
    main.add_command(_command)


if __name__ == "__main__":
    main()
