"""CLI: agremote status, targets, metrics, screenshot"""

import json
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

console = Console()


def _get_client():
    from antigravity_remote.cli.main import _get_client
    return _get_client()


def _run(coro):
    from antigravity_remote.cli.main import _run
    return _run(coro)


@click.command("status")
def status_cmd():
    """Check whether the editor's CDP endpoint is reachable."""

    async def _status():
        async with _get_client() as client:
            return await client.is_available()

    result = _run(_status())
    if result.available:
        console.print(f"[green]CDP available:[/green] {result.browser or 'unknown browser'}")
    else:
        console.print(f"[red]CDP unavailable:[/red] {result.error}")
        raise SystemExit(1)


@click.command("targets")
@click.option("--json-output", "--json", is_flag=True)
def targets_cmd(json_output: bool):
    """List debuggable targets."""

    async def _targets():
        async with _get_client() as client:
            return await client.list_targets()

    targets = _run(_targets())
    if json_output:
        click.echo(json.dumps([t.model_dump(by_alias=True) for t in targets], indent=2))
        return
    table = Table("id", "type", "title", "url")
    for t in targets:
        table.add_row(t.id, t.type, t.title, t.url)
    console.print(table)


@click.command("metrics")
def metrics_cmd():
    """Print the editor page's layout metrics."""

    async def _metrics():
        async with _get_client() as client:
            return await client.layout_metrics()

    click.echo(json.dumps(_run(_metrics()), indent=2))


@click.command("screenshot")
@click.option("-o", "--output", type=click.Path(dir_okay=False), default=None)
@click.option("--format", "image_format", type=click.Choice(["png", "jpeg", "webp"]), default="png")
@click.option("--quality", type=click.IntRange(0, 100), default=80)
def screenshot_cmd(output: Optional[str], image_format: str, quality: int):
    """Save a screenshot of the editor window."""

    async def _shot():
        async with _get_client() as client:
            return await client.screenshot_bytes(format=image_format, quality=quality)

    data = _run(_shot())
    path = Path(output or f"antigravity.{image_format}")
    path.write_bytes(data)
    console.print(f"[green]Saved {len(data)} bytes to {path}[/green]")
