"""CLI: agremote type, send, focus"""

import click
from rich.console import Console

console = Console()


def _get_client():
    from antigravity_remote.cli.main import _get_client
    return _get_client()


def _run(coro):
    from antigravity_remote.cli.main import _run
    return _run(coro)


@click.command("type")
@click.argument("text")
def type_cmd(text: str):
    """Type text into the agent input, key by key."""

    async def _type():
        async with _get_client() as client:
            return await client.inject_text(text)

    result = _run(_type())
    console.print(f"[green]Typed {len(result.text)} characters[/green]")


@click.command("send")
@click.argument("text")
def send_cmd(text: str):
    """Insert text into the agent input and press Enter."""

    async def _send():
        async with _get_client() as client:
            return await client.inject_and_submit(text)

    _run(_send())
    console.print("[green]Submitted.[/green]")


@click.command("focus")
def focus_cmd():
    """Focus the agent input box."""

    async def _focus():
        async with _get_client() as client:
            return await client.focus_input()

    result = _run(_focus())
    if result.success:
        console.print(f"[green]Focused via {result.method}[/green]")
    else:
        console.print("[yellow]Could not focus the input.[/yellow]")
