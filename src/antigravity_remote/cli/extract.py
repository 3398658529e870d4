"""CLI: agremote chat, panel, conversation, workspace"""

import click
from rich.console import Console

console = Console()


def _get_client():
    from antigravity_remote.cli.main import _get_client
    return _get_client()


def _run(coro):
    from antigravity_remote.cli.main import _run
    return _run(coro)


@click.command("chat")
@click.option("--json-output", "--json", is_flag=True)
def chat_cmd(json_output: bool):
    """Show the agent conversation scraped from the editor."""

    async def _chat():
        async with _get_client() as client:
            return await client.get_chat_messages()

    result = _run(_chat())
    if json_output:
        click.echo(result.model_dump_json(indent=2))
        return
    if not result.messages:
        console.print("[yellow]No conversation found.[/yellow]")
        return
    for message in result.messages:
        color = "cyan" if message.role == "user" else "green"
        console.print(f"[{color}]{message.role}:[/{color}] {message.content}\n")
    console.print(f"[dim]{len(result.messages)} of {result.count} messages from {result.selector}[/dim]")


@click.command("panel")
def panel_cmd():
    """Dump the agent panel's raw text."""

    async def _panel():
        async with _get_client() as client:
            return await client.get_agent_panel_content()

    result = _run(_panel())
    if not result.found:
        console.print("[yellow]No agent panel; showing page text.[/yellow]")
    click.echo(result.content)


@click.command("conversation")
def conversation_cmd():
    """Dump visible conversation lines from the right-hand panel."""

    async def _conversation():
        async with _get_client() as client:
            return await client.get_conversation_text()

    result = _run(_conversation())
    if not result.found:
        console.print("[yellow]No conversation panel found.[/yellow]")
        return
    for line in result.lines:
        click.echo(line)


@click.command("workspace")
def workspace_cmd():
    """Guess the root directory of the open project."""

    async def _workspace():
        async with _get_client() as client:
            return await client.get_workspace_path()

    path = _run(_workspace())
    if path is None:
        console.print("[yellow]Workspace path unknown.[/yellow]")
        raise SystemExit(1)
    click.echo(path)
