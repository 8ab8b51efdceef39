"""Parley command line interface."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from prompt_toolkit import PromptSession
from prompt_toolkit.patch_stdout import patch_stdout
from rich.console import Console
from rich.table import Table

from parley.activity import Activity
from parley.builtin.output import ConsoleOutputPlugin
from parley.choices.tokenizer import tokenize as tokenize_text
from parley.config import get_settings
from parley.demo import ORDER_DIALOG, build_demo_dialogs
from parley.framework import ParleyFramework

app = typer.Typer(
    name="parley",
    help="Multi-turn dialog engine.",
    add_completion=False,
    rich_markup_mode="rich",
)

EXIT_WORDS = {"quit", "exit"}


def _load_framework(state_dir: Path | None) -> ParleyFramework:
    settings = get_settings(state_dir)
    framework = ParleyFramework(build_demo_dialogs(settings), settings)
    framework.load_plugins()
    return framework


@app.command()
def tokenize(
    text: str = typer.Argument(..., help="Text to split into tokens"),
    locale: str | None = typer.Option(None, "--locale", help="Locale passed to the tokenizer"),
) -> None:
    """Show how an utterance is tokenized for choice matching."""

    table = Table("start", "end", "text", "normalized")
    for token in tokenize_text(text, locale):
        table.add_row(str(token.start), str(token.end), token.text, token.normalized)
    Console().print(table)


@app.command()
def run(
    messages: list[str] = typer.Argument(..., help="User messages, one per turn"),  # noqa: B008
    channel: str = typer.Option("console", "--channel", help="Channel id"),
    conversation: str = typer.Option("local", "--conversation", help="Conversation id"),
    locale: str | None = typer.Option(None, "--locale", help="Locale of the user messages"),
    state_dir: Path | None = typer.Option(  # noqa: B008
        None, "--state-dir", help="Persist dialog state in this directory"
    ),
) -> None:
    """Run scripted user messages through the demo order dialog."""

    framework = _load_framework(state_dir)

    async def _run() -> None:
        for text in messages:
            inbound = Activity(text=text, channel_id=channel, conversation_id=conversation, locale=locale)
            result = await framework.process_inbound(inbound, ORDER_DIALOG)
            for outbound in result.outbounds:
                typer.echo(f"[{outbound.channel_id}:{outbound.conversation_id}] {outbound.text or ''}")
            typer.echo(f"-- status={result.status} depth={result.stack_depth}")

    asyncio.run(_run())


@app.command()
def chat(
    state_dir: Path | None = typer.Option(  # noqa: B008
        None, "--state-dir", help="Persist dialog state in this directory"
    ),
    locale: str | None = typer.Option(None, "--locale", help="Locale of the user messages"),
) -> None:
    """Talk to the demo order dialog interactively."""

    framework = _load_framework(state_dir)
    console = Console()
    framework.register_plugin(ConsoleOutputPlugin(console), name="builtin:console")
    asyncio.run(_chat_loop(framework, console, locale))


@app.command()
def hooks(
    state_dir: Path | None = typer.Option(None, "--state-dir", help="State directory"),  # noqa: B008
) -> None:
    """Show hook implementation mapping."""

    report = _load_framework(state_dir).hook_report()
    if not report:
        typer.echo("(no hook implementations)")
        return
    for hook_name, plugin_names in report.items():
        typer.echo(f"{hook_name}: {', '.join(plugin_names)}")


async def _chat_loop(framework: ParleyFramework, console: Console, locale: str | None) -> None:
    session: PromptSession[str] = PromptSession()
    console.print("[bold blue]Parley[/bold blue] demo. Type 'quit' to leave.")
    while True:
        try:
            with patch_stdout():
                text = await session.prompt_async("you> ")
        except (EOFError, KeyboardInterrupt):
            break
        if text.strip().lower() in EXIT_WORDS:
            break
        inbound = Activity(
            text=text,
            channel_id=ConsoleOutputPlugin.channel_id,
            conversation_id="local",
            locale=locale,
        )
        result = await framework.process_inbound(inbound, ORDER_DIALOG)
        if result.stack_depth == 0:
            console.print(f"[dim]dialog {result.status}: {result.result}[/dim]")
