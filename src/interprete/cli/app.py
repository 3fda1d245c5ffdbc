"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from ..assistant import AssistantClient, Conversation
from ..errors import AssistantError
from ..localization import greeting
from ..reporting import ErrorReport, submit_error_report
from .config import (
    COMMAND_CLEAR,
    COMMAND_IMAGE,
    COMMAND_QUIT,
    COMMAND_REPORT,
    CONVERSATION_MAX_MESSAGES,
)
from .providers import get_settings, require_client

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="interprete",
    help="Plain-language explanations of legal texts from a conversational assistant",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

LOCALE_OPTION = typer.Option(None, "--locale", "-l", help="Locale for messages (es, en, fr)")
PROTOCOL_OPTION = typer.Option(None, "--protocol", "-p", help="Response protocol: completion or threads")
LOG_LEVEL_OPTION = typer.Option("warning", "--log-level", help="Minimum log level: debug, info, warning, error")


def _print_error(error: AssistantError, locale: str) -> None:
    console.print(f"[red]{escape(error.user_message(locale))}[/red]")
    console.print(f"[dim]{escape(error.recovery_suggestion(locale))}[/dim]")


def _print_reply(text: str) -> None:
    console.print(Panel(escape(text), title="Asistente", border_style="green"))


@app.command()
def ask(
    text: str = typer.Argument(..., help="Legal text or question to explain"),
    locale: str | None = LOCALE_OPTION,
    protocol: str | None = PROTOCOL_OPTION,
    log_level: str = LOG_LEVEL_OPTION,
):
    """Send one text message and print the reply."""
    settings = get_settings(locale=locale, protocol=protocol, console=console)
    client = require_client(settings, console, log_level)

    async def _ask() -> int:
        async with client:
            try:
                reply = await client.send_text(text)
            except AssistantError as e:
                _print_error(e, settings.locale)
                return 1
        _print_reply(reply.text)
        return 0

    code = asyncio.run(_ask())
    if code:
        raise typer.Exit(code=code)


@app.command()
def image(
    path: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        help="Image file to analyze"
    ),
    locale: str | None = LOCALE_OPTION,
    log_level: str = LOG_LEVEL_OPTION,
):
    """Send one image and print the analysis."""
    settings = get_settings(locale=locale, console=console)
    client = require_client(settings, console, log_level)
    data = path.read_bytes()

    async def _image() -> int:
        async with client:
            try:
                reply = await client.send_image(data)
            except AssistantError as e:
                _print_error(e, settings.locale)
                return 1
        _print_reply(reply.text)
        return 0

    code = asyncio.run(_image())
    if code:
        raise typer.Exit(code=code)


@app.command()
def chat(
    locale: str | None = LOCALE_OPTION,
    protocol: str | None = PROTOCOL_OPTION,
    log_level: str = LOG_LEVEL_OPTION,
):
    """Start an interactive chat session.

    Commands: /image PATH, /report COMMENT, /clear, /quit
    """
    settings = get_settings(locale=locale, protocol=protocol, console=console)
    client = require_client(settings, console, log_level)

    try:
        asyncio.run(_chat_session(client))
    except KeyboardInterrupt:
        pass
    console.print("[dim]Hasta pronto.[/dim]")


def split_command(line: str) -> tuple[str | None, str]:
    """Split a chat line into a known command and its argument.

    Only an exact first token counts as a command; any other line is a
    message and comes back as ``(None, line)``.
    """
    head, _, rest = line.partition(" ")
    if head in (*COMMAND_QUIT, COMMAND_CLEAR, COMMAND_IMAGE, COMMAND_REPORT):
        return head, rest.strip()
    return None, line


async def _chat_session(client: AssistantClient) -> None:
    settings = client.settings
    conversation = Conversation(max_messages=CONVERSATION_MAX_MESSAGES)

    def _greet() -> None:
        text = greeting(settings.locale)
        conversation.add_assistant_message(text)
        _print_reply(text)

    _greet()
    async with client:
        while True:
            try:
                line = await asyncio.to_thread(console.input, "[bold blue]> [/bold blue]")
            except EOFError:
                break

            line = line.strip()
            if not line:
                continue

            command, argument = split_command(line)
            if command in COMMAND_QUIT:
                break

            if command == COMMAND_CLEAR:
                conversation.clear()
                _greet()
                continue

            if command == COMMAND_REPORT:
                await _send_report(argument, conversation, settings.report_url)
                continue

            if command == COMMAND_IMAGE and not argument:
                console.print(f"[yellow]Usage: {COMMAND_IMAGE} <path>[/yellow]")
                continue

            try:
                if command == COMMAND_IMAGE:
                    image_path = Path(argument).expanduser()
                    try:
                        data = image_path.read_bytes()
                    except OSError as e:
                        console.print(f"[red]Error: {escape(str(e))}[/red]")
                        continue
                    with console.status("[dim]Analizando imagen...[/dim]"):
                        reply = await client.send_image(data)
                    conversation.record_exchange(None, reply)
                else:
                    with console.status("[dim]Pensando...[/dim]"):
                        reply = await client.send_text(line)
                    conversation.record_exchange(line, reply)
            except AssistantError as e:
                _print_error(e, settings.locale)
                continue

            _print_reply(reply.text)


async def _send_report(comment: str, conversation: Conversation, report_url: str | None) -> None:
    if not report_url:
        console.print("[yellow]Warning: INTERPRETE_REPORT_URL not set, reports disabled[/yellow]")
        return
    if not comment:
        console.print(f"[yellow]Usage: {COMMAND_REPORT} <comment>[/yellow]")
        return

    report = ErrorReport(comment=comment, history=conversation.to_transcript())
    try:
        await submit_error_report(report, report_url)
    except AssistantError as e:
        console.print(f"[red]Error: {escape(e.detail)}[/red]")
        return
    console.print("[green]Report sent. Thank you![/green]")


@app.command()
def config(
    locale: str | None = LOCALE_OPTION,
    protocol: str | None = PROTOCOL_OPTION,
):
    """Show the active configuration and check it for problems."""
    settings = get_settings(locale=locale, protocol=protocol, console=console)
    console.print(Panel(escape(settings.summary()), title="Configuration"))

    problems = settings.validate_configuration()
    if problems:
        for problem in problems:
            console.print(f"[red]✗ {escape(problem)}[/red]")
        raise typer.Exit(code=1)
    console.print("[green]✓ Configuration is valid[/green]")


if __name__ == "__main__":
    app()
