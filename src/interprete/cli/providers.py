"""Client factory functions for CLI.

Centralizes creation of settings and the assistant client from environment
variables. Hides configuration details from command implementations.
"""

from datetime import datetime
from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.text import Text

from ..assistant import AssistantClient, create_assistant_client
from ..config import AssistantSettings
from .config import LOG_MAX_MESSAGE_LENGTH, LOG_STYLES, LOG_TIMESTAMP_FORMAT, LogLevel

# Default console for output
_console = Console()


def get_settings(
    locale: str | None = None,
    protocol: str | None = None,
    console: Console | None = None,
) -> AssistantSettings:
    """Create settings from environment variables plus CLI overrides.

    Environment variables are documented in ``interprete.config``.

    Raises:
        typer.Exit: If a variable or option holds an invalid value
    """
    try:
        return AssistantSettings.from_env(locale=locale, protocol=protocol)
    except ValidationError as e:
        con = console or _console
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"])
            con.print(Text(f"Error: invalid {field}: {error['msg']}", style="red"))
        raise typer.Exit(code=1) from e


def make_debug_callback(console: Console, min_level: int) -> Any:
    """Create a debug callback that prints to a Rich console.

    Args:
        console: Rich console for output
        min_level: Lowest LogLevel value that is printed

    Returns:
        Callable(level: str, component: str, message: str)
    """
    def _callback(level: str, component: str, message: str) -> None:
        numeric = LogLevel.from_string(level)
        if numeric < min_level:
            return
        if len(message) > LOG_MAX_MESSAGE_LENGTH:
            message = message[:LOG_MAX_MESSAGE_LENGTH] + "..."
        stamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        style = LOG_STYLES.get(numeric, "")
        console.print(
            Text(f"{stamp} {LogLevel.name(numeric):<7} {component}: {message}", style=style)
        )

    return _callback


def require_client(
    settings: AssistantSettings,
    console: Console | None = None,
    log_level: str = "warning",
) -> AssistantClient:
    """Create the assistant client, exiting if the configuration is unusable.

    Args:
        settings: Configuration to use
        console: Optional Rich console for output
        log_level: Minimum level of debug messages to print

    Returns:
        AssistantClient instance (not yet started)

    Raises:
        SystemExit: If the configuration has problems
    """
    con = console or _console
    problems = settings.validate_configuration()
    if problems:
        for problem in problems:
            con.print(f"[red]Error: {problem}[/red]")
        raise typer.Exit(code=1)

    client = create_assistant_client(settings)
    client.set_debug_callback(make_debug_callback(con, LogLevel.from_string(log_level)))
    return client
