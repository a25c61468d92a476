"""mailprobe CLI - inspect and clean the Mailtrap test inbox by hand."""

import json
from pathlib import Path
from typing import Annotated, Optional

import httpx
import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .client import MailtrapClient
from .config import delete_token, load_config, save_token
from .errors import ConfigError, EmptyInboxError
from .models import ExitCode, Message

app = typer.Typer(
    name="mailprobe",
    help="Inspect the Mailtrap inbox used by your test suite.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

ConfigOption = Annotated[
    Optional[Path], typer.Option("--config", "-c", help="Path to config.yaml")
]
InboxOption = Annotated[
    Optional[str], typer.Option("--inbox", "-i", help="Inbox id (overrides config)")
]
JsonOption = Annotated[bool, typer.Option("--json", help="Output as JSON")]


def output_json(data: dict | list) -> None:
    """Output data as JSON."""
    print(json.dumps(data, default=str, indent=2))


def exit_with_code(code: ExitCode, message: str | None = None) -> None:
    """Exit with a specific exit code and optional message."""
    if message:
        err_console.print(f"[red]Error:[/red] {escape(message)}")
    raise typer.Exit(code.value)


def open_client(config_path: Path | None, inbox: str | None) -> MailtrapClient:
    """Build a client, exiting with CONFIG_ERROR if settings are missing."""
    try:
        config = load_config(config_path, inbox_id=inbox)
    except ConfigError as e:
        exit_with_code(ExitCode.CONFIG_ERROR, str(e))
    return MailtrapClient(config)


def print_message(message: Message) -> None:
    """Print a single message in human-readable form."""
    console.print(f"[bold]From:[/bold] {escape(message.sender)}")
    console.print(f"[bold]To:[/bold] {escape(message.recipient)}")
    console.print(f"[bold]Subject:[/bold] {escape(message.subject)}")
    console.print()
    if message.text_body:
        console.print(message.text_body, markup=False)
    elif message.html_body:
        console.print("[dim](HTML only)[/dim]")
        console.print(message.html_body, markup=False)


@app.command()
def inbox(
    config: ConfigOption = None,
    inbox: InboxOption = None,
    as_json: JsonOption = False,
) -> None:
    """List messages in the test inbox, newest first."""
    with open_client(config, inbox) as client:
        try:
            messages = client.list_messages()
        except EmptyInboxError:
            messages = []
        except httpx.HTTPError as e:
            exit_with_code(ExitCode.CONNECTION_ERROR, str(e))
        except ValueError as e:
            # Non-JSON or non-list body from the API
            exit_with_code(ExitCode.CONNECTION_ERROR, f"Unexpected API response: {e}")

    if as_json:
        output_json([m.model_dump() for m in messages])
        return

    if not messages:
        console.print("[dim]No messages found.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="dim", width=12)
    table.add_column("From", width=30)
    table.add_column("To", width=30)
    table.add_column("Subject", width=40)

    for message in messages:
        table.add_row(
            escape(message.id),
            escape(message.sender),
            escape(message.recipient),
            escape(message.subject),
        )

    console.print(table)


@app.command()
def latest(
    config: ConfigOption = None,
    inbox: InboxOption = None,
    as_json: JsonOption = False,
) -> None:
    """Show the most recent message in the test inbox."""
    with open_client(config, inbox) as client:
        try:
            message = client.fetch_latest_message()
        except EmptyInboxError as e:
            exit_with_code(ExitCode.EMPTY_INBOX, str(e))
        except httpx.HTTPError as e:
            exit_with_code(ExitCode.CONNECTION_ERROR, str(e))
        except ValueError as e:
            # Non-JSON or non-list body from the API
            exit_with_code(ExitCode.CONNECTION_ERROR, f"Unexpected API response: {e}")

    if as_json:
        output_json(message.model_dump())
        return

    print_message(message)


@app.command()
def clean(
    config: ConfigOption = None,
    inbox: InboxOption = None,
) -> None:
    """Delete every message in the test inbox."""
    with open_client(config, inbox) as client:
        try:
            client.clean_inbox()
        except httpx.HTTPError as e:
            exit_with_code(ExitCode.CONNECTION_ERROR, str(e))
        inbox_id = client.inbox_id

    console.print(f"[green]Inbox {inbox_id} cleaned.[/green]")


# ============================================================================
# Token Commands
# ============================================================================

token_app = typer.Typer(help="Manage API tokens stored in the system keyring.")
app.add_typer(token_app, name="token")


@token_app.command(name="set")
def token_set(
    inbox_id: Annotated[str, typer.Argument(help="Inbox the token belongs to")],
) -> None:
    """Store the API token for an inbox in the system keyring."""
    token = typer.prompt("API token", hide_input=True).strip()
    if not token:
        exit_with_code(ExitCode.CONFIG_ERROR, "API token must not be empty")

    save_token(inbox_id, token)
    console.print(f"[green]Token for inbox {escape(inbox_id)} saved to system keyring.[/green]")


@token_app.command(name="delete")
def token_delete(
    inbox_id: Annotated[str, typer.Argument(help="Inbox the token belongs to")],
) -> None:
    """Remove the stored API token for an inbox."""
    delete_token(inbox_id)
    console.print(f"[green]Token for inbox {escape(inbox_id)} removed.[/green]")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"mailprobe {__version__}")


if __name__ == "__main__":
    app()
