"""Typer-based CLI for Timelog."""

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .buffer import TextBuffer, utf16_length
from .config import (
    MAX_REPLACEMENT_INTERVAL,
    MIN_REPLACEMENT_INTERVAL,
    TimelogConfig,
    load_daily_note_format,
    resolve_vault_root,
)
from .controller import TimelogController
from .ledger import LedgerWriter, read_ledger_tail
from .models.editor import Position
from .paths import VaultPaths

app = typer.Typer(
    name="timelog",
    help="Timelog - timestamp log entries inside dated sections of Markdown notes",
    add_completion=False,
)

console = Console()

VAULT_HELP = "Path to vault directory (default: TIMELOG_VAULT env or nearest .obsidian)"


@app.callback()
def main_callback(
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Show debug logging",
    ),
):
    """Timestamp log entries inside dated sections of Markdown notes."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _load_paths(vault_path: Optional[str], document: Optional[Path] = None) -> VaultPaths:
    try:
        return VaultPaths(resolve_vault_root(document, vault_path))
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


def _load_config(paths: VaultPaths, apply_env: bool = True) -> TimelogConfig:
    try:
        return TimelogConfig.load(paths, apply_env=apply_env)
    except ValueError as e:
        console.print(f"[red]Error: Invalid settings: {e}[/red]")
        raise typer.Exit(code=1)


def _open_document(file: str, vault_path: Optional[str]) -> tuple[Path, TimelogController]:
    """Resolve a document and build a controller for its vault."""
    document = Path(file)
    if not document.is_file():
        console.print(f"[red]Error: Document not found: {document}[/red]")
        raise typer.Exit(code=1)

    paths = _load_paths(vault_path, document)
    controller = TimelogController(
        config=_load_config(paths),
        header_format=load_daily_note_format(paths),
        ledger_writer=LedgerWriter(paths.ledger_file),
        notify=lambda message: console.print(f"[yellow]{message}[/yellow]"),
        document=paths.relative(document),
    )
    return document, controller


def _save(document: Path, buffer: TextBuffer) -> None:
    document.write_text(buffer.text(), encoding="utf-8")


@app.command()
def start(
    file: str = typer.Argument(..., help="Markdown document"),
    line: int = typer.Option(
        None,
        "--line",
        "-l",
        min=0,
        help="Zero-based line to insert the header at (default: end of document)",
    ),
    vault_path: str = typer.Option(None, "--vault", "-v", help=VAULT_HELP),
):
    """Start a log entry: insert a dated section header for today."""
    document, controller = _open_document(file, vault_path)
    buffer = TextBuffer.from_path(document)

    if line is None:
        last = buffer.line_count() - 1
        last_text = buffer.get_line(last)
        if last_text:
            # Start the section on a fresh line
            buffer.replace_range("\n", Position(line=last, column=utf16_length(last_text)))
            last += 1
        cursor = Position(line=last, column=0)
    else:
        cursor = Position(line=min(line, buffer.line_count() - 1), column=0)
    buffer.set_cursor(cursor)

    header = controller.start_log_entry(buffer)
    _save(document, buffer)
    console.print(f"[green]+[/green] Started log entry: {header.strip()}")


@app.command()
def jump(
    file: str = typer.Argument(..., help="Markdown document"),
    vault_path: str = typer.Option(None, "--vault", "-v", help=VAULT_HELP),
):
    """Jump to the latest dated header and print the landing line."""
    document, controller = _open_document(file, vault_path)
    buffer = TextBuffer.from_path(document)
    line_count = buffer.line_count()

    cursor = controller.jump_to_latest_header(buffer)
    if cursor is None:
        raise typer.Exit(code=1)

    if buffer.line_count() != line_count:
        _save(document, buffer)
    console.print(f"Line {cursor.line}")


@app.command()
def stamp(
    file: str = typer.Argument(..., help="Markdown document"),
    line: int = typer.Option(..., "--line", "-l", min=0, help="Zero-based cursor line"),
    column: int = typer.Option(
        None,
        "--column",
        "-c",
        min=0,
        help="Cursor column (default: end of line)",
    ),
    vault_path: str = typer.Option(None, "--vault", "-v", help=VAULT_HELP),
):
    """Evaluate one edit at the cursor and insert a timestamp prefix if due."""
    document, controller = _open_document(file, vault_path)
    buffer = TextBuffer.from_path(document)
    if line >= buffer.line_count():
        console.print(f"[red]Error: Line {line} is past the end of the document[/red]")
        raise typer.Exit(code=1)

    if column is None:
        column = utf16_length(buffer.get_line(line))
    buffer.set_cursor(Position(line=line, column=column))

    if controller.on_editor_change(buffer):
        _save(document, buffer)
        console.print(f"[green]+[/green] {buffer.get_line(line)}")
    else:
        console.print("[dim]No prefix inserted[/dim]")


@app.command()
def status(
    file: str = typer.Argument(..., help="Markdown document"),
    vault_path: str = typer.Option(None, "--vault", "-v", help=VAULT_HELP),
):
    """Show whether logging is active for a document."""
    document, controller = _open_document(file, vault_path)
    state = controller.refresh_status(TextBuffer.from_path(document))
    if state.visible:
        console.print(f"[green]{state.label}[/green]")
    else:
        console.print("[dim]Logging inactive[/dim]")


settings_app = typer.Typer(help="Settings commands")
app.add_typer(settings_app, name="settings")


@settings_app.command("show")
def settings_show(
    vault_path: str = typer.Option(None, "--vault", "-v", help=VAULT_HELP),
):
    """Display the effective settings."""
    paths = _load_paths(vault_path)
    config = _load_config(paths)

    table = Table(title="Timelog Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("replacementInterval", f"{config.replacement_interval}s")
    table.add_row("useList", str(config.use_list))
    table.add_row("logFormat", config.log_format)
    table.add_row("debounceMs", str(config.debounce_ms))
    table.add_row("daily note format", load_daily_note_format(paths))
    console.print(table)
    console.print(f"[dim]Config file:[/dim] {paths.config_file}")


@settings_app.command("set")
def settings_set(
    interval: int = typer.Option(
        None,
        "--interval",
        "-i",
        min=MIN_REPLACEMENT_INTERVAL,
        max=MAX_REPLACEMENT_INTERVAL,
        help="Minimum seconds between log entries being prefixed",
    ),
    use_list: Optional[bool] = typer.Option(
        None,
        "--use-list/--no-use-list",
        help="Use lists for log entries",
    ),
    log_format: str = typer.Option(
        None,
        "--log-format",
        "-f",
        help="Format of timestamp to prefix log entries, e.g. HH:mm",
    ),
    debounce_ms: int = typer.Option(
        None,
        "--debounce-ms",
        min=0,
        help="Delay before an edit is evaluated (applies on next start)",
    ),
    vault_path: str = typer.Option(None, "--vault", "-v", help=VAULT_HELP),
):
    """Update persisted settings."""
    paths = _load_paths(vault_path)
    # Environment overrides are not written back to the settings file.
    config = _load_config(paths, apply_env=False)

    updates = {}
    if interval is not None:
        updates["replacement_interval"] = interval
    if use_list is not None:
        updates["use_list"] = use_list
    if log_format is not None:
        updates["log_format"] = log_format
    if debounce_ms is not None:
        updates["debounce_ms"] = debounce_ms

    if not updates:
        console.print("[yellow]Nothing to update[/yellow]")
        return

    try:
        new_config = config.model_validate({**config.model_dump(), **updates})
    except ValidationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    config_file = new_config.save(paths)
    LedgerWriter(paths.ledger_file).append_event(
        event_type="SETTINGS_UPDATED",
        payload=new_config.model_dump(by_alias=True),
    )
    console.print(f"[green]+[/green] Saved settings: {config_file}")


ledger_app = typer.Typer(help="Ledger commands")
app.add_typer(ledger_app, name="ledger")


@ledger_app.command("tail")
def ledger_tail(
    n: int = typer.Option(
        20,
        "--n",
        help="Number of recent events to display",
    ),
    vault_path: str = typer.Option(None, "--vault", "-v", help=VAULT_HELP),
):
    """Display the last N events from the ledger.

    Skips malformed lines with warnings.
    """
    paths = _load_paths(vault_path)
    events = read_ledger_tail(paths.ledger_file, n=n)

    if not events:
        console.print("[dim]No events in ledger[/dim]")
        return

    table = Table(title=f"Last {len(events)} Ledger Event(s)")
    table.add_column("Timestamp", style="dim")
    table.add_column("Event Type", style="magenta")
    table.add_column("Document")
    table.add_column("Payload")
    for event in events:
        payload_str = ", ".join(f"{k}={v}" for k, v in event.payload.items())
        if len(payload_str) > 60:
            payload_str = payload_str[:57] + "..."
        table.add_row(
            event.ts.strftime("%Y-%m-%d %H:%M:%S"),
            event.event_type,
            event.document or "-",
            payload_str,
        )
    console.print(table)


@app.command()
def version():
    """Show Timelog version."""
    from . import __version__
    console.print(f"Timelog v{__version__}")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
