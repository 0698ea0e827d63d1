"""
Accounting Copilot CLI

Entry point that wires settings, logging, the journal store and the
interactive command loop together.
"""

from pathlib import Path
from typing import Optional

import structlog
import typer
from pydantic import ValidationError

from accounting_copilot.audit import configure_logging
from accounting_copilot.commands import JournalCommandLoop
from accounting_copilot.config import JournalSettings, get_settings
from accounting_copilot.services.storage import FatalStorageError, FileJournalStore


app = typer.Typer(
    name="accounting-copilot",
    help="Accounting Copilot - keep a journal of ledger entries in a text file",
    add_completion=False,
)


def _load_settings(
    entries_file: Optional[Path],
    log_level: Optional[str],
) -> JournalSettings:
    overrides: dict = {}
    if entries_file is not None:
        overrides["entries_path"] = entries_file
    if log_level is not None:
        overrides["log_level"] = log_level

    if not overrides:
        return get_settings()
    try:
        return JournalSettings(**overrides)
    except ValidationError as e:
        raise typer.BadParameter(str(e))


@app.command()
def run(
    entries_file: Optional[Path] = typer.Option(
        None, "--entries-file", "-f", help="Journal file (default: $JOURNAL_ENTRIES_PATH or entries.txt)"
    ),
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level for stderr (default: $JOURNAL_LOG_LEVEL or WARNING)"
    ),
):
    """
    Start the interactive journal.

    Commands: add, list, update, delete, get, exit.
    """
    settings = _load_settings(entries_file, log_level)
    configure_logging(settings.log_level_number, settings.log_format)
    logger = structlog.get_logger(__name__)

    try:
        store = FileJournalStore(settings.entries_path)
        JournalCommandLoop(store, reader=input, writer=typer.echo).run()
    except FatalStorageError as e:
        # Memory and disk may disagree now; stop instead of carrying on.
        logger.critical("fatal_storage_error", error=str(e))
        typer.echo(f"Fatal storage error: {e}", err=True)
        raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
