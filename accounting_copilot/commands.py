"""
Interactive Command Loop

This module is the text front end of the journal. It reads one command
at a time, asks for the fields it needs, calls the store and prints the
outcome.

DESIGN DECISION: The loop never computes anything the store owns.
It does not assign ids, does not compute totals and does not touch
tombstones. It only turns typed text into JournalEntryDraft objects.

Input and output are injected callables so the loop can be driven by
scripted input in tests.
"""

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Callable

from accounting_copilot.models.entry import (
    JournalEntry,
    JournalEntryDraft,
    amount_in_range,
)
from accounting_copilot.services.storage import JournalStoreInterface


WELCOME_MESSAGE = "Welcome to Accounting Copilot CLI!"
COMMANDS_MESSAGE = "\nCommands: add, list, update, delete, get, exit"
PROMPT = "\n> "

DATE_FORMAT = "%Y-%m-%d"
_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_UNSIGNED_PATTERN = re.compile(r"\+?[0-9]+")
_AMOUNT_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")

Reader = Callable[[str], str]
Writer = Callable[[str], None]


class InvalidInputError(ValueError):
    """User input that must be rejected before it reaches the store."""
    pass


# =============================================================================
# INPUT PARSING
# =============================================================================

def parse_journal_date(text: str) -> date:
    """
    Parse a date typed by the user. Only YYYY-MM-DD is accepted.

    Raises:
        InvalidInputError: For any other shape, or an impossible date
    """
    value = text.strip()
    if not _DATE_PATTERN.fullmatch(value):
        raise InvalidInputError(f"Invalid date format: {text!r}")
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except ValueError as e:
        raise InvalidInputError(f"Invalid date: {text!r}") from e


def parse_int(text: str, default: int) -> int:
    """Non-negative integer, or `default` if the text is not one."""
    value = text.strip()
    if not _UNSIGNED_PATTERN.fullmatch(value):
        return default
    return int(value)


def parse_amount(text: str, default: Decimal) -> Decimal:
    """Decimal amount in storable range, or `default` if the text is not one."""
    value = text.strip()
    if not _AMOUNT_PATTERN.fullmatch(value):
        return default
    try:
        amount = Decimal(value)
    except InvalidOperation:
        return default
    if not amount_in_range(amount):
        return default
    return amount


def parse_bool(text: str, default: bool) -> bool:
    """'true' or 'false', anything else gives `default`."""
    value = text.strip()
    if value == "true":
        return True
    if value == "false":
        return False
    return default


def format_entry(entry: JournalEntry) -> str:
    """One-line rendering used by list and get."""
    return (
        f"#{entry.id} {entry.journal_date.isoformat()} "
        f"account={entry.account_id} "
        f"debt={entry.amount_debt} credit={entry.amount_credit} "
        f"total={entry.total} "
        f"reconciled={'yes' if entry.reconciled else 'no'}"
    )


# =============================================================================
# COMMAND LOOP
# =============================================================================

class JournalCommandLoop:
    """
    Reads commands until 'exit' or end of input.

    Commands: add, list, update, delete, get, exit.
    FatalStorageError raised by the store is not handled here; it ends
    the loop and is left to the caller.
    """

    def __init__(
        self,
        store: JournalStoreInterface,
        reader: Reader = input,
        writer: Writer = print,
    ):
        self._store = store
        self._read = reader
        self._write = writer
        self._handlers: dict[str, Callable[[], None]] = {
            "add": self.cmd_add,
            "list": self.cmd_list,
            "get": self.cmd_get,
            "update": self.cmd_update,
            "delete": self.cmd_delete,
        }

    def _prompt(self, text: str) -> str:
        return self._read(text).strip()

    def _prompt_id(self) -> int:
        # 0 is never assigned, so unparseable ids simply miss.
        return parse_int(self._prompt("id: "), 0)

    def run(self) -> None:
        """Run until the user exits or input runs out."""
        self._write(WELCOME_MESSAGE)
        self._write(COMMANDS_MESSAGE)

        while True:
            try:
                command = self._prompt(PROMPT).lower()
                if command == "exit":
                    break
                self.dispatch(command)
            except EOFError:
                break
            self._write(COMMANDS_MESSAGE)

        self._write("Goodbye!")

    def dispatch(self, command: str) -> None:
        """Run a single command. Unknown commands are reported."""
        handler = self._handlers.get(command)
        if handler is None:
            self._write("Unknown command.")
            return
        try:
            handler()
        except InvalidInputError:
            self._write("Invalid date format.")

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def cmd_add(self) -> None:
        journal_date = parse_journal_date(self._prompt("journal_date (YYYY-MM-DD): "))
        account_id = parse_int(self._prompt("account_id: "), 0)
        amount_debt = parse_amount(self._prompt("amount_debt: "), Decimal("0"))
        amount_credit = parse_amount(self._prompt("amount_credit: "), Decimal("0"))
        reconciled = parse_bool(self._prompt("reconciled (true/false): "), False)

        entry = self._store.add(
            JournalEntryDraft(
                journal_date=journal_date,
                account_id=account_id,
                amount_debt=amount_debt,
                amount_credit=amount_credit,
                reconciled=reconciled,
            )
        )
        self._write(f"Entry added (id {entry.id}).")

    def cmd_list(self) -> None:
        self._write("Current Entries:")
        for entry in self._store.list_entries():
            self._write(format_entry(entry))

    def cmd_get(self) -> None:
        entry = self._store.get_entry(self._prompt_id())
        if entry is None:
            self._write("Entry not found.")
        else:
            self._write(format_entry(entry))

    def cmd_update(self) -> None:
        """Prompt for every field, empty input keeps the current value."""
        entry_id = self._prompt_id()
        current = self._store.get_entry(entry_id)
        if current is None:
            self._write("Entry not found.")
            return

        date_text = self._prompt(
            f"journal_date (YYYY-MM-DD) [{current.journal_date.isoformat()}]: "
        )
        journal_date = parse_journal_date(date_text) if date_text else current.journal_date
        account_id = parse_int(
            self._prompt(f"account_id [{current.account_id}]: "),
            current.account_id,
        )
        amount_debt = parse_amount(
            self._prompt(f"amount_debt [{current.amount_debt}]: "),
            current.amount_debt,
        )
        amount_credit = parse_amount(
            self._prompt(f"amount_credit [{current.amount_credit}]: "),
            current.amount_credit,
        )
        reconciled = parse_bool(
            self._prompt(f"reconciled (true/false) [{str(current.reconciled).lower()}]: "),
            current.reconciled,
        )

        updated = self._store.update_entry(
            entry_id,
            JournalEntryDraft(
                journal_date=journal_date,
                account_id=account_id,
                amount_debt=amount_debt,
                amount_credit=amount_credit,
                reconciled=reconciled,
            ),
        )
        self._write("Entry updated." if updated is not None else "Update failed.")

    def cmd_delete(self) -> None:
        if self._store.delete_entry(self._prompt_id()):
            self._write("Entry deleted.")
        else:
            self._write("Delete failed.")
