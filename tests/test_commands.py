"""
Tests for the interactive command loop and its input parsers.

The loop is driven by scripted input; output is collected in a list.
"""

from datetime import date
from decimal import Decimal

import pytest

from accounting_copilot.commands import (
    COMMANDS_MESSAGE,
    WELCOME_MESSAGE,
    InvalidInputError,
    JournalCommandLoop,
    format_entry,
    parse_amount,
    parse_bool,
    parse_int,
    parse_journal_date,
)
from accounting_copilot.models.entry import JournalEntry
from accounting_copilot.services.storage import FileJournalStore, StoreSaveError


class ScriptedReader:
    """Returns prepared answers in order, then signals end of input."""

    def __init__(self, answers):
        self._answers = iter(answers)
        self.prompts = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        try:
            return next(self._answers)
        except StopIteration:
            raise EOFError


def run_loop(store, answers) -> list:
    output = []
    JournalCommandLoop(store, reader=ScriptedReader(answers), writer=output.append).run()
    return output


ADD_FIRST = ["add", "2024-01-05", "10", "100", "40", "true"]


@pytest.fixture
def entries_path(tmp_path):
    return tmp_path / "entries.txt"


@pytest.fixture
def store(entries_path):
    return FileJournalStore(entries_path)


class TestParsers:
    """Tests for user input parsing."""

    def test_parse_journal_date(self):
        """Test that YYYY-MM-DD is accepted."""
        assert parse_journal_date("2024-01-05") == date(2024, 1, 5)
        assert parse_journal_date(" 2024-12-31 ") == date(2024, 12, 31)

    @pytest.mark.parametrize("text", [
        "", "2024/01/05", "2024-1-5", "05-01-2024", "2024-02-30", "20240105", "yesterday",
        "\u0662\u0660\u0662\u0664-\u0660\u0661-\u0660\u0665",
    ])
    def test_parse_journal_date_rejects(self, text):
        """Test that anything but a real YYYY-MM-DD date is rejected."""
        with pytest.raises(InvalidInputError):
            parse_journal_date(text)

    def test_parse_int(self):
        """Test integer parsing with fallback."""
        assert parse_int("42", 0) == 42
        assert parse_int("+7", 0) == 7
        assert parse_int("", 5) == 5
        assert parse_int("-1", 5) == 5
        assert parse_int("ten", 5) == 5
        assert parse_int("1.5", 5) == 5
        assert parse_int("\u0664\u0662", 5) == 5
        assert parse_int("\uff17", 5) == 5

    def test_parse_amount(self):
        """Test decimal parsing with fallback."""
        assert parse_amount("12.50", Decimal("0")) == Decimal("12.50")
        assert parse_amount("-3", Decimal("0")) == Decimal("-3")
        assert parse_amount("", Decimal("9")) == Decimal("9")
        assert parse_amount("abc", Decimal("9")) == Decimal("9")
        assert parse_amount("NaN", Decimal("9")) == Decimal("9")
        assert parse_amount("Infinity", Decimal("9")) == Decimal("9")
        assert parse_amount("1e3", Decimal("9")) == Decimal("1e3")
        assert parse_amount("9e999999999", Decimal("9")) == Decimal("9")
        assert parse_amount("1_000", Decimal("9")) == Decimal("9")
        assert parse_amount("\u0664\u0662", Decimal("9")) == Decimal("9")

    def test_parse_bool(self):
        """Test that only 'true' and 'false' are understood."""
        assert parse_bool("true", False) is True
        assert parse_bool("false", True) is False
        assert parse_bool("yes", False) is False
        assert parse_bool("", True) is True

    def test_format_entry(self):
        """Test the one-line rendering."""
        entry = JournalEntry(
            id=1,
            journal_date=date(2024, 1, 5),
            account_id=10,
            amount_debt=Decimal("100"),
            amount_credit=Decimal("40"),
            reconciled=True,
        )
        assert format_entry(entry) == (
            "#1 2024-01-05 account=10 debt=100 credit=40 total=60 reconciled=yes"
        )


class TestCommandLoop:
    """Tests for the command loop."""

    def test_banner_and_exit(self, store):
        """Test the welcome banner and goodbye."""
        output = run_loop(store, ["exit"])
        assert output[0] == WELCOME_MESSAGE
        assert output[1] == COMMANDS_MESSAGE
        assert output[-1] == "Goodbye!"

    def test_end_of_input_exits(self, store):
        """Test that running out of input ends the loop cleanly."""
        output = run_loop(store, [])
        assert output[-1] == "Goodbye!"

    def test_end_of_input_mid_command_exits(self, store):
        """Test that input ending inside a command ends the loop without adding."""
        output = run_loop(store, ["add", "2024-01-05"])
        assert output[-1] == "Goodbye!"
        assert store.list_entries() == []

    def test_add_and_list(self, store):
        """Test adding an entry and listing it."""
        output = run_loop(store, ADD_FIRST + ["list", "exit"])
        assert "Entry added (id 1)." in output
        assert "Current Entries:" in output
        assert "#1 2024-01-05 account=10 debt=100 credit=40 total=60 reconciled=yes" in output

    def test_add_invalid_date_continues(self, store):
        """Test that a bad date is reported and the loop carries on."""
        output = run_loop(store, ["add", "2024/01/05", "list", "exit"])
        assert "Invalid date format." in output
        assert "Current Entries:" in output
        assert store.list_entries() == []

    def test_add_unparseable_numbers_default_to_zero(self, store):
        """Test that bad numbers become 0 and reconciled defaults to false."""
        run_loop(store, ["add", "2024-01-05", "abc", "x", "y", "maybe", "exit"])
        entry = store.get_entry(1)
        assert entry.account_id == 0
        assert entry.amount_debt == Decimal("0")
        assert entry.amount_credit == Decimal("0")
        assert entry.reconciled is False

    def test_add_out_of_range_amount_defaults_to_zero(self, store, entries_path):
        """Test that an amount too large for a total is treated as unparseable."""
        output = run_loop(store, ["add", "2024-01-05", "10", "9e999999999", "40", "false", "exit"])
        assert "Entry added (id 1)." in output
        entry = store.get_entry(1)
        assert entry.amount_debt == Decimal("0")
        assert entry.total == Decimal("-40")
        assert entries_path.exists()

    def test_commands_are_case_insensitive(self, store):
        """Test that ADD works like add."""
        run_loop(store, ["  ADD  ", "2024-01-05", "10", "1", "0", "false", "exit"])
        assert store.get_entry(1) is not None

    def test_get(self, store):
        """Test get for a present and a missing id."""
        output = run_loop(store, ADD_FIRST + ["get", "1", "get", "2", "get", "abc", "exit"])
        assert output.count("#1 2024-01-05 account=10 debt=100 credit=40 total=60 reconciled=yes") == 1
        assert output.count("Entry not found.") == 2

    def test_update_keeps_blank_fields(self, store):
        """Test that empty answers keep the current values."""
        output = run_loop(store, ADD_FIRST + ["update", "1", "", "", "50", "50", "", "exit"])
        assert "Entry updated." in output
        entry = store.get_entry(1)
        assert entry.journal_date == date(2024, 1, 5)
        assert entry.account_id == 10
        assert entry.total == Decimal("0")
        assert entry.reconciled is True

    def test_update_shows_current_values(self, store):
        """Test that update prompts show the current values."""
        store_reader = ScriptedReader(ADD_FIRST + ["update", "1", "2024-02-01", "11", "", "", "false"])
        JournalCommandLoop(store, reader=store_reader, writer=lambda _: None).run()
        assert "journal_date (YYYY-MM-DD) [2024-01-05]: " in store_reader.prompts
        assert "account_id [10]: " in store_reader.prompts
        assert "reconciled (true/false) [true]: " in store_reader.prompts
        entry = store.get_entry(1)
        assert entry.journal_date == date(2024, 2, 1)
        assert entry.account_id == 11
        assert entry.reconciled is False

    def test_update_invalid_date_changes_nothing(self, store):
        """Test that a bad date aborts the update."""
        output = run_loop(store, ADD_FIRST + ["update", "1", "not-a-date", "exit"])
        assert "Invalid date format." in output
        assert store.get_entry(1).total == Decimal("60")

    def test_update_missing_entry(self, store):
        """Test that updating a missing id reports not found."""
        output = run_loop(store, ["update", "4", "exit"])
        assert "Entry not found." in output

    def test_delete(self, store):
        """Test deleting twice: the second time fails."""
        output = run_loop(store, ADD_FIRST + ["delete", "1", "delete", "1", "get", "1", "exit"])
        assert "Entry deleted." in output
        assert "Delete failed." in output
        assert "Entry not found." in output

    def test_deleted_ids_are_not_reused(self, store):
        """Test that an add after a delete gets a new id."""
        output = run_loop(store, ADD_FIRST + ["delete", "1"] + ADD_FIRST + ["exit"])
        assert "Entry added (id 2)." in output

    def test_unknown_command(self, store):
        """Test that unknown commands are reported."""
        output = run_loop(store, ["balance", "exit"])
        assert "Unknown command." in output

    def test_fatal_storage_error_propagates(self, tmp_path):
        """Test that a failed save ends the loop with the error."""
        store = FileJournalStore(tmp_path / "missing-dir" / "entries.txt")
        with pytest.raises(StoreSaveError):
            run_loop(store, ADD_FIRST + ["exit"])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
