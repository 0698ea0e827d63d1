"""
Flat File Journal Storage

DESIGN DECISION: Journal entries live in a plain text file with one JSON
object per line, because:
1. The user can read (and repair) the file with any text editor
2. No database setup is required
3. Files written by earlier versions of the tool stay loadable

TRADEOFFS:
- Every mutation rewrites the whole file (fine for a personal ledger)
- No transactions: a crash in the middle of a rewrite can corrupt the file
- No locking: one store instance owns the file

Entries are never removed. Deleting an entry flips its tombstone and the
entry stays in memory and on disk forever.
"""

import json
from pathlib import Path
from typing import Iterable, Optional, Union

from pydantic import ValidationError

from accounting_copilot.audit import AuditLogger
from accounting_copilot.models.audit import AuditEventBuilder
from accounting_copilot.models.entry import (
    DeletionFlag,
    JournalEntry,
    JournalEntryDraft,
)
from accounting_copilot.services.storage.interface import (
    JournalStoreInterface,
    StoreLoadError,
    StoreSaveError,
)


DEFAULT_ENTRIES_FILE = "entries.txt"


def encode_record(entry: JournalEntry) -> str:
    """Convert a JournalEntry to one line of the entries file (no newline)."""
    return json.dumps(entry.to_record(), separators=(",", ":"), ensure_ascii=False)


def decode_record(line: Union[str, bytes]) -> JournalEntry:
    """
    Convert one line of the entries file to a JournalEntry.

    Raises:
        ValueError: If the line is not UTF-8, not a JSON object, or does not
                    describe a valid entry (pydantic's ValidationError is a
                    ValueError)

    Decoding is strict: no coercion between JSON types, so a numeric date or
    a boolean id is rejected. Amounts may be JSON numbers or strings.
    """
    if isinstance(line, bytes):
        line = line.decode("utf-8")
    return JournalEntry.model_validate_json(line, strict=True)


class FileJournalStore(JournalStoreInterface):
    """
    Journal store backed by a newline-delimited JSON file.

    The whole journal is kept in memory in insertion order. The file is
    replayed once at construction and rewritten after every mutation.
    """

    def __init__(
        self,
        path: Union[str, Path] = DEFAULT_ENTRIES_FILE,
        audit_logger: Optional[AuditLogger] = None,
    ):
        """
        Open (or start) a journal.

        Args:
            path: Backing file. It does not need to exist yet.
            audit_logger: Where audit events go. Defaults to a local logger.

        Raises:
            StoreLoadError: If the file exists but cannot be read
        """
        self._path = Path(path)
        self._audit = audit_logger or AuditLogger(__name__)
        self._entries: list[JournalEntry] = []
        self._next_id = 1
        self._skipped_records = 0
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def next_id(self) -> int:
        """Id the next added entry will receive."""
        return self._next_id

    @property
    def skipped_records(self) -> int:
        """Number of unreadable lines dropped by the last load."""
        return self._skipped_records

    # -------------------------------------------------------------------------
    # Load / save
    # -------------------------------------------------------------------------

    def _load(self) -> None:
        """Replay the backing file into memory."""
        self._entries = []
        self._next_id = 1
        self._skipped_records = 0

        try:
            with self._path.open("rb") as handle:
                self._read_entries(handle)
        except FileNotFoundError:
            # No journal yet: start empty, the first mutation creates the file.
            pass
        except OSError as e:
            self._audit.log(AuditEventBuilder.load_failed(self._path, str(e)))
            raise StoreLoadError(
                f"Cannot open entries file {self._path}: {e}"
            ) from e

        self._audit.log(
            AuditEventBuilder.store_loaded(
                path=self._path,
                loaded=len(self._entries),
                skipped=self._skipped_records,
                next_id=self._next_id,
            )
        )

    def _read_entries(self, lines: Iterable[bytes]) -> None:
        for line_number, raw in enumerate(lines, start=1):
            if not raw.strip():
                continue

            entry = self._try_decode(line_number, raw)
            if entry is None:
                self._skipped_records += 1
                continue

            if entry.id >= self._next_id:
                self._next_id = entry.id + 1
            self._entries.append(entry)

    def _try_decode(self, line_number: int, raw: bytes) -> Optional[JournalEntry]:
        """
        Decode one stored record, or None if it cannot be read.

        Unreadable records are dropped so that a partially written last
        line does not make the whole journal unusable.
        """
        try:
            return decode_record(raw)
        except (ValueError, ValidationError) as e:
            self._audit.log(
                AuditEventBuilder.record_skipped(self._path, line_number, str(e))
            )
            return None

    def _save(self) -> None:
        """Truncate the backing file and write every entry, in order."""
        lines = [encode_record(entry) + "\n" for entry in self._entries]
        try:
            with self._path.open("w", encoding="utf-8", newline="\n") as handle:
                handle.writelines(lines)
        except OSError as e:
            self._audit.log(AuditEventBuilder.save_failed(self._path, str(e)))
            raise StoreSaveError(
                f"Cannot write entries file {self._path}: {e}"
            ) from e

        self._audit.log(AuditEventBuilder.store_saved(self._path, len(lines)))

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    def _find_visible(self, entry_id: int) -> Optional[int]:
        """Index of the visible entry with this id, if any."""
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id and entry.visible:
                return index
        return None

    def _build_entry(self, entry_id: int, draft: JournalEntryDraft) -> JournalEntry:
        return JournalEntry(
            id=entry_id,
            is_deleted=DeletionFlag.NO,
            **draft.draft_fields(),
        )

    def add(self, draft: JournalEntryDraft) -> JournalEntry:
        """Store a new entry under the next id."""
        entry = self._build_entry(self._next_id, draft)
        self._next_id += 1
        self._entries.append(entry)
        self._save()

        self._audit.log(AuditEventBuilder.entry_added(entry.id, str(entry.total)))
        return entry.model_copy()

    def list_entries(self) -> list[JournalEntry]:
        """Visible entries, oldest first."""
        return [entry.model_copy() for entry in self._entries if entry.visible]

    def get_entry(self, entry_id: int) -> Optional[JournalEntry]:
        index = self._find_visible(entry_id)
        if index is None:
            return None
        return self._entries[index].model_copy()

    def update_entry(
        self,
        entry_id: int,
        replacement: JournalEntryDraft,
    ) -> Optional[JournalEntry]:
        """Replace a visible entry, keeping its id."""
        index = self._find_visible(entry_id)
        if index is None:
            self._audit.log(AuditEventBuilder.entry_not_found(entry_id, "update"))
            return None

        updated = self._build_entry(entry_id, replacement)
        self._entries[index] = updated
        self._save()

        self._audit.log(AuditEventBuilder.entry_updated(entry_id, str(updated.total)))
        return updated.model_copy()

    def delete_entry(self, entry_id: int) -> bool:
        """Flip the tombstone of a visible entry."""
        index = self._find_visible(entry_id)
        if index is None:
            self._audit.log(AuditEventBuilder.entry_not_found(entry_id, "delete"))
            return False

        self._entries[index] = self._entries[index].model_copy(
            update={"is_deleted": DeletionFlag.YES}
        )
        self._save()

        self._audit.log(AuditEventBuilder.entry_deleted(entry_id))
        return True
