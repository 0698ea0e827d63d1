"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for journal operations.
This allows us to:
1. Keep the command loop unaware of how entries are persisted
2. Swap the flat entries file for another backend later
3. Substitute a fake store in tests of the command loop

The interface is intentionally small: the four operations the command
loop needs, plus listing. No filtering beyond "not deleted".
"""

from abc import ABC, abstractmethod
from typing import Optional

from accounting_copilot.models.entry import JournalEntry, JournalEntryDraft


class JournalStoreInterface(ABC):
    """
    Abstract interface for journal entry storage.

    Lookup misses are normal results (None / False), never exceptions.
    Failures that would leave memory and storage out of sync raise
    FatalStorageError.
    """

    @abstractmethod
    def add(self, draft: JournalEntryDraft) -> JournalEntry:
        """
        Store a new journal entry.

        Args:
            draft: Caller-supplied fields. Any id, total or tombstone
                   carried by the draft is ignored.

        Returns:
            The stored entry with its assigned id

        Raises:
            StoreSaveError: If the entry could not be persisted
        """
        pass

    @abstractmethod
    def list_entries(self) -> list[JournalEntry]:
        """
        List entries that are not deleted.

        Returns:
            Visible entries in insertion order
        """
        pass

    @abstractmethod
    def get_entry(self, entry_id: int) -> Optional[JournalEntry]:
        """
        Retrieve a visible entry by id.

        Returns:
            The entry if found and not deleted, None otherwise
        """
        pass

    @abstractmethod
    def update_entry(
        self,
        entry_id: int,
        replacement: JournalEntryDraft,
    ) -> Optional[JournalEntry]:
        """
        Replace every caller-owned field of a visible entry.

        Args:
            entry_id: Id of the entry to replace
            replacement: New field values. Its id, total and tombstone
                         are ignored.

        Returns:
            The updated entry, or None if no visible entry has that id

        Raises:
            StoreSaveError: If the change could not be persisted
        """
        pass

    @abstractmethod
    def delete_entry(self, entry_id: int) -> bool:
        """
        Mark a visible entry as deleted.

        Returns:
            True if the entry was deleted, False if no visible entry has that id

        Raises:
            StoreSaveError: If the change could not be persisted
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class FatalStorageError(StorageError):
    """Memory and storage may have diverged. The process must stop."""
    pass


class StoreLoadError(FatalStorageError):
    """The entries file exists but could not be read."""
    pass


class StoreSaveError(FatalStorageError):
    """The entries file could not be opened or written."""
    pass
