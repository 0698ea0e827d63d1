"""Services package."""

from accounting_copilot.services.storage import (
    FatalStorageError,
    FileJournalStore,
    JournalStoreInterface,
    StorageError,
    StoreLoadError,
    StoreSaveError,
)

__all__ = [
    # Storage services
    "FatalStorageError",
    "FileJournalStore",
    "JournalStoreInterface",
    "StorageError",
    "StoreLoadError",
    "StoreSaveError",
]
