"""
Storage Services Package

Provides the abstract journal store interface and the flat-file
implementation used by the command loop.
"""

from accounting_copilot.services.storage.interface import (
    FatalStorageError,
    JournalStoreInterface,
    StorageError,
    StoreLoadError,
    StoreSaveError,
)
from accounting_copilot.services.storage.file_store import (
    DEFAULT_ENTRIES_FILE,
    FileJournalStore,
    decode_record,
    encode_record,
)

__all__ = [
    # Interfaces
    "JournalStoreInterface",
    # Exceptions
    "FatalStorageError",
    "StorageError",
    "StoreLoadError",
    "StoreSaveError",
    # Flat file implementation
    "DEFAULT_ENTRIES_FILE",
    "FileJournalStore",
    "decode_record",
    "encode_record",
]
