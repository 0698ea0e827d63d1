"""
Journal Entry Models

These models define the shape of a single ledger line item as it moves
between the command loop, the journal store and the backing file.

DESIGN DECISION: There are two models, mirroring who owns which fields:
1. JournalEntryDraft - what a caller may supply (date, account, amounts, flag)
2. JournalEntry - what the store holds (draft fields + id + tombstone)

The id and the tombstone are owned by the store. The total is owned by
nobody: it is derived from the amounts every time it is read.
"""

from datetime import date
from decimal import Decimal, getcontext
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
)


# =============================================================================
# ENUMS
# =============================================================================

class DeletionFlag(str, Enum):
    """
    Tombstone of a journal entry.

    Kept as the two strings used by existing entry files rather than a
    native boolean. Transitions only go NO -> YES.
    """
    NO = "no"
    YES = "yes"


# Order of keys in one persisted record.
RECORD_FIELDS = [
    "id",
    "journal_date",
    "account_id",
    "amount_debt",
    "amount_credit",
    "total",
    "reconciled",
    "isdeleted",
]


def amount_in_range(value: Decimal) -> bool:
    """
    Can `value` be used as a debit or credit amount?

    It must be finite with magnitude below 10 ** Emax of the current
    decimal context. The difference of two such amounts is then always
    representable, so `total` cannot overflow.
    """
    return value.is_finite() and value.adjusted() < getcontext().Emax


# =============================================================================
# ENTRY MODELS
# =============================================================================

class JournalEntryDraft(BaseModel):
    """
    Caller-supplied fields of a journal entry.

    Any `id`, `total` or `isdeleted` present in the input is ignored:
    the store assigns `id` and `isdeleted`, and `total` is derived.
    """
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    journal_date: date = Field(
        ...,
        description="Calendar date of the entry"
    )
    account_id: int = Field(
        ...,
        ge=0,
        description="Affected account (not checked against any chart)"
    )
    amount_debt: Decimal = Field(
        default=Decimal("0"),
        description="Debit amount (signed)"
    )
    amount_credit: Decimal = Field(
        default=Decimal("0"),
        description="Credit amount (signed)"
    )
    reconciled: bool = Field(
        default=False,
        description="Has the entry been reconciled?"
    )

    @field_validator('amount_debt', 'amount_credit')
    @classmethod
    def amount_must_fit(cls, v: Decimal) -> Decimal:
        """Reject amounts whose difference could overflow the decimal context."""
        if not amount_in_range(v):
            raise ValueError(f"Amount out of range: {v}")
        return v

    @computed_field
    @property
    def total(self) -> Decimal:
        """Debit minus credit. Always recomputed, never stored."""
        return self.amount_debt - self.amount_credit

    def draft_fields(self) -> dict[str, Any]:
        """The caller-owned fields only, as python values."""
        return {
            name: getattr(self, name)
            for name in JournalEntryDraft.model_fields
        }


class JournalEntry(JournalEntryDraft):
    """
    A journal entry held by the store.

    CRITICAL: Only the store creates these from user input.
    `id` is unique across every entry ever created, deleted ones included.
    """

    id: int = Field(
        ...,
        ge=1,
        description="Store-assigned identifier, never reused"
    )
    is_deleted: DeletionFlag = Field(
        default=DeletionFlag.NO,
        alias="isdeleted",
        description="Tombstone ('yes' / 'no')"
    )

    @field_validator('is_deleted', mode='before')
    @classmethod
    def coerce_unknown_tombstone(cls, v: Any) -> Any:
        """Anything other than 'no' hides the entry, as older files expect."""
        if isinstance(v, str):
            return DeletionFlag.NO if v == DeletionFlag.NO.value else DeletionFlag.YES
        return v

    @property
    def visible(self) -> bool:
        """Is this entry still reachable by list/get/update/delete?"""
        return self.is_deleted == DeletionFlag.NO

    def to_record(self) -> dict[str, Any]:
        """
        Convert to the JSON-ready dict written as one line of the entries file.

        Keys follow RECORD_FIELDS. Dates become ISO strings and amounts
        become decimal strings.
        """
        data = self.model_dump(mode="json", by_alias=True)
        return {name: data[name] for name in RECORD_FIELDS}
