"""Shared types and data structures for MediaVault."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from mediavault.core.store import VaultStore

__all__ = [
    "EntryKind",
    "PersistenceBackend",
    "PickedFile",
    "PickerSource",
    "SortMode",
    "VaultEntry",
    "VaultListener",
]


class EntryKind(StrEnum):
    """Media classification decided at import time."""

    IMAGE = "image"
    VIDEO = "video"


class SortMode(StrEnum):
    """Orderings the vault can be sorted into."""

    NAME_ASC = "name-ascending"
    NAME_DESC = "name-descending"
    DATE_NEWEST = "date-newest"
    DATE_OLDEST = "date-oldest"
    SIZE_ASC = "size-ascending"
    SIZE_DESC = "size-descending"
    RESET = "reset"


class VaultEntry(BaseModel):
    """One imported media record.

    Frozen, so equality and hashing are structural over all four fields.
    Serialized field names use the camelCase record format
    (``location``, ``importedAt``, ``kind``, ``isEncrypted``).
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    location: str
    imported_at: datetime = Field(alias="importedAt")
    kind: EntryKind
    is_encrypted: bool = Field(alias="isEncrypted")

    @field_validator("imported_at")
    @classmethod
    def normalize_imported_at(cls, value: datetime) -> datetime:
        """Store timestamps as naive local time so all entries compare."""
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    @property
    def is_video(self) -> bool:
        return self.kind is EntryKind.VIDEO


@dataclass(frozen=True)
class PickedFile:
    """A candidate file handed over by a picker source."""

    path: str
    mime_type: str | None = None
    original: str | None = None
    """Source copy removed when importing with delete_originals. Defaults to path."""

    @property
    def source_path(self) -> str:
        return self.original or self.path


class PickerSource(Protocol):
    """Supplies candidate files from outside the vault."""

    async def pick(self) -> list[PickedFile]:
        pass


class PersistenceBackend(Protocol):
    """Opaque string key-value store that survives restarts."""

    def get(self, key: str) -> str | None:
        pass

    def set(self, key: str, value: str) -> None:
        pass


class VaultListener(Protocol):
    """Callback invoked after every vault state change."""

    def __call__(self, store: VaultStore) -> None:
        pass
