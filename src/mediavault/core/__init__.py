"""MediaVault core library - the vault collection and its data model."""

from typing import TYPE_CHECKING

from mediavault.core.errors import (
    PersistenceError,
    PickerCancelled,
    VaultDataError,
    VaultError,
)
from mediavault.core.types import (
    EntryKind,
    PickedFile,
    SortMode,
    VaultEntry,
)

if TYPE_CHECKING:
    from mediavault.core.browser import VaultBrowser
    from mediavault.core.store import VaultStore

__all__ = [
    # Core classes
    "VaultBrowser",
    "VaultStore",
    # Types
    "EntryKind",
    "PickedFile",
    "SortMode",
    "VaultEntry",
    # Errors
    "PersistenceError",
    "PickerCancelled",
    "VaultDataError",
    "VaultError",
]


def __getattr__(name: str):
    if name == "VaultStore":
        from mediavault.core.store import VaultStore

        return VaultStore
    if name == "VaultBrowser":
        from mediavault.core.browser import VaultBrowser

        return VaultBrowser
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
