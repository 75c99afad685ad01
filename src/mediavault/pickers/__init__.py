"""Picker sources that hand candidate files to the vault."""

from mediavault.pickers.directory import DirectoryPicker
from mediavault.pickers.static import StaticPicker, classify_kind

__all__ = [
    "DirectoryPicker",
    "StaticPicker",
    "classify_kind",
]
