"""Read-only view over the persisted vault for picking entries elsewhere.

Used when another feature (an album, a share sheet) wants the user to
choose entries from the vault without touching the vault itself.
Selection is tracked by index into the loaded list.
"""

import logging
import os

from mediavault.core.codec import decode_entries
from mediavault.core.config import STORE_KEY
from mediavault.core.errors import VaultDataError
from mediavault.core.types import PersistenceBackend, VaultEntry

logger = logging.getLogger(__name__)


class VaultBrowser:
    """Loads the vault once and tracks an index-based selection."""

    def __init__(self, backend: PersistenceBackend, key: str = STORE_KEY):
        self.backend = backend
        self.key = key
        self.entries: list[VaultEntry] = []
        self._selected: set[int] = set()
        self.loaded = False

    def load(self) -> list[VaultEntry]:
        """Read the vault, keeping only entries whose file still exists."""
        self.entries = []
        self._selected.clear()
        try:
            raw = self.backend.get(self.key)
            if raw is not None:
                self.entries = [
                    e for e in decode_entries(raw) if os.path.isfile(e.location)
                ]
        except VaultDataError as e:
            logger.error(f"Vault browser load error: {e}")
        except Exception:
            logger.error("Vault browser load failed", exc_info=True)
        self.loaded = True
        return self.entries

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.entries):
            raise IndexError(f"No vault entry at index {index}")

    def toggle(self, index: int) -> None:
        self._check_index(index)
        self._selected ^= {index}

    def is_selected(self, index: int) -> bool:
        return index in self._selected

    def clear(self) -> None:
        self._selected.clear()

    @property
    def has_selection(self) -> bool:
        return bool(self._selected)

    def selected_entries(self) -> list[VaultEntry]:
        """Chosen entries in vault order."""
        return [self.entries[i] for i in sorted(self._selected)]

    def selected_locations(self) -> list[str]:
        return [e.location for e in self.selected_entries()]
