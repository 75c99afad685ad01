"""Vault store: the in-memory media collection and its persistence.

The store owns the ordered list of entries and the current selection.
Every mutation persists (where the collection changed) and then notifies
registered listeners. Errors from collaborators (picker, backend) are
caught here and logged; callers observe outcomes through state only.

All mutating calls are expected to come from a single owner (one event
loop or one UI thread). The importing flag only keeps a second import
from starting while one is in flight.
"""

import logging
import os
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from threading import Lock

from mediavault.core.codec import decode_entries, encode_entries
from mediavault.core.config import STORE_KEY
from mediavault.core.errors import PickerCancelled, VaultDataError, VaultError
from mediavault.core.types import (
    PersistenceBackend,
    PickedFile,
    PickerSource,
    SortMode,
    VaultEntry,
    VaultListener,
)
from mediavault.pickers import classify_kind

logger = logging.getLogger(__name__)


def _file_exists(location: str) -> bool:
    return os.path.isfile(location)


def _file_size(entry: VaultEntry) -> int:
    """Current on-disk size; files that vanished sort as empty."""
    try:
        return os.stat(entry.location).st_size
    except OSError:
        return 0


_SORT_KEYS: dict[SortMode, tuple[Callable[[VaultEntry], object], bool]] = {
    SortMode.NAME_ASC: (lambda e: e.location.lower(), False),
    SortMode.NAME_DESC: (lambda e: e.location.lower(), True),
    SortMode.DATE_NEWEST: (lambda e: e.imported_at, True),
    SortMode.DATE_OLDEST: (lambda e: e.imported_at, False),
    SortMode.SIZE_ASC: (_file_size, False),
    SortMode.SIZE_DESC: (_file_size, True),
    SortMode.RESET: (lambda e: e.imported_at, False),
}


class VaultStore:
    """Manages the vault collection, its selection and its persistence."""

    def __init__(
        self,
        backend: PersistenceBackend,
        key: str = STORE_KEY,
        picker: PickerSource | None = None,
        *,
        autoload: bool = True,
    ):
        """
        Initialize the store.

        Args:
            backend: Key-value store the collection is saved in
            key: Fixed key the serialized collection lives under
            picker: Default picker source used by import_files
            autoload: Load the persisted collection immediately
        """
        self.backend = backend
        self.key = key
        self.picker = picker
        self._files: list[VaultEntry] = []
        self._selected: set[VaultEntry] = set()
        self._importing = False
        self._dirty = False
        self._listeners: list[VaultListener] = []
        if autoload:
            self.load()

    # Read accessors

    @property
    def files(self) -> tuple[VaultEntry, ...]:
        """Entries in display order."""
        return tuple(self._files)

    @property
    def selected_files(self) -> tuple[VaultEntry, ...]:
        """Selected entries, in display order."""
        return tuple(f for f in self._files if f in self._selected)

    @property
    def is_importing(self) -> bool:
        return self._importing

    @property
    def is_empty(self) -> bool:
        return not self._files

    @property
    def is_selection_mode(self) -> bool:
        return bool(self._selected)

    @property
    def selected_count(self) -> int:
        return len(self._selected)

    @property
    def total_files(self) -> int:
        return len(self._files)

    @property
    def has_unsaved_changes(self) -> bool:
        """True when the last save failed and memory is ahead of the backend."""
        return self._dirty

    def find(self, location: str) -> VaultEntry | None:
        """Return the entry stored at location, if any."""
        return next((f for f in self._files if f.location == location), None)

    # Listeners

    def add_listener(self, listener: VaultListener) -> Callable[[], None]:
        """Register a change listener. Returns a callable that unregisters it."""
        self._listeners.append(listener)
        return lambda: self.remove_listener(listener)

    def remove_listener(self, listener: VaultListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Vault listener %r failed", listener)

    # Import

    async def import_files(
        self,
        delete_originals: bool = False,
        picker: PickerSource | None = None,
    ) -> int:
        """
        Import candidates from a picker into the vault.

        Candidates whose file is missing, or whose path is already a vault
        location (including earlier candidates of the same batch), are
        skipped. The collection is saved once after the batch. Picker and
        save failures are logged, never raised; entries appended before a
        failure stay in the vault.

        Args:
            delete_originals: Remove each adopted candidate's source copy
            picker: Picker to use instead of the store's default

        Returns:
            Number of entries added (0 when an import is already running)

        Raises:
            VaultError: If no picker is configured at all.
        """
        source = picker or self.picker
        if source is None:
            raise VaultError("No picker source configured")

        if self._importing:
            logger.debug("Import already in progress, ignoring request")
            return 0

        added = 0
        self._importing = True
        self._notify()
        try:
            try:
                picked = await source.pick()
            except PickerCancelled:
                logger.info("Picker cancelled, nothing to import")
                picked = []

            if not picked:
                return 0

            known = {f.location for f in self._files}
            for candidate in picked:
                if not _file_exists(candidate.path):
                    logger.debug(f"Skipping missing file {candidate.path}")
                    continue
                if candidate.path in known:
                    logger.debug(f"Skipping duplicate {candidate.path}")
                    continue

                self._files.append(
                    VaultEntry(
                        location=candidate.path,
                        imported_at=datetime.now(),
                        kind=classify_kind(candidate.mime_type),
                        is_encrypted=False,
                    )
                )
                known.add(candidate.path)
                added += 1

                if delete_originals:
                    self._delete_original(candidate)

            self.save()
        except Exception:
            logger.error("Vault import failed", exc_info=True)
            if added:
                self._dirty = True
        finally:
            self._importing = False
            self._notify()

        logger.info(f"Imported {added} files into vault")
        return added

    def _delete_original(self, candidate: PickedFile) -> None:
        source = candidate.source_path
        if os.path.abspath(source) == os.path.abspath(candidate.path):
            logger.warning(f"Not deleting {source}: it is the adopted vault file")
            return
        try:
            Path(source).unlink()
        except OSError as e:
            logger.warning(f"Could not delete original {source}: {e}")

    # Sort

    def sort_files(self, mode: SortMode | str) -> None:
        """Reorder entries in place. Equal keys keep their relative order."""
        key, reverse = _SORT_KEYS[SortMode(mode)]
        self._files.sort(key=key, reverse=reverse)
        self._notify()

    # Selection

    def is_selected(self, entry: VaultEntry) -> bool:
        return entry in self._selected

    def toggle_selection(self, entry: VaultEntry) -> None:
        """Select entry if unselected, unselect it otherwise."""
        if entry in self._selected:
            self._selected.remove(entry)
        elif entry in self._files:
            self._selected.add(entry)
        else:
            logger.debug(f"Ignoring selection of entry not in vault: {entry.location}")
            return
        self._notify()

    def clear_selection(self) -> None:
        self._selected.clear()
        self._notify()

    def select_all(self) -> None:
        self._selected = set(self._files)
        self._notify()

    # Delete

    def delete_selected(self) -> None:
        """Remove every selected entry from the vault and clear the selection."""
        self._files = [f for f in self._files if f not in self._selected]
        self._selected.clear()
        self.save()
        self._notify()

    def remove_file(self, entry: VaultEntry) -> None:
        """Remove one entry from the vault and the selection, if present."""
        if entry in self._files:
            self._files.remove(entry)
        self._selected.discard(entry)
        self.save()
        self._notify()

    def clear_vault(self) -> None:
        self._files.clear()
        self._selected.clear()
        self.save()
        self._notify()

    # Persistence

    def save(self) -> bool:
        """
        Write the collection under the store key.

        Returns:
            True on success. Failures are logged and mark the store dirty.
        """
        try:
            self.backend.set(self.key, encode_entries(self._files))
        except Exception:
            self._dirty = True
            logger.error("Failed to save vault", exc_info=True)
            return False

        self._dirty = False
        logger.info(f"Vault saved: {len(self._files)} files")
        return True

    def flush(self) -> bool:
        """Retry a failed save. No-op when nothing is pending."""
        if not self._dirty:
            return True
        return self.save()

    def load(self) -> None:
        """
        Rebuild the collection from the backend.

        A missing value yields an empty vault. Entries whose file no longer
        exists are dropped without re-saving. Read or decode failures are
        logged and leave the in-memory collection as it was.
        """
        try:
            raw = self.backend.get(self.key)
            entries = decode_entries(raw) if raw is not None else []
        except VaultDataError as e:
            logger.error(f"Vault load error: {e}")
            return
        except Exception:
            logger.error("Vault load failed", exc_info=True)
            return

        seen: set[str] = set()
        loaded: list[VaultEntry] = []
        for entry in entries:
            if entry.location in seen or not _file_exists(entry.location):
                continue
            seen.add(entry.location)
            loaded.append(entry)

        dropped = len(entries) - len(loaded)
        if dropped:
            logger.info(f"Dropped {dropped} vault entries with missing files")

        self._files = loaded
        self._selected &= set(loaded)
        self._notify()

    def close(self) -> None:
        """Flush pending changes and release the backend."""
        self.flush()
        close = getattr(self.backend, "close", None)
        if callable(close):
            close()

    def __repr__(self) -> str:
        return f"VaultStore({self.key!r}, {len(self._files)} files)"


# Default instance
_vault_store: VaultStore | None = None
_vault_store_lock = Lock()


def get_vault_store() -> VaultStore:
    """Get or create the default vault store backed by the SQLite database."""
    global _vault_store
    if _vault_store is None:
        with _vault_store_lock:
            if _vault_store is None:
                from mediavault.storage import SqliteBackend

                _vault_store = VaultStore(SqliteBackend())
    return _vault_store


def set_vault_store(store: VaultStore | None) -> None:
    """Set the default vault store instance (for testing)."""
    global _vault_store
    _vault_store = store
