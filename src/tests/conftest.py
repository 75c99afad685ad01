"""Shared test fixtures and configuration."""

from __future__ import annotations

from datetime import datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from mediavault.core.codec import encode_entries
from mediavault.core.types import EntryKind, PickedFile, VaultEntry
from mediavault.storage import MemoryBackend

BASE_TIME = datetime(2026, 1, 2, 10, 0, 0)


@pytest.fixture
def media_dir(tmp_path):
    """Directory holding media files for a test."""
    path = tmp_path / "media"
    path.mkdir()
    return path


@pytest.fixture
def make_media(media_dir):
    """Factory creating a media file of a given size, returning its path."""

    def _make_media(name: str, size: int = 10) -> str:
        path = media_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"x" * size)
        return str(path)

    return _make_media


@pytest.fixture
def make_entry():
    """Factory for vault entries with deterministic timestamps."""

    def _make_entry(
        location: str,
        minutes: int = 0,
        kind: EntryKind = EntryKind.IMAGE,
        is_encrypted: bool = False,
    ) -> VaultEntry:
        return VaultEntry(
            location=location,
            imported_at=BASE_TIME + timedelta(minutes=minutes),
            kind=kind,
            is_encrypted=is_encrypted,
        )

    return _make_entry


@pytest.fixture
def backend():
    """Empty in-memory persistence backend."""
    return MemoryBackend()


@pytest.fixture
def seeded_backend():
    """Factory for a memory backend already holding the given entries."""

    def _seeded_backend(entries: list[VaultEntry], key: str = "vault_files"):
        return MemoryBackend({key: encode_entries(entries)})

    return _seeded_backend


@pytest.fixture
def make_picker():
    """Factory for a picker whose pick() returns the given candidates."""

    def _make_picker(
        files: list[PickedFile] | None = None,
        side_effect: BaseException | None = None,
    ):
        picker = MagicMock()
        picker.pick = AsyncMock(return_value=list(files or []))
        if side_effect is not None:
            picker.pick.side_effect = side_effect
        return picker

    return _make_picker
