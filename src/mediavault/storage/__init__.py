"""Persistence backends for MediaVault."""

from mediavault.storage.kv_store import MemoryBackend, SqliteBackend

__all__ = [
    "MemoryBackend",
    "SqliteBackend",
]
