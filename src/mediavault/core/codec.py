"""Serialization of the vault collection to its persisted record format.

The collection is stored as a JSON array of flat records::

    [{"location": "/media/a.jpg", "importedAt": "2026-01-02T10:00:00",
      "kind": "image", "isEncrypted": false}, ...]

Unknown record fields are ignored so values written by newer versions
still decode.
"""

import json

from pydantic import TypeAdapter, ValidationError

from mediavault.core.errors import VaultDataError
from mediavault.core.types import VaultEntry

_ENTRIES_ADAPTER = TypeAdapter(list[VaultEntry])


def encode_entries(entries: list[VaultEntry]) -> str:
    """Serialize entries, preserving their order."""
    return _ENTRIES_ADAPTER.dump_json(entries, by_alias=True).decode("utf-8")


def decode_entries(raw: str) -> list[VaultEntry]:
    """
    Deserialize a persisted value.

    Raises:
        VaultDataError: If the value is not valid JSON or a record is malformed.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise VaultDataError(f"Invalid JSON in vault data: {e}") from e

    if not isinstance(data, list):
        raise VaultDataError(
            f"Vault data must be a list of records, got {type(data).__name__}"
        )

    try:
        return _ENTRIES_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise VaultDataError(f"Malformed vault record: {e}") from e
