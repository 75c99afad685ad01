"""Media kind classification and a fixed-list picker."""

from mediavault.core.types import EntryKind, PickedFile


def classify_kind(mime_type: str | None) -> EntryKind:
    """Classify a MIME hint. Anything not starting with "video" is an image."""
    if mime_type and mime_type.startswith("video"):
        return EntryKind.VIDEO
    return EntryKind.IMAGE


class StaticPicker:
    """Picker that always returns the same candidates."""

    def __init__(self, files: list[PickedFile] | None = None):
        self.files = list(files or [])

    async def pick(self) -> list[PickedFile]:
        return list(self.files)

    def __repr__(self) -> str:
        return f"StaticPicker({len(self.files)} files)"
