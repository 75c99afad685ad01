"""Picker that enumerates media files in a directory."""

import asyncio
import filecmp
import logging
import mimetypes
import shutil
from pathlib import Path

from mediavault.core.types import PickedFile

logger = logging.getLogger(__name__)

MEDIA_PREFIXES = ("image/", "video/")


def guess_mime_type(path: Path) -> str | None:
    """Guess a MIME type from the file name."""
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type


class DirectoryPicker:
    """Picks every image and video file found in a source directory.

    When a staging directory is given, each file is copied there first and
    the copy is what the vault adopts; the source file becomes the
    "original" that an import with delete_originals removes.

    Example:
        picker = DirectoryPicker("~/Pictures/export", staging_dir=MEDIA_DIR)
        await store.import_files(delete_originals=True, picker=picker)
    """

    def __init__(
        self,
        source: Path | str,
        staging_dir: Path | str | None = None,
        recursive: bool = False,
    ):
        self.source = Path(source).expanduser()
        self.staging_dir = Path(staging_dir).expanduser() if staging_dir else None
        self.recursive = recursive

    async def pick(self) -> list[PickedFile]:
        """
        Enumerate media files, sorted by path.

        Raises:
            FileNotFoundError: If the source directory does not exist.
        """
        return await asyncio.to_thread(self._pick_sync)

    def _pick_sync(self) -> list[PickedFile]:
        if not self.source.is_dir():
            raise FileNotFoundError(f"Source directory not found: {self.source}")

        pattern = "**/*" if self.recursive else "*"
        picked: list[PickedFile] = []
        for path in sorted(self.source.glob(pattern)):
            if not path.is_file():
                continue
            mime_type = guess_mime_type(path)
            if not mime_type or not mime_type.startswith(MEDIA_PREFIXES):
                logger.debug(f"Skipping non-media file {path}")
                continue
            picked.append(self._stage(path, mime_type))

        logger.info(f"Picked {len(picked)} media files from {self.source}")
        return picked

    def _stage(self, path: Path, mime_type: str) -> PickedFile:
        resolved = str(path.resolve())
        if self.staging_dir is None:
            return PickedFile(path=resolved, mime_type=mime_type)

        self.staging_dir.mkdir(parents=True, exist_ok=True)
        target = self._staging_target(self.staging_dir, path)
        if not target.exists():
            shutil.copy2(path, target)
        return PickedFile(
            path=str(target.resolve()), mime_type=mime_type, original=resolved
        )

    @staticmethod
    def _staging_target(staging_dir: Path, path: Path) -> Path:
        """Name the staged copy, reusing an existing copy with identical content."""
        target = staging_dir / path.name
        counter = 1
        while target.exists() and not filecmp.cmp(target, path, shallow=False):
            target = staging_dir / f"{path.stem}-{counter}{path.suffix}"
            counter += 1
        return target

    def __repr__(self) -> str:
        return f"DirectoryPicker({self.source})"
