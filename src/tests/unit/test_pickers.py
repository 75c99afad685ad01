"""Tests for mediavault.pickers package."""

import pytest

from mediavault.core.types import EntryKind, PickedFile
from mediavault.pickers import DirectoryPicker, StaticPicker, classify_kind


@pytest.mark.parametrize(
    "mime_type,expected",
    [
        ("video/mp4", EntryKind.VIDEO),
        ("video", EntryKind.VIDEO),
        ("image/png", EntryKind.IMAGE),
        ("application/octet-stream", EntryKind.IMAGE),
        ("", EntryKind.IMAGE),
        (None, EntryKind.IMAGE),
        ("Video/mp4", EntryKind.IMAGE),
    ],
)
def test_classify_kind(mime_type, expected):
    assert classify_kind(mime_type) is expected


class TestStaticPicker:
    """Tests for StaticPicker."""

    @pytest.mark.asyncio
    async def test_returns_copy_of_files(self):
        files = [PickedFile("/a.jpg")]
        picker = StaticPicker(files)

        picked = await picker.pick()
        picked.append(PickedFile("/b.jpg"))

        assert await picker.pick() == [PickedFile("/a.jpg")]

    @pytest.mark.asyncio
    async def test_empty(self):
        assert await StaticPicker().pick() == []


class TestDirectoryPicker:
    """Tests for DirectoryPicker."""

    @pytest.fixture
    def source(self, tmp_path):
        src = tmp_path / "export"
        src.mkdir()
        (src / "b.mp4").write_bytes(b"video")
        (src / "a.jpg").write_bytes(b"image")
        (src / "notes.txt").write_text("not media")
        (src / "nested").mkdir()
        (src / "nested" / "c.png").write_bytes(b"png")
        return src

    @pytest.mark.asyncio
    async def test_picks_media_sorted(self, source):
        picked = await DirectoryPicker(source).pick()

        assert [p.path for p in picked] == [
            str((source / "a.jpg").resolve()),
            str((source / "b.mp4").resolve()),
        ]
        assert [p.mime_type for p in picked] == ["image/jpeg", "video/mp4"]
        assert all(p.original is None for p in picked)

    @pytest.mark.asyncio
    async def test_recursive(self, source):
        picked = await DirectoryPicker(source, recursive=True).pick()

        names = sorted(p.path.rsplit("/", 1)[-1] for p in picked)
        assert names == ["a.jpg", "b.mp4", "c.png"]

    @pytest.mark.asyncio
    async def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await DirectoryPicker(tmp_path / "missing").pick()

    @pytest.mark.asyncio
    async def test_stages_copies(self, source, tmp_path):
        staging = tmp_path / "vault-media"

        picked = await DirectoryPicker(source, staging_dir=staging).pick()

        first = picked[0]
        assert first.path == str((staging / "a.jpg").resolve())
        assert first.original == str((source / "a.jpg").resolve())
        assert (staging / "a.jpg").read_bytes() == b"image"
        assert (source / "a.jpg").exists()

    @pytest.mark.asyncio
    async def test_restaging_same_file_reuses_copy(self, source, tmp_path):
        staging = tmp_path / "vault-media"
        picker = DirectoryPicker(source, staging_dir=staging)

        first = await picker.pick()
        second = await picker.pick()

        assert [p.path for p in first] == [p.path for p in second]
        assert sorted(f.name for f in staging.iterdir()) == ["a.jpg", "b.mp4"]

    @pytest.mark.asyncio
    async def test_staging_name_clash_gets_new_name(self, source, tmp_path):
        staging = tmp_path / "vault-media"
        staging.mkdir()
        (staging / "a.jpg").write_bytes(b"a different, longer photo")

        picked = await DirectoryPicker(source, staging_dir=staging).pick()

        assert picked[0].path == str((staging / "a-1.jpg").resolve())
        assert (staging / "a.jpg").read_bytes() == b"a different, longer photo"

    @pytest.mark.asyncio
    async def test_same_name_and_size_different_content(self, tmp_path):
        """A staged copy is reused only when its bytes match."""
        staging = tmp_path / "vault-media"
        first_src = tmp_path / "card1"
        second_src = tmp_path / "card2"
        first_src.mkdir()
        second_src.mkdir()
        (first_src / "IMG_1.jpg").write_bytes(b"AAAA")
        (second_src / "IMG_1.jpg").write_bytes(b"BBBB")

        first = await DirectoryPicker(first_src, staging_dir=staging).pick()
        second = await DirectoryPicker(second_src, staging_dir=staging).pick()

        assert first[0].path != second[0].path
        assert second[0].path == str((staging / "IMG_1-1.jpg").resolve())
        assert (staging / "IMG_1.jpg").read_bytes() == b"AAAA"
        assert (staging / "IMG_1-1.jpg").read_bytes() == b"BBBB"

    @pytest.mark.asyncio
    async def test_distinct_same_size_files_both_import(self, tmp_path):
        """Two different files sharing a name and size both reach the vault."""
        from mediavault.core.store import VaultStore
        from mediavault.storage import MemoryBackend

        staging = tmp_path / "vault-media"
        store = VaultStore(MemoryBackend())
        for name, content in (("card1", b"AAAA"), ("card2", b"BBBB")):
            src = tmp_path / name
            src.mkdir()
            (src / "IMG_1.jpg").write_bytes(content)
            added = await store.import_files(
                picker=DirectoryPicker(src, staging_dir=staging)
            )
            assert added == 1

        assert store.total_files == 2
