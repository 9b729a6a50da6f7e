"""Tests for the local-disk upload store."""

import asyncio
import io
from datetime import UTC, datetime

import pytest
from fastapi import UploadFile
from reviews.uploads.store import UploadStore

SUBMITTED_AT = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)
STAMP = int(SUBMITTED_AT.timestamp() * 1000)


@pytest.fixture()
def store(tmp_path):
    return UploadStore(tmp_path / "uploads")


class TestEnsureDirectory:
    def test_creates_missing_directory(self, store):
        assert not store.directory.exists()
        store.ensure_directory()
        assert store.directory.is_dir()

    def test_existing_directory_is_kept(self, store):
        store.ensure_directory()
        (store.directory / "keep.txt").write_text("x")
        store.ensure_directory()
        assert (store.directory / "keep.txt").exists()


class TestClientName:
    def test_plain_name(self):
        assert UploadStore.client_name("photo.jpg") == "photo.jpg"

    def test_directories_are_dropped(self):
        assert UploadStore.client_name("../../etc/passwd") == "passwd"
        assert UploadStore.client_name("C:\\Users\\me\\photo.png") == "photo.png"

    def test_empty_name_falls_back(self):
        assert UploadStore.client_name("") == "upload"
        assert UploadStore.client_name(None) == "upload"


class TestSaveBytes:
    def test_name_is_timestamp_and_original(self, store):
        store.ensure_directory()
        name = store.save_bytes("photo.jpg", b"jpeg-bytes", SUBMITTED_AT)
        assert name == f"{STAMP}-photo.jpg"
        assert (store.directory / name).read_bytes() == b"jpeg-bytes"

    def test_collision_gets_next_millisecond(self, store):
        store.ensure_directory()
        first = store.save_bytes("photo.jpg", b"one", SUBMITTED_AT)
        second = store.save_bytes("photo.jpg", b"two", SUBMITTED_AT)
        assert first != second
        assert second == f"{STAMP + 1}-photo.jpg"
        assert (store.directory / first).read_bytes() == b"one"
        assert (store.directory / second).read_bytes() == b"two"

    def test_missing_directory_raises(self, store):
        with pytest.raises(FileNotFoundError):
            store.save_bytes("photo.jpg", b"data", SUBMITTED_AT)


class TestSaveAll:
    def test_preserves_order_and_skips_unnamed(self, store):
        store.ensure_directory()
        uploads = [
            UploadFile(file=io.BytesIO(b"a"), filename="a.png"),
            UploadFile(file=io.BytesIO(b""), filename=""),
            UploadFile(file=io.BytesIO(b"b"), filename="b.png"),
        ]
        names = asyncio.run(store.save_all(uploads, SUBMITTED_AT))
        assert names == [f"{STAMP}-a.png", f"{STAMP}-b.png"]
        assert (store.directory / names[1]).read_bytes() == b"b"

    def test_no_uploads(self, store):
        store.ensure_directory()
        assert asyncio.run(store.save_all([], SUBMITTED_AT)) == []

    def test_failed_upload_removes_files_already_written(self, store):
        store.ensure_directory()

        class _BrokenUpload:
            filename = "b.png"

            async def read(self):
                raise OSError("client went away")

        uploads = [UploadFile(file=io.BytesIO(b"a"), filename="a.png"), _BrokenUpload()]
        with pytest.raises(OSError):
            asyncio.run(store.save_all(uploads, SUBMITTED_AT))
        assert list(store.directory.iterdir()) == []


class TestDiscard:
    def test_removes_named_files(self, store):
        store.ensure_directory()
        kept = store.save_bytes("keep.png", b"k", SUBMITTED_AT)
        dropped = store.save_bytes("drop.png", b"d", SUBMITTED_AT)

        store.discard([dropped])

        assert [p.name for p in store.directory.iterdir()] == [kept]

    def test_missing_files_are_ignored(self, store):
        store.ensure_directory()
        store.discard(["1714564800000-gone.png"])
        assert list(store.directory.iterdir()) == []
