"""Tests for local file storage and upload handling."""

import io
import re

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from storefront.exceptions import StorageError, ValidationError
from storefront.services.blob_store import BlobStore, LocalBlobStore, discard_files, generate_filename
from storefront.utils.uploads import store_uploads


def upload(name, data=b"png-bytes", content_type="image/png"):
    return UploadFile(
        file=io.BytesIO(data),
        filename=name,
        headers=Headers({"content-type": content_type}),
    )


class TestLocalBlobStore:

    def test_put_and_delete(self, blob_store):
        url = blob_store.put("cake.png", b"data")

        assert url == "/uploads/Products/cake.png"
        assert (blob_store.base_path / "cake.png").read_bytes() == b"data"
        assert blob_store.delete("cake.png") is True
        assert not blob_store.exists("cake.png")

    def test_delete_missing_file(self, blob_store):
        assert blob_store.delete("never-stored.png") is False

    @pytest.mark.parametrize("name", ["../escape.png", "nested/dir.png"])
    def test_rejects_paths_outside_store(self, blob_store, name):
        with pytest.raises(StorageError):
            blob_store.put(name, b"data")


def test_generate_filename():
    name = generate_filename("My Cake (1).png")

    assert re.fullmatch(r"\d+-\d+-My_Cake__1_\.png", name)


def test_generate_filename_strips_directories():
    assert generate_filename("../../etc/passwd").endswith("-passwd")


def test_discard_files_logs_failures(caplog):
    class BrokenStore(BlobStore):
        def put(self, filename, data):
            raise NotImplementedError

        def delete(self, filename):
            raise StorageError("disk unavailable")

        def url_for(self, filename):
            return filename

    discard_files(BrokenStore(), ["a.png", "b.png"])

    assert caplog.text.count("Failed to clean up file") == 2


class TestStoreUploads:

    @pytest.mark.asyncio
    async def test_stores_images(self, blob_store):
        stored = await store_uploads([upload("a.png"), upload("b.jpg")], blob_store, 7, 5)

        assert len(stored) == 2
        assert stored[0].filename.endswith("-a.png")
        assert stored[0].url == f"/uploads/Products/{stored[0].filename}"
        assert all(blob_store.exists(f.filename) for f in stored)

    @pytest.mark.asyncio
    async def test_rejects_non_images_and_cleans_up(self, blob_store):
        files = [upload("a.png"), upload("notes.txt", content_type="text/plain")]

        with pytest.raises(ValidationError) as exc_info:
            await store_uploads(files, blob_store, 7, 5)

        assert exc_info.value.detail == "Only image files are allowed!"
        assert list(blob_store.base_path.iterdir()) == []

    @pytest.mark.asyncio
    async def test_rejects_too_many_files(self, blob_store):
        files = [upload(f"{i}.png") for i in range(3)]

        with pytest.raises(ValidationError):
            await store_uploads(files, blob_store, 2, 5)

    @pytest.mark.asyncio
    async def test_rejects_large_files(self, blob_store):
        with pytest.raises(ValidationError) as exc_info:
            await store_uploads([upload("big.png", data=b"x" * (1024 * 1024 + 1))], blob_store, 7, 1)

        assert "File size too large" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_no_files(self, blob_store):
        assert await store_uploads(None, blob_store, 7, 5) == []

    @pytest.mark.asyncio
    async def test_write_failure_cleans_up_earlier_files(self, blob_store):
        class FlakyStore(LocalBlobStore):
            def put(self, filename, data):
                if filename.endswith("-b.png"):
                    raise OSError("No space left on device")
                return super().put(filename, data)

        store = FlakyStore(blob_store.base_path, url_prefix="/uploads/Products")

        with pytest.raises(OSError):
            await store_uploads([upload("a.png"), upload("b.png")], store, 7, 5)

        assert list(blob_store.base_path.iterdir()) == []
