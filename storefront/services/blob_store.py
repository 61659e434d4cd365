"""Filesystem-backed storage for uploaded product images."""

import logging
import random
import re
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from ..exceptions import StorageError

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


@dataclass(frozen=True)
class StoredFile:
    """A file already persisted in the blob store."""
    filename: str
    url: str


def generate_filename(original_name: Optional[str]) -> str:
    """
    Build a collision resistant file name.

    Format: ``<epoch millis>-<random 0..1e9>-<sanitised original name>``
    """
    safe_name = _UNSAFE_FILENAME_CHARS.sub("_", Path(original_name or "image").name) or "image"
    unique = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    return f"{unique}-{safe_name}"


class BlobStore(ABC):
    """Contract for image file storage keyed by file name."""

    @abstractmethod
    def put(self, filename: str, data: bytes) -> str:
        """Store bytes under ``filename`` and return the public URL."""

    @abstractmethod
    def delete(self, filename: str) -> bool:
        """Delete a file. Returns False if it did not exist."""

    @abstractmethod
    def url_for(self, filename: str) -> str:
        """Public URL a stored file is served from."""


class LocalBlobStore(BlobStore):
    """Local filesystem storage rooted at the product uploads directory."""

    def __init__(self, base_path: Path, url_prefix: str = "/uploads/Products"):
        """
        Initialize local storage.

        Args:
            base_path: Directory holding the files, created if missing
            url_prefix: URL path the directory is served under
        """
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)
        self.url_prefix = url_prefix.rstrip("/")

    def _get_full_path(self, filename: str) -> Path:
        """Get the full filesystem path for a file name."""
        full_path = (self.base_path / filename.lstrip("/").lstrip("\\")).resolve()
        # Keep keys inside the storage directory
        if full_path.parent != self.base_path.resolve():
            raise StorageError(f"Invalid file name: {filename}", status_code=400)
        return full_path

    def url_for(self, filename: str) -> str:
        return f"{self.url_prefix}/{filename}"

    def exists(self, filename: str) -> bool:
        return self._get_full_path(filename).exists()

    def put(self, filename: str, data: bytes) -> str:
        full_path = self._get_full_path(filename)
        try:
            full_path.write_bytes(data)
        except OSError as e:
            raise StorageError(f"Failed to store file {filename}", detail=str(e))
        logger.info(f"Saved product image: {filename}")
        return self.url_for(filename)

    def delete(self, filename: str) -> bool:
        full_path = self._get_full_path(filename)
        if not full_path.exists():
            return False
        try:
            full_path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Failed to delete file {filename}", detail=str(e))
        logger.info(f"Deleted product image: {filename}")
        return True


def discard_files(blob_store: BlobStore, filenames: Iterable[str]) -> None:
    """
    Best-effort removal of files, used to compensate rejected uploads.

    Failures are logged and never raised so the caller's original error is
    the one that surfaces.
    """
    for filename in filenames:
        try:
            blob_store.delete(filename)
        except Exception as e:
            logger.error(f"Failed to clean up file {filename}: {e}")
