"""
Multipart upload handling for product images.

Files are written to the blob store as soon as the request is parsed, before
any product level validation runs. Callers own the returned files and must
discard them if the operation they were uploaded for fails.
"""
import logging
from typing import List, Optional

from fastapi import UploadFile

from ..exceptions import ValidationError
from ..services.blob_store import BlobStore, StoredFile, discard_files, generate_filename

logger = logging.getLogger(__name__)


async def store_uploads(
    files: Optional[List[UploadFile]],
    blob_store: BlobStore,
    max_files: int,
    max_size_mb: int,
) -> List[StoredFile]:
    """
    Validate and persist uploaded image files

    Args:
        files: Uploaded files from the multipart body
        blob_store: Destination store
        max_files: Maximum number of files in one request
        max_size_mb: Maximum size of a single file

    Returns:
        The stored files, in upload order

    Raises:
        ValidationError: If a file is not an image, is too large or there are
            too many files. Files stored before the failure are removed.
    """
    files = [f for f in (files or []) if f is not None and f.filename]
    if len(files) > max_files:
        raise ValidationError("File upload error", detail=f"Too many files. Maximum {max_files} files allowed.")

    max_bytes = max_size_mb * 1024 * 1024
    stored: List[StoredFile] = []
    try:
        for upload in files:
            if not (upload.content_type or "").startswith("image/"):
                raise ValidationError("File upload error", detail="Only image files are allowed!")

            data = await upload.read()
            if len(data) > max_bytes:
                raise ValidationError(
                    "File upload error",
                    detail=f"File size too large. Maximum {max_size_mb}MB per file.",
                )

            filename = generate_filename(upload.filename)
            url = blob_store.put(filename, data)
            stored.append(StoredFile(filename=filename, url=url))
    except Exception:
        discard_files(blob_store, [f.filename for f in stored])
        raise

    logger.debug(f"Stored {len(stored)} uploaded file(s)")
    return stored
