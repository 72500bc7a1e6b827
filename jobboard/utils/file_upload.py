"""
File Upload Utility - Validate logo uploads and manage transient upload files.

Supported formats:
- PNG (.png)
- JPEG (.jpg, .jpeg)
- GIF (.gif), BMP (.bmp), WebP (.webp)

Uploaded logos only live on disk while one request is being processed.
The fingerprint is stored, never the file.
"""

import logging
import os
import uuid
from pathlib import Path
from typing import BinaryIO, Optional, Tuple

from fastapi import UploadFile, HTTPException

logger = logging.getLogger(__name__)


ALLOWED_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.gif', '.bmp', '.webp'}


def get_file_extension(filename: str) -> str:
    """Get lowercase file extension."""
    if '.' not in filename:
        return ''
    return '.' + filename.rsplit('.', 1)[1].lower()


async def read_logo_upload(file: UploadFile, max_size_bytes: int) -> Tuple[bytes, str]:
    """
    Validate and read an uploaded logo.

    Args:
        file: FastAPI UploadFile
        max_size_bytes: Upper bound on accepted file size

    Returns:
        Tuple of (content, extension)

    Raises:
        HTTPException on validation errors
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="No filename provided")

    ext = get_file_extension(file.filename)
    if ext not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{ext}'. Allowed: PNG, JPEG, GIF, BMP, WebP"
        )

    content = await file.read()

    if len(content) > max_size_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File too large. Maximum size: {max_size_bytes // (1024 * 1024)}MB"
        )

    if not content:
        raise HTTPException(status_code=400, detail="Uploaded logo is empty")

    return content, ext


class UploadStorage:
    """
    Transient storage for uploaded files.

    Every handle returned by save() must be passed to delete() exactly once.
    delete() tolerates files that are already gone.
    """

    def __init__(self, directory: str):
        self.directory = Path(directory)

    def save(self, stream: BinaryIO, suffix: str = "") -> Path:
        """Write a stream to a new uniquely named file and return its path."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / f"{uuid.uuid4().hex}{suffix}"
        try:
            with open(path, "wb") as out:
                while True:
                    chunk = stream.read(64 * 1024)
                    if not chunk:
                        break
                    out.write(chunk)
        except OSError:
            # no half-written files left behind
            self.delete(path)
            raise
        logger.debug("Saved upload %s", path)
        return path

    def read(self, handle: Path) -> bytes:
        with open(handle, "rb") as f:
            return f.read()

    def delete(self, handle: Optional[Path]) -> None:
        if handle is None:
            return
        try:
            os.remove(handle)
            logger.debug("Deleted upload %s", handle)
        except FileNotFoundError:
            pass

    def exists(self, handle: Path) -> bool:
        return Path(handle).exists()
