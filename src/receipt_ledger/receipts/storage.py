#!/usr/bin/env python3
"""
Receipt File Storage

Keeps a copy of each uploaded receipt image on the local filesystem, either
under YYYY/MM/DD subdirectories or flat with the date in the file name.
"""

import logging
import secrets
from pathlib import Path

from ..core.config import StorageBackend, StorageConfig
from ..core.dates import FinancialDate

logger = logging.getLogger(__name__)

_EXTENSIONS = {
    "application/pdf": "pdf",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}

SUPPORTED_MIME_TYPES = tuple(_EXTENSIONS)


def mime_type_to_extension(mime_type: str) -> str:
    """
    Map a supported upload MIME type to a file extension.

    Raises:
        ValueError: For any other MIME type
    """
    try:
        return _EXTENSIONS[mime_type.lower()]
    except KeyError:
        raise ValueError(f"Unsupported MIME type: {mime_type}") from None


def create_random_file_name(file_name: str) -> str:
    """
    Insert a random suffix before the extension: "Costco.jpg" -> "Costco-1a2b3c4d5e6f7a8b.jpg".

    Raises:
        ValueError: If the name has no extension
    """
    stem, dot, extension = file_name.rpartition(".")
    if not dot:
        raise ValueError("File name does not contain an extension")
    return f"{stem}-{secrets.token_hex(8)}.{extension}"


class LocalReceiptStorage:
    """Stores receipt files under a local directory."""

    def __init__(self, directory: Path, date_subdirectories: bool = True):
        self.directory = Path(directory)
        self.date_subdirectories = date_subdirectories

    def store(self, merchant: str, transaction_date: FinancialDate, content: bytes, mime_type: str) -> Path:
        """
        Write a receipt file and return where it was stored.

        Args:
            merchant: Merchant name, used in the file name
            transaction_date: Receipt date, used for the directory or file name
            content: File bytes
            mime_type: Upload MIME type, determines the extension

        Returns:
            Path of the written file
        """
        extension = mime_type_to_extension(mime_type)
        day = transaction_date.date
        year, month, dom = f"{day.year}", f"{day.month:02d}", f"{day.day:02d}"

        if self.date_subdirectories:
            target_dir = self.directory / year / month / dom
            file_name = create_random_file_name(f"{merchant}.{extension}")
        else:
            target_dir = self.directory
            file_name = create_random_file_name(f"{year}-{month}-{dom}_{merchant}.{extension}")

        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / file_name
        path.write_bytes(content)
        logger.info("Stored receipt file at %s", path)
        return path


def get_storage(config: StorageConfig) -> LocalReceiptStorage | None:
    """Build the configured storage, or None when file storage is disabled."""
    if config.backend == StorageBackend.LOCAL and config.local_directory:
        return LocalReceiptStorage(config.local_directory, config.date_subdirectories)
    return None
