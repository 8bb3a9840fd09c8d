"""
Receipt Upload Package

- processor: parse -> reconcile -> store pipeline with progress events
- storage: local receipt file storage
- feedback: user-facing summaries of how a receipt was recorded
"""

from .feedback import build_split_feedback, generate_processing_feedback
from .processor import (
    ProcessedReceipt,
    ReceiptFileUploadError,
    ReceiptLedgerImportError,
    ReceiptParseError,
    ReceiptProcessingError,
    ReceiptUploadError,
    check_upload,
    process_receipt,
)
from .storage import LocalReceiptStorage, create_random_file_name, get_storage, mime_type_to_extension

__all__ = [
    "build_split_feedback",
    "generate_processing_feedback",
    "ProcessedReceipt",
    "ReceiptFileUploadError",
    "ReceiptLedgerImportError",
    "ReceiptParseError",
    "ReceiptProcessingError",
    "ReceiptUploadError",
    "check_upload",
    "process_receipt",
    "LocalReceiptStorage",
    "create_random_file_name",
    "get_storage",
    "mime_type_to_extension",
]
