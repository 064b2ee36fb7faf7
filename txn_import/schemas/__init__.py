"""
txn_import/schemas package marker.
"""

from txn_import.schemas.transaction_import import (
    ImportReportResponse,
    RowValidationErrorResponse,
    UploadErrorResponse,
    UploadResultResponse,
)

__all__ = [
    "ImportReportResponse",
    "RowValidationErrorResponse",
    "UploadErrorResponse",
    "UploadResultResponse",
]
