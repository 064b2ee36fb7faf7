"""
txn_import/domain package marker.
"""

from txn_import.domain.transaction_import import (
    TRANSACTION_FIELDS,
    WHOLE_BATCH_ROW,
    CanonicalTransaction,
    FileFormat,
    ImportReport,
    ImportStage,
    RawRow,
    RowValidationError,
    TransactionIndicator,
    UploadError,
    UploadResult,
)

__all__ = [
    "TRANSACTION_FIELDS",
    "WHOLE_BATCH_ROW",
    "CanonicalTransaction",
    "FileFormat",
    "ImportReport",
    "ImportStage",
    "RawRow",
    "RowValidationError",
    "TransactionIndicator",
    "UploadError",
    "UploadResult",
]
