"""
txn_import/ingestion package marker.
"""

from txn_import.ingestion.file_reader import (
    EmptyFileError,
    FileIngestionError,
    FileTypeMismatchError,
    ParseError,
    TransactionFileReader,
    resolve_file_format,
)

__all__ = [
    "EmptyFileError",
    "FileIngestionError",
    "FileTypeMismatchError",
    "ParseError",
    "TransactionFileReader",
    "resolve_file_format",
]
