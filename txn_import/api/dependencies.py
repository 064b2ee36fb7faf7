"""
txn_import/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import File, HTTPException, Path, Query, UploadFile, status

from txn_import.domain.transaction_import import FileFormat, TransactionIndicator
from txn_import.ingestion.file_reader import FileTypeMismatchError, resolve_file_format


@dataclass(frozen=True)
class ImportUpload:
    file: UploadFile
    file_format: FileFormat


def get_indicator(
    indicator: str = Path(..., description="Investment, Withdrawal, Payout or Closure"),
) -> TransactionIndicator:
    """
    Resolve the indicator path segment case-insensitively.
    """

    try:
        return TransactionIndicator.parse(indicator)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc


def get_import_upload(
    file: UploadFile = File(...),
    file_format: FileFormat | None = Query(
        default=None,
        description="Declared upload format; inferred from the file name when omitted",
    ),
) -> ImportUpload:
    """
    Validate that the uploaded file matches the declared (or inferred) format.
    """

    try:
        resolved = resolve_file_format(
            filename=file.filename,
            content_type=file.content_type,
            declared=file_format,
        )
    except FileTypeMismatchError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return ImportUpload(file=file, file_format=resolved)
