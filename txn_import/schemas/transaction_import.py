"""
txn_import/schemas/transaction_import.py

Response schemas for transaction import endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class RowValidationErrorResponse(BaseModel):
    """
    API response model for one row-level validation error.
    """

    row_number: int = Field(..., ge=1)
    field: str
    message: str


class UploadErrorResponse(BaseModel):
    """
    One submission error; row_number 0 is a whole-batch failure.
    """

    row_number: int
    message: str


class UploadResultResponse(BaseModel):
    success_count: int = Field(..., ge=0)
    errors: list[UploadErrorResponse] = Field(default_factory=list)


class ImportReportResponse(BaseModel):
    """
    API response model for one import attempt.
    """

    indicator: str
    total_rows: int = Field(..., ge=0)
    submitted: bool
    validation_errors: list[RowValidationErrorResponse] = Field(default_factory=list)
    validation_error_count: int = Field(0, ge=0)
    validation_errors_truncated: bool = False
    result: UploadResultResponse | None = None
