"""
txn_import/domain/transaction_import.py

Domain models used by the bulk transaction import flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

RawRow = Mapping[str, Any]

TRANSACTION_FIELDS: tuple[str, ...] = ("client_code", "date", "amount", "remark")


class TransactionIndicator(str, Enum):
    """
    Transaction category assigned to a whole import batch.
    """

    INVESTMENT = "Investment"
    WITHDRAWAL = "Withdrawal"
    PAYOUT = "Payout"
    CLOSURE = "Closure"

    @classmethod
    def parse(cls, value: str) -> TransactionIndicator:
        """
        Resolve an indicator name case-insensitively.
        """

        normalized = value.strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        allowed = ", ".join(member.value for member in cls)
        raise ValueError(f"Unknown indicator '{value}'. Allowed values: {allowed}.")


class FileFormat(str, Enum):
    SPREADSHEET = "spreadsheet"
    STRUCTURED_TEXT = "structured-text"


class ImportStage(str, Enum):
    """
    Discrete pipeline progress markers, in emission order.
    """

    READ = "read"
    VALIDATE = "validate"
    MAP = "map"
    SUBMIT = "submit"
    COMPLETE = "complete"


@dataclass(frozen=True)
class RowValidationError:
    """
    One row validation error detail.

    ``row_number`` is the operator-facing spreadsheet row: the first data
    row below the header is row 2.
    """

    row_number: int
    field: str
    message: str


@dataclass(frozen=True)
class CanonicalTransaction:
    """
    Transaction record in the shape accepted by the sync endpoint.
    """

    client_code: str
    indicator_name: str
    amount: str
    remark: str
    transaction_date: str

    def to_payload(self) -> dict[str, str]:
        return {
            "clientCode": self.client_code,
            "indicatorName": self.indicator_name,
            "amount": self.amount,
            "remark": self.remark,
            "transactionDate": self.transaction_date,
        }


@dataclass(frozen=True)
class UploadError:
    """
    One submission error. Row 0 marks a whole-batch failure.
    """

    row_number: int
    message: str


WHOLE_BATCH_ROW = 0


@dataclass(frozen=True)
class UploadResult:
    """
    Outcome of one batch submission.
    """

    success_count: int
    errors: list[UploadError] = field(default_factory=list)

    @classmethod
    def whole_batch_failure(cls, message: str) -> UploadResult:
        return cls(
            success_count=0,
            errors=[UploadError(row_number=WHOLE_BATCH_ROW, message=message)],
        )


@dataclass(frozen=True)
class ImportReport:
    """
    End-of-run import report.

    ``upload_result`` is None when validation blocked submission.
    """

    indicator: TransactionIndicator
    total_rows: int
    validation_errors: list[RowValidationError] = field(default_factory=list)
    upload_result: UploadResult | None = None

    @property
    def submitted(self) -> bool:
        return self.upload_result is not None
