"""
txn_import/validators/row_validator.py

Row-level validation for bulk transaction imports.

Every field rule runs on every row; a row may carry several errors.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Sequence

from txn_import.domain.transaction_import import RawRow, RowValidationError
from txn_import.validators.date_normalizer import DateNormalizer, InvalidDateError

CLIENT_CODE_MAX_LENGTH = 50
CLIENT_CODE_PATTERN = re.compile(r"^[a-zA-Z0-9]+$")
REMARK_MAX_LENGTH = 500
AMOUNT_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$", re.ASCII)
MAX_AMOUNT = Decimal("999999999.99")

# Display numbering: header occupies row 1, first data row is row 2.
FIRST_DATA_ROW_NUMBER = 2


def parse_amount(value: Any) -> Decimal | None:
    """
    Parse an amount cell into a finite Decimal, or None when not numeric.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, int):
        parsed = Decimal(value)
    elif isinstance(value, float):
        parsed = Decimal(str(value))
    elif isinstance(value, str):
        candidate = value.strip()
        if not AMOUNT_PATTERN.match(candidate):
            return None
        try:
            parsed = Decimal(candidate)
        except InvalidOperation:
            return None
    else:
        return None

    if not parsed.is_finite():
        return None
    return parsed


class TransactionRowValidator:
    """
    Validates raw import rows against the transaction field rules.
    """

    def __init__(self, date_normalizer: DateNormalizer | None = None) -> None:
        self._date_normalizer = date_normalizer or DateNormalizer()

    def validate_rows(self, rows: Sequence[RawRow]) -> list[RowValidationError]:
        """
        Validate every row and return all errors in row order.
        """

        errors: list[RowValidationError] = []
        for index, row in enumerate(rows):
            errors.extend(self.validate_row(row, row_number=index + FIRST_DATA_ROW_NUMBER))
        return errors

    def validate_row(self, row: RawRow, row_number: int) -> list[RowValidationError]:
        """
        Validate one row; an empty list means the row is clean.
        """

        errors: list[RowValidationError] = []
        self._validate_client_code(value=row.get("client_code"), row_number=row_number, errors=errors)
        self._validate_date(value=row.get("date"), row_number=row_number, errors=errors)
        self._validate_amount(value=row.get("amount"), row_number=row_number, errors=errors)
        self._validate_remark(value=row.get("remark"), row_number=row_number, errors=errors)
        return errors

    def _validate_client_code(
        self,
        *,
        value: Any,
        row_number: int,
        errors: list[RowValidationError],
    ) -> None:
        if not isinstance(value, str) or value == "":
            errors.append(RowValidationError(row_number, "client_code", "Client code is required"))
        elif len(value) > CLIENT_CODE_MAX_LENGTH:
            errors.append(
                RowValidationError(
                    row_number,
                    "client_code",
                    f"Client code must be {CLIENT_CODE_MAX_LENGTH} characters or less",
                )
            )
        elif not CLIENT_CODE_PATTERN.match(value):
            errors.append(RowValidationError(row_number, "client_code", "Client code must be alphanumeric"))

    def _validate_date(
        self,
        *,
        value: Any,
        row_number: int,
        errors: list[RowValidationError],
    ) -> None:
        if self._is_missing(value) or (isinstance(value, (int, float)) and value == 0):
            errors.append(RowValidationError(row_number, "date", "Date is required"))
            return

        try:
            self._date_normalizer.normalize(value)
        except InvalidDateError as exc:
            errors.append(RowValidationError(row_number, "date", str(exc)))

    def _validate_amount(
        self,
        *,
        value: Any,
        row_number: int,
        errors: list[RowValidationError],
    ) -> None:
        if self._is_missing(value):
            errors.append(RowValidationError(row_number, "amount", "Amount is required"))
            return

        amount = parse_amount(value)
        if amount is None:
            errors.append(RowValidationError(row_number, "amount", "Amount must be numeric"))
        elif amount <= 0:
            errors.append(RowValidationError(row_number, "amount", "Amount must be positive"))
        elif amount > MAX_AMOUNT:
            errors.append(
                RowValidationError(
                    row_number,
                    "amount",
                    f"Amount exceeds maximum limit ({MAX_AMOUNT})",
                )
            )

    def _validate_remark(
        self,
        *,
        value: Any,
        row_number: int,
        errors: list[RowValidationError],
    ) -> None:
        if isinstance(value, str) and len(value) > REMARK_MAX_LENGTH:
            errors.append(
                RowValidationError(
                    row_number,
                    "remark",
                    f"Remark must be {REMARK_MAX_LENGTH} characters or less",
                )
            )

    @staticmethod
    def _is_missing(value: Any) -> bool:
        if value is None:
            return True
        return isinstance(value, str) and value.strip() == ""
