"""
txn_import/mappers/transaction_mapper.py

Converts validation-clean rows into canonical sync transactions.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Sequence

from txn_import.domain.transaction_import import CanonicalTransaction, RawRow, TransactionIndicator
from txn_import.validators.date_normalizer import DateNormalizer, to_iso_instant
from txn_import.validators.row_validator import parse_amount


def format_amount(amount: Decimal) -> str:
    """
    Render a Decimal as a plain string without exponent or trailing zeros.
    """

    text = format(amount, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


class TransactionMapper:
    """
    Maps clean rows to CanonicalTransaction for one indicator.
    """

    def __init__(self, date_normalizer: DateNormalizer | None = None) -> None:
        self._date_normalizer = date_normalizer or DateNormalizer()

    def map_rows(
        self,
        rows: Sequence[RawRow],
        indicator: TransactionIndicator,
    ) -> list[CanonicalTransaction]:
        return [self.to_transaction(row, indicator) for row in rows]

    def to_transaction(self, row: RawRow, indicator: TransactionIndicator) -> CanonicalTransaction:
        """
        Build the canonical record. ``row`` must already have passed validation.
        """

        amount = parse_amount(row["amount"])
        if amount is None:
            raise ValueError("Row amount must be validated before mapping.")

        transaction_date = self._date_normalizer.normalize(row["date"])
        remark = row.get("remark")

        return CanonicalTransaction(
            client_code=row["client_code"],
            indicator_name=indicator.value,
            amount=format_amount(amount),
            remark="" if remark is None else str(remark),
            transaction_date=to_iso_instant(transaction_date),
        )
