"""
txn_import/validators package marker.
"""

from txn_import.validators.date_normalizer import DateNormalizer, InvalidDateError, to_iso_instant
from txn_import.validators.row_validator import TransactionRowValidator, parse_amount

__all__ = [
    "DateNormalizer",
    "InvalidDateError",
    "TransactionRowValidator",
    "parse_amount",
    "to_iso_instant",
]
