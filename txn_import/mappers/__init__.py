"""
txn_import/mappers package marker.
"""

from txn_import.mappers.transaction_mapper import TransactionMapper, format_amount

__all__ = [
    "TransactionMapper",
    "format_amount",
]
