"""
txn_import/services package marker.
"""

from txn_import.services.import_service import (
    StageObserver,
    TransactionImportService,
    get_transaction_import_service,
)
from txn_import.services.sample_service import SampleFile, build_sample_rows, render_sample

__all__ = [
    "SampleFile",
    "StageObserver",
    "TransactionImportService",
    "build_sample_rows",
    "get_transaction_import_service",
    "render_sample",
]
