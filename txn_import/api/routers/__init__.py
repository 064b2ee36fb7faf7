"""
txn_import/api/routers package marker.
"""

from txn_import.api.routers.transaction_import import router as transaction_import_router

__all__ = [
    "transaction_import_router",
]
