"""
txn_import/connectors package marker.
"""

from txn_import.connectors.sync_client import SyncRequestError, SyncResponse, TransactionSyncClient

__all__ = [
    "SyncRequestError",
    "SyncResponse",
    "TransactionSyncClient",
]
