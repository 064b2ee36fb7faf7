"""
txn_import/connectors/sync_client.py

HTTP client for the backend transaction sync endpoint.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

import requests

from txn_import.config import SyncSettings
from txn_import.domain.transaction_import import WHOLE_BATCH_ROW, CanonicalTransaction, UploadError

logger = logging.getLogger(__name__)

SYNC_PATH = "/transactions/sync"
MAX_ERROR_BODY_CHARS = 500


class SyncRequestError(RuntimeError):
    """
    Raised when the sync request fails at the transport level or returns
    an unusable response.
    """


@dataclass(frozen=True)
class SyncResponse:
    """
    Server-side accounting for one submitted batch.
    """

    success: int
    errors: list[UploadError] = field(default_factory=list)


class TransactionSyncClient:
    """
    Posts canonical transactions to ``POST {base_url}/transactions/sync``.

    One call is one request: there is no retry and no rate limiting.
    """

    def __init__(
        self,
        *,
        settings: SyncSettings,
        session: requests.Session | None = None,
    ) -> None:
        self._url = settings.base_url.rstrip("/") + SYNC_PATH
        self._api_token = settings.api_token
        self._timeout_seconds = settings.timeout_seconds
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return self._url

    def submit(self, transactions: Sequence[CanonicalTransaction]) -> SyncResponse:
        """
        Submit one batch and return the server's per-row accounting.
        """

        if not self._api_token:
            raise SyncRequestError("Failed to upload transactions: TXN_SYNC_API_TOKEN is not set.")

        body = {"transactions": [transaction.to_payload() for transaction in transactions]}
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._api_token}",
        }

        try:
            response = self._session.post(
                self._url,
                json=body,
                headers=headers,
                timeout=self._timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.error("Transaction sync request failed url=%s error=%s", self._url, exc)
            raise SyncRequestError(f"Failed to upload transactions: {exc}") from exc

        if not response.ok:
            detail = (response.text or "").strip()[:MAX_ERROR_BODY_CHARS]
            logger.error(
                "Transaction sync rejected url=%s status=%s body=%r",
                self._url,
                response.status_code,
                detail,
            )
            raise SyncRequestError(f"Failed to upload transactions: {response.status_code} - {detail}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise SyncRequestError("Transaction sync response was not valid JSON.") from exc

        return self._parse_results(payload)

    @staticmethod
    def _parse_results(payload: Any) -> SyncResponse:
        results = payload.get("results") if isinstance(payload, dict) else None
        if not isinstance(results, dict):
            raise SyncRequestError("Transaction sync response is missing 'results'.")

        success = results.get("success") or 0
        if isinstance(success, bool) or not isinstance(success, int):
            raise SyncRequestError("Transaction sync response has a non-integer success count.")

        raw_errors = results.get("errors")
        if raw_errors is None:
            raw_errors = []
        elif not isinstance(raw_errors, list):
            raise SyncRequestError("Transaction sync response has malformed errors.")

        errors: list[UploadError] = []
        for entry in raw_errors:
            if not isinstance(entry, dict):
                errors.append(UploadError(row_number=WHOLE_BATCH_ROW, message=str(entry)))
                continue
            row = entry.get("row")
            message = entry.get("message", entry.get("error"))
            errors.append(
                UploadError(
                    row_number=row if isinstance(row, int) and not isinstance(row, bool) else WHOLE_BATCH_ROW,
                    message="" if message is None else str(message),
                )
            )
        return SyncResponse(success=success, errors=errors)
