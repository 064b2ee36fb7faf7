"""
txn_import/services/import_service.py

Service layer for bulk transaction import orchestration.

One import is a single sequential pass:

    1. read     : parse the uploaded bytes into rows
    2. validate : run every field rule on every row
    3. map      : build canonical transactions for the batch indicator
    4. submit   : one POST to the sync endpoint
    5. complete

Validation is fail-closed: any row error returns the full error list and
nothing reaches the network. Transport failures collapse into a single
row-0 error; per-row errors reported by the server are passed through.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Callable, Sequence

from txn_import.config import get_sync_settings, get_transaction_import_settings
from txn_import.connectors.sync_client import SyncRequestError, TransactionSyncClient
from txn_import.domain.transaction_import import (
    CanonicalTransaction,
    FileFormat,
    ImportReport,
    ImportStage,
    RowValidationError,
    TransactionIndicator,
    UploadResult,
)
from txn_import.ingestion.file_reader import TransactionFileReader
from txn_import.mappers.transaction_mapper import TransactionMapper
from txn_import.validators.date_normalizer import DateNormalizer
from txn_import.validators.row_validator import TransactionRowValidator

logger = logging.getLogger(__name__)

StageObserver = Callable[[ImportStage], None]


class TransactionImportService:
    """
    Coordinates file reading, validation, mapping and batch submission.
    """

    def __init__(
        self,
        *,
        sync_client: TransactionSyncClient,
        log_validation_errors: bool = True,
        reader: TransactionFileReader | None = None,
        validator: TransactionRowValidator | None = None,
        mapper: TransactionMapper | None = None,
    ) -> None:
        self._sync_client = sync_client
        self._log_validation_errors = log_validation_errors
        self._reader = reader or TransactionFileReader()
        self._validator = validator or TransactionRowValidator()
        self._mapper = mapper or TransactionMapper()

    def run_import(
        self,
        *,
        content: bytes,
        file_format: FileFormat,
        indicator: TransactionIndicator,
        on_stage: StageObserver | None = None,
    ) -> ImportReport:
        """
        Run the full pipeline for one uploaded file.

        Raises FileIngestionError subclasses when the file cannot be read;
        every other outcome is described by the returned ImportReport.
        """

        self._emit(ImportStage.READ, indicator, on_stage)
        rows = self._reader.read_rows(content=content, file_format=file_format)

        self._emit(ImportStage.VALIDATE, indicator, on_stage)
        validation_errors = self._validator.validate_rows(rows)
        if validation_errors:
            self._log_errors(validation_errors)
            logger.info(
                "Transaction import blocked by validation indicator=%s rows=%s errors=%s",
                indicator.value,
                len(rows),
                len(validation_errors),
            )
            return ImportReport(
                indicator=indicator,
                total_rows=len(rows),
                validation_errors=validation_errors,
            )

        self._emit(ImportStage.MAP, indicator, on_stage)
        transactions = self._mapper.map_rows(rows, indicator)

        self._emit(ImportStage.SUBMIT, indicator, on_stage)
        upload_result = self.submit_batch(transactions)

        self._emit(ImportStage.COMPLETE, indicator, on_stage)
        logger.info(
            "Transaction import complete indicator=%s rows=%s success=%s errors=%s",
            indicator.value,
            len(rows),
            upload_result.success_count,
            len(upload_result.errors),
        )
        return ImportReport(
            indicator=indicator,
            total_rows=len(rows),
            upload_result=upload_result,
        )

    def submit_batch(self, transactions: Sequence[CanonicalTransaction]) -> UploadResult:
        """
        Submit one batch and fold the outcome into an UploadResult.
        """

        if not transactions:
            raise ValueError("Cannot submit an empty transaction batch.")

        try:
            response = self._sync_client.submit(transactions)
        except SyncRequestError as exc:
            logger.error(
                "Transaction batch submission failed transactions=%s error=%s",
                len(transactions),
                exc,
            )
            return UploadResult.whole_batch_failure(str(exc))

        return UploadResult(success_count=response.success, errors=list(response.errors))

    def _emit(
        self,
        stage: ImportStage,
        indicator: TransactionIndicator,
        on_stage: StageObserver | None,
    ) -> None:
        logger.debug("Transaction import stage=%s indicator=%s", stage.value, indicator.value)
        if on_stage is not None:
            on_stage(stage)

    def _log_errors(self, errors: list[RowValidationError]) -> None:
        if not self._log_validation_errors:
            return
        for error in errors:
            logger.warning(
                "Transaction validation error row=%s field=%s message=%s",
                error.row_number,
                error.field,
                error.message,
            )


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_transaction_import_service() -> TransactionImportService:
    """
    Build and cache the import service with env-driven settings.
    """

    settings = get_transaction_import_settings()
    date_normalizer = DateNormalizer(
        fallback_enabled=settings.date_fallback_enabled,
        fallback_dayfirst=settings.date_fallback_dayfirst,
    )
    return TransactionImportService(
        sync_client=TransactionSyncClient(settings=get_sync_settings()),
        log_validation_errors=settings.log_validation_errors,
        validator=TransactionRowValidator(date_normalizer),
        mapper=TransactionMapper(date_normalizer),
    )
