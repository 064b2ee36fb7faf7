"""
txn_import/api/routers/transaction_import.py

Bulk transaction import HTTP endpoints.

POST /imports/{indicator}          upload a spreadsheet or JSON file
GET  /imports/{indicator}/sample   download an example file
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from txn_import.api.dependencies import ImportUpload, get_import_upload, get_indicator
from txn_import.config import TransactionImportSettings, get_transaction_import_settings
from txn_import.domain.transaction_import import FileFormat, ImportReport, TransactionIndicator
from txn_import.ingestion.file_reader import FileIngestionError
from txn_import.schemas.transaction_import import (
    ImportReportResponse,
    RowValidationErrorResponse,
    UploadErrorResponse,
    UploadResultResponse,
)
from txn_import.services.import_service import TransactionImportService, get_transaction_import_service
from txn_import.services.sample_service import render_sample

router = APIRouter(tags=["imports"])


@router.post("/imports/{indicator}", response_model=ImportReportResponse)
async def upload_transactions(
    indicator: TransactionIndicator = Depends(get_indicator),
    upload: ImportUpload = Depends(get_import_upload),
    import_service: TransactionImportService = Depends(get_transaction_import_service),
    settings: TransactionImportSettings = Depends(get_transaction_import_settings),
) -> ImportReportResponse:
    """
    Import one file of transactions for a single indicator.
    """

    try:
        content = await upload.file.read()
        report = await run_in_threadpool(
            import_service.run_import,
            content=content,
            file_format=upload.file_format,
            indicator=indicator,
        )
    except FileIngestionError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    finally:
        await upload.file.close()

    return _to_response(report, max_validation_errors=settings.max_reported_validation_errors)


@router.get("/imports/{indicator}/sample")
def download_sample(
    indicator: TransactionIndicator = Depends(get_indicator),
    file_format: FileFormat = Query(default=FileFormat.SPREADSHEET),
) -> Response:
    """
    Download example rows in the expected upload layout.
    """

    sample = render_sample(indicator, file_format)
    return Response(
        content=sample.content,
        media_type=sample.media_type,
        headers={"Content-Disposition": f'attachment; filename="{sample.filename}"'},
    )


def _to_response(report: ImportReport, *, max_validation_errors: int) -> ImportReportResponse:
    visible_errors = report.validation_errors[:max_validation_errors]
    result = None
    if report.upload_result is not None:
        result = UploadResultResponse(
            success_count=report.upload_result.success_count,
            errors=[
                UploadErrorResponse(row_number=error.row_number, message=error.message)
                for error in report.upload_result.errors
            ],
        )

    return ImportReportResponse(
        indicator=report.indicator.value,
        total_rows=report.total_rows,
        submitted=report.submitted,
        validation_errors=[
            RowValidationErrorResponse(
                row_number=error.row_number,
                field=error.field,
                message=error.message,
            )
            for error in visible_errors
        ],
        validation_error_count=len(report.validation_errors),
        validation_errors_truncated=len(report.validation_errors) > len(visible_errors),
        result=result,
    )
