"""
Run one bulk transaction import from CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path

from txn_import.config import get_sync_settings
from txn_import.domain.transaction_import import FileFormat, ImportStage, TransactionIndicator
from txn_import.ingestion.file_reader import FileIngestionError, resolve_file_format
from txn_import.services.import_service import get_transaction_import_service


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate and submit a transaction import file.")
    parser.add_argument("path", help="Path to an .xlsx or .json file.")
    parser.add_argument(
        "--indicator",
        required=True,
        help="Investment, Withdrawal, Payout or Closure.",
    )
    parser.add_argument(
        "--format",
        dest="file_format",
        choices=[fmt.value for fmt in FileFormat],
        default=None,
        help="Declared file format; inferred from the extension when omitted.",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").strip().upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    try:
        indicator = TransactionIndicator.parse(args.indicator)
    except ValueError as exc:
        parser.error(str(exc))

    if not get_sync_settings().api_token:
        message = "TXN_SYNC_API_TOKEN is not set. The sync endpoint requires a bearer credential."
        print(json.dumps({"error": message}, indent=2))
        return 2

    path = Path(args.path)
    declared = FileFormat(args.file_format) if args.file_format else None

    def _print_stage(stage: ImportStage) -> None:
        print(f"[{stage.value}]", file=sys.stderr)

    try:
        file_format = resolve_file_format(filename=path.name, declared=declared)
        report = get_transaction_import_service().run_import(
            content=path.read_bytes(),
            file_format=file_format,
            indicator=indicator,
            on_stage=_print_stage,
        )
    except FileIngestionError as exc:
        print(json.dumps({"error": str(exc)}, indent=2))
        return 2

    payload = {
        "indicator": report.indicator.value,
        "total_rows": report.total_rows,
        "submitted": report.submitted,
        "validation_errors": [
            {"row": error.row_number, "field": error.field, "message": error.message}
            for error in report.validation_errors
        ],
        "result": None,
    }
    if report.upload_result is not None:
        payload["result"] = {
            "success": report.upload_result.success_count,
            "errors": [
                {"row": error.row_number, "message": error.message}
                for error in report.upload_result.errors
            ],
        }
    print(json.dumps(payload, indent=2))

    succeeded = report.submitted and not report.upload_result.errors
    return 0 if succeeded else 1


if __name__ == "__main__":
    raise SystemExit(main())
