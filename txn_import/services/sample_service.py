"""
txn_import/services/sample_service.py

Downloadable sample files showing operators the expected upload layout.
"""

from __future__ import annotations

import io
import json
from dataclasses import dataclass
from typing import Any

from openpyxl import Workbook

from txn_import.domain.transaction_import import TRANSACTION_FIELDS, FileFormat, TransactionIndicator

SPREADSHEET_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
JSON_MEDIA_TYPE = "application/json"

_SAMPLE_ROWS: dict[TransactionIndicator, tuple[dict[str, Any], ...]] = {
    TransactionIndicator.INVESTMENT: (
        {"client_code": "CL001", "date": "15-01-2024", "amount": 50000, "remark": "Initial investment"},
        {"client_code": "CL001", "date": "16-01-2024", "amount": 75000, "remark": "Additional investment"},
        {"client_code": "CL001", "date": "17-01-2024", "amount": 100000, "remark": ""},
    ),
    TransactionIndicator.WITHDRAWAL: (
        {"client_code": "CL001", "date": "15-01-2024", "amount": 25000, "remark": "Partial withdrawal"},
        {"client_code": "CL002", "date": "16-01-2024", "amount": 10000, "remark": "Emergency withdrawal"},
        {"client_code": "CL003", "date": "17-01-2024", "amount": 5000, "remark": ""},
    ),
    TransactionIndicator.PAYOUT: (
        {"client_code": "CL001", "date": "15-01-2024", "amount": 1500, "remark": "Monthly payout"},
        {"client_code": "CL002", "date": "15-01-2024", "amount": 2250.5, "remark": "Quarterly payout"},
        {"client_code": "CL003", "date": "16-01-2024", "amount": 980, "remark": ""},
    ),
    TransactionIndicator.CLOSURE: (
        {"client_code": "CLI001", "date": "15-01-2024", "amount": 125000, "remark": "Account closure - maturity"},
        {"client_code": "CLI002", "date": "16-01-2024", "amount": 85000, "remark": "Early closure"},
        {"client_code": "CLI003", "date": "17-01-2024", "amount": 200000, "remark": ""},
    ),
}


@dataclass(frozen=True)
class SampleFile:
    filename: str
    media_type: str
    content: bytes


def build_sample_rows(indicator: TransactionIndicator) -> list[dict[str, Any]]:
    """
    Return fresh copies of the example rows for one indicator.
    """

    return [dict(row) for row in _SAMPLE_ROWS[indicator]]


def render_sample(indicator: TransactionIndicator, file_format: FileFormat) -> SampleFile:
    """
    Render the example rows as a workbook or a JSON document.
    """

    rows = build_sample_rows(indicator)
    stem = f"{indicator.value.lower()}_sample"

    if file_format is FileFormat.STRUCTURED_TEXT:
        return SampleFile(
            filename=f"{stem}.json",
            media_type=JSON_MEDIA_TYPE,
            content=json.dumps(rows, indent=2).encode("utf-8"),
        )

    workbook = Workbook()
    sheet = workbook.active
    sheet.title = f"{indicator.value} Sample"
    sheet.append(list(TRANSACTION_FIELDS))
    for row in rows:
        sheet.append([row.get(column) for column in TRANSACTION_FIELDS])

    buffer = io.BytesIO()
    workbook.save(buffer)
    return SampleFile(filename=f"{stem}.xlsx", media_type=SPREADSHEET_MEDIA_TYPE, content=buffer.getvalue())
