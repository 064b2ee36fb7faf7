"""
txn_import/ingestion/file_reader.py

Reads uploaded spreadsheet and JSON payloads into loosely-typed rows.
"""

from __future__ import annotations

import io
import json
import logging
import zipfile
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from txn_import.domain.transaction_import import FileFormat, RawRow

logger = logging.getLogger(__name__)

SPREADSHEET_EXTENSIONS = (".xlsx", ".xls")
SPREADSHEET_CONTENT_TYPES = {
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}
STRUCTURED_TEXT_EXTENSIONS = (".json",)
STRUCTURED_TEXT_CONTENT_TYPES = {"application/json", "text/json"}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class FileIngestionError(ValueError):
    """
    Base class for failures that abort an import before validation.
    """


class EmptyFileError(FileIngestionError):
    """
    Raised when a file holds no data rows.
    """


class ParseError(FileIngestionError):
    """
    Raised when file content cannot be parsed.
    """


class FileTypeMismatchError(FileIngestionError):
    """
    Raised when the uploaded file does not match the declared format.
    """


# ---------------------------------------------------------------------------
# Format resolution
# ---------------------------------------------------------------------------


def resolve_file_format(
    *,
    filename: str | None,
    content_type: str | None = None,
    declared: FileFormat | None = None,
) -> FileFormat:
    """
    Check an upload against its declared format, or infer one from the name.
    """

    name = (filename or "").strip().lower()
    media_type = (content_type or "").split(";", 1)[0].strip().lower()

    is_spreadsheet = name.endswith(SPREADSHEET_EXTENSIONS) or media_type in SPREADSHEET_CONTENT_TYPES
    is_structured_text = (
        name.endswith(STRUCTURED_TEXT_EXTENSIONS) or media_type in STRUCTURED_TEXT_CONTENT_TYPES
    )

    if declared is FileFormat.SPREADSHEET:
        if not is_spreadsheet:
            raise FileTypeMismatchError("Please select a valid Excel file (.xls or .xlsx)")
        return declared
    if declared is FileFormat.STRUCTURED_TEXT:
        if not name.endswith(STRUCTURED_TEXT_EXTENSIONS):
            raise FileTypeMismatchError("Please select a valid JSON file (.json)")
        return declared

    if name.endswith(SPREADSHEET_EXTENSIONS):
        return FileFormat.SPREADSHEET
    if name.endswith(STRUCTURED_TEXT_EXTENSIONS):
        return FileFormat.STRUCTURED_TEXT
    if is_spreadsheet:
        return FileFormat.SPREADSHEET
    if is_structured_text:
        return FileFormat.STRUCTURED_TEXT
    raise FileTypeMismatchError("Unsupported file type. Upload an Excel (.xlsx) or JSON (.json) file.")


# ---------------------------------------------------------------------------
# Reader
# ---------------------------------------------------------------------------


class TransactionFileReader:
    """
    Turns raw upload bytes into an ordered list of rows.
    """

    def read_rows(self, *, content: bytes, file_format: FileFormat) -> list[RawRow]:
        """
        Parse ``content`` according to ``file_format``.

        Raises EmptyFileError when there are no data rows and ParseError
        when the content is malformed.
        """

        if file_format is FileFormat.SPREADSHEET:
            rows = self._read_spreadsheet(content)
            if not rows:
                raise EmptyFileError("No data found in the Excel file")
        else:
            rows = self._read_structured_text(content)
            if not rows:
                raise EmptyFileError("No data found in the JSON file")

        logger.info("Read import file format=%s rows=%s", file_format.value, len(rows))
        return rows

    def _read_spreadsheet(self, content: bytes) -> list[RawRow]:
        try:
            workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError, ValueError) as exc:
            raise ParseError("Failed to parse Excel file") from exc

        # Read-only sheets parse their XML lazily; ElementTree and lxml syntax
        # errors both derive from SyntaxError.
        try:
            if not workbook.worksheets:
                return []
            return self._read_first_sheet(workbook.worksheets[0])
        except (SyntaxError, zipfile.BadZipFile, KeyError, OSError, ValueError) as exc:
            raise ParseError("Failed to parse Excel file") from exc
        finally:
            workbook.close()

    def _read_first_sheet(self, sheet: Any) -> list[RawRow]:
        row_iter = sheet.iter_rows(values_only=True)
        header_row = next(row_iter, None)
        if header_row is None:
            return []
        headers = [self._header_name(cell) for cell in header_row]

        rows: list[RawRow] = []
        for values in row_iter:
            row = self._build_row(headers, values)
            if row:
                rows.append(row)
        return rows

    def _read_structured_text(self, content: bytes) -> list[RawRow]:
        try:
            payload = json.loads(content.decode("utf-8-sig"))
        except UnicodeDecodeError as exc:
            raise ParseError("JSON file must be UTF-8 encoded.") from exc
        except json.JSONDecodeError as exc:
            raise ParseError("Failed to parse JSON file. Please ensure it contains valid JSON.") from exc

        if not isinstance(payload, list):
            raise ParseError("JSON file must contain an array of transactions")
        if not all(isinstance(item, dict) for item in payload):
            raise ParseError("Every JSON array entry must be a transaction object")
        return payload

    @staticmethod
    def _header_name(cell: Any) -> str | None:
        if cell is None:
            return None
        name = str(cell).strip()
        return name or None

    @staticmethod
    def _build_row(headers: list[str | None], values: tuple[Any, ...]) -> dict[str, Any]:
        row: dict[str, Any] = {}
        for header, value in zip(headers, values):
            if header is None or value is None:
                continue
            if isinstance(value, str) and value == "":
                continue
            row[header] = value
        return row
