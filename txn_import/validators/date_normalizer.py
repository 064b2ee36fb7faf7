"""
txn_import/validators/date_normalizer.py

Resolves the ``date`` column of an import row into a UTC instant.

Operators supply native spreadsheet date cells (serial day counts or, when
openpyxl recognises the cell format, datetimes) as well as hand-typed
strings. Resolution order:

    1. numbers are spreadsheet serials counted from 1899-12-30
    2. strings shaped DD-MM-YYYY are read day first, never guessed
    3. any other string goes to dateutil's free-form parser, with the
       day/month preference taken from configuration

Anything else is rejected with the canonical format hint.
"""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

from dateutil import parser as date_parser

SPREADSHEET_EPOCH = datetime(1899, 12, 30, tzinfo=timezone.utc)
CANONICAL_DATE_PATTERN = re.compile(r"^(\d{2})-(\d{2})-(\d{4})$")
INVALID_DATE_MESSAGE = "Invalid date format. Use DD-MM-YYYY"
# Anchor for fields a free-form string omits: missing day and month become 1.
FALLBACK_DEFAULT = datetime(1970, 1, 1)


class InvalidDateError(ValueError):
    """
    Raised when a date value cannot be resolved to a calendar date.
    """

    def __init__(self, message: str = INVALID_DATE_MESSAGE) -> None:
        super().__init__(message)


class DateNormalizer:
    """
    Three-tier date resolution for import rows.
    """

    def __init__(self, *, fallback_enabled: bool = True, fallback_dayfirst: bool = False) -> None:
        self._fallback_enabled = fallback_enabled
        self._fallback_dayfirst = fallback_dayfirst

    def normalize(self, value: Any) -> datetime:
        """
        Return ``value`` as a timezone-aware UTC datetime.
        """

        if isinstance(value, bool):
            raise InvalidDateError()
        if isinstance(value, datetime):
            return self._as_utc(value)
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
        if isinstance(value, (int, float, Decimal)):
            return self.from_serial(value)
        if isinstance(value, str):
            return self._from_string(value)
        raise InvalidDateError()

    @staticmethod
    def from_serial(serial: int | float | Decimal) -> datetime:
        """
        Convert a spreadsheet serial day count (day 0 = 1899-12-30).
        """

        try:
            return SPREADSHEET_EPOCH + timedelta(days=float(serial))
        except (OverflowError, ValueError) as exc:
            raise InvalidDateError() from exc

    def _from_string(self, value: str) -> datetime:
        candidate = value.strip()
        if not candidate:
            raise InvalidDateError()

        match = CANONICAL_DATE_PATTERN.match(candidate)
        if match:
            day, month, year = (int(part) for part in match.groups())
            try:
                return datetime(year, month, day, tzinfo=timezone.utc)
            except ValueError as exc:
                raise InvalidDateError() from exc

        if not self._fallback_enabled:
            raise InvalidDateError()

        try:
            parsed = date_parser.parse(
                candidate,
                dayfirst=self._fallback_dayfirst,
                default=FALLBACK_DEFAULT,
            )
        except (OverflowError, ValueError) as exc:
            raise InvalidDateError() from exc
        return self._as_utc(parsed)

    @staticmethod
    def _as_utc(value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def to_iso_instant(value: datetime) -> str:
    """
    Serialise an instant as ISO-8601 UTC with millisecond precision.
    """

    utc_value = value.astimezone(timezone.utc)
    return utc_value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_value.microsecond // 1000:03d}Z"
