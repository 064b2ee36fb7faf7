"""
Write a sample import file for one indicator.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from txn_import.domain.transaction_import import FileFormat, TransactionIndicator
from txn_import.services.sample_service import render_sample


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a sample transaction import file.")
    parser.add_argument("--indicator", required=True, help="Investment, Withdrawal, Payout or Closure.")
    parser.add_argument(
        "--format",
        dest="file_format",
        choices=[fmt.value for fmt in FileFormat],
        default=FileFormat.SPREADSHEET.value,
    )
    parser.add_argument("--output", default=None, help="Output path; defaults to the sample file name.")
    args = parser.parse_args()

    try:
        indicator = TransactionIndicator.parse(args.indicator)
    except ValueError as exc:
        parser.error(str(exc))

    sample = render_sample(indicator, FileFormat(args.file_format))
    output = Path(args.output) if args.output else Path(sample.filename)
    output.write_bytes(sample.content)
    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
