from __future__ import annotations

import unittest
from decimal import Decimal

from txn_import.domain.transaction_import import CanonicalTransaction, TransactionIndicator
from txn_import.mappers.transaction_mapper import TransactionMapper, format_amount


class TestTransactionMapper(unittest.TestCase):
    def setUp(self) -> None:
        self.mapper = TransactionMapper()

    def test_maps_clean_row_to_canonical_transaction(self) -> None:
        transaction = self.mapper.to_transaction(
            {"client_code": "CL001", "date": "15-01-2024", "amount": 50000, "remark": "Initial investment"},
            TransactionIndicator.INVESTMENT,
        )

        self.assertEqual(
            transaction,
            CanonicalTransaction(
                client_code="CL001",
                indicator_name="Investment",
                amount="50000",
                remark="Initial investment",
                transaction_date="2024-01-15T00:00:00.000Z",
            ),
        )

    def test_serial_date_is_serialised_as_iso_instant(self) -> None:
        transaction = self.mapper.to_transaction(
            {"client_code": "CL001", "date": 45000, "amount": 10},
            TransactionIndicator.PAYOUT,
        )

        self.assertEqual(transaction.transaction_date, "2023-03-15T00:00:00.000Z")
        self.assertEqual(transaction.indicator_name, "Payout")

    def test_amount_is_reserialised_as_decimal_string(self) -> None:
        cases = {
            "1250.50": "1250.5",
            " 100.00 ": "100",
            999999999.99: "999999999.99",
            0.1: "0.1",
            75000: "75000",
        }
        for raw, expected in cases.items():
            with self.subTest(raw=raw):
                transaction = self.mapper.to_transaction(
                    {"client_code": "CL001", "date": "15-01-2024", "amount": raw},
                    TransactionIndicator.WITHDRAWAL,
                )
                self.assertEqual(transaction.amount, expected)

    def test_missing_remark_becomes_empty_string(self) -> None:
        transaction = self.mapper.to_transaction(
            {"client_code": "CL001", "date": "15-01-2024", "amount": 1},
            TransactionIndicator.CLOSURE,
        )
        self.assertEqual(transaction.remark, "")

    def test_non_string_remark_is_stringified(self) -> None:
        transaction = self.mapper.to_transaction(
            {"client_code": "CL001", "date": "15-01-2024", "amount": 1, "remark": 42},
            TransactionIndicator.CLOSURE,
        )
        self.assertEqual(transaction.remark, "42")

    def test_map_rows_keeps_order_and_cardinality(self) -> None:
        rows = [
            {"client_code": f"CL00{index}", "date": "15-01-2024", "amount": index}
            for index in range(1, 4)
        ]

        transactions = self.mapper.map_rows(rows, TransactionIndicator.INVESTMENT)

        self.assertEqual([txn.client_code for txn in transactions], ["CL001", "CL002", "CL003"])
        self.assertTrue(all(txn.indicator_name == "Investment" for txn in transactions))

    def test_payload_uses_wire_field_names(self) -> None:
        transaction = CanonicalTransaction(
            client_code="CL001",
            indicator_name="Investment",
            amount="10",
            remark="",
            transaction_date="2024-01-15T00:00:00.000Z",
        )

        self.assertEqual(
            transaction.to_payload(),
            {
                "clientCode": "CL001",
                "indicatorName": "Investment",
                "amount": "10",
                "remark": "",
                "transactionDate": "2024-01-15T00:00:00.000Z",
            },
        )

    def test_transaction_is_immutable(self) -> None:
        transaction = self.mapper.to_transaction(
            {"client_code": "CL001", "date": "15-01-2024", "amount": 1},
            TransactionIndicator.INVESTMENT,
        )
        with self.assertRaises(AttributeError):
            transaction.amount = "2"  # type: ignore[misc]


class TestFormatAmount(unittest.TestCase):
    def test_exponent_form_is_expanded(self) -> None:
        self.assertEqual(format_amount(Decimal("1E+3")), "1000")

    def test_integer_value_is_unchanged(self) -> None:
        self.assertEqual(format_amount(Decimal("500")), "500")


if __name__ == "__main__":
    unittest.main()
