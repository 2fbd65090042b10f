# ledger/tests/test_records.py

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.test import SimpleTestCase

from ledger.records import (
    CREDIT,
    DEBIT,
    EXPENSE,
    LIABILITY,
    Account,
    Invoice,
    Transaction,
    as_transactions,
    to_date,
    to_decimal,
)
from ledger.services.exceptions import MalformedRecordError


class RecordNormalizationTests(SimpleTestCase):
    """
    GUARANTEES:
    - Blank amounts are zero, malformed amounts raise
    - Account type / normal balance are derived when the chart leaves them out
    - Wrong container shapes are hard errors
    """

    def test_blank_amount_is_zero(self):
        self.assertEqual(to_decimal(None), Decimal("0"))
        self.assertEqual(to_decimal(""), Decimal("0"))
        self.assertEqual(to_decimal("12.50"), Decimal("12.50"))
        self.assertEqual(to_decimal(7), Decimal("7"))

    def test_malformed_amount_raises(self):
        for bad in ("abc", "NaN", "Infinity", True):
            with self.subTest(value=bad):
                with self.assertRaises(MalformedRecordError):
                    to_decimal(bad)

    def test_account_type_from_code_prefix(self):
        acc = Account.from_raw({"account_code": "2100", "account_name": "VAT Payable"})
        self.assertEqual(acc.account_type, LIABILITY)
        self.assertEqual(acc.normal_balance, CREDIT)

        acc = Account.from_raw({"account_code": "7100", "account_name": "Fuel"})
        self.assertEqual(acc.account_type, EXPENSE)
        self.assertEqual(acc.normal_balance, DEBIT)

    def test_account_rejects_unknown_type(self):
        with self.assertRaises(MalformedRecordError):
            Account.from_raw({"account_code": "1000", "account_type": "bogus"})

    def test_account_requires_code(self):
        with self.assertRaises(MalformedRecordError):
            Account.from_raw({"account_name": "No code"})

    def test_journal_entries_must_be_a_list(self):
        with self.assertRaises(MalformedRecordError):
            Transaction.from_raw(
                {"transaction_date": "2026-01-01", "status": "posted", "journal_entries": "oops"}
            )

    def test_transaction_requires_date(self):
        with self.assertRaises(MalformedRecordError):
            Transaction.from_raw({"status": "posted", "journal_entries": []})

    def test_collection_must_be_a_list(self):
        with self.assertRaises(MalformedRecordError):
            as_transactions({"id": "t1"})

    def test_transaction_imbalance(self):
        t = Transaction.from_raw(
            {
                "transaction_date": "2026-01-01",
                "status": "POSTED",
                "journal_entries": [
                    {"account_code": "1000", "debit_amount": "100"},
                    {"account_code": "4000", "credit_amount": "90"},
                ],
            }
        )
        self.assertTrue(t.is_posted)
        self.assertEqual(t.imbalance(), Decimal("10"))

    def test_aware_datetime_reduces_to_local_date(self):
        # 22:30 UTC is 01:30 next day in Nairobi (UTC+3)
        self.assertEqual(to_date("2026-01-31T22:30:00Z"), date(2026, 2, 1))
        self.assertEqual(to_date("2026-01-31"), date(2026, 1, 31))

    def test_invalid_date_raises(self):
        with self.assertRaises(MalformedRecordError):
            to_date("31/01/2026")

    def test_impossible_calendar_date_raises(self):
        for value in ("2024-02-30", "2024-02-30T10:00:00", "2026-13-01T00:00:00Z"):
            with self.subTest(value=value):
                with self.assertRaises(MalformedRecordError):
                    to_date(value, field_name="transaction_date")


class InvoiceOutstandingTests(SimpleTestCase):
    def test_base_currency_total_wins(self):
        inv = Invoice.from_raw(
            {"total_amount": "100", "currency": "USD", "exchange_rate": "130", "base_currency_total": "12900"}
        )
        self.assertEqual(inv.base_total("KES"), Decimal("12900"))

    def test_foreign_invoice_uses_exchange_rate(self):
        inv = Invoice.from_raw({"total_amount": "100", "currency": "usd", "exchange_rate": "130"})
        self.assertEqual(inv.base_total("KES"), Decimal("13000"))

    def test_outstanding_is_floored_at_zero(self):
        inv = Invoice.from_raw(
            {
                "total_amount": "1000",
                "currency": "KES",
                "payments_received": [{"amount": "700"}, {"amount": "1", "base_currency_amount": "500"}],
            }
        )
        self.assertEqual(inv.payments_total(), Decimal("1200"))
        self.assertEqual(inv.outstanding("KES"), Decimal("0"))
