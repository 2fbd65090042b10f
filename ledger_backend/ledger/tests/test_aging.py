# ledger/tests/test_aging.py

from __future__ import annotations

from datetime import date, timedelta

from django.test import SimpleTestCase, override_settings

from ledger.services import diagnostics as diag
from ledger.services.aging_service import (
    BUCKETS,
    bucket_for_days,
    calculate_outstanding_receivables,
    get_aged_payables,
    get_aged_receivables,
    get_outstanding_by_customer,
)
from ledger.services.diagnostics import Diagnostics
from ledger.tests.fixtures import CUSTOMERS, EXPENSES

TODAY = date(2026, 3, 1)


def _invoice(inv_id, amount, due_days_ago=None, *, customer="c1", status="sent", **extra):
    due = None if due_days_ago is None else (TODAY - timedelta(days=due_days_ago)).isoformat()
    return {
        "id": inv_id,
        "invoice_number": inv_id.upper(),
        "customer_id": customer,
        "total_amount": str(amount),
        "status": status,
        "currency": "KES",
        "due_date": due,
        **extra,
    }


def _bucket_sum(row: dict) -> int:
    return sum(row[f"{b}_minor"] for b in BUCKETS)


def _assert_rows_add_up(case, rows, totals) -> None:
    for bucket in (*BUCKETS, "total_balance"):
        with case.subTest(bucket=bucket):
            case.assertEqual(
                sum(row[f"{bucket}_minor"] for row in rows), totals[f"{bucket}_minor"]
            )


class BucketBoundaryTests(SimpleTestCase):
    def test_boundaries(self):
        cases = {0: "current", 30: "current", 31: "days_31_to_60", 60: "days_31_to_60",
                 61: "days_61_to_90", 90: "days_61_to_90", 91: "over_90", 400: "over_90"}
        for days, bucket in cases.items():
            with self.subTest(days=days):
                self.assertEqual(bucket_for_days(days), bucket)


class AgedReceivablesTests(SimpleTestCase):
    """
    GUARANTEES:
    - Aged by days past due_date (not invoice date)
    - paid / cancelled / written_off invoices never appear
    - Buckets partition each customer's total exactly, and the grand total
    """

    def test_invoice_45_days_past_due(self):
        result = get_aged_receivables([_invoice("inv-1", 11600, 45)], CUSTOMERS, today=TODAY)

        [customer] = result["customers"]
        self.assertEqual(customer["customer_name"], "Acme Traders")
        self.assertEqual(customer["days_31_to_60"], 11600.0)
        self.assertEqual(customer["current"], 0.0)
        self.assertEqual(customer["total_balance"], 11600.0)

        [invoice] = customer["invoices"]
        self.assertEqual(invoice["balance_due"], 11600.0)
        self.assertEqual(invoice["days_past_due"], 45)
        self.assertEqual(invoice["bucket"], "days_31_to_60")

    def test_closed_invoices_excluded(self):
        invoices = [
            _invoice("a", 100, 10, status="paid"),
            _invoice("b", 100, 10, status="cancelled"),
            _invoice("c", 100, 10, status="written_off"),
        ]
        result = get_aged_receivables(invoices, CUSTOMERS, today=TODAY)
        self.assertEqual(result["customers"], [])
        self.assertEqual(result["totals"]["total_balance"], 0.0)

    def test_fully_paid_open_invoice_excluded(self):
        inv = _invoice("a", 500, 10, payments_received=[{"amount": "500"}])
        result = get_aged_receivables([inv], CUSTOMERS, today=TODAY)
        self.assertEqual(result["customers"], [])

    def test_not_yet_due_is_current(self):
        result = get_aged_receivables([_invoice("a", 900, -10)], CUSTOMERS, today=TODAY)
        invoice = result["customers"][0]["invoices"][0]
        self.assertEqual(invoice["days_past_due"], 0)
        self.assertEqual(invoice["bucket"], "current")

    def test_missing_due_date_is_current_with_diagnostic(self):
        diagnostics = Diagnostics()
        result = get_aged_receivables(
            [_invoice("a", 250)], CUSTOMERS, today=TODAY, diagnostics=diagnostics
        )

        self.assertEqual(result["totals"]["current"], 250.0)
        self.assertEqual(diagnostics.codes(), [diag.MISSING_DUE_DATE])
        self.assertEqual(result["diagnostics"][0]["code"], diag.MISSING_DUE_DATE)

    def test_buckets_partition_exactly(self):
        invoices = [
            _invoice("a", "100.40", 5),
            _invoice("b", "100.40", 10),
            _invoice("c", "50.30", 40),
            _invoice("d", "0.45", 75),
            _invoice("e", "333.33", 120, customer="c2"),
            _invoice("f", "0.50", 95, customer="c2"),
            _invoice("g", "10.50", 2, customer="c3", client_name="Walk-in Client"),
        ]
        result = get_aged_receivables(invoices, CUSTOMERS, today=TODAY)

        for row in result["customers"]:
            with self.subTest(customer=row["customer_id"]):
                self.assertEqual(_bucket_sum(row), row["total_balance_minor"])

        totals = result["totals"]
        self.assertEqual(_bucket_sum(totals), totals["total_balance_minor"])
        _assert_rows_add_up(self, result["customers"], totals)

        # whole units per bucket: 200.80 -> 201, 50.30 -> 50, 0.45 -> 0
        acme = next(r for r in result["customers"] if r["customer_id"] == "c1")
        self.assertEqual(
            (acme["current"], acme["days_31_to_60"], acme["days_61_to_90"], acme["total_balance"]),
            (201.0, 50.0, 0.0, 251.0),
        )

    def test_customer_rows_add_up_to_grand_totals(self):
        invoices = [
            _invoice("a", "0.50", 4),
            _invoice("b", "0.50", 4, customer="c2"),
            _invoice("c", "0.50", 4, customer="c3", client_name="Walk-in Client"),
            _invoice("d", "10.40", 45, customer="c3", client_name="Walk-in Client"),
            _invoice("e", "10.40", 45, customer="c2"),
        ]
        result = get_aged_receivables(invoices, CUSTOMERS, today=TODAY)

        _assert_rows_add_up(self, result["customers"], result["totals"])
        # each 0.50 rounds up per customer: 1 + 1 + 1
        self.assertEqual(result["totals"]["current"], 3.0)
        self.assertEqual(result["totals"]["days_31_to_60"], 20.0)
        self.assertEqual(result["totals"]["total_balance"], 23.0)

    def test_customer_name_fallbacks_and_order(self):
        invoices = [
            _invoice("a", 100, 1),
            _invoice("b", 5000, 1, customer="c2"),
            _invoice("c", 300, 1, customer="zz", client_name="Walk-in Client"),
            _invoice("d", 200, 1, customer="yy"),
        ]
        result = get_aged_receivables(invoices, CUSTOMERS, today=TODAY)

        self.assertEqual(
            [r["customer_name"] for r in result["customers"]],
            ["Baraka Stores", "Walk-in Client", "Unknown Customer", "Acme Traders"],
        )

    def test_foreign_currency_converted(self):
        inv = _invoice("usd", 100, 1, currency="USD", exchange_rate="130")
        result = get_aged_receivables([inv], CUSTOMERS, today=TODAY)
        self.assertEqual(result["totals"]["total_balance"], 13000.0)

    @override_settings(LEDGER={"BASE_CURRENCY": "USD"})
    def test_base_currency_is_configurable(self):
        inv = _invoice("usd", 100, 1, currency="USD", exchange_rate="130")
        result = get_aged_receivables([inv], CUSTOMERS, today=TODAY)
        self.assertEqual(result["base_currency"], "USD")
        self.assertEqual(result["totals"]["total_balance"], 100.0)


class OutstandingReceivablesTests(SimpleTestCase):
    def test_outstanding_total(self):
        invoices = [
            _invoice("a", 1000, 1, payments_received=[{"amount": "400"}]),
            _invoice("b", 700, 1, status="paid"),
            _invoice("c", "99.6", 1, customer="c2"),
        ]
        result = calculate_outstanding_receivables(invoices)
        self.assertEqual(result["outstanding_amount"], 700.0)
        self.assertEqual(result["calculation_method"], "invoice-based")

    def test_by_customer(self):
        invoices = [
            _invoice("a", 1000, 1),
            _invoice("b", 3000, 1, customer="c2"),
            _invoice("c", 50, 1, customer="c2", status="cancelled"),
        ]
        rows = get_outstanding_by_customer(invoices, CUSTOMERS)

        self.assertEqual([r["customer_id"] for r in rows], ["c2", "c1"])
        self.assertEqual(rows[0]["outstanding_amount"], 3000.0)
        self.assertEqual(len(rows[0]["invoices"]), 1)


class AgedPayablesTests(SimpleTestCase):
    """
    GUARANTEES:
    - Unpaid expenses aged by days since expense_date
    - Full amount is the balance; paid/cancelled excluded
    """

    def test_buckets_and_suppliers(self):
        result = get_aged_payables(EXPENSES, today=TODAY)

        buckets = result["buckets"]
        # e1: 55 days; e2: 101 days; e3 paid
        self.assertEqual(buckets["days_31_to_60"]["amount"], 1500.0)
        self.assertEqual(buckets["days_31_to_60"]["count"], 1)
        self.assertEqual(buckets["over_90"]["amount"], 4001.0)
        self.assertEqual(buckets["over_90"]["expenses"][0]["days_outstanding"], 101)
        self.assertEqual(buckets["current"]["count"], 0)
        self.assertEqual(result["unpaid_count"], 2)

        self.assertEqual(
            [s["vendor_name"] for s in result["suppliers"]], ["Office Mart", "Kenya Power"]
        )
        self.assertEqual(result["totals"]["total_balance"], 5501.0)
        self.assertEqual(_bucket_sum(result["totals"]), result["totals"]["total_balance_minor"])
        _assert_rows_add_up(self, result["suppliers"], result["totals"])

    def test_supplier_rows_add_up_to_grand_totals(self):
        expenses = [
            {"id": f"x{i}", "amount": "0.50", "status": "pending",
             "expense_date": "2026-02-20", "vendor_name": vendor}
            for i, vendor in enumerate(["Office Mart", "Kenya Power", "Water Co"])
        ]
        result = get_aged_payables(expenses, today=TODAY)

        _assert_rows_add_up(self, result["suppliers"], result["totals"])
        self.assertEqual(result["totals"]["current"], 3.0)
        self.assertEqual(result["buckets"]["current"]["amount"], 3.0)
        self.assertEqual(result["buckets"]["current"]["count"], 3)

    def test_missing_expense_date_is_current_with_diagnostic(self):
        diagnostics = Diagnostics()
        result = get_aged_payables(
            [{"id": "x", "amount": "80", "status": "pending"}], today=TODAY, diagnostics=diagnostics
        )

        self.assertEqual(result["buckets"]["current"]["amount"], 80.0)
        self.assertEqual(result["suppliers"][0]["vendor_name"], "Unknown Supplier")
        self.assertEqual(diagnostics.codes(), [diag.MISSING_EXPENSE_DATE])
