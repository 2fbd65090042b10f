# ledger/tests/test_analysis.py

from __future__ import annotations

import math
from datetime import date

from django.test import SimpleTestCase

from ledger.services.cash_flow_service import generate_cash_flow
from ledger.services.consistency_service import validate_receivables_consistency
from ledger.services.overview_service import get_financial_overview
from ledger.services.period_resolver import Period
from ledger.services.ratio_service import calculate_financial_ratios
from ledger.tests.fixtures import (
    ACCOUNTS,
    INVOICES,
    JAN_END,
    JAN_START,
    TRANSACTIONS,
    line,
    tx,
)

JANUARY = Period(JAN_START, JAN_END)
FEBRUARY = Period(date(2026, 2, 1), date(2026, 2, 28))


class RatioTests(SimpleTestCase):
    """
    GUARANTEES:
    - A zero denominator yields 0, never inf/NaN
    """

    def test_zero_current_liabilities_returns_zero(self):
        bs = {"totals": {"current_assets": 5000.0, "current_liabilities": 0.0}}
        ratios = calculate_financial_ratios(bs, {})

        self.assertEqual(ratios["current_ratio"], 0.0)
        self.assertEqual(ratios["quick_ratio"], 0.0)
        for name, value in ratios.items():
            with self.subTest(ratio=name):
                self.assertTrue(math.isfinite(value))

    def test_ratio_values(self):
        bs = {
            "totals": {
                "current_assets_minor": 30_000_00,
                "current_liabilities_minor": 10_000_00,
                "inventory_minor": 5_000_00,
                "assets_minor": 50_000_00,
                "liabilities_minor": 20_000_00,
                "equity_minor": 30_000_00,
            }
        }
        pnl = {"revenue": 10000.0, "gross_profit": 4000.0, "net_profit": 1500.0}

        ratios = calculate_financial_ratios(bs, pnl)

        self.assertEqual(ratios["current_ratio"], 3.0)
        self.assertEqual(ratios["quick_ratio"], 2.5)
        self.assertEqual(ratios["debt_to_equity"], 0.67)
        self.assertEqual(ratios["gross_profit_margin"], 40.0)
        self.assertEqual(ratios["net_profit_margin"], 15.0)
        self.assertEqual(ratios["return_on_assets"], 3.0)
        self.assertEqual(ratios["return_on_equity"], 5.0)
        self.assertEqual(ratios["debt_to_assets"], 40.0)
        self.assertEqual(ratios["equity_ratio"], 60.0)

    def test_overview_snapshot(self):
        overview = get_financial_overview(ACCOUNTS, TRANSACTIONS, INVOICES, JANUARY)

        self.assertEqual(overview["balance_sheet"]["assets"], 160000.0)
        self.assertTrue(overview["balance_sheet"]["balanced"])
        self.assertEqual(overview["profit_and_loss"]["operating_profit"], 40000.0)
        self.assertEqual(overview["receivables"]["outstanding_amount"], 50000.0)
        # no current liabilities in the fixture books
        self.assertEqual(overview["ratios"]["current_ratio"], 0.0)
        self.assertEqual(overview["ratios"]["equity_ratio"], 87.5)


class CashFlowTests(SimpleTestCase):
    def test_sections(self):
        cf = generate_cash_flow(ACCOUNTS, TRANSACTIONS, JANUARY)

        self.assertEqual(cf["operating"]["total"], -10000.0)
        self.assertEqual(cf["investing"]["total"], -30000.0)
        # equity injection + loan drawdown
        self.assertEqual(cf["financing"]["total"], 120000.0)
        self.assertEqual(cf["net_change"], 80000.0)
        self.assertEqual(cf["start_cash"], 0.0)
        self.assertEqual(cf["end_cash"], 80000.0)

    def test_start_cash_is_balance_before_period(self):
        receipt = tx(
            "r1",
            "2026-02-10",
            [line("1000", debit="2500"), line("1200", credit="2500")],
            transaction_type="receipt",
            description="Payment from Acme",
        )
        cf = generate_cash_flow(ACCOUNTS, TRANSACTIONS + [receipt], FEBRUARY)

        self.assertEqual(cf["start_cash"], 80000.0)
        self.assertEqual(cf["operating"]["total"], 2500.0)
        self.assertEqual(cf["end_cash"], 82500.0)
        self.assertEqual(cf["cash_accounts"][0]["balance"], cf["end_cash"])

    def test_transaction_type_wins_over_description(self):
        sale = tx(
            "s1",
            "2026-01-30",
            [line("1000", debit="100"), line("4000", credit="100")],
            transaction_type="sale",
            description="Cash sale of old equity shares",
        )
        cf = generate_cash_flow(ACCOUNTS, [sale], JANUARY)
        self.assertEqual(cf["operating"]["total"], 100.0)
        self.assertEqual(cf["financing"]["items"], [])


class ReceivablesConsistencyTests(SimpleTestCase):
    def test_consistent_books(self):
        result = validate_receivables_consistency(INVOICES, TRANSACTIONS)

        self.assertTrue(result["is_consistent"])
        self.assertEqual(result["invoice_based_ar"], 50000.0)
        self.assertEqual(result["transaction_based_ar"], 50000.0)
        self.assertEqual(result["issues"], [])

    def test_missing_and_orphaned_transactions(self):
        invoices = INVOICES + [
            {"id": "inv-2", "customer_id": "c2", "total_amount": "20000", "status": "sent"},
            {"id": "inv-3", "customer_id": "c2", "total_amount": "999", "status": "draft"},
        ]
        orphan = tx(
            "o1",
            "2026-01-11",
            [line("1200", debit="700"), line("4000", credit="700")],
            transaction_type="sale",
            invoice_id="deleted-invoice",
        )

        result = validate_receivables_consistency(invoices, TRANSACTIONS + [orphan])
        issues = {i["type"]: i for i in result["issues"]}

        self.assertFalse(result["is_consistent"])
        # drafts still count towards invoice AR
        self.assertEqual(result["difference"], 20999.0)
        self.assertIn("calculation_mismatch", issues)
        self.assertEqual(issues["missing_transactions"]["count"], 1)
        self.assertEqual(issues["orphaned_transactions"]["count"], 1)

    def test_small_difference_tolerated(self):
        invoices = [dict(INVOICES[0], total_amount="50099")]
        result = validate_receivables_consistency(invoices, TRANSACTIONS)
        self.assertTrue(result["is_consistent"])
