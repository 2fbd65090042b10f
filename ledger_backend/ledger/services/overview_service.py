# ledger/services/overview_service.py

"""
FINANCIAL OVERVIEW

One-call KPI snapshot for a period:
- balance sheet totals at the period end
- P&L headline figures for the period
- ratios derived from both
- invoice-based outstanding receivables

All figures share one Diagnostics accumulator, so a warning raised while
building any part shows up once in the overview.
"""

from __future__ import annotations

import logging

from ledger.records import as_accounts, as_invoices, as_transactions
from ledger.services.aging_service import calculate_outstanding_receivables
from ledger.services.balance_sheet_service import generate_balance_sheet
from ledger.services.diagnostics import Diagnostics, ensure_diagnostics
from ledger.services.period_resolver import Period
from ledger.services.profit_and_loss_service import generate_profit_and_loss
from ledger.services.ratio_service import calculate_financial_ratios

logger = logging.getLogger(__name__)

PNL_HEADLINES = (
    "revenue",
    "cost_of_sales",
    "gross_profit",
    "operating_expenses",
    "operating_profit",
    "net_profit",
)


def get_financial_overview(
    accounts,
    transactions,
    invoices,
    period: Period,
    *,
    diagnostics: Diagnostics | None = None,
) -> dict:
    diagnostics = ensure_diagnostics(diagnostics)

    # coerce once; the builders accept already-built records as-is
    accounts = as_accounts(accounts)
    transactions = as_transactions(transactions)
    invoices = as_invoices(invoices)

    balance_sheet = generate_balance_sheet(
        accounts, transactions, period.end, diagnostics=diagnostics
    )
    pnl = generate_profit_and_loss(transactions, invoices, period, diagnostics=diagnostics)
    ratios = calculate_financial_ratios(balance_sheet, pnl)
    receivables = calculate_outstanding_receivables(invoices)

    bs_totals = balance_sheet["totals"]
    profit_and_loss = {}
    for key in PNL_HEADLINES:
        profit_and_loss[key] = pnl[key]
        profit_and_loss[f"{key}_minor"] = pnl[f"{key}_minor"]

    logger.info(
        "Financial overview generated",
        extra={"start": period.start.isoformat(), "end": period.end.isoformat()},
    )

    return {
        "period": period.as_dict(),
        "balance_sheet": {
            key: bs_totals[key]
            for key in (
                "assets",
                "assets_minor",
                "liabilities",
                "liabilities_minor",
                "equity",
                "equity_minor",
                "variance",
                "variance_minor",
                "balanced",
            )
        },
        "profit_and_loss": profit_and_loss,
        "ratios": ratios,
        "receivables": receivables,
        "diagnostics": diagnostics.as_list(),
    }
