# ledger/services/profit_and_loss_service.py

"""
PROFIT & LOSS SERVICE (INCOME STATEMENT)

Read-only aggregation over invoices and posted journal lines.

Key rules:
- Revenue comes from INVOICES (status paid|sent|overdue, invoice_date in
  period), summing total_amount. Revenue-account journal lines are NOT
  used: the balance sheet already carries receivables from the ledger and
  counting both would double count part-paid invoices.
- Costs and other income come from POSTED journal lines in period, by
  account code prefix:
    5      cost of sales       (debit - credit)
    6, 7   operating expenses  (debit - credit)
    8      finance costs       (debit - credit)
    48, 49 other income        (credit - debit)
- net_profit == profit_before_tax (no tax expense line is deducted)
"""

from __future__ import annotations

import logging
from decimal import Decimal

from ledger.records import as_invoices, as_transactions
from ledger.services.diagnostics import Diagnostics, ensure_diagnostics
from ledger.services.money import ZERO, money_fields, safe_divide, to_major_number
from ledger.services.period_resolver import Period

logger = logging.getLogger(__name__)

REVENUE_STATUSES = frozenset({"paid", "sent", "overdue"})

COST_OF_SALES = "cost_of_sales"
OPERATING_EXPENSES = "operating_expenses"
FINANCE_COSTS = "finance_costs"
OTHER_INCOME = "other_income"

# (section, code prefixes, credit-normal); first match wins
LEDGER_SECTIONS = (
    (COST_OF_SALES, ("5",), False),
    (OPERATING_EXPENSES, ("6", "7"), False),
    (FINANCE_COSTS, ("8",), False),
    (OTHER_INCOME, ("48", "49"), True),
)

HUNDRED = Decimal("100")


def _section_for_code(code: str):
    for section, prefixes, credit_normal in LEDGER_SECTIONS:
        if code.startswith(prefixes):
            return section, credit_normal
    return None, False


def _margin(profit: Decimal, revenue: Decimal) -> float:
    return to_major_number(safe_divide(profit * HUNDRED, revenue))


def generate_profit_and_loss(
    transactions,
    invoices,
    period: Period,
    *,
    diagnostics: Diagnostics | None = None,
) -> dict:
    diagnostics = ensure_diagnostics(diagnostics)
    transactions = as_transactions(transactions)
    invoices = as_invoices(invoices)

    revenue = ZERO
    revenue_invoices = 0
    for inv in invoices:
        if inv.status in REVENUE_STATUSES and period.contains(inv.invoice_date):
            revenue += inv.total_amount
            revenue_invoices += 1

    section_totals = {section: ZERO for section, _, _ in LEDGER_SECTIONS}
    by_account: dict[str, dict[str, Decimal]] = {section: {} for section, _, _ in LEDGER_SECTIONS}

    for tx in transactions:
        if not tx.is_posted or not period.contains(tx.transaction_date):
            continue

        for line in tx.journal_entries:
            section, credit_normal = _section_for_code(line.account_code)
            if section is None:
                continue

            amount = -line.net if credit_normal else line.net
            section_totals[section] += amount
            bucket = by_account[section]
            bucket[line.account_code] = bucket.get(line.account_code, ZERO) + amount

    cost_of_sales = section_totals[COST_OF_SALES]
    operating_expenses = section_totals[OPERATING_EXPENSES]
    finance_costs = section_totals[FINANCE_COSTS]
    other_income = section_totals[OTHER_INCOME]

    gross_profit = revenue - cost_of_sales
    operating_profit = gross_profit - operating_expenses
    profit_before_tax = operating_profit + other_income - finance_costs
    net_profit = profit_before_tax

    logger.info(
        "Profit and loss generated",
        extra={
            "start": period.start.isoformat(),
            "end": period.end.isoformat(),
            "revenue": str(revenue),
            "net_profit": str(net_profit),
        },
    )

    return {
        "period": period.as_dict(),
        **money_fields("revenue", revenue),
        "revenue_invoice_count": revenue_invoices,
        **money_fields("cost_of_sales", cost_of_sales),
        **money_fields("gross_profit", gross_profit),
        **money_fields("operating_expenses", operating_expenses),
        **money_fields("operating_profit", operating_profit),
        **money_fields("other_income", other_income),
        **money_fields("finance_costs", finance_costs),
        **money_fields("profit_before_tax", profit_before_tax),
        **money_fields("net_profit", net_profit),
        "gross_margin": _margin(gross_profit, revenue),
        "net_margin": _margin(net_profit, revenue),
        "breakdown": {
            section: [
                {"account_code": code, **money_fields("amount", amount)}
                for code, amount in sorted(by_account[section].items())
            ]
            for section, _, _ in LEDGER_SECTIONS
        },
        "diagnostics": diagnostics.as_list(),
    }
