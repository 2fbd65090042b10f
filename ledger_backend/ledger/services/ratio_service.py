# ledger/services/ratio_service.py

"""
FINANCIAL RATIOS

Pure functions over already-built balance sheet and P&L outputs.

- current_ratio, quick_ratio, debt_to_equity: plain ratios (2dp)
- margins, returns, debt_to_assets, equity_ratio: percentages (2dp)
- every division is guarded: a zero denominator yields 0
"""

from __future__ import annotations

from decimal import Decimal

from ledger.services.money import safe_divide, to_major_number

HUNDRED = Decimal("100")


def _amount(report: dict, key: str) -> Decimal:
    """
    Read one money figure back from a report dict.

    Prefers the exact minor-unit value when the report carries it.
    """
    minor = report.get(f"{key}_minor")
    if minor is not None:
        return Decimal(int(minor)) / HUNDRED
    value = report.get(key)
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


def _ratio(numerator: Decimal, denominator: Decimal) -> float:
    return to_major_number(safe_divide(numerator, denominator))


def _percent(numerator: Decimal, denominator: Decimal) -> float:
    return to_major_number(safe_divide(numerator * HUNDRED, denominator))


def calculate_financial_ratios(balance_sheet: dict, profit_and_loss: dict) -> dict:
    totals = balance_sheet.get("totals", balance_sheet)

    current_assets = _amount(totals, "current_assets")
    current_liabilities = _amount(totals, "current_liabilities")
    inventory = _amount(totals, "inventory")
    total_assets = _amount(totals, "assets")
    total_liabilities = _amount(totals, "liabilities")
    total_equity = _amount(totals, "equity")

    revenue = _amount(profit_and_loss, "revenue")
    gross_profit = _amount(profit_and_loss, "gross_profit")
    net_profit = _amount(profit_and_loss, "net_profit")

    return {
        "current_ratio": _ratio(current_assets, current_liabilities),
        "quick_ratio": _ratio(current_assets - inventory, current_liabilities),
        "debt_to_equity": _ratio(total_liabilities, total_equity),
        "gross_profit_margin": _percent(gross_profit, revenue),
        "net_profit_margin": _percent(net_profit, revenue),
        "return_on_assets": _percent(net_profit, total_assets),
        "return_on_equity": _percent(net_profit, total_equity),
        "debt_to_assets": _percent(total_liabilities, total_assets),
        "equity_ratio": _percent(total_equity, total_assets),
    }
