# ledger/services/balance_sheet_service.py

"""
BALANCE SHEET SERVICE

Pure accounting read service.

Responsibilities:
- Compute balances per account as at a given date
- Classify balances into current/non-current assets and liabilities,
  and equity groups (share capital, retained earnings, other equity)
- Report the accounting equation check (Assets = Liabilities + Equity)
  on every call, with the raw variance

Important:
- Revenue/Expense activity (if not closed) is represented as
  "Current Period Earnings" in Equity to keep the balance sheet correct.
- Liabilities and equity are presented credit-positive. A liability or
  equity account carrying a debit balance is reported as a diagnostic.
- An unbalanced sheet is NOT an exception: the variance is the
  data-integrity signal for the caller. It equals the sum of the
  imbalances of every posted transaction up to the cutoff.

Contract:
- Numeric JSON values: major-unit floats (2dp) + minor-unit ints (exact)
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from ledger.conf import decimal_setting
from ledger.records import ASSET, as_accounts
from ledger.services import account_classifier as ac
from ledger.services import diagnostics as diag
from ledger.services.balance_service import get_account_balances
from ledger.services.diagnostics import Diagnostics, ensure_diagnostics
from ledger.services.money import ZERO, money_fields

logger = logging.getLogger(__name__)

INVENTORY_CODE_PREFIX = "12"
CURRENT_EARNINGS_CODE = "E-CURR"
CURRENT_EARNINGS_NAME = "Current Period Earnings"

GROUP_ORDER = (
    ac.CURRENT_ASSETS,
    ac.NON_CURRENT_ASSETS,
    ac.CURRENT_LIABILITIES,
    ac.NON_CURRENT_LIABILITIES,
    ac.SHARE_CAPITAL,
    ac.RETAINED_EARNINGS,
    ac.OTHER_EQUITY,
)


def generate_balance_sheet(
    accounts,
    transactions,
    as_of_date: date,
    *,
    tolerance: Decimal | None = None,
    diagnostics: Diagnostics | None = None,
) -> dict:
    """
    Args:
        accounts: chart of accounts (records or raw dicts)
        transactions: journal-bearing transactions (records or raw dicts)
        as_of_date: inclusive end-of-day cutoff
        tolerance: |variance| below this counts as balanced
                   (default LEDGER["BALANCE_SHEET_TOLERANCE"])

    Returns:
        {
            "as_of_date": "YYYY-MM-DD",
            "assets": {"current": [...], "non_current": [...]},
            "liabilities": {"current": [...], "non_current": [...]},
            "equity": {"share_capital": [...], "retained_earnings": [...],
                       "other_equity": [...], "current_period_earnings": [...]},
            "totals": {... "variance", "balanced"},
            "diagnostics": [...]
        }
    """
    diagnostics = ensure_diagnostics(diagnostics)
    if tolerance is None:
        tolerance = decimal_setting("BALANCE_SHEET_TOLERANCE")

    accounts = sorted(as_accounts(accounts), key=lambda a: a.account_code)
    balances = get_account_balances(accounts, transactions, as_of_date, diagnostics=diagnostics)

    lines: dict[str, list] = {group: [] for group in GROUP_ORDER}
    totals: dict[str, Decimal] = {group: ZERO for group in GROUP_ORDER}
    current_earnings = ZERO
    inventory = ZERO

    for acc in accounts:
        bal = balances[acc.account_code].balance

        classification = ac.classify_account(acc)
        if classification is None:
            if bal != 0:
                diagnostics.warn(
                    diag.UNCLASSIFIED_ACCOUNT,
                    f"Account {acc.account_code} has no resolvable type; left off the balance sheet",
                    once_key=acc.account_code,
                    account_code=acc.account_code,
                )
            continue

        if classification.group == ac.CURRENT_EARNINGS:
            # revenue is credit-normal, expense debit-normal: earnings = -(sum of debit-positive)
            current_earnings -= bal
            continue

        if classification.section == ASSET:
            presented = bal
            if acc.account_code.startswith(INVENTORY_CODE_PREFIX):
                inventory += bal
        else:
            presented = -bal

        if presented < 0:
            diagnostics.warn(
                diag.CONTRA_BALANCE,
                f"Account {acc.account_code} carries a balance opposite to its section",
                once_key=acc.account_code,
                account_code=acc.account_code,
                section=classification.section,
            )

        if presented == 0:
            continue

        lines[classification.group].append(
            {
                "code": acc.account_code,
                "name": acc.account_name,
                "classified_by": classification.rule,
                **money_fields("balance", presented),
            }
        )
        totals[classification.group] += presented

    current_assets = totals[ac.CURRENT_ASSETS]
    non_current_assets = totals[ac.NON_CURRENT_ASSETS]
    total_assets = current_assets + non_current_assets

    current_liabilities = totals[ac.CURRENT_LIABILITIES]
    non_current_liabilities = totals[ac.NON_CURRENT_LIABILITIES]
    total_liabilities = current_liabilities + non_current_liabilities

    earnings_lines = []
    if current_earnings != 0:
        earnings_lines.append(
            {
                "code": CURRENT_EARNINGS_CODE,
                "name": CURRENT_EARNINGS_NAME,
                "classified_by": f"type:{ac.CURRENT_EARNINGS}",
                **money_fields("balance", current_earnings),
            }
        )

    total_equity = (
        totals[ac.SHARE_CAPITAL]
        + totals[ac.RETAINED_EARNINGS]
        + totals[ac.OTHER_EQUITY]
        + current_earnings
    )

    liabilities_plus_equity = total_liabilities + total_equity
    variance = total_assets - liabilities_plus_equity
    balanced = abs(variance) < tolerance

    logger.info(
        "Balance sheet generated",
        extra={
            "as_of": as_of_date.isoformat(),
            "total_assets": str(total_assets),
            "variance": str(variance),
            "balanced": balanced,
        },
    )

    return {
        "as_of_date": as_of_date.isoformat(),
        "assets": {
            "current": lines[ac.CURRENT_ASSETS],
            "non_current": lines[ac.NON_CURRENT_ASSETS],
        },
        "liabilities": {
            "current": lines[ac.CURRENT_LIABILITIES],
            "non_current": lines[ac.NON_CURRENT_LIABILITIES],
        },
        "equity": {
            "share_capital": lines[ac.SHARE_CAPITAL],
            "retained_earnings": lines[ac.RETAINED_EARNINGS],
            "other_equity": lines[ac.OTHER_EQUITY],
            "current_period_earnings": earnings_lines,
        },
        "totals": {
            **money_fields("current_assets", current_assets),
            **money_fields("non_current_assets", non_current_assets),
            **money_fields("assets", total_assets),
            **money_fields("inventory", inventory),
            **money_fields("current_liabilities", current_liabilities),
            **money_fields("non_current_liabilities", non_current_liabilities),
            **money_fields("liabilities", total_liabilities),
            **money_fields("share_capital", totals[ac.SHARE_CAPITAL]),
            **money_fields("retained_earnings", totals[ac.RETAINED_EARNINGS]),
            **money_fields("other_equity", totals[ac.OTHER_EQUITY]),
            **money_fields("current_period_earnings", current_earnings),
            **money_fields("equity", total_equity),
            **money_fields("liabilities_plus_equity", liabilities_plus_equity),
            **money_fields("variance", variance),
            "tolerance": float(tolerance),
            "balanced": balanced,
        },
        "diagnostics": diagnostics.as_list(),
    }
