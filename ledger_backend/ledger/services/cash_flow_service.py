# ledger/services/cash_flow_service.py

"""
CASH FLOW STATEMENT (DIRECT METHOD, SIMPLIFIED)

Cash movement of a transaction = net debit on cash accounts (code
prefix "10") across its journal lines. Only POSTED transactions count.

Section by transaction, first match wins:
1. transaction_type sale|expense|receipt|payment  -> operating
2. description mentions "asset purchase"/"asset sale" -> investing
3. description mentions "loan"/"equity"             -> financing
4. anything else (adjustments etc.)                 -> operating

start_cash is the cash balance at the end of the day before the period.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from ledger.records import Transaction, as_accounts, as_transactions
from ledger.services.balance_service import get_account_balances
from ledger.services.diagnostics import Diagnostics, ensure_diagnostics
from ledger.services.money import ZERO, money_fields
from ledger.services.period_resolver import Period

logger = logging.getLogger(__name__)

CASH_CODE_PREFIX = "10"

OPERATING = "operating"
INVESTING = "investing"
FINANCING = "financing"

SECTIONS = (OPERATING, INVESTING, FINANCING)

OPERATING_TYPES = frozenset({"sale", "expense", "receipt", "payment"})
INVESTING_KEYWORDS = ("asset purchase", "asset sale")
FINANCING_KEYWORDS = ("loan", "equity")


def is_cash_code(code: str) -> bool:
    return code.startswith(CASH_CODE_PREFIX)


def cash_movement(tx: Transaction) -> Decimal:
    return sum((line.net for line in tx.journal_entries if is_cash_code(line.account_code)), ZERO)


def classify_cash_flow(tx: Transaction) -> str:
    if tx.transaction_type in OPERATING_TYPES:
        return OPERATING

    description = tx.description.lower()
    if any(k in description for k in INVESTING_KEYWORDS):
        return INVESTING
    if any(k in description for k in FINANCING_KEYWORDS):
        return FINANCING
    return OPERATING


def _cash_before(transactions, period: Period) -> Decimal:
    cutoff = period.day_before_start()
    total = ZERO
    for tx in transactions:
        if tx.is_posted and tx.transaction_date <= cutoff:
            total += cash_movement(tx)
    return total


def generate_cash_flow(
    accounts,
    transactions,
    period: Period,
    *,
    diagnostics: Diagnostics | None = None,
) -> dict:
    diagnostics = ensure_diagnostics(diagnostics)
    accounts = as_accounts(accounts)
    transactions = as_transactions(transactions)

    items: dict[str, list] = {section: [] for section in SECTIONS}
    totals: dict[str, Decimal] = {section: ZERO for section in SECTIONS}

    in_period = sorted(
        (t for t in transactions if t.is_posted and period.contains(t.transaction_date)),
        key=lambda t: t.transaction_date,
    )

    for tx in in_period:
        movement = cash_movement(tx)
        if movement == 0:
            continue

        section = classify_cash_flow(tx)
        totals[section] += movement
        items[section].append(
            {
                "date": tx.transaction_date.isoformat(),
                "transaction_id": tx.id,
                "name": tx.description,
                **money_fields("amount", movement),
            }
        )

    start_cash = _cash_before(transactions, period)
    net_change = totals[OPERATING] + totals[INVESTING] + totals[FINANCING]
    end_cash = start_cash + net_change

    # closing balances of chart cash accounts, for reconciliation against end_cash
    balances = get_account_balances(accounts, transactions, period.end, diagnostics=diagnostics)
    cash_accounts = [
        {
            "account_code": bal.account.account_code,
            "account_name": bal.account.account_name,
            **money_fields("balance", bal.balance),
        }
        for code, bal in balances.items()
        if is_cash_code(code)
    ]

    logger.info(
        "Cash flow generated",
        extra={
            "start": period.start.isoformat(),
            "end": period.end.isoformat(),
            "net_change": str(net_change),
        },
    )

    return {
        "period": period.as_dict(),
        "operating": {"items": items[OPERATING], **money_fields("total", totals[OPERATING])},
        "investing": {"items": items[INVESTING], **money_fields("total", totals[INVESTING])},
        "financing": {"items": items[FINANCING], **money_fields("total", totals[FINANCING])},
        **money_fields("net_change", net_change),
        **money_fields("start_cash", start_cash),
        **money_fields("end_cash", end_cash),
        "cash_accounts": cash_accounts,
        "diagnostics": diagnostics.as_list(),
    }
