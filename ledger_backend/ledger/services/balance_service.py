# ledger/services/balance_service.py

"""
BALANCE SERVICE (AUTHORITATIVE)

Read-only ledger aggregation helpers.

RULES:
- READ-ONLY: inputs are never mutated
- Only POSTED transactions count, whatever their date
- Cutoff is inclusive of the whole as-of day
- Balance is debit-positive (debits - credits) for every account;
  presentation sign flips belong to the statement builders
- Every account appears in the result, even with no activity
- Journal lines on unknown account codes are dropped (diagnostic)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from ledger.records import Account, Transaction, as_accounts, as_transactions
from ledger.services import diagnostics as diag
from ledger.services.diagnostics import Diagnostics, ensure_diagnostics
from ledger.services.money import ZERO, money_fields
from ledger.services.period_resolver import Period

logger = logging.getLogger(__name__)


@dataclass
class AccountBalance:
    account: Account
    debit_total: Decimal = ZERO
    credit_total: Decimal = ZERO
    balance: Decimal = ZERO

    @property
    def has_activity(self) -> bool:
        return self.debit_total != 0 or self.credit_total != 0

    def as_dict(self) -> dict:
        return {
            "account_code": self.account.account_code,
            "account_name": self.account.account_name,
            "account_type": self.account.account_type,
            **money_fields("debit_total", self.debit_total),
            **money_fields("credit_total", self.credit_total),
            **money_fields("balance", self.balance),
        }


def _posted_between(transactions, *, start: date | None, end: date | None):
    for tx in transactions:
        if not tx.is_posted:
            continue
        if start is not None and tx.transaction_date < start:
            continue
        if end is not None and tx.transaction_date > end:
            continue
        yield tx


def _report_imbalance(tx: Transaction, diagnostics: Diagnostics) -> None:
    imbalance = tx.imbalance()
    if imbalance != 0:
        diagnostics.warn(
            diag.UNBALANCED_TRANSACTION,
            f"Transaction {tx.id or tx.reference_number or '?'} is out of balance by {imbalance}",
            once_key=tx.id or id(tx),
            transaction_id=tx.id,
            imbalance=str(imbalance),
        )


def _accumulate(
    accounts: list[Account],
    transactions,
    *,
    start: date | None,
    end: date | None,
    diagnostics: Diagnostics,
) -> dict[str, AccountBalance]:
    balances = {acc.account_code: AccountBalance(account=acc) for acc in accounts}

    for tx in _posted_between(transactions, start=start, end=end):
        _report_imbalance(tx, diagnostics)

        for line in tx.journal_entries:
            current = balances.get(line.account_code)
            if current is None:
                diagnostics.warn(
                    diag.UNKNOWN_ACCOUNT_CODE,
                    f"Journal line references unknown account code {line.account_code!r}; dropped",
                    once_key=line.account_code,
                    account_code=line.account_code,
                    transaction_id=tx.id,
                )
                continue

            current.debit_total += line.debit_amount
            current.credit_total += line.credit_amount
            current.balance += line.debit_amount - line.credit_amount

    return balances


def get_account_balances(
    accounts,
    transactions,
    as_of_date: date,
    *,
    diagnostics: Diagnostics | None = None,
) -> dict[str, AccountBalance]:
    """
    Per-account debit total, credit total and debit-positive balance as at
    the end of `as_of_date`.

    Returns a dict keyed by account_code, in chart order.
    """
    diagnostics = ensure_diagnostics(diagnostics)
    accounts = as_accounts(accounts)
    transactions = as_transactions(transactions)

    balances = _accumulate(
        accounts, transactions, start=None, end=as_of_date, diagnostics=diagnostics
    )

    logger.debug(
        "Account balances computed",
        extra={"as_of": as_of_date.isoformat(), "accounts": len(balances)},
    )
    return balances


def get_account_summary(
    accounts,
    transactions,
    period: Period,
    *,
    diagnostics: Diagnostics | None = None,
) -> dict:
    """
    Opening balance, period movement and closing balance per account.

    opening = posted activity before period.start
    closing = opening + period debits - period credits
    """
    diagnostics = ensure_diagnostics(diagnostics)
    accounts = as_accounts(accounts)
    transactions = as_transactions(transactions)

    opening = _accumulate(
        accounts, transactions, start=None, end=period.day_before_start(), diagnostics=diagnostics
    )
    movement = _accumulate(
        accounts, transactions, start=period.start, end=period.end, diagnostics=diagnostics
    )

    rows = []
    for acc in accounts:
        open_bal = opening[acc.account_code].balance
        moved = movement[acc.account_code]
        closing = open_bal + moved.balance
        rows.append(
            {
                "account_code": acc.account_code,
                "account_name": acc.account_name,
                "account_type": acc.account_type,
                **money_fields("opening_balance", open_bal),
                **money_fields("period_debits", moved.debit_total),
                **money_fields("period_credits", moved.credit_total),
                **money_fields("closing_balance", closing),
            }
        )

    return {
        "period": period.as_dict(),
        "accounts": rows,
        "diagnostics": diagnostics.as_list(),
    }


def _matches_any(code: str, prefixes: tuple[str, ...]) -> bool:
    return any(code.startswith(p) for p in prefixes)


def generate_general_ledger(
    account_codes,
    accounts,
    transactions,
    period: Period,
    *,
    diagnostics: Diagnostics | None = None,
) -> dict:
    """
    Running-balance ledger for one account or an account group.

    `account_codes` are prefixes: "11" selects every 11xx account.
    Entries are ordered by transaction date (stable for same-day postings).
    """
    diagnostics = ensure_diagnostics(diagnostics)
    accounts = as_accounts(accounts)
    transactions = as_transactions(transactions)

    if isinstance(account_codes, str):
        account_codes = [account_codes]
    prefixes = tuple(str(c).strip() for c in account_codes if str(c).strip())

    matching = [a for a in accounts if _matches_any(a.account_code, prefixes)]
    known_codes = {a.account_code for a in matching}

    opening = ZERO
    for tx in _posted_between(transactions, start=None, end=period.day_before_start()):
        for line in tx.journal_entries:
            if line.account_code in known_codes:
                opening += line.net

    in_period = sorted(
        _posted_between(transactions, start=period.start, end=period.end),
        key=lambda t: t.transaction_date,
    )

    running = opening
    entries = []
    for tx in in_period:
        for line in tx.journal_entries:
            if line.account_code not in known_codes:
                continue
            running += line.net
            entries.append(
                {
                    "date": tx.transaction_date.isoformat(),
                    "transaction_id": tx.id,
                    "reference": tx.reference_number,
                    "description": line.description or tx.description,
                    "account_code": line.account_code,
                    **money_fields("debit", line.debit_amount),
                    **money_fields("credit", line.credit_amount),
                    **money_fields("balance", running),
                }
            )

    return {
        "period": period.as_dict(),
        "account_codes": list(prefixes),
        "accounts": [
            {"account_code": a.account_code, "account_name": a.account_name} for a in matching
        ],
        **money_fields("opening_balance", opening),
        "entries": entries,
        **money_fields("closing_balance", running),
        "diagnostics": diagnostics.as_list(),
    }
