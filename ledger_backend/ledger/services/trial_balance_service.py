# ledger/services/trial_balance_service.py

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from ledger.conf import decimal_setting
from ledger.records import DEBIT, as_accounts
from ledger.services.balance_service import get_account_balances
from ledger.services.diagnostics import Diagnostics, ensure_diagnostics
from ledger.services.money import ZERO, money_fields

logger = logging.getLogger(__name__)


def _columns(balance: Decimal, normal_balance: str) -> tuple[Decimal, Decimal]:
    """
    Place a debit-positive balance in the debit or credit column.

    A zero balance lands in the account's normal column.
    """
    if normal_balance == DEBIT:
        if balance >= 0:
            return balance, ZERO
        return ZERO, -balance

    if balance <= 0:
        return ZERO, -balance
    return balance, ZERO


class TrialBalanceService:
    """
    Trial Balance computation service.

    Guarantees:
    - Only POSTED transactions up to the end of the as-of day
    - One row per account with any debit or credit activity, sorted by code
    - Column placement follows the account's normal balance
    - Reports `balanced` and the raw `variance` (debits - credits)
    - Returns JSON-safe numeric values (no Decimals)
    """

    def __init__(self, tolerance: Decimal | None = None):
        self.tolerance = tolerance

    def generate(
        self,
        accounts,
        transactions,
        as_of_date: date,
        *,
        diagnostics: Diagnostics | None = None,
    ) -> dict:
        diagnostics = ensure_diagnostics(diagnostics)
        tolerance = self.tolerance
        if tolerance is None:
            tolerance = decimal_setting("TRIAL_BALANCE_TOLERANCE")

        accounts = as_accounts(accounts)
        balances = get_account_balances(
            accounts, transactions, as_of_date, diagnostics=diagnostics
        )

        rows = []
        total_debit = ZERO
        total_credit = ZERO

        for acc in sorted(accounts, key=lambda a: a.account_code):
            bal = balances[acc.account_code]
            if not bal.has_activity:
                continue

            debit, credit = _columns(bal.balance, acc.normal_balance)
            total_debit += debit
            total_credit += credit

            rows.append(
                {
                    "account_code": acc.account_code,
                    "account_name": acc.account_name,
                    "account_type": acc.account_type,
                    "normal_balance": acc.normal_balance,
                    **money_fields("debit", debit),
                    **money_fields("credit", credit),
                }
            )

        variance = total_debit - total_credit
        balanced = abs(variance) < tolerance

        if not balanced:
            logger.warning(
                "Trial balance does not balance",
                extra={"as_of": as_of_date.isoformat(), "variance": str(variance)},
            )

        return {
            "as_of_date": as_of_date.isoformat(),
            "accounts": rows,
            "totals": {
                **money_fields("debit", total_debit),
                **money_fields("credit", total_credit),
                **money_fields("variance", variance),
                "tolerance": float(tolerance),
                "balanced": balanced,
            },
            "diagnostics": diagnostics.as_list(),
        }


def generate_trial_balance(
    accounts,
    transactions,
    as_of_date: date,
    *,
    tolerance: Decimal | None = None,
    diagnostics: Diagnostics | None = None,
) -> dict:
    return TrialBalanceService(tolerance=tolerance).generate(
        accounts, transactions, as_of_date, diagnostics=diagnostics
    )
