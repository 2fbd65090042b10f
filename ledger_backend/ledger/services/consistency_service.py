# ledger/services/consistency_service.py

"""
RECEIVABLES CONSISTENCY CHECK

Compares invoice-based AR (the figure every report shows) with AR as the
ledger sees it, and looks for linkage gaps between invoices and
transactions.

Issues:
- calculation_mismatch: |invoice AR - ledger AR| >= AR_CONSISTENCY_TOLERANCE
- missing_transactions: open, non-draft invoices with no linked transaction
- orphaned_transactions: sale transactions hitting AR for invoices that
  no longer exist
"""

from __future__ import annotations

import logging

from ledger.conf import base_currency, decimal_setting, ledger_setting
from ledger.records import JournalLine, as_invoices, as_transactions
from ledger.services.money import ZERO, money_fields, q0

logger = logging.getLogger(__name__)

AR_ACCOUNT_NAME = "Accounts Receivable"

UNTRACKED_STATUSES = frozenset({"draft", "paid", "cancelled", "written_off"})
CLOSED_STATUSES = frozenset({"paid", "cancelled", "written_off"})


def _is_ar_line(line: JournalLine, ar_code: str) -> bool:
    return line.account_code == ar_code or line.account_name == AR_ACCOUNT_NAME


def validate_receivables_consistency(invoices, transactions) -> dict:
    invoices = as_invoices(invoices)
    transactions = as_transactions(transactions)

    ar_code = str(ledger_setting("AR_ACCOUNT_CODE"))
    tolerance = decimal_setting("AR_CONSISTENCY_TOLERANCE")
    currency = base_currency()

    invoice_ar = q0(
        sum((inv.outstanding(currency) for inv in invoices if inv.status not in CLOSED_STATUSES), ZERO)
    )

    invoice_ids = {inv.id for inv in invoices if inv.id}

    ledger_ar = ZERO
    seen: set = set()
    for tx in transactions:
        if not tx.invoice_id or tx.invoice_id not in invoice_ids:
            continue
        key = tx.id or id(tx)
        if key in seen:
            continue
        seen.add(key)
        for line in tx.journal_entries:
            if _is_ar_line(line, ar_code):
                ledger_ar += line.net
    ledger_ar = max(ZERO, ledger_ar)

    difference = abs(invoice_ar - ledger_ar)
    issues = []

    if difference >= tolerance:
        issues.append(
            {
                "type": "calculation_mismatch",
                "severity": "medium",
                "message": (
                    f"Invoice-based AR ({currency} {invoice_ar:,}) differs from ledger AR "
                    f"({currency} {q0(ledger_ar):,}) by {currency} {q0(difference):,}"
                ),
                "recommendation": "Review transactions for unlinked or duplicate entries.",
            }
        )

    linked_invoice_ids = {tx.invoice_id for tx in transactions if tx.invoice_id}
    missing = sum(
        1
        for inv in invoices
        if inv.status not in UNTRACKED_STATUSES and inv.id not in linked_invoice_ids
    )
    if missing:
        issues.append(
            {
                "type": "missing_transactions",
                "severity": "high",
                "count": missing,
                "message": f"{missing} active invoices have no corresponding accounting transaction.",
                "recommendation": "Regenerate the accounting entries for these invoices.",
            }
        )

    orphaned = sum(
        1
        for tx in transactions
        if tx.transaction_type == "sale"
        and tx.invoice_id
        and tx.invoice_id not in invoice_ids
        and any(_is_ar_line(line, ar_code) for line in tx.journal_entries)
    )
    if orphaned:
        issues.append(
            {
                "type": "orphaned_transactions",
                "severity": "medium",
                "count": orphaned,
                "message": f"{orphaned} transactions reference missing invoices but still affect AR.",
                "recommendation": "Reconcile these transactions to a suspense account.",
            }
        )

    is_consistent = not issues
    if not is_consistent:
        logger.warning(
            "Receivables consistency issues found",
            extra={"issues": [i["type"] for i in issues], "difference": str(difference)},
        )

    return {
        "is_consistent": is_consistent,
        "issues": issues,
        **money_fields("invoice_based_ar", invoice_ar),
        **money_fields("transaction_based_ar", q0(ledger_ar)),
        **money_fields("difference", q0(difference)),
        "tolerance": float(tolerance),
    }
