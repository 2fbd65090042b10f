# ledger/services/aging_service.py

"""
RECEIVABLES / PAYABLES AGING

Single source of truth for outstanding-receivable figures: the aged
receivables report, the per-customer outstanding list and the
consistency check all derive balances from Invoice.outstanding().

Buckets (days past due for receivables, days since expense_date for
payables):
    current        0..30
    days_31_to_60  31..60
    days_61_to_90  61..90
    over_90        91+

Rounding:
- balances keep full precision while aggregating
- every bucket is rounded to whole currency units once, at the end
- each total is the sum of its rounded buckets, so buckets always add up
- grand totals are summed from the rounded rows, never rounded separately
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from django.utils import timezone

from ledger.conf import base_currency as configured_base_currency
from ledger.records import as_customers, as_expenses, as_invoices
from ledger.services import diagnostics as diag
from ledger.services.diagnostics import Diagnostics, ensure_diagnostics
from ledger.services.money import ZERO, money_fields, q0

logger = logging.getLogger(__name__)

CURRENT = "current"
DAYS_31_TO_60 = "days_31_to_60"
DAYS_61_TO_90 = "days_61_to_90"
OVER_90 = "over_90"

BUCKETS = (CURRENT, DAYS_31_TO_60, DAYS_61_TO_90, OVER_90)

BUCKET_LABELS = {
    CURRENT: "Current (0-30 days)",
    DAYS_31_TO_60: "31-60 days",
    DAYS_61_TO_90: "61-90 days",
    OVER_90: "Over 90 days",
}

CLOSED_INVOICE_STATUSES = frozenset({"paid", "cancelled", "written_off"})
CLOSED_EXPENSE_STATUSES = frozenset({"paid", "cancelled"})

UNKNOWN_CUSTOMER = "Unknown Customer"
UNKNOWN_SUPPLIER = "Unknown Supplier"


def bucket_for_days(days: int) -> str:
    if days > 90:
        return OVER_90
    if days > 60:
        return DAYS_61_TO_90
    if days > 30:
        return DAYS_31_TO_60
    return CURRENT


def days_since(d: date | None, today: date) -> int:
    if d is None:
        return 0
    return max(0, (today - d).days)


def _empty_buckets() -> dict[str, Decimal]:
    return {bucket: ZERO for bucket in BUCKETS}


def _rounded_buckets(amounts: dict[str, Decimal]) -> dict:
    """Whole-unit buckets plus a total that is their exact sum."""
    rounded = {bucket: q0(amounts[bucket]) for bucket in BUCKETS}
    out = {}
    for bucket in BUCKETS:
        out.update(money_fields(bucket, rounded[bucket]))
    out.update(money_fields("total_balance", sum(rounded.values(), ZERO)))
    return out


def _summed_rows(rows: list[dict]) -> dict:
    """Grand totals built from already-rounded rows, so the rows add up to them."""
    summed = {
        bucket: sum((Decimal(row[f"{bucket}_minor"]) / 100 for row in rows), ZERO)
        for bucket in BUCKETS
    }
    return _rounded_buckets(summed)


def _today(today) -> date:
    return today if today is not None else timezone.localdate()


def _is_open_invoice(inv) -> bool:
    return inv.status not in CLOSED_INVOICE_STATUSES


def _customer_names(customers) -> dict[str, str]:
    return {c.id: c.customer_name for c in as_customers(customers)}


# ------------------------------------------------------------
# RECEIVABLES
# ------------------------------------------------------------


def get_aged_receivables(
    invoices,
    customers,
    transactions=(),
    *,
    today: date | None = None,
    base_currency: str | None = None,
    diagnostics: Diagnostics | None = None,
) -> dict:
    """
    Aged receivables by customer.

    `transactions` is accepted so callers can pass the full dataset; the
    aging itself is invoice based and does not read it.

    Returns:
        {
            "as_of_date": "YYYY-MM-DD",
            "base_currency": "KES",
            "customers": [{customer_id, customer_name, <buckets>, total_balance, invoices}],
            "totals": {<buckets>, total_balance},
            "diagnostics": [...]
        }
    """
    diagnostics = ensure_diagnostics(diagnostics)
    today = _today(today)
    currency = (base_currency or configured_base_currency()).upper()
    names = _customer_names(customers)

    per_customer: dict[str, dict] = {}

    for inv in as_invoices(invoices):
        if not _is_open_invoice(inv):
            continue

        balance_due = inv.outstanding(currency)
        if balance_due <= 0:
            continue

        if inv.due_date is None:
            diagnostics.warn(
                diag.MISSING_DUE_DATE,
                f"Invoice {inv.invoice_number or inv.id or '?'} has no due date; aged as current",
                once_key=inv.id or id(inv),
                invoice_id=inv.id,
            )

        days_past_due = days_since(inv.due_date, today)
        bucket = bucket_for_days(days_past_due)

        entry = per_customer.get(inv.customer_id)
        if entry is None:
            entry = {
                "customer_id": inv.customer_id,
                "customer_name": names.get(inv.customer_id) or inv.client_name or UNKNOWN_CUSTOMER,
                "amounts": _empty_buckets(),
                "invoices": [],
            }
            per_customer[inv.customer_id] = entry

        entry["amounts"][bucket] += balance_due
        entry["invoices"].append(
            {
                "id": inv.id,
                "invoice_number": inv.invoice_number,
                "invoice_date": inv.invoice_date.isoformat() if inv.invoice_date else None,
                "due_date": inv.due_date.isoformat() if inv.due_date else None,
                "status": inv.status,
                "bucket": bucket,
                "days_past_due": days_past_due,
                **money_fields("total_amount", inv.base_total(currency)),
                **money_fields("balance_due", balance_due),
            }
        )

    rows = []
    for entry in per_customer.values():
        rows.append(
            {
                "customer_id": entry["customer_id"],
                "customer_name": entry["customer_name"],
                **_rounded_buckets(entry["amounts"]),
                "invoices": entry["invoices"],
            }
        )
    rows.sort(key=lambda r: r["total_balance_minor"], reverse=True)

    totals = _summed_rows(rows)

    logger.info(
        "Aged receivables generated",
        extra={
            "as_of": today.isoformat(),
            "customers": len(rows),
            "total_balance": totals["total_balance"],
        },
    )

    return {
        "as_of_date": today.isoformat(),
        "base_currency": currency,
        "customers": rows,
        "totals": totals,
        "diagnostics": diagnostics.as_list(),
    }


def calculate_outstanding_receivables(invoices, *, base_currency: str | None = None) -> dict:
    """Invoice-based outstanding AR, rounded to whole units."""
    currency = (base_currency or configured_base_currency()).upper()

    outstanding = ZERO
    for inv in as_invoices(invoices):
        if _is_open_invoice(inv):
            outstanding += inv.outstanding(currency)

    return {
        **money_fields("outstanding_amount", q0(outstanding)),
        "calculation_method": "invoice-based",
    }


def get_outstanding_by_customer(
    invoices, customers, *, base_currency: str | None = None
) -> list[dict]:
    """
    Outstanding balance per customer, largest first.

    Customers with nothing outstanding are left out.
    """
    currency = (base_currency or configured_base_currency()).upper()
    names = _customer_names(customers)

    per_customer: dict[str, dict] = {}
    for inv in as_invoices(invoices):
        if not _is_open_invoice(inv):
            continue

        balance_due = inv.outstanding(currency)
        if balance_due <= 0:
            continue

        entry = per_customer.setdefault(
            inv.customer_id,
            {
                "customer_id": inv.customer_id,
                "customer_name": names.get(inv.customer_id) or inv.client_name or UNKNOWN_CUSTOMER,
                "outstanding": ZERO,
                "invoices": [],
            },
        )
        entry["outstanding"] += balance_due
        entry["invoices"].append(
            {
                "id": inv.id,
                "invoice_number": inv.invoice_number,
                "status": inv.status,
                **money_fields("balance_due", balance_due),
            }
        )

    rows = [
        {
            "customer_id": e["customer_id"],
            "customer_name": e["customer_name"],
            **money_fields("outstanding_amount", q0(e["outstanding"])),
            "invoices": e["invoices"],
        }
        for e in per_customer.values()
    ]
    rows.sort(key=lambda r: r["outstanding_amount_minor"], reverse=True)
    return rows


# ------------------------------------------------------------
# PAYABLES
# ------------------------------------------------------------


def get_aged_payables(
    expenses,
    *,
    today: date | None = None,
    diagnostics: Diagnostics | None = None,
) -> dict:
    """
    Unpaid expenses aged by days since expense_date.

    Expenses carry no due date or part payments: the full `amount` of an
    unpaid expense is the balance.
    """
    diagnostics = ensure_diagnostics(diagnostics)
    today = _today(today)

    counts = {bucket: 0 for bucket in BUCKETS}
    listed: dict[str, list] = {bucket: [] for bucket in BUCKETS}
    per_supplier: dict[str, dict[str, Decimal]] = {}
    unpaid = 0

    for exp in as_expenses(expenses):
        if exp.status in CLOSED_EXPENSE_STATUSES:
            continue

        if exp.expense_date is None:
            diagnostics.warn(
                diag.MISSING_EXPENSE_DATE,
                f"Expense {exp.id or '?'} has no expense date; aged as current",
                once_key=exp.id or id(exp),
                expense_id=exp.id,
            )

        days_outstanding = days_since(exp.expense_date, today)
        bucket = bucket_for_days(days_outstanding)
        supplier = exp.vendor_name or UNKNOWN_SUPPLIER

        unpaid += 1
        counts[bucket] += 1
        listed[bucket].append(
            {
                "id": exp.id,
                "expense_date": exp.expense_date.isoformat() if exp.expense_date else None,
                "vendor_name": supplier,
                "category": exp.category,
                "days_outstanding": days_outstanding,
                **money_fields("amount", exp.amount),
            }
        )
        per_supplier.setdefault(supplier, _empty_buckets())[bucket] += exp.amount

    suppliers = [
        {"vendor_name": name, **_rounded_buckets(supplier_amounts)}
        for name, supplier_amounts in per_supplier.items()
    ]
    suppliers.sort(key=lambda r: r["total_balance_minor"], reverse=True)

    totals = _summed_rows(suppliers)

    buckets = {}
    for bucket in BUCKETS:
        buckets[bucket] = {
            "label": BUCKET_LABELS[bucket],
            "amount": totals[bucket],
            "amount_minor": totals[f"{bucket}_minor"],
            "count": counts[bucket],
            "expenses": listed[bucket],
        }

    logger.info(
        "Aged payables generated",
        extra={"as_of": today.isoformat(), "unpaid": unpaid, "total_balance": totals["total_balance"]},
    )

    return {
        "as_of_date": today.isoformat(),
        "buckets": buckets,
        "suppliers": suppliers,
        "totals": totals,
        "unpaid_count": unpaid,
        "diagnostics": diagnostics.as_list(),
    }
