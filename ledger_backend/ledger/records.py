# ledger/records.py

"""
PATH: ledger/records.py

LEDGER INPUT RECORDS (FRAMEWORK-AGNOSTIC)

Purpose:
- Single, authoritative shape validation + normalization for the plain
  collections the entity store hands us (accounts, transactions, invoices,
  customers, expenses).
- Used by BOTH:
  - DRF serializers (API layer)
  - report services (which also accept raw dicts directly)

Rules:
- Money is Decimal; blank/missing amounts are zero
- Dates accept date, datetime or ISO strings; datetimes reduce to the local date
- A record with the wrong container shape (e.g. journal_entries not a list)
  raises MalformedRecordError: that fails one computation, never a batch
- Records are frozen: services can never mutate caller input
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional, Tuple

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from ledger.services.exceptions import MalformedRecordError

ASSET = "asset"
LIABILITY = "liability"
EQUITY = "equity"
REVENUE = "revenue"
EXPENSE = "expense"

ACCOUNT_TYPES = (ASSET, LIABILITY, EQUITY, REVENUE, EXPENSE)

DEBIT = "debit"
CREDIT = "credit"

# Leading code digit -> account type (1=asset ... 5-9=expense)
TYPE_BY_CODE_PREFIX = {
    "1": ASSET,
    "2": LIABILITY,
    "3": EQUITY,
    "4": REVENUE,
    "5": EXPENSE,
    "6": EXPENSE,
    "7": EXPENSE,
    "8": EXPENSE,
    "9": EXPENSE,
}

POSTED = "posted"


def _prefix(label: str, index: int | None) -> str:
    return f"{label} {index}: " if index is not None else f"{label}: "


def _require_mapping(raw, label: str, index: int | None) -> dict:
    if not isinstance(raw, dict):
        raise MalformedRecordError(f"{_prefix(label, index)}must be an object/dict")
    return raw


def _text(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def to_decimal(value, *, field_name: str = "amount") -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    if isinstance(value, bool):
        raise MalformedRecordError(f"Invalid {field_name}: {value!r}")
    try:
        if isinstance(value, Decimal):
            d = value
        else:
            d = Decimal(str(value).strip())
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise MalformedRecordError(f"Invalid {field_name}: {value!r}") from exc

    if not d.is_finite():
        raise MalformedRecordError(f"Invalid {field_name}: {value!r}")
    return d


def to_optional_decimal(value, *, field_name: str) -> Decimal | None:
    if value is None or value == "":
        return None
    return to_decimal(value, field_name=field_name)


def to_date(value, *, field_name: str = "date") -> date | None:
    """
    Normalize to a calendar date.

    Aware datetimes are converted to the current timezone first so a
    late-evening posting lands on the local business day.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        return value
    elif isinstance(value, str):
        s = value.strip()
        try:
            dt = parse_datetime(s)
            d = parse_date(s) if dt is None else None
        except ValueError as exc:
            raise MalformedRecordError(f"Invalid {field_name}: {value!r}") from exc
        if dt is None:
            if d is None:
                raise MalformedRecordError(f"Invalid {field_name}: {value!r}")
            return d
    else:
        raise MalformedRecordError(f"Invalid {field_name}: {value!r}")

    if timezone.is_aware(dt):
        dt = timezone.localtime(dt)
    return dt.date()


@dataclass(frozen=True)
class Account:
    """
    One chart-of-accounts entry.

    - account_code: unique within a chart ("1000", "4500", ...)
    - account_type: asset|liability|equity|revenue|expense ("" if unresolvable)
    - account_subtype: optional finer class (current_asset, ...)
    - normal_balance: debit|credit
    """

    account_code: str
    account_name: str
    account_type: str
    account_subtype: str = ""
    normal_balance: str = DEBIT

    @staticmethod
    def from_raw(raw: dict, *, index: int | None = None) -> "Account":
        raw = _require_mapping(raw, "Account", index)

        code = _text(raw.get("account_code"))
        if not code:
            raise MalformedRecordError(f"{_prefix('Account', index)}account_code is required")

        account_type = _text(raw.get("account_type")).lower()
        if account_type and account_type not in ACCOUNT_TYPES:
            raise MalformedRecordError(
                f"{_prefix('Account', index)}account_type must be one of "
                f"{', '.join(ACCOUNT_TYPES)}, got {raw.get('account_type')!r}"
            )
        if not account_type:
            account_type = TYPE_BY_CODE_PREFIX.get(code[:1], "")

        normal_balance = _text(raw.get("normal_balance")).lower()
        if normal_balance and normal_balance not in (DEBIT, CREDIT):
            raise MalformedRecordError(
                f"{_prefix('Account', index)}normal_balance must be 'debit' or 'credit', "
                f"got {raw.get('normal_balance')!r}"
            )
        if not normal_balance:
            normal_balance = DEBIT if account_type in (ASSET, EXPENSE) else CREDIT

        return Account(
            account_code=code,
            account_name=_text(raw.get("account_name")),
            account_type=account_type,
            account_subtype=_text(raw.get("account_subtype")).lower(),
            normal_balance=normal_balance,
        )


@dataclass(frozen=True)
class JournalLine:
    account_code: str
    debit_amount: Decimal
    credit_amount: Decimal
    description: str = ""
    account_name: str = ""

    @property
    def net(self) -> Decimal:
        """Debit-positive movement of this line."""
        return self.debit_amount - self.credit_amount

    @staticmethod
    def from_raw(raw: dict, *, index: int | None = None) -> "JournalLine":
        raw = _require_mapping(raw, "Journal entry", index)
        return JournalLine(
            account_code=_text(raw.get("account_code")),
            debit_amount=to_decimal(raw.get("debit_amount"), field_name="debit_amount"),
            credit_amount=to_decimal(raw.get("credit_amount"), field_name="credit_amount"),
            description=_text(raw.get("description")),
            account_name=_text(raw.get("account_name")),
        )


@dataclass(frozen=True)
class Transaction:
    id: str
    transaction_date: date
    status: str
    journal_entries: Tuple[JournalLine, ...]
    description: str = ""
    reference_number: str = ""
    transaction_type: str = ""
    invoice_id: str = ""

    @property
    def is_posted(self) -> bool:
        return self.status == POSTED

    def totals(self) -> Tuple[Decimal, Decimal]:
        debit = sum((l.debit_amount for l in self.journal_entries), start=Decimal("0"))
        credit = sum((l.credit_amount for l in self.journal_entries), start=Decimal("0"))
        return debit, credit

    def imbalance(self) -> Decimal:
        debit, credit = self.totals()
        return debit - credit

    @staticmethod
    def from_raw(raw: dict, *, index: int | None = None) -> "Transaction":
        raw = _require_mapping(raw, "Transaction", index)

        tx_date = to_date(raw.get("transaction_date"), field_name="transaction_date")
        if tx_date is None:
            raise MalformedRecordError(
                f"{_prefix('Transaction', index)}transaction_date is required"
            )

        raw_lines = raw.get("journal_entries")
        if raw_lines is None:
            raw_lines = []
        if not isinstance(raw_lines, (list, tuple)):
            raise MalformedRecordError(
                f"{_prefix('Transaction', index)}journal_entries must be a list"
            )

        return Transaction(
            id=_text(raw.get("id")),
            transaction_date=tx_date,
            status=_text(raw.get("status")).lower(),
            journal_entries=tuple(
                JournalLine.from_raw(line, index=i) for i, line in enumerate(raw_lines)
            ),
            description=_text(raw.get("description")),
            reference_number=_text(raw.get("reference_number")),
            transaction_type=_text(raw.get("transaction_type")).lower(),
            invoice_id=_text(raw.get("invoice_id")),
        )


@dataclass(frozen=True)
class Payment:
    amount: Decimal
    base_currency_amount: Decimal | None = None

    @property
    def base_amount(self) -> Decimal:
        # A zero base amount falls through to `amount`, like an unset one.
        return self.base_currency_amount or self.amount or Decimal("0")

    @staticmethod
    def from_raw(raw: dict, *, index: int | None = None) -> "Payment":
        raw = _require_mapping(raw, "Payment", index)
        return Payment(
            amount=to_decimal(raw.get("amount"), field_name="payment amount"),
            base_currency_amount=to_optional_decimal(
                raw.get("base_currency_amount"), field_name="base_currency_amount"
            ),
        )


@dataclass(frozen=True)
class Invoice:
    id: str
    customer_id: str
    total_amount: Decimal
    status: str
    invoice_number: str = ""
    invoice_date: Optional[date] = None
    due_date: Optional[date] = None
    balance_due: Decimal | None = None
    currency: str = ""
    exchange_rate: Decimal | None = None
    base_currency_total: Decimal | None = None
    payments_received: Tuple[Payment, ...] = ()
    client_name: str = ""

    def base_total(self, base_currency: str) -> Decimal:
        """
        Invoice amount in the base currency:
        base_currency_total, else total * exchange_rate for foreign invoices,
        else total_amount.
        """
        if self.base_currency_total:
            return self.base_currency_total
        if self.currency != base_currency and self.exchange_rate:
            return self.total_amount * self.exchange_rate
        return self.total_amount or Decimal("0")

    def payments_total(self) -> Decimal:
        return sum((p.base_amount for p in self.payments_received), start=Decimal("0"))

    def outstanding(self, base_currency: str) -> Decimal:
        return max(Decimal("0"), self.base_total(base_currency) - self.payments_total())

    @staticmethod
    def from_raw(raw: dict, *, index: int | None = None) -> "Invoice":
        raw = _require_mapping(raw, "Invoice", index)

        raw_payments = raw.get("payments_received")
        if raw_payments is None:
            raw_payments = []
        if not isinstance(raw_payments, (list, tuple)):
            raise MalformedRecordError(
                f"{_prefix('Invoice', index)}payments_received must be a list"
            )

        return Invoice(
            id=_text(raw.get("id")),
            invoice_number=_text(raw.get("invoice_number")),
            customer_id=_text(raw.get("customer_id")),
            invoice_date=to_date(raw.get("invoice_date"), field_name="invoice_date"),
            due_date=to_date(raw.get("due_date"), field_name="due_date"),
            total_amount=to_decimal(raw.get("total_amount"), field_name="total_amount"),
            balance_due=to_optional_decimal(raw.get("balance_due"), field_name="balance_due"),
            status=_text(raw.get("status")).lower(),
            currency=_text(raw.get("currency")).upper(),
            exchange_rate=to_optional_decimal(
                raw.get("exchange_rate"), field_name="exchange_rate"
            ),
            base_currency_total=to_optional_decimal(
                raw.get("base_currency_total"), field_name="base_currency_total"
            ),
            payments_received=tuple(
                Payment.from_raw(p, index=i) for i, p in enumerate(raw_payments)
            ),
            client_name=_text(raw.get("client_name")),
        )


@dataclass(frozen=True)
class Customer:
    id: str
    customer_name: str = ""

    @staticmethod
    def from_raw(raw: dict, *, index: int | None = None) -> "Customer":
        raw = _require_mapping(raw, "Customer", index)
        return Customer(id=_text(raw.get("id")), customer_name=_text(raw.get("customer_name")))


@dataclass(frozen=True)
class Expense:
    amount: Decimal
    status: str
    id: str = ""
    expense_date: Optional[date] = None
    vendor_name: str = ""
    category: str = ""
    tax_amount: Decimal | None = None

    @staticmethod
    def from_raw(raw: dict, *, index: int | None = None) -> "Expense":
        raw = _require_mapping(raw, "Expense", index)
        return Expense(
            id=_text(raw.get("id")),
            expense_date=to_date(raw.get("expense_date"), field_name="expense_date"),
            amount=to_decimal(raw.get("amount"), field_name="amount"),
            vendor_name=_text(raw.get("vendor_name")),
            category=_text(raw.get("category")),
            status=_text(raw.get("status")).lower(),
            tax_amount=to_optional_decimal(raw.get("tax_amount"), field_name="tax_amount"),
        )


# ------------------------------------------------------------
# COLLECTION COERCION
# ------------------------------------------------------------


def _coerce_many(items: Iterable[Any] | None, record_cls, label: str) -> list:
    if items is None:
        return []
    if isinstance(items, (str, bytes, dict)) or not isinstance(items, Iterable):
        raise MalformedRecordError(f"{label} must be a list")

    out = []
    for i, item in enumerate(items):
        if isinstance(item, record_cls):
            out.append(item)
        else:
            out.append(record_cls.from_raw(item, index=i))
    return out


def as_accounts(items) -> list[Account]:
    return _coerce_many(items, Account, "accounts")


def as_transactions(items) -> list[Transaction]:
    return _coerce_many(items, Transaction, "transactions")


def as_invoices(items) -> list[Invoice]:
    return _coerce_many(items, Invoice, "invoices")


def as_customers(items) -> list[Customer]:
    return _coerce_many(items, Customer, "customers")


def as_expenses(items) -> list[Expense]:
    return _coerce_many(items, Expense, "expenses")
