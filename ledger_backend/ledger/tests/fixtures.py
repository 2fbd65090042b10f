# ledger/tests/fixtures.py

"""
Shared raw-dict datasets for ledger tests.

January 2026 books of a small trading business, every transaction
balanced. As at 2026-01-31:

    Cash 1000            80,000 Dr
    Accounts Receivable  50,000 Dr
    Equipment            30,000 Dr
    Bank Loan            20,000 Cr
    Share Capital       100,000 Cr
    Sales Revenue        50,000 Cr
    Rent Expense         10,000 Dr
"""

from __future__ import annotations

import copy
from datetime import date

JAN_START = date(2026, 1, 1)
JAN_END = date(2026, 1, 31)

ACCOUNTS = [
    {"account_code": "1000", "account_name": "Cash at Bank", "account_type": "asset"},
    {"account_code": "1200", "account_name": "Accounts Receivable", "account_type": "asset"},
    {"account_code": "1500", "account_name": "Equipment", "account_type": "asset"},
    {"account_code": "2000", "account_name": "Accounts Payable", "account_type": "liability"},
    {"account_code": "2500", "account_name": "Bank Loan", "account_type": "liability"},
    {"account_code": "3000", "account_name": "Share Capital", "account_type": "equity"},
    {"account_code": "3200", "account_name": "Retained Earnings", "account_type": "equity"},
    {"account_code": "4000", "account_name": "Sales Revenue", "account_type": "revenue"},
    {"account_code": "5000", "account_name": "Cost of Sales", "account_type": "expense"},
    {"account_code": "6100", "account_name": "Rent Expense", "account_type": "expense"},
    {"account_code": "8000", "account_name": "Interest Expense", "account_type": "expense"},
]


def line(code: str, debit="0", credit="0", **extra) -> dict:
    return {"account_code": code, "debit_amount": debit, "credit_amount": credit, **extra}


def tx(tx_id: str, tx_date: str, lines: list, *, status="posted", **extra) -> dict:
    return {
        "id": tx_id,
        "transaction_date": tx_date,
        "status": status,
        "journal_entries": lines,
        **extra,
    }


TRANSACTIONS = [
    tx(
        "t1",
        "2026-01-05",
        [line("1000", debit="100000"), line("3000", credit="100000")],
        description="Equity injection by owner",
        transaction_type="journal",
    ),
    tx(
        "t2",
        "2026-01-10",
        [
            line("1200", debit="50000", account_name="Accounts Receivable"),
            line("4000", credit="50000"),
        ],
        description="Invoice INV-001",
        transaction_type="sale",
        invoice_id="inv-1",
    ),
    tx(
        "t3",
        "2026-01-15",
        [line("6100", debit="10000"), line("1000", credit="10000")],
        description="January rent",
        transaction_type="expense",
    ),
    tx(
        "t4",
        "2026-01-20",
        [line("1500", debit="30000"), line("1000", credit="30000")],
        description="Asset purchase - delivery bike",
        transaction_type="journal",
    ),
    tx(
        "t5",
        "2026-01-25",
        [line("1000", debit="20000"), line("2500", credit="20000")],
        description="Bank loan drawdown",
        transaction_type="journal",
    ),
    # never counts: not posted
    tx(
        "t6",
        "2026-01-26",
        [line("1000", debit="99999"), line("4000", credit="99999")],
        status="draft",
        description="Draft sale",
        transaction_type="sale",
    ),
]

INVOICES = [
    {
        "id": "inv-1",
        "invoice_number": "INV-001",
        "customer_id": "c1",
        "invoice_date": "2026-01-10",
        "due_date": "2026-02-09",
        "total_amount": "50000",
        "status": "sent",
        "currency": "KES",
        "payments_received": [],
    },
]

CUSTOMERS = [
    {"id": "c1", "customer_name": "Acme Traders"},
    {"id": "c2", "customer_name": "Baraka Stores"},
]

EXPENSES = [
    {
        "id": "e1",
        "expense_date": "2026-01-05",
        "amount": "1500",
        "vendor_name": "Kenya Power",
        "category": "utilities",
        "status": "pending",
    },
    {
        "id": "e2",
        "expense_date": "2025-11-20",
        "amount": "4000.50",
        "vendor_name": "Office Mart",
        "category": "supplies",
        "status": "approved",
    },
    {
        "id": "e3",
        "expense_date": "2026-01-02",
        "amount": "900",
        "vendor_name": "Kenya Power",
        "status": "paid",
    },
]


def dataset(**overrides) -> dict:
    """Deep copy of the January dataset, with optional replacements."""
    data = {
        "accounts": copy.deepcopy(ACCOUNTS),
        "transactions": copy.deepcopy(TRANSACTIONS),
        "invoices": copy.deepcopy(INVOICES),
        "customers": copy.deepcopy(CUSTOMERS),
        "expenses": copy.deepcopy(EXPENSES),
    }
    data.update(overrides)
    return data
