# ledger/apps.py

"""
LEDGER APP CONFIG

Ledger Aggregation Engine:
- Account balances, balance sheet, trial balance, profit & loss
- Receivables / payables aging
- Ratios, KPI overview, cash flow, general ledger

Golden Rule:
- Read-only: reports are derived from the records passed in, nothing is stored.
"""

from django.apps import AppConfig


class LedgerConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "ledger"
    verbose_name = "Ledger Aggregation Engine"
