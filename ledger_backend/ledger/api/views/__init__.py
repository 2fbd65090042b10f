# ledger/api/views/__init__.py

"""
ledger.api.views package

Every report view is a stateless POST over a caller-supplied dataset.
"""

from ledger.api.views.analysis import FinancialOverviewView, RatiosView, ReportBatchView
from ledger.api.views.balances import AccountBalancesView, AccountSummaryView, GeneralLedgerView
from ledger.api.views.periods import PeriodResolveView
from ledger.api.views.receivables import (
    AgedPayablesView,
    AgedReceivablesView,
    ReceivablesConsistencyView,
)
from ledger.api.views.statements import (
    BalanceSheetView,
    CashFlowView,
    ProfitAndLossView,
    TrialBalanceView,
)

__all__ = [
    "PeriodResolveView",
    "AccountBalancesView",
    "AccountSummaryView",
    "GeneralLedgerView",
    "BalanceSheetView",
    "TrialBalanceView",
    "ProfitAndLossView",
    "CashFlowView",
    "AgedReceivablesView",
    "AgedPayablesView",
    "ReceivablesConsistencyView",
    "RatiosView",
    "FinancialOverviewView",
    "ReportBatchView",
]
