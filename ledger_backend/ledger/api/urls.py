# ledger/api/urls.py

from django.urls import path

from ledger.api.views import (
    AccountBalancesView,
    AccountSummaryView,
    AgedPayablesView,
    AgedReceivablesView,
    BalanceSheetView,
    CashFlowView,
    FinancialOverviewView,
    GeneralLedgerView,
    PeriodResolveView,
    ProfitAndLossView,
    RatiosView,
    ReceivablesConsistencyView,
    ReportBatchView,
    TrialBalanceView,
)

urlpatterns = [
    path("periods/resolve/", PeriodResolveView.as_view(), name="period-resolve"),
    # Balances
    path("account-balances/", AccountBalancesView.as_view(), name="account-balances"),
    path("account-summary/", AccountSummaryView.as_view(), name="account-summary"),
    path("general-ledger/", GeneralLedgerView.as_view(), name="general-ledger"),
    # Statements
    path("balance-sheet/", BalanceSheetView.as_view(), name="balance-sheet"),
    path("trial-balance/", TrialBalanceView.as_view(), name="trial-balance"),
    path("profit-and-loss/", ProfitAndLossView.as_view(), name="profit-and-loss"),
    path("cash-flow/", CashFlowView.as_view(), name="cash-flow"),
    # Aging / receivables
    path("aged-receivables/", AgedReceivablesView.as_view(), name="aged-receivables"),
    path("aged-payables/", AgedPayablesView.as_view(), name="aged-payables"),
    path(
        "receivables-consistency/",
        ReceivablesConsistencyView.as_view(),
        name="receivables-consistency",
    ),
    # KPIs
    path("ratios/", RatiosView.as_view(), name="ratios"),
    path("overview/", FinancialOverviewView.as_view(), name="ledger-overview"),
    path("reports/batch/", ReportBatchView.as_view(), name="report-batch"),
]
