# PATH: ledger/api/views/statements.py

"""
FINANCIAL STATEMENT API VIEWS (READ-ONLY COMPUTATION)

- balance-sheet: as at as_of_date (default: period end)
- trial-balance: as at as_of_date (default: period end)
- profit-and-loss: for the period
- cash-flow: for the period

Every response carries `diagnostics`. An unbalanced sheet or trial
balance is a 200 with balanced=false and the variance, never an error.
"""

from drf_spectacular.utils import extend_schema

from ledger.api.serializers import ReportRequestSerializer
from ledger.api.views.base import LedgerReportView

_schema = extend_schema(
    tags=["ledger"],
    request=ReportRequestSerializer,
    responses={200: dict, 400: dict},
)


class BalanceSheetView(LedgerReportView):
    report_name = "balance_sheet"

    @_schema
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class TrialBalanceView(LedgerReportView):
    report_name = "trial_balance"

    @_schema
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class ProfitAndLossView(LedgerReportView):
    report_name = "profit_and_loss"

    @_schema
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class CashFlowView(LedgerReportView):
    report_name = "cash_flow"

    @_schema
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)
