# PATH: ledger/api/views/balances.py

"""
ACCOUNT BALANCE API VIEWS

- account-balances: per-account totals as at a date
- general-ledger: running-balance ledger for account code prefixes
"""

from drf_spectacular.utils import extend_schema

from ledger.api.serializers import GeneralLedgerRequestSerializer, ReportRequestSerializer
from ledger.api.views.base import LedgerReportView
from ledger.services.balance_service import get_account_balances
from ledger.services.diagnostics import Diagnostics
from ledger.services.report_batch_service import ReportContext


class AccountBalancesView(LedgerReportView):
    @extend_schema(
        tags=["ledger"],
        request=ReportRequestSerializer,
        responses={200: dict, 400: dict},
        description="Debit total, credit total and debit-positive balance for every account.",
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)

    def build_report(self, serializer) -> dict:
        ctx = ReportContext(dataset=serializer.dataset(), options=serializer.options())
        diagnostics = Diagnostics()
        as_of_date = ctx.as_of_date(diagnostics)

        balances = get_account_balances(
            ctx.records("accounts"),
            ctx.records("transactions"),
            as_of_date,
            diagnostics=diagnostics,
        )
        return {
            "as_of_date": as_of_date.isoformat(),
            "accounts": [bal.as_dict() for bal in balances.values()],
            "diagnostics": diagnostics.as_list(),
        }


class GeneralLedgerView(LedgerReportView):
    serializer_class = GeneralLedgerRequestSerializer
    report_name = "general_ledger"

    @extend_schema(
        tags=["ledger"],
        request=GeneralLedgerRequestSerializer,
        responses={200: dict, 400: dict},
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class AccountSummaryView(LedgerReportView):
    report_name = "account_summary"

    @extend_schema(
        tags=["ledger"],
        request=ReportRequestSerializer,
        responses={200: dict, 400: dict},
        description="Opening balance, period debits/credits and closing balance per account.",
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)
