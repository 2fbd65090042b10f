# PATH: ledger/api/views/receivables.py

"""
AGING + RECEIVABLES API VIEWS

- aged-receivables: open invoices by customer, bucketed by days past due
- aged-payables: unpaid expenses, bucketed by days since expense_date
- receivables-consistency: invoice AR vs ledger AR + linkage gaps

`today` in the request pins the aging date (default: local date).
"""

from drf_spectacular.utils import extend_schema

from ledger.api.serializers import ReportRequestSerializer
from ledger.api.views.base import LedgerReportView


class AgedReceivablesView(LedgerReportView):
    report_name = "aged_receivables"

    @extend_schema(
        tags=["ledger"],
        request=ReportRequestSerializer,
        responses={200: dict, 400: dict},
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class AgedPayablesView(LedgerReportView):
    report_name = "aged_payables"

    @extend_schema(
        tags=["ledger"],
        request=ReportRequestSerializer,
        responses={200: dict, 400: dict},
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class ReceivablesConsistencyView(LedgerReportView):
    report_name = "receivables_consistency"

    @extend_schema(
        tags=["ledger"],
        request=ReportRequestSerializer,
        responses={200: dict, 400: dict},
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)
