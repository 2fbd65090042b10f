# PATH: ledger/api/views/analysis.py

"""
KPI API VIEWS

- ratios: liquidity, leverage and return ratios for the period
- overview: one-call snapshot (balance sheet totals, P&L headlines,
  ratios, outstanding receivables)
- reports/batch: several named reports over one dataset; a failing
  report does not fail the batch
"""

from drf_spectacular.utils import extend_schema

from ledger.api.serializers import ReportBatchRequestSerializer, ReportRequestSerializer
from ledger.api.views.base import LedgerReportView
from ledger.services.report_batch_service import run_report_batch


class RatiosView(LedgerReportView):
    report_name = "ratios"

    @extend_schema(
        tags=["ledger"],
        request=ReportRequestSerializer,
        responses={200: dict, 400: dict},
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class FinancialOverviewView(LedgerReportView):
    report_name = "overview"

    @extend_schema(
        tags=["ledger"],
        request=ReportRequestSerializer,
        responses={200: dict, 400: dict},
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)


class ReportBatchView(LedgerReportView):
    serializer_class = ReportBatchRequestSerializer

    @extend_schema(
        tags=["ledger"],
        request=ReportBatchRequestSerializer,
        responses={200: dict, 400: dict},
    )
    def post(self, request, *args, **kwargs):
        return super().post(request, *args, **kwargs)

    def build_report(self, serializer) -> dict:
        return run_report_batch(
            serializer.dataset(),
            serializer.validated_data["reports"],
            options=serializer.options(),
        )
