# PATH: ledger/api/views/base.py

"""
LEDGER REPORT VIEW BASE

POST:
- Validates the dataset + options via the view's serializer
- Runs one named report over it
- LedgerServiceError -> 400 {"detail": ...}

No authentication: the engine is stateless and never persists what it is
sent. Rate limiting comes from the project-wide DRF throttles.
"""

from __future__ import annotations

from rest_framework import status
from rest_framework.generics import GenericAPIView
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from ledger.api.serializers import ReportRequestSerializer
from ledger.services.exceptions import LedgerServiceError
from ledger.services.report_batch_service import ReportContext, run_report


class LedgerReportView(GenericAPIView):
    permission_classes = [AllowAny]
    serializer_class = ReportRequestSerializer
    report_name: str = ""

    def build_report(self, serializer) -> dict:
        ctx = ReportContext(dataset=serializer.dataset(), options=serializer.options())
        return run_report(self.report_name, ctx)

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            report = self.build_report(serializer)
        except LedgerServiceError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)

        return Response(report, status=status.HTTP_200_OK)
