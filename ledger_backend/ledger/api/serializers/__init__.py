# ledger/api/serializers/__init__.py

from ledger.api.serializers.records import LedgerDatasetSerializer
from ledger.api.serializers.reports import (
    GeneralLedgerRequestSerializer,
    PeriodQuerySerializer,
    ReportBatchRequestSerializer,
    ReportRequestSerializer,
)

__all__ = [
    "LedgerDatasetSerializer",
    "PeriodQuerySerializer",
    "ReportRequestSerializer",
    "GeneralLedgerRequestSerializer",
    "ReportBatchRequestSerializer",
]
