# ledger/api/serializers/reports.py

"""
REPORT REQUEST SERIALIZERS

Rules:
- `period` is a free token: unknown tokens are NOT rejected, they resolve
  to all_time and come back as a diagnostic
- start_date/end_date must be given together and start_date <= end_date;
  when given they override `period`
- as_of_date (balance sheet, trial balance) defaults to the period end
- today pins "now" for period resolution and aging (defaults to the local date)
"""

from rest_framework import serializers

from ledger.api.serializers.records import RECORD_COERCERS, LedgerDatasetSerializer
from ledger.services.period_resolver import PERIOD_TOKENS
from ledger.services.report_batch_service import REPORT_NAMES


class PeriodOptionsMixin(serializers.Serializer):
    period = serializers.CharField(
        required=False,
        allow_blank=True,
        help_text=f"One of {', '.join(PERIOD_TOKENS)}. Unknown tokens fall back to all_time.",
    )
    start_date = serializers.DateField(required=False, allow_null=True)
    end_date = serializers.DateField(required=False, allow_null=True)
    as_of_date = serializers.DateField(required=False, allow_null=True)
    today = serializers.DateField(required=False, allow_null=True)

    def validate(self, attrs):
        attrs = super().validate(attrs)

        start = attrs.get("start_date")
        end = attrs.get("end_date")

        if (start is None) != (end is None):
            missing = "end_date" if end is None else "start_date"
            raise serializers.ValidationError(
                {missing: "start_date and end_date must be provided together"}
            )

        if start is not None and start > end:
            raise serializers.ValidationError({"end_date": "end_date must be >= start_date"})

        return attrs


class PeriodQuerySerializer(PeriodOptionsMixin):
    """GET /periods/resolve/ query parameters."""


class ReportRequestSerializer(PeriodOptionsMixin, LedgerDatasetSerializer):
    def options(self) -> dict:
        data = self.validated_data
        return {
            key: data.get(key)
            for key in ("period", "start_date", "end_date", "as_of_date", "today")
            if data.get(key) not in (None, "")
        }

    def dataset(self) -> dict:
        data = self.validated_data
        return {key: data.get(key) or [] for key in RECORD_COERCERS}


class GeneralLedgerRequestSerializer(ReportRequestSerializer):
    account_codes = serializers.ListField(
        child=serializers.CharField(),
        min_length=1,
        help_text='Account code prefixes, e.g. ["1000"] or ["11"] for every 11xx account.',
    )

    def options(self) -> dict:
        options = super().options()
        options["account_codes"] = self.validated_data["account_codes"]
        return options


class ReportBatchRequestSerializer(ReportRequestSerializer):
    reports = serializers.ListField(
        child=serializers.CharField(),
        min_length=1,
        help_text=f"Report names to run, in order: {', '.join(REPORT_NAMES)}.",
    )
    account_codes = serializers.ListField(
        child=serializers.CharField(),
        required=False,
        default=list,
        help_text="Account code prefixes for the general_ledger report.",
    )

    def options(self) -> dict:
        options = super().options()
        if self.validated_data.get("account_codes"):
            options["account_codes"] = self.validated_data["account_codes"]
        return options
