# ledger/api/serializers/records.py
"""
LEDGER DATASET SERIALIZER

Notes:
- DRF checks the outer shape (lists of objects).
- Record-level rules live in ledger.records and are applied here, so a
  malformed record is a 400 with a field-keyed error, same as any other
  validation failure.
"""

from __future__ import annotations

from rest_framework import serializers

from ledger.records import (
    as_accounts,
    as_customers,
    as_expenses,
    as_invoices,
    as_transactions,
)
from ledger.services.exceptions import MalformedRecordError

RECORD_COERCERS = {
    "accounts": as_accounts,
    "transactions": as_transactions,
    "invoices": as_invoices,
    "customers": as_customers,
    "expenses": as_expenses,
}


def _record_list(help_text: str) -> serializers.ListField:
    return serializers.ListField(
        child=serializers.DictField(),
        required=False,
        default=list,
        help_text=help_text,
    )


class LedgerDatasetSerializer(serializers.Serializer):
    accounts = _record_list("Chart of accounts entries.")
    transactions = _record_list("Transactions with journal_entries lines.")
    invoices = _record_list("Customer invoices.")
    customers = _record_list("Customers, matched to invoices by id.")
    expenses = _record_list("Supplier expenses.")

    def validate(self, attrs):
        attrs = super().validate(attrs)

        errors = {}
        for field_name, coerce in RECORD_COERCERS.items():
            if field_name not in attrs:
                continue
            try:
                attrs[field_name] = coerce(attrs[field_name])
            except MalformedRecordError as exc:
                errors[field_name] = [str(exc)]

        if errors:
            raise serializers.ValidationError(errors)

        return attrs
