# ledger/conf.py

"""
LEDGER ENGINE SETTINGS

Reads settings.LEDGER with per-key defaults so services work even when a
deployment only overrides part of the dict.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.conf import settings

DEFAULTS = {
    "BASE_CURRENCY": "KES",
    "ALL_TIME_START": "2020-01-01",
    "BALANCE_SHEET_TOLERANCE": "1",
    "TRIAL_BALANCE_TOLERANCE": "0.01",
    "AR_ACCOUNT_CODE": "1200",
    "AR_CONSISTENCY_TOLERANCE": "100",
}


def ledger_setting(name: str):
    overrides = getattr(settings, "LEDGER", None) or {}
    if name in overrides and overrides[name] not in (None, ""):
        return overrides[name]
    return DEFAULTS[name]


def base_currency() -> str:
    return str(ledger_setting("BASE_CURRENCY")).strip().upper()


def all_time_start() -> date:
    value = ledger_setting("ALL_TIME_START")
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).strip())


def decimal_setting(name: str) -> Decimal:
    return Decimal(str(ledger_setting(name)))
