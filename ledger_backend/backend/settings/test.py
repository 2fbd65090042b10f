# backend/settings/test.py
"""
PATH: backend/settings/test.py

TEST SETTINGS

- Deterministic ledger configuration (ignores any local .env overrides)
- Throttling disabled so API tests never trip anon rate limits
"""

from __future__ import annotations

from .base import *  # noqa: F403
from .base import REST_FRAMEWORK

DEBUG = False

ALLOWED_HOSTS = ["testserver", "localhost", "127.0.0.1"]

TIME_ZONE = "Africa/Nairobi"

REST_FRAMEWORK = {
    **REST_FRAMEWORK,
    "DEFAULT_THROTTLE_CLASSES": (),
}

LEDGER = {
    "BASE_CURRENCY": "KES",
    "ALL_TIME_START": "2020-01-01",
    "BALANCE_SHEET_TOLERANCE": "1",
    "TRIAL_BALANCE_TOLERANCE": "0.01",
    "AR_ACCOUNT_CODE": "1200",
    "AR_CONSISTENCY_TOLERANCE": "100",
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "handlers": {"null": {"class": "logging.NullHandler"}},
    "loggers": {
        "ledger": {"handlers": ["null"], "level": "DEBUG", "propagate": False},
    },
}
