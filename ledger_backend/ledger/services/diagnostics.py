# ledger/services/diagnostics.py

"""
DIAGNOSTICS (NON-FATAL WARNING CHANNEL)

Every named fallback rule of the engine reports here instead of raising,
so a batch of reports can complete over imperfect data while the caller
still sees what was dropped or defaulted.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

UNKNOWN_PERIOD_TOKEN = "unknown_period_token"
UNKNOWN_ACCOUNT_CODE = "unknown_account_code"
UNBALANCED_TRANSACTION = "unbalanced_transaction"
MISSING_DUE_DATE = "missing_due_date"
MISSING_EXPENSE_DATE = "missing_expense_date"
CONTRA_BALANCE = "contra_balance"
UNCLASSIFIED_ACCOUNT = "unclassified_account"


@dataclass
class Diagnostic:
    code: str
    message: str
    context: dict = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "context": dict(self.context)}


@dataclass
class Diagnostics:
    """
    Accumulates warnings for one computation.

    `once_key` de-duplicates repeated warnings (e.g. the same unknown
    account code seen on many journal lines).
    """

    items: list[Diagnostic] = field(default_factory=list)
    _seen: set = field(default_factory=set, repr=False)

    def warn(self, code: str, message: str, *, once_key=None, **context) -> None:
        if once_key is not None:
            key = (code, once_key)
            if key in self._seen:
                return
            self._seen.add(key)

        self.items.append(Diagnostic(code=code, message=message, context=context))
        logger.warning(message, extra={"diagnostic_code": code, **context})

    def codes(self) -> list[str]:
        return [d.code for d in self.items]

    def as_list(self) -> list[dict]:
        return [d.as_dict() for d in self.items]

    def __len__(self) -> int:
        return len(self.items)


def ensure_diagnostics(diagnostics: Diagnostics | None) -> Diagnostics:
    return diagnostics if diagnostics is not None else Diagnostics()
