# ledger/services/report_batch_service.py

"""
REPORT BATCH RUNNER

Runs several named reports over ONE dataset.

Rules:
- Each report gets its own Diagnostics accumulator
- A LedgerServiceError (malformed record, bad period, unknown report name)
  fails only the report that raised it; the rest of the batch still runs
- Any other exception is a bug and propagates
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable

from ledger.records import to_date
from ledger.services.aging_service import get_aged_payables, get_aged_receivables
from ledger.services.balance_service import generate_general_ledger, get_account_summary
from ledger.services.balance_sheet_service import generate_balance_sheet
from ledger.services.cash_flow_service import generate_cash_flow
from ledger.services.consistency_service import validate_receivables_consistency
from ledger.services.diagnostics import Diagnostics
from ledger.services.exceptions import LedgerServiceError, MalformedRecordError, UnknownReportError
from ledger.services.overview_service import get_financial_overview
from ledger.services.period_resolver import Period, period_from_request
from ledger.services.profit_and_loss_service import generate_profit_and_loss
from ledger.services.ratio_service import calculate_financial_ratios
from ledger.services.trial_balance_service import generate_trial_balance

logger = logging.getLogger(__name__)


@dataclass
class ReportContext:
    """Dataset + report options shared by every report of a batch."""

    dataset: dict
    options: dict

    def records(self, name: str):
        return self.dataset.get(name) or []

    def period(self, diagnostics: Diagnostics) -> Period:
        return period_from_request(
            self.options.get("period"),
            to_date(self.options.get("start_date"), field_name="start_date"),
            to_date(self.options.get("end_date"), field_name="end_date"),
            now=to_date(self.options.get("today"), field_name="today"),
            diagnostics=diagnostics,
        )

    def as_of_date(self, diagnostics: Diagnostics) -> date:
        explicit = to_date(self.options.get("as_of_date"), field_name="as_of_date")
        if explicit is not None:
            return explicit
        return self.period(diagnostics).end

    def today(self) -> date | None:
        return to_date(self.options.get("today"), field_name="today")


def _balance_sheet(ctx: ReportContext, d: Diagnostics) -> dict:
    return generate_balance_sheet(
        ctx.records("accounts"), ctx.records("transactions"), ctx.as_of_date(d), diagnostics=d
    )


def _trial_balance(ctx: ReportContext, d: Diagnostics) -> dict:
    return generate_trial_balance(
        ctx.records("accounts"), ctx.records("transactions"), ctx.as_of_date(d), diagnostics=d
    )


def _profit_and_loss(ctx: ReportContext, d: Diagnostics) -> dict:
    return generate_profit_and_loss(
        ctx.records("transactions"), ctx.records("invoices"), ctx.period(d), diagnostics=d
    )


def _aged_receivables(ctx: ReportContext, d: Diagnostics) -> dict:
    return get_aged_receivables(
        ctx.records("invoices"),
        ctx.records("customers"),
        ctx.records("transactions"),
        today=ctx.today(),
        diagnostics=d,
    )


def _aged_payables(ctx: ReportContext, d: Diagnostics) -> dict:
    return get_aged_payables(ctx.records("expenses"), today=ctx.today(), diagnostics=d)


def _ratios(ctx: ReportContext, d: Diagnostics) -> dict:
    period = ctx.period(d)
    balance_sheet = generate_balance_sheet(
        ctx.records("accounts"), ctx.records("transactions"), period.end, diagnostics=d
    )
    pnl = generate_profit_and_loss(
        ctx.records("transactions"), ctx.records("invoices"), period, diagnostics=d
    )
    return {
        "period": period.as_dict(),
        "ratios": calculate_financial_ratios(balance_sheet, pnl),
        "diagnostics": d.as_list(),
    }


def _cash_flow(ctx: ReportContext, d: Diagnostics) -> dict:
    return generate_cash_flow(
        ctx.records("accounts"), ctx.records("transactions"), ctx.period(d), diagnostics=d
    )


def _general_ledger(ctx: ReportContext, d: Diagnostics) -> dict:
    return generate_general_ledger(
        ctx.options.get("account_codes") or [],
        ctx.records("accounts"),
        ctx.records("transactions"),
        ctx.period(d),
        diagnostics=d,
    )


def _account_summary(ctx: ReportContext, d: Diagnostics) -> dict:
    return get_account_summary(
        ctx.records("accounts"), ctx.records("transactions"), ctx.period(d), diagnostics=d
    )


def _receivables_consistency(ctx: ReportContext, d: Diagnostics) -> dict:
    return validate_receivables_consistency(ctx.records("invoices"), ctx.records("transactions"))


def _overview(ctx: ReportContext, d: Diagnostics) -> dict:
    return get_financial_overview(
        ctx.records("accounts"),
        ctx.records("transactions"),
        ctx.records("invoices"),
        ctx.period(d),
        diagnostics=d,
    )


REPORTS: dict[str, Callable[[ReportContext, Diagnostics], dict]] = {
    "balance_sheet": _balance_sheet,
    "trial_balance": _trial_balance,
    "profit_and_loss": _profit_and_loss,
    "aged_receivables": _aged_receivables,
    "aged_payables": _aged_payables,
    "ratios": _ratios,
    "cash_flow": _cash_flow,
    "general_ledger": _general_ledger,
    "account_summary": _account_summary,
    "receivables_consistency": _receivables_consistency,
    "overview": _overview,
}

REPORT_NAMES = tuple(REPORTS)


def run_report(name: str, ctx: ReportContext) -> dict:
    builder = REPORTS.get(name)
    if builder is None:
        raise UnknownReportError(f"Unknown report: {name!r}")
    return builder(ctx, Diagnostics())


def run_report_batch(dataset: dict, reports, *, options: dict | None = None) -> dict:
    """
    Args:
        dataset: {"accounts": [...], "transactions": [...], "invoices": [...],
                  "customers": [...], "expenses": [...]} (any may be missing)
        reports: report names, run in the given order
        options: period | start_date + end_date | as_of_date | today | account_codes

    Returns:
        {"results": [{"report", "ok", "data"} | {"report", "ok": False, "error"}],
         "succeeded": int, "failed": int}
    """
    if not isinstance(dataset, dict):
        raise MalformedRecordError("dataset must be an object/dict")

    ctx = ReportContext(dataset=dataset, options=dict(options or {}))

    results = []
    failed = 0
    for name in reports:
        try:
            data = run_report(name, ctx)
        except LedgerServiceError as exc:
            failed += 1
            logger.warning(
                "Report failed in batch",
                extra={"report": name, "error": str(exc)},
            )
            results.append({"report": name, "ok": False, "error": str(exc)})
            continue

        results.append({"report": name, "ok": True, "data": data})

    logger.info(
        "Report batch finished",
        extra={"reports": len(results), "failed": failed},
    )

    return {
        "results": results,
        "succeeded": len(results) - failed,
        "failed": failed,
    }
