# ledger/services/account_classifier.py

"""
PATH: ledger/services/account_classifier.py

ACCOUNT CLASSIFIER (AUTHORITATIVE)

This module answers ONE question:
"Where does this account go on the balance sheet?"

Evaluation is an explicit ordered rule table, first match wins:
1. account_subtype (when the chart sets one we recognise)
2. account code range
3. account name pattern (last-resort heuristic)
4. section default

Each rule is named so a report can show why an account landed where it did,
and each can be unit tested on its own.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from ledger.records import (
    ASSET,
    EQUITY,
    EXPENSE,
    LIABILITY,
    REVENUE,
    TYPE_BY_CODE_PREFIX,
    Account,
)

CURRENT_ASSETS = "current_assets"
NON_CURRENT_ASSETS = "non_current_assets"
CURRENT_LIABILITIES = "current_liabilities"
NON_CURRENT_LIABILITIES = "non_current_liabilities"
SHARE_CAPITAL = "share_capital"
RETAINED_EARNINGS = "retained_earnings"
OTHER_EQUITY = "other_equity"

# Revenue/expense balances are not balance sheet lines; they roll into
# equity as current period earnings.
CURRENT_EARNINGS = "current_earnings"


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    group: str
    matches: Callable[[Account], bool]


@dataclass(frozen=True)
class Classification:
    section: str
    group: str
    rule: str


def subtype_is(*subtypes: str) -> Callable[[Account], bool]:
    wanted = frozenset(subtypes)
    return lambda acc: acc.account_subtype in wanted


def code_matches(pattern: str) -> Callable[[Account], bool]:
    rx = re.compile(pattern)
    return lambda acc: bool(rx.match(acc.account_code))


def code_between(low: int, high: int) -> Callable[[Account], bool]:
    def _match(acc: Account) -> bool:
        digits = re.match(r"\d{4}", acc.account_code)
        return bool(digits) and low <= int(digits.group(0)) <= high

    return _match


def name_contains(*needles: str) -> Callable[[Account], bool]:
    lowered = tuple(n.lower() for n in needles)
    return lambda acc: any(n in acc.account_name.lower() for n in lowered)


def always(acc: Account) -> bool:
    return True


ASSET_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule("subtype:current_asset", CURRENT_ASSETS, subtype_is("current_asset")),
    ClassificationRule(
        "subtype:non_current_asset",
        NON_CURRENT_ASSETS,
        subtype_is("non_current_asset", "fixed_asset", "intangible_asset", "long_term_investment"),
    ),
    ClassificationRule("code:1000-1199", CURRENT_ASSETS, code_matches(r"^1[01]\d\d")),
    ClassificationRule(
        "name:cash|receivable|inventory",
        CURRENT_ASSETS,
        name_contains("cash", "receivable", "inventory"),
    ),
    ClassificationRule("default:non_current_asset", NON_CURRENT_ASSETS, always),
)

LIABILITY_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        "subtype:current_liability", CURRENT_LIABILITIES, subtype_is("current_liability")
    ),
    ClassificationRule(
        "subtype:non_current_liability",
        NON_CURRENT_LIABILITIES,
        subtype_is("non_current_liability", "long_term_liability"),
    ),
    ClassificationRule("code:2000-2199", CURRENT_LIABILITIES, code_matches(r"^2[01]\d\d")),
    ClassificationRule("name:payable", CURRENT_LIABILITIES, name_contains("payable")),
    ClassificationRule("default:non_current_liability", NON_CURRENT_LIABILITIES, always),
)

EQUITY_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule("subtype:share_capital", SHARE_CAPITAL, subtype_is("share_capital")),
    ClassificationRule(
        "subtype:retained_earnings", RETAINED_EARNINGS, subtype_is("retained_earnings")
    ),
    ClassificationRule("subtype:other_equity", OTHER_EQUITY, subtype_is("other_equity")),
    ClassificationRule("code:3000-3199", SHARE_CAPITAL, code_between(3000, 3199)),
    ClassificationRule("code:3200-3299", RETAINED_EARNINGS, code_between(3200, 3299)),
    ClassificationRule("default:other_equity", OTHER_EQUITY, always),
)

RULES_BY_SECTION = {
    ASSET: ASSET_RULES,
    LIABILITY: LIABILITY_RULES,
    EQUITY: EQUITY_RULES,
}


def section_for(account: Account) -> str:
    """Account type first, then the leading code digit."""
    if account.account_type:
        return account.account_type
    return TYPE_BY_CODE_PREFIX.get(account.account_code[:1], "")


def classify_account(account: Account) -> Optional[Classification]:
    """
    Returns None when the account has no resolvable type at all.
    """
    section = section_for(account)

    if section in (REVENUE, EXPENSE):
        return Classification(section=section, group=CURRENT_EARNINGS, rule=f"type:{section}")

    rules = RULES_BY_SECTION.get(section)
    if rules is None:
        return None

    for rule in rules:
        if rule.matches(account):
            return Classification(section=section, group=rule.group, rule=rule.name)

    # Unreachable: every table ends with a default rule.
    return None
