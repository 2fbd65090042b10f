# ledger/tests/test_account_classifier.py

from django.test import SimpleTestCase

from ledger.records import Account
from ledger.services import account_classifier as ac


def _acc(code, name="", account_type="", subtype=""):
    return Account.from_raw(
        {
            "account_code": code,
            "account_name": name,
            "account_type": account_type,
            "account_subtype": subtype,
        }
    )


class AccountClassifierTests(SimpleTestCase):
    """
    One test per rule of the ordered table, plus precedence.
    """

    def test_subtype_beats_code_range(self):
        c = ac.classify_account(_acc("1050", "Long-term deposit", "asset", "non_current_asset"))
        self.assertEqual(c.group, ac.NON_CURRENT_ASSETS)
        self.assertEqual(c.rule, "subtype:non_current_asset")

    def test_asset_code_range(self):
        c = ac.classify_account(_acc("1150", "Prepayments", "asset"))
        self.assertEqual((c.group, c.rule), (ac.CURRENT_ASSETS, "code:1000-1199"))

    def test_asset_name_pattern(self):
        c = ac.classify_account(_acc("1300", "Stock / Inventory", "asset"))
        self.assertEqual((c.group, c.rule), (ac.CURRENT_ASSETS, "name:cash|receivable|inventory"))

    def test_asset_default_non_current(self):
        c = ac.classify_account(_acc("1600", "Motor Vehicles", "asset"))
        self.assertEqual((c.group, c.rule), (ac.NON_CURRENT_ASSETS, "default:non_current_asset"))

    def test_fixed_asset_subtype(self):
        c = ac.classify_account(_acc("1100", "Office Furniture", "asset", "fixed_asset"))
        self.assertEqual(c.group, ac.NON_CURRENT_ASSETS)

    def test_liability_rules(self):
        cases = [
            (_acc("2600", "Overdraft", "liability", "current_liability"), ac.CURRENT_LIABILITIES),
            (_acc("2050", "Accrued Wages", "liability"), ac.CURRENT_LIABILITIES),
            (_acc("2300", "VAT Payable", "liability"), ac.CURRENT_LIABILITIES),
            (_acc("2500", "Mortgage", "liability"), ac.NON_CURRENT_LIABILITIES),
            (_acc("2100", "Term Loan", "liability", "long_term_liability"), ac.NON_CURRENT_LIABILITIES),
        ]
        for account, group in cases:
            with self.subTest(account=account.account_code):
                self.assertEqual(ac.classify_account(account).group, group)

    def test_equity_groups(self):
        cases = [
            (_acc("3000", "Share Capital", "equity"), ac.SHARE_CAPITAL),
            (_acc("3250", "Retained Earnings", "equity"), ac.RETAINED_EARNINGS),
            (_acc("3400", "Revaluation Reserve", "equity"), ac.OTHER_EQUITY),
            (_acc("3050", "Owner Drawings", "equity", "other_equity"), ac.OTHER_EQUITY),
        ]
        for account, group in cases:
            with self.subTest(account=account.account_code):
                self.assertEqual(ac.classify_account(account).group, group)

    def test_section_from_code_prefix_when_type_missing(self):
        c = ac.classify_account(_acc("2000", "Trade Creditors"))
        self.assertEqual(c.section, "liability")
        self.assertEqual(c.group, ac.CURRENT_LIABILITIES)

    def test_income_statement_accounts_roll_into_earnings(self):
        self.assertEqual(ac.classify_account(_acc("4000", "Sales")).group, ac.CURRENT_EARNINGS)
        self.assertEqual(ac.classify_account(_acc("6100", "Rent")).group, ac.CURRENT_EARNINGS)

    def test_unresolvable_account(self):
        self.assertIsNone(ac.classify_account(_acc("X100", "Suspense")))
