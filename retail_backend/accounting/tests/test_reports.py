# accounting/tests/test_reports.py

from __future__ import annotations

from datetime import date
from decimal import Decimal

from django.test import TestCase

from accounting.models.account_type import AccountType
from accounting.models.balance import AccountBalance
from accounting.models.journal_line import JournalLine
from accounting.services.account_registry import disable_account
from accounting.services.balance_sheet_service import generate_balance_sheet
from accounting.services.exceptions import ImbalanceDetected, Unbalanced
from accounting.services.financial_statement_service import validate_financials
from accounting.services.income_statement_service import get_income_statement
from accounting.services.journal_entry_service import create_journal_entry
from accounting.services.trial_balance_service import TrialBalanceService
from accounting.tests.factories import D1, D2, D3, make_account, post


def _scenario_chart():
    return {
        "cash": make_account("1000", "Cash", AccountType.ASSET),
        "ap": make_account("2000", "Accounts Payable", AccountType.LIABILITY),
        "revenue": make_account("4000", "Revenue", AccountType.INCOME),
        "cogs": make_account("5000", "COGS", AccountType.COGS),
    }


class CashRevenueScenarioTests(TestCase):
    def setUp(self):
        self.chart = _scenario_chart()
        post(self.chart["cash"], self.chart["revenue"], "100", entry_date=D1)

    def test_income_statement(self):
        report = get_income_statement(start_date=date(2026, 1, 1), end_date=date(2026, 1, 31))

        self.assertEqual(report["total_income"], 100.0)
        self.assertEqual(report["total_cogs"], 0.0)
        self.assertEqual(report["gross_profit"], 100.0)
        self.assertEqual(report["total_expenses"], 0.0)
        self.assertEqual(report["net_income"], 100.0)
        self.assertEqual(report["net_income_minor"], 10000)
        self.assertEqual(report["start_date"], "2026-01-01")
        self.assertEqual(report["end_date"], "2026-01-31")

    def test_trial_balance(self):
        report = TrialBalanceService().generate(as_of=D1)
        rows = {row["code"]: row for row in report["trial_balance"]}

        self.assertEqual(set(rows), {"1000", "4000"})
        self.assertEqual(rows["1000"]["total_debit"], 100.0)
        self.assertEqual(rows["1000"]["total_credit"], 0.0)
        self.assertEqual(rows["1000"]["type"], AccountType.ASSET)
        self.assertEqual(rows["4000"]["total_credit"], 100.0)
        self.assertEqual(rows["4000"]["balance"], 100.0)

        totals = report["totals"]
        self.assertEqual(totals["total_debit"], totals["total_credit"])
        self.assertEqual(totals["total_debit_minor"], 10000)
        self.assertTrue(totals["balanced"])

    def test_trial_balance_before_first_entry_is_empty(self):
        report = TrialBalanceService().generate(as_of=date(2026, 1, 1))
        self.assertEqual(report["trial_balance"], [])
        self.assertTrue(report["totals"]["balanced"])

    def test_rejected_entry_never_appears(self):
        with self.assertRaises(Unbalanced) as ctx:
            create_journal_entry(
                description="Bad",
                entry_date=D1,
                lines=[
                    {"account": self.chart["cash"], "debit": 100},
                    {"account": self.chart["revenue"], "credit": 90},
                ],
            )
        self.assertEqual(
            (ctx.exception.total_debit, ctx.exception.total_credit),
            (Decimal("100.00"), Decimal("90.00")),
        )

        rows = {row["code"]: row for row in TrialBalanceService().generate(as_of=D1)["trial_balance"]}
        self.assertEqual(rows["1000"]["total_debit"], 100.0)
        self.assertEqual(rows["4000"]["total_credit"], 100.0)

    def test_reports_are_idempotent(self):
        self.assertEqual(
            TrialBalanceService().generate(as_of=D2),
            TrialBalanceService().generate(as_of=D2),
        )
        self.assertEqual(
            get_income_statement(start_date=D1, end_date=D2),
            get_income_statement(start_date=D1, end_date=D2),
        )
        self.assertEqual(
            generate_balance_sheet(as_of_date=D2),
            generate_balance_sheet(as_of_date=D2),
        )


class StatementIdentityTests(TestCase):
    """
    Owner puts in 1000 cash, buys 300 stock on credit, sells for 500,
    books 100 cost of sales and pays 200 rent.
    """

    def setUp(self):
        self.cash = make_account("1000", "Cash", AccountType.ASSET)
        self.inventory = make_account("1200", "Inventory", AccountType.ASSET)
        self.ap = make_account("2000", "Accounts Payable", AccountType.LIABILITY)
        self.equity = make_account("3000", "Owner Equity", AccountType.EQUITY)
        self.revenue = make_account("4000", "Revenue", AccountType.INCOME)
        self.cogs = make_account("5000", "COGS", AccountType.COGS)
        self.rent = make_account("6000", "Rent", AccountType.EXPENSE)

        post(self.cash, self.equity, "1000", entry_date=date(2026, 1, 1))
        post(self.inventory, self.ap, "300", entry_date=D1)
        post(self.cash, self.revenue, "500", entry_date=D2)
        post(self.cogs, self.inventory, "100", entry_date=D2)
        post(self.rent, self.cash, "200", entry_date=D3)

    def test_income_statement_identities(self):
        report = get_income_statement(end_date=D3)

        self.assertIsNone(report["start_date"])
        self.assertEqual(report["total_income"], 500.0)
        self.assertEqual(report["total_cogs"], 100.0)
        self.assertEqual(report["gross_profit"], report["total_income"] - report["total_cogs"])
        self.assertEqual(report["total_expenses"], 200.0)
        self.assertEqual(report["net_income"], report["gross_profit"] - report["total_expenses"])
        self.assertEqual(report["net_income"], 200.0)
        self.assertEqual([row["code"] for row in report["expenses"]], ["6000"])

    def test_income_statement_window_excludes_outside_activity(self):
        report = get_income_statement(start_date=date(2026, 2, 1), end_date=date(2026, 2, 28))

        self.assertEqual(report["total_income"], 0.0)
        self.assertEqual(report["total_expenses"], 200.0)
        self.assertEqual(report["net_income"], -200.0)

    def test_balance_sheet_balances_with_net_income_rollup(self):
        sheet = generate_balance_sheet(as_of_date=D3)

        self.assertEqual(sheet["total_assets"], 1500.0)
        self.assertEqual(sheet["total_liabilities"], 300.0)
        self.assertEqual(sheet["net_income"], 200.0)
        self.assertEqual(sheet["total_equity"], 1200.0)
        self.assertEqual(sheet["total_liabilities_and_equity"], 1500.0)
        self.assertTrue(sheet["balanced"])

        equity_codes = [row["code"] for row in sheet["equity"]]
        self.assertEqual(equity_codes, ["3000", "E-CURR"])

    def test_balance_sheet_as_of_earlier_date(self):
        sheet = generate_balance_sheet(as_of_date=D1)

        self.assertEqual(sheet["total_assets"], 1300.0)
        self.assertEqual(sheet["total_liabilities"], 300.0)
        self.assertEqual(sheet["net_income"], 0.0)
        self.assertEqual(sheet["total_equity"], 1000.0)
        self.assertTrue(sheet["balanced"])

    def test_equity_rollup_is_never_written_to_the_ledger(self):
        generate_balance_sheet(as_of_date=D3)

        self.assertFalse(AccountBalance.objects.filter(account=self.equity, debit_total__gt=0).exists())
        self.assertEqual(AccountBalance.objects.get(account=self.equity).credit_total, Decimal("1000.00"))

    def test_trial_balance_totals_match(self):
        totals = TrialBalanceService().generate(as_of=D3)["totals"]
        self.assertEqual(totals["total_debit_minor"], totals["total_credit_minor"])
        self.assertEqual(totals["total_debit"], 2100.0)

    def test_disabled_accounts_hidden_from_trial_balance_only(self):
        disable_account(self.rent)

        tb = TrialBalanceService().generate(as_of=D3)
        self.assertNotIn("6000", [row["code"] for row in tb["trial_balance"]])
        self.assertFalse(tb["totals"]["balanced"])

        full_tb = TrialBalanceService().generate(as_of=D3, include_disabled=True)
        self.assertIn("6000", [row["code"] for row in full_tb["trial_balance"]])
        self.assertTrue(full_tb["totals"]["balanced"])

        self.assertEqual(get_income_statement(end_date=D3)["total_expenses"], 200.0)
        self.assertTrue(generate_balance_sheet(as_of_date=D3)["balanced"])

    def test_validate_financials_passes_on_clean_ledger(self):
        summary = validate_financials()
        self.assertEqual(summary["total_debit"], summary["total_credit"])

    def test_validate_financials_detects_running_balance_drift(self):
        AccountBalance.objects.filter(account=self.cash).update(debit_total=Decimal("1.00"))

        with self.assertRaises(ImbalanceDetected):
            validate_financials()

        # dated checks only look at journal lines
        validate_financials(as_of=D3)

    def test_tampered_line_is_flagged_not_raised(self):
        opening = JournalLine.objects.get(
            account=self.cash, entry_type=JournalLine.DEBIT, amount=Decimal("1000.00")
        )
        JournalLine.objects.filter(pk=opening.pk).update(amount=Decimal("1050.00"))

        sheet = generate_balance_sheet(as_of_date=D3)
        self.assertFalse(sheet["balanced"])
        self.assertEqual(sheet["total_assets"], 1550.0)
        self.assertEqual(sheet["total_liabilities_and_equity"], 1500.0)

        totals = TrialBalanceService().generate(as_of=D3)["totals"]
        self.assertFalse(totals["balanced"])
        self.assertEqual(totals["total_debit_minor"] - totals["total_credit_minor"], 5000)

        with self.assertRaises(ImbalanceDetected):
            validate_financials(as_of=D3)


class OpenEndedReportTests(TestCase):
    """Reports without an end date cover every posted entry, future-dated ones too."""

    FUTURE = date(2099, 6, 30)

    def setUp(self):
        self.chart = _scenario_chart()
        post(self.chart["cash"], self.chart["revenue"], "100", entry_date=D1)
        post(self.chart["cash"], self.chart["revenue"], "40", entry_date=self.FUTURE)

    def test_trial_balance_without_cutoff(self):
        report = TrialBalanceService().generate()

        self.assertIsNone(report["as_of"])
        self.assertEqual(report["totals"]["total_debit"], 140.0)
        self.assertTrue(report["totals"]["balanced"])

    def test_income_statement_without_end_date(self):
        report = get_income_statement()

        self.assertIsNone(report["end_date"])
        self.assertEqual(report["total_income"], 140.0)

    def test_balance_sheet_without_cutoff(self):
        sheet = generate_balance_sheet()

        self.assertIsNone(sheet["as_of"])
        self.assertEqual(sheet["total_assets"], 140.0)
        self.assertEqual(sheet["net_income"], 140.0)
        self.assertTrue(sheet["balanced"])

    def test_validate_financials_covers_future_entries(self):
        summary = validate_financials()

        self.assertIsNone(summary["as_of"])
        self.assertEqual(summary["total_debit"], 140.0)
