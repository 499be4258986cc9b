# accounting/tests/test_commands.py

from __future__ import annotations

from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from accounting.models.account import Account
from accounting.models.balance import AccountBalance
from accounting.services.chart_seed import DEFAULT_ACCOUNTS
from accounting.tests.factories import make_small_chart, post


class SeedRetailChartCommandTests(TestCase):
    def test_seed_reports_counts_and_is_repeatable(self):
        out = StringIO()
        call_command("seed_retail_chart", stdout=out)

        self.assertIn(f"{len(DEFAULT_ACCOUNTS)} new accounts", out.getvalue())
        self.assertEqual(Account.objects.count(), len(DEFAULT_ACCOUNTS))

        out = StringIO()
        call_command("seed_retail_chart", stdout=out)
        self.assertIn("0 new accounts", out.getvalue())


class VerifyLedgerCommandTests(TestCase):
    def setUp(self):
        self.chart = make_small_chart()
        post(self.chart["cash"], self.chart["equity"], "500")
        post(self.chart["rent"], self.chart["cash"], "120")

    def test_clean_ledger_passes(self):
        out = StringIO()
        call_command("verify_ledger", stdout=out, stderr=StringIO())

        self.assertIn("LEDGER CHECK PASSED", out.getvalue())
        self.assertIn("debits=620.00 credits=620.00", out.getvalue())
        self.assertIn("as of latest entry", out.getvalue())

    def test_drift_fails_with_non_zero_exit(self):
        AccountBalance.objects.filter(account=self.chart["rent"]).update(
            debit_total=Decimal("999.00")
        )
        err = StringIO()

        with self.assertRaises(SystemExit) as ctx:
            call_command("verify_ledger", stdout=StringIO(), stderr=err)

        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("6000", err.getvalue())

    def test_invalid_as_of_fails(self):
        err = StringIO()

        with self.assertRaises(SystemExit):
            call_command("verify_ledger", "--as-of", "2026-99-01", stdout=StringIO(), stderr=err)

        self.assertIn("Invalid --as-of", err.getvalue())

    def test_dated_check(self):
        out = StringIO()
        call_command("verify_ledger", "--as-of", "2026-01-31", stdout=out, stderr=StringIO())

        self.assertIn("as of 2026-01-31", out.getvalue())
