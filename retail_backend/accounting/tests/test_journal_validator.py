# accounting/tests/test_journal_validator.py

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone

from accounting.models.journal import JournalEntry
from accounting.models.journal_line import JournalLine
from accounting.services.account_registry import disable_account
from accounting.services.exceptions import (
    AccountDisabled,
    AccountNotFound,
    JournalEntryCreationError,
    MalformedEntry,
    Unbalanced,
)
from accounting.services.journal_entry_service import create_journal_entry
from accounting.services.journal_validator import validate_journal_entry
from accounting.tests.factories import make_small_chart


class JournalValidatorTests(TestCase):
    def setUp(self):
        self.chart = make_small_chart()
        self.cash = self.chart["cash"]
        self.revenue = self.chart["revenue"]

    def _lines(self, debit="100", credit="100"):
        return [
            {"account": self.cash, "debit": debit},
            {"account": self.revenue, "credit": credit},
        ]

    def test_balanced_entry_is_accepted(self):
        validated = validate_journal_entry(
            description="  Cash sale ",
            lines=self._lines(),
            entry_date=date(2026, 1, 10),
            reference=" INV-1 ",
        )

        self.assertEqual(validated.description, "Cash sale")
        self.assertEqual(validated.reference, "INV-1")
        self.assertEqual(validated.entry_date, date(2026, 1, 10))
        self.assertEqual(validated.total_debit, Decimal("100.00"))
        self.assertEqual(validated.total_credit, Decimal("100.00"))
        self.assertEqual(
            [(v.entry_type, v.amount) for v in validated.lines],
            [(JournalLine.DEBIT, Decimal("100.00")), (JournalLine.CREDIT, Decimal("100.00"))],
        )

    def test_unbalanced_entry_carries_both_totals(self):
        with self.assertRaises(Unbalanced) as ctx:
            validate_journal_entry(description="Bad", lines=self._lines("100", "90"))

        self.assertEqual(ctx.exception.total_debit, Decimal("100.00"))
        self.assertEqual(ctx.exception.total_credit, Decimal("90.00"))
        self.assertIsInstance(ctx.exception, JournalEntryCreationError)
        self.assertEqual(JournalEntry.objects.count(), 0)

    def test_sub_cent_float_noise_does_not_unbalance(self):
        validated = validate_journal_entry(
            description="Split",
            lines=[
                {"account": self.cash, "debit": 0.1},
                {"account": self.cash, "debit": 0.2},
                {"account": self.revenue, "credit": 0.3},
            ],
        )
        self.assertEqual(validated.total_debit, Decimal("0.30"))

    def test_description_is_required(self):
        with self.assertRaises(MalformedEntry):
            validate_journal_entry(description="   ", lines=self._lines())

    def test_needs_two_lines(self):
        with self.assertRaises(MalformedEntry):
            validate_journal_entry(description="One", lines=[{"account": self.cash, "debit": 1}])

    def test_line_cannot_have_both_sides(self):
        lines = self._lines()
        lines[0]["credit"] = "5"
        with self.assertRaises(MalformedEntry):
            validate_journal_entry(description="Both", lines=lines)

    def test_line_must_have_a_side(self):
        lines = self._lines() + [{"account": self.cash, "debit": 0, "credit": 0}]
        with self.assertRaises(MalformedEntry):
            validate_journal_entry(description="Neither", lines=lines)

    def test_negative_amounts_are_rejected(self):
        with self.assertRaises(MalformedEntry):
            validate_journal_entry(description="Neg", lines=self._lines("-100", "-100"))

    def test_non_numeric_amount_is_rejected(self):
        with self.assertRaises(MalformedEntry):
            validate_journal_entry(description="NaN", lines=self._lines("abc", "100"))

    def test_all_debits_is_rejected(self):
        with self.assertRaises(MalformedEntry):
            validate_journal_entry(
                description="Debits only",
                lines=[
                    {"account": self.cash, "debit": "10"},
                    {"account": self.chart["rent"], "debit": "10"},
                ],
            )

    def test_unknown_account_is_rejected(self):
        lines = self._lines()
        lines[1]["account"] = 987654
        with self.assertRaises(AccountNotFound):
            validate_journal_entry(description="Ghost", lines=lines)

    def test_disabled_account_is_rejected(self):
        disable_account(self.revenue)
        with self.assertRaises(AccountDisabled):
            validate_journal_entry(description="Disabled", lines=self._lines())

    def test_entry_date_defaults_to_today_and_accepts_strings(self):
        self.assertEqual(
            validate_journal_entry(description="Today", lines=self._lines()).entry_date,
            timezone.localdate(),
        )
        self.assertEqual(
            validate_journal_entry(
                description="ISO", lines=self._lines(), entry_date="2026-03-01"
            ).entry_date,
            date(2026, 3, 1),
        )
        self.assertEqual(
            validate_journal_entry(
                description="Naive datetime",
                lines=self._lines(),
                entry_date=datetime(2026, 3, 2, 9, 30),
            ).entry_date,
            date(2026, 3, 2),
        )

    def test_bad_date_is_rejected(self):
        with self.assertRaises(MalformedEntry):
            validate_journal_entry(description="Bad date", lines=self._lines(), entry_date="31/01/2026")

    def test_amount_beyond_column_size_is_rejected(self):
        with self.assertRaises(MalformedEntry):
            validate_journal_entry(
                description="Huge", lines=self._lines("10000000000000", "10000000000000")
            )
        with self.assertRaises(MalformedEntry):
            validate_journal_entry(description="Absurd", lines=self._lines("1e30", "1e30"))

    def test_largest_storable_amount_is_accepted(self):
        validated = validate_journal_entry(
            description="Max", lines=self._lines("999999999999.99", "999999999999.99")
        )
        self.assertEqual(validated.total_debit, Decimal("999999999999.99"))

    def test_total_beyond_column_size_is_rejected(self):
        half = "600000000000"
        with self.assertRaises(MalformedEntry):
            validate_journal_entry(
                description="Too big in sum",
                lines=[
                    {"account": self.cash, "debit": half},
                    {"account": self.chart["inventory"], "debit": half},
                    {"account": self.revenue, "credit": half},
                    {"account": self.chart["equity"], "credit": half},
                ],
            )

    def test_long_reference_is_rejected(self):
        with self.assertRaises(MalformedEntry):
            validate_journal_entry(description="Ref", lines=self._lines(), reference="R" * 101)

        validated = validate_journal_entry(
            description="Ref", lines=self._lines(), reference="R" * 100
        )
        self.assertEqual(len(validated.reference), 100)

    def test_long_line_description_is_rejected(self):
        lines = self._lines()
        lines[0]["description"] = "d" * 256
        with self.assertRaises(MalformedEntry):
            validate_journal_entry(description="Memo", lines=lines)

    def test_oversized_entry_posts_nothing(self):
        with self.assertRaises(MalformedEntry):
            create_journal_entry(description="Ref", lines=self._lines(), reference="R" * 150)
        self.assertEqual(JournalEntry.objects.count(), 0)
