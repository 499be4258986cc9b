# accounting/tests/test_journal_posting.py

from __future__ import annotations

import threading
from decimal import Decimal
from unittest import mock

from django.core.exceptions import ValidationError
from django.db import DatabaseError, connections
from django.test import TestCase, TransactionTestCase, override_settings

from accounting.models.balance import AccountBalance
from accounting.models.journal import JournalEntry
from accounting.models.journal_line import JournalLine
from accounting.services.balance_service import find_balance_drift, get_account_balance
from accounting.services.exceptions import (
    ImmutableEntry,
    JournalEntryCreationError,
    PostingFailed,
    Unbalanced,
)
from accounting.services.journal_entry_service import (
    create_journal_entry,
    delete_journal_entry,
    post_journal_entry,
    reverse_journal_entry,
)
from accounting.services.journal_validator import validate_journal_entry
from accounting.tests.factories import D1, D2, make_small_chart, post


class JournalPostingTests(TestCase):
    def setUp(self):
        self.chart = make_small_chart()

    def test_posting_stores_entry_lines_and_totals(self):
        entry = create_journal_entry(
            description="Cash sale",
            entry_date=D1,
            reference="INV-1",
            lines=[
                {"account": self.chart["cash"], "debit": "100", "description": "till"},
                {"account": self.chart["revenue"], "credit": "100"},
            ],
        )

        self.assertEqual(entry.total_debit, Decimal("100.00"))
        self.assertEqual(entry.total_credit, Decimal("100.00"))
        self.assertEqual(entry.entry_date, D1)
        self.assertEqual(entry.reference, "INV-1")

        lines = list(entry.lines.order_by("line_no"))
        self.assertEqual([line.line_no for line in lines], [1, 2])
        self.assertEqual(lines[0].entry_type, JournalLine.DEBIT)
        self.assertEqual(lines[0].description, "till")
        self.assertEqual(lines[1].entry_type, JournalLine.CREDIT)

    def test_journal_numbers_are_sequential_and_formatted(self):
        first = post(self.chart["cash"], self.chart["revenue"], "1")
        second = post(self.chart["cash"], self.chart["revenue"], "2")
        third = post(self.chart["cash"], self.chart["revenue"], "3")

        self.assertEqual(
            [first.journal_number, second.journal_number, third.journal_number], [1, 2, 3]
        )
        self.assertEqual(first.display_number, "JE-00001")

    @override_settings(ACCOUNTING_JOURNAL_PREFIX="GJ")
    def test_journal_prefix_is_configurable(self):
        entry = post(self.chart["cash"], self.chart["revenue"], "1")
        self.assertEqual(entry.display_number, "GJ-00001")

    def test_running_balances_follow_normal_side(self):
        post(self.chart["cash"], self.chart["revenue"], "100")
        post(self.chart["rent"], self.chart["cash"], "30")

        self.assertEqual(get_account_balance(self.chart["cash"]), Decimal("70.00"))
        self.assertEqual(get_account_balance(self.chart["revenue"]), Decimal("100.00"))
        self.assertEqual(get_account_balance(self.chart["rent"]), Decimal("30.00"))
        self.assertEqual(get_account_balance(self.chart["ap"]), Decimal("0.00"))

        cash_running = AccountBalance.objects.get(account=self.chart["cash"])
        self.assertEqual(cash_running.debit_total, Decimal("100.00"))
        self.assertEqual(cash_running.credit_total, Decimal("30.00"))
        self.assertEqual(find_balance_drift(), [])

    def test_dated_balance_uses_entry_date(self):
        post(self.chart["cash"], self.chart["revenue"], "100", entry_date=D1)
        post(self.chart["cash"], self.chart["revenue"], "50", entry_date=D2)

        self.assertEqual(get_account_balance(self.chart["cash"], as_of=D1), Decimal("100.00"))
        self.assertEqual(get_account_balance(self.chart["cash"], as_of=D2), Decimal("150.00"))

    def test_unbalanced_entry_is_never_posted(self):
        with self.assertRaises(Unbalanced):
            create_journal_entry(
                description="Bad",
                lines=[
                    {"account": self.chart["cash"], "debit": "100"},
                    {"account": self.chart["revenue"], "credit": "90"},
                ],
            )

        self.assertEqual(JournalEntry.objects.count(), 0)
        self.assertEqual(JournalLine.objects.count(), 0)
        self.assertEqual(AccountBalance.objects.count(), 0)

    def test_storage_failure_leaves_nothing_behind(self):
        validated = validate_journal_entry(
            description="Doomed",
            lines=[
                {"account": self.chart["cash"], "debit": "100"},
                {"account": self.chart["revenue"], "credit": "100"},
            ],
        )

        with mock.patch.object(
            JournalLine.objects, "bulk_create", side_effect=DatabaseError("disk full")
        ):
            with self.assertRaises(PostingFailed):
                post_journal_entry(validated)

        self.assertEqual(JournalEntry.objects.count(), 0)
        self.assertEqual(JournalLine.objects.count(), 0)
        self.assertEqual(AccountBalance.objects.count(), 0)

        # the failed attempt did not burn a journal number
        entry = post_journal_entry(validated)
        self.assertEqual(entry.journal_number, 1)

    def test_post_requires_validated_entry(self):
        with self.assertRaises(JournalEntryCreationError):
            post_journal_entry({"description": "raw dict"})

    def test_posted_rows_are_immutable(self):
        entry = post(self.chart["cash"], self.chart["revenue"], "10")
        line = entry.lines.first()

        with self.assertRaises(ValidationError):
            entry.save()
        with self.assertRaises(ValidationError):
            entry.delete()
        with self.assertRaises(ValidationError):
            line.save()
        with self.assertRaises(ValidationError):
            line.delete()

    def test_delete_is_refused(self):
        entry = post(self.chart["cash"], self.chart["revenue"], "10")

        with self.assertRaises(ImmutableEntry):
            delete_journal_entry(entry)
        self.assertTrue(JournalEntry.objects.filter(pk=entry.pk).exists())


class JournalReversalTests(TestCase):
    def setUp(self):
        self.chart = make_small_chart()
        self.entry = post(self.chart["cash"], self.chart["revenue"], "100", entry_date=D1)

    def test_reversal_zeroes_balances(self):
        reversal = reverse_journal_entry(self.entry, entry_date=D2)

        self.assertEqual(reversal.reverses, self.entry)
        self.assertEqual(reversal.reference, self.entry.display_number)
        self.assertTrue(reversal.description.startswith("Reversal of JE-00001"))
        self.assertEqual(
            list(reversal.lines.order_by("line_no").values_list("entry_type", flat=True)),
            [JournalLine.CREDIT, JournalLine.DEBIT],
        )

        self.assertEqual(get_account_balance(self.chart["cash"]), Decimal("0.00"))
        self.assertEqual(get_account_balance(self.chart["revenue"]), Decimal("0.00"))
        # history before the reversal date is untouched
        self.assertEqual(get_account_balance(self.chart["cash"], as_of=D1), Decimal("100.00"))

    def test_entry_can_only_be_reversed_once(self):
        reverse_journal_entry(self.entry)

        with self.assertRaises(JournalEntryCreationError):
            reverse_journal_entry(self.entry)

    def test_reversal_cannot_be_reversed(self):
        reversal = reverse_journal_entry(self.entry)

        with self.assertRaises(JournalEntryCreationError):
            reverse_journal_entry(reversal)


class ConcurrentPostingTests(TransactionTestCase):
    """
    Threads share one process; every posting must get its own number and
    the numbers must be gap-free.
    """

    THREADS = 6
    PER_THREAD = 5

    def test_threaded_postings_get_unique_increasing_numbers(self):
        chart = make_small_chart()
        validated = validate_journal_entry(
            description="Concurrent sale",
            lines=[
                {"account": chart["cash"], "debit": "1.00"},
                {"account": chart["revenue"], "credit": "1.00"},
            ],
        )

        errors = []
        numbers = []
        numbers_lock = threading.Lock()

        def worker():
            try:
                for _ in range(self.PER_THREAD):
                    entry = post_journal_entry(validated)
                    with numbers_lock:
                        numbers.append(entry.journal_number)
            except Exception as exc:  # surfaced below
                errors.append(exc)
            finally:
                connections.close_all()

        threads = [threading.Thread(target=worker) for _ in range(self.THREADS)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(errors, [])

        total = self.THREADS * self.PER_THREAD
        self.assertEqual(sorted(numbers), list(range(1, total + 1)))
        self.assertEqual(JournalEntry.objects.count(), total)
        self.assertEqual(JournalLine.objects.count(), total * 2)
        self.assertEqual(get_account_balance(chart["cash"]), Decimal(total))
        self.assertEqual(find_balance_drift(), [])
