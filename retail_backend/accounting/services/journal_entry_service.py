# accounting/services/journal_entry_service.py

"""
======================================================
PATH: accounting/services/journal_entry_service.py
======================================================
JOURNAL ENTRY SERVICE (LEDGER POSTER)

This module is the ONLY place allowed to:
- Create JournalEntry
- Create JournalLine
- Assign journal numbers
- Update AccountBalance
- Guarantee atomicity (whole entry or nothing)

Everything else (manual entries, order completion, purchases) must pass
through create_journal_entry().

Serialization:
- A process-wide lock plus SELECT ... FOR UPDATE on the JournalSequence row
  make "assign number + append lines + bump balances" one critical section.
  Two postings can never share a number or interleave their lines.

Corrections:
- Posted entries are never edited or deleted; reverse_journal_entry() posts
  the offsetting entry instead.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from decimal import Decimal

from django.db import DatabaseError, transaction
from django.db.models import F

from accounting.models.balance import AccountBalance, JournalSequence
from accounting.models.journal import JournalEntry
from accounting.models.journal_line import JournalLine
from accounting.services.exceptions import (
    ImmutableEntry,
    JournalEntryCreationError,
    PostingFailed,
)
from accounting.services.journal_validator import (
    ValidatedEntry,
    validate_journal_entry,
)
from accounting.services.money import ZERO

logger = logging.getLogger(__name__)

_POSTING_LOCK = threading.RLock()


def _next_journal_number() -> int:
    """
    Must run inside the posting transaction: the row lock is held until commit.
    """
    seq, _ = JournalSequence.objects.select_for_update().get_or_create(
        name=JournalSequence.JOURNAL,
        defaults={"last_value": 0},
    )
    seq.last_value += 1
    seq.save(update_fields=["last_value"])
    return seq.last_value


def _apply_to_balances(lines) -> None:
    per_account: dict[int, list[Decimal]] = defaultdict(lambda: [ZERO, ZERO])
    for line in lines:
        totals = per_account[line.account.pk]
        totals[0] += line.debit
        totals[1] += line.credit

    for account_id, (debit, credit) in per_account.items():
        AccountBalance.objects.get_or_create(account_id=account_id)
        AccountBalance.objects.filter(account_id=account_id).update(
            debit_total=F("debit_total") + debit,
            credit_total=F("credit_total") + credit,
        )


def _persist(validated: ValidatedEntry, *, reverses: JournalEntry | None = None) -> JournalEntry:
    with transaction.atomic():
        number = _next_journal_number()

        entry = JournalEntry(
            journal_number=number,
            entry_date=validated.entry_date,
            reference=validated.reference,
            description=validated.description,
            total_debit=validated.total_debit,
            total_credit=validated.total_credit,
            reverses=reverses,
        )
        entry.save()

        JournalLine.objects.bulk_create(
            [
                JournalLine(
                    journal_entry=entry,
                    line_no=i,
                    account=line.account,
                    description=line.description,
                    entry_type=line.entry_type,
                    amount=line.amount,
                )
                for i, line in enumerate(validated.lines, start=1)
            ]
        )

        _apply_to_balances(validated.lines)

    return entry


def post_journal_entry(
    validated: ValidatedEntry, *, reverses: JournalEntry | None = None
) -> JournalEntry:
    """
    Commit a validated entry. All-or-nothing.

    Raises PostingFailed on any storage-layer error; nothing is left behind.
    """
    if not isinstance(validated, ValidatedEntry):
        raise JournalEntryCreationError("post_journal_entry() requires a ValidatedEntry")

    try:
        with _POSTING_LOCK:
            entry = _persist(validated, reverses=reverses)
    except DatabaseError as exc:
        logger.exception(
            "Journal posting failed (description=%r, lines=%s)",
            validated.description,
            len(validated.lines),
        )
        raise PostingFailed(f"Failed to post journal entry: {exc}") from exc

    logger.info(
        "Posted %s date=%s debit=%s credit=%s lines=%s",
        entry.display_number,
        entry.entry_date,
        entry.total_debit,
        entry.total_credit,
        len(validated.lines),
    )
    return entry


def create_journal_entry(
    *,
    description: str,
    lines: list,
    entry_date=None,
    reference: str | None = None,
) -> JournalEntry:
    """
    Validate + post. The single entry point for every caller.

    lines: [{"account": Account | id | code, "description": str,
             "debit": amount, "credit": amount}, ...]
    """
    validated = validate_journal_entry(
        description=description,
        lines=lines,
        entry_date=entry_date,
        reference=reference,
    )
    return post_journal_entry(validated)


def reverse_journal_entry(
    entry: JournalEntry,
    *,
    entry_date=None,
    description: str | None = None,
) -> JournalEntry:
    """
    Post the offsetting entry for `entry` (every line's side flipped).

    Rules:
    - an entry can be reversed once
    - a reversal cannot itself be reversed (post a new entry instead)
    """
    if entry.reverses_id is not None:
        raise JournalEntryCreationError(
            f"{entry.display_number} is itself a reversal and cannot be reversed"
        )
    if JournalEntry.objects.filter(reverses=entry).exists():
        raise JournalEntryCreationError(f"{entry.display_number} has already been reversed")

    lines = []
    for line in entry.lines.select_related("account").order_by("line_no"):
        flipped_debit = line.amount if line.entry_type == JournalLine.CREDIT else ZERO
        flipped_credit = line.amount if line.entry_type == JournalLine.DEBIT else ZERO
        lines.append(
            {
                "account": line.account,
                "description": line.description,
                "debit": flipped_debit,
                "credit": flipped_credit,
            }
        )

    validated = validate_journal_entry(
        description=description or f"Reversal of {entry.display_number}: {entry.description}",
        lines=lines,
        entry_date=entry_date,
        reference=entry.display_number,
    )
    return post_journal_entry(validated, reverses=entry)


def delete_journal_entry(entry: JournalEntry) -> None:
    raise ImmutableEntry(
        f"{entry.display_number} is posted and cannot be deleted; post a reversal instead"
    )
