# accounting/services/journal_validator.py

"""
======================================================
PATH: accounting/services/journal_validator.py
======================================================
JOURNAL ENTRY VALIDATOR (GATEKEEPER)

Accepts a candidate entry only if it is structurally and numerically sound.

Checks (in order):
- description present
- at least two lines
- each line: account resolves + is enabled, amounts are numbers >= 0,
  exactly one of debit / credit is non-zero, amount and description fit
  their columns
- at least one debit line and one credit line
- total debit == total credit (compared in minor units)
- totals and reference fit their columns

Pure: reads accounts, never writes.
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Mapping

from django.utils import timezone

from accounting.models.account import Account
from accounting.models.journal import JournalEntry
from accounting.models.journal_line import JournalLine
from accounting.services.account_registry import get_account
from accounting.services.exceptions import (
    AccountDisabled,
    MalformedEntry,
    Unbalanced,
)
from accounting.services.money import ZERO, parse_money, q2, to_minor_int

MIN_LINES = 2


def _max_amount(field) -> Decimal:
    """Largest value a DecimalField column can store, e.g. 999999999999.99 for (14, 2)."""
    smallest_step = Decimal(1).scaleb(-field.decimal_places)
    return Decimal(1).scaleb(field.max_digits - field.decimal_places) - smallest_step


# column limits of the ledger tables
MAX_LINE_AMOUNT = _max_amount(JournalLine._meta.get_field("amount"))
MAX_ENTRY_TOTAL = _max_amount(JournalEntry._meta.get_field("total_debit"))
MAX_REFERENCE_LENGTH = JournalEntry._meta.get_field("reference").max_length
MAX_LINE_DESCRIPTION_LENGTH = JournalLine._meta.get_field("description").max_length


@dataclass(frozen=True)
class ValidatedLine:
    account: Account
    entry_type: str
    amount: Decimal
    description: str = ""

    @property
    def debit(self) -> Decimal:
        return self.amount if self.entry_type == JournalLine.DEBIT else ZERO

    @property
    def credit(self) -> Decimal:
        return self.amount if self.entry_type == JournalLine.CREDIT else ZERO


@dataclass(frozen=True)
class ValidatedEntry:
    entry_date: datetime.date
    description: str
    reference: str | None
    lines: tuple[ValidatedLine, ...]
    total_debit: Decimal
    total_credit: Decimal


def _normalize_date(entry_date) -> datetime.date:
    if entry_date is None or entry_date == "":
        return timezone.localdate()
    if isinstance(entry_date, datetime.datetime):
        if timezone.is_aware(entry_date):
            return timezone.localtime(entry_date).date()
        return entry_date.date()
    if isinstance(entry_date, datetime.date):
        return entry_date
    try:
        return datetime.date.fromisoformat(str(entry_date).strip()[:10])
    except ValueError as exc:
        raise MalformedEntry(f"Invalid entry date {entry_date!r} (expected YYYY-MM-DD)") from exc


def _validate_line(index: int, line: Mapping) -> ValidatedLine:
    if not isinstance(line, Mapping):
        raise MalformedEntry(f"Line {index}: each line must be an object")

    account = get_account(line.get("account"))
    if not account.is_enabled:
        raise AccountDisabled(f"Line {index}: account {account.code} is disabled")

    try:
        debit = parse_money(line.get("debit"))
        credit = parse_money(line.get("credit"))
    except ValueError as exc:
        raise MalformedEntry(f"Line {index}: {exc}") from exc

    if debit < 0 or credit < 0:
        raise MalformedEntry(f"Line {index}: debit or credit cannot be negative")

    if debit > 0 and credit > 0:
        raise MalformedEntry(f"Line {index}: a line cannot have both debit and credit")

    if debit == 0 and credit == 0:
        raise MalformedEntry(f"Line {index}: a line must have either debit or credit")

    if max(debit, credit) > MAX_LINE_AMOUNT:
        raise MalformedEntry(f"Line {index}: amount exceeds the maximum of {MAX_LINE_AMOUNT}")

    description = str(line.get("description") or "").strip()
    if len(description) > MAX_LINE_DESCRIPTION_LENGTH:
        raise MalformedEntry(
            f"Line {index}: description is longer than {MAX_LINE_DESCRIPTION_LENGTH} characters"
        )

    if debit > 0:
        return ValidatedLine(account, JournalLine.DEBIT, debit, description)
    return ValidatedLine(account, JournalLine.CREDIT, credit, description)


def validate_journal_entry(
    *,
    description: str,
    lines: Iterable[Mapping],
    entry_date=None,
    reference: str | None = None,
) -> ValidatedEntry:
    description = (description or "").strip()
    if not description:
        raise MalformedEntry("Journal entry description is required")

    lines = list(lines or [])
    if len(lines) < MIN_LINES:
        raise MalformedEntry(
            f"Journal entry must contain at least {MIN_LINES} lines (got {len(lines)})"
        )

    validated = [_validate_line(i, line) for i, line in enumerate(lines, start=1)]

    if not any(v.entry_type == JournalLine.DEBIT for v in validated):
        raise MalformedEntry("Journal entry needs at least one debit line")
    if not any(v.entry_type == JournalLine.CREDIT for v in validated):
        raise MalformedEntry("Journal entry needs at least one credit line")

    total_debit = q2(sum((v.debit for v in validated), ZERO))
    total_credit = q2(sum((v.credit for v in validated), ZERO))

    if to_minor_int(total_debit) != to_minor_int(total_credit):
        raise Unbalanced(total_debit, total_credit)

    if total_debit > MAX_ENTRY_TOTAL:
        raise MalformedEntry(f"Journal entry total exceeds the maximum of {MAX_ENTRY_TOTAL}")

    reference = (str(reference).strip() or None) if reference is not None else None
    if reference and len(reference) > MAX_REFERENCE_LENGTH:
        raise MalformedEntry(f"Reference is longer than {MAX_REFERENCE_LENGTH} characters")

    return ValidatedEntry(
        entry_date=_normalize_date(entry_date),
        description=description,
        reference=reference,
        lines=tuple(validated),
        total_debit=total_debit,
        total_credit=total_credit,
    )
