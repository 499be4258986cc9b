# accounting/models/journal.py

"""
======================================================
PATH: accounting/models/journal.py
======================================================
JOURNAL ENTRY MODEL

Represents a single balanced accounting transaction (journal header).

Guarantees:
- Immutable once created (no updates, no deletes)
- journal_number is unique and assigned by the posting engine only
- total_debit == total_credit (DB check constraint backs the engine check)
- entry_date is the accounting effective date (used by every report)
"""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import F, Q


def format_journal_number(number: int) -> str:
    prefix = getattr(settings, "ACCOUNTING_JOURNAL_PREFIX", "JE")
    return f"{prefix}-{int(number):05d}"


class JournalEntry(models.Model):
    journal_number = models.PositiveIntegerField(
        unique=True,
        editable=False,
        help_text="Sequential journal number assigned at posting time",
    )

    entry_date = models.DateField(help_text="Accounting effective date")

    reference = models.CharField(
        max_length=100,
        blank=True,
        null=True,
        help_text="External reference (order number, PO number, etc.)",
    )

    description = models.TextField(help_text="Narrative description of the journal entry")

    total_debit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    total_credit = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.01"))],
    )

    reverses = models.OneToOneField(
        "self",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="reversed_by",
        help_text="The entry this one offsets, if it is a reversal",
    )

    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="Timestamp when the journal entry was posted",
    )

    class Meta:
        ordering = ["-entry_date", "-journal_number"]
        indexes = [
            models.Index(fields=["entry_date"]),
            models.Index(fields=["created_at"]),
            models.Index(fields=["reference"]),
        ]
        constraints = [
            models.CheckConstraint(
                condition=Q(total_debit=F("total_credit")),
                name="chk_journal_entry_balanced",
            ),
        ]
        verbose_name = "Journal Entry"
        verbose_name_plural = "Journal Entries"

    def __str__(self):
        return f"{self.display_number} – {self.entry_date}"

    @property
    def display_number(self) -> str:
        return format_journal_number(self.journal_number)

    @property
    def is_reversal(self) -> bool:
        return self.reverses_id is not None

    def clean(self):
        if self.reference is not None:
            ref = str(self.reference).strip()
            self.reference = ref or None

        self.description = (self.description or "").strip()
        if not self.description:
            raise ValidationError("Journal entry description is required")

        if self.total_debit != self.total_credit:
            raise ValidationError("Journal entry totals must balance")

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError("JournalEntry records are immutable once created")

        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("JournalEntry records are immutable and cannot be deleted")
