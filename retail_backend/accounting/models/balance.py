# accounting/models/balance.py

"""
======================================================
PATH: accounting/models/balance.py
======================================================
MATERIALIZED BALANCES + JOURNAL SEQUENCE

AccountBalance:
- One running total row per account
- Written ONLY by the posting engine (F() increments inside the posting
  transaction); everything else reads it

JournalSequence:
- Single counter row locked with SELECT ... FOR UPDATE while a journal
  number is handed out
"""

from __future__ import annotations

from decimal import Decimal

from django.db import models

from accounting.models.account import Account


class AccountBalance(models.Model):
    account = models.OneToOneField(
        Account,
        on_delete=models.PROTECT,
        related_name="running_balance",
    )

    debit_total = models.DecimalField(
        max_digits=16, decimal_places=2, default=Decimal("0.00")
    )
    credit_total = models.DecimalField(
        max_digits=16, decimal_places=2, default=Decimal("0.00")
    )

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Account Balance"
        verbose_name_plural = "Account Balances"
        ordering = ["account__code"]

    def __str__(self):
        return f"{self.account.code}: {self.balance}"

    @property
    def balance(self) -> Decimal:
        if self.account.is_debit_normal:
            return self.debit_total - self.credit_total
        return self.credit_total - self.debit_total


class JournalSequence(models.Model):
    JOURNAL = "journal"

    name = models.CharField(max_length=32, primary_key=True)
    last_value = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = "Journal Sequence"
        verbose_name_plural = "Journal Sequences"

    def __str__(self):
        return f"{self.name}={self.last_value}"
