# accounting/models/account.py

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.db.models import Q

from accounting.models.account_type import AccountSubType, AccountType


class Account(models.Model):
    """
    A single ledger account.

    Guarantees:
    - Account codes are unique across the whole chart
    - Code + name are normalized (trimmed)
    - The sub-type always belongs to the account's declared type
    - Normal balance side is derived from the type
    """

    code = models.CharField(max_length=10, unique=True)
    name = models.CharField(max_length=150)

    account_type = models.ForeignKey(
        AccountType,
        on_delete=models.PROTECT,
        related_name="accounts",
    )

    sub_type = models.ForeignKey(
        AccountSubType,
        on_delete=models.PROTECT,
        related_name="accounts",
    )

    parent = models.ForeignKey(
        "self",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="children",
    )

    is_enabled = models.BooleanField(default=True)
    description = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["code"]
        verbose_name = "Account"
        verbose_name_plural = "Accounts"
        indexes = [
            models.Index(fields=["account_type"]),
            models.Index(fields=["is_enabled"]),
        ]
        constraints = [
            models.CheckConstraint(
                condition=~Q(code=""),
                name="chk_account_code_not_blank",
            ),
            models.CheckConstraint(
                condition=~Q(name=""),
                name="chk_account_name_not_blank",
            ),
        ]

    def __str__(self):
        return f"{self.code} – {self.name}"

    @property
    def normal_balance(self) -> str:
        return self.account_type.normal_balance

    @property
    def is_debit_normal(self) -> bool:
        return self.normal_balance == AccountType.DEBIT

    def clean(self):
        self.code = (self.code or "").strip()
        self.name = (self.name or "").strip()
        self.description = (self.description or "").strip()

        if not self.code:
            raise ValidationError("Account code is required")
        if not self.name:
            raise ValidationError("Account name is required")

        if self.sub_type_id and self.account_type_id:
            if self.sub_type.account_type_id != self.account_type_id:
                raise ValidationError(
                    {"sub_type": "Sub-type does not belong to the account's type"}
                )

        if self.parent_id and self.pk and self.parent_id == self.pk:
            raise ValidationError({"parent": "An account cannot be its own parent"})

    def save(self, *args, **kwargs):
        self.full_clean()
        return super().save(*args, **kwargs)

    def has_ledger_history(self) -> bool:
        return self.journal_lines.exists()
