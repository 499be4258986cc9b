# accounting/models/account_type.py

"""
ACCOUNT TYPE + SUBTYPE MODELS

Top two levels of the chart hierarchy:
    AccountType -> AccountSubType -> Account

Rules:
- Six fixed type keys (Asset, Liability, Equity, Income, COGS, Expense)
- The normal balance side is derived from the type key, never stored
- A subtype is owned by exactly one type
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models


class AccountType(models.Model):
    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    INCOME = "INCOME"
    COGS = "COGS"
    EXPENSE = "EXPENSE"

    TYPE_CHOICES = [
        (ASSET, "Assets"),
        (LIABILITY, "Liabilities"),
        (EQUITY, "Equity"),
        (INCOME, "Income"),
        (COGS, "Cost of Goods Sold"),
        (EXPENSE, "Expenses"),
    ]

    DEBIT = "DEBIT"
    CREDIT = "CREDIT"

    DEBIT_NORMAL_KEYS = (ASSET, COGS, EXPENSE)
    CREDIT_NORMAL_KEYS = (LIABILITY, EQUITY, INCOME)

    key = models.CharField(max_length=20, choices=TYPE_CHOICES, unique=True)
    name = models.CharField(max_length=50, unique=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name = "Account Type"
        verbose_name_plural = "Account Types"

    def __str__(self):
        return self.name

    @classmethod
    def normal_balance_for(cls, key: str) -> str:
        if key in cls.DEBIT_NORMAL_KEYS:
            return cls.DEBIT
        if key in cls.CREDIT_NORMAL_KEYS:
            return cls.CREDIT
        raise ValueError(f"Unknown account type key: {key!r}")

    @property
    def normal_balance(self) -> str:
        return self.normal_balance_for(self.key)

    def clean(self):
        self.name = (self.name or "").strip()
        if not self.name:
            self.name = dict(self.TYPE_CHOICES).get(self.key, "")
        if self.key not in dict(self.TYPE_CHOICES):
            raise ValidationError({"key": "Unknown account type"})


class AccountSubType(models.Model):
    name = models.CharField(max_length=100)

    account_type = models.ForeignKey(
        AccountType,
        on_delete=models.PROTECT,
        related_name="sub_types",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name = "Account Sub-Type"
        verbose_name_plural = "Account Sub-Types"
        constraints = [
            models.UniqueConstraint(
                fields=["account_type", "name"],
                name="uniq_subtype_type_name",
            ),
        ]

    def __str__(self):
        return f"{self.name} ({self.account_type.name})"

    def clean(self):
        self.name = (self.name or "").strip()
        if not self.name:
            raise ValidationError("Sub-type name is required")
