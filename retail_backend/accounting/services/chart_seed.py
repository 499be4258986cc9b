# accounting/services/chart_seed.py

"""
DEFAULT CHART OF ACCOUNTS (RETAIL)

Idempotent seed of:
- the six account types
- the standard retail sub-types
- the default retail accounts

Re-running creates nothing new and never touches accounts an admin has
since disabled or renamed (get_or_create by natural key only).
"""

from __future__ import annotations

import logging

from django.db import transaction

from accounting.models.account import Account
from accounting.models.account_type import AccountSubType, AccountType

logger = logging.getLogger(__name__)

SUB_TYPES = [
    (AccountType.ASSET, "Current Asset"),
    (AccountType.ASSET, "Accounts Receivable"),
    (AccountType.ASSET, "Inventory Asset"),
    (AccountType.ASSET, "Fixed Asset"),
    (AccountType.LIABILITY, "Current Liabilities"),
    (AccountType.LIABILITY, "Accounts Payable"),
    (AccountType.LIABILITY, "Long Term Liabilities"),
    (AccountType.EQUITY, "Owner Equity"),
    (AccountType.EQUITY, "Retained Earnings"),
    (AccountType.INCOME, "Sales Revenue"),
    (AccountType.INCOME, "Other Revenue"),
    (AccountType.COGS, "Cost of Sales"),
    (AccountType.EXPENSE, "Operating Expenses"),
    (AccountType.EXPENSE, "Payroll Expenses"),
]

# (code, name, type key, sub-type name, description)
DEFAULT_ACCOUNTS = [
    ("1050", "Accounts Receivable", AccountType.ASSET, "Accounts Receivable", "Money owed by customers"),
    ("1060", "Cash", AccountType.ASSET, "Current Asset", "Cash on hand and in bank"),
    ("1065", "Petty Cash", AccountType.ASSET, "Current Asset", "Small cash fund for minor expenses"),
    ("1510", "Inventory", AccountType.ASSET, "Inventory Asset", "Products available for sale"),
    ("1810", "Fixed Assets", AccountType.ASSET, "Fixed Asset", "Long-term assets like equipment and property"),
    ("2100", "Accounts Payable", AccountType.LIABILITY, "Accounts Payable", "Money owed to suppliers"),
    ("2120", "Sales Tax Payable", AccountType.LIABILITY, "Current Liabilities", "Sales tax collected from customers"),
    ("3000", "Owner Equity", AccountType.EQUITY, "Owner Equity", "Owner investment in business"),
    ("3200", "Retained Earnings", AccountType.EQUITY, "Retained Earnings", "Accumulated profits"),
    ("4100", "Sales Revenue", AccountType.INCOME, "Sales Revenue", "Revenue from product sales"),
    ("4200", "Other Revenue", AccountType.INCOME, "Other Revenue", "Other income sources"),
    ("5010", "Cost of Goods Sold", AccountType.COGS, "Cost of Sales", "Direct cost of products sold"),
    ("5610", "Accounting Fees", AccountType.EXPENSE, "Operating Expenses", "Fees for accounting services"),
    ("5615", "Advertising", AccountType.EXPENSE, "Operating Expenses", "Marketing and advertising costs"),
    ("5760", "Rent", AccountType.EXPENSE, "Operating Expenses", "Rent for business premises"),
    ("5790", "Utilities", AccountType.EXPENSE, "Operating Expenses", "Electricity, water, internet, etc."),
    ("5800", "Salaries", AccountType.EXPENSE, "Payroll Expenses", "Employee salaries and wages"),
]


def ensure_account_types() -> dict[str, AccountType]:
    types = {}
    for key, name in AccountType.TYPE_CHOICES:
        obj, _ = AccountType.objects.get_or_create(key=key, defaults={"name": name})
        types[key] = obj
    return types


@transaction.atomic
def initialize_default_chart() -> dict:
    """
    Returns counts of newly created rows:
        {"types": int, "sub_types": int, "accounts": int}
    """
    created = {"types": 0, "sub_types": 0, "accounts": 0}

    existing_types = AccountType.objects.count()
    types = ensure_account_types()
    created["types"] = AccountType.objects.count() - existing_types

    sub_types = {}
    for type_key, name in SUB_TYPES:
        obj, was_created = AccountSubType.objects.get_or_create(
            account_type=types[type_key],
            name=name,
        )
        sub_types[(type_key, name)] = obj
        if was_created:
            created["sub_types"] += 1

    for code, name, type_key, sub_type_name, description in DEFAULT_ACCOUNTS:
        _, was_created = Account.objects.get_or_create(
            code=code,
            defaults={
                "name": name,
                "account_type": types[type_key],
                "sub_type": sub_types[(type_key, sub_type_name)],
                "description": description,
                "is_enabled": True,
            },
        )
        if was_created:
            created["accounts"] += 1

    if any(created.values()):
        logger.info(
            "Default chart of accounts seeded (types=%s sub_types=%s accounts=%s)",
            created["types"],
            created["sub_types"],
            created["accounts"],
        )
    else:
        logger.info("Chart of accounts already initialized")

    return created
