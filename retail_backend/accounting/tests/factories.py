# accounting/tests/factories.py

from __future__ import annotations

from datetime import date

from accounting.models.account import Account
from accounting.models.account_type import AccountSubType, AccountType
from accounting.services.chart_seed import ensure_account_types
from accounting.services.journal_entry_service import create_journal_entry

D1 = date(2026, 1, 10)
D2 = date(2026, 1, 20)
D3 = date(2026, 2, 5)


def make_account(code: str, name: str, type_key: str, *, is_enabled: bool = True) -> Account:
    types = ensure_account_types()
    sub_type, _ = AccountSubType.objects.get_or_create(
        account_type=types[type_key], name=f"General {type_key.title()}"
    )
    return Account.objects.create(
        code=code,
        name=name,
        account_type=types[type_key],
        sub_type=sub_type,
        is_enabled=is_enabled,
    )


def make_small_chart() -> dict[str, Account]:
    """
    Cash 1000 / Inventory 1200 / AP 2000 / Owner Equity 3000 /
    Revenue 4000 / COGS 5000 / Rent 6000
    """
    return {
        "cash": make_account("1000", "Cash", AccountType.ASSET),
        "inventory": make_account("1200", "Inventory", AccountType.ASSET),
        "ap": make_account("2000", "Accounts Payable", AccountType.LIABILITY),
        "equity": make_account("3000", "Owner Equity", AccountType.EQUITY),
        "revenue": make_account("4000", "Revenue", AccountType.INCOME),
        "cogs": make_account("5000", "COGS", AccountType.COGS),
        "rent": make_account("6000", "Rent", AccountType.EXPENSE),
    }


def post(debit_account, credit_account, amount, *, entry_date=D1, description="Test entry"):
    return create_journal_entry(
        description=description,
        entry_date=entry_date,
        lines=[
            {"account": debit_account, "debit": amount},
            {"account": credit_account, "credit": amount},
        ],
    )
