# accounting/services/income_statement_service.py

"""
INCOME STATEMENT SERVICE (PROFIT & LOSS)

Read-only aggregation over immutable journal lines.

Contract-locked numbers:
{
  "total_income": float,
  "total_cogs": float,
  "gross_profit": float,
  "total_expenses": float,
  "net_income": float,
  ...each with a *_minor int twin
}

Key rules:
- Uses JournalEntry.entry_date as the accounting effective date
- Window is inclusive on both ends; start_date=None means "since the first entry",
  end_date=None means "through the last entry" (future-dated included)
- Every account counts, enabled or not (historic activity stays reported)
"""

from __future__ import annotations

import datetime
from decimal import Decimal

from accounting.models.account_type import AccountType
from accounting.services.balance_service import account_activity
from accounting.services.money import ZERO, q2, to_major_number, to_minor_int

PNL_TYPES = (AccountType.INCOME, AccountType.COGS, AccountType.EXPENSE)


def _line(row) -> dict:
    return {
        "account_id": row.account_id,
        "code": row.code,
        "name": row.name,
        "amount": to_major_number(row.balance),
        "amount_minor": to_minor_int(row.balance),
    }


def compute_net_income(
    *, start_date: datetime.date | None = None, end_date: datetime.date | None = None
) -> Decimal:
    """Net income as a Decimal, for callers that fold it into other statements."""
    return _compute(start_date=start_date, end_date=end_date)["net_income"]


def _compute(*, start_date, end_date) -> dict:
    activity = account_activity(start_date=start_date, end_date=end_date, type_keys=PNL_TYPES)

    sections = {AccountType.INCOME: [], AccountType.COGS: [], AccountType.EXPENSE: []}
    totals = {AccountType.INCOME: ZERO, AccountType.COGS: ZERO, AccountType.EXPENSE: ZERO}

    for row in activity:
        if not row.has_activity:
            continue
        sections[row.type_key].append(_line(row))
        totals[row.type_key] += row.balance

    total_income = q2(totals[AccountType.INCOME])
    total_cogs = q2(totals[AccountType.COGS])
    total_expenses = q2(totals[AccountType.EXPENSE])
    gross_profit = q2(total_income - total_cogs)

    return {
        "sections": sections,
        "total_income": total_income,
        "total_cogs": total_cogs,
        "gross_profit": gross_profit,
        "total_expenses": total_expenses,
        "net_income": q2(gross_profit - total_expenses),
    }


def get_income_statement(
    *, start_date: datetime.date | None = None, end_date: datetime.date | None = None
) -> dict:
    result = _compute(start_date=start_date, end_date=end_date)

    payload = {
        "start_date": start_date.isoformat() if start_date else None,
        "end_date": end_date.isoformat() if end_date else None,
        "income": result["sections"][AccountType.INCOME],
        "cogs": result["sections"][AccountType.COGS],
        "expenses": result["sections"][AccountType.EXPENSE],
    }

    for key in ("total_income", "total_cogs", "gross_profit", "total_expenses", "net_income"):
        payload[key] = to_major_number(result[key])
        payload[f"{key}_minor"] = to_minor_int(result[key])

    return payload
