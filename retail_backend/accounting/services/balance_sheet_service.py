# accounting/services/balance_sheet_service.py

"""
BALANCE SHEET SERVICE

Pure accounting read service.

Responsibilities:
- Compute balances per account as at a given date
- Classify balances into Assets, Liabilities, Equity
- Check the accounting equation (Assets = Liabilities + Equity)

Important:
- Income/COGS/Expense activity up to the date is folded into Equity as
  "Current Period Earnings". This rollup happens at report time only and is
  never written to the ledger.
- Imbalance is FLAGGED (balanced=False + warning log), never raised, so the
  report is always visible.

Contract:
- API emits numeric JSON values (not strings)
- Provide both major-unit numbers (floats, 2dp) and minor-unit ints (exact)

Critical accounting rules enforced here:
- Ledger truth is posted JournalLine rows
- Accounting timeline uses JournalEntry.entry_date (not created_at)
- All accounts count, enabled or not
"""

from __future__ import annotations

import datetime
import logging

from accounting.models.account_type import AccountType
from accounting.services.balance_service import account_activity
from accounting.services.money import ZERO, q2, to_major_number, to_minor_int

logger = logging.getLogger(__name__)

CURRENT_EARNINGS_CODE = "E-CURR"


def generate_balance_sheet(*, as_of_date: datetime.date | None = None) -> dict:
    """
    Args:
        as_of_date: inclusive snapshot date. None means every posted entry,
            future-dated ones included.

    Returns:
        {
            "as_of": "YYYY-MM-DD" or None,
            "assets": [{"account_id","code","name","balance","balance_minor"}...],
            "liabilities": [...],
            "equity": [...],
            "total_assets": 0.0,
            "total_liabilities": 0.0,
            "total_equity": 0.0,
            "net_income": 0.0,
            "total_liabilities_and_equity": 0.0,
            ...*_minor twins,
            "balanced": true
        }
    """
    # one query: balance-sheet accounts and net income come from the same rows
    activity = account_activity(end_date=as_of_date)

    sections = {
        AccountType.ASSET: [],
        AccountType.LIABILITY: [],
        AccountType.EQUITY: [],
    }
    totals = {key: ZERO for key in sections}

    income = ZERO
    cogs = ZERO
    expenses = ZERO

    for row in activity:
        bal = row.balance

        if row.type_key == AccountType.INCOME:
            income += bal
            continue
        if row.type_key == AccountType.COGS:
            cogs += bal
            continue
        if row.type_key == AccountType.EXPENSE:
            expenses += bal
            continue

        if bal == ZERO:
            continue

        sections[row.type_key].append(
            {
                "account_id": row.account_id,
                "code": row.code,
                "name": row.name,
                "balance": to_major_number(bal),
                "balance_minor": to_minor_int(bal),
            }
        )
        totals[row.type_key] += bal

    net_income = q2(income - cogs - expenses)
    if net_income != ZERO:
        sections[AccountType.EQUITY].append(
            {
                "account_id": None,
                "code": CURRENT_EARNINGS_CODE,
                "name": "Current Period Earnings",
                "balance": to_major_number(net_income),
                "balance_minor": to_minor_int(net_income),
            }
        )

    total_assets = q2(totals[AccountType.ASSET])
    total_liabilities = q2(totals[AccountType.LIABILITY])
    total_equity = q2(totals[AccountType.EQUITY] + net_income)
    total_l_and_e = q2(total_liabilities + total_equity)

    balanced = to_minor_int(total_assets) == to_minor_int(total_l_and_e)
    if not balanced:
        logger.warning(
            "Balance sheet out of balance as of %s (assets=%s liabilities+equity=%s)",
            as_of_date,
            total_assets,
            total_l_and_e,
        )

    return {
        "as_of": as_of_date.isoformat() if as_of_date else None,
        "assets": sections[AccountType.ASSET],
        "liabilities": sections[AccountType.LIABILITY],
        "equity": sections[AccountType.EQUITY],
        "total_assets": to_major_number(total_assets),
        "total_liabilities": to_major_number(total_liabilities),
        "total_equity": to_major_number(total_equity),
        "net_income": to_major_number(net_income),
        "total_liabilities_and_equity": to_major_number(total_l_and_e),
        "total_assets_minor": to_minor_int(total_assets),
        "total_liabilities_minor": to_minor_int(total_liabilities),
        "total_equity_minor": to_minor_int(total_equity),
        "net_income_minor": to_minor_int(net_income),
        "total_liabilities_and_equity_minor": to_minor_int(total_l_and_e),
        "balanced": balanced,
    }
