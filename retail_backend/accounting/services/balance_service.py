"""
BALANCE & REPORTING SERVICE (AUTHORITATIVE)

Read-only ledger aggregation helpers shared by every statement.

RULES:
- READ-ONLY: no writes, ever
- JournalLine is the single source of truth for dated reports
- Accounting timeline uses JournalEntry.entry_date (not created_at)
- One grouped query per report, so a report never sees half an entry
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from decimal import Decimal

from django.db.models import Case, F, Sum, When
from django.db.models.functions import Coalesce

from accounting.models.account import Account
from accounting.models.account_type import AccountType
from accounting.models.balance import AccountBalance
from accounting.models.journal_line import JournalLine
from accounting.services.money import ZERO, q2


class BalanceServiceError(Exception):
    """Base error for balance and reporting services."""


@dataclass(frozen=True)
class AccountActivity:
    account_id: int
    code: str
    name: str
    type_key: str
    type_name: str
    is_enabled: bool
    debit: Decimal
    credit: Decimal

    @property
    def balance(self) -> Decimal:
        """Net balance on the account's normal side."""
        if AccountType.normal_balance_for(self.type_key) == AccountType.DEBIT:
            return q2(self.debit - self.credit)
        return q2(self.credit - self.debit)

    @property
    def has_activity(self) -> bool:
        return self.debit != ZERO or self.credit != ZERO


def _lines_qs(*, start_date: datetime.date | None = None, end_date: datetime.date | None = None):
    qs = JournalLine.objects.all()
    if start_date is not None:
        qs = qs.filter(journal_entry__entry_date__gte=start_date)
    if end_date is not None:
        qs = qs.filter(journal_entry__entry_date__lte=end_date)
    return qs


def account_activity(
    *,
    start_date: datetime.date | None = None,
    end_date: datetime.date | None = None,
    type_keys=None,
    enabled_only: bool = False,
) -> list[AccountActivity]:
    """
    Debit/credit totals per account over [start_date, end_date], ordered by code.

    Accounts without activity in the window are included with zero totals.
    """
    accounts = Account.objects.select_related("account_type").order_by("code")
    if type_keys:
        accounts = accounts.filter(account_type__key__in=list(type_keys))
    if enabled_only:
        accounts = accounts.filter(is_enabled=True)
    accounts = list(accounts)

    if not accounts:
        return []

    account_ids = [a.id for a in accounts]

    rows = (
        _lines_qs(start_date=start_date, end_date=end_date)
        .filter(account_id__in=account_ids)
        .values("account_id")
        .annotate(
            debit_total=Coalesce(
                Sum(Case(When(entry_type=JournalLine.DEBIT, then=F("amount")))),
                Decimal("0.00"),
            ),
            credit_total=Coalesce(
                Sum(Case(When(entry_type=JournalLine.CREDIT, then=F("amount")))),
                Decimal("0.00"),
            ),
        )
    )

    totals = {r["account_id"]: (q2(r["debit_total"]), q2(r["credit_total"])) for r in rows}

    return [
        AccountActivity(
            account_id=acc.id,
            code=acc.code,
            name=acc.name,
            type_key=acc.account_type.key,
            type_name=acc.account_type.name,
            is_enabled=acc.is_enabled,
            debit=totals.get(acc.id, (ZERO, ZERO))[0],
            credit=totals.get(acc.id, (ZERO, ZERO))[1],
        )
        for acc in accounts
    ]


def totals_by_type(activity: list[AccountActivity]) -> dict[str, Decimal]:
    totals = {key: ZERO for key, _ in AccountType.TYPE_CHOICES}
    for row in activity:
        totals[row.type_key] = q2(totals[row.type_key] + row.balance)
    return totals


def get_account_balance(account: Account, *, as_of: datetime.date | None = None) -> Decimal:
    """
    Balance rule:
    - Assets, COGS & Expenses -> Debit balance  (debits - credits)
    - Liabilities, Equity & Income -> Credit balance (credits - debits)

    With no as_of the materialized running balance is used.
    """
    if account is None:
        raise BalanceServiceError("Account is required")

    if as_of is None:
        running = AccountBalance.objects.filter(account=account).first()
        if running is None:
            return ZERO
        return q2(running.balance)

    aggregates = _lines_qs(end_date=as_of).filter(account=account).aggregate(
        debit_total=Coalesce(
            Sum(Case(When(entry_type=JournalLine.DEBIT, then=F("amount")))),
            Decimal("0.00"),
        ),
        credit_total=Coalesce(
            Sum(Case(When(entry_type=JournalLine.CREDIT, then=F("amount")))),
            Decimal("0.00"),
        ),
    )

    debit = q2(aggregates["debit_total"])
    credit = q2(aggregates["credit_total"])

    if account.is_debit_normal:
        return q2(debit - credit)
    return q2(credit - debit)


def find_balance_drift() -> list[dict]:
    """
    Compare every materialized AccountBalance with the ledger.

    Returns one dict per account whose running totals disagree.
    """
    ledger = {row.account_id: row for row in account_activity()}
    drift = []

    seen = set()
    for running in AccountBalance.objects.select_related("account"):
        seen.add(running.account_id)
        row = ledger.get(running.account_id)
        debit = row.debit if row else ZERO
        credit = row.credit if row else ZERO
        if q2(running.debit_total) != debit or q2(running.credit_total) != credit:
            drift.append(
                {
                    "code": running.account.code,
                    "ledger_debit": debit,
                    "ledger_credit": credit,
                    "running_debit": q2(running.debit_total),
                    "running_credit": q2(running.credit_total),
                }
            )

    for account_id, row in ledger.items():
        if account_id not in seen and row.has_activity:
            drift.append(
                {
                    "code": row.code,
                    "ledger_debit": row.debit,
                    "ledger_credit": row.credit,
                    "running_debit": ZERO,
                    "running_credit": ZERO,
                }
            )

    return drift
