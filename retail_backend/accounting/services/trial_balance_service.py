# accounting/services/trial_balance_service.py

from __future__ import annotations

import logging

from accounting.services.balance_service import account_activity
from accounting.services.money import ZERO, q2, to_major_number, to_minor_int

logger = logging.getLogger(__name__)


class TrialBalanceService:
    """
    Trial Balance computation service.

    Guarantees:
    - Scopes to ENABLED accounts (include_disabled=True lists every account)
    - Uses JournalEntry.entry_date as accounting timeline (as_of=None: no cutoff)
    - Avoids N+1 queries by aggregating in bulk
    - Returns JSON-safe numeric values (no Decimals)
    - Never raises on imbalance: the report comes back with balanced=False
    """

    def generate(self, *, as_of=None, include_disabled: bool = False):
        activity = account_activity(end_date=as_of, enabled_only=not include_disabled)

        rows = []
        total_debit = ZERO
        total_credit = ZERO

        for acc in activity:
            if not acc.has_activity:
                continue

            rows.append(
                {
                    "account_id": acc.account_id,
                    "code": acc.code,
                    "name": acc.name,
                    "type": acc.type_key,
                    "total_debit": to_major_number(acc.debit),
                    "total_credit": to_major_number(acc.credit),
                    "balance": to_major_number(acc.balance),
                    "total_debit_minor": to_minor_int(acc.debit),
                    "total_credit_minor": to_minor_int(acc.credit),
                }
            )

            total_debit += acc.debit
            total_credit += acc.credit

        total_debit = q2(total_debit)
        total_credit = q2(total_credit)

        balanced = to_minor_int(total_debit) == to_minor_int(total_credit)
        if not balanced:
            logger.warning(
                "Trial balance out of balance as of %s (debit=%s credit=%s)",
                as_of,
                total_debit,
                total_credit,
            )

        return {
            "as_of": as_of.isoformat() if as_of else None,
            "trial_balance": rows,
            "totals": {
                "total_debit": to_major_number(total_debit),
                "total_credit": to_major_number(total_credit),
                "total_debit_minor": to_minor_int(total_debit),
                "total_credit_minor": to_minor_int(total_credit),
                "balanced": balanced,
            },
        }
