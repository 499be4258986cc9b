# accounting/services/financial_statement_service.py

"""
FINANCIAL STATEMENT SERVICE (INTEGRITY CHECK)

Hard validation on top of the report services.

RULES:
- READ-ONLY (never writes)
- Reports themselves only FLAG imbalance; this module is where it RAISES
- No posting logic
"""

from __future__ import annotations

import datetime

from accounting.services.balance_service import find_balance_drift
from accounting.services.balance_sheet_service import generate_balance_sheet
from accounting.services.exceptions import ImbalanceDetected
from accounting.services.trial_balance_service import TrialBalanceService


def validate_financials(*, as_of: datetime.date | None = None) -> dict:
    """
    Hard validation of financial integrity.

    Raises ImbalanceDetected if:
    - trial balance debits != credits (every account, enabled or not)
    - Balance Sheet does not balance
    - any materialized AccountBalance disagrees with the journal lines

    Returns a short summary when everything holds.
    """
    trial_balance = TrialBalanceService().generate(as_of=as_of, include_disabled=True)
    tb_totals = trial_balance["totals"]
    if not tb_totals["balanced"]:
        raise ImbalanceDetected(
            "Trial balance is NOT balanced: "
            f"debits={tb_totals['total_debit']} credits={tb_totals['total_credit']}"
        )

    balance_sheet = generate_balance_sheet(as_of_date=as_of)
    if not balance_sheet["balanced"]:
        raise ImbalanceDetected(
            "Balance Sheet is NOT balanced: "
            f"Assets={balance_sheet['total_assets']} "
            f"Liabilities+Equity={balance_sheet['total_liabilities_and_equity']}"
        )

    # running totals include every posting, so only compare them on undated checks
    if as_of is None:
        drift = find_balance_drift()
        if drift:
            codes = ", ".join(d["code"] for d in drift)
            raise ImbalanceDetected(f"Running balances diverge from the ledger for: {codes}")

    return {
        "as_of": trial_balance["as_of"],
        "total_debit": tb_totals["total_debit"],
        "total_credit": tb_totals["total_credit"],
        "total_assets": balance_sheet["total_assets"],
        "total_liabilities_and_equity": balance_sheet["total_liabilities_and_equity"],
    }
