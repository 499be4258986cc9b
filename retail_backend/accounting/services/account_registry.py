# PATH: accounting/services/account_registry.py

"""
ACCOUNT REGISTRY (AUTHORITATIVE)

Source of truth for valid posting targets and their classification.

This module answers:
- "Which account is this id/code?"          -> get_account()
- "Which accounts match this filter?"       -> list_accounts()
- "How does this account behave?"           -> classify()
- "Which account is used for this purpose?" -> get_cash_account() & co.

Design goals:
- deterministic (code ascending everywhere)
- hard-fail on missing setup (so we don't post to wrong accounts)
- read-mostly: the only writes are admin lifecycle actions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from django.conf import settings
from django.db import transaction

from accounting.models.account import Account
from accounting.models.account_type import AccountSubType, AccountType
from accounting.services.exceptions import (
    AccountInUse,
    AccountNotFound,
    AccountResolutionError,
)

logger = logging.getLogger(__name__)

# ------------------------------------------------------------
# SEMANTIC CODES
# ------------------------------------------------------------

DEFAULT_CODES = {
    "AR": "1050",
    "CASH": "1060",
    "PETTY_CASH": "1065",
    "INVENTORY": "1510",
    "ACCOUNTS_PAYABLE": "2100",
    "SALES_TAX_PAYABLE": "2120",
    "OWNER_EQUITY": "3000",
    "RETAINED_EARNINGS": "3200",
    "SALES_REVENUE": "4100",
    "COGS": "5010",
}


@dataclass(frozen=True)
class AccountClassification:
    account_type: str
    normal_balance: str

    @property
    def is_debit_normal(self) -> bool:
        return self.normal_balance == AccountType.DEBIT


def _codes() -> dict:
    configured = getattr(settings, "ACCOUNTING_ACCOUNT_CODES", None) or {}
    return {**DEFAULT_CODES, **configured}


# ------------------------------------------------------------
# LOOKUPS
# ------------------------------------------------------------


def get_account(code_or_id) -> Account:
    """
    Resolve an Account from an instance, a primary key or a code.

    Digit strings are tried as a primary key first, then as a code,
    because account codes are numeric in the default chart.
    """
    if isinstance(code_or_id, Account):
        return code_or_id

    if code_or_id is None or isinstance(code_or_id, bool):
        raise AccountNotFound("Account reference is required")

    qs = Account.objects.select_related("account_type", "sub_type")

    if isinstance(code_or_id, int):
        account = qs.filter(pk=code_or_id).first()
        if account is None:
            raise AccountNotFound(f"Account id={code_or_id} not found")
        return account

    ref = str(code_or_id).strip()
    if not ref:
        raise AccountNotFound("Account reference is required")

    if ref.isdigit():
        account = qs.filter(pk=int(ref)).first()
        if account is not None:
            return account

    account = qs.filter(code=ref).first()
    if account is None:
        raise AccountNotFound(f"Account {ref!r} not found")
    return account


def get_account_by_code(code: str) -> Account:
    code = (code or "").strip()
    if not code:
        raise AccountNotFound("Account code is required")

    account = (
        Account.objects.select_related("account_type", "sub_type")
        .filter(code=code)
        .first()
    )
    if account is None:
        raise AccountNotFound(f"Account with code={code} not found")
    return account


def _resolve_type(account_type) -> AccountType | None:
    if account_type is None or account_type == "":
        return None
    if isinstance(account_type, AccountType):
        return account_type

    ref = str(account_type).strip()
    if ref.isdigit():
        found = AccountType.objects.filter(pk=int(ref)).first()
    else:
        found = AccountType.objects.filter(key=ref.upper()).first()

    if found is None:
        raise AccountResolutionError(f"Unknown account type {account_type!r}")
    return found


def list_accounts(*, account_type=None, sub_type=None, is_enabled=None):
    """
    Accounts matching the filter, ordered by code ascending.

    account_type: AccountType, id or key ("ASSET", ...)
    sub_type:     AccountSubType or id
    is_enabled:   None means "both"
    """
    qs = Account.objects.select_related("account_type", "sub_type")

    resolved_type = _resolve_type(account_type)
    if resolved_type is not None:
        qs = qs.filter(account_type=resolved_type)

    if sub_type not in (None, ""):
        sub_type_id = sub_type.pk if isinstance(sub_type, AccountSubType) else int(sub_type)
        qs = qs.filter(sub_type_id=sub_type_id)

    if is_enabled is not None:
        qs = qs.filter(is_enabled=bool(is_enabled))

    return qs.order_by("code")


def classify(account: Account) -> AccountClassification:
    key = account.account_type.key
    return AccountClassification(
        account_type=key,
        normal_balance=AccountType.normal_balance_for(key),
    )


# ------------------------------------------------------------
# LIFECYCLE
# ------------------------------------------------------------


def disable_account(account: Account) -> Account:
    if account.is_enabled:
        account.is_enabled = False
        account.save(update_fields=["is_enabled", "updated_at"])
        logger.info("Account disabled code=%s", account.code)
    return account


@transaction.atomic
def delete_account(account: Account) -> None:
    """
    Physically delete an account that has never been posted to.

    Accounts with ledger history must be disabled instead.
    """
    locked = Account.objects.select_for_update().get(pk=account.pk)
    if locked.has_ledger_history():
        raise AccountInUse(
            f"Account {locked.code} has posted journal lines; disable it instead of deleting"
        )
    if locked.children.exists():
        raise AccountInUse(f"Account {locked.code} has child accounts")

    logger.info("Account deleted code=%s", locked.code)
    # running_balance rows only exist for accounts with history
    locked.delete()


# ------------------------------------------------------------
# SEMANTIC RESOLVERS (used by posting rules)
# ------------------------------------------------------------


def _resolve_code(semantic_key: str) -> str:
    semantic_key = (semantic_key or "").strip().upper()
    if not semantic_key:
        raise AccountResolutionError("semantic_key is required")

    code = (_codes().get(semantic_key) or "").strip()
    if not code:
        raise AccountResolutionError(
            f"Missing mapping for semantic key '{semantic_key}'. "
            "Update ACCOUNTING_ACCOUNT_CODES or run seed_retail_chart."
        )
    return code


def get_semantic_account(semantic_key: str) -> Account:
    code = _resolve_code(semantic_key)
    try:
        return get_account_by_code(code)
    except AccountNotFound as exc:
        raise AccountNotFound(
            f"Account with code={code} ({semantic_key}) not found. "
            "Run the seed_retail_chart command (or POST /api/accounting/initialize/)."
        ) from exc


def get_cash_account() -> Account:
    return get_semantic_account("CASH")


def get_accounts_receivable_account() -> Account:
    return get_semantic_account("AR")


def get_inventory_account() -> Account:
    return get_semantic_account("INVENTORY")


def get_accounts_payable_account() -> Account:
    return get_semantic_account("ACCOUNTS_PAYABLE")


def get_sales_tax_payable_account() -> Account:
    return get_semantic_account("SALES_TAX_PAYABLE")


def get_sales_revenue_account() -> Account:
    return get_semantic_account("SALES_REVENUE")


def get_cogs_account() -> Account:
    return get_semantic_account("COGS")
