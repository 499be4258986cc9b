# accounting/services/posting_rules.py

"""
POSTING RULES: BUSINESS EVENTS (AUTHORITATIVE)

Defines HOW a retail business event maps to accounting intent.

RESPONSIBILITIES:
- Resolve semantic accounts
- Construct debit / credit lines
- Delegate validation + persistence to create_journal_entry()

THIS MODULE DOES NOT:
- Write to the database
- Create JournalEntry / JournalLine directly
- Enforce debit == credit math (the validator does)

Failures propagate to the caller: a sale that cannot be booked must not
be reported as booked.
"""

from __future__ import annotations

from accounting.services.account_registry import (
    get_accounts_payable_account,
    get_cash_account,
    get_cogs_account,
    get_inventory_account,
    get_sales_revenue_account,
    get_sales_tax_payable_account,
)
from accounting.services.journal_entry_service import create_journal_entry
from accounting.services.money import ZERO, parse_money


def _positive(value, label: str):
    amount = parse_money(value)
    if amount <= ZERO:
        raise ValueError(f"{label} must be greater than zero")
    return amount


def post_sale(
    *,
    order_number: str,
    subtotal,
    tax=ZERO,
    cost=ZERO,
    customer: str | None = None,
    entry_date=None,
):
    """
    POST SALE → ACCOUNTING

    Accounting Effect:
    - Debit  Cash               (subtotal + tax)
    - Credit Sales Revenue      (subtotal)
    - Credit Sales Tax Payable  (tax, when > 0)
    - Debit  COGS / Credit Inventory (cost, when > 0)
    """
    subtotal = _positive(subtotal, "Sale subtotal")
    tax = parse_money(tax)
    cost = parse_money(cost)
    if tax < ZERO or cost < ZERO:
        raise ValueError("Sale tax and cost cannot be negative")

    label = f"Sale - Order {order_number}"
    if customer:
        label = f"{label} - {customer}"

    lines = [
        {"account": get_cash_account(), "description": label, "debit": subtotal + tax},
        {"account": get_sales_revenue_account(), "description": label, "credit": subtotal},
    ]

    if tax > ZERO:
        lines.append(
            {
                "account": get_sales_tax_payable_account(),
                "description": f"Sales tax - Order {order_number}",
                "credit": tax,
            }
        )

    if cost > ZERO:
        lines.append(
            {
                "account": get_cogs_account(),
                "description": f"COGS - Order {order_number}",
                "debit": cost,
            }
        )
        lines.append(
            {
                "account": get_inventory_account(),
                "description": f"Inventory reduction - Order {order_number}",
                "credit": cost,
            }
        )

    return create_journal_entry(
        description=label,
        lines=lines,
        entry_date=entry_date,
        reference=f"ORDER-{order_number}",
    )


def post_purchase_receipt(*, po_number: str, amount, entry_date=None):
    """
    Goods received against a purchase order.

    - Debit  Inventory
    - Credit Accounts Payable
    """
    amount = _positive(amount, "Purchase amount")
    label = f"Purchase - PO {po_number}"

    return create_journal_entry(
        description=label,
        lines=[
            {"account": get_inventory_account(), "description": label, "debit": amount},
            {"account": get_accounts_payable_account(), "description": label, "credit": amount},
        ],
        entry_date=entry_date,
        reference=f"PO-{po_number}",
    )


def post_supplier_payment(*, amount, reference: str | None = None, entry_date=None):
    """
    - Debit  Accounts Payable
    - Credit Cash
    """
    amount = _positive(amount, "Payment amount")
    label = f"Payment - {reference or 'Supplier payment'}"

    return create_journal_entry(
        description=label,
        lines=[
            {"account": get_accounts_payable_account(), "description": label, "debit": amount},
            {"account": get_cash_account(), "description": label, "credit": amount},
        ],
        entry_date=entry_date,
        reference=reference,
    )


def post_market_purchase(*, purchase_number: str, amount, supplier: str | None = None, entry_date=None):
    """
    Direct (cash) market purchase: stock bought and paid on the spot.

    - Debit  Inventory
    - Credit Cash
    """
    amount = _positive(amount, "Market purchase amount")
    label = f"Market purchase {purchase_number}"
    if supplier:
        label = f"{label} - {supplier}"

    return create_journal_entry(
        description=label,
        lines=[
            {"account": get_inventory_account(), "description": label, "debit": amount},
            {"account": get_cash_account(), "description": label, "credit": amount},
        ],
        entry_date=entry_date,
        reference=f"MP-{purchase_number}",
    )


def post_damaged_goods(*, gr_number: str, amount, entry_date=None):
    """
    Damaged goods written off on goods receipt.

    - Debit  COGS
    - Credit Inventory
    """
    amount = _positive(amount, "Damaged goods value")
    label = f"Damaged goods - GR {gr_number}"

    return create_journal_entry(
        description=label,
        lines=[
            {"account": get_cogs_account(), "description": label, "debit": amount},
            {"account": get_inventory_account(), "description": label, "credit": amount},
        ],
        entry_date=entry_date,
        reference=f"GR-{gr_number}",
    )
