# accounting/apps.py

"""
ACCOUNTING APP CONFIG

Double-entry accounting core:
- Chart of accounts (types -> sub-types -> accounts)
- Journal posting engine (validated, numbered, immutable entries)
- Financial statements (trial balance, income statement, balance sheet)
"""

from django.apps import AppConfig


class AccountingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "accounting"
    verbose_name = "Accounting"
