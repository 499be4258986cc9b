# accounting/api/filters.py

"""
Query-string filters for the accounting endpoints (django-filter).

    /api/accounting/accounts/?type_id=1&is_enabled=true
    /api/accounting/subtypes/?type_id=1
    /api/accounting/journal-entries/?start_date=2026-01-01&end_date=2026-01-31
    /api/accounting/ledger-lines/?account_id=28&start_date=2026-01-01
"""

import django_filters

from accounting.models.account import Account
from accounting.models.account_type import AccountSubType
from accounting.models.journal import JournalEntry
from accounting.models.journal_line import JournalLine


class AccountFilter(django_filters.FilterSet):
    type_id = django_filters.NumberFilter(field_name="account_type_id")
    sub_type_id = django_filters.NumberFilter(field_name="sub_type_id")
    is_enabled = django_filters.BooleanFilter(field_name="is_enabled")

    class Meta:
        model = Account
        fields = ("type_id", "sub_type_id", "is_enabled")


class AccountSubTypeFilter(django_filters.FilterSet):
    type_id = django_filters.NumberFilter(field_name="account_type_id")

    class Meta:
        model = AccountSubType
        fields = ("type_id",)


class JournalEntryFilter(django_filters.FilterSet):
    start_date = django_filters.DateFilter(field_name="entry_date", lookup_expr="gte")
    end_date = django_filters.DateFilter(field_name="entry_date", lookup_expr="lte")

    class Meta:
        model = JournalEntry
        fields = ("start_date", "end_date")


class JournalLineFilter(django_filters.FilterSet):
    account_id = django_filters.NumberFilter(field_name="account_id")
    journal_entry_id = django_filters.NumberFilter(field_name="journal_entry_id")
    start_date = django_filters.DateFilter(
        field_name="journal_entry__entry_date", lookup_expr="gte"
    )
    end_date = django_filters.DateFilter(
        field_name="journal_entry__entry_date", lookup_expr="lte"
    )

    class Meta:
        model = JournalLine
        fields = ("account_id", "journal_entry_id", "start_date", "end_date")
