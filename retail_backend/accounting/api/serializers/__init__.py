# accounting/api/serializers/__init__.py

from accounting.api.serializers.accounts import (
    AccountBalanceSerializer,
    AccountSerializer,
    AccountSubTypeSerializer,
    AccountTypeSerializer,
)
from accounting.api.serializers.journal_entries import (
    JournalEntryCreateSerializer,
    JournalEntryDetailSerializer,
    JournalEntryReverseSerializer,
    JournalEntrySerializer,
    JournalItemInputSerializer,
    JournalLineSerializer,
)

__all__ = [
    "AccountSerializer",
    "AccountTypeSerializer",
    "AccountSubTypeSerializer",
    "AccountBalanceSerializer",
    "JournalEntrySerializer",
    "JournalEntryDetailSerializer",
    "JournalEntryCreateSerializer",
    "JournalEntryReverseSerializer",
    "JournalItemInputSerializer",
    "JournalLineSerializer",
]
