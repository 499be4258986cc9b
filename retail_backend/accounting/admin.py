# accounting/admin.py

from django.contrib import admin

from accounting.models.account import Account
from accounting.models.account_type import AccountSubType, AccountType
from accounting.models.balance import AccountBalance
from accounting.models.journal import JournalEntry
from accounting.models.journal_line import JournalLine

# ============================================================
# ACCOUNT TYPES / SUB-TYPES
# ============================================================


@admin.register(AccountType)
class AccountTypeAdmin(admin.ModelAdmin):
    list_display = ("key", "name", "normal_balance")
    readonly_fields = ("created_at", "updated_at")
    ordering = ("id",)


@admin.register(AccountSubType)
class AccountSubTypeAdmin(admin.ModelAdmin):
    list_display = ("name", "account_type")
    list_filter = ("account_type",)
    search_fields = ("name",)
    readonly_fields = ("created_at", "updated_at")


# ============================================================
# ACCOUNT
# ============================================================


@admin.register(Account)
class AccountAdmin(admin.ModelAdmin):
    list_display = (
        "code",
        "name",
        "account_type",
        "sub_type",
        "is_enabled",
    )
    list_filter = ("account_type", "is_enabled")
    search_fields = ("code", "name")
    ordering = ("code",)
    readonly_fields = ("created_at", "updated_at")

    fieldsets = (
        (
            "Account Identity",
            {
                "fields": ("code", "name", "account_type", "sub_type", "parent", "description"),
            },
        ),
        (
            "Status",
            {
                "fields": ("is_enabled",),
            },
        ),
        (
            "System Fields",
            {
                "fields": ("created_at", "updated_at"),
            },
        ),
    )

    def has_delete_permission(self, request, obj=None):
        # accounts with postings are disabled, never deleted
        if obj is not None and obj.has_ledger_history():
            return False
        return super().has_delete_permission(request, obj)


# ============================================================
# JOURNAL ENTRY (READ-ONLY)
# ============================================================


class JournalLineInline(admin.TabularInline):
    model = JournalLine
    extra = 0
    fields = ("line_no", "account", "entry_type", "amount", "description")
    readonly_fields = fields
    ordering = ("line_no",)

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(JournalEntry)
class JournalEntryAdmin(admin.ModelAdmin):
    list_display = (
        "display_number",
        "entry_date",
        "description",
        "reference",
        "total_debit",
        "total_credit",
        "created_at",
    )
    list_filter = ("entry_date",)
    search_fields = ("description", "reference")
    ordering = ("-journal_number",)
    inlines = [JournalLineInline]

    readonly_fields = (
        "journal_number",
        "entry_date",
        "reference",
        "description",
        "total_debit",
        "total_credit",
        "reverses",
        "created_at",
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


# ============================================================
# RUNNING BALANCES (STRICTLY READ-ONLY)
# ============================================================


@admin.register(AccountBalance)
class AccountBalanceAdmin(admin.ModelAdmin):
    list_display = ("account", "debit_total", "credit_total", "balance", "updated_at")
    search_fields = ("account__code", "account__name")
    readonly_fields = ("account", "debit_total", "credit_total", "updated_at")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
