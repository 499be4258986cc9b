# accounting/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

# ViewSets live in accounting/api/view.py (singular).
# We import directly to avoid circular imports through views/__init__.py.
from accounting.api.view import (
    AccountSubTypeViewSet,
    AccountTypeViewSet,
    AccountViewSet,
    JournalEntryViewSet,
    JournalLineViewSet,
)
from accounting.api.views.balance_sheet import BalanceSheetView
from accounting.api.views.income_statement import IncomeStatementView
from accounting.api.views.initialize import InitializeChartView
from accounting.api.views.trial_balance import TrialBalanceView

router = DefaultRouter()
router.register("accounts", AccountViewSet, basename="account")
router.register("types", AccountTypeViewSet, basename="account-type")
router.register("subtypes", AccountSubTypeViewSet, basename="account-subtype")
router.register("journal-entries", JournalEntryViewSet, basename="journal-entry")
router.register("ledger-lines", JournalLineViewSet, basename="ledger-line")

urlpatterns = [
    # Router endpoints
    path("", include(router.urls)),
    # Reports
    path("reports/trial-balance/", TrialBalanceView.as_view(), name="trial-balance"),
    path(
        "reports/income-statement/",
        IncomeStatementView.as_view(),
        name="income-statement",
    ),
    path("reports/balance-sheet/", BalanceSheetView.as_view(), name="balance-sheet"),
    # Setup
    path("initialize/", InitializeChartView.as_view(), name="accounting-initialize"),
]
