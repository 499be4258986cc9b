# accounting/api/views/__init__.py

"""
accounting.api.views package

Report + action APIViews. ViewSets live in accounting.api.view (singular).
Do NOT import accounting.api.urls from here to avoid circular imports.
"""

from accounting.api.views.balance_sheet import BalanceSheetView
from accounting.api.views.income_statement import IncomeStatementView
from accounting.api.views.initialize import InitializeChartView
from accounting.api.views.trial_balance import TrialBalanceView

__all__ = [
    "TrialBalanceView",
    "IncomeStatementView",
    "BalanceSheetView",
    "InitializeChartView",
]
