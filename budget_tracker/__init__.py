"""
budget_tracker
~~~~~~~~~~~~~~

Income, expense and savings tracking service. The analytics classes are
plain Python over transaction snapshots and can be used without the API.
"""

from budget_tracker.utils.analyzer import FinanceAnalyzer
from budget_tracker.utils.sorter import sort_transactions
from budget_tracker.utils.trends import TrendAnalyzer

__all__ = ["FinanceAnalyzer", "TrendAnalyzer", "sort_transactions"]
