"""Custom exceptions for the budget tracker"""


class BudgetTrackerError(Exception):
    """Base exception for budget tracker errors"""
    pass


class PersistenceError(BudgetTrackerError):
    """Loading or saving the transaction collection failed"""
    pass


class ConfigurationError(BudgetTrackerError):
    """Invalid or unsupported configuration"""
    pass
