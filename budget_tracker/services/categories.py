import logging
from typing import Dict, Iterable, List, Tuple

from budget_tracker.models.transaction import TransactionType

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES: Dict[TransactionType, Tuple[str, ...]] = {
    TransactionType.INCOME: ("Salary", "Freelance", "Investments", "Gift", "Other"),
    TransactionType.EXPENSE: (
        "Food",
        "Housing",
        "Transportation",
        "Entertainment",
        "Healthcare",
        "Shopping",
        "Utilities",
        "Other",
    ),
    TransactionType.SAVINGS: ("Emergency Fund", "Retirement", "Investment", "Goal Saving", "Other"),
}


class CategoryRegistry:
    """Append-only category names per transaction type, seeded with defaults."""

    def __init__(self, defaults: Dict[TransactionType, Iterable[str]] = DEFAULT_CATEGORIES) -> None:
        self._categories: Dict[TransactionType, List[str]] = {
            tx_type: list(defaults.get(tx_type, ())) for tx_type in TransactionType
        }

    def categories(self, tx_type: TransactionType) -> Tuple[str, ...]:
        return tuple(self._categories[TransactionType(tx_type)])

    def add(self, tx_type: TransactionType, name: str) -> bool:
        """Register a category for one type. Returns False if it was already known."""
        tx_type = TransactionType(tx_type)
        name = name.strip()
        if not name:
            raise ValueError("Category name must not be empty")

        known = self._categories[tx_type]
        if name in known:
            return False
        known.append(name)
        logger.info(f"Added new {tx_type.value} category: {name}")
        return True
