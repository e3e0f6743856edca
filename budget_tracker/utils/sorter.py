from typing import Any, Callable, Dict, List, Sequence, Tuple

from pyuca import Collator

from budget_tracker.models.transaction import SortField, SortOrder, Transaction

_collator = Collator()


def _category_key(tx: Transaction) -> Tuple[int, ...]:
    return _collator.sort_key(tx.category.casefold())


# field -> (key, natural direction is descending)
SORT_KEYS: Dict[SortField, Tuple[Callable[[Transaction], Any], bool]] = {
    SortField.DATE: (lambda tx: tx.date, True),
    SortField.AMOUNT: (lambda tx: tx.amount, True),
    SortField.CATEGORY: (_category_key, False),
}


def sort_transactions(
    snapshot: Sequence[Transaction],
    field: SortField = SortField.DATE,
    order: SortOrder = SortOrder.DESC,
) -> List[Transaction]:
    """
    Return a sorted copy of the snapshot.

    Each field has a natural direction: newest and largest first for date and
    amount, A-Z for category. `desc` keeps the natural direction and `asc`
    flips it, for every field alike. The sort is stable in both directions.
    """
    key, natural_descending = SORT_KEYS[SortField(field)]
    reverse = (SortOrder(order) is SortOrder.DESC) == natural_descending
    return sorted(snapshot, key=key, reverse=reverse)
