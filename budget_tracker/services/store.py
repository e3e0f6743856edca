import logging
from typing import List, Optional, Tuple

from budget_tracker.core.errors import PersistenceError
from budget_tracker.db.storage import TransactionRepository
from budget_tracker.models.transaction import StoreResult, Transaction, TransactionCreate

logger = logging.getLogger(__name__)


class TransactionStore:
    """
    Sole owner and mutator of the transaction collection.

    Readers get a tuple snapshot that is rebuilt on every mutation, so a
    snapshot handed out earlier never changes underneath them. Each mutation
    persists the full collection; a failed save is returned as a warning and
    the in-memory change stands.
    """

    def __init__(self, repository: TransactionRepository) -> None:
        self._repository = repository
        self._transactions: Tuple[Transaction, ...] = ()

    def load(self) -> Optional[str]:
        try:
            loaded = self._repository.load()
        except PersistenceError as e:
            logger.warning(f"Could not load transactions, starting empty: {e}")
            self._transactions = ()
            return str(e)

        seen = set()
        unique: List[Transaction] = []
        for tx in loaded:
            if tx.id in seen:
                logger.warning(f"Skipping duplicate transaction id {tx.id}")
                continue
            seen.add(tx.id)
            unique.append(tx)
        self._transactions = tuple(unique)
        logger.info(f"Loaded {len(self._transactions)} transactions")
        return None

    def list(self) -> Tuple[Transaction, ...]:
        return self._transactions

    def get(self, transaction_id: str) -> Optional[Transaction]:
        return next((tx for tx in self._transactions if tx.id == transaction_id), None)

    def _new_transaction(self, fields: TransactionCreate) -> Transaction:
        tx = Transaction(**fields.model_dump())
        while self.get(tx.id) is not None:
            tx = Transaction(**fields.model_dump())
        return tx

    def add(self, fields: TransactionCreate) -> StoreResult:
        tx = self._new_transaction(fields)
        self._transactions = self._transactions + (tx,)
        logger.info(f"Added {tx.type.value} transaction {tx.id}")
        return StoreResult(transaction=tx, warning=self._persist())

    def remove(self, transaction_id: str) -> StoreResult:
        remaining = tuple(tx for tx in self._transactions if tx.id != transaction_id)
        if len(remaining) == len(self._transactions):
            return StoreResult(removed=False)

        self._transactions = remaining
        logger.info(f"Removed transaction {transaction_id}")
        return StoreResult(removed=True, warning=self._persist())

    def replace(self, transaction_id: str, fields: TransactionCreate) -> Optional[StoreResult]:
        """Remove and re-add in one step. The replacement gets a new id."""
        if self.get(transaction_id) is None:
            return None

        tx = self._new_transaction(fields)
        self._transactions = tuple(t for t in self._transactions if t.id != transaction_id) + (tx,)
        logger.info(f"Replaced transaction {transaction_id} with {tx.id}")
        return StoreResult(transaction=tx, removed=True, warning=self._persist())

    def _persist(self) -> Optional[str]:
        try:
            self._repository.save(self._transactions)
        except PersistenceError as e:
            logger.warning(f"Saving transactions failed, keeping in-memory state: {e}")
            return str(e)
        return None
