"""Client-side cache of budgets and transactions."""

from typing import Dict, Iterable, List, Optional
from models.budget import Budget
from models.transaction import Transaction
from logger import get_logger

logger = get_logger()


class LocalCache:
    """Holds the most recent server copies of budgets and transactions.

    Writers capture ``epoch()`` before awaiting a response and pass it back
    when storing. If the cache was invalidated in between (logout, or the view
    that owned the request went away) the write is discarded instead of
    resurrecting state that no longer exists. Otherwise the last response
    stored wins.
    """

    def __init__(self):
        self._epoch = 0
        self._budgets: Dict[int, Budget] = {}
        self._transactions: Dict[int, Transaction] = {}

    def epoch(self) -> int:
        return self._epoch

    def invalidate(self) -> None:
        """Drop everything and reject writes from requests issued earlier."""
        self._epoch += 1
        self._budgets.clear()
        self._transactions.clear()
        logger.debug(f"Cache invalidated (epoch {self._epoch})")

    def _is_current(self, epoch: int, what: str) -> bool:
        if epoch != self._epoch:
            logger.debug(f"Discarding stale {what} (epoch {epoch} != {self._epoch})")
            return False
        return True

    # Budgets

    def budgets(self) -> List[Budget]:
        return list(self._budgets.values())

    def find_budget(self, budget_id: Optional[int]) -> Optional[Budget]:
        if budget_id is None:
            return None
        return self._budgets.get(budget_id)

    def store_budgets(self, budgets: Iterable[Budget], epoch: int) -> bool:
        """Replace the cached budget list with a fresh listing."""
        if not self._is_current(epoch, "budget list"):
            return False
        self._budgets = {b.id: b for b in budgets if b.id is not None}
        return True

    def store_budget(self, budget: Budget, epoch: int) -> bool:
        if budget.id is None or not self._is_current(epoch, "budget"):
            return False
        self._budgets[budget.id] = budget
        return True

    def drop_budget(self, budget_id: int, epoch: int) -> bool:
        if not self._is_current(epoch, "budget delete"):
            return False
        return self._budgets.pop(budget_id, None) is not None

    # Transactions

    def transactions(self) -> List[Transaction]:
        return list(self._transactions.values())

    def find_transaction(self, transaction_id: int) -> Optional[Transaction]:
        return self._transactions.get(transaction_id)

    def store_transactions(
        self, transactions: Iterable[Transaction], epoch: int
    ) -> bool:
        """Replace the cached transaction list with a fresh listing."""
        if not self._is_current(epoch, "transaction list"):
            return False
        self._transactions = {t.id: t for t in transactions if t.id is not None}
        return True

    def store_transaction(self, transaction: Transaction, epoch: int) -> bool:
        if transaction.id is None or not self._is_current(epoch, "transaction"):
            return False
        self._transactions[transaction.id] = transaction
        return True

    def drop_transaction(self, transaction_id: int, epoch: int) -> bool:
        if not self._is_current(epoch, "transaction delete"):
            return False
        return self._transactions.pop(transaction_id, None) is not None
