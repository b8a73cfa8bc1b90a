"""Transaction service for the /api/transactions resource."""

from datetime import datetime
from typing import List, Optional
from urllib.parse import quote
from api.errors import NotFound
from api.schemas import TransactionPayload
from models.transaction import Transaction, TransactionDraft, TransactionType
from logger import get_logger

logger = get_logger()

_BASE_PATH = "/api/transactions"


class TransactionService:
    """Service for reading and writing transactions on the backend.

    The query variants (category, date range, budget, type) are resolved by
    the server. Nothing here filters locally.
    """

    def __init__(self, client, cache):
        """Initialize the transaction service.

        Args:
            client: ApiClient used to reach the backend.
            cache: LocalCache updated with every successful response.
        """
        self.client = client
        self.cache = cache

    async def _fetch_list(self, path: str, params=None) -> List[Transaction]:
        data = await self.client.get_json(path, params=params)
        return [TransactionPayload.model_validate(item).to_model() for item in data]

    async def find_all(self) -> List[Transaction]:
        """Get all transactions and refresh the cached listing."""
        epoch = self.cache.epoch()
        transactions = await self._fetch_list(_BASE_PATH)
        self.cache.store_transactions(transactions, epoch)
        return transactions

    async def find(self, transaction_id: int) -> Optional[Transaction]:
        """Get a single transaction by ID.

        Args:
            transaction_id: The transaction ID to find.

        Returns:
            Transaction object if found, None otherwise.
        """
        epoch = self.cache.epoch()
        try:
            data = await self.client.get_json(f"{_BASE_PATH}/{transaction_id}")
        except NotFound:
            return None

        transaction = TransactionPayload.model_validate(data).to_model()
        self.cache.store_transaction(transaction, epoch)
        return transaction

    async def create(self, draft: TransactionDraft) -> Transaction:
        """Create a new transaction.

        Args:
            draft: Writable transaction fields.

        Returns:
            The created Transaction with its server-assigned id.
        """
        epoch = self.cache.epoch()
        data = await self.client.post_json(_BASE_PATH, draft.to_dict())
        transaction = TransactionPayload.model_validate(data).to_model()
        self.cache.store_transaction(transaction, epoch)
        logger.info(
            f"Created {transaction.type.value.lower()} transaction "
            f"{transaction.description} (ID: {transaction.id})"
        )
        return transaction

    async def update(self, transaction_id: int, draft: TransactionDraft) -> Transaction:
        """Update an existing transaction.

        Raises:
            NotFound: If the transaction does not exist.
        """
        epoch = self.cache.epoch()
        data = await self.client.put_json(
            f"{_BASE_PATH}/{transaction_id}", draft.to_dict()
        )
        transaction = TransactionPayload.model_validate(data).to_model()
        self.cache.store_transaction(transaction, epoch)
        logger.info(f"Updated transaction {transaction.id}")
        return transaction

    async def delete(self, transaction_id: int) -> bool:
        """Delete a transaction by ID.

        Returns:
            True if the transaction was deleted, False if not found.
        """
        epoch = self.cache.epoch()
        try:
            await self.client.delete(f"{_BASE_PATH}/{transaction_id}")
        except NotFound:
            return False

        self.cache.drop_transaction(transaction_id, epoch)
        logger.info(f"Deleted transaction {transaction_id}")
        return True

    async def find_by_category(self, category: str) -> List[Transaction]:
        return await self._fetch_list(
            f"{_BASE_PATH}/category/{quote(category, safe='')}"
        )

    async def find_by_date_range(
        self, start: datetime, end: datetime
    ) -> List[Transaction]:
        """Get transactions dated between start and end (server-inclusive).

        Args:
            start: Start of the range.
            end: End of the range.

        Returns:
            List of Transaction objects.
        """
        return await self._fetch_list(
            f"{_BASE_PATH}/date-range",
            params={"start": start.isoformat(), "end": end.isoformat()},
        )

    async def find_by_budget(self, budget_id: int) -> List[Transaction]:
        return await self._fetch_list(f"{_BASE_PATH}/budget/{budget_id}")

    async def find_by_type(self, transaction_type: TransactionType) -> List[Transaction]:
        transaction_type = TransactionType(transaction_type)
        return await self._fetch_list(f"{_BASE_PATH}/type/{transaction_type.value}")
