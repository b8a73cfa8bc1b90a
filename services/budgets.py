"""Budget service for the /api/budgets resource."""

from typing import List, Optional
from api.errors import NotFound
from api.schemas import BudgetPayload, BudgetSummaryPayload
from models.budget import Budget, BudgetDraft, BudgetSummary
from logger import get_logger

logger = get_logger()

_BASE_PATH = "/api/budgets"


class BudgetService:
    """Service for reading and writing budgets on the backend."""

    def __init__(self, client, cache):
        """Initialize the budget service.

        Args:
            client: ApiClient used to reach the backend.
            cache: LocalCache updated with every successful response.
        """
        self.client = client
        self.cache = cache

    async def find_all(self) -> List[Budget]:
        """Get all budgets.

        Returns:
            List of Budget objects in server order.
        """
        epoch = self.cache.epoch()
        data = await self.client.get_json(_BASE_PATH)
        budgets = [BudgetPayload.model_validate(item).to_model() for item in data]
        self.cache.store_budgets(budgets, epoch)
        return budgets

    async def find(self, budget_id: int) -> Optional[Budget]:
        """Get a single budget by ID.

        Args:
            budget_id: The budget ID to find.

        Returns:
            Budget object if found, None otherwise.
        """
        epoch = self.cache.epoch()
        try:
            data = await self.client.get_json(f"{_BASE_PATH}/{budget_id}")
        except NotFound:
            return None

        budget = BudgetPayload.model_validate(data).to_model()
        self.cache.store_budget(budget, epoch)
        return budget

    async def create(self, draft: BudgetDraft) -> Budget:
        """Create a new budget.

        Args:
            draft: Writable budget fields.

        Returns:
            The created Budget with server-assigned id and spent.
        """
        epoch = self.cache.epoch()
        data = await self.client.post_json(_BASE_PATH, draft.to_dict())
        budget = BudgetPayload.model_validate(data).to_model()
        self.cache.store_budget(budget, epoch)
        logger.info(f"Created budget {budget.name} (ID: {budget.id})")
        return budget

    async def update(self, budget_id: int, draft: BudgetDraft) -> Budget:
        """Update an existing budget.

        Args:
            budget_id: ID of the budget to update.
            draft: New writable fields.

        Returns:
            The budget as stored by the server, with spent recomputed.

        Raises:
            NotFound: If the budget does not exist.
        """
        epoch = self.cache.epoch()
        data = await self.client.put_json(f"{_BASE_PATH}/{budget_id}", draft.to_dict())
        budget = BudgetPayload.model_validate(data).to_model()
        self.cache.store_budget(budget, epoch)
        logger.info(f"Updated budget {budget.name} (ID: {budget.id})")
        return budget

    async def delete(self, budget_id: int) -> bool:
        """Delete a budget by ID.

        Args:
            budget_id: The budget ID to delete.

        Returns:
            True if the budget was deleted, False if not found.
        """
        epoch = self.cache.epoch()
        try:
            await self.client.delete(f"{_BASE_PATH}/{budget_id}")
        except NotFound:
            return False

        self.cache.drop_budget(budget_id, epoch)
        logger.info(f"Deleted budget {budget_id}")
        return True

    async def summary(self) -> BudgetSummary:
        """Get the server-computed budget summary."""
        data = await self.client.get_json(f"{_BASE_PATH}/summary")
        return BudgetSummaryPayload.model_validate(data).to_model()
