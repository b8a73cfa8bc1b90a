import json
from decimal import Decimal

import pytest

from api.errors import NotFound
from models.budget import BudgetDraft


class TestBudgetService:
    """Tests for BudgetService against the fake backend."""

    @pytest.mark.asyncio
    async def test_find_all_empty(self, logged_in):
        budgets = await logged_in.budgets.find_all()

        assert budgets == []

    @pytest.mark.asyncio
    async def test_find_all_parses_and_caches(self, logged_in, backend):
        backend.add_budget("Cloud Compute (AWS)", "Infrastructure", "5000.00", spent="3200.00")
        backend.add_budget("Software Licences (Q3)", "Software", "1500.00", spent="500.00")

        budgets = await logged_in.budgets.find_all()

        assert [b.name for b in budgets] == ["Cloud Compute (AWS)", "Software Licences (Q3)"]
        assert budgets[0].amount == Decimal("5000.00")
        assert budgets[0].spent == Decimal("3200.00")
        assert logged_in.cache.budgets() == budgets

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_spent(self, logged_in, backend):
        """Test the server assigns id and spent on create."""
        budget = await logged_in.budgets.create(
            BudgetDraft(name="Groceries", category="Food", amount=Decimal("400"))
        )

        assert budget.id is not None
        assert budget.spent == Decimal("0")
        assert budget.amount == Decimal("400.00")
        assert logged_in.cache.find_budget(budget.id) == budget

    @pytest.mark.asyncio
    async def test_create_payload_excludes_server_fields(self, logged_in, backend):
        await logged_in.budgets.create(
            BudgetDraft(name="Groceries", category="Food", amount=Decimal("400"))
        )

        body = json.loads(backend.requests[-1].content)
        assert set(body) == {"name", "category", "amount"}

    @pytest.mark.asyncio
    async def test_find_by_id(self, logged_in, backend):
        budget_id = backend.add_budget("Travel", "Travel", "900")

        budget = await logged_in.budgets.find(budget_id)

        assert budget is not None
        assert budget.id == budget_id
        assert budget.name == "Travel"

    @pytest.mark.asyncio
    async def test_find_missing_returns_none(self, logged_in):
        assert await logged_in.budgets.find(9999) is None

    @pytest.mark.asyncio
    async def test_update_reflects_server_response(self, logged_in, backend):
        """Test update returns the server copy with spent recomputed."""
        budget_id = backend.add_budget("Food", "Food", "300")
        backend.add_transaction("Market", "120.00", "Food", "EXPENSE", budget_id=budget_id)

        updated = await logged_in.budgets.update(
            budget_id, BudgetDraft(name="Food & Drink", category="Food", amount=Decimal("100"))
        )

        assert updated.name == "Food & Drink"
        assert updated.amount == Decimal("100.00")
        assert updated.spent == Decimal("120.00")
        assert logged_in.cache.find_budget(budget_id).name == "Food & Drink"

    @pytest.mark.asyncio
    async def test_update_missing_raises_not_found(self, logged_in):
        with pytest.raises(NotFound):
            await logged_in.budgets.update(
                42, BudgetDraft(name="X", category="Y", amount=Decimal("1"))
            )

    @pytest.mark.asyncio
    async def test_delete_removes_from_cache_after_confirmation(self, logged_in, backend):
        budget_id = backend.add_budget("Old", "Misc", "10")
        await logged_in.budgets.find_all()

        deleted = await logged_in.budgets.delete(budget_id)

        assert deleted is True
        assert budget_id not in backend.budgets
        assert logged_in.cache.find_budget(budget_id) is None

    @pytest.mark.asyncio
    async def test_failed_delete_keeps_cache(self, logged_in, backend):
        """Test a delete the server rejects does not remove the cached budget."""
        budget_id = backend.add_budget("Keep", "Misc", "10")
        await logged_in.budgets.find_all()
        backend.fail_next(500, {"message": "database unavailable"})

        with pytest.raises(Exception):
            await logged_in.budgets.delete(budget_id)

        assert logged_in.cache.find_budget(budget_id) is not None

    @pytest.mark.asyncio
    async def test_delete_missing_returns_false(self, logged_in):
        assert await logged_in.budgets.delete(9999) is False

    @pytest.mark.asyncio
    async def test_summary(self, logged_in, backend):
        backend.add_budget("Cloud", "Infra", "5000", spent="3200")
        backend.add_budget("Software", "Software", "1500", spent="1600")
        backend.add_budget("Hardware", "Hardware", "8000", spent="8000")

        summary = await logged_in.budgets.summary()

        assert summary.total_budgeted == Decimal("14500.00")
        assert summary.total_spent == Decimal("12800.00")
        assert summary.total_remaining == Decimal("1700.00")
        assert summary.over_budget_count == 1
        assert summary.total_budgets == 3
