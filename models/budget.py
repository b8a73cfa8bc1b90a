"""Budget models: the cached server record, the writable draft, and the summary."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class Budget:
    """A named spending ceiling for a category.

    Attributes:
        id: Server-assigned identifier (None before first persistence).
        name: Display name.
        category: Free-form category label.
        amount: Allocated ceiling.
        spent: Authoritative total computed by the server from linked
            transactions. Never recomputed locally.
    """

    id: Optional[int]
    name: str
    category: str
    amount: Decimal
    spent: Decimal = Decimal("0")


@dataclass
class BudgetDraft:
    """Writable shape of a budget, sent on create and update.

    ``id`` and ``spent`` are server-owned and therefore not part of this type.
    """

    name: str
    category: str
    amount: Decimal

    def __post_init__(self):
        self.name = self.name.strip()
        self.category = self.category.strip()
        self.amount = Decimal(self.amount)

        if not self.name:
            raise ValueError("Budget name is required")
        if not self.category:
            raise ValueError("Category is required")
        if self.amount <= 0:
            raise ValueError("Amount must be greater than zero")

    @classmethod
    def from_budget(cls, budget: Budget) -> "BudgetDraft":
        """Build a draft from an existing budget, e.g. to edit it."""
        return cls(name=budget.name, category=budget.category, amount=budget.amount)

    def to_dict(self) -> dict:
        """Convert draft to the JSON request body."""
        return {
            "name": self.name,
            "category": self.category,
            "amount": float(self.amount),
        }


@dataclass
class BudgetSummary:
    """Aggregate figures over a set of budgets."""

    total_budgeted: Decimal
    total_spent: Decimal
    total_remaining: Decimal
    over_budget_count: int
    total_budgets: int
