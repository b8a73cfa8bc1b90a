"""Pydantic models for the JSON returned by the finance backend."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from models.budget import Budget, BudgetSummary
from models.transaction import Transaction, TransactionType


class _Payload(BaseModel):
    # Backend uses camelCase; ignore anything we don't model.
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class BudgetPayload(_Payload):
    """Budget as serialized by /api/budgets."""

    id: Optional[int] = None
    name: str
    category: str
    amount: Decimal
    spent: Decimal = Decimal("0")

    def to_model(self) -> Budget:
        return Budget(
            id=self.id,
            name=self.name,
            category=self.category,
            amount=self.amount,
            spent=self.spent,
        )


class TransactionPayload(_Payload):
    """Transaction as serialized by /api/transactions."""

    id: Optional[int] = None
    description: str
    amount: Decimal
    category: str
    transaction_date: datetime = Field(alias="transactionDate")
    type: TransactionType
    budget_id: Optional[int] = Field(default=None, alias="budgetId")
    receipt_url: Optional[str] = Field(default=None, alias="receiptUrl")

    def to_model(self) -> Transaction:
        return Transaction(
            id=self.id,
            description=self.description,
            amount=self.amount,
            category=self.category,
            transaction_date=self.transaction_date,
            type=self.type,
            budget_id=self.budget_id,
            receipt_url=self.receipt_url,
        )


class BudgetSummaryPayload(_Payload):
    """Response of GET /api/budgets/summary."""

    total_budgeted: Decimal = Field(alias="totalBudgeted")
    total_spent: Decimal = Field(alias="totalSpent")
    total_remaining: Decimal = Field(alias="totalRemaining")
    over_budget_count: int = Field(alias="overBudgetCount")
    total_budgets: int = Field(alias="totalBudgets")

    def to_model(self) -> BudgetSummary:
        return BudgetSummary(
            total_budgeted=self.total_budgeted,
            total_spent=self.total_spent,
            total_remaining=self.total_remaining,
            over_budget_count=self.over_budget_count,
            total_budgets=self.total_budgets,
        )
