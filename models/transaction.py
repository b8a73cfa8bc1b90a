from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


@dataclass
class Transaction:
    id: Optional[int]  # server-assigned, None until created
    description: str
    amount: Decimal  # always positive, sign is carried by type
    category: str
    transaction_date: datetime
    type: TransactionType
    budget_id: Optional[int] = None  # weak reference, may dangle
    receipt_url: Optional[str] = None


@dataclass
class TransactionDraft:
    """Writable shape of a transaction, sent on create and update."""

    description: str
    amount: Decimal
    category: str
    transaction_date: datetime
    type: TransactionType
    budget_id: Optional[int] = None
    receipt_url: Optional[str] = None

    def __post_init__(self):
        self.description = self.description.strip()
        self.category = self.category.strip()
        self.amount = Decimal(self.amount)
        self.type = TransactionType(self.type)

        if not self.description:
            raise ValueError("Description is required")
        if not self.category:
            raise ValueError("Category is required")
        if self.amount <= 0:
            raise ValueError("Amount must be greater than zero")

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "TransactionDraft":
        """Build a draft from an existing transaction, e.g. to edit it."""
        return cls(
            description=transaction.description,
            amount=transaction.amount,
            category=transaction.category,
            transaction_date=transaction.transaction_date,
            type=transaction.type,
            budget_id=transaction.budget_id,
            receipt_url=transaction.receipt_url,
        )

    def to_dict(self) -> dict:
        """Convert draft to the JSON request body."""
        data = {
            "description": self.description,
            "amount": float(self.amount),
            "category": self.category,
            "transactionDate": self.transaction_date.isoformat(),
            "type": self.type.value,
            "budgetId": self.budget_id,
        }
        if self.receipt_url:
            data["receiptUrl"] = self.receipt_url
        return data
