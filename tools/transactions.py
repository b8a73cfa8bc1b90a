"""Transaction analysis tools."""

from decimal import Decimal
from typing import Dict, Iterable, List, Optional
from models.transaction import Transaction, TransactionType


def total_by_type(
    transactions: Iterable[Transaction], transaction_type: TransactionType
) -> Decimal:
    """Sum the amounts of all transactions of one type."""
    return sum(
        (t.amount for t in transactions if t.type == transaction_type), Decimal("0")
    )


def total_income(transactions: Iterable[Transaction]) -> Decimal:
    return total_by_type(transactions, TransactionType.INCOME)


def total_expenses(transactions: Iterable[Transaction]) -> Decimal:
    return total_by_type(transactions, TransactionType.EXPENSE)


def totals_by_category(transactions: Iterable[Transaction]) -> Dict[str, Decimal]:
    """Spending per category.

    Only EXPENSE transactions are counted. Categories appear in the order they
    are first seen.

    Args:
        transactions: Transactions to group.

    Returns:
        Dictionary mapping category to total expense amount.

    Example:
        {"Food": Decimal("42.50"), "Rent": Decimal("1200.00")}
    """
    totals: Dict[str, Decimal] = {}
    for transaction in transactions:
        if transaction.type != TransactionType.EXPENSE:
            continue
        if transaction.category not in totals:
            totals[transaction.category] = Decimal("0")
        totals[transaction.category] += transaction.amount
    return totals


def filter_by_type(
    transactions: Iterable[Transaction],
    transaction_type: Optional[TransactionType] = None,
) -> List[Transaction]:
    """Filter an already-fetched collection by type.

    Args:
        transactions: Transactions to filter.
        transaction_type: INCOME, EXPENSE, or None for all.

    Returns:
        Matching transactions in their original order.
    """
    if transaction_type is None:
        return list(transactions)
    return [t for t in transactions if t.type == transaction_type]


def get_summary(transactions: Iterable[Transaction]) -> Dict[str, object]:
    """Summarize income, expenses and spending by category.

    Args:
        transactions: Transactions to summarize.

    Returns:
        Dictionary with:
        - "income_total": Total income (Decimal)
        - "expense_total": Total expenses (Decimal)
        - "net": income_total - expense_total (Decimal)
        - "expenses_by_category": Dict mapping category to expense amount

    Example:
        {
            "income_total": Decimal("3000.00"),
            "expense_total": Decimal("1250.00"),
            "net": Decimal("1750.00"),
            "expenses_by_category": {"Rent": Decimal("1200.00"), ...},
        }
    """
    transactions = list(transactions)
    income_total = total_income(transactions)
    expense_total = total_expenses(transactions)

    return {
        "income_total": income_total,
        "expense_total": expense_total,
        "net": income_total - expense_total,
        "expenses_by_category": totals_by_category(transactions),
    }
