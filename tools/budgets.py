"""Budget analysis tools.

Pure functions over Budget objects. ``spent`` is taken as given from the
server; nothing here recomputes it from transactions.
"""

from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Iterable, Optional
from models.budget import Budget, BudgetSummary
from models.transaction import Transaction

WARNING_PERCENTAGE = 80


class BudgetStatus(str, Enum):
    ON_TRACK = "ON_TRACK"
    OVERSPENT = "OVERSPENT"


class UsageLevel(str, Enum):
    """Progress-bar tier for a budget's percentage used."""

    NORMAL = "normal"
    WARNING = "warning"
    OVER = "over"


def remaining(budget: Budget) -> Decimal:
    """Amount left before the ceiling is reached (negative when overspent)."""
    return budget.amount - budget.spent


def percentage_used(budget: Budget) -> Optional[int]:
    """Percentage of the budget spent, rounded half up to a whole number.

    Args:
        budget: Budget to measure.

    Returns:
        ``round(100 * spent / amount)``, or None when amount <= 0 and no
        meaningful percentage exists.
    """
    if budget.amount <= 0:
        return None

    ratio = Decimal(100) * budget.spent / budget.amount
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def is_overspent(budget: Budget) -> bool:
    return remaining(budget) < 0


def budget_status(budget: Budget) -> BudgetStatus:
    """ON_TRACK while remaining >= 0, OVERSPENT otherwise."""
    return BudgetStatus.OVERSPENT if is_overspent(budget) else BudgetStatus.ON_TRACK


def usage_level(budget: Budget) -> Optional[UsageLevel]:
    """Classify percentage used: over 100 is OVER, 80 and up is WARNING.

    Returns:
        UsageLevel, or None when percentage_used is None.
    """
    percentage = percentage_used(budget)
    if percentage is None:
        return None
    if percentage > 100:
        return UsageLevel.OVER
    if percentage >= WARNING_PERCENTAGE:
        return UsageLevel.WARNING
    return UsageLevel.NORMAL


def total_budgeted(budgets: Iterable[Budget]) -> Decimal:
    return sum((b.amount for b in budgets), Decimal("0"))


def total_spent(budgets: Iterable[Budget]) -> Decimal:
    return sum((b.spent for b in budgets), Decimal("0"))


def summarize_budgets(budgets: Iterable[Budget]) -> BudgetSummary:
    """Compute the same figures as GET /api/budgets/summary from cached budgets.

    A budget counts as over budget when spent exceeds amount.
    """
    budgets = list(budgets)
    budgeted = total_budgeted(budgets)
    spent = total_spent(budgets)

    return BudgetSummary(
        total_budgeted=budgeted,
        total_spent=spent,
        total_remaining=budgeted - spent,
        over_budget_count=sum(1 for b in budgets if b.spent > b.amount),
        total_budgets=len(budgets),
    )


def resolve_budget(
    transaction: Transaction, budgets: Iterable[Budget]
) -> Optional[Budget]:
    """Find the budget a transaction is linked to.

    Args:
        transaction: Transaction with an optional budget_id.
        budgets: Currently known budgets.

    Returns:
        The linked Budget, or None if the transaction is unlinked or its
        budget_id does not match any known budget.
    """
    if transaction.budget_id is None:
        return None

    for budget in budgets:
        if budget.id == transaction.budget_id:
            return budget
    return None
