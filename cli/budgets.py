#!/usr/bin/env python3

import sys
from decimal import Decimal, InvalidOperation
from models.budget import BudgetDraft
from tools.budgets import (
    budget_status,
    percentage_used,
    remaining,
    summarize_budgets,
    usage_level,
)
from tools.currency import format_currency
from logger import get_logger

logger = get_logger()


def _print_budget(budget):
    percentage = percentage_used(budget)
    level = usage_level(budget)

    logger.info(f"ID: {budget.id}")
    logger.info(f"Name: {budget.name}")
    logger.info(f"Category: {budget.category}")
    logger.info(f"Amount: {format_currency(budget.amount)}")
    logger.info(f"Spent: {format_currency(budget.spent)}")
    logger.info(f"Remaining: {format_currency(remaining(budget))}")
    if percentage is None:
        logger.info("Used: n/a")
    else:
        logger.info(f"Used: {percentage}% ({level.value})")
    logger.info(f"Status: {budget_status(budget).value}")


def _prompt_draft(current=None) -> BudgetDraft:
    """Read budget fields from stdin. Empty input keeps the current value."""

    def ask(label, default):
        suffix = f" [{default}]" if default is not None else ""
        value = input(f"{label}{suffix}: ").strip()
        return value or (str(default) if default is not None else "")

    name = ask("Budget name", current.name if current else None)
    category = ask("Category", current.category if current else None)
    amount_text = ask("Amount", current.amount if current else None)

    try:
        amount = Decimal(amount_text.replace(",", ""))
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {amount_text!r}")

    return BudgetDraft(name=name, category=category, amount=amount)


async def cmd_list(args, services):
    """List all budgets with their spending status."""
    budgets = await services.budgets.find_all()

    if not budgets:
        logger.info("No budgets found.")
        return

    logger.info("\nBudgets:")
    logger.info("=" * 80)
    for budget in budgets:
        _print_budget(budget)
        logger.info("-" * 80)

    logger.info(f"\nTotal budgets: {len(budgets)}")


async def cmd_show(args, services):
    budget = await services.budgets.find(args.budget_id)
    if not budget:
        logger.error(f"Budget {args.budget_id} not found.")
        sys.exit(1)
    _print_budget(budget)


async def cmd_create(args, services):
    """Interactively create a new budget."""
    print("\nCreate New Budget")
    print("=" * 80)

    draft = _prompt_draft()
    budget = await services.budgets.create(draft)

    logger.info(f"\n✓ Budget created successfully with ID: {budget.id}")
    _print_budget(budget)


async def cmd_update(args, services):
    """Interactively update an existing budget."""
    current = await services.budgets.find(args.budget_id)
    if not current:
        logger.error(f"Budget {args.budget_id} not found.")
        sys.exit(1)

    draft = _prompt_draft(current)
    budget = await services.budgets.update(args.budget_id, draft)

    logger.info("\n✓ Budget updated")
    _print_budget(budget)


async def cmd_delete(args, services):
    deleted = await services.budgets.delete(args.budget_id)
    if not deleted:
        logger.error(f"Budget {args.budget_id} not found.")
        sys.exit(1)
    logger.info(f"✓ Deleted budget {args.budget_id}")


async def cmd_summary(args, services):
    """Show the budget summary, from the server or from the fetched budgets."""
    if args.local:
        summary = summarize_budgets(await services.budgets.find_all())
    else:
        summary = await services.budgets.summary()

    logger.info("\nBudget Summary")
    logger.info("=" * 80)
    logger.info(f"Total budgeted:  {format_currency(summary.total_budgeted)}")
    logger.info(f"Total spent:     {format_currency(summary.total_spent)}")
    logger.info(f"Total remaining: {format_currency(summary.total_remaining)}")
    logger.info(
        f"Over budget:     {summary.over_budget_count} of {summary.total_budgets}"
    )


def setup_parser(subparsers):
    """Setup budgets subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "budgets",
        help="Manage budgets",
        description="Create, list, update and delete budgets",
    )

    budgets_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available budget commands",
        dest="subcommand",
        required=True,
    )

    # budgets list
    list_parser = budgets_subparsers.add_parser("list", help="List all budgets")
    list_parser.set_defaults(func=cmd_list)

    # budgets show
    show_parser = budgets_subparsers.add_parser("show", help="Show one budget")
    show_parser.add_argument("budget_id", type=int, help="ID of the budget")
    show_parser.set_defaults(func=cmd_show)

    # budgets create
    create_parser = budgets_subparsers.add_parser(
        "create", help="Create a new budget interactively"
    )
    create_parser.set_defaults(func=cmd_create)

    # budgets update
    update_parser = budgets_subparsers.add_parser(
        "update", help="Update a budget interactively"
    )
    update_parser.add_argument("budget_id", type=int, help="ID of the budget to update")
    update_parser.set_defaults(func=cmd_update)

    # budgets delete
    delete_parser = budgets_subparsers.add_parser("delete", help="Delete a budget by ID")
    delete_parser.add_argument("budget_id", type=int, help="ID of the budget to delete")
    delete_parser.set_defaults(func=cmd_delete)

    # budgets summary
    summary_parser = budgets_subparsers.add_parser(
        "summary", help="Show totals across all budgets"
    )
    summary_parser.add_argument(
        "--local",
        action="store_true",
        help="Compute the summary from the budget list instead of the server summary",
    )
    summary_parser.set_defaults(func=cmd_summary)
