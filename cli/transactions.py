#!/usr/bin/env python3

import sys
from datetime import datetime
from decimal import Decimal, InvalidOperation
from dateutil.relativedelta import relativedelta
from models.transaction import TransactionDraft, TransactionType
from tools.budgets import resolve_budget
from tools.currency import format_currency
from tools.transactions import filter_by_type, get_summary
from logger import get_logger

logger = get_logger()


def month_range(month: str):
    """Return the first and last instant of a YYYY-MM month.

    Args:
        month: Month string such as "2024-01".

    Returns:
        Tuple of (start, end) datetimes, both inclusive.

    Raises:
        ValueError: If the month string is malformed.
    """
    start = datetime.strptime(month, "%Y-%m")
    end = start + relativedelta(months=1, seconds=-1)
    return start, end


def _parse_type(value):
    return TransactionType(value.upper())


def _format_transaction(transaction, budgets) -> str:
    sign = "+" if transaction.type == TransactionType.INCOME else "-"
    budget = resolve_budget(transaction, budgets)
    budget_name = budget.name if budget else "-"
    return (
        f"{transaction.id:>5}  {transaction.transaction_date:%b %d, %Y}  "
        f"{transaction.description[:30]:<30}  {transaction.category[:16]:<16}  "
        f"{transaction.type.value:<7}  {sign}{format_currency(transaction.amount):>12}  "
        f"{budget_name}"
    )


async def _fetch(args, services):
    """Pick the server-side query that matches the command-line filters."""
    if args.category:
        return await services.transactions.find_by_category(args.category), True
    if args.budget_id is not None:
        return await services.transactions.find_by_budget(args.budget_id), True
    if args.month or args.start or args.end:
        if args.month:
            start, end = month_range(args.month)
        else:
            if not (args.start and args.end):
                raise ValueError("--start and --end must be given together")
            start = datetime.fromisoformat(args.start)
            end = datetime.fromisoformat(args.end)
        return await services.transactions.find_by_date_range(start, end), True
    if args.type:
        return await services.transactions.find_by_type(args.type), False
    return await services.transactions.find_all(), False


async def cmd_list(args, services):
    """List transactions, optionally filtered by category, budget, date or type."""
    budgets = await services.budgets.find_all()
    transactions, needs_type_filter = await _fetch(args, services)

    # --type on top of another server filter acts like the ALL/INCOME/EXPENSE toggle
    if needs_type_filter:
        transactions = filter_by_type(transactions, args.type)

    if not transactions:
        logger.info("No transactions found.")
        return

    logger.info(
        f"\n{'ID':>5}  {'Date':<12}  {'Description':<30}  {'Category':<16}  "
        f"{'Type':<7}  {'Amount':>13}  Budget"
    )
    logger.info("=" * 110)
    for transaction in transactions:
        logger.info(_format_transaction(transaction, budgets))

    logger.info(f"\nTotal transactions: {len(transactions)}")


def _prompt_draft(current=None) -> TransactionDraft:
    """Read transaction fields from stdin. Empty input keeps the current value."""

    def ask(label, default):
        suffix = f" [{default}]" if default is not None else ""
        value = input(f"{label}{suffix}: ").strip()
        return value or (str(default) if default is not None else "")

    description = ask("Description", current.description if current else None)
    amount_text = ask("Amount", current.amount if current else None)
    type_text = ask(
        "Type (INCOME/EXPENSE)", current.type.value if current else "EXPENSE"
    )
    category = ask("Category", current.category if current else None)
    date_text = ask(
        "Date (YYYY-MM-DD or ISO datetime)",
        current.transaction_date.isoformat()
        if current
        else datetime.now().replace(microsecond=0).isoformat(),
    )
    budget_text = ask(
        "Budget ID (blank for none)",
        current.budget_id if current and current.budget_id is not None else None,
    )

    try:
        amount = Decimal(amount_text.replace(",", ""))
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {amount_text!r}")

    return TransactionDraft(
        description=description,
        amount=amount,
        category=category,
        transaction_date=datetime.fromisoformat(date_text),
        type=_parse_type(type_text),
        budget_id=int(budget_text) if budget_text else None,
        receipt_url=current.receipt_url if current else None,
    )


async def cmd_create(args, services):
    """Interactively record a new transaction."""
    budgets = await services.budgets.find_all()

    print("\nRecord New Transaction")
    print("=" * 80)
    if budgets:
        print("Budgets: " + ", ".join(f"{b.id}={b.name}" for b in budgets))

    draft = _prompt_draft()
    transaction = await services.transactions.create(draft)

    logger.info(f"\n✓ Transaction recorded with ID: {transaction.id}")
    logger.info(_format_transaction(transaction, budgets))


async def cmd_update(args, services):
    """Interactively update an existing transaction."""
    budgets = await services.budgets.find_all()
    current = await services.transactions.find(args.transaction_id)
    if not current:
        logger.error(f"Transaction {args.transaction_id} not found.")
        sys.exit(1)

    draft = _prompt_draft(current)
    transaction = await services.transactions.update(args.transaction_id, draft)

    logger.info("\n✓ Transaction updated")
    logger.info(_format_transaction(transaction, budgets))


async def cmd_delete(args, services):
    deleted = await services.transactions.delete(args.transaction_id)
    if not deleted:
        logger.error(f"Transaction {args.transaction_id} not found.")
        sys.exit(1)
    logger.info(f"✓ Deleted transaction {args.transaction_id}")


async def cmd_breakdown(args, services):
    """Show income, expenses and spending by category."""
    if args.month:
        start, end = month_range(args.month)
        transactions = await services.transactions.find_by_date_range(start, end)
    else:
        transactions = await services.transactions.find_all()

    summary = get_summary(transactions)

    logger.info("\nSpending Breakdown")
    logger.info("=" * 80)
    logger.info(f"Income:   {format_currency(summary['income_total'])}")
    logger.info(f"Expenses: {format_currency(summary['expense_total'])}")
    logger.info(f"Net:      {format_currency(summary['net'])}")

    by_category = summary["expenses_by_category"]
    if not by_category:
        logger.info("\nNo expense data available")
        return

    logger.info("\nBy category:")
    logger.info("-" * 80)
    expense_total = summary["expense_total"]
    for category, amount in by_category.items():
        share = round(100 * amount / expense_total)
        logger.info(f"{category:<30} {format_currency(amount):>14}  ({share}%)")


def setup_parser(subparsers):
    """Setup transactions subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "transactions",
        help="Record and review transactions",
        description="Record, list, update and delete income and expense transactions",
    )

    transactions_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available transaction commands",
        dest="subcommand",
        required=True,
    )

    # transactions list
    list_parser = transactions_subparsers.add_parser("list", help="List transactions")
    list_parser.add_argument(
        "--type", type=_parse_type, help="Only INCOME or EXPENSE transactions"
    )
    filters = list_parser.add_mutually_exclusive_group()
    filters.add_argument("--category", help="Only transactions in this category")
    filters.add_argument(
        "--budget-id", type=int, help="Only transactions linked to this budget"
    )
    filters.add_argument("--month", help="Only transactions in this month (YYYY-MM)")
    filters.add_argument("--start", help="Start of a date range (ISO format)")
    list_parser.add_argument("--end", help="End of a date range (ISO format)")
    list_parser.set_defaults(func=cmd_list)

    # transactions create
    create_parser = transactions_subparsers.add_parser(
        "create", help="Record a new transaction interactively"
    )
    create_parser.set_defaults(func=cmd_create)

    # transactions update
    update_parser = transactions_subparsers.add_parser(
        "update", help="Update a transaction interactively"
    )
    update_parser.add_argument(
        "transaction_id", type=int, help="ID of the transaction to update"
    )
    update_parser.set_defaults(func=cmd_update)

    # transactions delete
    delete_parser = transactions_subparsers.add_parser(
        "delete", help="Delete a transaction by ID"
    )
    delete_parser.add_argument(
        "transaction_id", type=int, help="ID of the transaction to delete"
    )
    delete_parser.set_defaults(func=cmd_delete)

    # transactions breakdown
    breakdown_parser = transactions_subparsers.add_parser(
        "breakdown", help="Show spending by category"
    )
    breakdown_parser.add_argument("--month", help="Limit to a month (YYYY-MM)")
    breakdown_parser.set_defaults(func=cmd_breakdown)
