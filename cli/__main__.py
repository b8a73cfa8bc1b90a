#!/usr/bin/env python3
"""
Tally CLI - Command-line interface for budgets and transactions.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    auth         Log in, log out and check the session
    budgets      Manage budgets
    transactions Record and review income and expenses

Examples:
    python -m cli auth login --username alice
    python -m cli budgets list
    python -m cli budgets summary
    python -m cli transactions list --type EXPENSE --month 2024-01
    python -m cli transactions breakdown
"""

import sys
import asyncio
import argparse
from cli import auth, budgets, transactions
from api.errors import AuthorizationFailure, GatewayError, StaleResponse
from config import load_config
from services.base import Services
from logger import setup_logging, get_logger

logger = get_logger()


async def run_command(args, services) -> int:
    """Run a command handler and render gateway errors.

    Args:
        args: Parsed command-line arguments with a func handler.
        services: Services container passed to the handler.

    Returns:
        Process exit code.
    """
    try:
        await args.func(args, services)
    except AuthorizationFailure:
        logger.error(
            "Not authorized. Your session has been cleared; "
            "run 'python -m cli auth login' to log in again."
        )
        return 1
    except StaleResponse:
        logger.debug("Ignored a response from an expired session")
        return 1
    except GatewayError as e:
        logger.error(f"Error: {e.message}")
        return 1
    finally:
        await services.aclose()
    return 0


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Tally - Personal finance budgets and transactions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    # Register each command's subparser
    auth.setup_parser(subparsers)
    budgets.setup_parser(subparsers)
    transactions.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)
            services = Services(config)
            exit_code = asyncio.run(run_command(args, services))
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
        if exit_code:
            sys.exit(exit_code)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
