#!/usr/bin/env python3

import getpass
from api.errors import AuthorizationFailure
from logger import get_logger

logger = get_logger()


async def cmd_login(args, services):
    """Log in and, unless --no-verify is given, probe the backend with the new credentials."""
    username = args.username or input("Username: ").strip()
    if not username:
        raise ValueError("Username cannot be empty.")

    password = getpass.getpass("Password: ")
    services.session.login(username, password)

    if args.no_verify:
        return

    try:
        message = await services.check_connection()
    except AuthorizationFailure:
        logger.error("Login rejected by the server. Check your username and password.")
        raise

    logger.info(f"✓ Logged in as {username}")
    logger.info(f"  Server says: {message}")


async def cmd_logout(args, services):
    services.session.logout()
    logger.info("Logged out.")


async def cmd_status(args, services):
    """Show who is logged in and whether the backend accepts the session."""
    session = services.session.session
    if not session.is_authenticated:
        logger.info("Not logged in.")
        return

    logger.info(f"Logged in as: {session.identity}")
    message = await services.check_connection()
    logger.info(f"Connection: {message}")


def setup_parser(subparsers):
    """Setup auth subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "auth",
        help="Manage the login session",
        description="Log in, log out and check the current session",
    )

    auth_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available auth commands",
        dest="subcommand",
        required=True,
    )

    # auth login
    login_parser = auth_subparsers.add_parser("login", help="Log in (password is prompted)")
    login_parser.add_argument("--username", help="Username to log in as")
    login_parser.add_argument(
        "--no-verify",
        action="store_true",
        help="Store the credentials without probing the server",
    )
    login_parser.set_defaults(func=cmd_login)

    # auth logout
    logout_parser = auth_subparsers.add_parser("logout", help="Log out and forget the session")
    logout_parser.set_defaults(func=cmd_logout)

    # auth status
    status_parser = auth_subparsers.add_parser(
        "status", help="Show the session and test the connection"
    )
    status_parser.set_defaults(func=cmd_status)
