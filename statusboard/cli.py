"""Command-line front end for the status board.

Usage:
    statusboard login alice
    statusboard roster --status "On Vacation"
    statusboard set-status "Working Remotely"
    statusboard logout
"""

import argparse
import logging
import sys
from getpass import getpass

import httpx
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from statusboard.client.api import StatusBoardClient
from statusboard.client.config import get_client_settings
from statusboard.client.dashboard import Dashboard
from statusboard.client.exceptions import ApiError, SessionExpiredError
from statusboard.client.session_store import ClientSession, TokenStore

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="statusboard", description="Team status board client")
    parser.add_argument("--api-url", help="Server base URL (default: $STATUSBOARD_API_URL)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="Log in and store a session token")
    login.add_argument("username")

    sub.add_parser("logout", help="Discard the stored session token")
    sub.add_parser("whoami", help="Show the logged-in user")
    sub.add_parser("statuses", help="List the available statuses")

    roster = sub.add_parser("roster", help="Show the team dashboard")
    roster.add_argument(
        "--status",
        action="append",
        default=[],
        help="Only show members with this status (repeatable)",
    )

    set_status = sub.add_parser("set-status", help="Change your own status")
    set_status.add_argument("status", help="Status name, e.g. 'On Vacation'")
    return parser


def _require_login(session: ClientSession) -> bool:
    if session.restore():
        return True
    console.print(
        "[bold red]Not logged in.[/bold red] Run [cyan]statusboard login <username>[/cyan]."
    )
    return False


def run(args: argparse.Namespace, session: ClientSession) -> int:
    if args.command == "login":
        password = getpass("Password: ")
        try:
            user = session.login(args.username, password)
        except (ApiError, ValueError) as e:
            console.print(f"[bold red]✗ Login failed: {e}[/bold red]")
            return 1
        name = user.get("fullName") or user["username"]
        console.print(f"[bold green]✓ Logged in as {name}[/bold green]")
        return 0

    if args.command == "logout":
        session.logout()
        console.print("Logged out.")
        return 0

    if args.command == "statuses":
        data = session.api.list_statuses()
        table = Table(title="Statuses")
        table.add_column("ID", style="dim")
        table.add_column("Name", style="cyan")
        for status in data.get("statuses", []):
            table.add_row(str(status["id"]), status["name"])
        console.print(table)
        return 0

    if not _require_login(session):
        return 1

    if args.command == "whoami":
        user = session.user or {}
        name = user.get("fullName") or user.get("username")
        console.print(f"{name}: {user.get('currentStatus')}")
        return 0

    dashboard = Dashboard(session)
    dashboard.load()

    if args.command == "set-status":
        if not dashboard.set_my_status(args.status):
            console.print(f"[bold red]✗ {dashboard.error}[/bold red]")
            return 1
    else:
        for name in args.status:
            dashboard.toggle_filter(name)

    dashboard.show(console)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    settings = get_client_settings()
    api_url = args.api_url or settings.api_url
    api = StatusBoardClient.connect(
        api_url,
        TokenStore(settings.token_file),
        timeout=settings.timeout,
    )
    try:
        return run(args, ClientSession(api))
    except SessionExpiredError:
        console.print("[bold red]Session expired.[/bold red] Please log in again.")
        return 1
    except ApiError as e:
        console.print(f"[bold red]✗ {e.error}[/bold red]")
        return 1
    except httpx.HTTPError as e:
        console.print(f"[bold red]✗ Could not reach {api_url}: {escape(str(e))}[/bold red]")
        return 1
    finally:
        api.close()


if __name__ == "__main__":
    sys.exit(main())
