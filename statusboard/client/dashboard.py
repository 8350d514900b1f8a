"""Terminal dashboard: team roster plus the caller's own status control."""

import logging
from typing import Any

import httpx
from rich import box
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from statusboard.client.exceptions import ApiError, SessionExpiredError
from statusboard.client.session_store import ClientSession

logger = logging.getLogger(__name__)

DEFAULT_STATUS = "Working"

STATUS_COLORS = {
    "Working": "blue",
    "Working Remotely": "magenta",
    "On Vacation": "grey62",
    "Business Trip": "yellow",
}


def get_status_color(status_name: str | None) -> str:
    return STATUS_COLORS.get(status_name or "", "white")


def normalize_member(raw: dict[str, Any]) -> dict[str, Any]:
    """Give a roster entry a single ``status`` string.

    Entries may carry ``status``, a ``currentStatus`` string, or a
    ``currentStatus`` object with a ``name``; anything else means the
    default status.
    """
    status = raw.get("status")
    if status is None:
        current = raw.get("currentStatus")
        if isinstance(current, str):
            status = current
        elif isinstance(current, dict):
            status = current.get("name")
    return {**raw, "status": status or DEFAULT_STATUS}


class Dashboard:
    """State and actions behind the dashboard screen."""

    def __init__(self, session: ClientSession):
        self.session = session
        self.members: list[dict[str, Any]] = []
        self.statuses: list[dict[str, Any]] = []
        self.filters: list[str] = []
        self.my_status: str | None = DEFAULT_STATUS
        self.error: str | None = None

    @property
    def api(self):
        return self.session.api

    def load(self) -> None:
        """Fetch the roster and the status options."""
        self.error = None
        try:
            users = self.api.list_users()
            statuses = self.api.list_statuses()
        except SessionExpiredError:
            self.session.logout()
            raise
        except ApiError as e:
            logger.error(f"Error loading data: {e}")
            self.error = e.error or "Failed to load data"
            return
        except httpx.HTTPError as e:
            logger.error(f"Error loading data: {e}")
            self.error = "Could not reach the server"
            return

        self.members = [normalize_member(u) for u in users.get("users", [])]
        self.statuses = statuses.get("statuses", [])

        me = self._find_me()
        if me is not None:
            self.my_status = me["status"]

    def _find_me(self) -> dict[str, Any] | None:
        user = self.session.user
        if user is None:
            return None
        for member in self.members:
            if member.get("id") == user.get("id") or member.get("username") == user.get("username"):
                return member
        return None

    def toggle_filter(self, status_name: str) -> None:
        if status_name in self.filters:
            self.filters.remove(status_name)
        else:
            self.filters.append(status_name)

    @property
    def filtered_members(self) -> list[dict[str, Any]]:
        if not self.filters:
            return self.members
        return [m for m in self.members if m["status"] in self.filters]

    def set_my_status(self, status_name: str) -> bool:
        """Change the caller's status by name, then reload the roster."""
        self.error = None
        status = next((s for s in self.statuses if s["name"] == status_name), None)
        if status is None:
            self.error = f"Status not found: {status_name}"
            return False

        try:
            data = self.api.update_my_status(status["id"])
        except SessionExpiredError:
            self.session.logout()
            raise
        except ApiError as e:
            logger.error(f"Error updating status: {e}")
            self.error = e.error or "Failed to update status"
            return False
        except httpx.HTTPError as e:
            logger.error(f"Error updating status: {e}")
            self.error = "Could not reach the server"
            return False

        updated = data.get("user") or {}
        current = updated.get("currentStatus")
        self.session.update_user(
            currentStatus=current if isinstance(current, str) else status["name"],
            statusId=updated.get("statusId", status["id"]),
        )
        self.my_status = status_name
        self.load()
        return self.error is None

    def render(self) -> Group:
        """Build the rich renderable for the current state."""
        user = self.session.user or {}
        name = user.get("fullName") or user.get("username") or ""
        header = Panel(
            Text(f"Team Availability System  ·  Welcome, {name}", style="bold white"),
            style="bold blue",
            box=box.DOUBLE,
        )

        parts: list[Any] = [header]
        if self.error:
            banner = Text(self.error, style="bold red")
            parts.append(Panel(banner, title="Error", border_style="red"))

        options = Text("My status: ")
        for status in self.statuses:
            color = get_status_color(status["name"])
            style = f"bold reverse {color}" if status["name"] == self.my_status else color
            options.append(f" {status['name']} ", style=style)
            options.append(" ")
        parts.append(options)

        title = "List of employees"
        if self.filters:
            title += f" (filtered: {', '.join(self.filters)})"
        table = Table(title=title, box=box.ROUNDED, show_header=True)
        table.add_column("ID", style="dim", width=4)
        table.add_column("Name", style="cyan")
        table.add_column("Username")
        table.add_column("Email")
        table.add_column("Status")

        me = self._find_me()
        for member in self.filtered_members:
            name = member.get("fullName") or member.get("username") or ""
            if me is not None and member.get("id") == me.get("id"):
                name += " (you)"
            table.add_row(
                str(member.get("id", "")),
                name,
                member.get("username") or "",
                member.get("email") or "",
                Text(member["status"], style=get_status_color(member["status"])),
            )
        parts.append(table)
        return Group(*parts)

    def show(self, console: Console | None = None) -> None:
        (console or Console()).print(self.render())
