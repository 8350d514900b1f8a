"""Python client for the status board API."""

from statusboard.client.api import StatusBoardClient
from statusboard.client.dashboard import Dashboard, normalize_member
from statusboard.client.exceptions import ApiError, SessionExpiredError
from statusboard.client.session_store import ClientSession, TokenStore

__all__ = [
    "ApiError",
    "ClientSession",
    "Dashboard",
    "SessionExpiredError",
    "StatusBoardClient",
    "TokenStore",
    "normalize_member",
]
