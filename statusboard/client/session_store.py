"""Client-side session: persisted token plus the hydrated user."""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from statusboard.client.exceptions import ApiError, SessionExpiredError

if TYPE_CHECKING:
    from statusboard.client.api import StatusBoardClient

logger = logging.getLogger(__name__)


class TokenStore:
    """Persists the bearer token in a file readable only by its owner."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> str | None:
        try:
            token = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return token or None

    def save(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(token, encoding="utf-8")
        self.path.chmod(0o600)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class ClientSession:
    """Tracks who is logged in on this client.

    Being logged in means a user object was successfully loaded from
    ``/api/users/me``; a stored token on its own doesn't count, since it may
    be expired.
    """

    def __init__(self, api: "StatusBoardClient"):
        self.api = api
        self.user: dict[str, Any] | None = None
        self.error: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def _hydrate(self) -> dict[str, Any]:
        data = self.api.get_current_user()
        user = data.get("user")
        if not user:
            raise ValueError("Failed to load current user")
        self.user = user
        return user

    def restore(self) -> bool:
        """Hydrate the user from a previously stored token, if any.

        The token is discarded only when the server rejects it with a 401
        or answers without a user. Other API errors and transport errors
        propagate and leave the token in place.
        """
        if self.api.token_store.load() is None:
            return False
        try:
            self._hydrate()
        except (SessionExpiredError, ValueError) as e:
            logger.info(f"Stored token rejected: {e}")
            self.api.token_store.clear()
            self.user = None
            return False
        return True

    def login(self, username: str, password: str) -> dict[str, Any]:
        """Log in, persist the token and load the user profile."""
        self.error = None
        try:
            data = self.api.login(username, password)
            token = data.get("token")
            if not token:
                raise ValueError("No token in response.")
            self.api.token_store.save(token)
            return self._hydrate()
        except (ApiError, ValueError) as e:
            self.error = str(e) or "Login failed"
            raise

    def logout(self) -> None:
        self.api.token_store.clear()
        self.user = None
        self.error = None

    def update_user(self, **fields: Any) -> None:
        """Merge fields into the hydrated user, e.g. after a status change."""
        if self.user is not None:
            self.user = {**self.user, **fields}
