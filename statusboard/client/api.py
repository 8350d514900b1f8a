"""HTTP client for the status board REST API."""

import logging
from typing import Any

import httpx

from statusboard.client.exceptions import ApiError, SessionExpiredError
from statusboard.client.session_store import TokenStore

logger = logging.getLogger(__name__)


class StatusBoardClient:
    """Thin wrapper over the REST endpoints.

    Every request carries the stored bearer token. Any 401 clears the token
    so the next run starts from the login screen.
    """

    def __init__(self, http: httpx.Client, token_store: TokenStore):
        self.http = http
        self.token_store = token_store

    @classmethod
    def connect(cls, base_url: str, token_store: TokenStore, timeout: float = 10.0):
        """Create a client with its own httpx connection pool."""
        http = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )
        return cls(http, token_store)

    def close(self) -> None:
        self.http.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        headers = kwargs.pop("headers", {})
        token = self.token_store.load()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        response = self.http.request(method, path, headers=headers, **kwargs)
        if response.is_success:
            return response.json()

        try:
            body = response.json()
        except ValueError:
            body = {}
        error = body.get("error") or body.get("detail") or response.reason_phrase
        code = body.get("code")

        if response.status_code == httpx.codes.UNAUTHORIZED:
            logger.info(f"{method} {path} returned 401 ({code}); discarding stored token")
            self.token_store.clear()
            raise SessionExpiredError(response.status_code, error, code)
        raise ApiError(response.status_code, error, code)

    # Auth

    def login(self, username: str, password: str) -> dict[str, Any]:
        return self._request(
            "POST", "/api/auth/login", json={"username": username, "password": password}
        )

    # Users

    def list_users(self, status: str | None = None) -> dict[str, Any]:
        params = {"status": status} if status else {}
        return self._request("GET", "/api/users", params=params)

    def get_current_user(self) -> dict[str, Any]:
        return self._request("GET", "/api/users/me")

    def get_user(self, user_id: int) -> dict[str, Any]:
        return self._request("GET", f"/api/users/{user_id}")

    def update_my_status(self, status_id: int) -> dict[str, Any]:
        return self._request("PUT", "/api/users/me/status", json={"statusId": status_id})

    # Statuses

    def list_statuses(self) -> dict[str, Any]:
        return self._request("GET", "/api/statuses")

    def get_status(self, status_id: int) -> dict[str, Any]:
        return self._request("GET", f"/api/statuses/{status_id}")

    def get_status_user_count(self, status_id: int) -> dict[str, Any]:
        return self._request("GET", f"/api/statuses/{status_id}/users/count")
