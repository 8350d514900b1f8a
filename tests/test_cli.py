"""Tests for the statusboard command-line client."""

from datetime import timedelta

import httpx
import pytest
from rich.console import Console

from statusboard import cli
from statusboard.client import ClientSession, StatusBoardClient, TokenStore
from statusboard.client.config import ClientSettings
from statusboard.services.auth import create_access_token
from tests.conftest import TEST_PASSWORD


@pytest.fixture
def console(monkeypatch):
    recorder = Console(record=True, width=140)
    monkeypatch.setattr(cli, "console", recorder)
    return recorder


@pytest.fixture
def token_store(tmp_path):
    return TokenStore(tmp_path / "token")


@pytest.fixture
def session(client, token_store, team):
    return ClientSession(StatusBoardClient(client, token_store))


def run(session, *argv):
    return cli.run(cli.build_parser().parse_args(argv), session)


class TestRun:
    """Tests for the subcommands against the in-process app."""

    def test_login(self, session, token_store, console, monkeypatch):
        monkeypatch.setattr(cli, "getpass", lambda prompt: TEST_PASSWORD)

        assert run(session, "login", "alice") == 0
        assert "Logged in as Alice Cohen" in console.export_text()
        assert token_store.load() is not None

    def test_login_wrong_password(self, session, token_store, console, monkeypatch):
        monkeypatch.setattr(cli, "getpass", lambda prompt: "wrong-password")

        assert run(session, "login", "alice") == 1
        assert "Login failed: Invalid username or password" in console.export_text()
        assert token_store.load() is None

    def test_statuses(self, session, console):
        assert run(session, "statuses") == 0
        output = console.export_text()
        assert "On Vacation" in output
        assert "Business Trip" in output

    def test_roster_requires_login(self, session, console):
        assert run(session, "roster") == 1
        assert "Not logged in" in console.export_text()

    def test_roster_with_status_filter(self, session, console):
        session.login("alice", TEST_PASSWORD)

        assert run(session, "roster", "--status", "On Vacation") == 0
        output = console.export_text()
        assert "filtered: On Vacation" in output
        assert "Bob Levi" in output
        assert "Carol Mizrahi" not in output

    def test_roster_with_repeated_status_filter(self, session, console):
        session.login("alice", TEST_PASSWORD)

        assert run(session, "roster", "--status", "On Vacation", "--status", "Working") == 0
        output = console.export_text()
        assert "Bob Levi" in output
        assert "Dan Peretz" in output
        assert "Carol Mizrahi" not in output

    def test_set_status(self, session, client, console):
        session.login("alice", TEST_PASSWORD)

        assert run(session, "set-status", "Business Trip") == 0
        assert session.user["currentStatus"] == "Business Trip"
        alice = client.get("/api/users", params={"status": "Business Trip"}).json()["users"]
        assert [u["username"] for u in alice] == ["alice"]

    def test_set_unknown_status(self, session, console):
        session.login("alice", TEST_PASSWORD)

        assert run(session, "set-status", "Sleeping") == 1
        assert "Status not found: Sleeping" in console.export_text()

    def test_expired_session(self, session, token_store, team, console):
        token_store.save(
            create_access_token(team["alice"].id, "alice", expires_delta=timedelta(seconds=-1))
        )

        assert run(session, "whoami") == 1
        assert "Not logged in" in console.export_text()
        assert token_store.load() is None

    def test_whoami(self, session, console):
        session.login("alice", TEST_PASSWORD)

        assert run(session, "whoami") == 0
        assert "Alice Cohen: Working" in console.export_text()

    def test_logout(self, session, token_store, console):
        session.login("alice", TEST_PASSWORD)

        assert run(session, "logout") == 0
        assert token_store.load() is None


@pytest.fixture
def server(monkeypatch, tmp_path):
    """Point ``cli.main`` at a mock server; returns a function that installs a handler."""
    token_file = tmp_path / "token"
    settings = ClientSettings(api_url="http://statusboard.test", token_file=token_file)
    monkeypatch.setattr(cli, "get_client_settings", lambda: settings)

    def install(handler):
        def connect(cls, base_url, token_store, timeout=10.0):
            http = httpx.Client(base_url=base_url, transport=httpx.MockTransport(handler))
            return cls(http, token_store)

        monkeypatch.setattr(StatusBoardClient, "connect", classmethod(connect))
        return TokenStore(token_file)

    return install


def _refuse(request):
    raise httpx.ConnectError("Connection refused", request=request)


class TestMain:
    """Tests for error handling at the entry point."""

    def test_unreachable_server(self, server, console):
        server(_refuse)

        assert cli.main(["statuses"]) == 1
        assert "Could not reach http://statusboard.test" in console.export_text()

    def test_unreachable_server_keeps_token(self, server, console):
        token_store = server(_refuse)
        token_store.save("stored.session.token")

        assert cli.main(["roster"]) == 1
        assert "Could not reach" in console.export_text()
        assert token_store.load() == "stored.session.token"

    def test_session_expired(self, server, console):
        def expired(request):
            return httpx.Response(
                401, json={"success": False, "error": "Token expired", "code": "TOKEN_EXPIRED"}
            )

        token_store = server(expired)
        token_store.save("stored.session.token")

        assert cli.main(["statuses"]) == 1
        assert "Session expired" in console.export_text()
        assert token_store.load() is None

    def test_server_error(self, server, console):
        def broken(request):
            return httpx.Response(
                500,
                json={"success": False, "error": "Database error", "code": "STORE_UNAVAILABLE"},
            )

        server(broken)

        assert cli.main(["statuses"]) == 1
        assert "Database error" in console.export_text()
