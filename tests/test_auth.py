"""Tests for password hashing and the session token codec."""

from datetime import UTC, datetime, timedelta

import pytest
from jose import jwt

from statusboard.config import get_settings
from statusboard.errors import InvalidTokenError, TokenExpiredError
from statusboard.services.auth import (
    authenticate_user,
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)
from tests.conftest import TEST_PASSWORD


class TestPasswordHashing:
    """Tests for bcrypt helpers."""

    def test_hash_is_not_plaintext(self):
        hashed = get_password_hash("s3cret-pass")
        assert hashed != "s3cret-pass"
        assert hashed.startswith("$2")

    def test_verify_roundtrip(self):
        hashed = get_password_hash("s3cret-pass")
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("other-pass", hashed)


class TestTokenCodec:
    """Tests for create_access_token / decode_access_token."""

    def test_decode_returns_claims(self):
        token = create_access_token(7, "alice")
        claims = decode_access_token(token)
        assert claims.user_id == 7
        assert claims.username == "alice"

    def test_default_lifetime_is_24_hours(self):
        token = create_access_token(7, "alice")
        claims = decode_access_token(token)
        remaining = claims.expires_at - datetime.now(UTC)
        assert timedelta(hours=23, minutes=59) < remaining <= timedelta(hours=24)

    def test_expired_token_fails_every_time(self):
        token = create_access_token(7, "alice", expires_delta=timedelta(seconds=-1))
        for _ in range(3):
            with pytest.raises(TokenExpiredError):
                decode_access_token(token)

    def test_wrong_signature_is_invalid(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": "7", "username": "alice", "exp": datetime.now(UTC) + timedelta(hours=1)},
            "some-other-secret",
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_malformed_token_is_invalid(self):
        with pytest.raises(InvalidTokenError):
            decode_access_token("definitely.not.ajwt")

    def test_missing_claims_is_invalid(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": "7", "exp": datetime.now(UTC) + timedelta(hours=1)},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_non_numeric_subject_is_invalid(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": "alice", "username": "alice", "exp": datetime.now(UTC) + timedelta(hours=1)},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    @pytest.mark.parametrize("user_id", [0, -5, 2**31, 10**20])
    def test_out_of_range_subject_is_invalid(self, user_id):
        with pytest.raises(InvalidTokenError):
            decode_access_token(create_access_token(user_id, "ghost"))


class TestAuthenticateUser:
    """Tests for username/password authentication against the store."""

    def test_valid_credentials(self, db, team):
        user = authenticate_user(db, "alice", TEST_PASSWORD)
        assert user is not None
        assert user.id == team["alice"].id

    def test_wrong_password(self, db, team):
        assert authenticate_user(db, "alice", "wrong") is None

    def test_unknown_user(self, db, team):
        assert authenticate_user(db, "nobody", TEST_PASSWORD) is None

    def test_password_is_stored_hashed(self, db, team):
        assert team["alice"].password != TEST_PASSWORD
