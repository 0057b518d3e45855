"""
Tests for AdminAuthService - server-side admin authentication.
"""

from datetime import timedelta

import jwt
import pytest

from anime_collection.core.exceptions import AuthenticationError, ConfigurationError
from anime_collection.services.admin_auth import AdminAuthService

SECRET = "unit-test-secret-key-long-enough-for-hs256"


@pytest.fixture
def auth() -> AdminAuthService:
    return AdminAuthService(password="s3cret", secret_key=SECRET)


class TestLogin:
    """Tests for AdminAuthService.login()."""

    def test_correct_password_returns_verifiable_token(self, auth) -> None:
        token = auth.login("s3cret")
        auth.verify(token)

    def test_wrong_password_rejected(self, auth) -> None:
        with pytest.raises(AuthenticationError, match="Incorrect password"):
            auth.login("guess")

    def test_login_disabled_without_password(self) -> None:
        auth = AdminAuthService(password=None, secret_key=SECRET)
        assert not auth.enabled
        with pytest.raises(ConfigurationError):
            auth.login("")


class TestVerify:
    """Tests for AdminAuthService.verify()."""

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token(self, auth, token) -> None:
        with pytest.raises(AuthenticationError, match="Missing admin token"):
            auth.verify(token)

    def test_expired_token(self, auth) -> None:
        token = auth.issue_token(expires_delta=timedelta(seconds=-1))
        with pytest.raises(AuthenticationError, match="expired"):
            auth.verify(token)

    def test_token_signed_with_other_key(self, auth) -> None:
        other = AdminAuthService(password="s3cret", secret_key="another-secret-key-long-enough-32b")
        with pytest.raises(AuthenticationError, match="Invalid admin token"):
            auth.verify(other.issue_token())

    def test_garbage_token(self, auth) -> None:
        with pytest.raises(AuthenticationError, match="Invalid admin token"):
            auth.verify("not-a-jwt")

    def test_token_of_another_type(self, auth) -> None:
        token = jwt.encode({"sub": "admin", "type": "refresh"}, SECRET, algorithm="HS256")
        with pytest.raises(AuthenticationError, match="Invalid admin token"):
            auth.verify(token)
