"""Tests for session token issuance and validation."""

import time

import jwt
import pytest

from transcription_proxy.core.auth import decode_token, issue_token
from transcription_proxy.core.errors import AuthenticationError


class TestIssueToken:
    """Tests for issue_token."""

    def test_token_carries_iat_and_exp(self):
        """Token should expire expiry_seconds after it was issued."""
        token = issue_token("secret", 3600, now=1_700_000_000)
        claims = jwt.decode(
            token, "secret", algorithms=["HS256"], options={"verify_exp": False}
        )

        assert claims["iat"] == 1_700_000_000
        assert claims["exp"] == 1_700_003_600

    def test_token_is_signed_with_hs256(self):
        token = issue_token("secret", 60)
        assert jwt.get_unverified_header(token)["alg"] == "HS256"


class TestDecodeToken:
    """Tests for decode_token."""

    def test_valid_token_returns_claims(self):
        token = issue_token("secret", 60)
        claims = decode_token(token, "secret")
        assert claims["exp"] > time.time()

    def test_expired_token_rejected(self):
        """A token past its expiry should be rejected with a session-expired message."""
        token = issue_token("secret", 60, now=int(time.time()) - 3600)

        with pytest.raises(AuthenticationError) as exc_info:
            decode_token(token, "secret")

        assert exc_info.value.code == "INVALID_TOKEN"
        assert "expired" in exc_info.value.message

    def test_wrong_secret_rejected(self):
        token = issue_token("secret", 60)

        with pytest.raises(AuthenticationError, match="Invalid session token"):
            decode_token(token, "another-secret")

    def test_malformed_token_rejected(self):
        with pytest.raises(AuthenticationError, match="Invalid session token"):
            decode_token("not-a-jwt", "secret")

    def test_token_without_exp_rejected(self):
        """Tokens must be time-limited."""
        token = jwt.encode({"iat": int(time.time())}, "secret", algorithm="HS256")

        with pytest.raises(AuthenticationError):
            decode_token(token, "secret")
