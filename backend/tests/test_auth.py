"""
Tests for stateless HMAC bearer tokens.
"""

import base64

import pytest

from app.config import Settings
from app.services.auth import (
    AuthError,
    check_bearer,
    generate_token,
    issue_token,
    now_ms,
    parse_token,
    verify_token,
)

SECRET = "correct horse"
FUTURE = 4_102_444_800_000  # 2100-01-01


class TestTokens:
    def test_generate_and_verify(self):
        token = generate_token(SECRET, FUTURE)
        assert verify_token(token, SECRET)

    def test_wrong_secret_fails(self):
        token = generate_token(SECRET, FUTURE)
        assert not verify_token(token, "battery staple")

    def test_tampered_expiry_fails(self):
        token = generate_token(SECRET, FUTURE)
        _, signature = base64.b64decode(token).decode().split(":")
        forged = base64.b64encode(f"{FUTURE + 1}:{signature}".encode()).decode()
        assert not verify_token(forged, SECRET)

    def test_parse_token(self):
        assert parse_token(generate_token(SECRET, FUTURE)) == FUTURE

    @pytest.mark.parametrize("token", [
        "not-base64!!",
        base64.b64encode(b"no-colon").decode(),
        base64.b64encode(b"abc:def").decode(),
        base64.b64encode(b"1:2:3").decode(),
    ])
    def test_parse_malformed(self, token):
        assert parse_token(token) is None
        assert not verify_token(token, SECRET)


class TestCheckBearer:
    def test_valid(self):
        token = generate_token(SECRET, FUTURE)
        check_bearer(f"Bearer {token}", SECRET)

    @pytest.mark.parametrize("header", [None, "", "Basic abc", "bearer abc"])
    def test_missing_header(self, header):
        with pytest.raises(AuthError, match="Missing or invalid authorization header"):
            check_bearer(header, SECRET)

    def test_bad_format(self):
        with pytest.raises(AuthError, match="Invalid token format"):
            check_bearer("Bearer garbage!!", SECRET)

    def test_expired(self):
        token = generate_token(SECRET, 1000)
        with pytest.raises(AuthError, match="Token expired"):
            check_bearer(f"Bearer {token}", SECRET, current_ms=2000)

    def test_password_not_configured(self):
        token = generate_token(SECRET, FUTURE)
        with pytest.raises(AuthError, match="Password not configured"):
            check_bearer(f"Bearer {token}", "")

    def test_wrong_signature(self):
        token = generate_token("someone else", FUTURE)
        with pytest.raises(AuthError, match="Invalid token") as exc:
            check_bearer(f"Bearer {token}", SECRET)
        assert exc.value.status_code == 401


class TestIssueToken:
    def test_issues_verifiable_token(self):
        settings = Settings(site_password=SECRET, token_expiry_hours=24)
        before = now_ms()
        result = issue_token(SECRET, settings)
        assert result.expires_in == 86400
        assert result.expires_at >= before + 86400 * 1000
        assert verify_token(result.token, SECRET)

    def test_missing_password(self):
        with pytest.raises(AuthError) as exc:
            issue_token("", Settings(site_password=SECRET))
        assert exc.value.status_code == 400

    def test_not_configured(self):
        with pytest.raises(AuthError) as exc:
            issue_token("anything", Settings(site_password=""))
        assert exc.value.status_code == 500

    def test_wrong_password(self):
        with pytest.raises(AuthError) as exc:
            issue_token("guess", Settings(site_password=SECRET))
        assert exc.value.status_code == 401
