"""Token verification tests across protected endpoints."""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock, patch

import pytest
import redis
from jose import jwt

import mindbloom.services.token_denylist as token_denylist
from mindbloom.api.dependencies import extract_token
from mindbloom.config import get_settings
from mindbloom.services.auth import create_access_token, decode_access_token
from mindbloom.services.token_denylist import is_token_revoked, revoke_token

settings = get_settings()

PROTECTED_ENDPOINTS = [
    ("GET", "/api/v1/auth/me"),
    ("POST", "/api/v1/auth/logout"),
    ("PATCH", "/api/v1/users/me"),
    ("GET", "/api/v1/journal"),
    ("POST", "/api/v1/journal"),
    ("GET", "/api/v1/journal/some-id"),
    ("DELETE", "/api/v1/journal/some-id"),
    ("GET", "/api/v1/mood"),
    ("POST", "/api/v1/mood"),
    ("POST", "/api/v1/community/posts"),
    ("POST", "/api/v1/community/posts/some-id/like"),
    ("DELETE", "/api/v1/community/posts/some-id/like"),
    ("POST", "/api/v1/community/posts/some-id/comments"),
    ("POST", "/api/v1/ai/chat"),
    ("GET", "/api/v1/ai/conversations"),
]

EXPECTED_401 = {"detail": "Invalid authentication credentials"}


def make_token(user_id: str, secret: str | None = None, **overrides) -> str:
    now = datetime.now(UTC)
    claims = {"sub": user_id, "iat": now, "exp": now + timedelta(hours=1), "jti": "test-jti"}
    claims.update(overrides)
    return jwt.encode(claims, secret or settings.jwt_secret, algorithm=settings.jwt_algorithm)


def bad_tokens(user_id: str) -> dict[str, str]:
    valid = create_access_token(user_id)
    header, _, signature = valid.split(".")
    swapped_payload = make_token("someone-else").split(".")[1]
    return {
        "expired": make_token(user_id, exp=datetime.now(UTC) - timedelta(minutes=1)),
        "wrong_secret": make_token(user_id, secret="not-the-secret"),
        "payload_swapped": f"{header}.{swapped_payload}.{signature}",
        "garbage": "not-a-jwt",
        "no_jti": jwt.encode(
            {"sub": user_id, "exp": datetime.now(UTC) + timedelta(hours=1)},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        ),
        "unknown_user": make_token("00000000-0000-0000-0000-000000000000"),
    }


@pytest.mark.parametrize("method,path", PROTECTED_ENDPOINTS)
def test_missing_header_rejected(client, method, path):
    """No Authorization header at all."""
    response = client.request(method, path, json={})
    assert response.status_code == 401
    assert response.json() == EXPECTED_401


@pytest.mark.parametrize("method,path", PROTECTED_ENDPOINTS)
def test_bad_tokens_rejected_uniformly(client, auth_headers, method, path):
    """Expired, forged and malformed tokens all get the same 401 everywhere."""
    for kind, token in bad_tokens(auth_headers.user_id).items():
        response = client.request(
            method, path, headers={"Authorization": f"Bearer {token}"}, json={}
        )
        assert response.status_code == 401, kind
        assert response.json() == EXPECTED_401, kind


def test_malformed_header_rejected(client, auth_headers):
    """Three-part headers and foreign schemes are not tokens."""
    token = auth_headers["Authorization"].removeprefix("Bearer ")
    for header in (f"Bearer {token} extra", f"Basic {token}", ""):
        response = client.get("/api/v1/auth/me", headers={"Authorization": header})
        assert response.status_code == 401
        assert response.json() == EXPECTED_401


def test_token_claims():
    """Issued tokens carry subject, expiry and a unique id."""
    token = create_access_token("user-1")
    payload = decode_access_token(token)
    assert payload["sub"] == "user-1"
    assert payload["jti"]
    lifetime = payload["exp"] - payload["iat"]
    assert lifetime == settings.jwt_expiration_minutes * 60
    assert decode_access_token(create_access_token("user-1"))["jti"] != payload["jti"]


def test_extract_token():
    """Both header forms resolve to the same token."""
    assert extract_token("Bearer abc") == "abc"
    assert extract_token("bearer abc") == "abc"
    assert extract_token("abc") == "abc"
    assert extract_token("  abc  ") == "abc"
    assert extract_token(None) is None
    assert extract_token("") is None
    assert extract_token("Basic abc") is None
    assert extract_token("Bearer a b") is None


def test_revoke_token_sets_ttl(fake_redis):
    """Revoked ids are kept for the token's remaining lifetime."""
    expires_at = int(datetime.now(UTC).timestamp()) + 600
    assert revoke_token("jti-1", expires_at) is True
    value, ttl = fake_redis.store["revoked-token:jti-1"]
    assert 595 <= ttl <= 600
    assert is_token_revoked("jti-1") is True
    assert is_token_revoked("jti-2") is False


def test_revoke_expired_token_is_noop(fake_redis):
    """Nothing is stored for a token that already expired."""
    assert revoke_token("old", int(datetime.now(UTC).timestamp()) - 10) is True
    assert fake_redis.store == {}


def test_denylist_fails_open_when_redis_down():
    """A Redis outage does not lock users out."""
    broken = MagicMock()
    broken.exists.side_effect = redis.ConnectionError("down")
    broken.setex.side_effect = redis.ConnectionError("down")
    token_denylist._sync_redis = broken

    assert is_token_revoked("anything") is False
    assert revoke_token("anything", int(datetime.now(UTC).timestamp()) + 60) is False


def test_logout_reports_unrevoked_when_redis_down(client, auth_headers):
    """Logout still succeeds for the client when the denylist is unavailable."""
    broken = MagicMock()
    broken.exists.return_value = 0
    broken.setex.side_effect = redis.ConnectionError("down")
    token_denylist._sync_redis = broken

    response = client.post("/api/v1/auth/logout", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["revoked"] is False


def test_denylist_fails_open_on_timeout():
    """A hung Redis connection times out and is treated like an outage."""
    hung = MagicMock()
    hung.exists.side_effect = redis.TimeoutError("Timeout reading from socket")
    token_denylist._sync_redis = hung

    assert is_token_revoked("anything") is False


def test_redis_client_has_timeouts():
    """The shared client is created with connect and read timeouts."""
    token_denylist._sync_redis = None

    with patch("mindbloom.services.token_denylist.redis.from_url") as mock_from_url:
        token_denylist.get_sync_redis()

    kwargs = mock_from_url.call_args.kwargs
    assert kwargs["socket_connect_timeout"] == settings.redis_timeout_seconds
    assert kwargs["socket_timeout"] == settings.redis_timeout_seconds
    assert settings.redis_timeout_seconds <= 2


def test_requests_served_while_redis_hangs(client, auth_headers):
    """Authenticated requests keep working while Redis times out."""
    hung = MagicMock()
    hung.exists.side_effect = redis.TimeoutError("Timeout reading from socket")
    token_denylist._sync_redis = hung

    response = client.get("/api/v1/auth/me", headers=auth_headers)
    assert response.status_code == 200
