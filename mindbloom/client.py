"""Python client for the MindBloom API with a consistent session cache.

The client keeps two pieces of session state, the stored token and the
cached "current user", and always changes them together:

- ``restore_session`` resolves the user from a stored token; a 401 means
  "signed out" and clears both, it is not an error.
- login, registration and Google sign-in set both before returning.
- ``logout`` clears both.
- any 401 from an authenticated call clears both and raises ``SessionExpired``.
"""

import json
import logging
from pathlib import Path
from typing import Any, Protocol

import httpx

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class MindBloomError(Exception):
    """Request failed with a non-auth error."""

    def __init__(self, status_code: int, detail: Any):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class SessionExpired(MindBloomError):
    """The server rejected the session; local session state has been cleared."""


class EmailAlreadyRegistered(MindBloomError):
    """Registration conflict; the caller should offer sign-in instead."""


class TokenStore(Protocol):
    """Where the client persists its token between runs."""

    def load(self) -> str | None: ...

    def save(self, token: str) -> None: ...

    def clear(self) -> None: ...


class MemoryTokenStore:
    """Token store that lives as long as the process."""

    def __init__(self, token: str | None = None):
        self._token = token

    def load(self) -> str | None:
        return self._token

    def save(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileTokenStore:
    """Token store backed by a small JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> str | None:
        try:
            data = json.loads(self.path.read_text())
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable token file {self.path}: {e}")
            return None
        token = data.get("token") if isinstance(data, dict) else None
        return token if isinstance(token, str) else None

    def save(self, token: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"token": token}))
        self.path.chmod(0o600)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class MindBloomClient:
    """Synchronous API client.

    Args:
        base_url: server root, e.g. ``https://mindbloom.example.com``
        token_store: where the token is persisted (in-memory by default)
        http: an existing ``httpx.Client`` to send requests through
    """

    def __init__(
        self,
        base_url: str = "",
        token_store: TokenStore | None = None,
        http: httpx.Client | None = None,
        timeout: float = 10.0,
    ):
        self.token_store = token_store or MemoryTokenStore()
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self._user: dict[str, Any] | None = None

    # --- session state ---

    @property
    def current_user(self) -> dict[str, Any] | None:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    def _set_session(self, token: str, user: dict[str, Any]) -> None:
        try:
            self.token_store.save(token)
        except OSError:
            # Never leave a previous identity paired with a token we failed to replace
            self.clear_session()
            raise
        self._user = user

    def clear_session(self) -> None:
        """Drop the stored token and the cached identity together."""
        self.token_store.clear()
        self._user = None

    # --- transport ---

    def _headers(self) -> dict[str, str]:
        token = self.token_store.load()
        return {"Authorization": f"Bearer {token}"} if token else {}

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        response = self.http.request(
            method, f"{API_PREFIX}{path}", headers=self._headers(), **kwargs
        )
        if response.status_code == 401:
            self.clear_session()
            raise SessionExpired(401, _detail(response))
        if response.is_error:
            raise MindBloomError(response.status_code, _detail(response))
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def _authenticate(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        response = self.http.post(f"{API_PREFIX}{path}", json=body)
        if response.status_code == 409:
            raise EmailAlreadyRegistered(409, _detail(response))
        if response.is_error:
            raise MindBloomError(response.status_code, _detail(response))
        data = response.json()
        self._set_session(data["access_token"], data["user"])
        return data["user"]

    # --- auth ---

    def restore_session(self) -> dict[str, Any] | None:
        """Resolve the signed-in user from the stored token, if any."""
        if self.token_store.load() is None:
            self._user = None
            return None
        try:
            self._user = self._request("GET", "/auth/me")
        except SessionExpired:
            return None
        return self._user

    def register(self, email: str, password: str, name: str | None = None) -> dict[str, Any]:
        return self._authenticate(
            "/auth/register", {"email": email, "password": password, "name": name}
        )

    def login(self, email: str, password: str) -> dict[str, Any]:
        return self._authenticate("/auth/login", {"email": email, "password": password})

    def login_with_google(self, id_token: str) -> dict[str, Any]:
        return self._authenticate("/auth/google", {"id_token": id_token})

    def logout(self) -> None:
        """Revoke the token server-side when possible, then clear local state."""
        if self.token_store.load() is not None:
            try:
                self._request("POST", "/auth/logout")
            except (MindBloomError, httpx.HTTPError) as e:
                logger.info(f"Server-side logout skipped: {e}")
        self.clear_session()

    def update_profile(self, **fields: Any) -> dict[str, Any]:
        self._user = self._request("PATCH", "/users/me", json=fields)
        return self._user

    def delete_account(self) -> None:
        self._request("DELETE", "/users/me")
        self.clear_session()

    # --- resources ---

    def list_journal_entries(self) -> list[dict[str, Any]]:
        return self._request("GET", "/journal")

    def create_journal_entry(
        self, content: str, title: str | None = None, tags: list[str] | None = None
    ) -> dict[str, Any]:
        return self._request(
            "POST", "/journal", json={"content": content, "title": title, "tags": tags or []}
        )

    def update_journal_entry(self, entry_id: str, **fields: Any) -> dict[str, Any]:
        return self._request("PATCH", f"/journal/{entry_id}", json=fields)

    def delete_journal_entry(self, entry_id: str) -> None:
        self._request("DELETE", f"/journal/{entry_id}")

    def list_moods(self, days: int = 7) -> list[dict[str, Any]]:
        return self._request("GET", "/mood", params={"days": days})

    def log_mood(self, mood: str, notes: str | None = None) -> dict[str, Any]:
        return self._request("POST", "/mood", json={"mood": mood, "notes": notes})

    def feed(self, limit: int = 20, offset: int = 0) -> list[dict[str, Any]]:
        return self._request("GET", "/community/posts", params={"limit": limit, "offset": offset})

    def create_post(self, content: str, image_url: str | None = None) -> dict[str, Any]:
        return self._request(
            "POST", "/community/posts", json={"content": content, "image_url": image_url}
        )

    def like_post(self, post_id: str) -> dict[str, Any]:
        return self._request("POST", f"/community/posts/{post_id}/like")

    def unlike_post(self, post_id: str) -> dict[str, Any]:
        return self._request("DELETE", f"/community/posts/{post_id}/like")

    def comment(self, post_id: str, content: str) -> dict[str, Any]:
        return self._request(
            "POST", f"/community/posts/{post_id}/comments", json={"content": content}
        )

    def chat(self, message: str, context: str | None = None) -> dict[str, Any]:
        return self._request("POST", "/ai/chat", json={"message": message, "context": context})


def _detail(response: httpx.Response) -> Any:
    try:
        return response.json().get("detail", response.text)
    except (ValueError, AttributeError):
        return response.text
