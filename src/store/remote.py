"""Record Store: hosted, authenticated row store (Supabase / PostgREST)."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import httpx
import structlog

logger = structlog.get_logger()

PLACEHOLDER_URL = "https://placeholder.supabase.co"


class RecordStoreError(Exception):
    """Remote I/O failure: network error, bad response, or rejection."""


@dataclass
class Session:
    user_id: str
    access_token: str
    refresh_token: Optional[str] = None
    email: Optional[str] = None


def remote_configured(url: Optional[str], anon_key: Optional[str]) -> bool:
    """Remote mode needs both credentials and a real project URL."""
    return bool(url) and bool(anon_key) and url.rstrip("/") != PLACEHOLDER_URL


class RecordStore(ABC):
    """Per-table CRUD keyed by row id or owning user id."""

    @abstractmethod
    def get_session(self) -> Session | None:
        """Current authenticated session, or None when signed out."""
        ...

    @abstractmethod
    def select(
        self,
        table: str,
        user_id: str,
        order_by: str | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        """Rows owned by user, optionally ordered by a column descending."""
        ...

    def select_one(self, table: str, user_id: str) -> dict | None:
        rows = self.select(table, user_id, limit=1)
        return rows[0] if rows else None

    @abstractmethod
    def insert(self, table: str, row: dict) -> None: ...

    @abstractmethod
    def update(self, table: str, record_id: str, fields: dict) -> None: ...

    @abstractmethod
    def delete(self, table: str, record_id: str) -> None: ...

    @abstractmethod
    def upsert(self, table: str, rows: list[dict], on_conflict: str = "id") -> None: ...

    @abstractmethod
    def delete_missing(self, table: str, user_id: str, keep_ids: list[str]) -> None:
        """Delete the user's rows whose id is not in keep_ids."""
        ...


def _in_list(values: list[str]) -> str:
    quoted = ",".join('"{}"'.format(v.replace('"', '\\"')) for v in values)
    return f"({quoted})"


class PostgrestRecordStore(RecordStore):
    """Supabase REST + GoTrue auth over httpx.

    The access token is held by the instance; `get_session()` validates it
    against the auth server on every call instead of trusting a cache.
    """

    def __init__(
        self,
        url: str,
        anon_key: str,
        access_token: str | None = None,
        timeout: float = 15.0,
        client: httpx.Client | None = None,
    ):
        self.url = url.rstrip("/")
        self.anon_key = anon_key
        self.access_token = access_token
        self.client = client or httpx.Client(base_url=self.url, timeout=timeout)

    def _headers(self, prefer: str | None = None) -> dict:
        headers = {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {self.access_token or self.anon_key}",
        }
        if prefer:
            headers["Prefer"] = prefer
        return headers

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = self.client.request(method, path, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPStatusError as e:
            raise RecordStoreError(
                f"{method} {path} failed with {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.RequestError as e:
            raise RecordStoreError(f"{method} {path} request failed: {e}") from e

    # --- auth ---

    def get_session(self) -> Session | None:
        if not self.access_token:
            return None
        try:
            response = self.client.get("/auth/v1/user", headers=self._headers())
        except httpx.RequestError as e:
            raise RecordStoreError(f"session check failed: {e}") from e
        if response.status_code in (401, 403):
            return None
        if response.status_code >= 400:
            raise RecordStoreError(f"session check failed with {response.status_code}")
        data = response.json()
        user_id = data.get("id")
        if not user_id:
            return None
        return Session(user_id=user_id, access_token=self.access_token, email=data.get("email"))

    def sign_in(self, email: str, password: str) -> Session:
        """Password sign-in. Stores the access token on success."""
        response = self._request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            headers={"apikey": self.anon_key},
            json={"email": email, "password": password},
        )
        data = response.json()
        user = data.get("user") or {}
        if not data.get("access_token") or not user.get("id"):
            raise RecordStoreError("sign-in response missing token or user")
        self.access_token = data["access_token"]
        logger.info("record_store.signed_in", user_id=user["id"])
        return Session(
            user_id=user["id"],
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            email=user.get("email"),
        )

    def sign_out(self) -> None:
        if self.access_token:
            self._request("POST", "/auth/v1/logout", headers=self._headers())
        self.access_token = None

    # --- rows ---

    def select(
        self,
        table: str,
        user_id: str,
        order_by: str | None = None,
        limit: int | None = None,
    ) -> list[dict]:
        params = {"select": "*", "user_id": f"eq.{user_id}"}
        if order_by:
            params["order"] = f"{order_by}.desc"
        if limit:
            params["limit"] = str(limit)
        response = self._request("GET", f"/rest/v1/{table}", params=params, headers=self._headers())
        data = response.json()
        if not isinstance(data, list):
            raise RecordStoreError(f"unexpected response for {table}: {type(data).__name__}")
        return data

    def insert(self, table: str, row: dict) -> None:
        self._request(
            "POST",
            f"/rest/v1/{table}",
            json=row,
            headers=self._headers(prefer="return=minimal"),
        )

    def update(self, table: str, record_id: str, fields: dict) -> None:
        self._request(
            "PATCH",
            f"/rest/v1/{table}",
            params={"id": f"eq.{record_id}"},
            json=fields,
            headers=self._headers(prefer="return=minimal"),
        )

    def delete(self, table: str, record_id: str) -> None:
        self._request(
            "DELETE",
            f"/rest/v1/{table}",
            params={"id": f"eq.{record_id}"},
            headers=self._headers(),
        )

    def upsert(self, table: str, rows: list[dict], on_conflict: str = "id") -> None:
        if not rows:
            return
        self._request(
            "POST",
            f"/rest/v1/{table}",
            params={"on_conflict": on_conflict},
            json=rows,
            headers=self._headers(prefer="resolution=merge-duplicates,return=minimal"),
        )

    def delete_missing(self, table: str, user_id: str, keep_ids: list[str]) -> None:
        params = {"user_id": f"eq.{user_id}"}
        if keep_ids:
            params["id"] = f"not.in.{_in_list(keep_ids)}"
        self._request("DELETE", f"/rest/v1/{table}", params=params, headers=self._headers())

    def close(self):
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
