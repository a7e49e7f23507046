import asyncio
import os
from typing import Any

import httpx

from sms_expense_parser.core import settings
from sms_expense_parser.errors import BackendError, BackendNotConfigured
from sms_expense_parser.logger import get_logger

logger = get_logger(__name__)

CATEGORIES_TABLE = "categories"
EXPENSES_TABLE = "expenses"


class SupabaseClient:
    """Minimal async client for the Supabase auth and REST endpoints the importer needs."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self.base_url: str | None = None
        self.api_key: str | None = None
        self.timeout = 0.0
        self._client = client
        self._client_lock = asyncio.Lock()
        self.refresh(base_url=base_url, api_key=api_key, timeout=timeout)

    def refresh(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
    ) -> None:
        base_value = base_url if base_url is not None else os.getenv("SUPABASE_URL")
        key_value = api_key if api_key is not None else os.getenv("SUPABASE_ANON_KEY")
        self.base_url = base_value.rstrip("/") if base_value else None
        self.api_key = key_value or None
        if timeout is None:
            timeout = settings.get_env_float(
                "SUPABASE_TIMEOUT",
                settings.DEFAULT_SUPABASE_TIMEOUT,
                min_value=0.1,
            )
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.base_url and self.api_key)

    def _headers(self, access_token: str) -> dict[str, str]:
        return {
            "apikey": self.api_key or "",
            "Authorization": f"Bearer {access_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def aclose(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def _get_client(self) -> httpx.AsyncClient:
        client = self._client
        if client is not None and not client.is_closed:
            return client

        async with self._client_lock:
            # Another task may have created it while we waited.
            client = self._client
            if client is None or client.is_closed:
                client = httpx.AsyncClient()
                self._client = client
            return client

    async def _request(
        self,
        method: str,
        path: str,
        access_token: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        extra_headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        if not self.configured:
            raise BackendNotConfigured("SUPABASE_URL or SUPABASE_ANON_KEY is not set.")

        headers = self._headers(access_token)
        if extra_headers:
            headers.update(extra_headers)

        client = await self._get_client()
        try:
            return await client.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                params=params,
                json=json,
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:
            logger.error("[SUPABASE] %s %s failed: %s", method, path, exc)
            raise BackendError(f"Could not reach the backend: {exc}") from exc

    @staticmethod
    def _raise_for_status(response: httpx.Response, what: str) -> None:
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("[SUPABASE] Error %s: %s", what, exc)
            raise BackendError(f"Backend error {what}.") from exc

    async def get_user(self, access_token: str) -> dict[str, Any] | None:
        """Return the user owning `access_token`, or None when the token is rejected."""
        response = await self._request("GET", "/auth/v1/user", access_token)
        if response.status_code in (401, 403):
            logger.info("[SUPABASE] Access token rejected (%s).", response.status_code)
            return None
        self._raise_for_status(response, "fetching user")
        user = response.json()
        if not isinstance(user, dict) or not user.get("id"):
            return None
        return user

    async def get_categories(self, user_id: str, access_token: str) -> list[dict[str, Any]]:
        response = await self._request(
            "GET",
            f"/rest/v1/{CATEGORIES_TABLE}",
            access_token,
            params={"select": "*", "user_id": f"eq.{user_id}"},
        )
        self._raise_for_status(response, "fetching categories")
        data = response.json()
        return data if isinstance(data, list) else []

    async def insert_expenses(
        self, rows: list[dict[str, Any]], access_token: str
    ) -> list[dict[str, Any]]:
        if not rows:
            return []
        response = await self._request(
            "POST",
            f"/rest/v1/{EXPENSES_TABLE}",
            access_token,
            json=rows,
            extra_headers={"Prefer": "return=representation"},
        )
        self._raise_for_status(response, "inserting expenses")
        data = response.json()
        return data if isinstance(data, list) else []
