"""
HTTP client for the storefront REST API.

Implements the auth and profile collaborators used by ``SessionCache``:

    client = StorefrontApiClient("http://localhost:3001")
    response = await client.login("ana@example.com", "secret")
    profile = await client.get_profile()

Authenticated requests carry ``Authorization: Bearer <token>`` taken from
a ``TokenStore``. A 401 triggers one ``POST /auth/refresh`` with the
refresh token; the new pair is written back to the store and the request
is retried once.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

import aiohttp

from sweetshop.core.constants import API_TIMEOUT_SECONDS
from sweetshop.core.exceptions import (
    ApiException,
    AuthenticationException,
    SessionExpiredException,
)

logger = logging.getLogger(__name__)


class TokenStore(Protocol):
    """Where the client reads and refreshes credentials."""

    @property
    def access_token(self) -> str | None: ...

    @property
    def refresh_token(self) -> str | None: ...

    def store_tokens(self, access_token: str, refresh_token: str) -> None: ...


def _error_message(data: Any, default: str) -> str:
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, list):
            return "; ".join(str(m) for m in message)
        if message:
            return str(message)
    elif isinstance(data, str) and data.strip():
        return data.strip()
    return default


class StorefrontApiClient:
    """aiohttp client for the ``/auth`` and ``/users`` endpoints."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = API_TIMEOUT_SECONDS,
        token_store: TokenStore | None = None,
        session: aiohttp.ClientSession | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._token_store = token_store
        self._session = session
        self._owns_session = session is None

    @property
    def token_store(self) -> TokenStore | None:
        return self._token_store

    @token_store.setter
    def token_store(self, store: TokenStore | None) -> None:
        self._token_store = store

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=self._timeout,
                headers={"Content-Type": "application/json"},
            )
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> StorefrontApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    @staticmethod
    async def _read_body(resp: aiohttp.ClientResponse) -> Any:
        if resp.content_type == "application/json":
            return await resp.json()
        text = await resp.text()
        return text or None

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        auth: bool = True,
        retry: bool = True,
    ) -> Any:
        session = await self._get_session()
        headers: dict[str, str] = {}
        token = self._token_store.access_token if (auth and self._token_store) else None
        if token:
            headers["Authorization"] = f"Bearer {token}"

        url = f"{self._base_url}{path}"
        try:
            async with session.request(method, url, json=json, headers=headers) as resp:
                status = resp.status
                data = await self._read_body(resp)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise ApiException(f"{method} {path} failed: {exc}") from exc

        if status == 401 and auth and retry and self._can_refresh():
            await self._refresh_tokens()
            return await self._request(method, path, json=json, auth=auth, retry=False)

        if status == 401:
            raise AuthenticationException(_error_message(data, "Unauthorized"), status)
        if status >= 400:
            raise ApiException(_error_message(data, f"Request failed with status {status}"), status)
        return data

    def _can_refresh(self) -> bool:
        return bool(self._token_store and self._token_store.refresh_token)

    async def _refresh_tokens(self) -> None:
        store = self._token_store
        refresh_token = store.refresh_token if store else None
        if not store or not refresh_token:
            raise SessionExpiredException("No refresh token available")

        try:
            data = await self._request(
                "POST",
                "/auth/refresh",
                json={"refreshToken": refresh_token},
                auth=False,
                retry=False,
            )
        except ApiException as exc:
            logger.info("Token refresh rejected: %s", exc.message)
            raise SessionExpiredException() from exc

        data = data if isinstance(data, dict) else {}
        access_token = data.get("token") or data.get("accessToken")
        if not access_token:
            raise SessionExpiredException("Refresh response did not include a token")
        store.store_tokens(access_token, data.get("refreshToken") or refresh_token)
        logger.info("Access token refreshed")

    # ── Auth collaborator ─────────────────────────────────────────

    async def login(self, email: str, password: str) -> dict[str, Any]:
        return await self._request(
            "POST", "/auth/login", json={"email": email, "password": password}, auth=False
        )

    async def register(self, user_data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("POST", "/auth/register", json=user_data, auth=False)

    async def forgot_password(self, email: str) -> dict[str, Any]:
        return await self._request(
            "POST", "/auth/forgot-password", json={"email": email}, auth=False
        )

    async def reset_password(
        self, token: str, new_password: str, confirm_password: str
    ) -> dict[str, Any]:
        return await self._request(
            "POST",
            "/auth/reset-password",
            json={
                "token": token,
                "newPassword": new_password,
                "confirmPassword": confirm_password,
            },
            auth=False,
        )

    # ── Profile collaborator ──────────────────────────────────────

    async def get_profile(self) -> dict[str, Any]:
        return await self._request("GET", "/auth/profile")

    async def update_profile(self, data: dict[str, Any]) -> dict[str, Any]:
        return await self._request("PATCH", "/users/profile", json=data)

    async def delete_account(self) -> None:
        await self._request("DELETE", "/users/account")
