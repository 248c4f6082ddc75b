"""
Authenticated session cache with optimistic restore and background reconciliation.

Lifecycle::

    unauthenticated --login--> reconciled
    unauthenticated --check_auth (persisted copy)--> cached --profile ok / update_profile--> reconciled
    any --logout / delete_account / corrupt storage--> unauthenticated

``check_auth`` serves the persisted session immediately and then asks the
profile collaborator for the current user in a background task. A failed
reconciliation keeps the cached copy; it never logs the user out. A
reconciliation that finishes after the session changed (logout, new
login, profile edit) is discarded.

Persisted shape under ``auth-storage``::

    {"user": {...}, "token": "...", "refreshToken": "...", "isAuthenticated": true}
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass, replace
from typing import Any, Protocol, TypeVar

from sweetshop.core.constants import DEFAULT_LANGUAGE, SESSION_STORAGE_KEY
from sweetshop.core.exceptions import ApiException, StorageException
from sweetshop.core.notifications import Notifier
from sweetshop.core.storage import KeyValueStorage, read_json, remove_key, write_json
from sweetshop.domain.entities import RegistrationData, User
from sweetshop.domain.value_objects import SessionStatus
from sweetshop.localization import get_text

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AuthGateway(Protocol):
    """Subset of the auth API required by the session cache."""

    async def login(self, email: str, password: str) -> dict[str, Any]: ...

    async def register(self, user_data: dict[str, Any]) -> dict[str, Any]: ...

    async def forgot_password(self, email: str) -> dict[str, Any]: ...

    async def reset_password(
        self, token: str, new_password: str, confirm_password: str
    ) -> dict[str, Any]: ...


class ProfileGateway(Protocol):
    """Subset of the profile API required by the session cache."""

    async def get_profile(self) -> dict[str, Any]: ...

    async def update_profile(self, data: dict[str, Any]) -> dict[str, Any]: ...

    async def delete_account(self) -> Any: ...


@dataclass(frozen=True)
class SessionState:
    user: User | None = None
    token: str | None = None
    refresh_token: str | None = None
    status: SessionStatus = SessionStatus.UNAUTHENTICATED

    @property
    def is_authenticated(self) -> bool:
        return self.status != SessionStatus.UNAUTHENTICATED

    def to_payload(self) -> dict[str, Any]:
        return {
            "user": self.user.to_dict() if self.user else None,
            "token": self.token,
            "refreshToken": self.refresh_token,
            "isAuthenticated": self.is_authenticated,
        }


def _user_from_response(response: Any) -> User:
    """Extract the user record from ``{"user": {...}}`` or a bare user dict."""
    raw = response.get("user", response) if isinstance(response, dict) else None
    if not isinstance(raw, dict):
        raise ApiException("Malformed user payload in API response")
    try:
        return User.model_validate(raw)
    except ValueError as exc:
        raise ApiException(f"Invalid user payload in API response: {exc}") from exc


def _message_from_response(response: Any) -> str:
    if isinstance(response, dict) and response.get("message"):
        return str(response["message"])
    return ""


class SessionCache:
    """Owns the authenticated session for one client."""

    def __init__(
        self,
        storage: KeyValueStorage,
        auth: AuthGateway,
        profile: ProfileGateway,
        notifier: Notifier | None = None,
        *,
        language: str = DEFAULT_LANGUAGE,
        storage_key: str = SESSION_STORAGE_KEY,
    ):
        self._storage = storage
        self._auth = auth
        self._profile = profile
        self._notifier = notifier
        self._language = language
        self._storage_key = storage_key
        self._state = SessionState()
        # Bumped on every transition; stale reconciliations compare against it
        self._generation = 0
        self._loading = 0
        self._reconcile_task: asyncio.Task[None] | None = None

    # ── Read ──────────────────────────────────────────────────────

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def user(self) -> User | None:
        return self._state.user

    @property
    def token(self) -> str | None:
        return self._state.token

    @property
    def access_token(self) -> str | None:
        return self._state.token

    @property
    def refresh_token(self) -> str | None:
        return self._state.refresh_token

    @property
    def is_authenticated(self) -> bool:
        return self._state.is_authenticated

    @property
    def status(self) -> SessionStatus:
        return self._state.status

    @property
    def is_loading(self) -> bool:
        return self._loading > 0

    # ── Auth flows ────────────────────────────────────────────────

    async def login(self, email: str, password: str) -> User:
        """Authenticate and store the session.

        Raises:
            ApiException: credentials rejected or API unreachable; the
                session is left exactly as it was
        """
        response = await self._with_loading(self._auth.login(email, password))
        user = _user_from_response(response)
        access_token = response.get("accessToken") or response.get("token")
        if not access_token:
            raise ApiException("Login response did not include an access token")

        self._generation += 1
        self._state = SessionState(
            user=user,
            token=access_token,
            refresh_token=response.get("refreshToken"),
            status=SessionStatus.RECONCILED,
        )
        self._persist()
        logger.info("User %s logged in", user.id)
        self._notify(get_text(self._language, "login_success"), "login")
        return user

    async def register(self, user_data: RegistrationData | dict[str, Any]) -> str:
        """Create an account. The session is not touched: the backend wants
        the email verified before the first login."""
        payload = user_data.to_dict() if isinstance(user_data, RegistrationData) else dict(user_data)
        response = await self._with_loading(self._auth.register(payload))
        message = _message_from_response(response)
        self._notify(message, "register")
        return message

    async def forgot_password(self, email: str) -> str:
        response = await self._with_loading(self._auth.forgot_password(email))
        message = _message_from_response(response)
        self._notify(message, "forgot-password")
        return message

    async def reset_password(self, token: str, new_password: str, confirm_password: str) -> str:
        response = await self._with_loading(
            self._auth.reset_password(token, new_password, confirm_password)
        )
        message = _message_from_response(response)
        self._notify(message, "reset-password")
        return message

    def logout(self) -> None:
        """Forget the session in memory and in storage. Never fails."""
        was_authenticated = self.is_authenticated
        self._clear()
        if was_authenticated:
            logger.info("User logged out")
        self._notify(get_text(self._language, "logout_success"), "logout")

    # ── Restore and reconcile ─────────────────────────────────────

    async def check_auth(self) -> None:
        """Restore the persisted session and start reconciling it.

        Returns as soon as the cached copy is in place; the profile request
        runs in the background (see ``wait_reconciled``). Corrupt or missing
        data ends in a clean unauthenticated state, never an exception.
        """
        cached = self._read_persisted()
        if cached is None:
            self._clear()
            return

        self._generation += 1
        self._state = cached
        self._reconcile_task = asyncio.create_task(self._reconcile(self._generation))

    async def wait_reconciled(self) -> SessionStatus:
        """Wait for a pending background reconciliation, if any."""
        task = self._reconcile_task
        if task is not None:
            await task
        return self.status

    async def _reconcile(self, generation: int) -> None:
        try:
            response = await self._profile.get_profile()
            fresh = _user_from_response(response)
        except Exception as exc:
            logger.warning("Session reconciliation failed, keeping cached user: %s", exc)
            return

        if generation != self._generation or not self.is_authenticated:
            logger.debug("Discarding stale reconciliation result")
            return

        self._state = replace(self._state, user=fresh, status=SessionStatus.RECONCILED)
        self._persist()
        logger.info("Session reconciled for user %s", fresh.id)

    def _read_persisted(self) -> SessionState | None:
        try:
            payload = read_json(self._storage, self._storage_key)
        except StorageException as exc:
            logger.warning("Discarding unreadable session: %s", exc.message)
            return None
        if payload is None:
            return None
        if not isinstance(payload, dict):
            logger.warning("Discarding session with unexpected shape")
            return None

        token = payload.get("token")
        raw_user = payload.get("user")
        if not isinstance(token, str) or not token or not isinstance(raw_user, dict):
            return None
        try:
            user = User.model_validate(raw_user)
        except ValueError as exc:
            logger.warning("Discarding session with invalid user: %s", exc)
            return None

        refresh_token = payload.get("refreshToken")
        return SessionState(
            user=user,
            token=token,
            refresh_token=refresh_token if isinstance(refresh_token, str) else None,
            status=SessionStatus.CACHED,
        )

    # ── Profile ───────────────────────────────────────────────────

    async def update_profile(self, changes: dict[str, Any]) -> User:
        """Send ``changes`` to the server and merge the result into the session.

        Raises:
            ApiException: the update was rejected or the API is unreachable
        """
        response = await self._profile.update_profile(changes)
        raw = response.get("user") if isinstance(response, dict) else None
        if not isinstance(raw, dict):
            raise ApiException("Malformed user payload in API response")

        current = self._state.user
        if current is None or not self.is_authenticated:
            return _user_from_response(raw)

        try:
            merged = current.merged(raw)
        except ValueError as exc:
            raise ApiException(f"Invalid user payload in API response: {exc}") from exc
        # The server just returned the user, so the session is fresh
        self._generation += 1
        self._state = replace(self._state, user=merged, status=SessionStatus.RECONCILED)
        self._persist()
        return merged

    async def delete_account(self) -> None:
        """Delete the account server-side, then behave like ``logout``.

        Raises:
            ApiException: the server refused; the session stays intact
        """
        await self._profile.delete_account()
        self._clear()
        logger.info("Account deleted")
        self._notify(get_text(self._language, "account_deleted"), "delete-account")

    # ── TokenStore ────────────────────────────────────────────────

    def store_tokens(self, access_token: str, refresh_token: str) -> None:
        """Accept a refreshed token pair from the API client."""
        if not self.is_authenticated:
            return
        self._state = replace(self._state, token=access_token, refresh_token=refresh_token)
        self._persist()

    # ── Internals ─────────────────────────────────────────────────

    async def _with_loading(self, awaitable: Awaitable[T]) -> T:
        self._loading += 1
        try:
            return await awaitable
        finally:
            self._loading -= 1

    def _clear(self) -> None:
        self._generation += 1
        self._state = SessionState()
        try:
            remove_key(self._storage, self._storage_key)
        except StorageException as exc:
            logger.warning("Failed to wipe persisted session: %s", exc.message)

    def _persist(self) -> None:
        try:
            write_json(self._storage, self._storage_key, self._state.to_payload())
        except StorageException as exc:
            logger.warning("Session persistence failed: %s", exc.message)

    def _notify(self, message: str, context: str) -> None:
        if self._notifier is not None and message:
            self._notifier.success(message, key=context)
