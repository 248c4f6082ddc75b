"""Custom exceptions for the sweetshop client layer."""
from __future__ import annotations


class SweetshopException(Exception):
    """Base exception for all sweetshop errors."""

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)
        self.message = message


class ConfigurationException(SweetshopException):
    """Configuration errors."""

    pass


class StorageException(SweetshopException):
    """Durable storage read/write errors."""

    pass


class ApiException(SweetshopException):
    """Request to the storefront API failed.

    ``status`` is the HTTP status code, or ``None`` when the request never
    got a response (connection error, timeout).
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class AuthenticationException(ApiException):
    """Credentials were rejected or the access token is no longer valid."""

    def __init__(self, message: str = "Authentication failed", status: int | None = 401) -> None:
        super().__init__(message, status)


class SessionExpiredException(AuthenticationException):
    """Access token expired and could not be refreshed."""

    def __init__(self, message: str = "Session expired, please log in again") -> None:
        super().__init__(message, 401)
