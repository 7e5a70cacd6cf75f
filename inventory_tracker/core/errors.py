from __future__ import annotations

from typing import Optional


class AppError(Exception):
    """Base error carrying the HTTP status and the message shown to clients."""

    status_code = 500
    message = "Server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"success": False, "message": self.message}


class ValidationError(AppError):
    status_code = 400
    message = "Validation failed"

    def __init__(self, errors: dict[str, str], message: Optional[str] = None):
        self.errors = dict(errors)
        super().__init__(message or ", ".join(self.errors.values()) or None)

    def to_body(self) -> dict:
        body = super().to_body()
        body["errors"] = self.errors
        return body


class DuplicateKey(AppError):
    status_code = 400
    field = ""

    def to_body(self) -> dict:
        body = super().to_body()
        body["field"] = self.field
        return body


class DuplicateEmail(DuplicateKey):
    field = "email"
    message = "A user with this email already exists"


class DuplicateUsername(DuplicateKey):
    field = "username"
    message = "This username is already taken"


class DuplicateInventoryId(DuplicateKey):
    field = "inventoryId"
    message = "An inventory item with this ID already exists"


class InvalidCredentials(AppError):
    status_code = 400
    message = "Invalid email or password"


class NotFound(AppError):
    status_code = 404
    message = "Not found"


class Forbidden(AppError):
    status_code = 403
    message = "You do not have permission to modify this item"


class AuthError(AppError):
    status_code = 401
    message = "Invalid authentication token"


class TokenMissing(AuthError):
    message = "No authentication token, access denied"


class TokenInvalid(AuthError):
    message = "Invalid authentication token"


class TokenExpired(AuthError):
    message = "Token has expired, please login again"


class ConfigurationError(AppError):
    status_code = 500
    message = "Server configuration error"


class StorageError(AppError):
    status_code = 500
    message = "Server error"


__all__ = [
    "AppError",
    "AuthError",
    "ConfigurationError",
    "DuplicateEmail",
    "DuplicateInventoryId",
    "DuplicateKey",
    "DuplicateUsername",
    "Forbidden",
    "InvalidCredentials",
    "NotFound",
    "StorageError",
    "TokenExpired",
    "TokenInvalid",
    "TokenMissing",
    "ValidationError",
]
