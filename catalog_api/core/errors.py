"""Error kinds shared by the route handlers and the exception handlers in main."""

from enum import Enum

from fastapi import HTTPException, status


class ErrorKind(str, Enum):
    VALIDATION_ERROR = "validation_error"
    NOT_FOUND = "not_found"
    UNAUTHENTICATED = "unauthenticated"
    INVALID_TOKEN = "invalid_token"
    AUTH_FAILED = "auth_failed"
    STORE_ERROR = "store_error"


STATUS_BY_KIND = {
    ErrorKind.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_TOKEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.AUTH_FAILED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.STORE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ApiError(HTTPException):
    """An HTTP failure with a stable kind and a message safe to show to clients."""

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(status_code=STATUS_BY_KIND[kind], detail=message)
        self.kind = kind

    def to_payload(self) -> dict:
        return {"mensaje": self.detail, "error": self.kind.value}


class StoreError(Exception):
    """Raised by the document store gateway when the backing store fails."""
