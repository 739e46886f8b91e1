"""Failure kinds produced by request handling steps."""
from dataclasses import dataclass
from typing import Optional


UNAUTHORIZED = "Unauthorized"
VALIDATION_FAILED = "ValidationFailed"
NOT_FOUND = "NotFound"
INTERNAL_ERROR = "InternalError"

STATUS_BY_KIND = {
    UNAUTHORIZED: 401,
    VALIDATION_FAILED: 400,
    NOT_FOUND: 404,
    INTERNAL_ERROR: 500,
}


@dataclass(frozen=True)
class Failure:
    kind: str
    message: str
    field: Optional[str] = None

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


def unauthorized(message: str = "Unauthorized: invalid or missing API key") -> Failure:
    return Failure(UNAUTHORIZED, message)


def validation_failed(message: str, field: Optional[str] = None) -> Failure:
    return Failure(VALIDATION_FAILED, message, field)


def not_found(message: str = "Product not found") -> Failure:
    return Failure(NOT_FOUND, message)
