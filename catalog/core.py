import hmac
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from .models import ProductIn

# Payload validation and API-key checks shared by the write endpoints.

MESSAGES = {
    "name": "name must be a non-empty string",
    "description": "description must be a non-empty string",
    "price": "price must be a positive number",
    "category": "category must be a non-empty string",
    "stock": "stock must be a non-negative integer",
}


@dataclass(frozen=True)
class Valid:
    product: ProductIn


@dataclass(frozen=True)
class Invalid:
    field: str
    reason: str


ValidationResult = Union[Valid, Invalid]


def validate_product(payload: Any) -> ValidationResult:
    """Check a raw create/update payload against ``ProductIn``.

    Pydantic reports errors in field declaration order (name, description,
    price, category, stock); only the first one is returned. Every field is
    required, so updates are full replacements.
    """
    if not isinstance(payload, Mapping):
        return Invalid("body", "request body must be a JSON object")
    try:
        return Valid(ProductIn.model_validate(dict(payload)))
    except ValidationError as e:
        error = e.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else "body"
        if error["type"] == "missing":
            return Invalid(field, f"{field} is required")
        return Invalid(field, MESSAGES.get(field, f"{field}: {error['msg']}"))


def authenticate(presented_key: Optional[str], configured_key: Optional[str]) -> bool:
    if not presented_key or not configured_key:
        return False
    return hmac.compare_digest(presented_key.encode(), configured_key.encode())
