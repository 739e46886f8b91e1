# catalog/models.py
import math
from pydantic import BaseModel, Field, StrictStr, field_validator
from typing import Optional, List


class ProductIn(BaseModel):
    name: StrictStr
    description: StrictStr
    price: float = Field(..., gt=0, allow_inf_nan=False)
    category: StrictStr
    stock: int = Field(..., ge=0, strict=True)

    @field_validator("name", "description", "category")
    @classmethod
    def strip_text(cls, v):
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

    @field_validator("price", mode="before")
    @classmethod
    def price_is_number(cls, v):
        # JSON true/false and numeric strings are not prices
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("must be a number")
        try:
            return float(v)
        except OverflowError:
            raise ValueError("is too large")

    @field_validator("stock", mode="before")
    @classmethod
    def integral_stock(cls, v):
        if isinstance(v, float) and math.isfinite(v) and v.is_integer():
            return int(v)
        return v


class Product(ProductIn):
    id: str


class ProductPage(BaseModel):
    total: int
    page: int
    limit: int
    products: List[Product]


class ErrorBody(BaseModel):
    message: str
    stack: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    service: str
