"""List endpoint pipeline: search, category filter, price range, then paginate.

Pagination always runs last so ``total`` counts every product that survived
the filters, not just the current page.
"""
import math
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Sequence

from .models import Product, ProductPage

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def _to_number(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _to_positive_int(value: Any, default: int) -> int:
    number = _to_number(value)
    if number is None or number < 1:
        return default
    return int(number)


@dataclass(frozen=True)
class ProductQuery:
    q: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "ProductQuery":
        """Build a query from raw request parameters.

        Unparsable prices are dropped; unparsable or non-positive page and
        limit fall back to their defaults.
        """
        return cls(
            q=params.get("q") or None,
            category=params.get("category") or None,
            min_price=_to_number(params.get("minPrice")),
            max_price=_to_number(params.get("maxPrice")),
            page=_to_positive_int(params.get("page"), DEFAULT_PAGE),
            limit=_to_positive_int(params.get("limit"), DEFAULT_LIMIT),
        )


def search(products: Sequence[Product], q: Optional[str]) -> List[Product]:
    if not q:
        return list(products)
    term = q.lower()
    return [
        p for p in products
        if term in p.name.lower() or term in p.description.lower()
    ]


def filter_category(products: Sequence[Product], category: Optional[str]) -> List[Product]:
    if not category:
        return list(products)
    wanted = category.lower()
    return [p for p in products if p.category.lower() == wanted]


def filter_price(
    products: Sequence[Product],
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
) -> List[Product]:
    out = []
    for p in products:
        if min_price is not None and p.price < min_price:
            continue
        if max_price is not None and p.price > max_price:
            continue
        out.append(p)
    return out


def paginate(products: Sequence[Product], page: int, limit: int) -> List[Product]:
    start = (page - 1) * limit
    return list(products[start:start + limit])


def run_query(products: Sequence[Product], query: ProductQuery) -> ProductPage:
    matched = search(products, query.q)
    matched = filter_category(matched, query.category)
    matched = filter_price(matched, query.min_price, query.max_price)
    return ProductPage(
        total=len(matched),
        page=query.page,
        limit=query.limit,
        products=paginate(matched, query.page, query.limit),
    )
