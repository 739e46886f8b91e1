from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

from .core import Invalid, authenticate, validate_product
from .database import ProductStore
from .errors import Failure, not_found, unauthorized, validation_failed
from .models import ProductIn
from .query import ProductQuery, run_query

# This file contains the core logic for the product endpoints.
# Write endpoints run an ordered list of steps (auth, then validation) and
# stop at the first step that returns a Failure; the store is untouched then.


@dataclass
class Outcome:
    status_code: int
    body: Any = None


@dataclass
class RequestContext:
    configured_key: str
    api_key: Optional[str] = None
    body: Any = None
    product: Optional[ProductIn] = None


Step = Callable[[RequestContext], Optional[Failure]]
Result = Union[Outcome, Failure]


def require_api_key(ctx: RequestContext) -> Optional[Failure]:
    if not authenticate(ctx.api_key, ctx.configured_key):
        return unauthorized()
    return None


def require_valid_product(ctx: RequestContext) -> Optional[Failure]:
    result = validate_product(ctx.body)
    if isinstance(result, Invalid):
        return validation_failed(result.reason, result.field)
    ctx.product = result.product
    return None


def run_steps(ctx: RequestContext, steps: Sequence[Step]) -> Optional[Failure]:
    for step in steps:
        failure = step(ctx)
        if failure is not None:
            return failure
    return None


WRITE_STEPS = (require_api_key, require_valid_product)
DELETE_STEPS = (require_api_key,)


def list_products_logic(store: ProductStore, query: ProductQuery) -> Result:
    return Outcome(200, run_query(store.list(), query))


def get_product_logic(store: ProductStore, product_id: str) -> Result:
    product = store.get_by_id(product_id)
    if product is None:
        return not_found()
    return Outcome(200, product)


def create_product_logic(store: ProductStore, ctx: RequestContext) -> Result:
    failure = run_steps(ctx, WRITE_STEPS)
    if failure is not None:
        return failure
    return Outcome(201, store.insert(ctx.product))


def update_product_logic(store: ProductStore, product_id: str, ctx: RequestContext) -> Result:
    failure = run_steps(ctx, WRITE_STEPS)
    if failure is not None:
        return failure
    product = store.replace(product_id, ctx.product)
    if product is None:
        return not_found()
    return Outcome(200, product)


def delete_product_logic(store: ProductStore, product_id: str, ctx: RequestContext) -> Result:
    failure = run_steps(ctx, DELETE_STEPS)
    if failure is not None:
        return failure
    if not store.remove(product_id):
        return not_found()
    return Outcome(204)
