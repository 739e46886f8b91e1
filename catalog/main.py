# catalog/main.py
import json
import logging
import time
import traceback
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, Header, Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .database import ProductStore, sample_store
from .errors import INTERNAL_ERROR, Failure
from .handlers import (
    RequestContext, create_product_logic, delete_product_logic,
    get_product_logic, list_products_logic, update_product_logic
)
from .logging_setup import configure_logging
from .models import ErrorBody, HealthResponse, Product, ProductPage
from .query import ProductQuery

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

ERROR_RESPONSES = {
    400: {"model": ErrorBody},
    401: {"model": ErrorBody},
    404: {"model": ErrorBody},
    500: {"model": ErrorBody},
}

# ---------------------------
# Dependencies
# ---------------------------
def get_store(request: Request) -> ProductStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


async def _read_json(request: Request) -> Any:
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        # rejected later by validation as a non-object body
        return None


def _respond(result) -> Response:
    if isinstance(result, Failure):
        logger.warning("%s: %s", result.kind, result.message)
        return JSONResponse(status_code=result.status_code, content=ErrorBody(message=result.message).model_dump(exclude_none=True))
    if result.status_code == 204:
        return Response(status_code=204)
    return JSONResponse(status_code=result.status_code, content=jsonable_encoder(result.body))


def _error_body(message: str, settings: Settings, exc: Optional[BaseException] = None) -> dict:
    stack = None
    if exc is not None and not settings.is_production:
        stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return ErrorBody(message=message, stack=stack).model_dump()


# ---------------------------
# Product endpoints
# ---------------------------
@router.get("/products", response_model=ProductPage, responses=ERROR_RESPONSES)
async def list_products(request: Request, store: ProductStore = Depends(get_store)):
    query = ProductQuery.from_params(request.query_params)
    return _respond(list_products_logic(store, query))


@router.get("/products/{product_id}", response_model=Product, responses=ERROR_RESPONSES)
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    return _respond(get_product_logic(store, product_id))


@router.post("/products", response_model=Product, status_code=201, responses=ERROR_RESPONSES)
async def create_product(
    request: Request,
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
    x_api_key: Optional[str] = Header(None),
):
    ctx = RequestContext(configured_key=settings.api_key, api_key=x_api_key, body=await _read_json(request))
    return _respond(create_product_logic(store, ctx))


@router.put("/products/{product_id}", response_model=Product, responses=ERROR_RESPONSES)
async def update_product(
    product_id: str,
    request: Request,
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
    x_api_key: Optional[str] = Header(None),
):
    ctx = RequestContext(configured_key=settings.api_key, api_key=x_api_key, body=await _read_json(request))
    return _respond(update_product_logic(store, product_id, ctx))


@router.delete("/products/{product_id}", status_code=204, responses=ERROR_RESPONSES)
async def delete_product(
    product_id: str,
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
    x_api_key: Optional[str] = Header(None),
):
    ctx = RequestContext(configured_key=settings.api_key, api_key=x_api_key)
    return _respond(delete_product_logic(store, product_id, ctx))


# ---------------------------
# App factory
# ---------------------------
def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="product-catalog (in-memory)")
    app.state.settings = settings
    app.state.store = store if store is not None else sample_store()

    if not settings.api_key:
        logger.warning("API_KEY is not set; every write request will be rejected")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            failure = Failure(INTERNAL_ERROR, str(exc) or "Internal Server Error")
            # handlers may attach their own status; 200 means nobody did
            status = getattr(exc, "status_code", None)
            if not isinstance(status, int) or status == 200:
                status = failure.status_code
            logger.exception("unhandled error on %s %s", request.method, request.url.path)
            response = JSONResponse(status_code=status, content=_error_body(failure.message, settings, exc))
        elapsed = (time.perf_counter() - started) * 1000
        logger.info("%s %s -> %d (%.1f ms)", request.method, request.url.path, response.status_code, elapsed)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # routing misses (unknown path or method) are reported as not found
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content=ErrorBody(message=f"Not Found - {request.url.path}").model_dump(exclude_none=True))
        return JSONResponse(status_code=exc.status_code, content=_error_body(str(exc.detail), settings))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0]["msg"] if errors else "Invalid request"
        return JSONResponse(status_code=400, content=ErrorBody(message=message).model_dump(exclude_none=True))

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(status="ok", service="product-catalog")

    app.include_router(router)
    return app


def serve() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "catalog.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    serve()
