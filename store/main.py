# store/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from store.api.deps import Unauthenticated, Forbidden
from store.api.routers import health, products, categories, cart, orders, users
from store.data.database import Base, engine
from store.domain.schemas import FieldError
from store.utils.retry import db_retry
from store.utils.settings import HOST, PORT
from store.utils.logging import get_logger

# all models must be imported before create_all
import store.data.models  # noqa: F401

logger = get_logger(__name__)


@db_retry()
def init_db():
    logger.info(f"Creating tables: {list(Base.metadata.tables.keys())}")
    Base.metadata.create_all(bind=engine)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


async def unauthenticated_handler(request: Request, exc: Unauthenticated):
    return JSONResponse(status_code=401, content={"error": exc.reason})


async def forbidden_handler(request: Request, exc: Forbidden):
    return JSONResponse(status_code=403, content={"error": "Forbidden"})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if any(e.get("type") == "json_invalid" for e in errors):
        return JSONResponse(status_code=400, content={"error": "Invalid json"})

    fields = []
    for e in errors:
        loc = [str(part) for part in e.get("loc", ())]
        # drop the "body"/"query" prefix unless it is all there is
        name = ".".join(loc[1:]) or (loc[0] if loc else "body")
        fields.append(FieldError(field=name, message=e.get("msg", "Invalid value")).model_dump())
    return JSONResponse(status_code=400, content=fields)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail
    if exc.status_code == 404 and message == "Not Found":
        # raised by the router itself, no route matched
        logger.warning(f"Not found {request.url.path}")
        message = "Not found"
    return JSONResponse(status_code=exc.status_code, content={"error": message}, headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app() -> FastAPI:
    app = FastAPI(
        title="Store API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(Unauthenticated, unauthenticated_handler)
    app.add_exception_handler(Forbidden, forbidden_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(products.router)
    app.include_router(categories.router)
    app.include_router(cart.router)
    app.include_router(orders.router)
    app.include_router(users.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host=HOST, port=PORT)
