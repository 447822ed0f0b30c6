"""FastAPI entrypoint for the book catalog service."""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookstore import __version__
from bookstore.config import settings
from bookstore.db.connection import close_pool, get_pool
from bookstore.routers import router as api_router
from bookstore.services import book_service
from bookstore.utils.errors import BookstoreError
from bookstore.utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Pool is created lazily on first query
    yield
    await close_pool()


app = FastAPI(
    title="Book Catalog API",
    version=__version__,
    description="CRUD over a catalog of books keyed by isbn.",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(message, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message, "status": status_code}},
    )


@app.exception_handler(BookstoreError)
async def bookstore_error_handler(request: Request, exc: BookstoreError):
    return error_response(exc.message, exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"] if part != "body")
        messages.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return error_response(messages, status.HTTP_400_BAD_REQUEST)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.detail, exc.status_code)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response("Internal Server Error", status.HTTP_500_INTERNAL_SERVER_ERROR)


@app.get("/health", tags=["health"])
async def healthcheck():
    """Basic health check."""
    return {"status": "ok", "env": settings.app_env}


@app.get("/health/db", tags=["health"])
async def db_healthcheck():
    """Database connectivity health check."""
    try:
        pool = await get_pool()
        async with pool.acquire() as conn:
            version = await conn.fetchval("SELECT version()")
        book_count = await book_service.count_books()
    except Exception as e:
        logger.warning(f"Database health check failed: {e}")
        return {
            "status": "error",
            "error": str(e),
            "type": type(e).__name__,
        }
    return {
        "status": "connected",
        "database": {
            "version": version.split(",")[0] if version else "unknown",
            "books": book_count,
        },
    }


app.include_router(api_router)
