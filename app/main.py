from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from contextlib import asynccontextmanager
import uvicorn

from app.core.config import settings
from app.core.database import create_db_and_tables, close_db
from app.core.exceptions import AppError
from app.core.logging import setup_logging
from app.schemas.common import ErrorResponse
from app.middleware.logging_middleware import RequestLoggingMiddleware
from app.controllers import auth_controller, category_controller, product_controller, user_controller

logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application startup", environment=settings.environment)
    try:
        await create_db_and_tables()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise

    yield

    logger.info("Application shutdown")
    try:
        await close_db()
        logger.info("Database connections closed")
    except Exception as e:
        logger.error("Error during shutdown", error=str(e))


app = FastAPI(
    title="E-Commerce API",
    description="Catalog and account API with token-based auth",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.docs_enabled else None,
    redoc_url="/redoc" if settings.docs_enabled else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(auth_controller.router, prefix=settings.api_prefix)
app.include_router(product_controller.router, prefix=settings.api_prefix)
app.include_router(category_controller.router, prefix=settings.api_prefix)
app.include_router(user_controller.router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {
        "message": "Welcome to E-Commerce API",
        "version": "1.0.0",
        "environment": settings.environment,
        "docs_url": "/docs" if settings.docs_enabled else "Documentation disabled in production"
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "environment": settings.environment,
    }


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message, status_code=status_code).model_dump()
    )


@app.exception_handler(AppError)
async def app_error_handler(request, exc: AppError):
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "Request failed",
        error_type=type(exc).__name__,
        status_code=exc.status_code,
        detail=exc.message,
        path=request.url.path,
        method=request.method
    )
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request, exc: RequestValidationError):
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    logger.warning("Invalid request", path=request.url.path, method=request.method, errors=messages)
    return _error_response(400, "; ".join(messages) or "Invalid request")


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    logger.warning(
        "HTTP Exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path,
        method=request.method
    )
    return _error_response(exc.status_code, exc.detail)


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    logger.error(
        "Unhandled Exception",
        error=str(exc),
        path=request.url.path,
        method=request.method
    )
    return _error_response(500, "Internal server error")


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.environment == "local",
        log_config=None
    )
