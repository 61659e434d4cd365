"""
Storefront API application entry point.
"""
import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config.database import get_database_manager, lifespan
from .config.settings import get_settings
from .exceptions import StorefrontError
from .routers import auth_router, orders_router, products_router
from .schemas.common import ErrorResponse, HealthCheckResponse, RootResponse

settings = get_settings()

# Setup logging
logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "development" else settings.cors_origins,
    allow_credentials=settings.environment != "development",
    allow_methods=["*"],
    allow_headers=["*"],
)

# Uploaded images are served straight from disk
settings.product_upload_path.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")


@app.exception_handler(StorefrontError)
async def storefront_error_handler(request: Request, exc: StorefrontError):
    if exc.status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path} failed: {exc.message} {exc.detail or ''}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=exc.message, error=exc.detail).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    messages = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(message="Validation error", error=messages).model_dump(),
    )


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@app.get("/", response_model=RootResponse, tags=["Root"])
async def root():
    """Root endpoint - Always accessible"""
    return RootResponse(
        message=f"Welcome to {settings.app_name}",
        version=settings.app_version,
        docs="/docs",
        health="/health",
        status="running",
        timestamp=_timestamp(),
    )


@app.get("/health", response_model=HealthCheckResponse, tags=["Health"])
async def health_check():
    """Health check endpoint - Always accessible"""
    db_status = await get_database_manager().ping()

    return HealthCheckResponse(
        status="healthy",
        database=db_status,
        timestamp=_timestamp(),
        version=settings.app_version,
    )


app.include_router(products_router)
app.include_router(orders_router)
app.include_router(auth_router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("storefront.main:app", host=settings.host, port=settings.port, reload=settings.reload)
