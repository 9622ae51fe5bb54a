"""FastAPI application untuk sistem persuratan sekretariat DPRD."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from persuratan.core.config import settings
from persuratan.core.database import init_db
from persuratan.core.redis import close_redis
from persuratan.api.router import api_router
from persuratan.middleware.activity_logger import add_activity_logging
from persuratan.middleware.error_handler import add_error_handlers
from persuratan.middleware.rate_limiting import add_rate_limiting
from persuratan.middleware.security_headers import add_security_headers
from persuratan.utils.logging import setup_logging

# Setup logging first
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(f"Starting {settings.PROJECT_NAME}...")

    try:
        await init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    logger.info(f"Environment: {'Development' if settings.DEBUG else 'Production'}")
    logger.info(
        f"Auth Rate Limiting: {settings.AUTH_RATE_LIMIT_CALLS} calls/{settings.AUTH_RATE_LIMIT_PERIOD}s"
        f" ({'enabled' if settings.RATE_LIMIT_ENABLED else 'disabled'})"
    )

    yield

    await close_redis()
    logger.info(f"Shutting down {settings.PROJECT_NAME}")


def create_application() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="""
        **Sistem Persuratan Sekretariat DPRD**

        * **Surat masuk** dengan salin ke disposisi
        * **Disposisi** ke bagian / sub bagian sekretariat
        * **Surat keluar** dan **surat tamu**
        * **Export Excel**, dashboard dan audit log

        ## Authentication

        1. **CSRF token**: GET `/api/csrf-token`
        2. **Login**: POST `/api/auth/login` dengan email dan password
        3. Token dikirim lewat cookie httponly atau header `Authorization: Bearer <token>`
        4. Request POST / PUT / DELETE wajib menyertakan header `x-csrf-token`

        ## Roles

        * `ADMIN` - petugas arsip: surat masuk, surat keluar, disposisi, user
        * `MEMBER` - surat tamu
        """,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
    )

    # Urutan: middleware yang ditambah terakhir berjalan paling luar
    add_activity_logging(app)
    add_security_headers(app)
    add_rate_limiting(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS_LIST,
        allow_credentials=True,
        allow_methods=settings.CORS_METHODS_LIST,
        allow_headers=settings.CORS_HEADERS_LIST,
    )

    add_error_handlers(app)

    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/", tags=["System"])
    async def root():
        return {
            "message": f"Welcome to {settings.PROJECT_NAME}",
            "version": settings.VERSION,
            "status": "operational",
            "documentation": "/docs" if settings.DEBUG else "Documentation disabled in production",
            "environment": "development" if settings.DEBUG else "production"
        }

    @app.get("/health", tags=["System"])
    async def health_check():
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "service": settings.SERVICE_NAME,
            "version": settings.VERSION,
        }

    @app.get(f"{settings.API_PREFIX}/info", tags=["System"])
    async def api_info():
        return {
            "name": settings.PROJECT_NAME,
            "version": settings.VERSION,
            "endpoints": {
                "authentication": f"{settings.API_PREFIX}/auth",
                "surat_masuk": f"{settings.API_PREFIX}/surat-masuk",
                "disposisi": f"{settings.API_PREFIX}/disposisi",
                "surat_keluar": f"{settings.API_PREFIX}/surat-keluar",
                "surat_tamu": f"{settings.API_PREFIX}/surat-tamu",
                "users": f"{settings.API_PREFIX}/users",
                "dashboard": f"{settings.API_PREFIX}/dashboard/stats",
                "audit_logs": f"{settings.API_PREFIX}/audit-logs",
            },
            "documentation": "/docs" if settings.DEBUG else None
        }

    return app


# Create application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="info" if not settings.DEBUG else "debug",
        access_log=True
    )
