"""
FastAPI application entry point for the multi-tenant Supplier Portal.
"""

# Load environment variables FIRST before any other imports
from pathlib import Path
from dotenv import load_dotenv

current_file = Path(__file__)
project_root = current_file.parent.parent.parent.parent  # src/supplier_portal/api/main.py -> root
env_file = project_root / ".env"
if env_file.exists():
    load_dotenv(env_file)

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles

from supplier_portal import __version__
from supplier_portal.api.middleware.error_handler import ErrorHandlerMiddleware, register_exception_handlers
from supplier_portal.api.routes import admin, auth, catalog, health, orders, products
from supplier_portal.database.connection import get_db_context, init_db
from supplier_portal.services.account_service import ensure_default_admin
from supplier_portal.utils.config import get_config
from supplier_portal.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

config = get_config()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    setup_logging()
    logger.info("🚀 Starting Supplier Portal API...")

    init_db()

    with get_db_context() as db:
        ensure_default_admin(db, config.admin_username, config.admin_password)

    logger.info("✅ API started successfully")

    yield

    logger.info("🛑 Shutting down Supplier Portal API...")


app = FastAPI(
    title="Supplier Portal API",
    description="Multi-tenant product catalog and ordering backend",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# GZip compression
app.add_middleware(GZipMiddleware, minimum_size=1000)

app.add_middleware(ErrorHandlerMiddleware)

register_exception_handlers(app)

# Register routes
app.include_router(auth.router, prefix="/api/v1/auth", tags=["Authentication"])
app.include_router(admin.router, prefix="/api/v1/admin", tags=["Admin"])
app.include_router(catalog.router, prefix="/api/v1/catalog", tags=["Catalog"])
app.include_router(products.router, prefix="/api/v1/products", tags=["Products"])
app.include_router(orders.router, prefix="/api/v1/orders", tags=["Orders"])
app.include_router(health.router, prefix="/api/v1/health", tags=["Health"])


@app.get("/api/v1", tags=["Root"])
async def root():
    """API information."""
    return {
        "name": "Supplier Portal API",
        "version": __version__,
        "status": "operational",
        "docs": "/docs"
    }


# Frontend bundle, served last so it never shadows API routes
if config.static_dir and Path(config.static_dir).is_dir():
    app.mount("/", StaticFiles(directory=config.static_dir, html=True), name="static")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "supplier_portal.api.main:app",
        host=config.api_host,
        port=config.api_port,
        reload=config.debug
    )
