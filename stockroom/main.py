"""FastAPI application — main entry point."""

import os
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from stockroom.config import get_settings
from stockroom.core.exceptions import register_exception_handlers
from stockroom.core.logging import configure_logging
from stockroom.core.middleware import setup_middleware
from stockroom.infrastructure.database import Base, engine
from stockroom.infrastructure.migrator import run_migrations

# Import all models so SQLAlchemy knows about them
from stockroom.domain.models.brand import Brand  # noqa: F401
from stockroom.domain.models.category import Category  # noqa: F401
from stockroom.domain.models.client import Client  # noqa: F401
from stockroom.domain.models.currency import Currency  # noqa: F401
from stockroom.domain.models.final_product import Component, FinalProduct  # noqa: F401
from stockroom.domain.models.product import Product  # noqa: F401

# Import routers
from stockroom.interfaces.api.brands import router as brands_router
from stockroom.interfaces.api.categories import router as categories_router
from stockroom.interfaces.api.clients import router as clients_router
from stockroom.interfaces.api.currencies import router as currencies_router
from stockroom.interfaces.api.dashboard import router as dashboard_router
from stockroom.interfaces.api.final_products import router as final_products_router
from stockroom.interfaces.api.products import router as products_router
from stockroom.interfaces.api.reports import router as reports_router
from stockroom.interfaces.api.uploads import router as uploads_router

settings = get_settings()

configure_logging()
logger = structlog.get_logger(__name__)

# The static mount needs the directory at import time
os.makedirs(settings.UPLOAD_DIR, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan — startup and shutdown events."""
    logger.info("Starting Stockroom API...", env=settings.ENVIRONMENT)

    Base.metadata.create_all(bind=engine)
    applied = run_migrations(engine)
    logger.info("Database tables created/verified", migrations_applied=applied)

    yield

    logger.info("Stockroom API stopped")


app = FastAPI(
    title="Stockroom — Inventory & Final Product Orders",
    description="API Backend — stock products, final product composition, clients and reports",
    version="1.0.0",
    lifespan=lifespan,
)

setup_middleware(app)
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.mount(settings.UPLOAD_URL_PREFIX, StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

app.include_router(categories_router)
app.include_router(brands_router)
app.include_router(currencies_router)
app.include_router(clients_router)
app.include_router(products_router)
app.include_router(final_products_router)
app.include_router(uploads_router)
app.include_router(reports_router)
app.include_router(dashboard_router)


@app.get("/")
def root():
    return {
        "name": "Stockroom API",
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs",
        "endpoints": {
            "categories": "/api/categories",
            "brands": "/api/brands",
            "currencies": "/api/currencies",
            "clients": "/api/clients",
            "products": "/api/products",
            "final_products": "/api/final-products",
        },
    }


@app.get("/health")
def health():
    return {"status": "healthy"}
