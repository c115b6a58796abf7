from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings, settings as default_settings
from app.core.errors import register_exception_handlers
from app.db.memory import MemoryStore
from app.routers import analytics, categories, health, transactions
from app.utils.analyzer import FinanceAnalyzer

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: one store per process, shared by every request
        logger.info("Initializing in-memory store...")
        store = MemoryStore(seed_categories=settings.SEED_DEFAULT_CATEGORIES)
        app.state.store = store
        app.state.analyzer = FinanceAnalyzer(store, monthly_budget=settings.MONTHLY_BUDGET)
        yield
        # Shutdown: the data lives only as long as the process
        logger.info(f"Shutting down, discarding {store.counts()}")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        max_age=3600,
    )
    register_exception_handlers(app)

    # Root endpoint
    @app.get("/")
    def root():
        return {"message": f"Welcome to {settings.PROJECT_NAME} API"}

    # Register routers
    app.include_router(health.router, prefix=f"{settings.API_PREFIX}", tags=["Health"])  # /api/health
    app.include_router(categories.router, prefix=f"{settings.API_PREFIX}/categories", tags=["Categories"])
    app.include_router(transactions.router, prefix=f"{settings.API_PREFIX}/transactions", tags=["Transactions"])
    app.include_router(analytics.router, prefix=f"{settings.API_PREFIX}/analytics", tags=["Analytics"])

    return app


logging.basicConfig(
    level=default_settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

app = create_app()
