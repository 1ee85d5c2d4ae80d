"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from points.config import Settings
from points.interface.api.errors import register_error_handlers
from points.interface.api.routes import (
    events,
    health,
    promotions,
    transactions,
    users,
)
from points.util.di.container import create_container, setup_di
from points.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Logfire should be configured before this is called; start_app.py does
    that in production.

    Args:
        container: DI container to serve requests from, defaults to the
            production container

    Returns:
        Configured application
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Campus Points API",
        description="Loyalty points ledger and transaction engine",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url, "http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())
    register_error_handlers(app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(transactions.router)
    app_instance.include_router(users.router)
    app_instance.include_router(events.router)
    app_instance.include_router(promotions.router)

    return app_instance


# Instance for uvicorn
app = create_app()
