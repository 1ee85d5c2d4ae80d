"""Logfire setup for the points service.

Domain services trace themselves with ``logfire.span`` and record outcomes
with ``logfire.info`` / ``logfire.warn``, passing ids as strings:

    with logfire.span("transaction_service.create_transfer", amount=amount):
        ...
        logfire.info("Transfer completed", sender_id=str(sender.id))

This module configures the exporter and instruments the web and database
layers.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from points.config import ObservabilitySettings, Settings

SERVICE_NAME = "campus-points"

# Never export these attribute values
SCRUBBED_PATTERNS = ["authorization", "jwt", "bearer"]


def should_send(observability: ObservabilitySettings) -> bool:
    """Whether telemetry leaves the process.

    An explicit ``send_to_logfire`` wins; otherwise telemetry is sent only
    when a token is configured.
    """
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure logfire once at process start.

    Args:
        settings: Application settings
    """
    send = should_send(settings.observability)
    logfire.configure(
        service_name=SERVICE_NAME,
        service_version="0.1.0",
        environment=settings.environment,
        send_to_logfire=send,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=SCRUBBED_PATTERNS),
        console=logfire.ConsoleOptions(
            span_style="show-parents",
            verbose=settings.debug,
        ),
    )
    logfire.info("Logfire configured", environment=settings.environment, send=send)


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every API request except health checks."""
    logfire.instrument_fastapi(app, capture_headers=False, excluded_urls="/health")


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace statements, including the savepoints of atomic units.

    Args:
        engine: Async engine of the ledger database
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
