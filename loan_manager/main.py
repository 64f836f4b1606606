"""
Loan Manager - ASGI application entry points.

Three services share this package:

- app: lending API (applications, borrowers, repayments)
- notification_app: email/SMS delivery and the notification queue
- payment_app: card/ACH payments through Stripe
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Callable, Iterable

import structlog
from fastapi import APIRouter, FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse
from redis.exceptions import RedisError

from loan_manager import __version__
from loan_manager.core.config import settings
from loan_manager.core.dependencies import (
    build_email_provider,
    build_payment_gateway,
    build_sms_provider,
)
from loan_manager.core.logging import setup_logging
from loan_manager.core.metrics import get_metrics, get_metrics_content_type
from loan_manager.infrastructure.database import db_manager
from loan_manager.infrastructure.queue import queue_manager
from loan_manager.presentation.api import (
    lending_router,
    notifications_api_router,
    payments_api_router,
)
from loan_manager.presentation.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    error_handler_middleware,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lending_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    db_manager.init()
    await db_manager.create_all()
    logger.info("application_started", service="lending-api", version=__version__)

    yield

    await db_manager.close()
    logger.info("application_stopped", service="lending-api")


@asynccontextmanager
async def notification_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Connect the notification queue and report missing provider credentials.

    The service still starts without Redis; queued routes then fail
    with NOTIFICATION_QUEUE_ERROR while synchronous sends keep working.
    """
    setup_logging()

    if not build_email_provider(settings).is_configured:
        logger.warning("provider_not_configured", provider="sendgrid")
    if not build_sms_provider(settings).is_configured:
        logger.warning("provider_not_configured", provider="twilio")

    try:
        await queue_manager.init(settings)
    except (RedisError, OSError) as e:
        logger.error("notification_queue_unavailable", error=str(e))

    logger.info("application_started", service="notification-service", version=__version__)

    yield

    await queue_manager.close()
    logger.info("application_stopped", service="notification-service")


@asynccontextmanager
async def payment_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()

    if not build_payment_gateway(settings).is_configured:
        logger.warning("provider_not_configured", provider="stripe")

    logger.info("application_started", service="payment-service", version=__version__)

    yield

    logger.info("application_stopped", service="payment-service")


def create_app(
    title: str,
    description: str,
    routers: Iterable[APIRouter],
    lifespan: Callable[[FastAPI], Any],
) -> FastAPI:
    """Build one service with the shared middleware, error handlers and /metrics."""
    application = FastAPI(
        title=title,
        description=description,
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    application.add_middleware(LoggingMiddleware)
    application.add_middleware(RequestContextMiddleware)

    error_handler_middleware(application)

    for router in routers:
        application.include_router(router)

    if settings.metrics_enabled:

        @application.get("/metrics", include_in_schema=False)
        async def metrics() -> Response:
            """Prometheus metrics endpoint."""
            return Response(content=get_metrics(), media_type=get_metrics_content_type())

    @application.get("/", include_in_schema=False)
    async def root():
        return RedirectResponse(url="/docs")

    return application


app = create_app(
    title="Loan Manager",
    description="Loan applications, borrowers and repayments",
    routers=[lending_router],
    lifespan=lending_lifespan,
)

notification_app = create_app(
    title="Loan Manager Notification Service",
    description="Email and SMS delivery via SendGrid and Twilio",
    routers=[notifications_api_router],
    lifespan=notification_lifespan,
)

payment_app = create_app(
    title="Loan Manager Payment Service",
    description="Card, ACH and offline payments via Stripe",
    routers=[payments_api_router],
    lifespan=payment_lifespan,
)
