import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import get_settings, Settings
from .core.logging import get_logger, init_logging, request_context_middleware
from .core import errors
from .routers import expenses, health, rates, ui
from .services.controller import ExpenseTrackerController
from .services.expense_store import ExpenseStore
from .services.notifications import Notifier
from .services.rates.base import RateSource
from .services.rates.providers import make_rate_source
from .services.rates.rate_provider import RateProvider
from .services.scheduler import RateRefreshScheduler


def build_controller(
    settings: Settings, rate_source: RateSource | None = None
) -> ExpenseTrackerController:
    notifier = Notifier(max_pending=settings.notifications_max)
    source = rate_source or make_rate_source(settings.exchange_rate_provider, settings)
    return ExpenseTrackerController(
        store=ExpenseStore(),
        rate_provider=RateProvider(source, notifier),
        notifier=notifier,
    )


def create_app(
    settings_override: Settings | None = None,
    rate_source: RateSource | None = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment. Falls back to cached get_settings().
    rate_source: inject a RateSource (tests use fakes so nothing hits the network).
    """
    settings = settings_override or get_settings()
    if settings_override is not None:
        settings.init_post_load()
    # Initialize logging early
    init_logging(debug=settings.debug)
    logger = get_logger("app")

    controller = build_controller(settings, rate_source)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Initial fetch before serving, then the hourly schedule
        await asyncio.to_thread(controller.refresh_rates)
        scheduler = None
        if settings.rates_refresh_enabled:
            scheduler = RateRefreshScheduler(
                controller.refresh_rates, settings.rates_refresh_interval_seconds
            )
            scheduler.start()
        app.state.scheduler = scheduler
        try:
            yield
        finally:
            if scheduler is not None:
                scheduler.shutdown()
            logger.info("shutdown complete")

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.controller = controller
    app.state.scheduler = None

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.not_found_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(errors.InvalidExpenseError, errors.invalid_expense_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(health.router)
    app.include_router(expenses.router)
    app.include_router(rates.router)
    app.include_router(ui.router)

    return app


app = create_app()
