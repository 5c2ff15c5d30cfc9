"""FastAPI application factory for Forecast-Relay."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from forecast_relay.common.config import RelaySettings, get_settings
from forecast_relay.common.logging import get_logger, setup_logging
from forecast_relay.common.schemas import HealthResponse

logger = get_logger("app")


class OriginGuardMiddleware(BaseHTTPMiddleware):
    """Reject cross-origin requests from origins outside the allow-list.

    Requests without an Origin header (curl, server-to-server) pass.
    """

    def __init__(self, app, allowed_origins: list[str]):
        super().__init__(app)
        self.allowed_origins = frozenset(o.rstrip("/") for o in allowed_origins)
        self.allow_all = "*" in self.allowed_origins

    def is_allowed(self, origin: str | None) -> bool:
        if not origin or self.allow_all:
            return True
        return origin.rstrip("/") in self.allowed_origins

    async def dispatch(self, request, call_next):
        origin = request.headers.get("origin")
        if not self.is_allowed(origin):
            logger.warning("Rejected request from origin %s to %s", origin, request.url.path)
            return JSONResponse(status_code=403, content={"message": "Origin not allowed"})
        return await call_next(request)


def create_app(settings: RelaySettings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    from forecast_relay import deps
    deps.configure(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Forecast-Relay ready (environment=%s)", settings.environment)
        yield
        await deps.close_http_client()

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    # Added last so it runs first, ahead of CORS preflight handling.
    app.add_middleware(OriginGuardMiddleware, allowed_origins=settings.cors_origins)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(version=settings.api_version)

    # Mount routers
    from forecast_relay.leads.router import router as leads_router
    from forecast_relay.reports.router import router as reports_router
    from forecast_relay.completions.router import router as completions_router

    app.include_router(leads_router, prefix="/api", tags=["leads"])
    app.include_router(reports_router, prefix="/api", tags=["reports"])
    app.include_router(completions_router, prefix="/api", tags=["completions"])

    return app
