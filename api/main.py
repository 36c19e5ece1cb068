"""
FastAPI gateway for the hedge fund portfolio service.

Endpoints:
  GET  /health                      — liveness check
  POST /analysis/run                — forward analysis
  POST /analysis/backtest           — backtest
  CRUD /portfolio, /trades          — portfolios and trades
  POST /portfolio/{id}/analyze      — analysis with the portfolio's capital
  POST /portfolio/{id}/backtest     — backtest with the portfolio's capital
  GET  /docs                        — Swagger UI (auto-generated)
"""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIASGIMiddleware
from slowapi.util import get_remote_address
import uvicorn

from analysis_bridge.base import AnalysisRunner
from analysis_bridge.runners import build_runner
from api.middleware import RequestLoggingMiddleware, SecurityHeadersMiddleware
from api.routers import analysis_router, portfolio_router, trades_router
from api.schemas import HealthResponse
from libs.config import Settings
from libs.logging_config import configure_logging
from store.memory_store import MemoryStore

logger = logging.getLogger(__name__)

VERSION = "0.1.0"


def create_app(
    settings: Optional[Settings] = None,
    runner: Optional[AnalysisRunner] = None,
    store: Optional[MemoryStore] = None,
) -> FastAPI:
    """
    Composition root: wire the runner, the store and middleware once.

    `runner` and `store` can be injected (tests); otherwise they are built
    from settings.
    """
    settings = settings or Settings.from_env()

    app = FastAPI(
        title="AI Hedge Fund API",
        description=(
            "Manage portfolios and trades, and run the external AI hedge fund "
            "analysis and backtesting programs over a set of tickers."
        ),
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.runner = runner or build_runner(settings)
    app.state.store = store or MemoryStore()

    limiter = Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit_default],
        storage_uri="memory://",
        enabled=settings.rate_limit_enabled,
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # pure ASGI middleware only: a wrapped `receive` hides client disconnects
    app.add_middleware(SlowAPIASGIMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health():
        """Liveness check — returns service status."""
        return HealthResponse(
            status="ok",
            version=VERSION,
            services={
                "analysis": app.state.runner.mode,
                "python": settings.python_path,
            },
        )

    app.include_router(analysis_router)
    app.include_router(portfolio_router)
    app.include_router(trades_router)

    logger.info("app ready (analysis=%s)", app.state.runner.mode)
    return app


def _build_default_app() -> FastAPI:
    settings = Settings.from_env()
    configure_logging(settings.log_level, use_json=settings.log_json)
    return create_app(settings)


app = _build_default_app()


# ── Dev runner ───────────────────────────────────────────────────

if __name__ == "__main__":
    settings = app.state.settings
    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=True,
    )
