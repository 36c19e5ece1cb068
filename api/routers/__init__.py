from api.routers.analysis import router as analysis_router
from api.routers.portfolio import router as portfolio_router
from api.routers.trades import router as trades_router

__all__ = ["analysis_router", "portfolio_router", "trades_router"]
