from .analysis import AnalysisRequest
from .portfolio import Portfolio, PortfolioCreate, PortfolioUpdate, Position, RealizedGain
from .trade import Trade, TradeAction, TradeCreate, TradeUpdate

__all__ = [
    "AnalysisRequest",
    "Portfolio",
    "PortfolioCreate",
    "PortfolioUpdate",
    "Position",
    "RealizedGain",
    "Trade",
    "TradeAction",
    "TradeCreate",
    "TradeUpdate",
]
