"""
Runner selection.

MOCK_ANALYSIS=true swaps the subprocess gateway for fixed payloads, so the
API can be exercised without the analysis programs or market data access.
"""
import copy
import logging

from analysis_bridge.base import AnalysisRunner
from analysis_bridge.gateway import AnalysisGateway
from libs.config import Settings
from libs.domain_models.analysis import AnalysisRequest

logger = logging.getLogger(__name__)

MOCK_ANALYSIS_RESULT = {
    "analysis": {
        "summary": "Mock analysis for testing",
        "decisions": [
            {"ticker": "AAPL", "action": "buy", "reason": "Testing"},
            {"ticker": "GOOGL", "action": "hold", "reason": "Testing"},
            {"ticker": "MSFT", "action": "sell", "reason": "Testing"},
        ],
    }
}

MOCK_BACKTEST_RESULT = {
    "results": {
        "summary": "Mock backtest for testing",
        "portfolio_values": [100000, 102000, 105000],
        "trades": [
            {"ticker": "AAPL", "action": "buy", "quantity": 10, "price": 150, "timestamp": "2024-01-05"},
            {"ticker": "GOOGL", "action": "buy", "quantity": 5, "price": 2500, "timestamp": "2024-01-10"},
            {"ticker": "AAPL", "action": "sell", "quantity": 5, "price": 160, "timestamp": "2024-01-20"},
        ],
    }
}


class CannedAnalysisRunner(AnalysisRunner):
    """Returns fixed results with the same shape as the live gateway."""

    mode = "mock"

    async def run_analysis(self, request: AnalysisRequest) -> dict:
        return copy.deepcopy(MOCK_ANALYSIS_RESULT)

    async def run_backtest(self, request: AnalysisRequest) -> dict:
        return copy.deepcopy(MOCK_BACKTEST_RESULT)


def build_runner(settings: Settings) -> AnalysisRunner:
    if settings.mock_analysis:
        logger.warning("MOCK_ANALYSIS enabled: analysis endpoints return canned results")
        return CannedAnalysisRunner()
    return AnalysisGateway(
        executable=settings.python_path,
        script_dir=settings.script_dir,
        timeout_seconds=settings.timeout_seconds,
    )
