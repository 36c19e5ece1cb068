from abc import ABC, abstractmethod

from libs.domain_models.analysis import AnalysisRequest


class AnalysisRunner(ABC):
    """Capability the HTTP layer depends on. Picked once at startup."""

    mode: str = "unknown"

    @abstractmethod
    async def run_analysis(self, request: AnalysisRequest) -> dict: ...

    @abstractmethod
    async def run_backtest(self, request: AnalysisRequest) -> dict: ...
