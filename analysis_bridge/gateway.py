"""
Analysis gateway: domain request → subprocess invocation → structured result.

Programs (under script_dir):
  main.py        → forward analysis over the date range
  backtester.py  → backtest over the date range

Both share one argument contract, see build_arguments().
"""
import logging
import os
from typing import Optional

from analysis_bridge.base import AnalysisRunner
from analysis_bridge.errors import AnalysisFailure, ExecutionFailure, NoResultFound
from analysis_bridge.extractor import extract
from analysis_bridge.invoker import ProcessInvocation, invoke
from libs.domain_models.analysis import AnalysisRequest

logger = logging.getLogger(__name__)

ANALYSIS_SCRIPT = "main.py"
BACKTEST_SCRIPT = "backtester.py"


def _format_number(value: float) -> str:
    # whole amounts go out as "100000", not "100000.0"
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def build_arguments(request: AnalysisRequest) -> list[str]:
    return [
        "--tickers", ",".join(request.tickers),
        "--initial-cash", _format_number(request.initial_capital),
        "--margin-requirement", _format_number(request.margin_requirement),
        "--start-date", request.start_date.isoformat(),
        "--end-date", request.end_date.isoformat(),
        "--show-reasoning", "true" if request.show_reasoning else "false",
    ]


class AnalysisGateway(AnalysisRunner):
    """
    Runs the external analysis programs.

    Stateless: every call builds its own invocation and output buffer, so
    concurrent calls never share anything. No caching, no retry.
    """

    mode = "subprocess"

    def __init__(self, executable: str, script_dir: str, timeout_seconds: Optional[float] = None):
        self.executable = executable
        self.script_dir = script_dir
        self.timeout_seconds = timeout_seconds

    def build_invocation(self, script: str, request: AnalysisRequest) -> ProcessInvocation:
        return ProcessInvocation(
            executable=self.executable,
            script_path=os.path.join(self.script_dir, script),
            arguments=tuple(build_arguments(request)),
        )

    async def run_analysis(self, request: AnalysisRequest) -> dict:
        return await self._run(ANALYSIS_SCRIPT, request, "hedge fund analysis")

    async def run_backtest(self, request: AnalysisRequest) -> dict:
        return await self._run(BACKTEST_SCRIPT, request, "backtest")

    async def _run(self, script: str, request: AnalysisRequest, label: str) -> dict:
        invocation = self.build_invocation(script, request)
        try:
            lines = await invoke(invocation, timeout_seconds=self.timeout_seconds)
            return extract(lines)
        except ExecutionFailure as e:
            logger.error(
                "%s failed for %s: %s (cause=%r, stderr=%s)",
                label, ",".join(request.tickers), e, e.cause, e.stderr,
            )
            raise AnalysisFailure(f"Failed to execute {label}") from e
        except NoResultFound as e:
            logger.error("%s returned no result for %s: %s", label, ",".join(request.tickers), e)
            raise AnalysisFailure(f"Failed to parse {label} results") from e
