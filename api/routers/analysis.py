import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from analysis_bridge.base import AnalysisRunner
from analysis_bridge.errors import AnalysisFailure
from api.deps import get_runner, run_until_disconnect
from api.schemas import AnalysisRunBody

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["Analysis"])

ANALYSIS_FAILED = "Analysis failed. Please retry."
BACKTEST_FAILED = "Backtest failed. Please retry."


@router.post("/run")
async def run_analysis(
    body: AnalysisRunBody,
    request: Request,
    runner: AnalysisRunner = Depends(get_runner),
):
    """
    Run the forward analysis over the given tickers and date range.

    Returns the final JSON object printed by the analysis program, unchanged.
    """
    analysis_request = body.to_request(body.initial_capital)
    logger.info("running analysis tickers=%s", ",".join(analysis_request.tickers))
    try:
        return await run_until_disconnect(request, runner.run_analysis(analysis_request))
    except AnalysisFailure:
        raise HTTPException(status_code=500, detail=ANALYSIS_FAILED)


@router.post("/backtest")
async def run_backtest(
    body: AnalysisRunBody,
    request: Request,
    runner: AnalysisRunner = Depends(get_runner),
):
    """Backtest the strategy over the given tickers and date range."""
    analysis_request = body.to_request(body.initial_capital)
    logger.info("running backtest tickers=%s", ",".join(analysis_request.tickers))
    try:
        return await run_until_disconnect(request, runner.run_backtest(analysis_request))
    except AnalysisFailure:
        raise HTTPException(status_code=500, detail=BACKTEST_FAILED)
