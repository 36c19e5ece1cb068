import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from analysis_bridge.base import AnalysisRunner
from analysis_bridge.errors import AnalysisFailure
from api.deps import get_runner, get_store, run_until_disconnect
from api.routers.analysis import ANALYSIS_FAILED, BACKTEST_FAILED
from api.schemas import AnalysisParams, MessageResponse
from libs.domain_models.portfolio import Portfolio, PortfolioCreate, PortfolioUpdate
from store.memory_store import MemoryStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/portfolio", tags=["Portfolio"])

PORTFOLIO_NOT_FOUND = "Portfolio not found"


def _get_or_404(store: MemoryStore, portfolio_id: str) -> Portfolio:
    portfolio = store.portfolios.get(portfolio_id)
    if portfolio is None:
        logger.info("portfolio %s not found", portfolio_id)
        raise HTTPException(status_code=404, detail=PORTFOLIO_NOT_FOUND)
    return portfolio


@router.get("", response_model=list[Portfolio])
async def list_portfolios(store: MemoryStore = Depends(get_store)):
    portfolios = store.portfolios.all()
    logger.info("found %d portfolios", len(portfolios))
    return portfolios


@router.get("/{portfolio_id}", response_model=Portfolio)
async def get_portfolio(portfolio_id: str, store: MemoryStore = Depends(get_store)):
    return _get_or_404(store, portfolio_id)


@router.post("", response_model=Portfolio, status_code=201)
async def create_portfolio(body: PortfolioCreate, store: MemoryStore = Depends(get_store)):
    """Open a portfolio; all of the initial capital starts out as cash."""
    portfolio = store.portfolios.insert({
        "name": body.name,
        "initial_capital": body.initial_capital,
        "current_value": body.initial_capital,
        "cash": body.initial_capital,
        "positions": [],
        "realized_gains": [],
    })
    logger.info("created portfolio %s", portfolio.id)
    return portfolio


@router.put("/{portfolio_id}", response_model=Portfolio)
async def update_portfolio(
    portfolio_id: str,
    body: PortfolioUpdate,
    store: MemoryStore = Depends(get_store),
):
    """Only name, positions and realizedGains can be changed."""
    changes = body.model_dump(exclude_unset=True, exclude_none=True)
    portfolio = store.portfolios.update(portfolio_id, changes)
    if portfolio is None:
        raise HTTPException(status_code=404, detail=PORTFOLIO_NOT_FOUND)
    return portfolio


@router.delete("/{portfolio_id}", response_model=MessageResponse)
async def delete_portfolio(portfolio_id: str, store: MemoryStore = Depends(get_store)):
    if not store.portfolios.delete(portfolio_id):
        raise HTTPException(status_code=404, detail=PORTFOLIO_NOT_FOUND)
    return MessageResponse(message="Portfolio deleted successfully")


@router.post("/{portfolio_id}/analyze")
async def analyze_portfolio(
    portfolio_id: str,
    body: AnalysisParams,
    request: Request,
    runner: AnalysisRunner = Depends(get_runner),
    store: MemoryStore = Depends(get_store),
):
    """Run the forward analysis using this portfolio's initial capital."""
    portfolio = _get_or_404(store, portfolio_id)
    analysis_request = body.to_request(portfolio.initial_capital)
    logger.info("running analysis for portfolio %s", portfolio_id)
    try:
        return await run_until_disconnect(request, runner.run_analysis(analysis_request))
    except AnalysisFailure:
        raise HTTPException(status_code=500, detail=ANALYSIS_FAILED)


@router.post("/{portfolio_id}/backtest")
async def backtest_portfolio(
    portfolio_id: str,
    body: AnalysisParams,
    request: Request,
    runner: AnalysisRunner = Depends(get_runner),
    store: MemoryStore = Depends(get_store),
):
    portfolio = _get_or_404(store, portfolio_id)
    analysis_request = body.to_request(portfolio.initial_capital)
    logger.info("running backtest for portfolio %s", portfolio_id)
    try:
        return await run_until_disconnect(request, runner.run_backtest(analysis_request))
    except AnalysisFailure:
        raise HTTPException(status_code=500, detail=BACKTEST_FAILED)
