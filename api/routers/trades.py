import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.deps import get_store
from api.routers.portfolio import PORTFOLIO_NOT_FOUND
from api.schemas import MessageResponse
from libs.domain_models.trade import Trade, TradeCreate, TradeUpdate
from store.memory_store import MemoryStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trades", tags=["Trades"])

TRADE_NOT_FOUND = "Trade not found"


@router.get("", response_model=list[Trade])
async def list_trades(
    portfolio_id: Optional[str] = Query(None, alias="portfolioId"),
    store: MemoryStore = Depends(get_store),
):
    """All trades, newest first; optionally only those of one portfolio."""
    where = (lambda t: t.portfolio_id == portfolio_id) if portfolio_id else None
    trades = sorted(store.trades.all(where), key=lambda t: t.timestamp, reverse=True)
    logger.info("found %d trades", len(trades))
    return trades


@router.get("/{trade_id}", response_model=Trade)
async def get_trade(trade_id: str, store: MemoryStore = Depends(get_store)):
    trade = store.trades.get(trade_id)
    if trade is None:
        raise HTTPException(status_code=404, detail=TRADE_NOT_FOUND)
    return trade


@router.post("", response_model=Trade, status_code=201)
async def create_trade(body: TradeCreate, store: MemoryStore = Depends(get_store)):
    if store.portfolios.get(body.portfolio_id) is None:
        raise HTTPException(status_code=404, detail=PORTFOLIO_NOT_FOUND)
    data = body.model_dump(exclude_none=True)
    trade = store.trades.insert(data)
    logger.info("created trade %s for portfolio %s", trade.id, trade.portfolio_id)
    return trade


@router.put("/{trade_id}", response_model=Trade)
async def update_trade(trade_id: str, body: TradeUpdate, store: MemoryStore = Depends(get_store)):
    """Updatable: ticker, action, quantity, price, realizedGain, metadata."""
    trade = store.trades.update(trade_id, body.model_dump(exclude_unset=True, exclude_none=True))
    if trade is None:
        raise HTTPException(status_code=404, detail=TRADE_NOT_FOUND)
    logger.info("updated trade %s", trade_id)
    return trade


@router.delete("/{trade_id}", response_model=MessageResponse)
async def delete_trade(trade_id: str, store: MemoryStore = Depends(get_store)):
    if not store.trades.delete(trade_id):
        raise HTTPException(status_code=404, detail=TRADE_NOT_FOUND)
    logger.info("deleted trade %s", trade_id)
    return MessageResponse(message="Trade deleted successfully")
