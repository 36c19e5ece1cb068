from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TradeAction(str, Enum):
    BUY = "buy"
    SELL = "sell"
    SHORT = "short"
    COVER = "cover"


class Trade(BaseModel):
    """A single executed trade recorded against a portfolio."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)

    id: str
    portfolio_id: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    ticker: str
    action: TradeAction
    quantity: float
    price: float
    realized_gain: float = 0
    metadata: dict[str, Any] = Field(default_factory=dict)


class TradeCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)

    portfolio_id: str
    timestamp: Optional[datetime] = None
    ticker: str = Field(min_length=1)
    action: TradeAction
    quantity: float = Field(gt=0)
    price: float = Field(ge=0)
    realized_gain: float = 0
    metadata: dict[str, Any] = Field(default_factory=dict)


class TradeUpdate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)

    ticker: Optional[str] = Field(None, min_length=1)
    action: Optional[TradeAction] = None
    quantity: Optional[float] = Field(None, gt=0)
    price: Optional[float] = Field(None, ge=0)
    realized_gain: Optional[float] = None
    metadata: Optional[dict[str, Any]] = None
