from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Position(_CamelModel):
    """Long and short holdings of one ticker."""
    ticker: str
    long: float = 0
    short: float = 0
    long_cost_basis: float = 0
    short_cost_basis: float = 0
    short_margin_used: float = 0


class RealizedGain(_CamelModel):
    ticker: str
    long: float = 0
    short: float = 0


class Portfolio(_CamelModel):
    id: str
    name: str
    initial_capital: float
    current_value: float
    cash: float
    margin_used: float = 0
    positions: list[Position] = Field(default_factory=list)
    realized_gains: list[RealizedGain] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    def calculate_total_value(self) -> float:
        """Cash plus long positions at cost, minus short positions at cost."""
        total = self.cash
        for p in self.positions:
            if p.long > 0:
                total += p.long * p.long_cost_basis
            if p.short > 0:
                total -= p.short * p.short_cost_basis
        return total


class PortfolioCreate(_CamelModel):
    name: str = Field(min_length=1)
    initial_capital: float = Field(gt=0)


class PortfolioUpdate(_CamelModel):
    """Fields a client may change after creation."""
    name: Optional[str] = Field(None, min_length=1)
    positions: Optional[list[Position]] = None
    realized_gains: Optional[list[RealizedGain]] = None
