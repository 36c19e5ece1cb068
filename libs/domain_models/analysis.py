from datetime import date

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class AnalysisRequest(BaseModel):
    """
    Parameters for one forward analysis or backtest run.

    Immutable once built; lives only for the duration of a single runner call.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    tickers: tuple[str, ...] = Field(min_length=1)
    start_date: date
    end_date: date
    initial_capital: float = Field(gt=0)
    margin_requirement: float = Field(ge=0, default=0.0)
    show_reasoning: bool = False

    @field_validator("tickers")
    @classmethod
    def _normalise_tickers(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        cleaned = tuple(t.strip().upper() for t in value)
        if any(not t for t in cleaned):
            raise ValueError("tickers must not contain blank symbols")
        return cleaned

    @model_validator(mode="after")
    def _check_date_range(self) -> "AnalysisRequest":
        if self.end_date < self.start_date:
            raise ValueError("endDate must be on or after startDate")
        return self
