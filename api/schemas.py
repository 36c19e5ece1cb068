from datetime import date

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

from libs.domain_models.analysis import AnalysisRequest

DEFAULT_INITIAL_CAPITAL = 100_000.0


class AnalysisParams(BaseModel):
    """Body of the portfolio-scoped /analyze and /backtest endpoints."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    tickers: list[str] = Field(
        ...,
        description="Ticker symbols, in the order the analysis should consider them.",
        examples=[["AAPL", "GOOGL", "MSFT"]],
    )
    start_date: date = Field(..., examples=["2024-01-01"])
    end_date: date = Field(..., examples=["2024-03-31"])
    margin_requirement: float = Field(0.0, description="Margin ratio for short positions.")
    show_reasoning: bool = Field(False, description="Ask the agents to include their reasoning.")

    def to_request(self, initial_capital: float) -> AnalysisRequest:
        """Build the domain request; rule violations surface as a 422."""
        try:
            return AnalysisRequest(
                tickers=tuple(self.tickers),
                start_date=self.start_date,
                end_date=self.end_date,
                initial_capital=initial_capital,
                margin_requirement=self.margin_requirement,
                show_reasoning=self.show_reasoning,
            )
        except ValidationError as e:
            raise RequestValidationError(
                e.errors(include_url=False, include_context=False, include_input=False)
            ) from e


class AnalysisRunBody(AnalysisParams):
    """Body of /analysis/run and /analysis/backtest."""
    initial_capital: float = Field(DEFAULT_INITIAL_CAPITAL, description="Starting cash.")


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    services: dict = Field(default_factory=dict)


class MessageResponse(BaseModel):
    message: str
