# This project was developed with assistance from AI tools.
"""Interest calculator schemas."""

from datetime import date

from pydantic import BaseModel, Field


class InterestRequest(BaseModel):
    """Input for the interest calculator.

    Values are passed through loosely typed; the calculator degrades to a
    zero result rather than rejecting odd input.
    """

    principal: float | str | None = None
    interest_rate: float | str | None = None
    start_date: date | str | None = None
    last_date: date | str | None = None
    minimum_days: int | None = Field(
        default=None,
        ge=0,
        description="Override the policy-table floor for this calculation.",
    )


class InterestResult(BaseModel):
    """Interest accrued over a date range."""

    interest: int
    days: int
    formatted_interval: str
