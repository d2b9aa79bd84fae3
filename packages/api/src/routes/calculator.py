# This project was developed with assistance from AI tools.
"""Interest calculator endpoint."""

from fastapi import APIRouter

from ..middleware.auth import CurrentUser
from ..schemas.calculator import InterestRequest, InterestResult
from ..services.calculator import compute_interest, minimum_days_for_rate

router = APIRouter()


@router.post("/interest", response_model=InterestResult)
async def calculate_interest(req: InterestRequest, user: CurrentUser) -> InterestResult:
    """Accrued interest for an arbitrary principal, rate and date range.

    The minimum chargeable days come from the rate policy table unless the
    request overrides them.
    """
    floor_days = req.minimum_days
    if floor_days is None:
        floor_days = minimum_days_for_rate(req.interest_rate)
    return compute_interest(
        req.principal,
        req.interest_rate,
        req.start_date,
        req.last_date,
        floor_days,
    )
