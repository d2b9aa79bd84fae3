# This project was developed with assistance from AI tools.
"""Visit response endpoints.

Save errors are raised as ``RecoveryError`` subclasses and rendered by the
app-level handler in ``main.py``.
"""

from db import get_db
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentUser
from ..schemas.responses import (
    PreviousResponseItem,
    PreviousResponsesResponse,
    ResponseSubmission,
    SaveResult,
    VisitedEntry,
    VisitedStatusResponse,
)
from ..services.responses import (
    get_previous_responses,
    get_visited_status,
    save_individual_response,
    save_response,
)

router = APIRouter()


def _device_id(request: Request) -> str | None:
    return request.headers.get("user-agent")


@router.post("", response_model=SaveResult)
async def save_customer_response(
    submission: ResponseSubmission,
    request: Request,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> SaveResult:
    """Record one response for every loan of the customer in the current cycle."""
    return await save_response(session, user, submission, device_id=_device_id(request))


@router.post("/individual", response_model=SaveResult)
async def save_loan_response(
    submission: ResponseSubmission,
    request: Request,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> SaveResult:
    """Record a response for a single loan."""
    return await save_individual_response(
        session, user, submission, device_id=_device_id(request)
    )


@router.get("/visited-status/{customer_id}", response_model=VisitedStatusResponse)
async def visited_status(
    customer_id: str,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> VisitedStatusResponse:
    """Current-cycle responses for the customer's visited loans."""
    data = await get_visited_status(session, user, customer_id)
    return VisitedStatusResponse(
        visited_data={pt: VisitedEntry(**entry) for pt, entry in data.items()},
        total_visited_pts=len(data),
    )


@router.get("/previous/{customer_id}", response_model=PreviousResponsesResponse)
async def previous_responses(
    customer_id: str,
    user: CurrentUser,
    pt_no: str | None = None,
    session: AsyncSession = Depends(get_db),
) -> PreviousResponsesResponse:
    """All recorded responses for a customer, optionally for one loan."""
    rows = await get_previous_responses(session, user, customer_id, pt_no)
    return PreviousResponsesResponse(
        previous_responses=[PreviousResponseItem(**r) for r in rows],
        total=len(rows),
    )
