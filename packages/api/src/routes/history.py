# This project was developed with assistance from AI tools.
"""Visit history endpoint."""

from datetime import date

from db import get_db
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentUser
from ..schemas import Pagination
from ..schemas.history import HistoryItem, HistoryResponse
from ..services.history import get_history

router = APIRouter()


@router.get("/history", response_model=HistoryResponse)
async def list_history(
    user: CurrentUser,
    from_date: date | None = None,
    to_date: date | None = None,
    session: AsyncSession = Depends(get_db),
) -> HistoryResponse:
    """Responses the agent recorded, optionally bounded by date (inclusive)."""
    if from_date and to_date and from_date > to_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="from_date must not be after to_date",
        )
    items = [HistoryItem(**h) for h in await get_history(session, user, from_date, to_date)]
    return HistoryResponse(
        data=items,
        pagination=Pagination(total=len(items), offset=0, limit=len(items), has_more=False),
        from_date=from_date,
        to_date=to_date,
    )
