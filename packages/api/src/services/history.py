# This project was developed with assistance from AI tools.
"""Visit history for the acting agent, optionally bounded by response date."""

from datetime import date, datetime, time, timedelta

from db import LoanAccount, RecoveryResponse
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.auth import UserContext


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min).astimezone()


async def get_history(
    session: AsyncSession,
    user: UserContext,
    from_date: date | None = None,
    to_date: date | None = None,
) -> list[dict]:
    """Return the agent's recorded responses, newest first.

    Both bounds are inclusive calendar days in server local time.
    """
    stmt = (
        select(RecoveryResponse, LoanAccount)
        .join(LoanAccount, LoanAccount.pt_no == RecoveryResponse.pt_no)
        .where(RecoveryResponse.agent_id == user.agent_id)
    )
    if from_date is not None:
        stmt = stmt.where(RecoveryResponse.response_timestamp >= _day_start(from_date))
    if to_date is not None:
        stmt = stmt.where(
            RecoveryResponse.response_timestamp < _day_start(to_date + timedelta(days=1))
        )
    stmt = stmt.order_by(RecoveryResponse.response_timestamp.desc(), RecoveryResponse.id.desc())

    result = await session.execute(stmt)
    return [
        {
            "id": response.id,
            "customer_id": response.customer_id,
            "name": loan.customer_name,
            "number": loan.contact_number1 or loan.contact_number2,
            "address": loan.address,
            "city": loan.city,
            "pt_no": response.pt_no,
            "response": response.response_text,
            "response_description": response.response_description,
            "image_url": response.image_url,
            "latitude": response.latitude,
            "longitude": response.longitude,
            "no_of_visit": response.no_of_visit,
            "visited_time": response.response_timestamp,
        }
        for response, loan in result.all()
    ]
