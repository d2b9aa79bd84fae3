# This project was developed with assistance from AI tools.
"""Visit history schemas."""

from datetime import date, datetime

from pydantic import BaseModel

from . import Pagination


class HistoryItem(BaseModel):
    """One recorded visit response with the customer's contact details."""

    id: int
    customer_id: str
    name: str | None = None
    number: str | None = None
    address: str | None = None
    city: str | None = None
    pt_no: str
    response: str
    response_description: str | None = None
    image_url: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    no_of_visit: int
    visited_time: datetime


class HistoryResponse(BaseModel):
    """Response for GET /api/history."""

    data: list[HistoryItem]
    pagination: Pagination
    from_date: date | None = None
    to_date: date | None = None
