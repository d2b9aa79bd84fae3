# This project was developed with assistance from AI tools.
"""Visit response request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ResponseSubmission(BaseModel):
    """Body for POST /api/responses and /api/responses/individual.

    Fields are optional at the schema level so the service can report every
    missing rule together instead of failing on the first one.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    customer_id: str | None = None
    pt_no: str | None = Field(
        default=None,
        description="Target loan. Required for the individual save, ignored otherwise.",
    )
    response_type: str | None = None
    response_description: str | None = None
    image_url: str | None = None
    latitude: float | str | None = None
    longitude: float | str | None = None


class SaveResult(BaseModel):
    """Outcome of a response save."""

    success: bool = True
    message: str
    customer_id: str
    affected_loan_ids: list[str]
    pt_count: int
    updated_count: int
    inserted_count: int
    operation: str  # "update" or "insert"
    timestamp: datetime


class VisitedEntry(BaseModel):
    """Current-cycle response for one visited PT."""

    is_visited: bool
    visited_date: datetime | None = None
    response_text: str | None = None
    response_description: str | None = None
    image_url: str | None = None
    agent_id: int | None = None
    agent_name: str | None = None
    agent_full_name: str | None = None
    no_of_visit: int | None = None
    is_current_agent: bool = True


class VisitedStatusResponse(BaseModel):
    """Response for GET /api/responses/visited-status/{customer_id}."""

    success: bool = True
    visited_data: dict[str, VisitedEntry]
    total_visited_pts: int


class PreviousResponseItem(BaseModel):
    """One historical response row."""

    id: int
    pt_no: str
    customer_id: str
    agent_id: int
    agent_name: str | None = None
    agent_full_name: str | None = None
    response_text: str
    response_description: str | None = None
    response_timestamp: datetime
    image_url: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    no_of_visit: int
    completed_date: datetime | None = None
    device_id: str | None = None
    branch_id: int | None = None
    is_current_agent: bool
    visit_count: int


class PreviousResponsesResponse(BaseModel):
    """Response for GET /api/responses/previous/{customer_id}."""

    success: bool = True
    previous_responses: list[PreviousResponseItem]
    total: int
