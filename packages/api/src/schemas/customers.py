# This project was developed with assistance from AI tools.
"""Customer and loan listing schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel

from . import Pagination


class CustomerItem(BaseModel):
    """A customer with at least one loan in the agent's current cycle."""

    customer_id: str
    customer_name: str | None = None
    address: str | None = None
    city: str | None = None
    contact_number1: str | None = None
    contact_number2: str | None = None
    assigned_at: datetime | None = None
    pt_numbers: list[str]
    pt_count: int
    is_visited: bool


class CustomerListResponse(BaseModel):
    """Response for GET /api/customers."""

    data: list[CustomerItem]
    pagination: Pagination


class LoanItem(BaseModel):
    """A loan with its current assignment, accrued interest and balance."""

    pt_no: str
    customer_id: str
    customer_name: str | None = None
    address: str | None = None
    contact_number1: str | None = None
    contact_number2: str | None = None
    nominee_name: str | None = None
    nominee_contact_number: str | None = None
    ornament_name: str | None = None
    gross_weight: Decimal | None = None
    net_weight: Decimal | None = None
    loan_amount: Decimal
    interest_rate: Decimal
    paid_amount: Decimal | None = None
    tenure: int | None = None
    loan_created_date: date | None = None
    last_date: date | None = None
    first_letter_date: date | None = None
    second_letter_date: date | None = None
    final_letter_date: date | None = None
    assigned_at: datetime | None = None
    no_of_visit: int
    is_visited: bool
    interest: int
    interest_days: int
    interest_interval: str
    minimum_interest_days: int
    outstanding_balance: Decimal | None = None


class LoanListResponse(BaseModel):
    """Response for GET /api/customers/{customer_id}/loans."""

    customer_id: str
    data: list[LoanItem]
    pagination: Pagination


class CustomerNameLoansResponse(BaseModel):
    """Response for GET /api/customers/{customer_name}/loans-by-name."""

    customer_name: str
    data: list[LoanItem]
    pagination: Pagination
