# This project was developed with assistance from AI tools.
"""Customer and loan listing endpoints for the acting agent."""

from db import get_db
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..middleware.auth import CurrentUser
from ..schemas import Pagination
from ..schemas.customers import (
    CustomerItem,
    CustomerListResponse,
    CustomerNameLoansResponse,
    LoanItem,
    LoanListResponse,
)
from ..services.customers import (
    list_customer_loans,
    list_customers,
    list_loans_by_customer_name,
)

router = APIRouter()


def _full_page(total: int) -> Pagination:
    return Pagination(total=total, offset=0, limit=total, has_more=False)


@router.get("/customers", response_model=CustomerListResponse)
async def get_customers(
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> CustomerListResponse:
    """Customers with loans in the agent's current open cycle."""
    items = [CustomerItem(**c) for c in await list_customers(session, user)]
    return CustomerListResponse(data=items, pagination=_full_page(len(items)))


@router.get("/customers/{customer_id}/loans", response_model=LoanListResponse)
async def get_customer_loans(
    customer_id: str,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> LoanListResponse:
    """A customer's loans with accrued interest and outstanding balance."""
    items = [LoanItem(**loan) for loan in await list_customer_loans(session, user, customer_id)]
    return LoanListResponse(
        customer_id=customer_id,
        data=items,
        pagination=_full_page(len(items)),
    )


@router.get("/customers/{customer_name}/loans-by-name", response_model=CustomerNameLoansResponse)
async def get_loans_by_customer_name(
    customer_name: str,
    user: CurrentUser,
    session: AsyncSession = Depends(get_db),
) -> CustomerNameLoansResponse:
    """Loans held under an exact customer name, for lookups without a customer id."""
    items = [
        LoanItem(**loan)
        for loan in await list_loans_by_customer_name(session, user, customer_name)
    ]
    return CustomerNameLoansResponse(
        customer_name=customer_name,
        data=items,
        pagination=_full_page(len(items)),
    )
