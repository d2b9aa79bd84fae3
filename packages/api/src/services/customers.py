# This project was developed with assistance from AI tools.
"""Customer and loan listings for the acting agent.

Only loans in the agent's current open visit cycle are listed. Loan rows
carry the accrued interest and outstanding balance computed as of the loan's
``last_date``.
"""

import logging

from db import Assignment, LoanAccount
from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas.auth import UserContext
from .calculator import compute_interest, minimum_days_for_rate, outstanding_balance
from .scope import current_cycle_assignments

logger = logging.getLogger(__name__)


async def list_customers(session: AsyncSession, user: UserContext) -> list[dict]:
    """Return one entry per customer, most recently assigned first."""
    stmt = current_cycle_assignments(user.agent_id).order_by(
        Assignment.assigned_at.desc(), Assignment.pt_no
    )
    result = await session.execute(stmt)

    customers: dict[str, dict] = {}
    for assignment, loan in result.all():
        entry = customers.get(loan.customer_id)
        if entry is None:
            entry = customers[loan.customer_id] = {
                "customer_id": loan.customer_id,
                "customer_name": loan.customer_name,
                "address": loan.address,
                "city": loan.city,
                "contact_number1": loan.contact_number1,
                "contact_number2": loan.contact_number2,
                "assigned_at": assignment.assigned_at,
                "pt_numbers": [],
                "is_visited": True,
            }
        entry["pt_numbers"].append(loan.pt_no)
        entry["is_visited"] = entry["is_visited"] and assignment.is_visited

    for entry in customers.values():
        entry["pt_count"] = len(entry["pt_numbers"])

    logger.debug("Found %d customers for agent %s", len(customers), user.agent_id)
    return list(customers.values())


def loan_view(loan: LoanAccount, assignment: Assignment) -> dict:
    """Flatten a loan and its assignment, adding interest and balance."""
    floor_days = minimum_days_for_rate(loan.interest_rate)
    result = compute_interest(
        loan.loan_amount,
        loan.interest_rate,
        loan.loan_created_date,
        loan.last_date,
        floor_days,
    )
    balance = None
    if result.formatted_interval != "N/A":
        balance = outstanding_balance(loan.loan_amount, result.interest, loan.paid_amount)

    return {
        "pt_no": loan.pt_no,
        "customer_id": loan.customer_id,
        "customer_name": loan.customer_name,
        "address": loan.address,
        "contact_number1": loan.contact_number1,
        "contact_number2": loan.contact_number2,
        "nominee_name": loan.nominee_name,
        "nominee_contact_number": loan.nominee_contact_number,
        "ornament_name": loan.ornament_name,
        "gross_weight": loan.gross_weight,
        "net_weight": loan.net_weight,
        "loan_amount": loan.loan_amount,
        "interest_rate": loan.interest_rate,
        "paid_amount": loan.paid_amount,
        "tenure": loan.tenure,
        "loan_created_date": loan.loan_created_date,
        "last_date": loan.last_date,
        "first_letter_date": loan.first_letter_date,
        "second_letter_date": loan.second_letter_date,
        "final_letter_date": loan.final_letter_date,
        "assigned_at": assignment.assigned_at,
        "no_of_visit": assignment.no_of_visit,
        "is_visited": assignment.is_visited,
        "interest": result.interest,
        "interest_days": result.days,
        "interest_interval": result.formatted_interval,
        "minimum_interest_days": floor_days,
        "outstanding_balance": balance,
    }


async def list_customer_loans(
    session: AsyncSession,
    user: UserContext,
    customer_id: str,
) -> list[dict]:
    """Return a customer's loans in the agent's current cycle, newest loan first."""
    stmt = current_cycle_assignments(user.agent_id, customer_id=customer_id).order_by(
        LoanAccount.loan_created_date.desc(), LoanAccount.pt_no
    )
    result = await session.execute(stmt)
    return [loan_view(loan, assignment) for assignment, loan in result.all()]


async def list_loans_by_customer_name(
    session: AsyncSession,
    user: UserContext,
    customer_name: str,
) -> list[dict]:
    """Like ``list_customer_loans`` but keyed on the exact customer name.

    A name can span several customer ids; every matching loan is returned.
    """
    stmt = current_cycle_assignments(user.agent_id, customer_name=customer_name).order_by(
        LoanAccount.loan_created_date.desc(), LoanAccount.pt_no
    )
    result = await session.execute(stmt)
    loans = [loan_view(loan, assignment) for assignment, loan in result.all()]
    logger.debug("Found %d loans for customer name %r", len(loans), customer_name)
    return loans
