# This project was developed with assistance from AI tools.
"""Shared visit-cycle scoping for service queries.

Centralizes the "current open cycle" rule so that listings and response
saves agree on which loans an agent is working: for each (pt_no, agent)
pair only the assignment with the highest ``no_of_visit`` counts, and only
while it is still open.
"""

from db import Assignment, LoanAccount
from sqlalchemy import func, select
from sqlalchemy.orm import aliased


def current_cycle_assignments(
    agent_id: int,
    *,
    customer_id: str | None = None,
    customer_name: str | None = None,
    pt_no: str | None = None,
    lock: bool = False,
):
    """Build a select of (Assignment, LoanAccount) rows in the agent's current cycle.

    Args:
        agent_id: The acting agent.
        customer_id: Restrict to one customer's loans.
        customer_name: Restrict to loans held under this customer name.
        pt_no: Restrict to a single loan.
        lock: Add ``FOR UPDATE OF assignments`` so the cycle cannot advance
            underneath a writer holding the transaction.

    Returns:
        A SQLAlchemy select statement.
    """
    later = aliased(Assignment)
    max_visit = (
        select(func.max(later.no_of_visit))
        .where(
            later.pt_no == Assignment.pt_no,
            later.agent_id == Assignment.agent_id,
        )
        .scalar_subquery()
    )

    stmt = (
        select(Assignment, LoanAccount)
        .join(LoanAccount, LoanAccount.pt_no == Assignment.pt_no)
        .where(
            Assignment.agent_id == agent_id,
            Assignment.is_closed.is_(False),
            Assignment.no_of_visit == max_visit,
        )
    )
    if customer_id is not None:
        stmt = stmt.where(LoanAccount.customer_id == customer_id)
    if customer_name is not None:
        stmt = stmt.where(LoanAccount.customer_name == customer_name)
    if pt_no is not None:
        stmt = stmt.where(Assignment.pt_no == pt_no)
    if lock:
        stmt = stmt.with_for_update(of=Assignment)
    return stmt
