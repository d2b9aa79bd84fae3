# This project was developed with assistance from AI tools.
"""Pure auth utility functions with no FastAPI or HTTP dependencies.

Kept separate from ``middleware/auth.py`` so scripts and services can apply
the same agent eligibility rule outside the request lifecycle.
"""

from db import Agent
from db.enums import EmployeeRole, EmployeeStatus


def is_active_agent(agent: Agent | None) -> bool:
    """True for an existing, active, non-deleted employee with the agent role."""
    return (
        agent is not None
        and agent.role == EmployeeRole.AGENT
        and agent.status == EmployeeStatus.ACTIVE
        and not agent.is_deleted
    )
