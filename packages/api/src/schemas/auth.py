# This project was developed with assistance from AI tools.
"""Authentication schemas."""

from db.enums import EmployeeRole
from pydantic import BaseModel, ConfigDict


class UserContext(BaseModel):
    """Injected by auth middleware into every authenticated request."""

    model_config = ConfigDict(frozen=True)

    agent_id: int
    user_name: str
    role: EmployeeRole = EmployeeRole.AGENT
    full_name: str | None = None
    branch_id: int | None = None


class TokenPayload(BaseModel):
    """Decoded bearer token claims as issued by the login service."""

    userId: int  # noqa: N815 -- claim name fixed by the token issuer
    username: str = ""
    userType: str = ""  # noqa: N815
