# This project was developed with assistance from AI tools.
"""
Bearer token authentication for field agents.

Validates HS256 tokens signed with the shared ``JWT_SECRET``, then confirms
the agent still exists and is active before building the request's
UserContext.

Set AUTH_DISABLED=true to bypass validation (tests / local dev).
"""

import logging
from typing import Annotated

import jwt
from db import Agent, get_db
from db.enums import EmployeeRole
from fastapi import Depends, HTTPException, Request, status
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.auth import is_active_agent
from ..core.config import settings
from ..schemas.auth import TokenPayload, UserContext

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Token validation
# ---------------------------------------------------------------------------


def _extract_token(request: Request) -> str | None:
    """Extract Bearer token from Authorization header."""
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth[7:]
    return None


def _decode_token(token: str) -> TokenPayload:
    """Validate signature/expiry and parse the claims."""
    payload = jwt.decode(
        token,
        settings.JWT_SECRET,
        algorithms=[settings.JWT_ALGORITHM],
    )
    return TokenPayload(**payload)


# ---------------------------------------------------------------------------
# FastAPI dependencies
# ---------------------------------------------------------------------------


def _disabled_user() -> UserContext:
    return UserContext(
        agent_id=settings.DEV_AGENT_ID,
        user_name="dev-agent",
        role=EmployeeRole.AGENT,
    )


async def get_current_user(
    request: Request,
    session: AsyncSession = Depends(get_db),
) -> UserContext:
    """FastAPI dependency: validate the bearer token and return UserContext.

    When AUTH_DISABLED=true, returns a dev agent without token validation.
    """
    if settings.AUTH_DISABLED:
        return _disabled_user()

    token = _extract_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = _decode_token(token)
    except jwt.ExpiredSignatureError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
    except (jwt.InvalidTokenError, ValidationError) as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc

    result = await session.execute(select(Agent).where(Agent.id == payload.userId))
    agent = result.scalar_one_or_none()
    if not is_active_agent(agent):
        logger.warning("Rejected token for inactive or unknown agent %s", payload.userId)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User not authorized",
        )

    return UserContext(
        agent_id=agent.id,
        user_name=agent.user_name,
        role=agent.role,
        full_name=agent.full_name,
        branch_id=agent.branch_id,
    )


# Type alias for use in route signatures
CurrentUser = Annotated[UserContext, Depends(get_current_user)]
