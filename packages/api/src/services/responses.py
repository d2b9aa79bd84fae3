# This project was developed with assistance from AI tools.
"""Visit response service.

Records the outcome of an agent's visit against every loan ("PT") of a
customer in the agent's current cycle, or against a single loan. Within a
cycle a loan has at most one response per agent: later submissions update
that row, keeping an earlier photo or note the new submission leaves out.
Once the cycle advances, the next submission starts a fresh row and the old
one stays as history.

Also serves the read side: visited status for the current cycle and the
full response history for a customer.
"""

import asyncio
import enum
import logging
from datetime import UTC, datetime

from db import Agent, Assignment, RecoveryResponse, ResponseCategory
from sqlalchemy import select, update
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.config import settings
from ..core.errors import (
    NotFound,
    RecoveryError,
    StorageUnavailable,
    Timeout,
    ValidationFailed,
    classify_db_error,
)
from ..schemas.auth import UserContext
from ..schemas.responses import ResponseSubmission, SaveResult
from .scope import current_cycle_assignments

logger = logging.getLogger(__name__)

DEFAULT_DEVICE_ID = "mobile-app"
_DEVICE_ID_MAX_LEN = 255


class SaveScope(str, enum.Enum):
    ALL_LOANS = "all_loans"
    ONE_LOAN = "one_loan"


def _blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


def validate_submission(submission: ResponseSubmission, scope: SaveScope) -> list[str]:
    """Return every rule the submission breaks (empty list when valid)."""
    errors: list[str] = []

    if _blank(submission.customer_id):
        errors.append("Customer ID is required")
    if scope == SaveScope.ONE_LOAN and _blank(submission.pt_no):
        errors.append("PT number is required")

    if _blank(submission.response_type):
        errors.append("Response type is required")
    elif submission.response_type not in {c.value for c in ResponseCategory}:
        errors.append(f"Unknown response type: {submission.response_type}")

    if scope == SaveScope.ALL_LOANS and _blank(submission.image_url):
        errors.append("Image URL is required")

    if submission.response_type == ResponseCategory.OTHERS.value and _blank(
        submission.response_description
    ):
        errors.append("Description is required for 'Others' response")

    return errors


def parse_coordinates(latitude, longitude) -> tuple[float | None, float | None]:
    """Return (lat, lon) as floats, or (None, None) if either is absent or unparseable."""
    if _blank(latitude) or _blank(longitude):
        return None, None
    try:
        return float(latitude), float(longitude)
    except (TypeError, ValueError):
        logger.warning("Ignoring unparseable coordinates lat=%r lon=%r", latitude, longitude)
        return None, None


def merge_existing(
    existing: RecoveryResponse,
    response_type: str,
    description: str,
    image_url: str | None,
) -> tuple[str, str | None]:
    """Apply the preservation rules for an update.

    A missing photo keeps the stored one. A blank description keeps the
    stored note unless the category is the free-text one.
    """
    final_image = image_url or existing.image_url

    final_description = description
    if (
        _blank(final_description)
        and not _blank(existing.response_description)
        and response_type != ResponseCategory.OTHERS.value
    ):
        final_description = existing.response_description

    return final_description, final_image


def _save_message(scope: SaveScope, updated: int, inserted: int, pt_numbers: list[str]) -> str:
    if scope == SaveScope.ONE_LOAN:
        return f"Response saved successfully for PT number: {pt_numbers[0]}"
    if updated and inserted:
        return (
            f"Recovery response updated for {updated} and saved for "
            f"{inserted} loan account(s)"
        )
    if updated:
        return f"Recovery response updated successfully for {updated} loan account(s)"
    return f"Recovery response saved successfully for {inserted} loan account(s)"


async def _upsert_responses(
    session: AsyncSession,
    user: UserContext,
    submission: ResponseSubmission,
    scope: SaveScope,
    device_id: str,
) -> tuple[list[Assignment], int, int]:
    """Resolve the current cycle and write one response per loan.

    Runs inside the caller's transaction and leaves committing to it.
    Returns (assignments, updated_count, inserted_count).
    """
    customer_id = submission.customer_id.strip()

    agent_result = await session.execute(select(Agent).where(Agent.id == user.agent_id))
    agent = agent_result.scalar_one_or_none()
    if agent is None:
        raise NotFound("Agent not found")

    stmt = current_cycle_assignments(
        user.agent_id,
        customer_id=customer_id,
        pt_no=submission.pt_no.strip() if scope == SaveScope.ONE_LOAN else None,
        lock=True,
    ).order_by(Assignment.pt_no)
    cycle_result = await session.execute(stmt)
    assignments = [assignment for assignment, _loan in cycle_result.all()]

    if not assignments:
        if scope == SaveScope.ONE_LOAN:
            raise NotFound("PT number not found or not assigned to this agent")
        raise NotFound("No active loan accounts found for this customer")

    pt_numbers = [a.pt_no for a in assignments]
    existing_result = await session.execute(
        select(RecoveryResponse)
        .where(
            RecoveryResponse.agent_id == user.agent_id,
            RecoveryResponse.customer_id == customer_id,
            RecoveryResponse.pt_no.in_(pt_numbers),
        )
        .with_for_update()
    )
    existing_by_cycle = {
        (row.pt_no, row.no_of_visit): row for row in existing_result.scalars().all()
    }

    response_type = submission.response_type
    description = submission.response_description or ""
    latitude, longitude = parse_coordinates(submission.latitude, submission.longitude)
    now = datetime.now(UTC)

    updated = 0
    new_rows: list[RecoveryResponse] = []
    for assignment in assignments:
        existing = existing_by_cycle.get((assignment.pt_no, assignment.no_of_visit))
        if existing is not None:
            final_description, final_image = merge_existing(
                existing, response_type, description, submission.image_url
            )
            existing.response_text = response_type
            existing.response_description = final_description
            existing.image_url = final_image
            existing.latitude = latitude
            existing.longitude = longitude
            existing.no_of_visit = assignment.no_of_visit
            existing.response_timestamp = now
            existing.completed_date = now
            existing.device_id = device_id
            updated += 1
        else:
            new_rows.append(
                RecoveryResponse(
                    pt_no=assignment.pt_no,
                    customer_id=customer_id,
                    agent_id=user.agent_id,
                    response_text=response_type,
                    response_description=description,
                    image_url=submission.image_url or None,
                    latitude=latitude,
                    longitude=longitude,
                    no_of_visit=assignment.no_of_visit,
                    response_timestamp=now,
                    completed_date=now,
                    device_id=device_id,
                    branch_id=agent.branch_id,
                )
            )

    session.add_all(new_rows)
    await session.flush()

    return assignments, updated, len(new_rows)


async def _rollback_quietly(session: AsyncSession) -> None:
    try:
        await session.rollback()
    except (DBAPIError, OSError):
        logger.exception("Rollback failed after aborted response save")


async def mark_visited(session: AsyncSession, assignment_ids: list[int]) -> int:
    """Flag assignments as visited. Failures are logged, never raised.

    Returns the number of rows updated (0 on failure).
    """
    if not assignment_ids:
        return 0
    try:
        result = await session.execute(
            update(Assignment)
            .where(Assignment.id.in_(assignment_ids))
            .values(is_visited=True)
        )
        await session.commit()
        logger.info("is_visited set for %d assignment(s)", result.rowcount)
        return result.rowcount
    except (DBAPIError, OSError):
        logger.warning("Failed to update is_visited status", exc_info=True)
        await _rollback_quietly(session)
        return 0


async def _save(
    session: AsyncSession,
    user: UserContext,
    submission: ResponseSubmission,
    scope: SaveScope,
    device_id: str | None,
) -> SaveResult:
    errors = validate_submission(submission, scope)
    if errors:
        raise ValidationFailed(errors=errors)

    device_id = (device_id or DEFAULT_DEVICE_ID)[:_DEVICE_ID_MAX_LEN]

    try:
        async with asyncio.timeout(settings.RESPONSE_SAVE_TIMEOUT_SECONDS):
            assignments, updated, inserted = await _upsert_responses(
                session, user, submission, scope, device_id
            )
            # Read before commit expires the instances
            pt_numbers = [a.pt_no for a in assignments]
            assignment_ids = [a.id for a in assignments]
            await session.commit()
    except RecoveryError:
        await _rollback_quietly(session)
        raise
    except TimeoutError as exc:
        logger.error(
            "Response save timed out for agent=%s customer=%s",
            user.agent_id,
            submission.customer_id,
        )
        await _rollback_quietly(session)
        raise Timeout() from exc
    except DBAPIError as exc:
        logger.exception(
            "Database error saving response for agent=%s customer=%s",
            user.agent_id,
            submission.customer_id,
        )
        await _rollback_quietly(session)
        raise classify_db_error(exc) from exc
    except OSError as exc:
        logger.exception("Database unreachable while saving response")
        await _rollback_quietly(session)
        raise StorageUnavailable() from exc
    except asyncio.CancelledError:
        await asyncio.shield(_rollback_quietly(session))
        raise

    await mark_visited(session, assignment_ids)

    logger.info(
        "Response saved: agent=%s customer=%s scope=%s updated=%d inserted=%d",
        user.agent_id,
        submission.customer_id,
        scope.value,
        updated,
        inserted,
    )

    return SaveResult(
        message=_save_message(scope, updated, inserted, pt_numbers),
        customer_id=submission.customer_id.strip(),
        affected_loan_ids=pt_numbers,
        pt_count=len(pt_numbers),
        updated_count=updated,
        inserted_count=inserted,
        operation="update" if updated else "insert",
        timestamp=datetime.now(UTC),
    )


async def save_response(
    session: AsyncSession,
    user: UserContext,
    submission: ResponseSubmission,
    *,
    device_id: str | None = None,
) -> SaveResult:
    """Record one response against every loan of the customer in the current cycle.

    Raises:
        ValidationFailed: Missing or inconsistent fields (nothing written).
        NotFound: Unknown agent or no open current-cycle loans.
        Timeout, Conflict, StorageUnavailable: Transient; retry the whole call.
    """
    return await _save(session, user, submission, SaveScope.ALL_LOANS, device_id)


async def save_individual_response(
    session: AsyncSession,
    user: UserContext,
    submission: ResponseSubmission,
    *,
    device_id: str | None = None,
) -> SaveResult:
    """Record a response for ``submission.pt_no`` only. A photo is optional here."""
    return await _save(session, user, submission, SaveScope.ONE_LOAN, device_id)


async def get_visited_status(
    session: AsyncSession,
    user: UserContext,
    customer_id: str,
) -> dict[str, dict]:
    """Return the agent's current-cycle response per visited PT of a customer."""
    stmt = current_cycle_assignments(user.agent_id, customer_id=customer_id)
    result = await session.execute(stmt)
    visited = [a for a, _loan in result.all() if a.is_visited]
    if not visited:
        return {}

    resp_result = await session.execute(
        select(RecoveryResponse, Agent)
        .join(Agent, Agent.id == RecoveryResponse.agent_id)
        .where(
            RecoveryResponse.agent_id == user.agent_id,
            RecoveryResponse.customer_id == customer_id,
            RecoveryResponse.pt_no.in_([a.pt_no for a in visited]),
        )
    )
    by_cycle = {(r.pt_no, r.no_of_visit): (r, agent) for r, agent in resp_result.all()}

    visited_data: dict[str, dict] = {}
    for assignment in visited:
        match = by_cycle.get((assignment.pt_no, assignment.no_of_visit))
        if match is None:
            continue
        response, agent = match
        visited_data[assignment.pt_no] = {
            "is_visited": True,
            "visited_date": response.response_timestamp,
            "response_text": response.response_text,
            "response_description": response.response_description,
            "image_url": response.image_url,
            "agent_id": response.agent_id,
            "agent_name": agent.user_name,
            "agent_full_name": agent.full_name,
            "no_of_visit": response.no_of_visit,
            "is_current_agent": True,
        }
    return visited_data


async def get_previous_responses(
    session: AsyncSession,
    user: UserContext,
    customer_id: str,
    pt_no: str | None = None,
) -> list[dict]:
    """Return every recorded response for a customer (optionally one PT), newest first."""
    stmt = (
        select(RecoveryResponse, Agent)
        .join(Agent, Agent.id == RecoveryResponse.agent_id)
        .where(RecoveryResponse.customer_id == customer_id)
    )
    if pt_no is not None:
        stmt = stmt.where(RecoveryResponse.pt_no == pt_no)
    stmt = stmt.order_by(RecoveryResponse.response_timestamp.desc(), RecoveryResponse.id.desc())

    result = await session.execute(stmt)
    rows = result.all()

    visit_counts: dict[tuple[str, int], int] = {}
    for response, _agent in rows:
        key = (response.pt_no, response.agent_id)
        visit_counts[key] = visit_counts.get(key, 0) + 1

    return [
        {
            "id": response.id,
            "pt_no": response.pt_no,
            "customer_id": response.customer_id,
            "agent_id": response.agent_id,
            "agent_name": agent.user_name,
            "agent_full_name": agent.full_name,
            "response_text": response.response_text,
            "response_description": response.response_description,
            "response_timestamp": response.response_timestamp,
            "image_url": response.image_url,
            "latitude": response.latitude,
            "longitude": response.longitude,
            "no_of_visit": response.no_of_visit,
            "completed_date": response.completed_date,
            "device_id": response.device_id,
            "branch_id": response.branch_id,
            "is_current_agent": response.agent_id == user.agent_id,
            "visit_count": visit_counts[(response.pt_no, response.agent_id)],
        }
        for response, agent in rows
    ]
