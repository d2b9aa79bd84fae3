# This project was developed with assistance from AI tools.
"""Route tests for /api/responses: wiring and error rendering."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, patch

from sqlalchemy.exc import OperationalError

from src.core.errors import Conflict, NotFound, StorageUnavailable
from src.schemas.responses import SaveResult

BODY = {
    "customer_id": "C-500",
    "response_type": "Customer not at home",
    "image_url": "https://cdn.example.com/visits/new.jpg",
    "latitude": 9.9252,
    "longitude": 78.1198,
}


def _saved(**overrides) -> SaveResult:
    fields = {
        "message": "Recovery response saved successfully for 2 loan account(s)",
        "customer_id": "C-500",
        "affected_loan_ids": ["PT-1001", "PT-1002"],
        "pt_count": 2,
        "updated_count": 0,
        "inserted_count": 2,
        "operation": "insert",
        "timestamp": datetime(2026, 3, 2, 11, 30, tzinfo=UTC),
    }
    fields.update(overrides)
    return SaveResult(**fields)


def test_save_returns_result(client, agent_user):
    mock_save = AsyncMock(return_value=_saved())
    with patch("src.routes.responses.save_response", mock_save):
        resp = client.post("/api/responses", json=BODY, headers={"User-Agent": "okhttp/4.12"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["affected_loan_ids"] == ["PT-1001", "PT-1002"]
    assert body["operation"] == "insert"

    args, kwargs = mock_save.call_args
    assert args[1] == agent_user
    assert args[2].customer_id == "C-500"
    assert kwargs["device_id"] == "okhttp/4.12"


def test_validation_errors_listed(client, mock_session):
    resp = client.post("/api/responses", json={"customer_id": "C-500", "response_type": "Others"})

    assert resp.status_code == 400
    body = resp.json()
    assert body["error_kind"] == "validation_failed"
    assert body["retryable"] is False
    assert body["errors"] == [
        "Image URL is required",
        "Description is required for 'Others' response",
    ]
    mock_session.execute.assert_not_called()


def test_individual_not_found(client):
    mock_save = AsyncMock(side_effect=NotFound("PT number not found or not assigned to this agent"))
    with patch("src.routes.responses.save_individual_response", mock_save):
        resp = client.post("/api/responses/individual", json={**BODY, "pt_no": "PT-9999"})

    assert resp.status_code == 404
    body = resp.json()
    assert body["error_kind"] == "not_found"
    assert body["detail"] == "PT number not found or not assigned to this agent"


def test_conflict_is_retryable(client):
    with patch("src.routes.responses.save_response", AsyncMock(side_effect=Conflict())):
        resp = client.post("/api/responses", json=BODY)

    assert resp.status_code == 409
    assert resp.json()["retryable"] is True
    assert resp.json()["detail"] == "Database conflict - please try again"


def test_storage_unavailable_hides_cause(client, monkeypatch):
    from src.core.config import settings

    monkeypatch.setattr(settings, "DEBUG", False)
    error = StorageUnavailable()
    error.__cause__ = OperationalError("SELECT 1", {}, OSError("connection refused"))

    with patch("src.routes.responses.save_response", AsyncMock(side_effect=error)):
        resp = client.post("/api/responses", json=BODY, headers={"X-Request-ID": "req-42"})

    assert resp.status_code == 503
    body = resp.json()
    assert body["error_kind"] == "storage_unavailable"
    assert body["request_id"] == "req-42"
    assert body["debug"] is None


def test_unhandled_error_is_unexpected(client):
    with patch("src.routes.responses.save_response", AsyncMock(side_effect=RuntimeError("boom"))):
        resp = client.post("/api/responses", json=BODY)

    assert resp.status_code == 500
    assert resp.json()["error_kind"] == "unexpected"


def test_visited_status_shape(client):
    entry = {
        "is_visited": True,
        "visited_date": datetime(2026, 3, 2, 11, 30, tzinfo=UTC),
        "response_text": "Requested time",
        "response_description": "Will pay Friday",
        "image_url": None,
        "agent_id": 7,
        "agent_name": "ravi.k",
        "agent_full_name": "Ravi Kumar",
        "no_of_visit": 2,
        "is_current_agent": True,
    }
    with patch(
        "src.routes.responses.get_visited_status", AsyncMock(return_value={"PT-1001": entry})
    ):
        resp = client.get("/api/responses/visited-status/C-500")

    assert resp.status_code == 200
    body = resp.json()
    assert body["total_visited_pts"] == 1
    assert body["visited_data"]["PT-1001"]["no_of_visit"] == 2


def test_previous_passes_pt_filter(client, agent_user):
    mock_prev = AsyncMock(return_value=[])
    with patch("src.routes.responses.get_previous_responses", mock_prev):
        resp = client.get("/api/responses/previous/C-500", params={"pt_no": "PT-1001"})

    assert resp.status_code == 200
    assert resp.json() == {"success": True, "previous_responses": [], "total": 0}
    assert mock_prev.call_args.args[1:] == (agent_user, "C-500", "PT-1001")



def test_read_side_deadlock_is_conflict(client):
    class _Deadlock(Exception):
        sqlstate = "40P01"

    error = OperationalError("SELECT", {}, _Deadlock())
    with patch("src.routes.responses.get_visited_status", AsyncMock(side_effect=error)):
        resp = client.get("/api/responses/visited-status/C-500")

    assert resp.status_code == 409
    assert resp.json()["error_kind"] == "conflict"
