# This project was developed with assistance from AI tools.
"""Tests for the error taxonomy and driver error classification."""

import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError

from src.core.errors import (
    Conflict,
    ErrorKind,
    StorageUnavailable,
    Timeout,
    Unexpected,
    ValidationFailed,
    classify_db_error,
)


class _AsyncpgStyle(Exception):
    def __init__(self, sqlstate):
        super().__init__(sqlstate)
        self.sqlstate = sqlstate


class _Psycopg2Style(Exception):
    def __init__(self, pgcode):
        super().__init__(pgcode)
        self.pgcode = pgcode


@pytest.mark.parametrize(
    "state, expected",
    [
        ("40P01", Conflict),
        ("40001", Conflict),
        ("23505", Unexpected),
        ("23503", Unexpected),
        ("55P03", Timeout),
        ("57014", Timeout),
        ("08006", StorageUnavailable),
        ("08001", StorageUnavailable),
        ("22P02", Unexpected),
        (None, Unexpected),
    ],
)
def test_classify_by_sqlstate(state, expected):
    exc = OperationalError("UPDATE assignments", {}, _AsyncpgStyle(state))
    assert type(classify_db_error(exc)) is expected


def test_psycopg2_pgcode_is_read():
    exc = OperationalError("UPDATE", {}, _Psycopg2Style("40P01"))
    assert isinstance(classify_db_error(exc), Conflict)


def test_unique_violation_is_not_retryable():
    exc = IntegrityError("INSERT", {}, _Psycopg2Style("23505"))
    error = classify_db_error(exc)
    assert error.kind == ErrorKind.UNEXPECTED
    assert error.retryable is False
    assert error.message == "Response conflicts with a stored record for this loan"


def test_invalidated_connection_is_storage_unavailable():
    exc = DBAPIError("SELECT 1", {}, _AsyncpgStyle(None), connection_invalidated=True)
    assert isinstance(classify_db_error(exc), StorageUnavailable)


@pytest.mark.parametrize(
    "error, status_code, retryable",
    [
        (ValidationFailed(), 400, False),
        (Timeout(), 408, True),
        (Conflict(), 409, True),
        (StorageUnavailable(), 503, True),
        (Unexpected(), 500, False),
    ],
)
def test_status_and_retry_hint(error, status_code, retryable):
    assert error.status_code == status_code
    assert error.retryable is retryable


def test_validation_failed_carries_all_errors():
    error = ValidationFailed(errors=["Customer ID is required", "Image URL is required"])
    assert error.kind == ErrorKind.VALIDATION_FAILED
    assert error.message == "Validation failed"
    assert len(error.errors) == 2
    assert str(error) == "Validation failed"
