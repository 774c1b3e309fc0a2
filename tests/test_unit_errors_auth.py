"""Unit tests for the error envelope and caller identity."""

import pytest
from cadence.core.auth import MAX_USER_ID_LENGTH, _validate_user_id
from cadence.core.errors import (
    CadenceError,
    ConflictError,
    InternalError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
    error_body,
)


@pytest.mark.parametrize(
    "error_class,status_code",
    [(InvalidInputError, 400), (UnauthorizedError, 401), (NotFoundError, 404), (ConflictError, 409), (InternalError, 500)],
)
def test_status_codes(error_class, status_code):
    error = error_class()

    assert isinstance(error, CadenceError)
    assert error.status_code == status_code
    assert error.message == error_class.default_message


def test_custom_message():
    assert str(NotFoundError("Track 5 not found")) == "Track 5 not found"


def test_error_body():
    assert error_body("nope") == {"ok": False, "error": "nope"}


def test_user_id_is_stripped():
    assert _validate_user_id("  user-1 ") == "user-1"


@pytest.mark.parametrize("raw", [None, "", "   "])
def test_missing_user_id(raw):
    with pytest.raises(UnauthorizedError):
        _validate_user_id(raw)


def test_user_id_length_limit():
    assert _validate_user_id("u" * MAX_USER_ID_LENGTH) == "u" * MAX_USER_ID_LENGTH

    with pytest.raises(InvalidInputError):
        _validate_user_id("u" * (MAX_USER_ID_LENGTH + 1))
